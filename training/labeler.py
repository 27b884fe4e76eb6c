"""
Interactive sentiment labeler.

Reads the delimited file written by the search step, shows each tweet to
the operator and writes `"<Label>",<text>` lines for the ones that get a
label. Tweets whose first ten characters were already seen in this run are
skipped without a prompt.
"""

import logging
import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Set, TextIO, Tuple

from utils.exceptions import MalformedRecordError, RecordReadError, UnrecognizedLabelError

log = logging.getLogger(__name__)

DEDUP_PREFIX_LENGTH = 10
PROMPT = "(p)Positive (f)Flat (n)Negative (d)Drop: "


class Label(Enum):
    POSITIVE = "Positive"
    FLAT = "Flat"
    NEGATIVE = "Negative"


DROP = "d"
CHOICES = {
    "p": Label.POSITIVE,
    "f": Label.FLAT,
    "n": Label.NEGATIVE,
}


@dataclass
class LabelStats:
    read: int = 0
    duplicates: int = 0
    prompted: int = 0
    labeled: int = 0
    dropped: int = 0


def dedup_key(text: str) -> str:
    return text[:DEDUP_PREFIX_LENGTH]


def split_record(line: str, line_number: int) -> Tuple[str, str, str]:
    """Split a source line into (id, placeholder, text). Tabs after the second one stay in the text."""
    fields = line.split("\t", 2)
    if len(fields) < 3:
        raise MalformedRecordError(line_number, line)
    return fields[0], fields[1], fields[2]


def format_labeled(label: Label, quoted_text: str) -> str:
    return f'"{label.value}",{quoted_text}'


class Labeler:
    """
    One labeling pass over `source`.

    The caller owns the streams; Labeler only reads and writes them.
    """

    def __init__(self, source: TextIO, destination: TextIO,
                 operator_in: Optional[TextIO] = None, operator_out: Optional[TextIO] = None):
        self.source = source
        self.destination = destination
        self.operator_in = operator_in or sys.stdin
        self.operator_out = operator_out or sys.stdout
        self.seen: Set[str] = set()
        self.stats = LabelStats()

    def _read_source_line(self, line_number: int) -> str:
        try:
            return self.source.readline()
        except UnicodeDecodeError as e:
            raise RecordReadError("source file", line_number, e) from e

    def _ask(self, quoted_text: str, line_number: int) -> Optional[str]:
        """Prompt for one record. Returns None on a clean end of operator input."""
        self.operator_out.write(f"{PROMPT}{quoted_text}\n")
        self.operator_out.flush()
        try:
            answer = self.operator_in.readline()
        except UnicodeDecodeError as e:
            raise RecordReadError("operator input", line_number, e) from e
        if answer == "":
            return None
        return answer.rstrip("\r\n")

    def run(self) -> LabelStats:
        """
        Label every unseen record of the source.

        Raises:
            MalformedRecordError: a source line has fewer than three fields
            RecordReadError: the source or operator input is not valid text
            UnrecognizedLabelError: the operator answered something other than p/f/n/d
        """
        line_number = 0
        while True:
            line_number += 1
            raw_line = self._read_source_line(line_number)
            if raw_line == "":
                break
            line = raw_line.rstrip("\r\n")
            _, _, text = split_record(line, line_number)
            self.stats.read += 1

            key = dedup_key(text)
            if key in self.seen:
                self.stats.duplicates += 1
                log.debug(f"Line {line_number}: duplicate prefix {key!r}, skipped")
                continue
            self.seen.add(key)

            quoted_text = '"' + text.replace('"', '') + '"'
            self.stats.prompted += 1
            answer = self._ask(quoted_text, line_number)
            if answer is None:
                log.info("Operator input closed, stopping")
                break

            if answer == DROP:
                self.stats.dropped += 1
                continue
            label = CHOICES.get(answer)
            if label is None:
                raise UnrecognizedLabelError(answer, line_number)

            # Whole line per write, flushed, so an abort never leaves half a record.
            self.destination.write(format_labeled(label, quoted_text) + "\n")
            self.destination.flush()
            self.stats.labeled += 1

        return self.stats


def label_file(source_path: str, output_path: str,
               operator_in: Optional[TextIO] = None, operator_out: Optional[TextIO] = None) -> LabelStats:
    """
    Run the labeler from `source_path` into `output_path`.

    Both files are closed on every exit path, including when the operator
    interrupts with an unrecognized answer.
    """
    output_dir = os.path.dirname(output_path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    with open(source_path, "r", encoding="utf-8") as source, \
            open(output_path, "w", encoding="utf-8", newline="") as destination:
        labeler = Labeler(source, destination, operator_in, operator_out)
        try:
            stats = labeler.run()
        finally:
            s = labeler.stats
            log.info(
                f"Labeling pass: read={s.read} duplicates={s.duplicates} prompted={s.prompted} "
                f"labeled={s.labeled} dropped={s.dropped}"
            )
    return stats
