# data_collection/delimited.py

import logging
from typing import TextIO

from data_collection.models import SearchResponse, Tweet

log = logging.getLogger(__name__)

CSV_SEPARATOR = ","
TSV_SEPARATOR = ",\t"

SEPARATORS = {
    "csv": CSV_SEPARATOR,
    "tsv": TSV_SEPARATOR,
}


def add_quote(value: str) -> str:
    # No escaping: quotes or separators inside the value are written as-is.
    return f'"{value}"'


def format_record(tweet: Tweet, sep: str) -> str:
    """
    Format one tweet as a line of the search output file.

    Fields are the tweet id, an empty label placeholder and the text with
    newlines flattened to spaces.
    """
    fields = [
        add_quote(tweet.id_str),
        add_quote(""),
        add_quote(tweet.text.replace("\n", " ")),
    ]
    return sep.join(fields)


def write_records(response: SearchResponse, stream: TextIO, sep: str) -> int:
    """Write every status of `response` to `stream`. Returns the number of lines written."""
    written = 0
    for tweet in response.statuses:
        stream.write(format_record(tweet, sep) + "\n")
        written += 1
    return written


def write_file(response: SearchResponse, path: str, sep: str) -> int:
    with open(path, "w", encoding="utf-8", newline="") as f:
        written = write_records(response, f, sep)
    log.info(f"Wrote {written} records to {path}")
    return written


def write_csv(response: SearchResponse, path: str) -> int:
    return write_file(response, path, CSV_SEPARATOR)


def write_tsv(response: SearchResponse, path: str) -> int:
    return write_file(response, path, TSV_SEPARATOR)
