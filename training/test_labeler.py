import io

import pytest

from training.labeler import Labeler, dedup_key, label_file, split_record
from utils.exceptions import MalformedRecordError, RecordReadError, UnrecognizedLabelError


def run_labeler(source_text, answers):
    source = io.StringIO(source_text)
    destination = io.StringIO()
    operator_in = io.StringIO("".join(f"{a}\n" for a in answers))
    operator_out = io.StringIO()
    labeler = Labeler(source, destination, operator_in, operator_out)
    return labeler, destination, operator_out


@pytest.mark.timeout(10)
def test_positive_label_written():
    labeler, destination, operator_out = run_labeler("id1\t\tGreat product!\n", ["p"])
    stats = labeler.run()

    assert destination.getvalue() == '"Positive","Great product!"\n'
    assert operator_out.getvalue() == '(p)Positive (f)Flat (n)Negative (d)Drop: "Great product!"\n'
    assert stats.labeled == 1


@pytest.mark.timeout(10)
def test_flat_and_negative_labels():
    labeler, destination, _ = run_labeler("a\t\tfirst tweet\nb\t\tsecond tweet\n", ["f", "n"])
    labeler.run()
    assert destination.getvalue().splitlines() == [
        '"Flat","first tweet"',
        '"Negative","second tweet"',
    ]


@pytest.mark.timeout(10)
def test_drop_writes_nothing():
    labeler, destination, _ = run_labeler("id1\t\tGreat product!\n", ["d"])
    stats = labeler.run()
    assert destination.getvalue() == ""
    assert stats.dropped == 1


@pytest.mark.timeout(10)
def test_unrecognized_label_stops_the_run():
    labeler, destination, operator_out = run_labeler(
        "id1\t\tGreat product!\nid2\t\tsomething else\n", ["x", "p"]
    )
    with pytest.raises(UnrecognizedLabelError) as excinfo:
        labeler.run()

    assert excinfo.value.response == "x"
    assert destination.getvalue() == ""
    # Second record never prompted
    assert operator_out.getvalue().count("(p)Positive") == 1


@pytest.mark.timeout(10)
def test_shared_prefix_prompts_once():
    labeler, destination, operator_out = run_labeler(
        "1\t\tabcdefghijKLM\n2\t\tabcdefghijXYZ\n", ["p", "n"]
    )
    stats = labeler.run()

    assert operator_out.getvalue().count("(p)Positive") == 1
    assert destination.getvalue() == '"Positive","abcdefghijKLM"\n'
    assert stats.duplicates == 1


@pytest.mark.timeout(10)
def test_dropped_record_still_marks_prefix_seen():
    labeler, destination, operator_out = run_labeler(
        "1\t\tabcdefghijKLM\n2\t\tabcdefghijXYZ\n", ["d", "p"]
    )
    labeler.run()
    assert operator_out.getvalue().count("(p)Positive") == 1
    assert destination.getvalue() == ""


@pytest.mark.timeout(10)
def test_short_text_is_its_own_key():
    assert dedup_key("hi") == "hi"
    assert dedup_key("abcdefghijKLM") == "abcdefghij"
    labeler, destination, _ = run_labeler("1\t\thi\n2\t\thi there\n", ["p", "f"])
    labeler.run()
    assert destination.getvalue().splitlines() == ['"Positive","hi"', '"Flat","hi there"']


@pytest.mark.timeout(10)
def test_empty_text_survives_once():
    labeler, destination, operator_out = run_labeler("1\t\t\n2\t\t\n", ["f", "p"])
    labeler.run()
    assert destination.getvalue() == '"Flat",""\n'
    assert operator_out.getvalue().count("(p)Positive") == 1


@pytest.mark.timeout(10)
def test_quotes_are_stripped_from_search_output_format():
    source = '"123",\t"",\t"he said "wow" today"\n'
    labeler, destination, _ = run_labeler(source, ["p"])
    labeler.run()
    assert destination.getvalue() == '"Positive","he said wow today"\n'


@pytest.mark.timeout(10)
def test_malformed_line_raises():
    labeler, destination, _ = run_labeler("only\tone tab\n", ["p"])
    with pytest.raises(MalformedRecordError) as excinfo:
        labeler.run()
    assert excinfo.value.line_number == 1
    assert destination.getvalue() == ""


@pytest.mark.timeout(10)
def test_split_record_keeps_extra_tabs_in_text():
    assert split_record("a\tb\tc\td", 1) == ("a", "b", "c\td")


@pytest.mark.timeout(10)
def test_end_of_operator_input_stops_cleanly():
    labeler, destination, _ = run_labeler("1\t\tfirst one\n2\t\tsecond one\n", ["p"])
    stats = labeler.run()
    assert destination.getvalue() == '"Positive","first one"\n'
    assert stats.prompted == 2
    assert stats.labeled == 1


@pytest.mark.timeout(10)
def test_label_file_empty_source(tmp_path):
    source = tmp_path / "test.tsv"
    source.write_text("", encoding="utf-8")
    output = tmp_path / "out" / "labeled.csv"

    stats = label_file(str(source), str(output), io.StringIO(""), io.StringIO())

    assert output.read_text(encoding="utf-8") == ""
    assert stats.read == 0


@pytest.mark.timeout(10)
def test_label_file_keeps_lines_written_before_interrupt(tmp_path):
    source = tmp_path / "test.tsv"
    source.write_text("1\t\tkeep me please\n2\t\tthen stop here\n3\t\tnever seen\n", encoding="utf-8")
    output = tmp_path / "labeled.csv"

    with pytest.raises(UnrecognizedLabelError):
        label_file(str(source), str(output), io.StringIO("n\nq\np\n"), io.StringIO())

    assert output.read_text(encoding="utf-8") == '"Negative","keep me please"\n'


@pytest.mark.timeout(10)
def test_label_file_missing_source(tmp_path):
    with pytest.raises(OSError):
        label_file(str(tmp_path / "missing.tsv"), str(tmp_path / "labeled.csv"), io.StringIO(), io.StringIO())


@pytest.mark.timeout(10)
def test_undecodable_source_raises_read_error(tmp_path):
    source = tmp_path / "test.tsv"
    source.write_bytes(b"id1\t\t\xff\xfe bad bytes\n")
    output = tmp_path / "labeled.csv"

    with pytest.raises(RecordReadError) as excinfo:
        label_file(str(source), str(output), io.StringIO("p\n"), io.StringIO())

    assert excinfo.value.line_number == 1
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)
    assert output.read_text(encoding="utf-8") == ""


@pytest.mark.timeout(10)
def test_undecodable_operator_input_raises_read_error():
    source = io.StringIO("id1\t\tGreat product!\n")
    destination = io.StringIO()
    operator_in = io.TextIOWrapper(io.BytesIO(b"\xff\n"), encoding="utf-8")
    labeler = Labeler(source, destination, operator_in, io.StringIO())

    with pytest.raises(RecordReadError) as excinfo:
        labeler.run()
    assert excinfo.value.what == "operator input"
    assert destination.getvalue() == ""
