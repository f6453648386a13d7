import logging

import pytest

from speller.confusion import ConfusionModel, parse_confusion_line
from speller.errors import MalformedRecord


def test_counts_are_smoothed():
    model = ConfusionModel({("c", "ct"): 36, ("e", "a"): 4, ("i", "a"): 5})
    assert model.confusion_count("c", "ct") == 37
    assert model.confusion_count("q", "z") == 1
    assert model.sequence_total("a") == 10
    assert model.sequence_total("zz") == 1


def test_error_probability():
    model = ConfusionModel({("e", "a"): 4, ("i", "a"): 5})
    assert model.error_probability("e", "a") == pytest.approx(5 / 10)
    assert model.error_probability("o", "a") == pytest.approx(1 / 10)
    assert model.error_probability("o", "unseen") == 1.0


def test_totals_are_keyed_by_corrected_side():
    model = ConfusionModel({("x", "ab"): 3, ("ab", "y"): 100})
    assert model.sequence_total("ab") == 4


def test_parse_keeps_space_placeholders():
    assert parse_confusion_line("c|ct 36") == ("c", "ct", 36)
    assert parse_confusion_line(" e|  3") == (" e", " ", 3)
    assert parse_confusion_line(" | a 2") == (" ", " a", 2)


@pytest.mark.parametrize("line", ["c|ct", "cct 3", "c|ct x", "c|ct -2"])
def test_parse_rejects_malformed(line):
    with pytest.raises(MalformedRecord):
        parse_confusion_line(line)


def test_from_file_skips_malformed(tmp_path, caplog):
    path = tmp_path / "confusion_matrix.txt"
    path.write_text("c|ct 36\nbroken\n e|  3\nc|cx many\n")

    with caplog.at_level(logging.WARNING):
        model = ConfusionModel.from_file(path)

    assert len(model) == 2
    assert model.confusion_count("c", "ct") == 37
    assert model.confusion_count(" e", " ") == 4
    assert model.sequence_total(" ") == 4
    assert "broken" in caplog.text
