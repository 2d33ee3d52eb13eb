import os
import sys

import pytest

CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from config import parse_line_separator


@pytest.mark.parametrize(
    "raw, expected",
    [("\n", "\n"), ("\\n", "\n"), ("\\r\\n", "\r\n"), ("\r\n", "\r\n"), ("\\r", "\r")],
)
def test_line_separator_accepts_escaped_and_literal_values(raw, expected):
    assert parse_line_separator(raw) == expected


def test_non_ascii_line_separator_is_rejected():
    with pytest.raises(ValueError, match="must be ASCII"):
        parse_line_separator("\u2028")


@pytest.mark.parametrize("raw", ["", ";", "\\n\\n", "\\x"])
def test_other_line_separators_are_rejected(raw):
    with pytest.raises(ValueError, match="IMPL_LINE_SEPARATOR"):
        parse_line_separator(raw)
