"""
Tests pour la lecture/écriture des valeurs de lignes par motif.
"""

import pytest

from caption_translator.captions import LineSet, ParsedLine, read_value, write_value
from caption_translator.exceptions import DuplicatePatternError, PatternNotFoundError


@pytest.fixture
def work_lines():
    return [
        "T18-P8629-A1031-L999:Debitor",
        "T18-F1-P8629-A1031-L999:Nr.",
        "T18-F2-P8629-A1031-L999:",
        "T18-F20-P8629-A1031-L999:Gesperrt",
    ]


class TestParsedLine:
    """Tests pour l'analyse d'une ligne."""

    def test_parse_value_offset(self):
        parsed = ParsedLine.parse("T18-A1031-L999:Kunde")
        assert parsed.key == "T18-A1031-L999"
        assert parsed.value_offset == len("T18-A1031-L999:")

    def test_parse_without_separator(self):
        parsed = ParsedLine.parse("T18-A1031-L999")
        assert parsed.value_offset is None

    def test_key_prefixes(self):
        parsed = ParsedLine.parse("T18-F2-A1031:x")
        assert list(parsed.key_prefixes()) == ["T18", "T18-F2", "T18-F2-A1031"]


class TestReadValue:
    """Tests pour read_value."""

    def test_read_existing_value(self, work_lines):
        assert read_value(work_lines, "T18-F1-P8629") == "Nr."

    def test_read_empty_value(self, work_lines):
        assert read_value(work_lines, "T18-F2-P8629") == ""

    def test_read_missing_pattern_returns_empty(self, work_lines):
        """Une valeur absente est un état normal, pas une erreur."""
        assert read_value(work_lines, "T27-P8629") == ""

    def test_pattern_matches_whole_key_parts(self, work_lines):
        """Le motif T18-F2 ne correspond pas à la ligne T18-F20."""
        lines = ["T18-F20-P8629-A1031-L999:Gesperrt"]
        assert read_value(lines, "T18-F2") == ""

    def test_value_containing_separator(self):
        lines = ["T36-F5-A1031-L999:Lief. an: Name"]
        assert read_value(lines, "T36-F5") == "Lief. an: Name"


class TestWriteValue:
    """Tests pour write_value."""

    def test_write_only_touches_matching_line(self, work_lines):
        result = write_value(work_lines, "T18-F2-P8629", "Name")

        assert result[2] == "T18-F2-P8629-A1031-L999:Name"
        assert result[:2] == work_lines[:2]
        assert result[3] == work_lines[3]

    def test_write_does_not_modify_input(self, work_lines):
        original = list(work_lines)
        write_value(work_lines, "T18-F2-P8629", "Name")
        assert work_lines == original

    def test_write_replaces_existing_value(self, work_lines):
        result = write_value(work_lines, "T18-P8629", "Kunde")
        assert result[0] == "T18-P8629-A1031-L999:Kunde"

    def test_write_line_without_separator(self):
        line_set = LineSet(["T18-F2-A1031-L999"])
        line_set.write_value("T18-F2", "Name")

        assert line_set.lines == ["T18-F2-A1031-L999:Name"]
        assert line_set.read_value("T18-F2") == "Name"

    def test_write_missing_pattern_raises(self, work_lines):
        with pytest.raises(PatternNotFoundError) as exc_info:
            write_value(work_lines, "T27-P8629", "Artikel")

        assert exc_info.value.pattern == "T27-P8629"

    @pytest.mark.parametrize("value", ["Kunde", "", "Lief. an: Name", "Ä ö ü ß"])
    def test_write_then_read(self, work_lines, value):
        line_set = LineSet(work_lines)
        line_set.write_value("T18-F1-P8629", value)
        assert line_set.read_value("T18-F1-P8629") == value


class TestDuplicatePatterns:
    """Tests pour les motifs ambigus."""

    @pytest.fixture
    def duplicated(self):
        return [
            "T18-F2-P8629-A1031-L999:Erste",
            "T18-F2-P8629-A1031-L998:Zweite",
        ]

    def test_first_match_by_default(self, duplicated):
        line_set = LineSet(duplicated)

        assert line_set.read_value("T18-F2-P8629") == "Erste"
        line_set.write_value("T18-F2-P8629", "Neu")
        assert line_set.lines == ["T18-F2-P8629-A1031-L999:Neu", duplicated[1]]

    def test_strict_mode_raises(self, duplicated):
        line_set = LineSet(duplicated, strict=True)

        with pytest.raises(DuplicatePatternError) as exc_info:
            line_set.read_value("T18-F2-P8629")

        assert exc_info.value.count == 2

    def test_strict_mode_unique_pattern(self, duplicated):
        line_set = LineSet(duplicated + ["T18-F3-P8629-A1031-L999:Dritte"], strict=True)
        assert line_set.read_value("T18-F3-P8629") == "Dritte"
