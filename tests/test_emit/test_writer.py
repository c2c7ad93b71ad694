"""Tests for SourceWriter."""

import pytest

from lookupgen.emit import SourceWriter


class TestSourceWriter:
    """Tests for SourceWriter."""

    def test_indentation(self):
        """Test nested indentation levels."""
        writer = SourceWriter()
        writer.write_line("def f(key):")
        with writer.indented():
            writer.write_line("if key:")
            with writer.indented():
                writer.write_line("return 1")
            writer.write_line("return 0")

        assert writer.render() == (
            "def f(key):\n"
            "    if key:\n"
            "        return 1\n"
            "    return 0\n"
        )

    def test_custom_indent(self):
        """Test a custom indent unit."""
        writer = SourceWriter(indent="\t")
        writer.write_line("a:")
        with writer.indented():
            writer.write_line("b")
        assert writer.render() == "a:\n\tb\n"

    def test_leading_blank_lines_dropped(self):
        """Test blank lines before any content are ignored."""
        writer = SourceWriter()
        writer.write_line()
        writer.blank_lines(2)
        writer.write_line("x = 1")
        assert writer.render() == "x = 1\n"

    def test_blank_lines_collapse(self):
        """Test repeated blank requests collapse to the largest."""
        writer = SourceWriter()
        writer.write_line("a")
        writer.write_line()
        writer.write_line()
        writer.write_line("b")
        writer.blank_lines(2)
        writer.write_line()
        writer.write_line("c")

        assert writer.render() == "a\n\nb\n\n\nc\n"

    def test_trailing_blank_dropped(self):
        """Test pending blank lines at the end are not emitted."""
        writer = SourceWriter()
        writer.write_line("a")
        writer.blank_lines(2)
        assert writer.render() == "a\n"

    def test_dedent_underflow(self):
        """Test dedenting past zero is an error."""
        with pytest.raises(ValueError, match="underflow"):
            SourceWriter().dedent()

    def test_level(self):
        """Test level follows the indentation depth."""
        writer = SourceWriter()
        assert writer.level == 0
        with writer.indented():
            with writer.indented():
                assert writer.level == 2
            assert writer.level == 1
        assert writer.level == 0
