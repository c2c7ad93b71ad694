"""Indentation-aware line writer for generated source."""

from contextlib import contextmanager
from typing import Iterator, List


class SourceWriter:
    """Incremental source printer.

    Tracks the indentation level and collapses runs of blank lines, so
    callers only decide what to write, not how to space it.

    Example:
        writer = SourceWriter()
        writer.write_line("def f(key):")
        with writer.indented():
            writer.write_line("return key")
        writer.render()   # "def f(key):\\n    return key\\n"
    """

    def __init__(self, indent: str = "    "):
        self._indent = 0
        self._indent_unit = indent
        self._lines: List[str] = []
        self._pending_blank = 0
        self._saw_content = False

    def write_line(self, text: str = "") -> None:
        """Append text at the current indentation.

        An empty text requests a blank line, which is only materialised
        once more content follows.
        """
        if not text:
            if self._saw_content:
                self._pending_blank = max(self._pending_blank, 1)
            return

        for _ in range(self._pending_blank):
            self._lines.append("")
        self._pending_blank = 0

        self._lines.append(f"{self._indent_unit * self._indent}{text}")
        self._saw_content = True

    def blank_lines(self, count: int) -> None:
        """Request count blank lines before the next content line."""
        if self._saw_content:
            self._pending_blank = max(self._pending_blank, count)

    @contextmanager
    def indented(self) -> Iterator[None]:
        """Increase indentation within the ``with`` body."""
        self._indent += 1
        try:
            yield
        finally:
            self.dedent()

    @property
    def level(self) -> int:
        """Current indentation depth."""
        return self._indent

    def dedent(self) -> None:
        if self._indent == 0:
            raise ValueError("indentation underflow")
        self._indent -= 1

    def render(self) -> str:
        """Return the accumulated source."""
        return "\n".join(self._lines).rstrip() + "\n"
