"""Syntax highlighters producing self-contained HTML documents."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Protocol

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, get_lexer_for_filename, guess_lexer
from pygments.lexers.special import TextLexer
from pygments.util import ClassNotFound


logger = logging.getLogger(__name__)


class SupportsHighlighting(Protocol):
    """Collaborator turning source text into a complete markup document."""

    def render(self, text: str, mode: str | None, *, filename: str | None = None) -> str:
        """Return an HTML document for ``text`` highlighted as ``mode``."""


@dataclass(slots=True)
class PygmentsHighlighter:
    """Render pastes with Pygments using a full standalone HTML document."""

    style: str = "default"
    line_numbers: bool = False

    def render(self, text: str, mode: str | None, *, filename: str | None = None) -> str:
        lexer = self._resolve_lexer(text, mode, filename)
        formatter = HtmlFormatter(
            full=True,
            style=self.style,
            linenos="table" if self.line_numbers else False,
            title=filename or "",
            encoding=None,
        )
        return highlight(text, lexer, formatter)

    @staticmethod
    def _resolve_lexer(text: str, mode: str | None, filename: str | None) -> Lexer:
        """Pick a lexer from the explicit mode, then the filename, then the content."""

        if mode:
            # Raises ClassNotFound for unknown modes; the renderer reports it.
            return get_lexer_by_name(mode.strip().lower())

        if filename:
            try:
                return get_lexer_for_filename(filename, text)
            except ClassNotFound:
                logger.debug("No lexer registered for %s", filename)

        try:
            return guess_lexer(text)
        except ClassNotFound:
            return TextLexer()


__all__ = ["PygmentsHighlighter", "SupportsHighlighting"]
