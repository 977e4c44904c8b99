"""Render pastes to HTML and inject the attribution footer."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
import logging
import re

from jinja2 import Template

from pastepub.exceptions import RenderError
from pastepub.models.config import PasteConfig
from pastepub.models.paste import PublishTarget, RenderedArtifact
from pastepub.services.highlighter import PygmentsHighlighter, SupportsHighlighting


logger = logging.getLogger(__name__)

# The highlighter must emit a locatable closing sequence; the footer goes right before it.
_CLOSING_TAGS_RE = re.compile(r"</body>\s*</html>", re.IGNORECASE)

FOOTER_TEMPLATE = Template(
    """
<p style="font-size: 8pt; font-family: monospace;">
Generated
{%- if author_link %} by <a href="{{ author_link }}">{{ author_name or author_link }}</a>
{%- elif author_name %} by {{ author_name }}
{%- endif %} with pastepub
at {{ timestamp }} {{ timezone_label }}.
(<a href="{{ raw_url }}">original</a>)
</p>
""".lstrip(),
    autoescape=True,
)


def _local_now() -> datetime:
    return datetime.now().astimezone()


def find_closing_tags(markup: str) -> int:
    """Return the offset of the last ``</body></html>`` sequence in ``markup``."""

    last = None
    for last in _CLOSING_TAGS_RE.finditer(markup):
        pass
    if last is None:
        raise RenderError("Highlighter output has no closing </body></html> sequence")
    return last.start()


def insert_footer(markup: str, footer: str) -> str:
    """Insert ``footer`` immediately before the document's closing tags."""

    offset = find_closing_tags(markup)
    return f"{markup[:offset]}{footer}{markup[offset:]}"


@dataclass(slots=True)
class ArtifactRenderer:
    """Produce the final published document for a paste."""

    config: PasteConfig
    highlighter: SupportsHighlighting = field(default_factory=PygmentsHighlighter)
    clock: Callable[[], datetime] = _local_now

    def render(
        self,
        text: str,
        mode: str | None,
        target: PublishTarget,
        *,
        filename: str | None = None,
    ) -> RenderedArtifact:
        """Highlight ``text`` and return it with the footer pointing at the raw source."""

        try:
            markup = self.highlighter.render(text, mode, filename=filename)
        except Exception as exc:
            raise RenderError(f"Highlighter failed for mode {mode!r}: {exc}") from exc
        if not isinstance(markup, str):
            raise RenderError(f"Highlighter returned {type(markup).__name__}, expected markup text")

        return self.decorate(markup, target)

    def decorate(self, markup: str, target: PublishTarget) -> RenderedArtifact:
        """Inject the footer into an already rendered document."""

        generated_at = self.clock()
        timezone_label = generated_at.tzname() or "UTC"
        footer = FOOTER_TEMPLATE.render(
            author_name=self.config.author_name,
            author_link=self.config.author_link,
            timestamp=generated_at.strftime("%Y-%m-%d %H:%M:%S"),
            timezone_label=timezone_label,
            raw_url=target.raw_url,
        )
        final = insert_footer(markup, footer)
        logger.debug("Rendered %s (%d bytes)", target.rendered_filename, len(final), extra={"event": "paste.rendered"})

        return RenderedArtifact(
            markup=final,
            generated_at=generated_at,
            timezone_label=timezone_label,
            author_name=self.config.author_name,
            author_link=self.config.author_link,
            raw_url=target.raw_url,
        )


__all__ = ["ArtifactRenderer", "FOOTER_TEMPLATE", "find_closing_tags", "insert_footer"]
