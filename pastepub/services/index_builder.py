"""Build and republish the landing page that lists published pastes."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Iterable
from urllib.parse import quote

from jinja2 import Environment, FileSystemLoader, select_autoescape

from pastepub.exceptions import ListError, TransportError
from pastepub.models.config import PasteConfig
from pastepub.models.paste import RENDERED_SUFFIX, IndexDocument, IndexEntry, PasteName, PublishTarget
from pastepub.models.publisher import PublicationResult
from pastepub.services.publisher import PastePublisher
from pastepub.services.renderer import ArtifactRenderer
from pastepub.services.transport import SupportsTransport


logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parents[1] / "templates"

INDEX_TITLE = "Pastes"
INDEX_PREAMBLE = (
    "These are the pastes published to this site, listed in the order the server "
    "reports them. Each paste links to its highlighted rendering; the raw source "
    "lives at the same address without the .html suffix."
)


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


@dataclass(slots=True)
class IndexBuilder:
    """List the remote directory, filter it, and publish an index document."""

    config: PasteConfig
    transport: SupportsTransport
    renderer: ArtifactRenderer
    publisher: PastePublisher
    remote_dir: str

    def select(self, listing: Iterable[str]) -> list[str]:
        """Return the rendered artifacts eligible for the index, in listing order."""

        marker = self.config.privacy_marker
        own_name = f"{self.config.index_name}{RENDERED_SUFFIX}"
        selected: list[str] = []
        for raw in listing:
            filename = raw.strip()
            if not filename or not filename.endswith(RENDERED_SUFFIX):
                continue
            if marker and marker in filename:
                continue
            if filename == own_name:
                continue
            selected.append(filename)
        return selected

    def build(self, listing: Iterable[str]) -> IndexDocument:
        """Render the listing document for the eligible entries of ``listing``."""

        entries = tuple(
            IndexEntry(filename=name, url=f"{self.config.http_destination}/{quote(name, safe='')}")
            for name in self.select(listing)
        )
        template = _environment().get_template("index.html")
        markup = template.render(title=INDEX_TITLE, preamble=INDEX_PREAMBLE, entries=entries)
        return IndexDocument(entries=entries, preamble=INDEX_PREAMBLE, markup=markup)

    def fetch_listing(self) -> list[str]:
        try:
            return self.transport.list_directory(self.remote_dir)
        except TransportError as exc:
            logger.error("Listing %s failed: %s", self.remote_dir, exc, extra={"event": "index.list_failed"})
            raise ListError(f"Could not list {self.remote_dir}: {exc}") from exc

    def publish(self) -> PublicationResult:
        """Regenerate the index from the remote listing and overwrite the previous one."""

        listing = self.fetch_listing()
        document = self.build(listing)
        logger.info(
            "Index lists %d of %d remote files", len(document.entries), len(listing), extra={"event": "index.built"}
        )

        target = PublishTarget(
            name=PasteName(self.config.index_name),
            http_destination=self.config.http_destination,
            remote_dir=self.remote_dir,
        )
        artifact = self.renderer.decorate(document.markup, target)
        return self.publisher.publish(artifact, document.markup.encode("utf-8"), target)


__all__ = ["INDEX_PREAMBLE", "IndexBuilder"]
