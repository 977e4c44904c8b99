"""Orchestration layer that chains naming, rendering, and publishing."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
import logging

from pastepub.models.config import PasteConfig
from pastepub.models.paste import PublishTarget
from pastepub.models.publisher import PublicationResult
from pastepub.services.highlighter import PygmentsHighlighter, SupportsHighlighting
from pastepub.services.index_builder import IndexBuilder
from pastepub.services.naming import apply_style, mark_private, resolve_name
from pastepub.services.publisher import PastePublisher
from pastepub.services.renderer import ArtifactRenderer
from pastepub.services.transport import SCPTransport, SupportsTransport, parse_scp_destination


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PastePipeline:
    """Coordinate a single paste or an index rebuild against one destination."""

    config: PasteConfig
    renderer: ArtifactRenderer
    publisher: PastePublisher
    index_builder: IndexBuilder
    remote_dir: str

    @classmethod
    def from_config(
        cls,
        config: PasteConfig,
        *,
        transport: SupportsTransport | None = None,
        highlighter: SupportsHighlighting | None = None,
    ) -> "PastePipeline":
        """Wire the default collaborators for ``config``, allowing overrides for tests."""

        _, remote_dir = parse_scp_destination(config.scp_destination)
        transport = transport or SCPTransport.from_config(config)
        renderer = ArtifactRenderer(config=config, highlighter=highlighter or PygmentsHighlighter())
        publisher = PastePublisher(transport=transport, staging_dir=config.staging_dir)
        index_builder = IndexBuilder(
            config=config,
            transport=transport,
            renderer=renderer,
            publisher=publisher,
            remote_dir=remote_dir,
        )
        return cls(
            config=config,
            renderer=renderer,
            publisher=publisher,
            index_builder=index_builder,
            remote_dir=remote_dir,
        )

    def target_for(
        self,
        title: str | None,
        fallback: str | None,
        *,
        private: bool = False,
        now: datetime | None = None,
    ) -> PublishTarget:
        """Resolve the paste name and derive every remote path and URL from it."""

        name = apply_style(resolve_name(title, fallback), self.config.name_style, now=now)
        if private:
            name = mark_private(name, self.config.privacy_marker)
        return PublishTarget(
            name=name,
            http_destination=self.config.http_destination,
            remote_dir=self.remote_dir,
        )

    def paste(
        self,
        source: str | bytes,
        *,
        title: str | None = None,
        fallback: str | None = None,
        mode: str | None = None,
        private: bool = False,
        published_at: datetime | None = None,
    ) -> PublicationResult:
        """Render and upload ``source``, returning the public URL on success."""

        if isinstance(source, bytes):
            raw = source
            text = source.decode("utf-8", errors="replace")
        else:
            raw = source.encode("utf-8")
            text = source

        target = self.target_for(title, fallback, private=private, now=published_at)
        logger.info("Publishing paste %s", target.name, extra={"event": "paste.start"})

        artifact = self.renderer.render(text, mode, target, filename=fallback)
        return self.publisher.publish(artifact, raw, target, published_at=published_at)

    def rebuild_index(self) -> PublicationResult:
        """Republish the landing page listing every public paste."""

        logger.info("Rebuilding index for %s", self.config.http_destination, extra={"event": "index.start"})
        return self.index_builder.publish()


__all__ = ["PastePipeline"]
