"""Publisher that stages artifacts locally and uploads them through a transport."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
from pathlib import Path
import tempfile

from pastepub.exceptions import PublishError, TransportError
from pastepub.models.paste import PublishTarget, RenderedArtifact
from pastepub.models.publisher import PublicationResult
from pastepub.services.transport import SupportsTransport


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PastePublisher:
    """Upload a rendered document and its raw source to the remote destination."""

    transport: SupportsTransport
    staging_dir: Path | None = None

    def publish(
        self,
        artifact: RenderedArtifact,
        raw_source: bytes,
        target: PublishTarget,
        *,
        published_at: datetime | None = None,
    ) -> PublicationResult:
        """Stage both files, copy rendered then raw, and return the public URL.

        Existing remote files are replaced. The two transfers are not atomic: a
        failure on the raw leg leaves the rendered document published.
        """

        try:
            if self.staging_dir is not None:
                self.staging_dir.mkdir(parents=True, exist_ok=True)

            with tempfile.TemporaryDirectory(prefix="pastepub-", dir=self.staging_dir) as staging:
                rendered_path = Path(staging) / target.rendered_filename
                raw_path = Path(staging) / target.raw_filename
                rendered_path.write_text(artifact.markup, encoding="utf-8")
                raw_path.write_bytes(raw_source)

                self._transfer(rendered_path, target.rendered_remote, target)
                self._transfer(raw_path, target.raw_remote, target)
        except OSError as exc:
            logger.error("Staging %s failed: %s", target.name, exc, extra={"event": "paste.staging_failed"})
            raise PublishError(f"Could not stage {target.name} for upload: {exc}") from exc

        published = (published_at or datetime.now(timezone.utc)).astimezone(timezone.utc)
        logger.info("Published %s", target.public_url, extra={"event": "paste.published"})
        return PublicationResult(
            name=target.name.value,
            public_url=target.public_url,
            raw_url=target.raw_url,
            published_at=published,
        )

    def _transfer(self, local_path: Path, remote_path: str, target: PublishTarget) -> None:
        try:
            self.transport.copy(local_path, remote_path)
        except TransportError as exc:
            logger.error("Upload of %s failed: %s", target.name, exc, extra={"event": "paste.publish_failed"})
            raise PublishError(f"Could not publish {target.name}: {exc}") from exc


__all__ = ["PastePublisher"]
