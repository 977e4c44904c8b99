"""Configuration consumed by every publish and index run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import tempfile


NAME_STYLES = ("title", "timestamp", "random")


def _default_staging_dir() -> Path:
    return Path(tempfile.gettempdir())


@dataclass(slots=True, frozen=True)
class PasteConfig:
    """Destination, identity, and naming settings for a pastepub run."""

    http_destination: str
    scp_destination: str
    scp_port: int = 22
    identity_file: Path | None = None
    author_name: str = ""
    author_link: str = ""
    privacy_marker: str = "private"
    staging_dir: Path = field(default_factory=_default_staging_dir)
    index_name: str = "index"
    name_style: str = "title"
    transport_timeout: float | None = None
