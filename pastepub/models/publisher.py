"""Data structures returned by the publisher after a successful upload."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class PublicationResult:
    """Outcome returned once both artifacts reached the remote destination."""

    name: str
    public_url: str
    raw_url: str
    published_at: datetime
