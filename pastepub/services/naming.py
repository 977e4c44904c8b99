"""Resolve user-supplied titles into remote-safe paste names."""

from __future__ import annotations

from datetime import datetime, timezone
import secrets

from pastepub.exceptions import InvalidName
from pastepub.models.paste import PasteName


def resolve_name(raw_title: str | None, fallback: str | None) -> PasteName:
    """Return the paste name for ``raw_title``, substituting ``fallback`` when it is empty.

    The result is used verbatim as the remote filename and percent-encoded for the
    public URL, so anything that cannot be a single path segment is rejected.
    Names derived later by the naming styles go through the same check when
    their :class:`PasteName` is built.
    """

    title = (raw_title or "").strip()
    if not title:
        title = (fallback or "").strip()
    if not title:
        raise InvalidName("Paste has neither a title nor a fallback name")
    return PasteName(title)


def with_timestamp(name: PasteName, *, now: datetime | None = None) -> PasteName:
    """Suffix ``name`` with a UTC timestamp so repeated pastes do not overwrite."""

    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return PasteName(f"{name.value}-{moment:%Y%m%d%H%M%S}")


def with_random_token(name: PasteName, *, nbytes: int = 8) -> PasteName:
    """Suffix ``name`` with a random hex token, making the URL unguessable."""

    return PasteName(f"{name.value}-{secrets.token_hex(nbytes)}")


def mark_private(name: PasteName, marker: str) -> PasteName:
    """Embed the privacy marker so the index builder skips this paste."""

    if not marker or marker in name.value:
        return name
    return PasteName(f"{name.value}-{marker}")


def apply_style(name: PasteName, style: str, *, now: datetime | None = None) -> PasteName:
    """Apply the configured naming ``style`` to an already resolved name."""

    if style == "timestamp":
        return with_timestamp(name, now=now)
    if style == "random":
        return with_random_token(name)
    return name


__all__ = ["apply_style", "mark_private", "resolve_name", "with_random_token", "with_timestamp"]
