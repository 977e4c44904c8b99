"""Value objects flowing through a single paste or index publish."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from urllib.parse import quote

from pastepub.exceptions import InvalidName


RENDERED_SUFFIX = ".html"
# Most filesystems cap a single path component at 255 bytes.
MAX_FILENAME_BYTES = 255
_RESERVED_NAMES = {".", ".."}


def check_filename(value: str) -> None:
    """Raise :class:`InvalidName` unless ``value`` (plus the rendered suffix) is one valid filename."""

    if not value:
        raise InvalidName("Paste name cannot be empty")
    if "/" in value or "\x00" in value or value in _RESERVED_NAMES:
        raise InvalidName(f"{value!r} cannot be used as a remote filename")
    if len(value.encode("utf-8")) + len(RENDERED_SUFFIX) > MAX_FILENAME_BYTES:
        raise InvalidName(f"Paste name is longer than {MAX_FILENAME_BYTES - len(RENDERED_SUFFIX)} bytes")


@dataclass(slots=True, frozen=True)
class PasteName:
    """Resolved artifact name, safe as a remote filename and as a URL segment."""

    value: str

    def __post_init__(self) -> None:
        check_filename(self.value)

    @property
    def quoted(self) -> str:
        """Return the percent-encoded form embedded in public URLs."""

        return quote(self.value, safe="")

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True, frozen=True)
class PublishTarget:
    """Remote paths and public URLs derived from one resolved name."""

    name: PasteName
    http_destination: str
    remote_dir: str

    @property
    def rendered_filename(self) -> str:
        return f"{self.name.value}{RENDERED_SUFFIX}"

    @property
    def raw_filename(self) -> str:
        return self.name.value

    @property
    def rendered_remote(self) -> str:
        return f"{self.remote_dir}/{self.rendered_filename}"

    @property
    def raw_remote(self) -> str:
        return f"{self.remote_dir}/{self.raw_filename}"

    @property
    def public_url(self) -> str:
        """Return the URL under which the rendered document is served."""

        return f"{self.http_destination}/{self.name.quoted}{RENDERED_SUFFIX}"

    @property
    def raw_url(self) -> str:
        """Return the public URL with the rendered suffix stripped."""

        return self.public_url[: -len(RENDERED_SUFFIX)]


@dataclass(slots=True, frozen=True)
class RenderedArtifact:
    """Highlighted markup with the attribution footer already injected."""

    markup: str
    generated_at: datetime
    timezone_label: str
    author_name: str
    author_link: str
    raw_url: str


@dataclass(slots=True, frozen=True)
class IndexEntry:
    """A remote filename selected for the index listing."""

    filename: str
    url: str


@dataclass(slots=True, frozen=True)
class IndexDocument:
    """Listing of published artifacts rendered as a single document."""

    entries: tuple[IndexEntry, ...]
    preamble: str
    markup: str = field(default="", compare=False)
