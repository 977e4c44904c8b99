"""Shared fixtures and stub collaborators for the test suite."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

import pytest

from pastepub.exceptions import TransportError
from pastepub.models.config import PasteConfig
from pastepub.services.pipeline import PastePipeline


FIXED_NOW = datetime(2024, 3, 1, 12, 30, 45, tzinfo=timezone.utc)


@dataclass(slots=True)
class FakeTransport:
    """In-memory remote filesystem recording every copy and listing request."""

    files: dict[str, bytes] = field(default_factory=dict)
    copies: list[str] = field(default_factory=list, init=False)
    listings: list[str] = field(default_factory=list, init=False)
    fail_on: set[str] = field(default_factory=set)
    fail_listing: bool = False
    listing_order: list[str] | None = None

    def copy(self, local_path: Path, remote_path: str) -> None:
        self.copies.append(remote_path)
        if any(remote_path.endswith(suffix) for suffix in self.fail_on):
            raise TransportError(f"scp exited with status 1: lost connection ({remote_path})", returncode=1)
        self.files[remote_path] = local_path.read_bytes()

    def list_directory(self, remote_dir: str) -> list[str]:
        self.listings.append(remote_dir)
        if self.fail_listing:
            raise TransportError("ssh exited with status 255: Connection refused", returncode=255)
        if self.listing_order is not None:
            return list(self.listing_order)
        prefix = f"{remote_dir}/"
        return [path[len(prefix):] for path in self.files if path.startswith(prefix)]

    def read(self, remote_path: str) -> str:
        return self.files[remote_path].decode("utf-8")


@dataclass(slots=True)
class StubHighlighter:
    """Highlighter returning a minimal document, or raising when configured to."""

    error: Exception | None = None
    template: str = "<html><body><pre class=\"{mode}\">{text}</pre>\n</body>\n</html>\n"
    calls: list[tuple[str, str | None, str | None]] = field(default_factory=list, init=False)

    def render(self, text: str, mode: str | None, *, filename: str | None = None) -> str:
        self.calls.append((text, mode, filename))
        if self.error is not None:
            raise self.error
        return self.template.format(text=text, mode=mode or "text")


@pytest.fixture
def config(tmp_path: Path) -> PasteConfig:
    return PasteConfig(
        http_destination="https://p.example.org",
        scp_destination="paste@p.example.org:/var/www/paste",
        scp_port=2222,
        author_name="Ada Example",
        author_link="https://ada.example.org",
        privacy_marker="private",
        staging_dir=tmp_path / "staging",
    )


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def highlighter() -> StubHighlighter:
    return StubHighlighter()


@pytest.fixture
def make_pipeline(config: PasteConfig, transport: FakeTransport, highlighter: StubHighlighter) -> Callable[..., PastePipeline]:
    def factory(**overrides) -> PastePipeline:
        pipeline = PastePipeline.from_config(
            overrides.pop("config", config),
            transport=overrides.pop("transport", transport),
            highlighter=overrides.pop("highlighter", highlighter),
        )
        pipeline.renderer.clock = lambda: FIXED_NOW
        return pipeline

    return factory


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW
