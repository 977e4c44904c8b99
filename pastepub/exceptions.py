"""Error types raised by the paste publishing pipeline."""

from __future__ import annotations


class PastepubError(Exception):
    """Base class for every failure surfaced by pastepub."""


class ConfigError(PastepubError):
    """Raised when the configuration is missing or invalid."""


class InvalidName(PastepubError, ValueError):
    """Raised when no usable paste name can be resolved."""


class RenderError(PastepubError):
    """Raised when the highlighter fails or returns markup without closing tags."""


class TransportError(PastepubError):
    """Raised by transports when a remote command exits unsuccessfully."""

    def __init__(self, message: str, *, returncode: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class PublishError(PastepubError):
    """Raised when one or both remote transfers failed."""


class ListError(PastepubError):
    """Raised when the remote directory listing cannot be obtained."""


__all__ = [
    "ConfigError",
    "InvalidName",
    "ListError",
    "PastepubError",
    "PublishError",
    "RenderError",
    "TransportError",
]
