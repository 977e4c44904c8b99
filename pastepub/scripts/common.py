"""Helpers shared by the pastepub command line scripts."""
from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import date, datetime, timezone
import json
import logging
import os
from pathlib import Path

from pastepub.exceptions import ConfigError, InvalidName, ListError, PastepubError, PublishError, RenderError


EXIT_CODES: dict[type[PastepubError], int] = {
    ConfigError: 2,
    InvalidName: 3,
    RenderError: 4,
    PublishError: 5,
    ListError: 6,
}

_FAILURE_LABELS: dict[type[PastepubError], str] = {
    ConfigError: "configuration error",
    InvalidName: "bad name",
    RenderError: "rendering failed",
    PublishError: "upload failed",
    ListError: "could not list remote files",
}


def configure_logging() -> None:
    level_name = os.getenv("PASTEPUB_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")


def exit_code_for(exc: PastepubError) -> int:
    for kind, code in EXIT_CODES.items():
        if isinstance(exc, kind):
            return code
    return 1


def describe_failure(exc: PastepubError) -> str:
    for kind, label in _FAILURE_LABELS.items():
        if isinstance(exc, kind):
            return f"{label}: {exc}"
    return str(exc)


def _json_default(o):
    if isinstance(o, (datetime, date)):
        if isinstance(o, datetime) and o.tzinfo is None:
            o = o.replace(tzinfo=timezone.utc)
        return o.isoformat()
    if is_dataclass(o):
        return asdict(o)
    if isinstance(o, Path):
        return str(o)
    return str(o)


def dump_json(payload: object) -> str:
    return json.dumps(payload, default=_json_default, ensure_ascii=False)
