"""Publish a file (or stdin) as a highlighted paste and print its public URL."""
from __future__ import annotations

import argparse
from dataclasses import asdict
import logging
from pathlib import Path
import sys
from typing import BinaryIO, Sequence

from pastepub.exceptions import PastepubError
from pastepub.services.config_loader import load_config
from pastepub.services.pipeline import PastePipeline
from pastepub.services.verify import verify_published
from pastepub.scripts.common import configure_logging, describe_failure, dump_json, exit_code_for


LOGGER = logging.getLogger("pastepub.paste")

STDIN_NAME = "stdin"


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Publish a highlighted paste to the configured destination.")
    parser.add_argument("file", nargs="?", help="File to publish (default: read from stdin).")
    parser.add_argument("-t", "--title", default="", help="Paste name (default: the file's name).")
    parser.add_argument("-m", "--mode", default=None, help="Language for highlighting, e.g. 'python'.")
    parser.add_argument(
        "--private",
        action="store_true",
        help="Add the privacy marker to the name so the paste stays off the index.",
    )
    parser.add_argument("--config", default=None, help="Path to the YAML config file.")
    parser.add_argument("--verify", action="store_true", help="Check that the public URL is served after upload.")
    parser.add_argument("--json", action="store_true", help="Print the publication result as JSON.")
    return parser.parse_args(argv)


def _read_source(path: str | None, stdin: BinaryIO) -> tuple[bytes, str]:
    if not path or path == "-":
        return stdin.read(), STDIN_NAME
    source = Path(path)
    return source.read_bytes(), source.name


def main(argv: Sequence[str] | None = None, *, pipeline: PastePipeline | None = None) -> int:
    configure_logging()
    args = _parse_args(argv)

    try:
        content, fallback = _read_source(args.file, sys.stdin.buffer)
    except OSError as exc:
        LOGGER.error("Could not read %s: %s", args.file, exc)
        return 1

    try:
        if pipeline is None:
            pipeline = PastePipeline.from_config(load_config(args.config))
        result = pipeline.paste(
            content,
            title=args.title,
            fallback=fallback,
            mode=args.mode,
            private=args.private,
        )
    except PastepubError as exc:
        LOGGER.error("Paste failed (%s)", describe_failure(exc))
        return exit_code_for(exc)

    payload = asdict(result)
    if args.verify:
        check = verify_published(result.public_url)
        payload["verified"] = check.ok
        if not check.ok:
            LOGGER.warning("Published, but %s is not reachable yet", result.public_url)

    if args.json:
        print(dump_json(payload))
    else:
        print(result.public_url)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
