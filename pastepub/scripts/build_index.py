"""Regenerate the landing page that lists every public paste."""
from __future__ import annotations

import argparse
from dataclasses import asdict
import logging
from typing import Sequence

from pastepub.exceptions import PastepubError
from pastepub.services.config_loader import load_config
from pastepub.services.pipeline import PastePipeline
from pastepub.scripts.common import configure_logging, describe_failure, dump_json, exit_code_for


LOGGER = logging.getLogger("pastepub.index")


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rebuild and publish the paste index page.")
    parser.add_argument("--config", default=None, help="Path to the YAML config file.")
    parser.add_argument("--json", action="store_true", help="Print the publication result as JSON.")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None, *, pipeline: PastePipeline | None = None) -> int:
    configure_logging()
    args = _parse_args(argv)

    try:
        if pipeline is None:
            pipeline = PastePipeline.from_config(load_config(args.config))
        result = pipeline.rebuild_index()
    except PastepubError as exc:
        LOGGER.error("Index rebuild failed (%s)", describe_failure(exc))
        return exit_code_for(exc)

    if args.json:
        print(dump_json(asdict(result)))
    else:
        print(result.public_url)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
