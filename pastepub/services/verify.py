"""Confirm that a freshly published paste is being served."""

from __future__ import annotations

from dataclasses import dataclass
import logging

import httpx


logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class VerificationResult:
    url: str
    ok: bool
    status_code: int | None = None
    detail: str = ""


def verify_published(url: str, *, client: httpx.Client | None = None, timeout: float = 10.0) -> VerificationResult:
    """Issue a ``HEAD`` request for ``url`` and report whether it is reachable.

    Failures are logged and returned, never raised: the upload already succeeded
    and the web server may simply lag behind.
    """

    try:
        if client is not None:
            response = client.head(url, follow_redirects=True)
        else:
            response = httpx.head(url, follow_redirects=True, timeout=timeout)
    except httpx.HTTPError as exc:
        logger.warning("Could not reach %s: %s", url, exc, extra={"event": "paste.verify_failed"})
        return VerificationResult(url=url, ok=False, detail=str(exc))

    if response.is_success:
        return VerificationResult(url=url, ok=True, status_code=response.status_code)

    logger.warning(
        "%s responded with HTTP %s", url, response.status_code, extra={"event": "paste.verify_failed"}
    )
    return VerificationResult(
        url=url,
        ok=False,
        status_code=response.status_code,
        detail=response.reason_phrase,
    )


__all__ = ["VerificationResult", "verify_published"]
