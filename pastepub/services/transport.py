"""Remote transports used to upload artifacts and list the destination directory."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
import shlex
import subprocess
from typing import Protocol, Sequence

from pastepub.exceptions import ConfigError, TransportError
from pastepub.models.config import PasteConfig


logger = logging.getLogger(__name__)


class SupportsTransport(Protocol):
    """Copy files to, and list files in, the remote destination."""

    def copy(self, local_path: Path, remote_path: str) -> None:
        """Upload ``local_path`` to ``remote_path``, replacing any existing file."""

    def list_directory(self, remote_dir: str) -> list[str]:
        """Return the filenames in ``remote_dir`` in the order the remote reports them."""


def parse_scp_destination(destination: str) -> tuple[str, str]:
    """Split ``user@host:/path`` into the ``user@host`` and ``/path`` parts."""

    login, sep, path = destination.partition(":")
    if not sep or not login or not path:
        raise ConfigError(f"scp_destination must look like user@host:/path, got {destination!r}")
    return login, path.rstrip("/") or "/"


@dataclass(slots=True)
class SCPTransport:
    """Transport backed by the ``scp`` and ``ssh`` command line clients."""

    login: str
    port: int = 22
    identity_file: Path | None = None
    timeout: float | None = None
    # SFTP mode sends remote paths literally; the legacy protocol hands them to the remote shell.
    sftp_mode: bool = True
    scp_executable: str = "scp"
    ssh_executable: str = "ssh"

    @classmethod
    def from_config(cls, config: PasteConfig) -> "SCPTransport":
        login, _ = parse_scp_destination(config.scp_destination)
        return cls(
            login=login,
            port=config.scp_port,
            identity_file=config.identity_file,
            timeout=config.transport_timeout,
        )

    def copy(self, local_path: Path, remote_path: str) -> None:
        args = [self.scp_executable, "-q", "-P", str(self.port), *self._common_options()]
        if self.sftp_mode:
            args.append("-s")
        else:
            args.append("-O")
            remote_path = shlex.quote(remote_path)
        args += [str(local_path), f"{self.login}:{remote_path}"]
        self._run(args)
        logger.info("Copied %s to %s", local_path.name, remote_path, extra={"event": "transport.copy"})

    def list_directory(self, remote_dir: str) -> list[str]:
        args = [self.ssh_executable, "-p", str(self.port), *self._common_options(), self.login]
        args.append(f"ls -1 -- {shlex.quote(remote_dir)}")
        result = self._run(args)
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _common_options(self) -> list[str]:
        # BatchMode makes an unauthenticated host fail instead of prompting.
        options = ["-o", "BatchMode=yes"]
        if self.identity_file is not None:
            options += ["-i", str(self.identity_file)]
        return options

    def _run(self, args: Sequence[str]) -> subprocess.CompletedProcess[str]:
        """Execute a transport command and raise :class:`TransportError` on failure."""

        logger.debug("Running %s", " ".join(shlex.quote(arg) for arg in args))
        try:
            result = subprocess.run(
                list(args),
                text=True,
                check=False,
                capture_output=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as exc:
            raise TransportError(f"{args[0]} is not installed or not on PATH") from exc
        except subprocess.TimeoutExpired as exc:
            raise TransportError(f"{args[0]} timed out after {self.timeout} seconds") from exc

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise TransportError(
                f"{args[0]} exited with status {result.returncode}: {stderr}",
                returncode=result.returncode,
                stderr=stderr,
            )
        return result


__all__ = ["SCPTransport", "SupportsTransport", "parse_scp_destination"]
