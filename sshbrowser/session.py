"""Remote shell session used to list, fetch, upload and rename files."""

from __future__ import annotations

import base64
import binascii
import posixpath
from pathlib import Path
from typing import Any, Callable

import paramiko


class SessionError(Exception):
    """Raised when the remote host cannot be reached or a command cannot run."""


def list_command(path: str) -> str:
    """Shell command that lists a directory, marking directories with '/'."""
    return f'ls -p "{path}"'


def download_command(path: str) -> str:
    """Shell command that prints a remote file as base64 text."""
    return f'base64 "{path}"'


def upload_command(data: bytes, remote_path: str) -> str:
    """Shell command that writes ``data`` to ``remote_path`` via base64."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"echo '{encoded}' | base64 -d > \"{remote_path}\""


def rename_command(old_path: str, new_path: str) -> str:
    """Shell command that moves ``old_path`` to ``new_path``."""
    return f'mv "{old_path}" "{new_path}"'


def renamed_path(old_path: str, new_name: str) -> str:
    """Path of ``old_path`` after renaming it to ``new_name`` in place."""
    if not new_name:
        raise ValueError("new name must not be empty")
    parent = posixpath.dirname(old_path.rstrip("/")) or "."
    return f"{parent.rstrip('/')}/{new_name}"


class SSHSession:
    """A password-authenticated SSH connection that runs shell commands."""

    def __init__(self, client_factory: Callable[[], Any] = paramiko.SSHClient) -> None:
        self._client_factory = client_factory
        self._client: Any = None

    @property
    def connected(self) -> bool:
        return self._client is not None

    def connect(self, host: str, user: str, password: str) -> None:
        """Open the connection, replacing any previous one."""
        self.close()
        client = self._client_factory()
        client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        try:
            client.connect(
                host,
                username=user,
                password=password,
                look_for_keys=False,
                allow_agent=False,
            )
        except (paramiko.SSHException, OSError) as exc:
            client.close()
            raise SessionError(f"could not connect to {host}: {exc}") from exc
        self._client = client

    def _require_client(self) -> Any:
        if self._client is None:
            raise SessionError("not connected")
        return self._client

    def _execute(self, command: str) -> bytes:
        client = self._require_client()
        try:
            _stdin, stdout, _stderr = client.exec_command(command)
            return stdout.read()
        except (paramiko.SSHException, OSError) as exc:
            raise SessionError(f"command failed: {exc}") from exc

    def run_command(self, command: str) -> list[str]:
        """Run ``command`` and return its standard output split into lines."""
        return self._execute(command).decode("utf-8", errors="replace").split("\n")

    def read_file(self, path: str) -> bytes:
        """Fetch the contents of a remote file."""
        raw = self._execute(download_command(path))
        try:
            return base64.b64decode(raw)
        except binascii.Error as exc:
            raise SessionError(f"bad data received for {path}: {exc}") from exc

    def upload_file(self, local_path: str | Path, remote_path: str) -> None:
        """Copy a local file to ``remote_path`` on the host."""
        data = Path(local_path).read_bytes()
        self.run_command(upload_command(data, remote_path))

    def rename(self, old_path: str, new_path: str) -> None:
        """Move a remote file."""
        self.run_command(rename_command(old_path, new_path))

    def list_dir(self, path: str) -> list[str]:
        """List a remote directory over SFTP."""
        client = self._require_client()
        try:
            sftp = client.open_sftp()
        except (paramiko.SSHException, OSError) as exc:
            raise SessionError(f"could not open SFTP: {exc}") from exc
        try:
            return list(sftp.listdir(path))
        except (paramiko.SSHException, OSError) as exc:
            raise SessionError(f"could not list {path}: {exc}") from exc
        finally:
            sftp.close()

    def close(self) -> None:
        """Disconnect; safe to call more than once."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "SSHSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()