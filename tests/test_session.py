import base64
import io
import re

import paramiko
import pytest

from sshbrowser.session import (
    SSHSession,
    SessionError,
    download_command,
    list_command,
    rename_command,
    renamed_path,
    upload_command,
)


class FakeSFTP:
    def __init__(self, dirs):
        self.dirs = dirs
        self.closed = False

    def listdir(self, path):
        if path not in self.dirs:
            raise FileNotFoundError(path)
        return list(self.dirs[path])

    def close(self):
        self.closed = True


class FakeClient:
    def __init__(self, outputs=None, dirs=None, fail_connect=False):
        self.outputs = outputs or {}
        self.dirs = dirs or {}
        self.fail_connect = fail_connect
        self.commands = []
        self.closed = False
        self.connect_args = None
        self.policy = None
        self.sftp = None

    def set_missing_host_key_policy(self, policy):
        self.policy = policy

    def connect(self, hostname, **kwargs):
        if self.fail_connect:
            raise paramiko.AuthenticationException("denied")
        self.connect_args = (hostname, kwargs)

    def exec_command(self, command):
        self.commands.append(command)
        out = self.outputs.get(command, b"")
        return io.BytesIO(), io.BytesIO(out), io.BytesIO()

    def open_sftp(self):
        self.sftp = FakeSFTP(self.dirs)
        return self.sftp

    def close(self):
        self.closed = True


def connected(client):
    session = SSHSession(lambda: client)
    password = "password"
    session.connect("example.com", "user", password)
    return session


def test_command_formats():
    assert list_command("/tmp") == 'ls -p "/tmp"'
    assert download_command("/tmp/a") == 'base64 "/tmp/a"'
    assert rename_command("/a", "/b") == 'mv "/a" "/b"'


def test_upload_command_round_trip():
    data = bytes(range(256))
    command = upload_command(data, "/remote/file.bin")
    match = re.fullmatch(r"echo '([^']*)' \| base64 -d > \"(.*)\"", command)
    assert match is not None
    assert base64.b64decode(match.group(1)) == data
    assert match.group(2) == "/remote/file.bin"


def test_renamed_path():
    assert renamed_path("/home/user/a.txt", "b.txt") == "/home/user/b.txt"
    assert renamed_path("/a.txt", "b.txt") == "/b.txt"
    assert renamed_path("a.txt", "b.txt") == "./b.txt"


def test_renamed_path_rejects_empty_name():
    with pytest.raises(ValueError):
        renamed_path("/a.txt", "")


def test_connect_passes_credentials():
    client = FakeClient()
    session = connected(client)
    hostname, kwargs = client.connect_args
    assert hostname == "example.com"
    assert kwargs["username"] == "user"
    assert kwargs["password"] == "password"
    assert session.connected


def test_connect_failure_raises_and_closes():
    client = FakeClient(fail_connect=True)
    session = SSHSession(lambda: client)
    password = "password"
    with pytest.raises(SessionError):
        session.connect("example.com", "user", password)
    assert client.closed
    assert not session.connected


def test_run_command_requires_connection():
    with pytest.raises(SessionError):
        SSHSession(FakeClient).run_command("ls")


def test_run_command_splits_lines():
    client = FakeClient(outputs={"ls": b"a\nb/\n"})
    session = connected(client)
    assert session.run_command("ls") == ["a", "b/", ""]
    assert client.commands == ["ls"]


def test_read_file_decodes_base64():
    payload = b"\x00\x01binary\xff" * 40
    encoded = base64.encodebytes(payload)
    client = FakeClient(outputs={download_command("/f"): encoded})
    session = connected(client)
    assert session.read_file("/f") == payload


def test_upload_file_sends_contents(tmp_path):
    local = tmp_path / "local.txt"
    local.write_bytes(b"hello world")
    client = FakeClient()
    session = connected(client)
    session.upload_file(local, "/remote/local.txt")
    assert client.commands == [upload_command(b"hello world", "/remote/local.txt")]


def test_upload_missing_file_raises(tmp_path):
    session = connected(FakeClient())
    with pytest.raises(FileNotFoundError):
        session.upload_file(tmp_path / "absent", "/x")


def test_rename_runs_mv():
    client = FakeClient()
    session = connected(client)
    session.rename("/a", "/b")
    assert client.commands == [rename_command("/a", "/b")]


def test_list_dir_uses_sftp():
    client = FakeClient(dirs={"/": ["etc", "home"]})
    session = connected(client)
    assert session.list_dir("/") == ["etc", "home"]
    assert client.sftp.closed


def test_list_dir_missing_raises():
    client = FakeClient(dirs={})
    session = connected(client)
    with pytest.raises(SessionError):
        session.list_dir("/nope")
    assert client.sftp.closed


def test_context_manager_closes():
    client = FakeClient()
    with connected(client) as session:
        assert session.connected
    assert client.closed
    assert not session.connected