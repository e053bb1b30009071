# sshbrowser

A small desktop file browser for remote machines reachable over SSH.
It needs nothing on the server beyond a shell and the usual `ls`, `mv`
and `base64` tools: directory listings, downloads, uploads and renames
all travel as ordinary commands over an SSH exec channel.

What the window does:

- lists remote directories with `ls -p`, so folders end in `/`
- back (`<`) and forward (`>`) history, and a path field to jump to a directory
- double-clicking a folder enters it; double-clicking a file previews it
- case-insensitive filtering of the listing as you type in the search field
- a right-click menu with **Rename** and **Preview**
- previews: images are scaled to fit a 500×500 box, anything else is shown as text
- an **Upload** button that copies local files into a remote directory
- an **Actions** menu of quick actions (named shell commands) whose output
  goes to the console pane; quick actions are kept in a local SQLite file

## Installation

```
pip install .
```

The window uses Tkinter, which ships with most Python builds; on some
Linux distributions it comes as a separate system package.

To run the test suite:

```
pip install ".[test]"
pytest
```

## Running the browser

```
sshbrowser
```

On start it asks for host, user name and password. Options:

- `--host HOST` – host to connect to, so it is not asked for
- `--user USER` – user name for the connection
- `--db PATH` – settings database (default: `settings.db`)

Host keys of unknown hosts are accepted automatically, and only password
authentication is tried.

## Using the pieces from Python

The package can also be used without the window.

```python
import paramiko

from sshbrowser.session import SSHSession, SessionError
from sshbrowser.navigation import Navigator

password = "password"

with SSHSession(paramiko.SSHClient) as session:
    session.connect("host.example.com", "user", password)

    print(session.run_command("uname -a"))

    nav = Navigator(session.list_dir, "/")
    nav.load("/var/log")
    for entry in nav.filter("sys"):
        print(entry)

    data = session.read_file("/etc/hostname")
    session.upload_file("notes.txt", "/tmp/notes.txt")
    session.rename("/tmp/notes.txt", "/tmp/notes-old.txt")
```

`SSHSession.list_dir` lists over SFTP and returns bare names; the helper
`list_command` builds the `ls -p` command the window uses, and
`parse_listing` turns its output into `Entry` objects with an `is_dir` flag.

Failures to connect or to run a command are raised as `SessionError`;
a directory that yields no entries raises `ListingError`.

Saved connections and quick actions live in `SettingsStore`, and
`QuickActions` runs a stored command on an open session:

```python
from sshbrowser.store import SettingsStore, QuickActions

with SettingsStore("settings.db") as store:
    actions = QuickActions(store)
    actions.add("disk usage", "df -h")
    print(actions.names())
```

`make_preview` in `sshbrowser.preview` turns downloaded bytes into a
`Preview`, either an image fitted within a given size or decoded text.

## What it does not do

- The window does not remember connections; `SettingsStore.save_connection`
  and `SettingsStore.connections` are only available from Python.
- Files can be previewed but not downloaded to a local file from the window.
- An upload sends the whole file inside a single shell command, so very
  large files may exceed the remote command-line limit.
- There is one session per window; there are no tabs and no drag and drop.

## A word of caution

Connection passwords stored through `SettingsStore` are kept in plain
text in the settings file. Keep that file private, or avoid saving
passwords at all.