"""Desktop window for browsing, previewing and managing files on an SSH host."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Sequence

from .navigation import Entry, ListingError, Navigator, join_path, parse_listing
from .preview import Preview, make_preview
from .session import SessionError, SSHSession, list_command, renamed_path
from .store import QuickActions, SettingsStore

PREVIEW_SIZE = (500, 500)

_HIDDEN_TITLE = "Password"
_HIDDEN_PROMPT = "Enter password:"

AskText = Callable[[str, str, str], "str | None"]


def _no_dialog(title: str, prompt: str, initial: str = "") -> str | None:
    raise RuntimeError(f"cannot ask for {title!r} without a window")


def _print_error(title: str, message: str) -> None:
    print(f"{title}: {message}")


@dataclass
class _Widgets:
    path_var: Any
    listbox: Any
    console: Any
    action_menu: Any
    context_menu: Any


class BrowserApp:
    """File browser state, with Tk widgets attached when ``root`` is given."""

    def __init__(self, root: Any, session: Any, store: SettingsStore | None = None) -> None:
        self.root = root
        self.session = session
        self.actions = QuickActions(store)
        self.navigator = Navigator(self._list, "/")
        self.filter_term = ""
        self.selected: Entry | None = None
        self.console: list[str] = []
        self.ask_text: AskText = _no_dialog
        self._ask_hidden: Callable[[str, str], "str | None"] = (
            lambda title, prompt: self.ask_text(title, prompt, "")
        )
        self._error: Callable[[str, str], None] = _print_error
        self._shown: list[Entry] = []
        self._widgets: _Widgets | None = None
        if root is not None:
            self._build(root)

    @property
    def visible(self) -> list[Entry]:
        """Entries of the current directory that pass the search filter."""
        return self.navigator.filter(self.filter_term)

    def _list(self, path: str) -> list[str]:
        return self.session.run_command(list_command(path))

    def connect(self, host: str, user: str, password: str) -> list[Entry]:
        """Log in to ``host`` and show its root directory."""
        self.session.connect(host, user, password)
        return self.show_directory("/")

    def show_directory(self, path: str) -> list[Entry]:
        """List ``path`` and make it the current directory."""
        entries = self.navigator.load(path)
        self.selected = None
        self._render()
        return entries

    def go_back(self) -> str | None:
        target = self.navigator.back()
        if target is not None:
            self.selected = None
            self._render()
        return target

    def go_forward(self) -> str | None:
        target = self.navigator.forward()
        if target is not None:
            self.selected = None
            self._render()
        return target

    def apply_filter(self, term: str) -> list[Entry]:
        """Show only entries whose names contain ``term``, ignoring case."""
        self.filter_term = term
        self._render()
        return self.visible

    def _reload(self) -> None:
        path = self.navigator.current
        self.navigator.entries = parse_listing(self._list(path), path)
        self.selected = None
        self._render()

    def rename_selected(self) -> str | None:
        """Ask for a new name for the selected entry and rename it remotely."""
        entry = self.selected
        if entry is None:
            return None
        new_name = self.ask_text("Rename File", "New name:", entry.name.rstrip("/"))
        if not new_name:
            return None
        new_path = renamed_path(entry.path, new_name)
        self.session.rename(entry.path, new_path)
        self._reload()
        return new_path

    def preview_selected(self) -> Preview | None:
        """Download the selected entry and build a preview of it."""
        entry = self.selected
        if entry is None:
            return None
        preview = make_preview(self.session.read_file(entry.path), entry.name, PREVIEW_SIZE)
        if self._widgets is not None:
            self._show_preview(preview)
        return preview

    def upload(self, local_path: str | Path, remote_dir: str) -> str:
        """Copy a local file into ``remote_dir``; returns the remote path."""
        remote_path = join_path(remote_dir, Path(local_path).name)
        self.session.upload_file(local_path, remote_path)
        if remote_dir.rstrip("/") == self.navigator.current.rstrip("/"):
            self._reload()
        return remote_path

    def _log(self, line: str) -> None:
        self.console.append(line)
        if self._widgets is not None:
            text = self._widgets.console
            text.configure(state="normal")
            text.insert("end", line + "\n")
            text.see("end")
            text.configure(state="disabled")

    def _run_action(self, name: str) -> None:
        for line in self.actions.run(name, self.session):
            self._log(line)

    def _guarded(self, title: str, func: Callable[..., Any], *args: Any) -> Any:
        try:
            return func(*args)
        except ListingError:
            self._error(title, "Could not list directory.")
        except (SessionError, OSError, ValueError) as exc:
            self._error(title, str(exc))
        return None

    def _build(self, root: Any) -> None:
        import tkinter as tk
        from tkinter import messagebox, simpledialog

        root.title("SSH File Browser")
        root.geometry("800x600")

        top = tk.Frame(root)
        top.pack(fill=tk.X)
        tk.Button(top, text="<", command=lambda: self._guarded("Error", self.go_back)).pack(
            side=tk.LEFT
        )
        tk.Button(
            top, text=">", command=lambda: self._guarded("Error", self.go_forward)
        ).pack(side=tk.LEFT)

        path_var = tk.StringVar(value="/")
        path_entry = tk.Entry(top, textvariable=path_var)
        path_entry.pack(side=tk.LEFT, fill=tk.X, expand=True)
        path_entry.bind(
            "<Return>",
            lambda _event: self._guarded("Error", self.show_directory, path_var.get().strip()),
        )

        search_var = tk.StringVar()
        search_var.trace_add("write", lambda *_args: self.apply_filter(search_var.get()))
        tk.Entry(top, textvariable=search_var).pack(side=tk.LEFT)

        tk.Button(top, text="Connect", command=self._connection_dialog).pack(side=tk.LEFT)
        tk.Button(top, text="Upload", command=self._upload_dialog).pack(side=tk.LEFT)
        actions_button = tk.Menubutton(top, text="Actions", relief=tk.RAISED)
        action_menu = tk.Menu(actions_button, tearoff=False)
        actions_button["menu"] = action_menu
        actions_button.pack(side=tk.LEFT)

        pane = tk.PanedWindow(root, orient=tk.VERTICAL)
        pane.pack(fill=tk.BOTH, expand=True)
        listbox = tk.Listbox(pane)
        console = tk.Text(pane, height=8, state=tk.DISABLED)
        pane.add(listbox)
        pane.add(console)

        context_menu = tk.Menu(root, tearoff=False)
        context_menu.add_command(
            label="Rename", command=lambda: self._guarded("Error", self.rename_selected)
        )
        context_menu.add_command(
            label="Preview", command=lambda: self._guarded("Error", self.preview_selected)
        )

        listbox.bind("<<ListboxSelect>>", self._on_select)
        listbox.bind("<Double-Button-1>", self._on_activate)
        listbox.bind("<Button-3>", self._on_context)
        listbox.bind("<Button-2>", self._on_context)

        mask_char = "*"
        self.ask_text = lambda title, prompt, initial="": simpledialog.askstring(
            title, prompt, initialvalue=initial, parent=root
        )
        self._ask_hidden = lambda title, prompt: simpledialog.askstring(
            title, prompt, show=mask_char, parent=root
        )
        self._error = lambda title, message: messagebox.showerror(title, message, parent=root)
        self._widgets = _Widgets(path_var, listbox, console, action_menu, context_menu)
        self._rebuild_action_menu()

    def _render(self) -> None:
        self._shown = self.visible
        if self._widgets is None:
            return
        self._widgets.path_var.set(self.navigator.current)
        listbox = self._widgets.listbox
        listbox.delete(0, "end")
        for entry in self._shown:
            listbox.insert("end", entry.name)

    def _on_select(self, _event: Any = None) -> None:
        selection = self._widgets.listbox.curselection() if self._widgets else ()
        self.selected = self._shown[selection[0]] if selection else None

    def _on_activate(self, _event: Any = None) -> None:
        self._on_select()
        entry = self.selected
        if entry is None:
            return
        if entry.is_dir:
            target = join_path(self.navigator.current, entry.name)
            self._guarded("Error", self.show_directory, target)
        else:
            self._guarded("Error", self.preview_selected)

    def _on_context(self, event: Any) -> None:
        listbox = self._widgets.listbox
        if not self._shown:
            return
        index = listbox.nearest(event.y)
        if index < 0 or index >= len(self._shown):
            return
        listbox.selection_clear(0, "end")
        listbox.selection_set(index)
        self.selected = self._shown[index]
        self._widgets.context_menu.tk_popup(event.x_root, event.y_root)

    def _show_preview(self, preview: Preview) -> None:
        import tkinter as tk

        window = tk.Toplevel(self.root)
        window.title(preview.title)
        window.transient(self.root)
        if preview.image is not None:
            from PIL import ImageTk

            photo = ImageTk.PhotoImage(preview.image)
            label = tk.Label(window, image=photo)
            label.image = photo
            label.pack()
        else:
            text = tk.Text(window)
            text.insert("end", preview.text)
            text.configure(state=tk.DISABLED)
            text.pack(fill=tk.BOTH, expand=True)

    def _rebuild_action_menu(self) -> None:
        menu = self._widgets.action_menu
        menu.delete(0, "end")
        menu.add_command(label="Add Action", command=self._add_action_dialog)
        menu.add_command(label="Remove Action", command=self._remove_action_dialog)
        names = self.actions.names()
        if names:
            menu.add_separator()
        for name in names:
            menu.add_command(
                label=name, command=lambda n=name: self._guarded("Error", self._run_action, n)
            )

    def _add_action_dialog(self) -> None:
        name = self.ask_text("Action Name", "Enter Action Name:", "")
        command = self.ask_text("SSH Command", "Command to execute:", "")
        if not name or not command:
            return
        self.actions.add(name, command)
        self._rebuild_action_menu()

    def _remove_action_dialog(self) -> None:
        name = self.ask_text("Remove Action", "Name of Action:", "")
        if name and name in self.actions.names():
            self.actions.remove(name)
            self._rebuild_action_menu()

    def _upload_dialog(self) -> None:
        from tkinter import filedialog

        files = filedialog.askopenfilenames(parent=self.root)
        if not files:
            return
        remote_dir = self.ask_text("Remote Path", "Upload to:", self.navigator.current)
        if not remote_dir:
            return
        for local in files:
            self._guarded("Upload Failed", self.upload, local, remote_dir)

    def _connection_dialog(self, host: str | None = None, user: str | None = None) -> None:
        host = host or self.ask_text("Host", "Enter host:", "")
        if not host:
            return
        user = user or self.ask_text("User", "Enter username:", "")
        if user is None:
            return
        typed = self._ask_hidden(_HIDDEN_TITLE, _HIDDEN_PROMPT)
        if typed is None:
            return
        try:
            self.connect(host, user, typed)
        except SessionError:
            self._error("Connection Failed", "Could not connect to server")
        except ListingError:
            self._error("Error", "Could not list directory.")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sshbrowser", description="Browse files on a remote host over SSH."
    )
    parser.add_argument("--host", help="host to connect to on start")
    parser.add_argument("--user", help="user name for the connection")
    parser.add_argument(
        "--db", default="settings.db", help="settings database (default: settings.db)"
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    import tkinter as tk

    root = tk.Tk()
    with SettingsStore(args.db) as store, SSHSession() as session:
        app = BrowserApp(root, session, store)
        root.after(0, lambda: app._connection_dialog(args.host, args.user))
        root.mainloop()
    return 0