import pytest

from sshbrowser.navigation import (
    Entry,
    ListingError,
    Navigator,
    join_path,
    parse_listing,
)

TREE = {
    "/": ["etc/", "home/", "README", ""],
    "/etc/": ["hosts", "passwd", ""],
    "/home/": ["user/", ""],
    "/home/user/": ["Notes.txt", "photo.PNG", ""],
    "/empty": [""],
}


def make_nav():
    calls = []

    def lister(path):
        calls.append(path)
        return TREE.get(path, [])

    return Navigator(lister), calls


def test_join_path_single_separator():
    assert join_path("/", "etc") == "/etc"
    assert join_path("/etc", "hosts") == "/etc/hosts"
    assert join_path("/etc/", "hosts") == "/etc/hosts"


def test_parse_listing_skips_blanks_and_marks_dirs():
    entries = parse_listing(["etc/", "  ", "README", ""], "/")
    assert [e.name for e in entries] == ["etc/", "README"]
    assert [e.is_dir for e in entries] == [True, False]
    assert entries[1].path == join_path("/", "README")


def test_load_sets_state():
    nav, _ = make_nav()
    entries = nav.load("/")
    assert nav.current == "/"
    assert nav.entries == entries
    assert nav.back_history == ["/"]


def test_load_empty_raises_and_keeps_state():
    nav, _ = make_nav()
    nav.load("/")
    with pytest.raises(ListingError):
        nav.load("/empty")
    assert nav.current == "/"
    assert nav.back_history == ["/"]


def test_enter_directory_and_ignore_file():
    nav, _ = make_nav()
    nav.load("/")
    etc = next(e for e in nav.entries if e.name == "etc/")
    readme = next(e for e in nav.entries if e.name == "README")
    assert nav.enter(readme) is None
    assert nav.current == "/"
    assert nav.enter(etc) == "/etc/"
    assert [e.name for e in nav.entries] == ["hosts", "passwd"]


def test_back_and_forward_round_trip():
    nav, _ = make_nav()
    nav.load("/")
    nav.load("/home/")
    nav.load("/home/user/")
    assert nav.back() == "/home/"
    assert nav.back() == "/"
    assert nav.forward() == "/home/"
    assert nav.forward() == "/home/user/"
    assert nav.current == "/home/user/"
    assert nav.forward() is None


def test_back_without_history_returns_none():
    nav, calls = make_nav()
    assert nav.back() is None
    assert nav.forward() is None
    assert calls == []


def test_back_failure_keeps_history():
    listings = {"/a": ["x"], "/b": ["y"]}
    nav = Navigator(lambda path: listings.get(path, []))
    nav.load("/a")
    nav.load("/b")
    del listings["/a"]
    with pytest.raises(ListingError):
        nav.back()
    assert nav.current == "/b"
    assert nav.back_history[-1] == "/a"


def test_filter_is_case_insensitive():
    nav, _ = make_nav()
    nav.load("/home/user/")
    assert [e.name for e in nav.filter("png")] == ["photo.PNG"]
    assert nav.filter("") == nav.entries
    assert nav.filter("zzz") == []


def test_parsed_entries_compare_by_value():
    entries = parse_listing(["README", "etc/"], "/")
    assert entries == [
        Entry("README", "/README", False),
        Entry("etc/", "/etc/", True),
    ]