"""Tests for the in-memory history adapters."""

from smartnav import HashHistory, MemoryHistory


def test_memory_history_push_and_read():
    history = MemoryHistory()
    assert history.read_current_path() == "/"
    assert history.read_query() == ""
    history.write_path("/search?q=router")
    assert history.read_current_path() == "/search"
    assert history.read_query() == "?q=router"
    assert history.length == 2
    assert history.href_prefix == ""


def test_write_path_does_not_notify():
    history = MemoryHistory()
    events = []
    history.subscribe(lambda: events.append(history.location))
    history.write_path("/a")
    assert events == []


def test_back_forward_notify_and_stay_in_bounds():
    history = MemoryHistory()
    events = []
    history.subscribe(lambda: events.append(history.location))
    history.write_path("/a")
    history.write_path("/b")
    history.back()
    history.back()
    history.back()
    history.forward()
    assert events == ["/a", "/", "/a"]


def test_push_after_back_drops_forward_entries():
    history = MemoryHistory()
    history.write_path("/a")
    history.write_path("/b")
    history.back()
    history.write_path("/c")
    assert history.length == 3
    history.forward()
    assert history.location == "/c"


def test_unsubscribe():
    history = MemoryHistory()
    events = []
    unsubscribe = history.subscribe(lambda: events.append(1))
    unsubscribe()
    history.write_path("/a")
    history.back()
    assert events == []


def test_hash_history_reads_fragment_only():
    history = HashHistory("index.html#/users/1?tab=x")
    assert history.read_current_path() == "/users/1?tab=x"
    assert history.read_query() is None
    assert history.href_prefix == "#"
    history.write_path("/about")
    assert history.location == "index.html#/about"


def test_hash_history_set_fragment_notifies():
    history = HashHistory()
    events = []
    history.subscribe(lambda: events.append(history.read_current_path()))
    history.set_fragment("/docs")
    assert events == ["/docs"]
    assert history.fragment == "#/docs"
