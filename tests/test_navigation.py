"""Tests for the navigation state machine: commits, hooks and redirects."""

import logging
import warnings

import pytest

from smartnav import BaseRouter, ConfigError, HashHistory, MemoryHistory, RedirectLoopError
from smartnav.core.base_router import RouterState


class Page:
    def __init__(self, label):
        self.label = label

    def render(self):
        return self.label


HOME, USER, NEW, ADMIN, LOGIN = (Page(name) for name in ("home", "user", "new", "admin", "login"))


def make_routes():
    return [
        {"path": "/", "component": HOME, "meta": {"title": "Home"}},
        {"path": "/users", "children": [{"path": "/:id", "component": USER}]},
        {"path": "/old", "redirect": "/new"},
        {"path": "/new", "component": NEW, "meta": {"title": "New"}},
        {"path": "/admin", "component": ADMIN, "meta": {"auth": True}},
        {"path": "/login", "component": LOGIN},
    ]


def components(router):
    return [route.component for route in router.current_routes.value]


def test_initial_navigation_commits_current_location():
    router = BaseRouter(make_routes())
    assert router.state is RouterState.RESOLVED
    assert router.path.value == "/"
    assert components(router) == [HOME]
    assert router.meta.value == {"title": "Home"}
    assert router.query_params.value == ""


def test_unmatched_path_commits_empty_state():
    router = BaseRouter(make_routes(), history=MemoryHistory("/nowhere"))
    assert router.state is RouterState.RESOLVED
    assert router.params.value == {}
    assert router.meta.value == {}
    assert router.current_routes.value == []


def test_navigate_commits_params():
    router = BaseRouter(make_routes())
    router.navigate("/users/42")
    assert router.path.value == "/users/42"
    assert router.params.value == {"id": "42"}
    assert components(router) == [USER]


def test_navigate_splits_query_string():
    router = BaseRouter(make_routes())
    router.navigate("/users/7?tab=repos")
    assert router.path.value == "/users/7"
    assert router.query_params.value == "?tab=repos"
    assert router.params.value == {"id": "7"}


def test_static_redirect_commits_target_state():
    router = BaseRouter(make_routes())
    router.navigate("/old")
    direct = router.resolve("/new")
    assert router.path.value == "/new"
    assert router.current_routes.value == direct.routes
    assert router.meta.value == {"title": "New"}
    assert router.params.value == {}
    assert router.history.read_current_path() == "/new"


def test_hook_redirect_wins_over_static_redirect():
    router = BaseRouter(make_routes())

    @router.process_route
    def divert(from_, to):
        if to.routes[0].redirect:
            return "/login"
        return None

    router.navigate("/old")
    assert components(router) == [LOGIN]


def test_failing_hook_is_logged_and_skipped(caplog):
    router = BaseRouter(make_routes())

    def boom(from_, to):
        raise RuntimeError("broken hook")

    def to_login(from_, to):
        return "/login" if to.meta.get("auth") else None

    router.process_route(boom)
    router.process_route(to_login)

    with caplog.at_level(logging.ERROR, logger="smartnav"):
        router.navigate("/admin")

    assert components(router) == [LOGIN]
    assert any("boom" in record.getMessage() for record in caplog.records)


def test_first_string_vote_short_circuits():
    router = BaseRouter(make_routes())
    calls = []

    def first(from_, to):
        calls.append("first")
        return "/login" if to.meta.get("auth") else None

    def second(from_, to):
        calls.append("second")
        return None

    router.process_route(first)
    router.process_route(second)
    calls.clear()
    router.navigate("/admin")
    # "/admin": first votes and second is skipped; "/login": both run
    assert calls == ["first", "first", "second"]
    assert components(router) == [LOGIN]


def test_empty_and_non_string_votes_are_ignored():
    router = BaseRouter(make_routes())
    router.process_route(lambda from_, to: "")
    router.process_route(lambda from_, to: 42)
    router.navigate("/new")
    assert components(router) == [NEW]


def test_async_hook_result_is_ignored():
    router = BaseRouter(make_routes())

    async def async_hook(from_, to):
        return "/login"

    router.process_route(async_hook)
    with warnings.catch_warnings():
        warnings.simplefilter("error", RuntimeWarning)
        router.navigate("/admin")
    assert components(router) == [ADMIN]


def test_hooks_receive_read_only_snapshots():
    router = BaseRouter(make_routes())
    seen = []
    router.process_route(lambda from_, to: seen.append((from_, to)))
    router.navigate("/users/3")

    from_, to = seen[-1]
    assert from_.routes == (router.routes[0],)
    assert dict(to.params) == {"id": "3"}
    with pytest.raises(TypeError):
        to.params["id"] = "4"  # type: ignore[index]


def test_hooks_do_not_run_without_match():
    router = BaseRouter(make_routes())
    calls = []
    router.process_route(lambda from_, to: calls.append(to))
    router.navigate("/missing")
    assert calls == []
    assert router.current_routes.value == []


def test_process_route_requires_callable():
    router = BaseRouter(make_routes())
    with pytest.raises(TypeError):
        router.process_route("not-a-hook")  # type: ignore[arg-type]


def test_static_redirect_cycle_raises():
    routes = [{"path": "/a", "redirect": "/b"}, {"path": "/b", "redirect": "/a"}]
    router = BaseRouter(routes, history=MemoryHistory("/start"))
    with pytest.raises(RedirectLoopError):
        router.navigate("/a")


def test_hook_redirect_cycle_raises():
    router = BaseRouter(make_routes(), max_redirects=3)

    def ping_pong(from_, to):
        if to.routes[0].component is NEW:
            return "/login"
        if to.routes[0].component is LOGIN:
            return "/new"
        return None

    router.process_route(ping_pong)
    with pytest.raises(RedirectLoopError) as excinfo:
        router.navigate("/new")
    assert excinfo.value.limit == 3


def test_static_self_redirect_raises():
    routes = [{"path": "/", "component": HOME}, {"path": "/x", "redirect": "/x"}]
    router = BaseRouter(routes)
    with pytest.raises(RedirectLoopError):
        router.navigate("/x")
    assert router.path.value == "/"
    assert components(router) == [HOME]


def test_hook_self_redirect_raises():
    router = BaseRouter(make_routes())

    @router.process_route
    def always_login(from_, to):
        return "/login"

    with pytest.raises(RedirectLoopError):
        router.navigate("/login")
    assert router.path.value == "/"
    assert components(router) == [HOME]


def test_navigate_after_redirect_loop_reresolves():
    router = BaseRouter(make_routes(), max_redirects=4)
    state = {"loop": True}

    @router.process_route
    def ping_pong(from_, to):
        if not state["loop"]:
            return None
        if to.routes[0].component is NEW:
            return "/login"
        if to.routes[0].component is LOGIN:
            return "/new"
        return None

    with pytest.raises(RedirectLoopError):
        router.navigate("/new")
    assert router.path.value == "/"
    assert components(router) == [HOME]

    state["loop"] = False
    router.navigate("/new")
    assert router.path.value == "/new"
    assert components(router) == [NEW]


def test_zero_max_redirects_rejects_any_redirect():
    router = BaseRouter(make_routes(), max_redirects=0)
    with pytest.raises(RedirectLoopError):
        router.navigate("/old")


def test_fallback_must_be_renderable():
    def loader():
        return Page

    with pytest.raises(ConfigError):
        BaseRouter(make_routes(), fallback=loader)
    with pytest.raises(ConfigError):
        BaseRouter(make_routes(), fallback="spinner")
    assert BaseRouter(make_routes(), fallback=HOME).fallback is HOME


def test_invalid_routes_abort_construction():
    with pytest.raises(ConfigError):
        BaseRouter([{"path": "/a"}])


def test_back_and_forward_reresolve():
    router = BaseRouter(make_routes())
    router.navigate("/new")
    router.navigate("/users/1")
    router.history.back()
    assert components(router) == [NEW]
    router.history.forward()
    assert router.params.value == {"id": "1"}


def test_hash_router_reads_fragment():
    router = BaseRouter(make_routes(), hash=True)
    assert isinstance(router.history, HashHistory)
    assert components(router) == [HOME]
    router.navigate("/new")
    assert router.history.location == "#/new"
    assert router.href("/new") == "#/new"
    assert router.query_params.value is None
    router.history.set_fragment("#/users/5")
    assert router.params.value == {"id": "5"}


def test_same_path_does_not_reresolve():
    router = BaseRouter(make_routes())
    router.navigate("/new")
    calls = []
    router.process_route(lambda from_, to: calls.append(to))
    router.navigate("/new")
    assert calls == []


def test_set_routes_rebuilds_tree():
    router = BaseRouter(make_routes())
    router._set_routes([{"path": "/only", "component": NEW}])
    router.navigate("/only")
    assert components(router) == [NEW]
    router.navigate("/users/1")
    assert router.current_routes.value == []


def test_state_cells_are_read_only_and_observable():
    router = BaseRouter(make_routes())
    changes = []
    unsubscribe = router.current_routes.subscribe(changes.append)
    router.navigate("/new")
    assert len(changes) == 1
    unsubscribe()
    router.navigate("/login")
    assert len(changes) == 1
    with pytest.raises(AttributeError):
        router.params.value = {}  # type: ignore[misc]


def test_resolve_is_pure():
    router = BaseRouter(make_routes())
    result = router.resolve("/users/9")
    assert result.params == {"id": "9"}
    assert components(router) == [HOME]


def test_close_stops_listening():
    router = BaseRouter(make_routes())
    router.navigate("/new")
    router.close()
    router.history.back()
    assert components(router) == [NEW]
