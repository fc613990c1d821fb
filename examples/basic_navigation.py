"""
Example showing nested routes, redirects, a guard plugin and view slots.
"""

from __future__ import annotations

from smartnav import Link, create_router, resolve_view


class Layout:
    def render(self):
        return "layout"


class Home:
    def render(self):
        return "home"


class UserPage:
    def render(self):
        return "user"


class Login:
    def render(self):
        return "login"


class Spinner:
    def render(self):
        return "loading..."


def load_reports():
    class Reports:
        def render(self):
            return "reports"

    return Reports


session = {"user": None}

router = create_router(
    routes=[
        {"path": "/", "component": Home},
        {"path": "/login", "component": Login},
        {"path": "/home", "redirect": "/"},
        {
            "path": "/app",
            "component": Layout,
            "meta": {"guard": True},
            "children": [
                {"path": "/users/:id", "component": UserPage, "meta": {"title": "User"}},
                {"path": "/reports", "component": load_reports, "fallback": Spinner},
            ],
        },
    ],
    plugins=["logging"],
)
router.plug("guard", check=lambda to: session["user"] is not None, redirect="/login")


if __name__ == "__main__":
    router.navigate("/app/users/7")
    print(router.path.value, [r.component.__name__ for r in router.current_routes.value])

    session["user"] = "ada"
    router.navigate("/app/users/7")
    slot = resolve_view(router)
    while slot is not None:
        print(f"depth {slot.depth}: {slot.component.__name__}")
        slot = slot.child()
    print(router.params.value, router.meta.value)

    print(Link(router, "/home").href)
    router.navigate("/home")
    print(router.path.value)
