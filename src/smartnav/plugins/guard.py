"""Meta-driven navigation guard.

Routes opt in by carrying the configured meta key (``"guard"`` by default).
For a matched navigation whose merged meta contains that key, ``check(to)`` is
called with the candidate snapshot; a falsy answer votes for a redirect to
``redirect``. Without a ``check`` or a ``redirect`` the guard abstains.

Example::

    router.plug("guard", check=lambda to: session.user is not None,
                redirect="/login")
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from smartnav.core.router import Router
from smartnav.plugins._base_plugin import BasePlugin


class GuardPlugin(BasePlugin):
    plugin_code = "guard"
    plugin_description = "Redirects navigations to guarded routes that fail a check"

    __slots__ = ()

    def configure(
        self,
        enabled: bool = True,
        key: str = "guard",
        check: Optional[Callable[..., Any]] = None,
        redirect: Optional[str] = None,
    ):
        """Configure guard plugin options."""

    def process_route(self, router, from_, to) -> Optional[str]:
        cfg = self.configuration()
        key = cfg.get("key", "guard")
        check = cfg.get("check")
        redirect = cfg.get("redirect")
        if check is None or not redirect or key not in to.meta:
            return None
        if check(to):
            return None
        return redirect


Router.register_plugin(GuardPlugin)
