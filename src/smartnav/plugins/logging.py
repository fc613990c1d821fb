"""Logging plugin (source of truth).

Responsibilities
----------------
- Wrap each navigation resolution and emit configurable messages:
  * ``before`` (default True): ``"{path} start"``
  * ``after`` (default True): ``"{path} end (<ms> ms)"`` with elapsed time
    in milliseconds and ``{elapsed:.2f}`` formatting. The ``end`` message
    follows the whole resolution, redirects included.
- Sinks:
  * when ``print`` is true → always ``print(message)``;
  * else when ``log`` is true → ``logger.info(message)`` if the logger reports
    handlers via ``hasHandlers()``, otherwise ``print(message)`` to avoid drops;
  * else → no output.
- ``enabled`` gates the plugin entirely (default True).
- Uses a provided ``logging.Logger`` (default ``logging.getLogger("smartnav")``).

Configuration
-------------
Accepted keys: ``enabled``, ``before``, ``after``, ``log``, ``print``, either
as kwargs (``router.plug("logging", after=False)``) or as ``flags``
(``"before:off,print:on"``). ``router.logging.configure(...)`` updates them at
runtime. Exceptions propagate; the end message is skipped on error.

Registration
------------
At module import, the plugin registers itself globally as ``"logging"``.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from smartnav.core.router import Router
from smartnav.plugins._base_plugin import BasePlugin


class LoggingPlugin(BasePlugin):
    """Logs navigations with timing."""

    plugin_code = "logging"
    plugin_description = "Logs navigation resolution with timing"

    __slots__ = ("_logger",)

    def __init__(self, router, *, logger: Optional[logging.Logger] = None, **cfg):
        self._logger = logger or logging.getLogger("smartnav")
        super().__init__(router, **cfg)

    def configure(
        self,
        enabled: bool = True,
        before: bool = True,
        after: bool = True,
        log: bool = True,
        print: bool = False,  # noqa: A002 - shadowing builtin intentionally
    ):
        """Configure logging plugin options."""

    def _emit(self, message: str, *, cfg: dict) -> None:
        if cfg.get("print"):
            print(message)
            return
        if cfg.get("log"):
            if self._logger.hasHandlers():
                self._logger.info(message)
            else:
                print(message)

    def wrap_navigation(self, router, call_next: Callable[[str], None]):
        def logged(raw_path: str) -> None:
            cfg = self._effective_config()
            if not cfg["enabled"]:
                return call_next(raw_path)
            if cfg["before"]:
                self._emit(f"{raw_path} start", cfg=cfg)
            t0 = time.perf_counter()
            call_next(raw_path)
            elapsed = (time.perf_counter() - t0) * 1000
            if cfg["after"]:
                self._emit(f"{raw_path} end ({elapsed:.2f} ms)", cfg=cfg)

        return logged

    def _effective_config(self) -> dict:
        defaults = {"enabled": True, "before": True, "after": True, "log": True, "print": False}
        cfg = defaults | self.configuration()
        return {key: defaults[key] if cfg.get(key) is None else bool(cfg[key]) for key in defaults}


Router.register_plugin(LoggingPlugin)
