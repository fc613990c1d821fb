"""Plugin package initialiser.

Kept lightweight: concrete plugins (``logging``, ``guard``) self-register when
imported (see ``smartnav.__init__`` for the eager imports).
"""

__all__: list[str] = []
