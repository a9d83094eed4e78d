"""Rendering and session exceptions."""


class SessionError(Exception):
    """Raised when a surface is used outside its owning session's lifetime."""

    pass
