"""Layout-related exceptions."""


class LayoutError(Exception):
    """Raised when a layout engine is given unusable input.

    Running out of time or iterations is not an error; engines return
    their current positions instead.
    """

    pass
