"""Exceptions raised before a build starts."""


class InvalidConfigurationError(ValueError):
    """A frame, pin layout or build parameter is out of range.

    Raised synchronously, before any pins are generated or any darkness is
    removed, so no partial state ever escapes.
    """
