"""
Exceptions raised by the receipt engine.
"""


class InputValidationError(ValueError):
    """Caller supplied input the engine cannot work on (blank text, empty batch, bad rating)."""


class CatalogLoadError(RuntimeError):
    """Merchant catalog could not be built. The engine cannot serve results without it."""
