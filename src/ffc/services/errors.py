"""Service-layer exceptions."""


class SaveLoadError(Exception):
    """Raised when a save document cannot be read or applied."""


class SpellError(Exception):
    """Raised when a spell selection breaks the book's rules."""
