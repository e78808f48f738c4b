from .base import LitforgeError


class ExtractError(LitforgeError):
    """External content referenced by an import/reference block cannot be read."""


class TagNotFoundError(ExtractError):
    """A ``lit-tag:`` region is missing its opening or closing marker.

    ``partial`` holds whatever was captured before the marker went missing.
    """

    def __init__(self, message: str, *, tag: str, path: str, partial: str = ""):
        super().__init__(message)
        self.tag = tag
        self.path = path
        self.partial = partial
