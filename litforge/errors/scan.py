from .base import LitforgeError


class ScanError(LitforgeError):
    """The input tree cannot be scanned (e.g. the root directory is missing)."""
