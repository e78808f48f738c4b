from .base import LitforgeError


class InjectionError(LitforgeError):
    """An injection target is missing or does not contain its placeholder."""
