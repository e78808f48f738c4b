class LitforgeError(Exception):
    """Base class for every error raised by litforge."""
