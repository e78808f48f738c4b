from .base import LitforgeError
from .extract import ExtractError, TagNotFoundError
from .inject import InjectionError
from .reference import CyclicReferenceError, UnresolvedReferenceError
from .scan import ScanError

__all__ = [
    "LitforgeError",
    "ScanError",
    "ExtractError",
    "TagNotFoundError",
    "InjectionError",
    "CyclicReferenceError",
    "UnresolvedReferenceError",
]
