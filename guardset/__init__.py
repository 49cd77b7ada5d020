"""Guardset - guard registry and settings codec for candy guard programs."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("guardset")
except PackageNotFoundError:
    __version__ = "(local)"
