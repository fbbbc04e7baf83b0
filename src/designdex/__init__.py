"""designdex: Design-pattern knowledge base for UI idioms."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("designdex")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
