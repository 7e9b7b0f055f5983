"""slimlibs — find smaller alternatives to large JavaScript libraries."""

__version__ = "0.1.0"
