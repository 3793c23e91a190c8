"""reclaim - find and delete build artifact directories concurrently."""

__version__ = "0.1.0"
