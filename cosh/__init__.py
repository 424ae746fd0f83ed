"""cosh: pick a compose service and open a shell inside it."""

__version__ = "0.1.0"
