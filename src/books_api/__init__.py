"""Books API: a REST facade over the ``books`` table."""

__version__ = "0.1.0"
