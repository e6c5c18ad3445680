"""gqlfetch: one-shot GraphQL request runner."""

__version__ = "0.1.0"
__author__ = "gqlfetch Team"

__all__ = ["__version__", "__author__"]
