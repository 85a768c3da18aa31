"""Persistence-backed business operations returning explicit results."""

from .pagination import Page
from .results import ErrorKind, Result

__all__ = ["ErrorKind", "Page", "Result"]
