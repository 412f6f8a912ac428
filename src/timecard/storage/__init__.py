"""Backends holding one JSON-serializable collection per key."""

from .backend import CollectionBackend
from .json_file_backend import JsonFileBackend

__all__ = ["CollectionBackend", "JsonFileBackend"]
