"""Shared file I/O helpers."""

from .files import file_sha256, path_exists, relative_posix
from .json_io import load_json_file, write_json_atomic, write_text_atomic

__all__ = [
    "file_sha256",
    "load_json_file",
    "path_exists",
    "relative_posix",
    "write_json_atomic",
    "write_text_atomic",
]
