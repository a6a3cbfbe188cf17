"""Utility helpers for HTTP and filesystem-safe naming."""

from .http_client import AuthenticationError, HttpClient, RemoteAPIError
from .file_utils import build_base_directory, build_destination, sanitize_filename

__all__ = [
    "HttpClient",
    "AuthenticationError",
    "RemoteAPIError",
    "sanitize_filename",
    "build_base_directory",
    "build_destination",
]
