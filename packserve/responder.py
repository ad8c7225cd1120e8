import logging
import os
from typing import NamedTuple

from packserve.config import CACHE_CONTROL
from packserve.resolver import ResolvedFile

DEFAULT_MIME_TYPE = "application/octet-stream"

# Text types are sent decoded so browsers show manifests inline.
TEXT_EXTENSIONS = {".toml", ".txt", ".sha256", ".properties"}

MIME_TYPES = {
    ".toml": "text/plain",
    ".txt": "text/plain",
    ".sha256": "text/plain",
    ".properties": "text/plain",
    ".json": "application/json",
    ".zip": "application/zip",
    ".jar": "application/java-archive",
}


class ContentDescriptor(NamedTuple):
    mime_type: str
    is_text: bool

    @property
    def content_type(self) -> str:
        if self.is_text:
            return f"{self.mime_type}; charset=utf-8"
        return self.mime_type


class PackResponse(NamedTuple):
    status: int
    headers: dict
    body: object  # str for text files and error messages, bytes otherwise


def describe_content(filename: str) -> ContentDescriptor:
    ext = os.path.splitext(filename)[1].lower()
    return ContentDescriptor(MIME_TYPES.get(ext, DEFAULT_MIME_TYPE), ext in TEXT_EXTENSIONS)


def read_file(resolved: ResolvedFile) -> bytes:
    with open(resolved.path, "rb") as f:
        return f.read()


def file_response(resolved: ResolvedFile) -> PackResponse:
    """Read the resolved file and wrap it with its content type and cache headers.

    I/O errors are not caught here; the pipeline turns them into a 500.
    """
    descriptor = describe_content(resolved.path)
    content = read_file(resolved)
    body = content
    if descriptor.is_text:
        try:
            body = content.decode("utf-8")
        except UnicodeDecodeError:
            logging.warning(f"{resolved.relative_path} is not valid UTF-8, sending raw bytes")

    headers = {"Content-Type": descriptor.content_type, "Cache-Control": CACHE_CONTROL}
    return PackResponse(200, headers, body)


def error_response(status: int, message: str) -> PackResponse:
    return PackResponse(status, {"Content-Type": "text/plain; charset=utf-8"}, message)
