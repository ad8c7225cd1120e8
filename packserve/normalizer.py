import re
from typing import NamedTuple
from urllib.parse import unquote

from packserve.errors import InvalidPath, InvalidSlug, MissingSlugOrFile, NoIndex

SLUG_RE = re.compile(r"^[a-z0-9_-]+$")


class PackRequest(NamedTuple):
    slug: str
    relative_path: str


def strip_prefix(path: str, prefix: str) -> str:
    """Remove the routing prefix if `path` starts with it on a segment boundary."""
    prefix = prefix.rstrip("/")
    if not prefix:
        return path
    if path == prefix or path.startswith(prefix + "/"):
        return path[len(prefix):]
    return path


def validate_slug(segment: str) -> str:
    slug = segment.lower()
    if not SLUG_RE.fullmatch(slug):
        raise InvalidSlug(f"slug {segment!r} does not match {SLUG_RE.pattern}")
    return slug


def has_parent_segment(path: str) -> bool:
    return ".." in path.replace("\\", "/").split("/")


def normalize_request(raw_path: str, prefix: str = "") -> PackRequest:
    """Split a raw request path into a validated (slug, relative path) pair.

    Pure string work: nothing here touches the filesystem. The relative path is
    percent-decoded as a whole before the `..` check so encoded traversal
    (`%2e%2e`, `..%2f`) is caught the same way as the literal form.
    """
    segments = [s for s in strip_prefix(raw_path or "", prefix).split("/") if s]
    if not segments:
        raise MissingSlugOrFile("empty path")

    slug = validate_slug(segments[0])
    if len(segments) == 1:
        # Directory listing is never supported, so a bare slug has nothing to serve.
        raise NoIndex(f"no file requested for {slug!r}")

    try:
        relative_path = unquote("/".join(segments[1:]), errors="strict")
    except UnicodeDecodeError:
        raise InvalidPath("percent-encoding is not valid UTF-8")
    if not relative_path:
        raise InvalidPath("empty relative path")
    if "\x00" in relative_path:
        raise InvalidPath("NUL in relative path")
    if has_parent_segment(relative_path):
        raise InvalidPath(f"parent segment in {relative_path!r}")

    return PackRequest(slug, relative_path)
