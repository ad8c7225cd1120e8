import errno
import logging
import os
import stat
from typing import NamedTuple

from packserve.config import ALLOW_PACK_AND_MODS, PackPolicy
from packserve.errors import NotFound, PathEscape, SlugNotFound
from packserve.normalizer import PackRequest

PACK_MANIFESTS = ("pack.toml", "index.toml")
MODS_DIR = "mods/"

# Client-controlled names can trip these; they mean "no such file", not a server fault.
_MISSING_ERRNOS = {errno.ENOENT, errno.ENOTDIR, errno.ENAMETOOLONG, errno.ELOOP}


class ResolvedFile(NamedTuple):
    path: str
    relative_path: str


def is_within(base: str, candidate: str) -> bool:
    return candidate.startswith(base.rstrip(os.sep) + os.sep)


def contained_path(base: str, relative_path: str) -> str:
    """Join and collapse `relative_path` under `base`, refusing anything that escapes it.

    The collapse is purely algebraic (os.path.normpath); it runs even though the
    normalizer already refused literal `..` segments.
    """
    candidate = os.path.normpath(os.path.join(base, relative_path))
    if not is_within(base, candidate):
        raise PathEscape(f"{relative_path!r} escapes {os.path.basename(base)!r}")
    return candidate


def is_allowed(relative_path: str, allow_list: str) -> bool:
    if allow_list != ALLOW_PACK_AND_MODS:
        return True
    if relative_path in PACK_MANIFESTS:
        return True
    rest = relative_path[len(MODS_DIR):]
    return relative_path.startswith(MODS_DIR) and bool(rest) and not rest.endswith("/")


def find_slug_dir(pack_root: str, slug: str) -> str:
    """Return the one directory under `pack_root` whose lower-cased name is `slug`.

    Zero or several matches (e.g. `Foo` and `FOO`) both fail; ambiguity is never
    resolved by picking one.
    """
    with os.scandir(pack_root) as entries:
        matches = [e.name for e in entries if e.name.lower() == slug and e.is_dir()]
    if len(matches) != 1:
        if matches:
            logging.warning(f"Ambiguous pack slug {slug!r}: {len(matches)} directories match")
        raise SlugNotFound(f"{len(matches)} directories match {slug!r}")
    return os.path.join(pack_root, matches[0])


class SandboxResolver:
    """Maps a validated (slug, relative path) to a regular file inside PackRoot/slug."""

    def __init__(self, pack_root: str, policy: PackPolicy = PackPolicy()):
        self.pack_root = os.path.abspath(pack_root)
        self.policy = policy

    def slug_dir(self, slug: str) -> str:
        base = os.path.join(self.pack_root, slug)
        if os.path.isdir(base):
            return base
        if not self.policy.case_insensitive_slug:
            raise SlugNotFound(f"no directory for {slug!r}")
        return find_slug_dir(self.pack_root, slug)

    def resolve(self, request: PackRequest) -> ResolvedFile:
        # Checks that need no filesystem access come first.
        contained_path(os.path.join(self.pack_root, request.slug), request.relative_path)
        if not is_allowed(request.relative_path, self.policy.allow_list):
            raise NotFound(f"{request.relative_path!r} is outside the {self.policy.allow_list} allow-list")

        base = self.slug_dir(request.slug)
        candidate = contained_path(base, request.relative_path)

        try:
            st = os.stat(candidate)
        except OSError as e:
            if e.errno not in _MISSING_ERRNOS:
                raise
            raise NotFound(f"{request.relative_path!r} does not exist in {request.slug!r}")
        if not stat.S_ISREG(st.st_mode):
            raise NotFound(f"{request.relative_path!r} in {request.slug!r} is not a regular file")

        # Symlinks inside the pack must not lead out of it.
        if not is_within(os.path.realpath(base), os.path.realpath(candidate)):
            raise PathEscape(f"{request.relative_path!r} links outside {request.slug!r}")

        return ResolvedFile(candidate, request.relative_path)
