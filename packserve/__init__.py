"""Shared code for the pack file functions.

Resolves `/<slug>/<relative path>` requests to a single regular file inside
PackRoot/<slug> and builds the HTTP-shaped response for it.
"""
from packserve.config import PackPolicy
from packserve.errors import PackRequestError
from packserve.pipeline import PackFileService, PackResponse

__all__ = ["PackFileService", "PackPolicy", "PackRequestError", "PackResponse"]
