import os
from dataclasses import dataclass

# --- Configuration ---
# Read once at startup from the Function App settings.
APP_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

ALLOW_NONE = "none"
ALLOW_PACK_AND_MODS = "pack-and-mods"
ALLOW_LISTS = (ALLOW_NONE, ALLOW_PACK_AND_MODS)

CACHE_CONTROL = "public, max-age=300, s-maxage=300"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class PackPolicy:
    """Which relative paths may be served and how slugs are matched on disk."""

    allow_list: str = ALLOW_NONE
    case_insensitive_slug: bool = True

    def __post_init__(self):
        if self.allow_list not in ALLOW_LISTS:
            raise ValueError(f"Unknown allow-list policy: {self.allow_list!r}")


def parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"Invalid boolean setting: {value!r}")


def pack_root_from_env(environ=os.environ) -> str:
    return os.path.abspath(environ.get("PACK_ROOT") or os.path.join(APP_ROOT, "packs"))


def route_prefix_from_env(environ=os.environ) -> str:
    return environ.get("PACKSERVE_ROUTE_PREFIX", "/api")


def policy_from_env(environ=os.environ) -> PackPolicy:
    allow_list = environ.get("PACKSERVE_ALLOW_LIST", ALLOW_NONE).strip().lower()
    case_insensitive = parse_bool(environ.get("PACKSERVE_CASE_INSENSITIVE_SLUG", "true"))
    return PackPolicy(allow_list=allow_list, case_insensitive_slug=case_insensitive)


PACK_ROOT = pack_root_from_env()
ROUTE_PREFIX = route_prefix_from_env()
POLICY = policy_from_env()
