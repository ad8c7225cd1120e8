import logging

from packserve.config import PackPolicy
from packserve.errors import InvalidPath, InvalidSlug, PackRequestError, PathEscape
from packserve.normalizer import normalize_request
from packserve.resolver import SandboxResolver
from packserve.responder import PackResponse, error_response, file_response

INTERNAL_ERROR = "An internal error occurred."

# Rejections worth an operator's attention; the rest are ordinary misses.
_SUSPICIOUS = (InvalidSlug, InvalidPath, PathEscape)


class PackFileService:
    """Normalizer -> Resolver -> Responder for one PackRoot.

    Stateless between calls: the same instance can serve concurrent requests.
    """

    def __init__(self, pack_root: str, policy: PackPolicy = PackPolicy(), route_prefix: str = ""):
        self.resolver = SandboxResolver(pack_root, policy)
        self.route_prefix = route_prefix

    def handle(self, raw_path: str) -> PackResponse:
        try:
            request = normalize_request(raw_path, self.route_prefix)
            resolved = self.resolver.resolve(request)
            response = file_response(resolved)
        except PackRequestError as e:
            if isinstance(e, _SUSPICIOUS):
                logging.warning(f"Rejected {raw_path!r} ({type(e).__name__}): {e.detail}")
            else:
                logging.info(f"Rejected {raw_path!r} ({type(e).__name__}): {e.detail}")
            return error_response(e.status_code, e.message)
        except OSError:
            logging.exception(f"Failed to serve {raw_path!r}")
            return error_response(500, INTERNAL_ERROR)

        logging.info(f"Served {request.slug}/{request.relative_path} as {response.headers['Content-Type']}")
        return response
