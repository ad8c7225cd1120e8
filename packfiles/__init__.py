import azure.functions as func
import logging
from urllib.parse import urlsplit

from packserve.config import PACK_ROOT, POLICY, ROUTE_PREFIX
from packserve.pipeline import INTERNAL_ERROR, PackFileService

service = PackFileService(PACK_ROOT, POLICY, ROUTE_PREFIX)


def to_http_response(response) -> func.HttpResponse:
    content_type = response.headers["Content-Type"]
    mimetype, _, charset = content_type.partition("; charset=")
    return func.HttpResponse(
        response.body,
        status_code=response.status,
        headers=response.headers,
        mimetype=mimetype,
        charset=charset or None,
    )


def main(req: func.HttpRequest) -> func.HttpResponse:
    # The raw path keeps its percent-encoding; the normalizer decodes it once.
    raw_path = urlsplit(req.url).path
    try:
        return to_http_response(service.handle(raw_path))
    except Exception:
        logging.exception("packfiles failed unexpectedly.")
        return func.HttpResponse(INTERNAL_ERROR, status_code=500)
