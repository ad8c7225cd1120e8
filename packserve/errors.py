"""Rejections raised by the pack pipeline.

Every class maps to a fixed status code and a short public message. The
message is what the caller sees; the reason is only ever logged.
"""


class PackRequestError(Exception):
    status_code = 500
    message = "An internal error occurred."

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.message)
        self.detail = detail


class MissingSlugOrFile(PackRequestError):
    status_code = 400
    message = "No file specified"


class InvalidSlug(PackRequestError):
    status_code = 400
    message = "Invalid pack slug"


class InvalidPath(PackRequestError):
    status_code = 400
    message = "Invalid file path"


# All 404s share one body so a prober cannot tell why a path was refused.
class NotFound(PackRequestError):
    status_code = 404
    message = "File not found"


class NoIndex(NotFound):
    pass


class SlugNotFound(NotFound):
    pass


class PathEscape(NotFound):
    pass
