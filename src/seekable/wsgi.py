"""werkzeug integration: serve a content source with Range support."""

from __future__ import annotations
import logging

from werkzeug import Request, Response
from werkzeug.exceptions import HTTPException, MethodNotAllowed
from werkzeug.serving import run_simple

from .core.assembler import ConfigLike, respond
from .core.model import SeekableError, SeekableResponse

logger = logging.getLogger(__name__)


def to_werkzeug(res: SeekableResponse) -> Response:
    """Convert a response descriptor into a werkzeug Response."""
    response = Response(res.body, status=res.status)
    # werkzeug adds its own Content-Type and recomputes Content-Length
    response.headers.pop("Content-Type", None)
    for name, value in res.headers.items():
        response.headers[name] = value
    return response


def send_seekable(request: Request, content, config: ConfigLike = None) -> Response:
    """Answer `request` with `content`, honouring its Range header.

    UnsupportedRangeError and ContentAccessError are left to the caller.
    """
    head = request.method == "HEAD"
    res = respond(content, request.headers.get("Range"), config, head=head)
    return to_werkzeug(res)


class SeekableApp:
    """WSGI application serving a single content source for GET and HEAD."""

    def __init__(self, content, config: ConfigLike = None, *, error_status: int = 500):
        self.content = content
        self.config = config
        self.error_status = error_status

    def handle_error(self, request: Request, exc: SeekableError) -> Response:
        logger.exception("Failed to serve %s %s", request.method, request.path)
        return Response(status=self.error_status)

    def dispatch(self, request: Request) -> Response:
        if request.method not in ("GET", "HEAD"):
            raise MethodNotAllowed(valid_methods=["GET", "HEAD"])
        try:
            return send_seekable(request, self.content, self.config)
        except SeekableError as e:
            return self.handle_error(request, e)

    def __call__(self, environ, start_response):
        request = Request(environ)
        try:
            response = self.dispatch(request)
        except HTTPException as e:
            response = e.get_response(environ)
        return response(environ, start_response)


def make_app(content, config: ConfigLike = None, *, error_status: int = 500) -> SeekableApp:
    """Create a WSGI app for `content`."""
    return SeekableApp(content, config, error_status=error_status)


def run(content, host: str = "127.0.0.1", port: int = 8000, config: ConfigLike = None,
        error_status: int = 500) -> None:
    """Serve `content` with werkzeug's development server."""
    run_simple(host, port, make_app(content, config, error_status=error_status), threaded=True)
