## routes.py
from __future__ import annotations

from typing import Iterator

from flask import Blueprint, Response, current_app, render_template, request, stream_with_context

from duck_proxy.domain.errors import ProxyError
from duck_proxy.domain.models import OutgoingResponse
from duck_proxy.services.proxy_service import ProxyService

MISSING_URL_MESSAGE = "Missing url parameter"
UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"


class PassthroughResponse(Response):
    # Upstream may not declare a content type; don't invent one.
    default_mimetype = None


def _plain_text(body: str, status: int) -> Response:
    return Response(body, status=status, mimetype="text/plain")


def _relay(chunks: Iterator[bytes]) -> Iterator[bytes]:
    # Headers are already on the wire; all that's left is to log and stop.
    try:
        yield from chunks
    except ProxyError:
        current_app.logger.exception("Upstream stream aborted")


def _to_flask(outgoing: OutgoingResponse) -> Response:
    if outgoing.is_document:
        body = outgoing.body.encode(outgoing.charset, errors="xmlcharrefreplace")
        return Response(body, status=outgoing.status, headers=outgoing.headers)

    return PassthroughResponse(
        stream_with_context(_relay(outgoing.body)),
        status=outgoing.status,
        headers=outgoing.headers,
        direct_passthrough=True,
    )


def create_blueprint(proxy_service: ProxyService) -> Blueprint:
    bp = Blueprint("web", __name__)

    @bp.get("/proxy")
    def proxy():
        target = proxy_service.resolve_target(request.args.get("url"))
        if target is None:
            return _plain_text(MISSING_URL_MESSAGE, 400)

        current_app.logger.info("[Proxy] -> %s", target)

        try:
            outgoing = proxy_service.forward(target)
        except Exception as e:
            current_app.logger.exception("Proxy request failed: %s", target)
            return _plain_text(f"Proxy error: {str(e) or UNKNOWN_ERROR_MESSAGE}", 500)

        return _to_flask(outgoing)

    # Front-end page; every other GET falls back to it.
    @bp.get("/", defaults={"path": ""})
    @bp.get("/<path:path>")
    def index(path: str):
        return render_template("index.html")

    return bp
