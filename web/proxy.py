"""Pass-through proxy forwarding /api/<path> to the backend."""

import logging
from typing import Optional

import requests
from flask import Blueprint, Response, request, stream_with_context

logger = logging.getLogger(__name__)

PROXY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]
CHUNK_SIZE = 8192

# Hop-by-hop headers apply to a single connection. WSGI applications may not
# emit them (PEP 3333) and requests sets its own framing upstream.
HOP_BY_HOP_HEADERS = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailers",
    "transfer-encoding",
    "upgrade",
}


def build_target_url(proxy_target: str, path: str, query_string: bytes) -> str:
    """Join the upstream base, the wildcard path and the original query string."""
    url = f"{proxy_target}/{path}"
    if query_string:
        url += "?" + query_string.decode("latin-1")
    return url


def create_proxy_blueprint(
    proxy_target: str, session: Optional[requests.Session] = None
) -> Blueprint:
    """Build the proxy blueprint for a fixed upstream base."""
    bp = Blueprint("proxy", __name__)
    http = session or requests.Session()

    @bp.route("/api/<path:path>", methods=PROXY_METHODS)
    def forward(path: str):
        """Forward the request upstream and stream the answer back unchanged."""
        target_url = build_target_url(proxy_target, path, request.query_string)

        headers = {
            k: v
            for k, v in request.headers.items()
            if k.lower() != "host" and k.lower() not in HOP_BY_HOP_HEADERS
        }
        body = None if request.method in ("GET", "HEAD") else request.get_data()

        logger.debug("Proxying %s %s", request.method, target_url)
        upstream = http.request(
            request.method,
            target_url,
            headers=headers,
            data=body,
            stream=True,
            allow_redirects=False,
        )

        response_headers = [
            (k, v)
            for k, v in upstream.raw.headers.items()
            if k.lower() not in HOP_BY_HOP_HEADERS
        ]
        return Response(
            stream_with_context(upstream.raw.stream(CHUNK_SIZE, decode_content=False)),
            status=upstream.status_code,
            headers=response_headers,
        )

    return bp
