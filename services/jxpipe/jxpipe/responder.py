"""HTTP responses wrapping transcoded XML and bridge errors."""

from __future__ import annotations

from fastapi.responses import Response

from .fetcher import FetchError, InvalidJsonError

XML_PROLOG = '<?xml version="1.0" encoding="UTF-8"?>'
ROOT_TAG = "root"
XML_MEDIA_TYPE = "application/xml"


def render_document(fragment: str) -> str:
    """Wrap a fragment in the XML prolog and the fixed root element."""
    return f"{XML_PROLOG}<{ROOT_TAG}>{fragment}</{ROOT_TAG}>"


def xml_response(fragment: str) -> Response:
    return Response(
        content=render_document(fragment).encode("utf-8", errors="replace"),
        media_type=XML_MEDIA_TYPE,
        headers={"X-Content-Type-Options": "nosniff"},
    )


def error_response(status_code: int, message: str) -> Response:
    return Response(content=message, status_code=status_code, media_type="text/plain")


def fetch_error_response(exc: FetchError) -> Response:
    if isinstance(exc, InvalidJsonError):
        return internal_error_response(exc)
    return error_response(exc.status_code, exc.message)


def internal_error_response(exc: BaseException) -> Response:
    message = getattr(exc, "message", None) or str(exc) or type(exc).__name__
    return error_response(500, f"Worker Error: {message}")
