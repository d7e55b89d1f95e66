"""FastAPI application bridging remote JSON resources to XML."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import Response

from .fetcher import FetchError
from .logging import bind_request, clear_request, get_logger
from .responder import error_response, fetch_error_response, internal_error_response, xml_response
from .runtime import Runtime, build_runtime
from .transcoder import encode_value

logger = get_logger(__name__)


def get_runtime(request: Request) -> Runtime:
    runtime: Runtime = request.app.state.runtime
    return runtime


def create_app(runtime_factory: Callable[[], Runtime] = build_runtime) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        runtime = runtime_factory()
        app.state.runtime = runtime
        try:
            yield
        finally:
            runtime.close()

    api = FastAPI(
        title="JSON to XML Pipe",
        description="Fetch a remote JSON resource and serve it as XML",
        version="1.0.0",
        lifespan=lifespan,
    )

    @api.get("/health")
    def health(runtime: Runtime = Depends(get_runtime)) -> dict:
        return {
            "status": "healthy",
            "service": "jxpipe",
            "http_timeout": runtime.config.http_timeout,
            "http_retries": runtime.config.http_retries,
        }

    @api.get("/")
    def bridge(
        url: Optional[str] = Query(None, description="Absolute URL of the JSON resource"),
        runtime: Runtime = Depends(get_runtime),
    ) -> Response:
        """Fetch ``url`` and return its JSON body re-serialized as XML."""
        if not url:
            return error_response(400, "Missing 'url' parameter")

        bind_request(target_url=url)
        try:
            value = runtime.fetcher.fetch(url)
            fragment = encode_value(value)
            response = xml_response(fragment)
            logger.info("bridge_completed", size=len(fragment))
        except FetchError as exc:
            logger.warning("bridge_rejected", status=exc.status_code, error=exc.message)
            return fetch_error_response(exc)
        except Exception as exc:
            logger.exception("bridge_failed", error=str(exc))
            return internal_error_response(exc)
        finally:
            clear_request()

        return response

    return api


app = create_app()
