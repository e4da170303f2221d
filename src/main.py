"""
Main entry point for the Routing Relay FastAPI application.
Exposes a single relay route that forwards client actions to OpenRouteService
while keeping the API keys on the server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.concurrency import run_in_threadpool

from common.logging import get_logger, configure_logging
from config.config import Cors_Headers
from config.settings import (
    APP_ENV,
    LOG_LEVEL,
    ORS_API_KEYS,
    ORS_BASE_URL,
    ORS_DIRECTIONS_PROFILE,
    ORS_GEOCODE_COUNTRY,
    ORS_GEOCODE_SIZE,
    ORS_GEOCODE_LANG,
    UPSTREAM_TIMEOUT_SECONDS,
    EXPOSE_DEBUG_MESSAGE,
)
from relay.call_spec import OrsOptions
from relay.dispatcher import Dispatcher, handle_request
from relay.upstream import UpstreamCaller

# Configure logging
configure_logging(env=APP_ENV, level=LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle (startup/shutdown).
    Builds the dispatcher once; tests may install their own on app.state beforehand.
    """
    logger.info("Application startup initiated")

    owns_caller = not hasattr(app.state, "dispatcher")
    if owns_caller:
        options = OrsOptions(
            base_url=ORS_BASE_URL,
            directions_profile=ORS_DIRECTIONS_PROFILE,
            geocode_country=ORS_GEOCODE_COUNTRY,
            geocode_size=ORS_GEOCODE_SIZE,
            geocode_lang=ORS_GEOCODE_LANG,
        )
        caller = UpstreamCaller(timeout=UPSTREAM_TIMEOUT_SECONDS)
        app.state.dispatcher = Dispatcher(ORS_API_KEYS, caller, options)

    if not app.state.dispatcher.api_keys:
        logger.warning("No OpenRouteService API keys configured")
    logger.info(
        "Application startup complete",
        extra={"keys_configured": len(app.state.dispatcher.api_keys)},
    )

    yield

    logger.info("Application shutdown initiated")
    if owns_caller:
        app.state.dispatcher.caller.close()
        del app.state.dispatcher
    logger.info("Application shutdown complete")


app = FastAPI(
    title="Routing Relay",
    description="OpenRouteService relay with server-side API key rotation",
    version="1.0.0",
    lifespan=lifespan,
)


@app.middleware("http")
async def cors_headers(request: Request, call_next):
    response = await call_next(request)
    for name, value in Cors_Headers.HEADERS.items():
        response.headers[name] = value
    return response


@app.options("/")
async def preflight():
    """
    Answer the CORS preflight without touching the upstream API.
    """
    return Response(status_code=200)


@app.api_route("/", methods=["GET", "POST"])
async def relay(request: Request):
    """
    Relay a client action to OpenRouteService, rotating API keys on failure.
    """
    raw_body = await request.body()
    status_code, body = await run_in_threadpool(
        handle_request, request.app.state.dispatcher, raw_body, EXPOSE_DEBUG_MESSAGE
    )
    return Response(content=body, status_code=status_code, media_type="application/json")


@app.get("/health")
def health(request: Request):
    return {"status": "ok", "keys_configured": len(request.app.state.dispatcher.api_keys)}
