"""FastAPI application exposing the robots API."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from starlette.exceptions import HTTPException as StarletteHTTPException

from robots_intellect.enterprise.config.settings import get_settings
from robots_intellect.observability import configure_logging, configure_tracer
from robots_intellect.observability.logging import bind_global_context, bind_request_context
from robots_intellect.observability.metrics import REQUEST_COUNTER
from robots_intellect.persistence import close_client
from robots_intellect.server.api.routers import (
	health_router,
	observability_router,
	robots_router,
)
from robots_intellect.services import ServiceError
from robots_intellect.services.errors import BAD_REQUEST_BODY

settings = get_settings()
configure_logging(settings.logging)
configure_tracer("robots-intellect-api", settings.telemetry, settings.environment)
bind_global_context(service="robots-intellect-api", environment=settings.environment)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
	yield
	await close_client()


app = FastAPI(title=settings.api.title, version="1.0.0", lifespan=lifespan)

app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.api.cors_origins,
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)

FastAPIInstrumentor.instrument_app(app)


@app.middleware("http")
async def count_requests(request: Request, call_next):
	bind_request_context(request.method, request.url.path)
	if settings.telemetry.metrics_enabled:
		REQUEST_COUNTER.inc()
	response = await call_next(request)
	return response


# Error bodies are bare JSON strings rather than {"detail": ...} objects.
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
	return JSONResponse(exc.detail, status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(ServiceError)
async def service_error_handler(_request: Request, exc: ServiceError) -> JSONResponse:
	return JSONResponse(exc.message, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_request: Request, _exc: RequestValidationError) -> JSONResponse:
	return JSONResponse(BAD_REQUEST_BODY, status_code=400)


app.include_router(health_router, prefix=settings.api.prefix)
app.include_router(robots_router, prefix=settings.api.prefix)
app.include_router(observability_router, prefix=settings.api.prefix)


@app.get("/")
async def root() -> dict[str, str]:
	return {"message": settings.api.title}
