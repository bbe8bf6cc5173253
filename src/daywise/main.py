from __future__ import annotations

import logging
from typing import Dict, Set

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy import inspect
from starlette.requests import Request

from daywise.core import database
from daywise.core.config import get_settings
from daywise.core.exceptions import ServiceUnavailable
from daywise.routers import ai, health, meals

logger = logging.getLogger(__name__)

API_ROUTERS = (
    (health.router, {"tags": ["health"]}),
    (ai.router, {}),
    (meals.router, {}),
)


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format=settings.log_format)

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url=settings.docs_url,
    )

    # The mobile client calls from arbitrary origins during development.
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.middleware("http")
    async def enforce_utf8_json(request: Request, call_next):
        response = await call_next(request)
        if response.headers.get("content-type", "").startswith("application/json"):
            response.headers["content-type"] = "application/json; charset=utf-8"
        return response

    @application.exception_handler(ServiceUnavailable)
    async def service_unavailable_handler(request: Request, exc: ServiceUnavailable):
        logger.warning("%s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.http_status, content=exc.to_dict())

    @application.get("/favicon.ico", include_in_schema=False)
    def favicon():
        return Response(status_code=204)

    # Probes hit /health without the API prefix.
    application.include_router(health.router, include_in_schema=False)
    for router, include_kwargs in API_ROUTERS:
        application.include_router(router, prefix=settings.api_prefix, **include_kwargs)

    @application.get("/", include_in_schema=False)
    def root():
        target = settings.docs_url or "/docs"
        return RedirectResponse(target)

    @application.get("/__routes", include_in_schema=False)
    def routes_snapshot():
        methods: Dict[str, Set[str]] = {}
        for route in application.router.routes:
            # Included routers may appear as entries without a path of their own.
            path = getattr(route, "path", None)
            if path:
                methods.setdefault(path, set()).update(getattr(route, "methods", None) or ())
        for path, operations in application.openapi().get("paths", {}).items():
            methods.setdefault(path, set()).update(op.upper() for op in operations)
        return sorted(f"{path}  [{','.join(sorted(verbs))}]" for path, verbs in methods.items())

    @application.get("/__dbcheck", include_in_schema=False)
    def dbcheck():
        return {"tables": inspect(database.engine).get_table_names()}

    @application.on_event("startup")
    def _startup():
        database.init_db()
        logger.info("%s %s started (Ollama at %s)", settings.app_name, settings.app_version, settings.ollama_url)

    return application


app = create_app()
