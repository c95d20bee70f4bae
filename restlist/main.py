from typing import Iterable, Tuple

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from restlist.api.router import build_list_router
from restlist.core.config import settings
from restlist.core.http_logging import install_request_logging
from restlist.services.resource import Resource
from restlist.services.shaper import CONTENT_RANGE_HEADER


def create_app(resources: Iterable[Tuple[str, Resource]] = ()) -> FastAPI:
    app = FastAPI(title=settings.APP_NAME, version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
        expose_headers=[CONTENT_RANGE_HEADER],
    )
    install_request_logging(app)

    for path, resource in resources:
        app.include_router(build_list_router(resource, path))

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
