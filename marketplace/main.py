import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from marketplace.api.routes import auth
from marketplace.api.routes import bookings as bookings_router
from marketplace.api.routes import categories as categories_router
from marketplace.api.routes import review as review_router
from marketplace.api.routes import services as services_router
from marketplace.api.routes import users as users_router
from marketplace.api.routes import vendor as vendor_router
from marketplace.core.config import Settings, settings as default_settings
from marketplace.core.errors import Internal, InvalidInput, MarketplaceError
from marketplace.core.logging_config import setup_logging
from marketplace.db.base import init_db, make_engine, make_session_factory

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None)

    engine = make_engine(settings.database_url, echo=settings.debug)
    session_factory = make_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(engine, session_factory)
        logger.info("%s %s started", settings.project_name, settings.api_version)
        yield
        engine.dispose()

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(MarketplaceError)
    async def marketplace_error_handler(request: Request, exc: MarketplaceError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=InvalidInput.status_code,
            content={"error": InvalidInput.default_message, "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=Internal.status_code, content={"error": Internal.default_message})

    @app.get("/health")
    def health():
        return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}

    app.include_router(auth.router, prefix="/api")
    app.include_router(users_router.router, prefix="/api")
    app.include_router(categories_router.router, prefix="/api")
    app.include_router(services_router.router, prefix="/api")
    app.include_router(bookings_router.router, prefix="/api")
    app.include_router(review_router.router, prefix="/api")
    app.include_router(vendor_router.router, prefix="/api")

    if os.path.isdir(settings.upload_dir):
        app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("marketplace.main:app", host=default_settings.host, port=default_settings.port)
