"""
FastAPI application for employee time tracking.
"""

import logging

from fastapi import FastAPI

from timeclock.fastapi.core.init_settings import global_settings
from timeclock.fastapi.core.exceptions import setup_exception_handlers
from timeclock.fastapi.core.lifespan import lifespan
from timeclock.fastapi.core.middleware import setup_cors
from timeclock.fastapi.core.routers import setup_routers

logging.basicConfig(
    level=global_settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)


def create_app() -> FastAPI:
    app = FastAPI(
        title=global_settings.APP_NAME,
        version=global_settings.APP_VERSION,
        lifespan=lifespan
    )

    setup_cors(app)
    setup_exception_handlers(app)
    setup_routers(app)

    @app.get("/", tags=["main"])
    async def root():
        return {"message": f"{global_settings.APP_NAME} API", "version": global_settings.APP_VERSION}

    return app


app = create_app()
