from fastapi import FastAPI
from fastapi.logger import logger

from . import api, settings


def create_app() -> FastAPI:
    app = FastAPI(
        title="VariantIO",
        version="0.1.0",
    )
    app.include_router(api.router, prefix="/api")
    api.register_handlers(app)
    logger.info(
        f"serving {settings.settings.origin_bucket} "
        f"with derived variants in {settings.settings.derived_bucket}"
    )
    return app
