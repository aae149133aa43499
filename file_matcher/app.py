"""FastAPI application factory."""

import logging

from fastapi import FastAPI

from .api.router import api_router

# Configure logging for our modules
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(name)s: %(message)s")
logging.getLogger("file_matcher").setLevel(logging.DEBUG)


def create_app() -> FastAPI:
    app = FastAPI(
        title="file-matcher-pro",
        version="0.1.0",
        description="Match files against product codes and download them as a ZIP",
    )
    app.include_router(api_router, prefix="/api")
    return app
