"""Application lifespan: release the Strapi connection pool on shutdown."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from storefront.utils.strapi import close_strapi_client

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_strapi_client()
    logger.info("storefront_shutdown", app=app.title)
