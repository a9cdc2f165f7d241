import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from country_console.core.config import settings
from country_console.routers import console
from country_console.utils.country_api_service import CountryAPI
from country_console.utils.country_service import CountryListClient

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Builds the country client and loads the initial list on startup,
    closes the backend connection on shutdown.
    """
    async with CountryAPI() as api:
        app.state.country_client = CountryListClient(api)
        await app.state.country_client.refresh()
        logger.info(f"Country console talking to {api.base_url}")
        yield

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Console for browsing and editing the country list of a remote REST backend.",
    version=settings.VERSION,
    lifespan=lifespan,
)

app.include_router(console.router, tags=["Country Console"])
