import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from spacetraveling.db.prismic import create_prismic_client
from spacetraveling.routers import posts, preview
from spacetraveling.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Spacetraveling API", description="Blog content served from Prismic"
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.prismic = create_prismic_client()
    logger.info(f"Prismic client ready for {settings.PRISMIC_API_ENDPOINT}")

    try:
        yield
    finally:
        await app.state.prismic.aclose()
        logger.info("Prismic client closed")


app.router.lifespan_context = lifespan

app.include_router(posts.router)
app.include_router(preview.router)


@app.get("/")
async def root():
    return {"message": "Spacetraveling API is running"}
