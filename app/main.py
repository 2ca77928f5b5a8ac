import os
from contextlib import asynccontextmanager
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.database.session import init_db_schema
from config.logger import get_logger, setup_logging
from playlist.adapter.input.web.playlist_router import playlist_router
from timeline.adapter.input.web.timeline_router import timeline_router

load_dotenv()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Configures logging and creates missing tables before the first request.
    """
    setup_logging()
    init_db_schema()
    logger.info("Playlist timeline server started")
    yield
    logger.info("Playlist timeline server stopped")


app = FastAPI(title="Playlist Rank Timeline", version="0.1.0", lifespan=lifespan)

origins_env = os.getenv("CORS_ORIGINS")
origins = [origin for origin in origins_env.split(",") if origin] if origins_env else ["http://localhost:3000"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(playlist_router, prefix="/playlists")
app.include_router(timeline_router, prefix="/playlists")


@app.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    host = os.getenv("APP_HOST", "0.0.0.0")
    port = int(os.getenv("APP_PORT", "8000"))
    uvicorn.run(app, host=host, port=port)
