from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from settings import get_settings
from core.registry import ElectionRegistry
from api import elections, votes, events

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Registry 只在這裡建立一次，所有 route 透過 dependency 取得
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    app.state.registry = ElectionRegistry.from_settings(settings)
    logger.info("Election registry ready")
    yield
    # Shutdown: 所有選舉只存在記憶體，重啟即消失
    logger.info(f"Shutting down with {len(app.state.registry)} elections in memory")


app = FastAPI(
    title="Consent Election API",
    description="Backend API for two-round consent elections with live updates",
    version="1.0.0",
    lifespan=lifespan
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure this properly in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(elections.router)
app.include_router(votes.router)
app.include_router(events.router)


@app.get("/")
def root():
    return {"message": "Consent Election API", "status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
