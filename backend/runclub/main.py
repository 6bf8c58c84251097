from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from runclub.api.dashboard import router as dashboard_router
from runclub.core.config import settings
from runclub.core.logging import setup_logging
from runclub.dashboard import Dashboard
from runclub.db import Base, engine
from runclub.models.stored_source import StoredSource  # noqa: F401  (import ensures table is registered)
from runclub.store import SourceStore


setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Both sources must be in before any view is served
    app.state.dashboard.reload()
    yield


app = FastAPI(lifespan=lifespan)

# Allow CORS for local frontend
origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create DB tables on startup
Base.metadata.create_all(bind=engine)

app.state.dashboard = Dashboard.from_settings(settings, store=SourceStore())

app.include_router(dashboard_router)


@app.get("/")
def root():
    return {"message": "Run club dashboard is running"}
