"""FastAPI application factory and configuration."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import register_routes
from .core import ALLOWED_CORS_ORIGINS, DB_RESET, create_tables, engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_tables(engine, reset=DB_RESET)
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="Segment League API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("segment_league.app:app", host="127.0.0.1", port=3000, reload=True)
