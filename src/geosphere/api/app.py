# src/geosphere/api/app.py
"""
FastAPI application wiring.

This file creates the `FastAPI` instance and applies CORS for browser front-ends.
Request handling lives in `geosphere.api.routes` and `geosphere.dispatcher`.
"""

from __future__ import annotations

import os

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from geosphere import __version__
from geosphere.config.settings import get_settings
from geosphere.core.logging import configure_logging

from .routes import router

configure_logging()

app = FastAPI(title="geosphere API", version=__version__)

# Origins come from settings (`api.cors_origins`) plus GEOSPHERE_CORS_ORIGINS="http://a,http://b".
cors_origins = list(get_settings().api.cors_origins)
cors_origins += [s.strip() for s in os.getenv("GEOSPHERE_CORS_ORIGINS", "").split(",") if s.strip()]
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

app.include_router(router)
