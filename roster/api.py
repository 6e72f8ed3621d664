"""
FastAPI app entry point aggregating the routers under roster/routes.
Run as `uvicorn roster.api:app`.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from . import __version__
from .logs import ensure_log_schema
from .services.student_svc import ensure_students_schema
from .routes import base as base_routes
from .routes import students as students_routes


@asynccontextmanager
async def lifespan(_: FastAPI):
    ensure_log_schema()
    ensure_students_schema()
    yield


app = FastAPI(title="student-roster-api", version=__version__, lifespan=lifespan)

app.include_router(base_routes.router)
app.include_router(students_routes.router)
