"""Main FastAPI application for the step-by-step Sudoku solver."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import configure, load_settings, router, validate_settings


@asynccontextmanager
async def _app_lifespan(_: FastAPI):
    """Validate settings so misconfiguration fails at startup."""
    settings = load_settings()
    error = validate_settings(settings)
    if error:
        raise RuntimeError(f"Invalid configuration at startup: {error}")
    configure(settings)
    yield


app = FastAPI(
    title="Sudoku Step Solver API",
    description="API for finding forced Sudoku moves one logical step at a time",
    version="1.0.0",
    lifespan=_app_lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/")
async def root():
    return {"message": "Sudoku Step Solver API", "docs": "/docs"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("sudoku_engine.main:app", host="0.0.0.0", port=8000, reload=True)
