"""
Recruitment admin portal API - FastAPI backend for the admin dashboard
"""

from dotenv import find_dotenv, load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

# Load local .env before routes build their stores from the environment.
load_dotenv(find_dotenv(usecwd=True), override=False)

from recruitportal import __version__  # noqa: E402
from recruitportal.config import get_settings  # noqa: E402
from recruitportal.utils.logging_config import (  # noqa: E402
    LogFiles,
    Logger,
    clear_trace_id,
    set_trace_id,
)

from .routes import admin, auth  # noqa: E402

settings = get_settings()

app = FastAPI(
    title="Recruitment Admin Portal API",
    description="Applicant listings, subdomain cohorts and interview status updates",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def trace_requests(request: Request, call_next):
    trace_id = set_trace_id(request.headers.get("X-Request-ID"))
    try:
        response = await call_next(request)
        Logger.info(
            f"{request.method} {request.url.path} -> {response.status_code}", file=LogFiles.API
        )
        response.headers["X-Request-ID"] = trace_id
        return response
    finally:
        clear_trace_id()


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "version": __version__}


@app.get("/")
async def root():
    return {"name": settings.app_name, "version": __version__, "docs": "/docs", "health": "/health"}


app.include_router(auth.router, prefix="/api", tags=["Auth"])
app.include_router(admin.router, prefix="/api", tags=["Admin"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
