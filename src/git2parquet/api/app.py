"""FastAPI application instance for the git2parquet API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..errors import Git2ParquetError
from ..logging_utils import configure_logging
from . import __version__
from .routes import router as api_router

configure_logging()

# Unlisted codes map to 500.
ERROR_STATUS = {
    "INVALID_OPTIONS": 422,
    "NOT_A_REPOSITORY": 404,
    "EMPTY_REPOSITORY": 409,
    "MALFORMED_LOG_LINE": 422,
    "DATE_PARSE_FAILED": 422,
}

app = FastAPI(
    title="git2parquet API",
    description="Export git commit history with diffs to Parquet files",
    version=__version__,
)

app.include_router(api_router)


@app.exception_handler(Git2ParquetError)
async def export_error_handler(request: Request, exc: Git2ParquetError):
    """Render export failures as an error envelope."""
    return JSONResponse(
        status_code=ERROR_STATUS.get(exc.code, 500),
        content={"ok": False, "error": exc.to_dict()},
    )
