"""
HTTP interface.

Routes:
    GET  /                          health message
    POST /api/v1/optimize-resume    multipart form: jobDescription (text), resume (file)

Every optimize response is JSON of the form ``{"success": bool, ...}``. Status
codes: 200 success, 400 invalid input, 405 wrong method, 500 any failure
while reading, rewriting or scoring (with a generic message; details are
logged server-side only).

Run locally with:
    python -m tailor.api
"""

import asyncio
import contextlib
import threading
from functools import lru_cache, partial
from typing import Callable, Optional

from fastapi import APIRouter, Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from tailor import __version__
from tailor.config import Settings
from tailor.contexts.intake import DocumentExtractor, RawDocument
from tailor.contexts.tailoring import RewriteStrategy, get_strategy
from tailor.exceptions import InvalidRequest, OptimizationCancelled, OptimizationError
from tailor.optimizer import ResumeOptimizer, error_payload, validate_job_description
from tailor.utils.logger import setup_logger

DISCONNECT_POLL_INTERVAL_S = 0.5
INTERNAL_ERROR_MESSAGE = "Failed to optimize resume"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def get_rewrite_strategy(
    settings: Settings = Depends(get_settings),
) -> Callable[[], RewriteStrategy]:
    """Strategy factory; built inside the request so configuration errors get the error payload."""
    return partial(get_strategy, settings=settings)


async def _watch_disconnect(request: Request, cancel_event: threading.Event) -> None:
    """Set cancel_event once the client goes away."""
    while not cancel_event.is_set():
        if await request.is_disconnected():
            logger.warning("Client disconnected, cancelling optimization")
            cancel_event.set()
            return
        await asyncio.sleep(DISCONNECT_POLL_INTERVAL_S)


async def _read_upload(resume: Optional[UploadFile], max_bytes: int) -> RawDocument:
    """
    Read an uploaded résumé, never more than one byte past the size limit.

    Raises:
        InvalidRequest: If no file was uploaded
    """
    if resume is None or not resume.filename:
        raise InvalidRequest("Resume file is required")
    data = await resume.read(max_bytes + 1)
    return RawDocument.from_upload(data, filename=resume.filename, content_type=resume.content_type)


router = APIRouter()


@router.post("/optimize-resume")
async def optimize_resume_endpoint(
    request: Request,
    jobDescription: Optional[str] = Form(None),
    resume: Optional[UploadFile] = File(None),
    settings: Settings = Depends(get_settings),
    strategy_factory: Callable[[], RewriteStrategy] = Depends(get_rewrite_strategy),
):
    """Upload a résumé and a job description; get the optimized résumé and its scores."""
    cancel_event = threading.Event()
    watcher = None

    try:
        # Job description is checked before the upload is even read
        job_description = validate_job_description(jobDescription)
        document = await _read_upload(resume, settings.max_upload_bytes)

        optimizer = ResumeOptimizer(
            strategy=strategy_factory(),
            extractor=DocumentExtractor(max_bytes=settings.max_upload_bytes),
        )
        watcher = asyncio.create_task(_watch_disconnect(request, cancel_event))
        result = await asyncio.to_thread(
            optimizer.optimize, document, job_description, cancel_event
        )
        return JSONResponse(status_code=200, content=result.to_dict())

    except OptimizationCancelled as e:
        logger.warning(str(e))
        return JSONResponse(status_code=e.status_code, content=error_payload(e.public_message))
    except OptimizationError as e:
        if e.status_code >= 500:
            logger.error(f"Optimization failed: {e}")
        else:
            logger.info(f"Rejected request: {e.public_message}")
        return JSONResponse(status_code=e.status_code, content=error_payload(e.public_message))
    except Exception:
        logger.exception("Unexpected error while optimizing resume")
        return JSONResponse(status_code=500, content=error_payload(INTERNAL_ERROR_MESSAGE))
    finally:
        if watcher is not None:
            watcher.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await watcher


async def _http_error_handler(request: Request, exc: StarletteHTTPException):
    """Method-not-allowed in the optimize payload format; everything else as usual."""
    if exc.status_code == 405:
        return JSONResponse(
            status_code=405, content=error_payload("Method not allowed"), headers=exc.headers
        )
    return await http_exception_handler(request, exc)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to serve with (default: from environment)
    """
    active_settings = settings or get_settings()

    if active_settings.logs_path:
        setup_logger(
            context_name="api",
            log_dir=active_settings.logs_path,
            extra_provenance={
                "Rewrite strategy": active_settings.rewrite_strategy,
                "Max upload bytes": active_settings.max_upload_bytes,
            },
        )

    app = FastAPI(
        title="TAILOR API",
        description="Optimizes résumés for a job description and reports what changed.",
        version=__version__,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.include_router(router, prefix="/api/v1", tags=["Resume Optimization"])

    if settings is not None:
        app.dependency_overrides[get_settings] = lambda: settings

    @app.get("/")
    async def root():
        return {"message": "Resume optimizer API is running. Use endpoints under /api/v1/"}

    return app


app = create_app()


# Local development runner
if __name__ == "__main__":
    import uvicorn

    uvicorn.run("tailor.api:app", host="127.0.0.1", port=8000, reload=True)
