"""FastAPI entrypoint for the logo banner service.

Run with ``uvicorn main:app``. The compositor and the S3 upload are both
blocking, so they run in worker threads.
"""

import asyncio
import logging
from functools import lru_cache
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from logobanner import storage
from logobanner.compositor import change_background
from logobanner.config import settings
from logobanner.errors import (
    ColorParseError,
    ConfigurationError,
    ImageDecodeError,
    ImageEncodeError,
    LogoBannerError,
    MetadataFormatError,
    StorageUnavailableError,
)
from logobanner.models import (
    ChangeBackgroundRequest,
    ChangeBackgroundResponse,
    HealthResponse,
    UploadRequest,
    UploadResponse,
)

logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

# Error kind -> HTTP status
STATUS_BY_ERROR = {
    ColorParseError: 400,
    MetadataFormatError: 400,
    ImageDecodeError: 400,
    ImageEncodeError: 422,
    ConfigurationError: 500,
    StorageUnavailableError: 502,
}

# --- App Init ---
app = FastAPI(title="Logo Banner Service", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # adjust in prod
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(LogoBannerError)
async def logobanner_error_handler(request: Request, exc: LogoBannerError):
    status = next((code for kind, code in STATUS_BY_ERROR.items() if isinstance(exc, kind)), 500)
    logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status, content={"detail": str(exc)})


@lru_cache(maxsize=1)
def get_s3_client() -> Any:
    """Shared S3 client, created on first use."""
    return storage.start_session()


@app.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(status="ok")


@app.post("/change-background", response_model=ChangeBackgroundResponse)
async def change_background_endpoint(request: ChangeBackgroundRequest):
    result = await asyncio.to_thread(change_background, request.image, request.color)
    return ChangeBackgroundResponse(image=result.image, file_name=result.file_name)


@app.post("/upload", response_model=UploadResponse)
async def upload_endpoint(request: UploadRequest, client: Any = Depends(get_s3_client)):
    url = await asyncio.to_thread(
        storage.upload_image_in_base64, client, request.image, request.file_name
    )
    return UploadResponse(url=url)
