"""Reading request log: one JSONL line per POST /read with its outcome."""

import json
import logging
import time
from pathlib import Path
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from astro_ai.config import settings

logger = logging.getLogger(__name__)

LOG_DIR = Path(settings.request_log_dir)
LOG_FILE = LOG_DIR / "request_log.jsonl"

READ_PATH = "/read"


def reading_outcome(status_code: int) -> str:
    """Classify a /read response: delivered, rejected input, or failed upstream."""
    if status_code == 200:
        return "delivered"
    if status_code == 400:
        return "rejected"
    if status_code >= 500:
        return "failed"
    return "other"


def _upload_bytes(request: Request) -> int | None:
    try:
        return int(request.headers.get("content-length", ""))
    except ValueError:
        return None


def build_entry(request: Request, status_code: int, elapsed: float) -> dict[str, Any]:
    return {
        "timestamp": time.time(),
        "outcome": reading_outcome(status_code),
        "status_code": status_code,
        "elapsed_seconds": round(elapsed, 3),
        "upload_bytes": _upload_bytes(request),
        "origin": request.headers.get("origin", ""),
    }


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Records how each reading request ended and how long it took."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path != READ_PATH or request.method != "POST":
            response: Response = await call_next(request)
            return response

        start = time.monotonic()
        response = await call_next(request)
        entry = build_entry(request, response.status_code, time.monotonic() - start)
        logger.info(
            "Reading %s (%d) in %.3fs",
            entry["outcome"],
            entry["status_code"],
            entry["elapsed_seconds"],
        )

        try:
            LOG_DIR.mkdir(parents=True, exist_ok=True)
            with open(LOG_FILE, "a") as f:
                f.write(json.dumps(entry) + "\n")
        except OSError:
            logger.warning("Could not write reading log entry")

        return response
