"""Reading endpoint: uploads palm images and runs the astrology agent."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Form, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import FormData, UploadFile

from astro_ai.agent.errors import InvalidSubmissionError
from astro_ai.agent.graph import run_reading
from astro_ai.clients.drive import ImageStore
from astro_ai.config import settings
from astro_ai.schemas.reading import ErrorResponse, ReadingResponse, UserSubmission
from astro_ai.utils.filenames import format_upload_filename

router = APIRouter()
logger = logging.getLogger(__name__)

MISSING_IMAGES_ERROR = "Both palm images are required."
GENERIC_ERROR = "Failed to generate reading."

_TEXT_FIELDS = ("name", "dob", "tob", "pob", "gender")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=ErrorResponse(error=message).model_dump()
    )


def _palm_images(form: FormData) -> tuple[UploadFile, UploadFile]:
    """Pull exactly one uploaded file per palm field out of the multipart form.

    Plain text parts sent under an image field count as missing.
    """
    images: list[UploadFile | None] = []
    for field in ("palmLeft", "palmRight"):
        files = [
            v for v in form.getlist(field) if isinstance(v, UploadFile) and v.filename
        ]
        if len(files) > 1:
            raise InvalidSubmissionError(f"Only one file is allowed for {field}.")
        images.append(files[0] if files else None)
    left, right = images
    if left is None or right is None:
        raise InvalidSubmissionError(MISSING_IMAGES_ERROR)
    return left, right


def _require_text(fields: dict[str, str | None]) -> None:
    missing = [k for k in _TEXT_FIELDS if not (fields[k] or "").strip()]
    if missing:
        raise InvalidSubmissionError(f"Missing required fields: {', '.join(missing)}.")


async def _upload(store: ImageStore, upload: UploadFile, user_name: str) -> str:
    data = await upload.read()
    filename = format_upload_filename(upload.filename or "palm", user_name)
    mime_type = upload.content_type or "application/octet-stream"
    return await store.store(data, filename, mime_type)


@router.post(
    "/read",
    response_model=ReadingResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def read(
    request: Request,
    name: str | None = Form(None),
    dob: str | None = Form(None),
    tob: str | None = Form(None),
    pob: str | None = Form(None),
    gender: str | None = Form(None),
):
    """Generate an astrology report from biodata and two palm images.

    Expects multipart file parts ``palmLeft`` and ``palmRight`` alongside the
    text fields.
    """
    fields = {"name": name, "dob": dob, "tob": tob, "pob": pob, "gender": gender}
    try:
        left, right = _palm_images(await request.form())
        _require_text(fields)
    except InvalidSubmissionError as e:
        logger.info("Rejected reading request: %s", e)
        return _error(400, str(e))

    store: ImageStore = request.app.state.image_store
    graph = request.app.state.agent_graph

    try:
        palm_left_url = await _upload(store, left, fields["name"])
        palm_right_url = await _upload(store, right, fields["name"])

        submission = UserSubmission(
            **fields, palmLeft=palm_left_url, palmRight=palm_right_url
        )
        result = await run_reading(graph, submission)
    except Exception as e:
        logger.exception("Reading failed for %s", fields["name"])
        expose = getattr(
            request.app.state, "expose_error_details", settings.expose_error_details
        )
        return _error(500, str(e) if expose else GENERIC_ERROR)

    logger.info("Reading generated for %s (%d chars)", submission.name, len(result))
    return ReadingResponse(result=result)
