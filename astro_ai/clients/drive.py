"""Google Drive image store. Uploads palm images and shares them publicly."""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from typing import Any, Protocol

import httpx
from google.auth.transport.requests import Request as GoogleAuthRequest
from google.oauth2 import service_account

from astro_ai.agent.errors import ImageStoreError
from astro_ai.config import Settings

logger = logging.getLogger(__name__)

DRIVE_SCOPE = "https://www.googleapis.com/auth/drive"
DRIVE_UPLOAD_URL = "https://www.googleapis.com/upload/drive/v3/files"
DRIVE_FILES_URL = "https://www.googleapis.com/drive/v3/files"
PUBLIC_URL_TEMPLATE = "https://drive.google.com/uc?id={file_id}"


class ImageStore(Protocol):
    """Anything that can turn image bytes into a publicly fetchable URL."""

    async def store(self, data: bytes, filename: str, mime_type: str) -> str: ...


def _multipart_related(
    metadata: dict[str, Any], data: bytes, mime_type: str, boundary: str
) -> bytes:
    """Encode a Drive multipart upload body (JSON metadata part + media part)."""
    head = (
        f"--{boundary}\r\n"
        "Content-Type: application/json; charset=UTF-8\r\n\r\n"
        f"{json.dumps(metadata)}\r\n"
        f"--{boundary}\r\n"
        f"Content-Type: {mime_type}\r\n\r\n"
    ).encode()
    tail = f"\r\n--{boundary}--\r\n".encode()
    return head + data + tail


class DriveImageStore:
    """Async Google Drive v3 client authenticated with a service account.

    Each stored file goes into the configured folder and gets an
    anyone-with-the-link reader permission, so the returned URL can be
    embedded in the prompt as plain text.
    """

    def __init__(
        self,
        settings: Settings,
        credentials: Any | None = None,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self.folder_id = settings.drive_folder_id
        self._credentials_file = settings.google_credentials_file
        self._credentials = credentials
        self.http = http or httpx.AsyncClient(timeout=settings.http_timeout_seconds)
        if not self.folder_id:
            logger.warning("DRIVE_FOLDER_ID not set, uploads go to the Drive root")

    # --- Auth ---

    def _load_credentials(self) -> Any:
        if self._credentials is None:
            self._credentials = service_account.Credentials.from_service_account_file(
                self._credentials_file, scopes=[DRIVE_SCOPE]
            )
        return self._credentials

    async def _auth_headers(self) -> dict[str, str]:
        try:
            creds = self._load_credentials()
            if not creds.valid:
                # google-auth refreshes with a blocking HTTP call
                await asyncio.to_thread(creds.refresh, GoogleAuthRequest())
        except Exception as e:
            raise ImageStoreError(f"Google Drive authentication failed: {e}") from e
        return {"Authorization": f"Bearer {creds.token}"}

    # --- Drive calls ---

    async def _create_file(self, data: bytes, filename: str, mime_type: str) -> str:
        metadata: dict[str, Any] = {"name": filename}
        if self.folder_id:
            metadata["parents"] = [self.folder_id]
        boundary = uuid.uuid4().hex
        headers = await self._auth_headers()
        headers["Content-Type"] = f"multipart/related; boundary={boundary}"
        resp = await self.http.post(
            DRIVE_UPLOAD_URL,
            params={"uploadType": "multipart", "fields": "id"},
            content=_multipart_related(metadata, data, mime_type, boundary),
            headers=headers,
        )
        resp.raise_for_status()
        return resp.json()["id"]

    async def _share_publicly(self, file_id: str) -> None:
        resp = await self.http.post(
            f"{DRIVE_FILES_URL}/{file_id}/permissions",
            json={"role": "reader", "type": "anyone"},
            headers=await self._auth_headers(),
        )
        resp.raise_for_status()

    async def store(self, data: bytes, filename: str, mime_type: str) -> str:
        """Upload bytes to Drive, make them world-readable, return the public URL."""
        try:
            file_id = await self._create_file(data, filename, mime_type)
            await self._share_publicly(file_id)
        except httpx.HTTPStatusError as e:
            raise ImageStoreError(
                f"Google Drive returned {e.response.status_code} for {filename}"
            ) from e
        except httpx.HTTPError as e:
            raise ImageStoreError(f"Google Drive request failed: {e}") from e
        except (KeyError, ValueError) as e:
            raise ImageStoreError(
                f"Google Drive returned an unexpected upload response for {filename}"
            ) from e
        logger.info("Uploaded %s to Drive as %s", filename, file_id)
        return PUBLIC_URL_TEMPLATE.format(file_id=file_id)

    async def close(self) -> None:
        await self.http.aclose()
