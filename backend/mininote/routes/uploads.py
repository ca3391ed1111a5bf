"""
MiniNote Backend - Upload Route Handlers
=========================================

What:  POST /upload stores a file; GET /_tmp/{name} serves it back.
       GET /upload is answered with 405 so it never reaches /{slug}.
Who:   The editor page's upload script, and then any reader of a note that
       embeds or links the returned URL.

Request Flow (POST /upload):
    1. Parse the multipart body (unreadable stream → 400 "invalid file")
    2. Take the part named `file` (missing → 400 "no file")
    3. Reject parts above UPLOAD_SIZE_LIMIT (→ 403 "file too large")
    4. UploadStore.save() → 200 JSON {url, is_image, name}
       (write failure → 500)
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse, Response
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import ClientDisconnect

from mininote.dependencies import get_upload_store
from mininote.exceptions import InvalidUploadError, MissingUploadError
from mininote.schemas.upload import UploadResponse
from mininote.services.assets import guess_media_type
from mininote.services.upload_store import UploadStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Uploads"])

UPLOAD_FIELD = "file"


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={
        400: {"description": "No `file` field, or unreadable multipart body"},
        403: {"description": "File larger than the upload limit"},
        500: {"description": "File could not be written"},
    },
    summary="Upload a file for embedding in a note",
)
async def upload_file(
    request: Request,
    uploads: UploadStore = Depends(get_upload_store),
) -> UploadResponse:
    """
    Store the `file` part of a multipart body.

    The part is read fully into memory; its size is checked against the
    limit first, using the size reported by the multipart parser.
    """
    try:
        async with request.form() as form:
            part = form.get(UPLOAD_FIELD)
            if not isinstance(part, UploadFile):
                raise MissingUploadError(context={"fields": list(form.keys())})

            uploads.validate_size(part.size, 0)
            content = await part.read()

            logger.info(
                "Received upload: filename=%s, size=%d bytes",
                part.filename or "unknown",
                len(content),
            )
            stored = await uploads.save(part.filename, content, content_length=part.size)
    # python-multipart parse errors subclass ValueError
    except (MultiPartException, HTTPException, ClientDisconnect, ValueError) as e:
        raise InvalidUploadError(context={"error": str(e)}) from e

    return UploadResponse.from_stored(stored)


# /upload is POST-only; GET must not fall through to /{slug}
@router.get("/upload", include_in_schema=False)
async def upload_method_not_allowed() -> Response:
    return Response(status_code=405, headers={"Allow": "POST"})


@router.get(
    "/_tmp/{name:path}",
    summary="Download a stored upload",
    responses={404: {"description": "No such upload"}},
)
async def serve_upload(
    name: str,
    uploads: UploadStore = Depends(get_upload_store),
) -> FileResponse:
    """
    Serve a stored upload by its stored name.

    `../` sequences are stripped and the result must stay inside the note
    root (see UploadStore.resolve); anything else is a 404.
    """
    path = await uploads.resolve(name)
    return FileResponse(path=str(path), media_type=guess_media_type(path))
