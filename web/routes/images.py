from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response
from starlette.datastructures import UploadFile

from roadbill.errors import StorageError, ValidationError
from roadbill.services.image_service import IMAGE_NAMES
from web.deps import get_image_service, render
from web.flash import flash

logger = logging.getLogger(__name__)

router = APIRouter()


async def _collect_uploads(request: Request) -> dict[str, bytes]:
    """Read the ``signature`` and ``stamp`` parts that carry a file."""
    form = await request.form()
    uploads: dict[str, bytes] = {}
    for kind in IMAGE_NAMES:
        upload = form.get(kind)
        if not isinstance(upload, UploadFile) or not upload.filename:
            continue
        data = await upload.read()
        if data:
            uploads[kind] = data
    return uploads


def _store(uploads: dict[str, bytes]) -> dict[str, str]:
    service = get_image_service()
    return {kind: service.upload(kind, data) for kind, data in uploads.items()}


@router.post("/api/upload-images")
async def upload_images(request: Request):
    uploads = await _collect_uploads(request)
    if not uploads:
        return JSONResponse({"error": "No images uploaded"}, status_code=400)
    try:
        files = _store(uploads)
    except ValidationError as exc:
        return JSONResponse({"error": str(exc)}, status_code=400)
    except StorageError:
        logger.exception("Image upload failed")
        return JSONResponse({"error": "Failed to upload images"}, status_code=500)
    return {"message": "Files uploaded successfully", "files": files}


@router.get("/api/check-images")
async def check_images():
    return get_image_service().check()


@router.get("/images")
async def images_page(request: Request):
    return render(request, "images.html", {"status": get_image_service().check()})


@router.post("/images")
async def images_upload(request: Request):
    uploads = await _collect_uploads(request)
    if not uploads:
        flash(request, "Choose a signature or stamp image to upload.", "warning")
        return RedirectResponse("/images", status_code=302)
    try:
        files = _store(uploads)
    except ValidationError as exc:
        flash(request, str(exc), "danger")
        return RedirectResponse("/images", status_code=302)
    flash(request, f"Uploaded {', '.join(files.values())}.", "success")
    return RedirectResponse("/images", status_code=302)


@router.get("/images/{kind}.png")
async def image_file(kind: str):
    if kind not in IMAGE_NAMES:
        return Response(status_code=404)
    data = get_image_service().get(kind)
    if data is None:
        return Response(status_code=404)
    return Response(content=data, media_type="image/png", headers={"Cache-Control": "no-cache"})
