from __future__ import annotations

import json
import logging

import pydantic
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from roadbill.errors import BillNotFoundError, StorageError, ValidationError
from roadbill.models.bill import Bill
from roadbill.services.bill_service import ExportFile
from web.deps import get_bill_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _not_found(bill_id: str) -> JSONResponse:
    logger.warning("Bill not found: id=%s", bill_id)
    return _error("Bill not found", 404)


def _storage_failure(exc: StorageError) -> JSONResponse:
    logger.error("Storage failure: %s", exc, exc_info=exc)
    return _error("Internal server error", 500)


def _attachment(export: ExportFile) -> Response:
    return Response(
        content=export.content,
        media_type=export.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


async def _read_bill(request: Request) -> Bill:
    """Decode the request body into a Bill.

    Raises ValidationError when the body is not a JSON object or a field has
    the wrong shape.
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValidationError("Request body must be JSON") from exc
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return Bill.model_validate(payload)
    except pydantic.ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise ValidationError(f"Invalid value for {field}: {first['msg']}", field=field) from exc


@router.get("/bills")
async def list_bills(q: str = ""):
    try:
        bills = get_bill_service().list_bills(query=q)
    except StorageError as exc:
        return _storage_failure(exc)
    return [bill.to_record() for bill in bills]


@router.get("/bills/next-number")
async def next_bill_number():
    try:
        bill_no = get_bill_service().next_bill_no()
    except StorageError as exc:
        return _storage_failure(exc)
    return {"billNumber": bill_no}


@router.post("/bills/download")
async def download_bills(request: Request):
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _error("Request body must be JSON", 400)

    ids = payload.get("ids") if isinstance(payload, dict) else None
    if not isinstance(ids, list) or not ids:
        return _error("No bills selected", 400)
    fmt = str(payload.get("format") or "zip")

    logger.info("POST /api/bills/download: %d ids, format=%s", len(ids), fmt)
    try:
        export = get_bill_service().export_bills([str(i) for i in ids], fmt)
    except ValidationError as exc:
        logger.warning("Export rejected: %s", exc)
        return _error(str(exc), 400)
    except BillNotFoundError:
        return _error("No matching bills found", 404)
    except StorageError as exc:
        return _storage_failure(exc)
    return _attachment(export)


@router.get("/bills/{bill_id}")
async def get_bill(bill_id: str):
    try:
        bill = get_bill_service().get_bill(bill_id)
    except BillNotFoundError:
        return _not_found(bill_id)
    except StorageError as exc:
        return _storage_failure(exc)
    return bill.to_record()


@router.post("/bills")
async def create_bill(request: Request):
    logger.info("POST /api/bills")
    try:
        bill = get_bill_service().create_bill(await _read_bill(request))
    except ValidationError as exc:
        logger.warning("Bill rejected: %s", exc)
        return _error(str(exc), 400)
    except StorageError as exc:
        return _storage_failure(exc)
    return JSONResponse(bill.to_record(), status_code=201)


@router.put("/bills/{bill_id}")
async def update_bill(bill_id: str, request: Request):
    logger.info("PUT /api/bills/%s", bill_id)
    try:
        bill = get_bill_service().update_bill(bill_id, await _read_bill(request))
    except BillNotFoundError:
        return _not_found(bill_id)
    except ValidationError as exc:
        logger.warning("Bill rejected: %s", exc)
        return _error(str(exc), 400)
    except StorageError as exc:
        return _storage_failure(exc)
    return bill.to_record()


@router.delete("/bills/{bill_id}")
async def delete_bill(bill_id: str):
    logger.info("DELETE /api/bills/%s", bill_id)
    try:
        get_bill_service().delete_bill(bill_id)
    except BillNotFoundError:
        return _not_found(bill_id)
    except StorageError as exc:
        return _storage_failure(exc)
    return {"message": "Bill deleted successfully"}


@router.get("/bills/{bill_id}/download")
async def download_bill(bill_id: str):
    try:
        export = get_bill_service().download_bill(bill_id)
    except BillNotFoundError:
        return _not_found(bill_id)
    except StorageError as exc:
        return _storage_failure(exc)
    return _attachment(export)


@router.get("/bill-settings")
async def bill_settings():
    return get_bill_service().bill_settings()
