from __future__ import annotations

import logging

from fastapi import APIRouter, Query, Request
from fastapi.responses import RedirectResponse

from roadbill.constants import (
    BANK_DETAILS,
    COMPANY_ADDRESS,
    COMPANY_CONTACT,
    COMPANY_GSTIN,
    COMPANY_PAN,
    COMPANY_TAGLINE,
    TABLE_HEADERS,
    format_input_date,
    now,
)
from roadbill.errors import BillNotFoundError, ValidationError
from roadbill.models.bill import Bill, LineItem
from roadbill.pdf.layout import build_table_rows, format_amount
from roadbill.settings import settings
from web.deps import get_bill_service, get_image_service, render
from web.flash import flash
from web.forms import parse_line_items

logger = logging.getLogger(__name__)

router = APIRouter()


async def _bill_from_form(request: Request) -> Bill:
    form = await request.form()
    data = {key: value for key, value in form.items() if isinstance(value, str)}
    return Bill(
        bill_no=data.get("bill_no", ""),
        to_ms=data.get("to_ms", ""),
        date=data.get("date", ""),
        checked_by=data.get("checked_by", ""),
        prepared_by=data.get("prepared_by", ""),
        items=parse_line_items(data, "items"),
    )


def _render_form(request: Request, bill: Bill, action: str, status_code: int = 200):
    items = bill.items or [LineItem()]
    return render(
        request,
        "bill/form.html",
        {
            "bill": bill,
            "items": items,
            "bill_date": format_input_date(bill.date),
            "item_dates": [format_input_date(item.date) for item in items],
            "action": action,
        },
        status_code=status_code,
    )


@router.get("/")
async def dashboard(request: Request, q: str = ""):
    service = get_bill_service()
    bills = service.list_bills(newest_first=True, query=q)
    summary = service.summary()
    logger.info("GET / with %d of %d bills (q=%r)", len(bills), summary.count, q)
    return render(request, "dashboard.html", {"bills": bills, "summary": summary, "query": q})


@router.get("/bills/new")
async def bill_new_form(request: Request):
    service = get_bill_service()
    defaults = service.bill_settings()
    bill = Bill(
        bill_no=service.next_bill_no(),
        date=now().strftime("%d.%m.%Y"),
        checked_by=defaults["checkedBy"],
        prepared_by=defaults["preparedBy"],
    )
    return _render_form(request, bill, "/bills/new")


@router.post("/bills/new")
async def bill_create(request: Request):
    logger.info("POST /bills/new")
    try:
        bill = await _bill_from_form(request)
    except ValueError as exc:
        logger.warning("Bill create rejected: %s", exc)
        flash(request, "Weight, rate and extra must be numbers below 1,000,000,000.", "danger")
        return RedirectResponse("/bills/new", status_code=302)

    try:
        bill = get_bill_service().create_bill(bill)
    except ValidationError as exc:
        flash(request, str(exc), "danger")
        return _render_form(request, bill, "/bills/new", status_code=400)

    flash(request, f"Bill {bill.bill_no} created.", "success")
    return RedirectResponse(f"/bills/{bill.id}/view", status_code=302)


@router.get("/bills/{bill_id}/edit")
async def bill_edit_form(request: Request, bill_id: str):
    try:
        bill = get_bill_service().get_bill(bill_id)
    except BillNotFoundError:
        logger.warning("Bill not found: id=%s", bill_id)
        flash(request, "Bill not found.", "danger")
        return RedirectResponse("/", status_code=302)
    return _render_form(request, bill, f"/bills/{bill_id}/edit")


@router.post("/bills/{bill_id}/edit")
async def bill_update(request: Request, bill_id: str):
    logger.info("POST /bills/%s/edit", bill_id)
    try:
        bill = await _bill_from_form(request)
    except ValueError as exc:
        logger.warning("Bill update rejected: %s", exc)
        flash(request, "Weight, rate and extra must be numbers below 1,000,000,000.", "danger")
        return RedirectResponse(f"/bills/{bill_id}/edit", status_code=302)

    try:
        bill = get_bill_service().update_bill(bill_id, bill)
    except BillNotFoundError:
        flash(request, "Bill not found.", "danger")
        return RedirectResponse("/", status_code=302)
    except ValidationError as exc:
        flash(request, str(exc), "danger")
        return _render_form(request, bill, f"/bills/{bill_id}/edit", status_code=400)

    flash(request, f"Bill {bill.bill_no} updated.", "success")
    return RedirectResponse(f"/bills/{bill.id}/view", status_code=302)


@router.post("/bills/{bill_id}/delete")
async def bill_delete(request: Request, bill_id: str):
    logger.info("POST /bills/%s/delete", bill_id)
    try:
        get_bill_service().delete_bill(bill_id)
    except BillNotFoundError:
        flash(request, "Bill not found.", "danger")
        return RedirectResponse("/", status_code=302)
    flash(request, "Bill deleted.", "success")
    return RedirectResponse("/", status_code=302)


@router.get("/bills/{bill_id}/view")
async def bill_view(request: Request, bill_id: str, print_mode: bool = Query(False, alias="print")):
    logger.info("GET /bills/%s/view print=%s", bill_id, print_mode)
    try:
        bill = get_bill_service().get_bill(bill_id)
    except BillNotFoundError:
        flash(request, "Bill not found.", "danger")
        return RedirectResponse("/", status_code=302)

    return render(
        request,
        "bill/view.html",
        {
            "bill": bill,
            "rows": build_table_rows(bill),
            "headers": TABLE_HEADERS,
            "grand_total": format_amount(bill.grand_total),
            "images": get_image_service().check(),
            "print_mode": print_mode,
            "faint_signatures": settings.pdf_faint_signatures,
            "company": {
                "tagline": COMPANY_TAGLINE,
                "address": COMPANY_ADDRESS,
                "contact": COMPANY_CONTACT,
                "pan": COMPANY_PAN,
                "gstin": COMPANY_GSTIN,
                "bank": BANK_DETAILS,
            },
        },
    )
