from __future__ import annotations

import logging
from decimal import Decimal

from pydantic import BaseModel
from ulid import ULID

from roadbill.constants import format_display_date, now
from roadbill.errors import BillNotFoundError, ValidationError
from roadbill.models import round_money
from roadbill.models.bill import Bill
from roadbill.numbering import generate_next_bill_no
from roadbill.pdf.archive import bill_filename, build_zip, merge_pdfs
from roadbill.pdf.invoice import BillPDF
from roadbill.repositories.base import BillRepository
from roadbill.services.image_service import ImageService
from roadbill.settings import settings
from roadbill.words import amount_to_words

logger = logging.getLogger(__name__)

# (attribute, wire name) of fields a submission must carry.
REQUIRED_FIELDS = (("to_ms", "toMs"), ("date", "date"), ("items", "items"))

EXPORT_FORMATS = {
    "zip": ("application/zip", "AbhiRoadCarrier-Bills.zip"),
    "pdf": ("application/pdf", "AbhiRoadCarrier-Bills.pdf"),
}


class BillSummary(BaseModel):
    count: int = 0
    total_amount: Decimal = Decimal(0)


class ExportFile(BaseModel):
    filename: str
    media_type: str
    content: bytes


def apply_totals(bill: Bill) -> Bill:
    """Renumber items and derive item totals, grand total and amount in words."""
    for position, item in enumerate(bill.items, start=1):
        item.sr_no = position
        item.date = format_display_date(item.date)
        item.total = item.computed_total
    bill.grand_total = round_money(sum((item.total for item in bill.valid_items), Decimal(0)))
    bill.amount_in_words = amount_to_words(bill.grand_total)
    return bill


class BillService:
    def __init__(
        self,
        bill_repo: BillRepository,
        images: ImageService | None = None,
    ) -> None:
        self.bill_repo = bill_repo
        self.images = images
        self.pdf_generator = BillPDF(faint_signatures=settings.pdf_faint_signatures)

    @staticmethod
    def _validate(bill: Bill) -> None:
        for attr, wire_name in REQUIRED_FIELDS:
            if not getattr(bill, attr):
                logger.warning("Bill rejected: missing %s", wire_name)
                raise ValidationError(f"Missing required field: {wire_name}", field=wire_name)

    @staticmethod
    def _apply_defaults(bill: Bill) -> None:
        bill.date = format_display_date(bill.date)
        bill.checked_by = bill.checked_by or settings.default_checked_by
        bill.prepared_by = bill.prepared_by or settings.default_prepared_by

    def list_bills(self, newest_first: bool = False, query: str = "") -> list[Bill]:
        """All bills, optionally narrowed to those whose number or recipient contains ``query``."""
        result = self.bill_repo.list_all()
        needle = query.strip().casefold()
        if needle:
            result = [b for b in result if needle in b.bill_no.casefold() or needle in b.to_ms.casefold()]
        if newest_first:
            result.sort(key=lambda b: b.created_at.timestamp() if b.created_at else 0.0, reverse=True)
        logger.debug("Listed %d bills", len(result))
        return result

    def get_bill(self, bill_id: str) -> Bill:
        result = self.bill_repo.get_by_id(bill_id)
        logger.debug("get_bill id=%s found=%s", bill_id, result is not None)
        if result is None:
            raise BillNotFoundError(bill_id)
        return result

    def next_bill_no(self) -> str:
        return generate_next_bill_no(self.bill_repo.list_all(), prefix=settings.bill_prefix, year=now().year)

    def create_bill(self, bill: Bill) -> Bill:
        self._apply_defaults(bill)
        apply_totals(bill)
        self._validate(bill)

        if not bill.id:
            bill.id = str(ULID())
        if bill.created_at is None:
            bill.created_at = now()
        if not bill.bill_no:
            bill.bill_no = self.next_bill_no()

        bill = self.bill_repo.create(bill)
        logger.info(
            "Bill created: id=%s, bill_no=%s, items=%d, total=%s",
            bill.id,
            bill.bill_no,
            len(bill.valid_items),
            bill.grand_total,
        )
        return bill

    def update_bill(self, bill_id: str, bill: Bill) -> Bill:
        existing = self.get_bill(bill_id)

        bill.id = bill_id
        bill.created_at = existing.created_at
        bill.bill_no = bill.bill_no or existing.bill_no
        self._apply_defaults(bill)
        apply_totals(bill)
        self._validate(bill)

        bill = self.bill_repo.update(bill)
        logger.info("Bill updated: id=%s, bill_no=%s, total=%s", bill.id, bill.bill_no, bill.grand_total)
        return bill

    def delete_bill(self, bill_id: str) -> None:
        self.bill_repo.delete(bill_id)
        logger.info("Bill %s deleted", bill_id)

    def summary(self) -> BillSummary:
        bills = self.bill_repo.list_all()
        total = round_money(sum((b.grand_total for b in bills), Decimal(0)))
        return BillSummary(count=len(bills), total_amount=total)

    def bill_settings(self) -> dict[str, str]:
        return {"checkedBy": settings.default_checked_by, "preparedBy": settings.default_prepared_by}

    # ---- Rendering ----

    def render_pdf(self, bill: Bill) -> bytes:
        signature = self.images.get("signature") if self.images else None
        stamp = self.images.get("stamp") if self.images else None
        return self.pdf_generator.generate(bill, signature_png=signature, stamp_png=stamp)

    def download_bill(self, bill_id: str) -> ExportFile:
        bill = self.get_bill(bill_id)
        logger.info("Rendering PDF for bill %s (%s)", bill.id, bill.bill_no)
        return ExportFile(
            filename=bill_filename(bill.bill_no, fallback=bill.id),
            media_type="application/pdf",
            content=self.render_pdf(bill),
        )

    def export_bills(self, bill_ids: list[str], fmt: str = "zip") -> ExportFile:
        """One document per matching id, in request order; unknown ids are skipped."""
        if fmt not in EXPORT_FORMATS:
            raise ValidationError(f"Unsupported export format: {fmt}", field="format")

        by_id = {bill.id: bill for bill in self.bill_repo.list_all()}
        selected = []
        for bill_id in dict.fromkeys(bill_ids):
            if bill_id in by_id:
                selected.append(by_id[bill_id])
        if not selected:
            logger.warning("Export rejected: none of %d ids matched", len(bill_ids))
            raise BillNotFoundError(", ".join(bill_ids))

        documents = [(bill_filename(b.bill_no, fallback=b.id), self.render_pdf(b)) for b in selected]
        media_type, filename = EXPORT_FORMATS[fmt]
        if fmt == "zip":
            content = build_zip(documents)
        else:
            content = merge_pdfs(data for _, data in documents)
        logger.info("Exported %d bills as %s (%d bytes)", len(selected), fmt, len(content))
        return ExportFile(filename=filename, media_type=media_type, content=content)
