from __future__ import annotations

import logging
from io import BytesIO

from fpdf import FPDF

from roadbill.constants import (
    BANK_DETAILS,
    COMPANY_ADDRESS,
    COMPANY_CONTACT,
    COMPANY_GSTIN,
    COMPANY_NAME,
    COMPANY_PAN,
    COMPANY_TAGLINE,
    TABLE_HEADERS,
)
from roadbill.models.bill import Bill
from roadbill.pdf.layout import build_table_rows, format_amount, format_grand_total

logger = logging.getLogger(__name__)

MARGIN = 50
HEADER_ROW_H = 25
ROW_H = 20
TOTAL_ROW_H = 25
ELLIPSIS = "..."

# Relative column widths, scaled to the printable width.
COLUMN_WEIGHTS = (30, 40, 50, 65, 65, 60, 35, 35, 30, 40)

COLORS = {
    "primary": "#2c3e50",
    "panel": "#f0f4f8",
    "border": "#e0e5ea",
    "accent": "#3498db",
    "row_alt": "#f5f7fa",
    "white": "#ffffff",
    "text": "#000000",
}


def _hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    h = hex_color.lstrip("#")
    return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))


def _latin1(text: str) -> str:
    """Core PDF fonts only cover Latin-1."""
    return str(text).replace("₹", "Rs.").encode("latin-1", "replace").decode("latin-1")


class BillPDF:
    def __init__(self, faint_signatures: bool = True) -> None:
        self.faint_signatures = faint_signatures
        self._c = {name: _hex_to_rgb(value) for name, value in COLORS.items()}

    def generate(
        self,
        bill: Bill,
        signature_png: bytes | None = None,
        stamp_png: bytes | None = None,
    ) -> bytes:
        pdf = FPDF(orientation="P", unit="pt", format="A4")
        pdf.set_margins(MARGIN, MARGIN, MARGIN)
        pdf.set_auto_page_break(auto=False)
        pdf.set_title(_latin1(f"Bill - {bill.bill_no}"))
        pdf.set_author(COMPANY_NAME)
        pdf.add_page()

        page_w = pdf.w - pdf.l_margin - pdf.r_margin
        self._widths = [page_w * w / sum(COLUMN_WEIGHTS) for w in COLUMN_WEIGHTS]
        self._bottom = pdf.h - MARGIN

        self._draw_header(pdf, page_w, stamp_png)
        self._draw_bill_info(pdf, page_w, bill)
        self._draw_table(pdf, bill)
        self._draw_totals(pdf, page_w, bill)
        self._draw_footer(pdf, page_w, bill, signature_png)

        output = bytes(pdf.output())
        logger.debug(
            "PDF generated: bill=%s items=%d pages=%d size=%d bytes",
            bill.bill_no,
            len(bill.valid_items),
            pdf.page,
            len(output),
        )
        return output

    def _ensure_space(self, pdf: FPDF, height: float) -> bool:
        """Start a new page when ``height`` does not fit; True if one was added."""
        if pdf.get_y() + height <= self._bottom:
            return False
        pdf.add_page()
        return True

    def _box(self, pdf: FPDF, x: float, y: float, w: float, h: float, fill: str, border: str) -> None:
        pdf.set_fill_color(*self._c[fill])
        pdf.set_draw_color(*self._c[border])
        pdf.set_line_width(0.5)
        pdf.rect(x, y, w, h, "DF")

    def _draw_header(self, pdf: FPDF, page_w: float, stamp_png: bytes | None) -> None:
        pdf.set_text_color(*self._c["text"])
        pdf.set_font("Helvetica", "B", 20)
        pdf.cell(0, 26, _latin1(COMPANY_NAME), align="C", new_x="LMARGIN", new_y="NEXT")
        pdf.set_font("Helvetica", "", 12)
        pdf.cell(0, 16, _latin1(COMPANY_TAGLINE), align="C", new_x="LMARGIN", new_y="NEXT")
        pdf.set_font("Helvetica", "", 10)
        pdf.cell(0, 14, _latin1(COMPANY_ADDRESS), align="C", new_x="LMARGIN", new_y="NEXT")
        pdf.cell(0, 14, _latin1(COMPANY_CONTACT), align="C", new_x="LMARGIN", new_y="NEXT")

        if stamp_png:
            pdf.image(BytesIO(stamp_png), x=pdf.l_margin + page_w - 100, y=110, w=100)

        pdf.ln(6)
        y = pdf.get_y()
        pdf.set_draw_color(*self._c["primary"])
        pdf.set_line_width(2)
        pdf.line(pdf.l_margin, y, pdf.l_margin + page_w, y)
        pdf.ln(12)

        # PAN / GSTIN boxes
        y = pdf.get_y()
        half = page_w / 2
        self._box(pdf, pdf.l_margin, y, half, 40, "panel", "border")
        self._box(pdf, pdf.l_margin + half, y, half, 40, "panel", "border")
        pdf.set_text_color(*self._c["text"])
        pdf.set_font("Helvetica", "B", 10)
        pdf.set_xy(pdf.l_margin + 15, y + 13)
        pdf.cell(half - 30, 14, f"PAN NO: {COMPANY_PAN}")
        pdf.set_xy(pdf.l_margin + half + 15, y + 13)
        pdf.cell(half - 30, 14, f"GSTIN: {COMPANY_GSTIN}")
        pdf.set_y(y + 40 + 16)

    def _draw_bill_info(self, pdf: FPDF, page_w: float, bill: Bill) -> None:
        x = pdf.l_margin
        y = pdf.get_y()
        to_w = page_w * 0.6
        info_w = page_w - to_w - 20

        self._box(pdf, x, y, to_w, 80, "panel", "border")
        pdf.set_text_color(*self._c["text"])
        pdf.set_font("Helvetica", "B", 12)
        pdf.set_xy(x + 15, y + 8)
        pdf.cell(to_w - 30, 16, "TO M/S:")
        self._box(pdf, x + 15, y + 30, to_w - 30, 40, "white", "border")
        pdf.set_font("Helvetica", "B", 11)
        pdf.set_xy(x + 25, y + 36)
        pdf.multi_cell(to_w - 50, 14, _latin1(bill.to_ms), max_line_height=14)

        info_x = x + to_w + 20
        self._box(pdf, info_x, y, info_w, 80, "panel", "border")
        for offset, label, value in ((15, "BILL NO:", bill.bill_no), (40, "DATE:", bill.date)):
            pdf.set_xy(info_x + 15, y + offset)
            pdf.set_font("Helvetica", "B", 10)
            pdf.set_text_color(*self._c["text"])
            pdf.cell(60, 14, label)
            pdf.set_text_color(*self._c["accent"])
            pdf.cell(info_w - 90, 14, _latin1(value))

        pdf.set_y(y + 80 + 20)

    def _draw_table_header(self, pdf: FPDF) -> None:
        pdf.set_fill_color(*self._c["primary"])
        pdf.set_draw_color(*self._c["white"])
        pdf.set_line_width(0.5)
        pdf.set_text_color(*self._c["white"])
        pdf.set_font("Helvetica", "B", 8)
        for width, header in zip(self._widths, TABLE_HEADERS):
            pdf.cell(width, HEADER_ROW_H, header, border=1, align="C", fill=True)
        pdf.ln(HEADER_ROW_H)

    def _fit(self, pdf: FPDF, text: str, width: float) -> str:
        """Shorten text to the cell width, marking any cut with "..."."""
        text = _latin1(text)
        limit = width - 4
        if pdf.get_string_width(text) <= limit:
            return text
        while text and pdf.get_string_width(text.rstrip() + ELLIPSIS) > limit:
            text = text[:-1]
        return text.rstrip() + ELLIPSIS if text else ""

    def _draw_table(self, pdf: FPDF, bill: Bill) -> None:
        self._ensure_space(pdf, HEADER_ROW_H + ROW_H)
        self._draw_table_header(pdf)

        for index, row in enumerate(build_table_rows(bill)):
            if self._ensure_space(pdf, ROW_H):
                self._draw_table_header(pdf)
            fill = "row_alt" if index % 2 == 0 else "white"
            pdf.set_fill_color(*self._c[fill])
            pdf.set_draw_color(*self._c["border"])
            pdf.set_text_color(*self._c["text"])
            pdf.set_font("Helvetica", "", 8)
            for width, value in zip(self._widths, row.cells):
                pdf.cell(width, ROW_H, self._fit(pdf, value, width), border=1, align="C", fill=True)
            pdf.ln(ROW_H)

        if self._ensure_space(pdf, TOTAL_ROW_H):
            self._draw_table_header(pdf)
        label_w = sum(self._widths[:-2])
        pdf.set_fill_color(*self._c["panel"])
        pdf.set_draw_color(*self._c["primary"])
        pdf.set_text_color(*self._c["text"])
        pdf.set_font("Helvetica", "B", 10)
        pdf.cell(label_w, TOTAL_ROW_H, "GRAND TOTAL  ", border=1, align="R", fill=True)
        pdf.cell(self._widths[-2], TOTAL_ROW_H, "", border=1, fill=True)
        pdf.set_text_color(*self._c["primary"])
        pdf.cell(
            self._widths[-1],
            TOTAL_ROW_H,
            self._fit(pdf, format_amount(bill.grand_total), self._widths[-1]),
            border=1,
            align="R",
            fill=True,
            new_x="LMARGIN",
            new_y="NEXT",
        )

    def _draw_totals(self, pdf: FPDF, page_w: float, bill: Bill) -> None:
        pdf.ln(10)
        self._ensure_space(pdf, 60)
        x = pdf.l_margin
        y = pdf.get_y()
        words_w = page_w * 0.64
        total_w = page_w - words_w - 20

        self._box(pdf, x, y, words_w, 60, "panel", "border")
        pdf.set_xy(x + 10, y + 8)
        pdf.set_font("Helvetica", "B", 10)
        pdf.set_text_color(*self._c["text"])
        pdf.cell(words_w - 20, 14, "Amount In Words:")
        pdf.set_xy(x + 10, y + 26)
        pdf.set_font("Helvetica", "B", 8)
        pdf.set_text_color(*self._c["accent"])
        pdf.multi_cell(words_w - 20, 11, _latin1(bill.amount_in_words), max_line_height=11)

        total_x = x + words_w + 20
        self._box(pdf, total_x, y, total_w, 60, "primary", "primary")
        pdf.set_text_color(*self._c["white"])
        pdf.set_font("Helvetica", "", 10)
        pdf.set_xy(total_x, y + 10)
        pdf.cell(total_w, 14, "TOTAL AMOUNT", align="C")
        pdf.set_font("Helvetica", "B", 14)
        pdf.set_xy(total_x, y + 30)
        pdf.cell(total_w, 20, self._fit(pdf, format_grand_total(bill.grand_total), total_w), align="C")

        pdf.set_y(y + 60 + 20)

    def _draw_footer(self, pdf: FPDF, page_w: float, bill: Bill, signature_png: bytes | None) -> None:
        self._ensure_space(pdf, 110)
        x = pdf.l_margin
        y = pdf.get_y()

        self._box(pdf, x, y, page_w / 2, 100, "panel", "border")
        pdf.set_xy(x + 10, y + 8)
        pdf.set_font("Helvetica", "B", 10)
        pdf.set_text_color(*self._c["primary"])
        pdf.cell(page_w / 2 - 20, 14, "Bank Details:")
        pdf.set_font("Helvetica", "", 9)
        pdf.set_text_color(*self._c["text"])
        for offset, line in enumerate(BANK_DETAILS):
            pdf.set_xy(x + 10, y + 28 + offset * 15)
            pdf.cell(page_w / 2 - 20, 12, line)

        # Drawn in the panel colour by default so it disappears on paper.
        sign_x = x + page_w / 2 + 20
        pdf.set_text_color(*self._c["panel" if self.faint_signatures else "text"])
        pdf.set_font("Helvetica", "", 9)
        pdf.set_xy(sign_x, y + 28)
        pdf.cell(page_w / 2 - 20, 12, _latin1(f"Checked By: {bill.checked_by or 'ADMIN'}"))
        pdf.set_xy(sign_x, y + 58)
        pdf.cell(page_w / 2 - 20, 12, _latin1(f"Prepared By: {bill.prepared_by or 'ARC'}"))

        if signature_png:
            pdf.image(BytesIO(signature_png), x=x + page_w - 90, y=y + 20, w=80)

        pdf.set_xy(x + page_w / 2, y + 85)
        pdf.set_font("Helvetica", "B", 10)
        pdf.set_text_color(*self._c["primary"])
        pdf.cell(page_w / 2, 14, f"For {COMPANY_NAME.upper()}", align="R")
