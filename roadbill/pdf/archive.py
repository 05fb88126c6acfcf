"""Bundle several rendered bills into one download."""

from __future__ import annotations

import logging
import re
import zipfile
from collections.abc import Iterable
from io import BytesIO

from pypdf import PdfReader, PdfWriter

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r'[\\/:*?"<>|\s]+')


def bill_filename(bill_no: str, fallback: str = "") -> str:
    """'ARC/2024/007' -> 'Bill-ARC-2024-007.pdf'"""
    stem = _UNSAFE.sub("-", (bill_no or "").strip()).strip("-.") or _UNSAFE.sub("-", fallback) or "untitled"
    return f"Bill-{stem}.pdf"


def build_zip(documents: Iterable[tuple[str, bytes]]) -> bytes:
    """Zip (filename, pdf_bytes) pairs; repeated names get a ' (n)' suffix."""
    buf = BytesIO()
    seen: dict[str, int] = {}
    count = 0
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=9) as archive:
        for filename, data in documents:
            name = filename
            if filename in seen:
                seen[filename] += 1
                stem, dot, ext = filename.rpartition(".")
                name = f"{stem} ({seen[filename]}){dot}{ext}" if dot else f"{filename} ({seen[filename]})"
            else:
                seen[filename] = 1
            archive.writestr(name, data)
            count += 1
    logger.debug("Built zip archive with %d documents (%d bytes)", count, buf.tell())
    return buf.getvalue()


def merge_pdfs(documents: Iterable[bytes]) -> bytes:
    """Concatenate the pages of each PDF, in order, into a single PDF."""
    writer = PdfWriter()
    for data in documents:
        reader = PdfReader(BytesIO(data))
        for page in reader.pages:
            writer.add_page(page)

    output = BytesIO()
    writer.write(output)
    logger.debug("Merged %d pages into one PDF", len(writer.pages))
    return output.getvalue()
