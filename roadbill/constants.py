from datetime import datetime
from zoneinfo import ZoneInfo

from roadbill.settings import settings

COMPANY_NAME = "Abhi Road Carrier"
COMPANY_TAGLINE = "Fleet Owner & Transport Contractor"
COMPANY_ADDRESS = "37/41 Nivrutti Complex A-Wing, Mumbai-Agra Road, Dwarka, Nashik-422001(MH)"
COMPANY_CONTACT = "Email: abhiroadcarrier@gmail.com | Ph.No: 9373535944"
COMPANY_PAN = "AISPP9734A"
COMPANY_GSTIN = "27AISPP9734A1ZU"

BANK_DETAILS = (
    "Indian Overseas Bank",
    "Nashik Road Branch",
    "IFSC Code: IOBA0000776",
    "Account No: 077602000007057",
)

TABLE_HEADERS = (
    "Sr.No",
    "L.R.No",
    "Date",
    "Vehicle No.",
    "Destination",
    "Invoice No.",
    "Weight",
    "Rate",
    "Extra",
    "TOTAL",
)

MIN_TABLE_ROWS = 5

SIGNATURE_IMAGE = "signature.png"
STAMP_IMAGE = "company-stamp.png"


def local_tz() -> ZoneInfo:
    return ZoneInfo(settings.timezone)


def now() -> datetime:
    return datetime.now(local_tz())


def format_display_date(value: str) -> str:
    """Normalise 'YYYY-MM-DD' to 'DD.MM.YYYY'; other strings pass through."""
    value = (value or "").strip()
    parts = value.split("-")
    if len(parts) == 3 and len(parts[0]) == 4 and all(p.isdigit() for p in parts):
        return f"{parts[2]}.{parts[1]}.{parts[0]}"
    return value


def format_input_date(value: str) -> str:
    """Convert 'DD.MM.YYYY' to 'YYYY-MM-DD' for HTML date inputs."""
    value = (value or "").strip()
    if "-" in value:
        return value
    parts = value.split(".")
    if len(parts) != 3:
        return ""
    return f"{parts[2]}-{parts[1]}-{parts[0]}"
