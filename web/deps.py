from __future__ import annotations

import logging

from fastapi import Request
from starlette.responses import Response

from roadbill.repositories.factory import get_bill_repository
from roadbill.services.bill_service import BillService
from roadbill.services.image_service import ImageService
from roadbill.settings import settings
from roadbill.storage.factory import get_storage
from web.flash import get_flashed_messages

logger = logging.getLogger(__name__)


def get_image_service() -> ImageService:
    return ImageService(get_storage(), settings.images_prefix)


def get_bill_service() -> BillService:
    return BillService(get_bill_repository(), get_image_service())


def render(request: Request, template_name: str, context: dict | None = None, status_code: int = 200) -> Response:
    from web.app import templates

    logger.debug("Rendering %s", template_name)
    ctx = context or {}
    ctx["request"] = request
    ctx["messages"] = get_flashed_messages(request)
    return templates.TemplateResponse(request, template_name, ctx, status_code=status_code)
