"""
Export endpoints.

Produce card data for client-side rendering, or finished PDF and PNG
documents rendered on the server.
"""

from typing import Any, Dict
from urllib.parse import quote

from fastapi import APIRouter, Depends, Response

from ...core.auth.models import User
from ...core.dependencies import get_current_user, get_export_service
from ...core.logging import get_logger
from ...core.services.export_service import ExportedFile, ExportService
from ..models import (
    CardSheetExportRequest,
    ExportRequest,
    PngExportRequest,
    TableExportRequest,
    TemplateExportRequest,
)

router = APIRouter(prefix="/export", tags=["export"])
logger = get_logger("api.routes.export")


def content_disposition(filename: str) -> str:
    """
    Attachment header value for ``filename``.

    Header values are Latin-1, so non-ASCII names are sent as an RFC 5987
    ``filename*`` parameter next to an ASCII fallback.
    """
    fallback = "".join(
        c if c.isascii() and c.isprintable() and c not in '"\\' else "_"
        for c in filename
    )
    if fallback == filename:
        return f'attachment; filename="{filename}"'
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


def _download(exported: ExportedFile) -> Response:
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={"Content-Disposition": content_disposition(exported.filename)},
    )


@router.post("/pdf")
async def export_data(
    body: ExportRequest,
    user: User = Depends(get_current_user),
    service: ExportService = Depends(get_export_service),
) -> Dict[str, Any]:
    """Template and card data for the selected logs."""
    return await service.export_data(user, body.template_id, body.log_ids, body.format)


@router.post("/pdf/table")
async def export_table_pdf(
    body: TableExportRequest,
    user: User = Depends(get_current_user),
    service: ExportService = Depends(get_export_service),
) -> Response:
    """The selected logs as a paginated table."""
    exported = await service.table_pdf(
        user, body.log_ids, template_id=body.template_id, paper=body.format
    )
    logger.info("Table PDF exported", user_id=user.id, logs=len(body.log_ids))
    return _download(exported)


@router.post("/pdf/cards")
async def export_card_sheet_pdf(
    body: CardSheetExportRequest,
    user: User = Depends(get_current_user),
    service: ExportService = Depends(get_export_service),
) -> Response:
    """The selected logs as printable card sheets."""
    exported = await service.card_sheet_pdf(
        user, body.log_ids, paper=body.format, cards_per_page=body.cards_per_page
    )
    logger.info("Card sheet PDF exported", user_id=user.id, logs=len(body.log_ids))
    return _download(exported)


@router.post("/pdf/template")
async def export_template_pdf(
    body: TemplateExportRequest,
    user: User = Depends(get_current_user),
    service: ExportService = Depends(get_export_service),
) -> Response:
    """The selected logs rendered through a card template, one card per page."""
    exported = await service.template_pdf(user, body.template_id, body.log_ids)
    logger.info("Template PDF exported", user_id=user.id, logs=len(body.log_ids))
    return _download(exported)


@router.post("/png")
async def export_png(
    body: PngExportRequest,
    user: User = Depends(get_current_user),
    service: ExportService = Depends(get_export_service),
) -> Response:
    """One log rendered through a card template as an image."""
    return _download(await service.template_png(user, body.template_id, body.log_id))
