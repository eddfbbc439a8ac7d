"""
Export service for QSL Card Manager.

Builds card data for selected logs and renders it as JSON, PDF or PNG.
Rendering runs in a worker thread so the event loop stays responsive.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from ..auth.models import User
from ..config import get_config
from ..database.models import CardTemplate, QslLog
from ..errors import NotFoundError
from ..logging import get_logger
from ..rendering import (
    card_data,
    render_card_sheet_pdf,
    render_log_table_pdf,
    render_template_pdf,
    render_template_png,
    resolve_paper,
)
from ..repositories.card_template_repository import CardTemplateRepository
from ..repositories.qsl_log_repository import QslLogRepository

logger = get_logger("core.services.export")

EXPORT_TITLE = "QSL Card Export"


@dataclass
class ExportedFile:
    """A rendered document ready to send."""

    filename: str
    content: bytes
    media_type: str


def export_filename(prefix: str, extension: str, when: Optional[datetime] = None) -> str:
    """Build a dated download name such as ``QSL-Export-2024-01-15.pdf``."""
    stamp = (when or datetime.now(timezone.utc)).strftime("%Y-%m-%d")
    return f"{prefix}-{stamp}.{extension}"


def _safe_name(name: str) -> str:
    cleaned = "".join(c if c.isalnum() or c in "-_" else "_" for c in name.strip())
    return cleaned or "template"


class ExportService:
    """Service turning an operator's logs into exportable documents."""

    def __init__(
        self,
        log_repository: QslLogRepository,
        template_repository: CardTemplateRepository,
    ):
        self.log_repository = log_repository
        self.template_repository = template_repository

    async def collect_logs(self, user: User, log_ids: Sequence[int]) -> List[QslLog]:
        """
        Get the user's logs among ``log_ids``; other users' IDs are ignored.

        Raises:
            NotFoundError: If none of the IDs is one of the user's logs
        """
        logs = await self.log_repository.get_many_for_user(log_ids, user.id)
        if not logs:
            raise NotFoundError("No matching QSL logs found")
        return logs

    async def resolve_template(self, user: User, template_id: int) -> CardTemplate:
        """
        Get a template owned by the user or shared publicly.

        Raises:
            NotFoundError: If the template is not visible to the user
        """
        template = await self.template_repository.get_visible(template_id, user.id)
        if template is None:
            raise NotFoundError("Template not found")
        return template

    async def card_rows(self, user: User, log_ids: Sequence[int]) -> List[Dict[str, str]]:
        """Card data for each selected log, in request order."""
        return [card_data(log, user) for log in await self.collect_logs(user, log_ids)]

    async def export_data(
        self, user: User, template_id: int, log_ids: Sequence[int], paper: str = "A4"
    ) -> Dict[str, Any]:
        """
        Assemble template and card data for client-side rendering.
        """
        paper = resolve_paper(paper)
        template = await self.resolve_template(user, template_id)
        rows = await self.card_rows(user, log_ids)
        logger.info(
            "Export data prepared",
            user_id=user.id,
            template_id=template.id,
            logs=len(rows),
        )
        return {
            "title": EXPORT_TITLE,
            "format": paper,
            "template": {
                "id": template.id,
                "name": template.name,
                "htmlContent": template.html_content,
                "cssContent": template.css_content,
            },
            "logs": rows,
            "exportTime": datetime.now(timezone.utc).isoformat(),
        }

    async def table_pdf(
        self,
        user: User,
        log_ids: Sequence[int],
        template_id: Optional[int] = None,
        paper: str = "A4",
    ) -> ExportedFile:
        """Render the selected logs as a table."""
        paper = resolve_paper(paper)
        template_name = None
        if template_id is not None:
            template_name = (await self.resolve_template(user, template_id)).name
        rows = await self.card_rows(user, log_ids)

        content = await asyncio.to_thread(
            render_log_table_pdf,
            rows,
            EXPORT_TITLE,
            template_name,
            paper,
            get_config().export.font_path,
        )
        return ExportedFile(
            export_filename("QSL-Export", "pdf"), content, "application/pdf"
        )

    async def card_sheet_pdf(
        self,
        user: User,
        log_ids: Sequence[int],
        paper: str = "A4",
        cards_per_page: int = 1,
    ) -> ExportedFile:
        """Render the selected logs as printable cards."""
        rows = await self.card_rows(user, log_ids)
        content = await asyncio.to_thread(
            render_card_sheet_pdf,
            rows,
            paper,
            cards_per_page,
            get_config().export.font_path,
        )
        return ExportedFile(
            export_filename("QSL-Cards", "pdf"), content, "application/pdf"
        )

    async def template_pdf(
        self, user: User, template_id: int, log_ids: Sequence[int]
    ) -> ExportedFile:
        """Render each selected log through a card template."""
        template = await self.resolve_template(user, template_id)
        rows = await self.card_rows(user, log_ids)
        content = await asyncio.to_thread(
            render_template_pdf, template.html_content, template.css_content, rows
        )
        return ExportedFile(
            export_filename(f"{_safe_name(template.name)}-QSL", "pdf"),
            content,
            "application/pdf",
        )

    async def template_png(
        self, user: User, template_id: int, log_id: int
    ) -> ExportedFile:
        """Render one log through a card template as a PNG image."""
        template = await self.resolve_template(user, template_id)
        (row,) = await self.card_rows(user, [log_id])
        content = await asyncio.to_thread(
            render_template_png,
            template.html_content,
            template.css_content,
            row,
            get_config().export.png_zoom,
        )
        return ExportedFile(
            f"{_safe_name(template.name)}_QSL_Card.png", content, "image/png"
        )
