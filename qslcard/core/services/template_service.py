"""
Card template service for QSL Card Manager.
"""

import asyncio
from typing import Any, Dict, List, Mapping, Optional

from ..database.models import CardTemplate
from ..errors import ValidationError
from ..logging import get_logger
from ..rendering import (
    AVAILABLE_FIELDS,
    DEFAULT_CSS,
    DEFAULT_HTML,
    DEFAULT_TEMPLATE_NAME,
    SAMPLE_CARD_DATA,
    build_document,
    find_tokens,
    render_template,
    render_template_png,
)
from ..repositories.card_template_repository import CardTemplateRepository
from .base import BaseService

logger = get_logger("core.services.template")

EDITABLE_FIELDS = (
    "name",
    "description",
    "html_content",
    "css_content",
    "is_default",
    "is_public",
)
MAX_NAME_LENGTH = 100


class TemplateService(BaseService[CardTemplate]):
    """Service for card templates."""

    not_found_message = "Template not found"

    def __init__(self, repository: CardTemplateRepository):
        super().__init__(repository)
        self.repository: CardTemplateRepository = repository

    def validate_business_rules(
        self, data: Dict[str, Any], partial: bool = False
    ) -> Dict[str, Any]:
        """
        Validate template fields.

        Raises:
            ValidationError: If the name or HTML content is blank
        """
        values = {k: v for k, v in data.items() if k in EDITABLE_FIELDS}

        if "name" in values or not partial:
            name = (values.get("name") or "").strip()
            if not name:
                raise ValidationError(
                    "Template name is required", details={"field": "name"}
                )
            if len(name) > MAX_NAME_LENGTH:
                raise ValidationError(
                    f"Template name must be at most {MAX_NAME_LENGTH} characters",
                    details={"field": "name"},
                )
            values["name"] = name

        if "html_content" in values or not partial:
            if not (values.get("html_content") or "").strip():
                raise ValidationError(
                    "Template HTML content is required",
                    details={"field": "htmlContent"},
                )

        for flag in ("is_default", "is_public"):
            if flag in values or not partial:
                values[flag] = bool(values.get(flag))

        return values

    async def list_templates(
        self, user_id: int, include_public: bool = False
    ) -> List[CardTemplate]:
        """List the user's templates, optionally with shared ones."""
        return await self.repository.list_for_user(user_id, include_public)

    async def create_template(
        self, user_id: int, data: Dict[str, Any]
    ) -> CardTemplate:
        """
        Create a template. A new default replaces the previous default.
        """
        values = self.validate_business_rules(data)
        if values["is_default"]:
            await self.repository.clear_default(user_id)
        template = await self.repository.create(user_id=user_id, **values)
        logger.info(
            "Card template created",
            user_id=user_id,
            template_id=template.id,
            unknown_tokens=self.unknown_tokens(template.html_content),
        )
        return template

    async def get_visible(self, user_id: int, template_id: int) -> CardTemplate:
        """
        Get a template the user owns or that is public.

        Raises:
            NotFoundError: If no such template is visible
        """
        return self.ensure_found(
            await self.repository.get_visible(template_id, user_id)
        )

    async def get_owned(self, user_id: int, template_id: int) -> CardTemplate:
        """
        Get a template the user owns.

        Raises:
            NotFoundError: If the template is missing or not the user's
        """
        return self.ensure_found(await self.repository.get_owned(template_id, user_id))

    async def update_template(
        self, user_id: int, template_id: int, changes: Dict[str, Any]
    ) -> CardTemplate:
        """Apply a partial update to one of the user's templates."""
        template = await self.get_owned(user_id, template_id)
        values = self.validate_business_rules(changes, partial=True)
        if values.get("is_default"):
            await self.repository.clear_default(user_id, except_id=template_id)
        template = await self.repository.save(template, **values)
        logger.info(
            "Card template updated",
            user_id=user_id,
            template_id=template_id,
            fields=sorted(values),
        )
        return template

    async def delete_template(self, user_id: int, template_id: int) -> None:
        """Delete one of the user's templates."""
        await self.get_owned(user_id, template_id)
        await self.repository.delete(template_id)
        logger.info("Card template deleted", user_id=user_id, template_id=template_id)

    @staticmethod
    def available_fields() -> Dict[str, Any]:
        """Fields usable as tokens, with sample values."""
        return {"fields": AVAILABLE_FIELDS, "sampleData": SAMPLE_CARD_DATA}

    @staticmethod
    def default_template() -> Dict[str, str]:
        """Starter template content."""
        return {
            "name": DEFAULT_TEMPLATE_NAME,
            "htmlContent": DEFAULT_HTML,
            "cssContent": DEFAULT_CSS,
        }

    @staticmethod
    def unknown_tokens(html_content: str) -> List[str]:
        """Tokens in the template that no field fills."""
        return [t for t in find_tokens(html_content) if t not in SAMPLE_CARD_DATA]

    @staticmethod
    def preview_document(
        html_content: str,
        css_content: Optional[str] = None,
        data: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Render a template as a standalone HTML page using sample data."""
        values = {**SAMPLE_CARD_DATA, **(data or {})}
        return build_document(render_template(html_content, values), css_content)

    async def preview_png(
        self,
        template: CardTemplate,
        data: Optional[Mapping[str, Any]] = None,
        zoom: float = 2.0,
    ) -> bytes:
        """Rasterize a template filled with sample data."""
        values = {**SAMPLE_CARD_DATA, **(data or {})}
        return await asyncio.to_thread(
            render_template_png,
            template.html_content,
            template.css_content,
            values,
            zoom,
        )
