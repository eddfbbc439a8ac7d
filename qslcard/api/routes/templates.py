"""
Card template endpoints.

Templates are HTML with ``{{token}}`` placeholders plus CSS. Operators see
their own templates and, on request, public ones; only owners may change
them.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import HTMLResponse

from ...core.auth.models import User
from ...core.config import get_config
from ...core.dependencies import get_current_user, get_template_service
from ...core.services.template_service import TemplateService
from ..models import (
    MessageResponse,
    TemplateCreate,
    TemplateEnvelope,
    TemplateListResponse,
    TemplatePreviewRequest,
    TemplateResponse,
    TemplateUpdate,
)

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("", response_model=TemplateListResponse)
async def list_templates(
    include_public: bool = Query(False, alias="includePublic"),
    user: User = Depends(get_current_user),
    service: TemplateService = Depends(get_template_service),
) -> TemplateListResponse:
    """List the operator's templates, default first."""
    templates = await service.list_templates(user.id, include_public=include_public)
    return TemplateListResponse(
        templates=[TemplateResponse.model_validate(t) for t in templates]
    )


@router.post(
    "", response_model=TemplateEnvelope, status_code=status.HTTP_201_CREATED
)
async def create_template(
    body: TemplateCreate,
    user: User = Depends(get_current_user),
    service: TemplateService = Depends(get_template_service),
) -> TemplateEnvelope:
    """Create a template. A new default replaces the previous one."""
    template = await service.create_template(user.id, body.model_dump())
    return TemplateEnvelope(
        message="Template created", template=TemplateResponse.model_validate(template)
    )


@router.get("/fields")
async def get_fields(user: User = Depends(get_current_user)) -> Dict[str, Any]:
    """Fields usable as ``{{token}}`` placeholders, with sample values."""
    return TemplateService.available_fields()


@router.get("/default")
async def get_default(user: User = Depends(get_current_user)) -> Dict[str, str]:
    """Starter template content."""
    return TemplateService.default_template()


@router.post("/preview", response_class=HTMLResponse)
async def preview_unsaved(
    body: TemplatePreviewRequest, user: User = Depends(get_current_user)
) -> HTMLResponse:
    """Render unsaved template content as an HTML page."""
    return HTMLResponse(
        TemplateService.preview_document(body.html_content, body.css_content, body.data)
    )


@router.get("/{template_id}", response_model=TemplateResponse)
async def get_template(
    template_id: int,
    user: User = Depends(get_current_user),
    service: TemplateService = Depends(get_template_service),
) -> TemplateResponse:
    """Get a template the operator owns or that is public."""
    return TemplateResponse.model_validate(
        await service.get_visible(user.id, template_id)
    )


@router.put("/{template_id}", response_model=TemplateEnvelope)
async def update_template(
    template_id: int,
    body: TemplateUpdate,
    user: User = Depends(get_current_user),
    service: TemplateService = Depends(get_template_service),
) -> TemplateEnvelope:
    """Change the fields present in the body of an owned template."""
    template = await service.update_template(
        user.id, template_id, body.model_dump(exclude_unset=True)
    )
    return TemplateEnvelope(
        message="Template updated", template=TemplateResponse.model_validate(template)
    )


@router.delete("/{template_id}", response_model=MessageResponse)
async def delete_template(
    template_id: int,
    user: User = Depends(get_current_user),
    service: TemplateService = Depends(get_template_service),
) -> MessageResponse:
    """Delete an owned template."""
    await service.delete_template(user.id, template_id)
    return MessageResponse(message="Template deleted")


@router.get("/{template_id}/preview", response_class=HTMLResponse)
async def preview_template(
    template_id: int,
    user: User = Depends(get_current_user),
    service: TemplateService = Depends(get_template_service),
) -> HTMLResponse:
    """Render a stored template with sample data."""
    template = await service.get_visible(user.id, template_id)
    return HTMLResponse(
        TemplateService.preview_document(template.html_content, template.css_content)
    )


@router.get("/{template_id}/png")
async def preview_template_png(
    template_id: int,
    user: User = Depends(get_current_user),
    service: TemplateService = Depends(get_template_service),
) -> Response:
    """Rasterize a stored template with sample data."""
    template = await service.get_visible(user.id, template_id)
    content = await service.preview_png(template, zoom=get_config().export.png_zoom)
    return Response(content=content, media_type="image/png")
