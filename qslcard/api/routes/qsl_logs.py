"""
QSL log endpoints kept for older clients.

Same data as ``/qsl`` but with ``limit`` paging, a nested pagination block
and stricter creation rules.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ...core.auth.models import User
from ...core.dependencies import get_current_user, get_qsl_log_service
from ...core.services.qsl_log_service import QslLogService
from ..models import (
    LegacyPagination,
    LegacyQslLogCreate,
    LegacyQslLogListResponse,
    QslLogEnvelope,
    QslLogResponse,
)

router = APIRouter(prefix="/qsl-logs", tags=["qsl"])


@router.get("", response_model=LegacyQslLogListResponse)
async def list_logs(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = Query(None, max_length=100),
    sort_by: str = Query("date", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
    user: User = Depends(get_current_user),
    service: QslLogService = Depends(get_qsl_log_service),
) -> LegacyQslLogListResponse:
    """List the operator's logs."""
    result = await service.list_logs(
        user.id,
        page=page,
        page_size=limit,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return LegacyQslLogListResponse(
        logs=[QslLogResponse.model_validate(log) for log in result.logs],
        pagination=LegacyPagination(
            page=page, limit=limit, total=result.total, total_pages=result.total_pages
        ),
    )


@router.post("", response_model=QslLogEnvelope, status_code=status.HTTP_201_CREATED)
async def create_log(
    body: LegacyQslLogCreate,
    user: User = Depends(get_current_user),
    service: QslLogService = Depends(get_qsl_log_service),
) -> QslLogEnvelope:
    """Add a contact; call, mode and band are stored uppercase."""
    data = body.model_dump()
    data["band"] = data["band"].strip().upper()
    log = await service.create_log(user.id, data)
    return QslLogEnvelope(
        message="QSL log created", log=QslLogResponse.model_validate(log)
    )
