"""
QSL log endpoints.

Every route is scoped to the signed-in operator; logs of other operators
behave as missing.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from ...core.config import get_config
from ...core.dependencies import get_current_user, get_qsl_log_service
from ...core.auth.models import User
from ...core.logging import get_logger
from ...core.services.qsl_log_service import QslLogService
from ..models import (
    ImportResponse,
    MessageResponse,
    QslLogCreate,
    QslLogEnvelope,
    QslLogListResponse,
    QslLogResponse,
    QslLogUpdate,
)

router = APIRouter(prefix="/qsl", tags=["qsl"])
logger = get_logger("api.routes.qsl")


@router.get("", response_model=QslLogListResponse)
async def list_logs(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100, alias="pageSize"),
    search: Optional[str] = Query(None, max_length=100),
    sort_by: str = Query("date", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
    user: User = Depends(get_current_user),
    service: QslLogService = Depends(get_qsl_log_service),
) -> QslLogListResponse:
    """
    List the operator's logs, newest first by default.

    ``search`` matches call, name, QTH, band or mode case-insensitively.
    """
    result = await service.list_logs(
        user.id,
        page=page,
        page_size=page_size,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return QslLogListResponse(
        logs=[QslLogResponse.model_validate(log) for log in result.logs],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.post("", response_model=QslLogEnvelope, status_code=status.HTTP_201_CREATED)
async def create_log(
    body: QslLogCreate,
    user: User = Depends(get_current_user),
    service: QslLogService = Depends(get_qsl_log_service),
) -> QslLogEnvelope:
    """Add a contact to the operator's log."""
    log = await service.create_log(user.id, body.model_dump())
    return QslLogEnvelope(
        message="QSL log created", log=QslLogResponse.model_validate(log)
    )


@router.post("/upload", response_model=ImportResponse)
async def upload_logs(
    file: UploadFile = File(...),
    user: User = Depends(get_current_user),
    service: QslLogService = Depends(get_qsl_log_service),
) -> ImportResponse:
    """
    Import an ADIF (``.adi``/``.adif``) or CSV log file.

    Contacts already in the log are skipped.
    """
    max_bytes = get_config().api.max_upload_bytes
    # One byte past the limit is enough to reject the file
    content = await file.read(max_bytes + 1)
    summary = await service.import_file(
        user.id, file.filename or "", content, max_bytes=max_bytes
    )
    return ImportResponse(
        message=summary.message,
        imported=summary.imported,
        total=summary.total,
        skipped=summary.skipped,
        duplicates=summary.duplicates,
        errors=summary.errors,
    )


@router.get("/{log_id}", response_model=QslLogResponse)
async def get_log(
    log_id: int,
    user: User = Depends(get_current_user),
    service: QslLogService = Depends(get_qsl_log_service),
) -> QslLogResponse:
    """Get one of the operator's logs."""
    return QslLogResponse.model_validate(await service.get_log(user.id, log_id))


@router.put("/{log_id}", response_model=QslLogEnvelope)
async def update_log(
    log_id: int,
    body: QslLogUpdate,
    user: User = Depends(get_current_user),
    service: QslLogService = Depends(get_qsl_log_service),
) -> QslLogEnvelope:
    """Change the fields present in the body."""
    log = await service.update_log(user.id, log_id, body.model_dump(exclude_unset=True))
    return QslLogEnvelope(
        message="QSL log updated", log=QslLogResponse.model_validate(log)
    )


@router.delete("/{log_id}", response_model=MessageResponse)
async def delete_log(
    log_id: int,
    user: User = Depends(get_current_user),
    service: QslLogService = Depends(get_qsl_log_service),
) -> MessageResponse:
    """Delete one of the operator's logs."""
    await service.delete_log(user.id, log_id)
    return MessageResponse(message="QSL log deleted")
