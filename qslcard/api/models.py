"""
Request and response models for the QSL Card Manager API.

Bodies use camelCase on the wire; snake_case names are accepted on input.
"""

import datetime as dt
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

MAX_EXPORT_LOGS = 500


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class ErrorResponse(BaseModel):
    """
    Standardized error response.

    This provides a consistent error format across all endpoints.
    """

    detail: Any = Field(..., description="Human-readable error message")
    error_code: Optional[str] = Field(None, description="Machine-readable error code")
    details: Optional[Dict[str, Any]] = Field(
        None, description="Additional error details"
    )
    path: Optional[str] = Field(None, description="Request path that caused the error")


class MessageResponse(CamelModel):
    """Plain acknowledgement."""

    message: str


class HealthResponse(CamelModel):
    """Health check response."""

    status: str = Field(..., description="Overall health status")
    timestamp: dt.datetime = Field(..., description="Health check timestamp")
    version: Optional[str] = Field(None, description="Service version")
    environment: Optional[str] = Field(None, description="Current environment")
    database: Optional[str] = Field(None, description="Database status")


# Auth


class UserInfo(CamelModel):
    """Public account details."""

    id: int
    email: str
    username: str
    callsign: Optional[str] = None
    name: Optional[str] = None


class ProfileResponse(UserInfo):
    """Account details with the station profile."""

    qth: Optional[str] = None
    locator: Optional[str] = None
    power: Optional[str] = None
    antenna: Optional[str] = None
    created_at: Optional[dt.datetime] = None


class RegisterRequest(CamelModel):
    """New account registration."""

    email: EmailStr
    username: str = Field(
        ..., min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$"
    )
    password: str = Field(..., min_length=1, max_length=128)
    callsign: Optional[str] = Field(None, max_length=20)
    name: Optional[str] = Field(None, max_length=100)


class LoginRequest(CamelModel):
    """Login with a username, email or callsign."""

    username: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("username", "identifier", "email"),
        description="Username, email or callsign",
    )
    password: str = Field(..., min_length=1)


class AuthResponse(CamelModel):
    """Result of login or registration."""

    message: str
    user: UserInfo


class ProfileUpdateRequest(CamelModel):
    """Station profile replacement. Name and callsign are required."""

    name: Optional[str] = Field(None, max_length=100)
    callsign: Optional[str] = Field(
        None,
        max_length=20,
        validation_alias=AliasChoices("callsign", "callSign", "call_sign"),
    )
    qth: Optional[str] = Field(None, max_length=100)
    locator: Optional[str] = Field(None, max_length=10)
    power: Optional[str] = Field(None, max_length=32)
    antenna: Optional[str] = Field(None, max_length=100)


class ProfileEnvelope(CamelModel):
    """Updated profile with a message."""

    message: str
    user: ProfileResponse


# QSL logs


class QslLogFields(CamelModel):
    """Optional log fields shared by create and update."""

    contact_name: Optional[str] = Field(None, max_length=100)
    frequency: Optional[str] = Field(None, max_length=32)
    mode: Optional[str] = Field(None, max_length=32)
    band: Optional[str] = Field(None, max_length=16)
    time: Optional[str] = Field(None, max_length=8, description="UTC time, HH:MM")
    rst_sent: Optional[str] = Field(None, max_length=8)
    rst_received: Optional[str] = Field(None, max_length=8)
    power: Optional[str] = Field(None, max_length=32)
    antenna: Optional[str] = Field(None, max_length=100)
    qth: Optional[str] = Field(None, max_length=100)
    locator: Optional[str] = Field(None, max_length=10)
    notes: Optional[str] = Field(None, max_length=2000)
    qsl_sent: Optional[bool] = None
    qsl_received: Optional[bool] = None


class QslLogCreate(QslLogFields):
    """New log entry."""

    contact_call: str = Field(..., min_length=1, max_length=32)
    date: dt.date


class QslLogUpdate(QslLogFields):
    """Partial log update; only fields present in the body change."""

    contact_call: Optional[str] = Field(None, min_length=1, max_length=32)
    date: Optional[dt.date] = None


class LegacyQslLogCreate(CamelModel):
    """Log entry where every core contact field is required."""

    contact_call: str = Field(..., min_length=1, max_length=32)
    frequency: str = Field(..., min_length=1, max_length=32)
    mode: str = Field(..., min_length=1, max_length=32)
    date: dt.date
    time: str = Field(..., min_length=1, max_length=8)
    rst_sent: str = Field(..., min_length=1, max_length=8)
    rst_received: str = Field(..., min_length=1, max_length=8)
    band: str = Field(..., min_length=1, max_length=16)
    contact_name: Optional[str] = Field(None, max_length=100)
    power: Optional[str] = Field(None, max_length=32)
    antenna: Optional[str] = Field(None, max_length=100)
    qth: Optional[str] = Field(None, max_length=100)
    locator: Optional[str] = Field(None, max_length=10)
    notes: Optional[str] = Field(None, max_length=2000)
    qsl_sent: bool = False
    qsl_received: bool = False


class QslLogResponse(CamelModel):
    """Stored log entry."""

    id: int
    user_id: int
    contact_call: str
    contact_name: str
    frequency: str
    mode: str
    band: str
    date: dt.date
    time: str
    rst_sent: str
    rst_received: str
    power: str
    antenna: str
    qth: str
    locator: str
    notes: str
    qsl_sent: bool
    qsl_received: bool
    created_at: dt.datetime
    updated_at: dt.datetime


class QslLogEnvelope(CamelModel):
    """Single log entry with a message."""

    message: str
    log: QslLogResponse


class QslLogListResponse(CamelModel):
    """One page of log entries."""

    logs: List[QslLogResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class LegacyPagination(CamelModel):
    """Pagination block of the legacy listing."""

    page: int
    limit: int
    total: int
    total_pages: int


class LegacyQslLogListResponse(CamelModel):
    """Legacy listing shape."""

    logs: List[QslLogResponse]
    pagination: LegacyPagination


class ImportResponse(CamelModel):
    """Result of a log file upload."""

    message: str
    imported: int
    total: int
    skipped: int
    duplicates: int
    errors: List[str] = Field(default_factory=list)


# Templates


class TemplateCreate(CamelModel):
    """New card template."""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    html_content: str = Field(..., min_length=1)
    css_content: Optional[str] = None
    is_default: bool = False
    is_public: bool = False


class TemplateUpdate(CamelModel):
    """Partial template update."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    html_content: Optional[str] = Field(None, min_length=1)
    css_content: Optional[str] = None
    is_default: Optional[bool] = None
    is_public: Optional[bool] = None


class TemplateResponse(CamelModel):
    """Stored card template."""

    id: int
    user_id: int
    name: str
    description: Optional[str] = None
    html_content: str
    css_content: Optional[str] = None
    is_default: bool
    is_public: bool
    created_at: dt.datetime
    updated_at: dt.datetime


class TemplateEnvelope(CamelModel):
    """Single template with a message."""

    message: str
    template: TemplateResponse


class TemplateListResponse(CamelModel):
    """Templates visible to the caller."""

    templates: List[TemplateResponse]


class TemplatePreviewRequest(CamelModel):
    """Unsaved template content to preview."""

    html_content: str = Field(..., min_length=1)
    css_content: Optional[str] = None
    data: Optional[Dict[str, str]] = None


# Export


class ExportRequest(CamelModel):
    """Template plus logs to export as card data."""

    template_id: int
    log_ids: List[int] = Field(..., min_length=1, max_length=MAX_EXPORT_LOGS)
    format: str = "A4"


class TableExportRequest(CamelModel):
    """Logs to export as a table PDF."""

    log_ids: List[int] = Field(..., min_length=1, max_length=MAX_EXPORT_LOGS)
    template_id: Optional[int] = None
    format: str = "A4"


class CardSheetExportRequest(CamelModel):
    """Logs to print as card sheets."""

    log_ids: List[int] = Field(..., min_length=1, max_length=MAX_EXPORT_LOGS)
    format: str = "A4"
    cards_per_page: int = 1


class TemplateExportRequest(CamelModel):
    """Logs to render through a card template."""

    template_id: int
    log_ids: List[int] = Field(..., min_length=1, max_length=MAX_EXPORT_LOGS)


class PngExportRequest(CamelModel):
    """One log to render through a card template as an image."""

    template_id: int
    log_id: int
