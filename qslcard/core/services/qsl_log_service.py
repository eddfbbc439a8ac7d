"""
QSL log service for QSL Card Manager.

Handles listing, editing and importing an operator's contact logs.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from ..database.models import QslLog
from ..errors import ImportFormatError, PayloadTooLargeError, ValidationError
from ..importers import band_for_frequency, parse_upload
from ..logging import get_logger
from ..repositories.qsl_log_repository import (
    SORTABLE_FIELDS,
    DuplicateKey,
    QslLogRepository,
    duplicate_key,
)
from .base import BaseService

logger = get_logger("core.services.qsl_log")

TEXT_FIELDS = (
    "contact_name",
    "frequency",
    "mode",
    "band",
    "time",
    "rst_sent",
    "rst_received",
    "power",
    "antenna",
    "qth",
    "locator",
    "notes",
)
FLAG_FIELDS = ("qsl_sent", "qsl_received")
EDITABLE_FIELDS = ("contact_call", "date") + TEXT_FIELDS + FLAG_FIELDS

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):?([0-5]\d)(?::?[0-5]\d)?$")
MAX_ERRORS_REPORTED = 20


@dataclass
class LogPage:
    """One page of search results."""

    logs: List[QslLog]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.page_size else 0


@dataclass
class ImportSummary:
    """Outcome of importing an uploaded log file."""

    imported: int
    total: int
    duplicates: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        return self.total - self.imported

    @property
    def message(self) -> str:
        return f"Imported {self.imported} of {self.total} records"


class QslLogService(BaseService[QslLog]):
    """Service for an operator's contact logs."""

    not_found_message = "QSL log not found"

    def __init__(self, repository: QslLogRepository):
        super().__init__(repository)
        self.repository: QslLogRepository = repository

    def validate_business_rules(
        self, data: Dict[str, Any], partial: bool = False
    ) -> Dict[str, Any]:
        """
        Normalize log fields.

        Calls and modes are uppercased, text fields trimmed with ``None``
        stored as an empty string, times normalized to ``HH:MM`` and a
        blank band derived from the frequency.

        Raises:
            ValidationError: If the call or date is missing, or a time is
                malformed
        """
        values = {k: v for k, v in data.items() if k in EDITABLE_FIELDS}

        if "contact_call" in values or not partial:
            call = (values.get("contact_call") or "").strip().upper()
            if not call:
                raise ValidationError(
                    "Contact callsign is required", details={"field": "contactCall"}
                )
            values["contact_call"] = call

        if ("date" in values or not partial) and values.get("date") is None:
            raise ValidationError("Date is required", details={"field": "date"})

        for name in TEXT_FIELDS:
            if name in values or not partial:
                values[name] = (values.get(name) or "").strip()

        if "mode" in values:
            values["mode"] = values["mode"].upper()

        if values.get("time"):
            match = TIME_PATTERN.match(values["time"])
            if not match:
                raise ValidationError(
                    "Time must be HH:MM in UTC", details={"field": "time"}
                )
            values["time"] = f"{match.group(1)}:{match.group(2)}"

        if "band" in values and not values["band"] and values.get("frequency"):
            values["band"] = band_for_frequency(values["frequency"]) or ""

        for name in FLAG_FIELDS:
            if name in values or not partial:
                values[name] = bool(values.get(name))

        return values

    async def list_logs(
        self,
        user_id: int,
        page: int = 1,
        page_size: int = 20,
        search: Optional[str] = None,
        sort_by: str = "date",
        sort_order: str = "desc",
    ) -> LogPage:
        """
        Get one page of the user's logs.

        Raises:
            ValidationError: If the sort field or order is unknown
        """
        if sort_by not in SORTABLE_FIELDS:
            raise ValidationError(
                f"Cannot sort by {sort_by!r}",
                details={"allowed": sorted(SORTABLE_FIELDS)},
            )
        sort_order = sort_order.lower()
        if sort_order not in ("asc", "desc"):
            raise ValidationError("sortOrder must be 'asc' or 'desc'")

        logs, total = await self.repository.search(
            user_id,
            page=page,
            page_size=page_size,
            search=search,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        return LogPage(logs=logs, total=total, page=page, page_size=page_size)

    async def create_log(self, user_id: int, data: Dict[str, Any]) -> QslLog:
        """Create a log entry owned by the user."""
        values = self.validate_business_rules(data)
        log = await self.repository.create(user_id=user_id, **values)
        logger.info("QSL log created", user_id=user_id, log_id=log.id)
        return log

    async def get_log(self, user_id: int, log_id: int) -> QslLog:
        """
        Get one of the user's log entries.

        Raises:
            NotFoundError: If the log is missing or owned by someone else
        """
        return self.ensure_found(await self.repository.get_for_user(log_id, user_id))

    async def update_log(
        self, user_id: int, log_id: int, changes: Dict[str, Any]
    ) -> QslLog:
        """Apply a partial update to one of the user's logs."""
        log = await self.get_log(user_id, log_id)
        values = self.validate_business_rules(changes, partial=True)
        log = await self.repository.save(log, **values)
        logger.info(
            "QSL log updated", user_id=user_id, log_id=log_id, fields=sorted(values)
        )
        return log

    async def delete_log(self, user_id: int, log_id: int) -> None:
        """Delete one of the user's logs."""
        await self.get_log(user_id, log_id)
        await self.repository.delete(log_id)
        logger.info("QSL log deleted", user_id=user_id, log_id=log_id)

    async def import_file(
        self,
        user_id: int,
        filename: str,
        content: bytes,
        max_bytes: Optional[int] = None,
    ) -> ImportSummary:
        """
        Import an ADIF or CSV file into the user's log.

        Contacts already stored, or repeated within the file, are skipped.

        Raises:
            PayloadTooLargeError: If the file exceeds ``max_bytes``
            ImportFormatError: If the format is unsupported or nothing is usable
        """
        if max_bytes is not None and len(content) > max_bytes:
            raise PayloadTooLargeError(
                f"File exceeds the {max_bytes} byte upload limit"
            )
        if not content.strip():
            raise ImportFormatError("Uploaded file is empty")

        result = parse_upload(filename, content)
        if not result.records:
            raise ImportFormatError(
                "No valid records found",
                details={"errors": result.errors[:MAX_ERRORS_REPORTED]},
            )

        seen: Set[DuplicateKey] = await self.repository.existing_keys(
            user_id, {record.contact_call for record in result.records}
        )
        new_logs: List[QslLog] = []
        duplicates = 0
        for record in result.records:
            key = duplicate_key(
                record.contact_call, record.date, record.time, record.band, record.mode
            )
            if key in seen:
                duplicates += 1
                continue
            seen.add(key)
            new_logs.append(QslLog(user_id=user_id, **record.to_dict()))

        imported = await self.repository.add_all(new_logs) if new_logs else 0
        summary = ImportSummary(
            imported=imported,
            total=result.total,
            duplicates=duplicates,
            errors=result.errors[:MAX_ERRORS_REPORTED],
        )
        logger.info(
            "Log file imported",
            user_id=user_id,
            filename=filename,
            imported=summary.imported,
            total=summary.total,
            duplicates=duplicates,
        )
        return summary
