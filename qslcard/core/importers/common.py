"""
Shared types and helpers for log file importers.
"""

import re
from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import String

from ..database.models import QslLog
from ..errors import ImportFormatError
from .bands import band_for_frequency

DEFAULT_MODE = "SSB"
DEFAULT_TIME = "00:00"
DEFAULT_RST = "59"

DATE_FORMATS = ("%Y-%m-%d", "%Y%m%d", "%Y/%m/%d")
TIME_PATTERN = re.compile(r"^(\d{1,2}):?(\d{2})(?::?(\d{2}))?$")

# Bounded text columns of qsl_logs, keyed by column name
COLUMN_LIMITS: Dict[str, int] = {
    column.name: column.type.length
    for column in QslLog.__table__.columns
    if isinstance(column.type, String) and column.type.length
}


@dataclass
class ImportedLog:
    """One contact read from an uploaded file, ready to store."""

    contact_call: str
    date: date
    contact_name: str = ""
    frequency: str = ""
    mode: str = DEFAULT_MODE
    band: str = ""
    time: str = DEFAULT_TIME
    rst_sent: str = DEFAULT_RST
    rst_received: str = DEFAULT_RST
    power: str = ""
    antenna: str = ""
    qth: str = ""
    locator: str = ""
    notes: str = ""
    qsl_sent: bool = False
    qsl_received: bool = False

    def __post_init__(self) -> None:
        self.contact_call = self.contact_call.strip().upper()
        self.mode = (self.mode or DEFAULT_MODE).strip().upper()
        self.band = self.band.strip().lower()
        if not self.band and self.frequency:
            self.band = band_for_frequency(self.frequency) or ""
        self.check_lengths()

    def check_lengths(self) -> None:
        """
        Reject values that do not fit their column.

        Raises:
            ValueError: Naming the first field over its limit
        """
        for name, limit in COLUMN_LIMITS.items():
            value = getattr(self, name, None)
            if isinstance(value, str) and len(value) > limit:
                raise ValueError(f"{name} longer than {limit} characters")

    def to_dict(self) -> Dict[str, Any]:
        """Column values for a QslLog row."""
        return asdict(self)


@dataclass
class ImportResult:
    """Outcome of parsing one uploaded file."""

    records: List[ImportedLog] = field(default_factory=list)
    total: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        return self.total - len(self.records)


def today() -> date:
    """Current UTC date, used when a record has no date."""
    return datetime.now(timezone.utc).date()


def parse_log_date(value: str) -> date:
    """
    Parse a QSO date in one of the accepted formats.

    Raises:
        ValueError: If no format matches
    """
    value = value.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unrecognized date: {value!r}")


def normalize_time(value: Optional[str]) -> str:
    """
    Normalize ``HHMM``, ``HHMMSS``, ``HH:MM`` or ``HH:MM:SS`` to ``HH:MM``.

    Blank or unparseable values become ``00:00``.
    """
    if not value or not value.strip():
        return DEFAULT_TIME
    match = TIME_PATTERN.match(value.strip())
    if not match:
        return DEFAULT_TIME
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return DEFAULT_TIME
    return f"{hours:02d}:{minutes:02d}"


def detect_format(filename: Optional[str]) -> str:
    """
    Choose a parser from the upload's file name.

    Returns:
        ``"csv"`` or ``"adif"``

    Raises:
        ImportFormatError: For any other extension
    """
    name = (filename or "").strip().lower()
    if name.endswith(".csv"):
        return "csv"
    if name.endswith(".adi") or name.endswith(".adif"):
        return "adif"
    raise ImportFormatError(
        "Unsupported file format. Upload a .csv, .adi or .adif file",
        details={"filename": filename},
    )


def decode_upload(content: bytes) -> str:
    """Decode uploaded bytes as UTF-8 (BOM aware), falling back to Latin-1."""
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        return content.decode("latin-1")
