"""
CSV log parsing.

The first row is always a header. When it names the columns (``call``,
``date``, ``rst_sent`` ...), values are read by name. Otherwise columns are
taken in the fixed order of ``POSITIONAL_COLUMNS`` and a row needs at least
``MIN_POSITIONAL_VALUES`` values.
"""

import csv
import io
import re
from typing import Dict, List, Optional

from ..logging import get_logger
from .common import (
    DEFAULT_MODE,
    DEFAULT_RST,
    ImportedLog,
    ImportResult,
    normalize_time,
    parse_log_date,
    today,
)

logger = get_logger("core.importers.csv")

POSITIONAL_COLUMNS = [
    "call",
    "name",
    "freq",
    "mode",
    "date",
    "time",
    "rst_sent",
    "rst_rcvd",
    "band",
    "power",
    "antenna",
    "qth",
    "locator",
    "notes",
]
MIN_POSITIONAL_VALUES = 6

HEADER_ALIASES = {
    "call": "call",
    "callsign": "call",
    "contactcall": "call",
    "name": "name",
    "contactname": "name",
    "freq": "freq",
    "frequency": "freq",
    "mode": "mode",
    "date": "date",
    "qsodate": "date",
    "time": "time",
    "timeon": "time",
    "utc": "time",
    "rstsent": "rst_sent",
    "rsts": "rst_sent",
    "rstrcvd": "rst_rcvd",
    "rstr": "rst_rcvd",
    "rstreceived": "rst_rcvd",
    "band": "band",
    "power": "power",
    "txpwr": "power",
    "antenna": "antenna",
    "ant": "antenna",
    "qth": "qth",
    "locator": "locator",
    "grid": "locator",
    "gridsquare": "locator",
    "notes": "notes",
    "comment": "notes",
    "comments": "notes",
}


def _normalize_header(cell: str) -> str:
    return re.sub(r"[^a-z0-9]", "", cell.strip().lower())


def header_mapping(header: List[str]) -> Optional[Dict[int, str]]:
    """
    Map column indexes to field names if the header is recognizable.

    Returns:
        Index to field mapping, or None when no call column is named
    """
    mapping: Dict[int, str] = {}
    for index, cell in enumerate(header):
        field = HEADER_ALIASES.get(_normalize_header(cell))
        if field and field not in mapping.values():
            mapping[index] = field
    if "call" not in mapping.values():
        return None
    return mapping


def row_to_log(values: Dict[str, str]) -> ImportedLog:
    """
    Build a log entry from named CSV values.

    Raises:
        ValueError: If the call is missing or the date is unreadable
    """
    call = values.get("call", "")
    if not call:
        raise ValueError("missing call")

    raw_date = values.get("date", "")
    return ImportedLog(
        contact_call=call,
        contact_name=values.get("name", ""),
        frequency=values.get("freq", ""),
        mode=values.get("mode") or DEFAULT_MODE,
        band=values.get("band", ""),
        date=parse_log_date(raw_date) if raw_date else today(),
        time=normalize_time(values.get("time")),
        rst_sent=values.get("rst_sent") or DEFAULT_RST,
        rst_received=values.get("rst_rcvd") or DEFAULT_RST,
        power=values.get("power", ""),
        antenna=values.get("antenna", ""),
        qth=values.get("qth", ""),
        locator=values.get("locator", ""),
        notes=values.get("notes", ""),
    )


def parse_csv(text: str) -> ImportResult:
    """
    Parse CSV text into log entries.

    Args:
        text: Decoded file contents

    Returns:
        ImportResult with the usable rows and per-row errors
    """
    result = ImportResult()
    reader = csv.reader(io.StringIO(text))

    header = next(reader, None)
    mapping = header_mapping(header) if header else None

    # Line numbers count the header as line 1
    for line_number, row in enumerate(reader, start=2):
        cells = [cell.strip() for cell in row]
        if not any(cells):
            continue
        result.total += 1

        if mapping is None:
            if len(cells) < MIN_POSITIONAL_VALUES:
                result.errors.append(
                    f"Line {line_number}: expected at least "
                    f"{MIN_POSITIONAL_VALUES} values, got {len(cells)}"
                )
                continue
            values = dict(zip(POSITIONAL_COLUMNS, cells))
        else:
            values = {
                field: cells[index]
                for index, field in mapping.items()
                if index < len(cells)
            }

        try:
            result.records.append(row_to_log(values))
        except ValueError as e:
            result.errors.append(f"Line {line_number}: {e}")

    logger.info(
        "Parsed CSV file",
        total=result.total,
        valid=len(result.records),
        skipped=result.skipped,
        by_header=mapping is not None,
    )
    return result
