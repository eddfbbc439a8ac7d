"""
ADIF log parsing.

Fields are read with their declared length, so values may contain ``<``
and ``>``. Everything up to ``<EOH>`` is header and ignored; each ``<EOR>``
closes a record. A trailing record without ``<EOR>`` is still accepted.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

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

logger = get_logger("core.importers.adif")


@dataclass
class AdifSpecifier:
    """A data specifier such as ``<CALL:6>`` or ``<QSO_DATE:8:D>``."""

    field_name: str
    length: int = 0
    data_type: Optional[str] = None

    @classmethod
    def parse(cls, tag: str) -> "AdifSpecifier":
        """
        Parse the text between ``<`` and ``>``.

        Names are lowercased. A missing or malformed length reads as 0.
        """
        parts = tag.split(":")
        name = parts[0].strip().lower()
        length = 0
        if len(parts) > 1:
            try:
                length = max(int(parts[1].strip()), 0)
            except ValueError:
                length = 0
        data_type = parts[2].strip().upper() if len(parts) > 2 else None
        return cls(field_name=name, length=length, data_type=data_type)


def read_fields(text: str) -> Iterator[Tuple[str, str]]:
    """
    Yield ``(field_name, value)`` pairs in file order.

    ``eoh`` and ``eor`` markers are yielded with an empty value.
    """
    pos = 0
    while True:
        start = text.find("<", pos)
        if start == -1:
            return
        end = text.find(">", start + 1)
        if end == -1:
            return
        spec = AdifSpecifier.parse(text[start + 1 : end])
        value_start = end + 1
        value = text[value_start : value_start + spec.length]
        pos = value_start + spec.length
        yield spec.field_name, value


def read_records(text: str) -> List[Dict[str, str]]:
    """Group fields into records, dropping header fields."""
    records: List[Dict[str, str]] = []
    current: Dict[str, str] = {}
    for name, value in read_fields(text):
        if name == "eoh":
            current = {}
        elif name == "eor":
            if current:
                records.append(current)
            current = {}
        elif name:
            current[name] = value.strip()
    if current:
        records.append(current)
    return records


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().upper() == "Y"


def record_to_log(fields: Dict[str, str]) -> ImportedLog:
    """
    Map one ADIF record onto a log entry.

    Raises:
        ValueError: If the record has no call or an unreadable date
    """
    call = fields.get("call", "")
    if not call:
        raise ValueError("missing CALL")

    qso_date = fields.get("qso_date")
    log_date = parse_log_date(qso_date) if qso_date else today()

    antenna = " ".join(
        part
        for part in (
            fields.get("antenna", ""),
            fields.get("my_antenna", ""),
            fields.get("ant_az", ""),
            fields.get("ant_el", ""),
        )
        if part
    )

    return ImportedLog(
        contact_call=call,
        contact_name=fields.get("name", ""),
        frequency=fields.get("freq", ""),
        mode=fields.get("mode") or DEFAULT_MODE,
        band=fields.get("band", ""),
        date=log_date,
        time=normalize_time(fields.get("time_on")),
        rst_sent=fields.get("rst_sent") or DEFAULT_RST,
        rst_received=fields.get("rst_rcvd") or DEFAULT_RST,
        power=fields.get("tx_pwr", ""),
        antenna=antenna,
        qth=fields.get("qth", ""),
        locator=fields.get("gridsquare", ""),
        notes=fields.get("comment") or fields.get("notes", ""),
        qsl_sent=_flag(fields.get("qsl_sent")),
        qsl_received=_flag(fields.get("qsl_rcvd")),
    )


def parse_adif(text: str) -> ImportResult:
    """
    Parse ADIF text into log entries.

    Args:
        text: Decoded file contents

    Returns:
        ImportResult with the usable records and per-record errors
    """
    result = ImportResult()
    for number, fields in enumerate(read_records(text), start=1):
        result.total += 1
        try:
            result.records.append(record_to_log(fields))
        except ValueError as e:
            result.errors.append(f"Record {number}: {e}")

    logger.info(
        "Parsed ADIF file",
        total=result.total,
        valid=len(result.records),
        skipped=result.skipped,
    )
    return result
