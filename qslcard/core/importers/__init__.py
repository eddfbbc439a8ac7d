"""
Log file importers (ADIF and CSV).
"""

from .adif import AdifSpecifier, parse_adif, read_records
from .bands import band_for_frequency
from .common import (
    ImportedLog,
    ImportResult,
    decode_upload,
    detect_format,
    normalize_time,
    parse_log_date,
)
from .csv_log import parse_csv

PARSERS = {
    "adif": parse_adif,
    "csv": parse_csv,
}


def parse_upload(filename: str, content: bytes) -> ImportResult:
    """
    Parse an uploaded log file, choosing the parser by extension.

    Raises:
        ImportFormatError: If the extension is not supported
    """
    parser = PARSERS[detect_format(filename)]
    return parser(decode_upload(content))


__all__ = [
    "AdifSpecifier",
    "ImportResult",
    "ImportedLog",
    "band_for_frequency",
    "decode_upload",
    "detect_format",
    "normalize_time",
    "parse_adif",
    "parse_csv",
    "parse_log_date",
    "parse_upload",
    "read_records",
]
