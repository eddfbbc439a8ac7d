"""
Card template rendering and document export.
"""

from .card import render_template_pdf, render_template_png
from .defaults import (
    AVAILABLE_FIELDS,
    DEFAULT_CSS,
    DEFAULT_HTML,
    DEFAULT_TEMPLATE_DESCRIPTION,
    DEFAULT_TEMPLATE_NAME,
    FIELD_KEYS,
    SAMPLE_CARD_DATA,
)
from .pdf import (
    CARDS_PER_PAGE_CHOICES,
    render_card_sheet_pdf,
    render_log_table_pdf,
    resolve_paper,
    sheet_layout,
)
from .template import build_document, card_data, find_tokens, render_template

__all__ = [
    "AVAILABLE_FIELDS",
    "CARDS_PER_PAGE_CHOICES",
    "DEFAULT_CSS",
    "DEFAULT_HTML",
    "DEFAULT_TEMPLATE_DESCRIPTION",
    "DEFAULT_TEMPLATE_NAME",
    "FIELD_KEYS",
    "SAMPLE_CARD_DATA",
    "build_document",
    "card_data",
    "find_tokens",
    "render_card_sheet_pdf",
    "render_log_table_pdf",
    "render_template",
    "render_template_pdf",
    "render_template_png",
    "resolve_paper",
    "sheet_layout",
]
