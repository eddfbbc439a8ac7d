"""
HTML card template rendering with PyMuPDF.

Rendered templates are laid out by ``fitz.Story`` onto 5.5 x 3.5 inch pages.
PNG images are rasterized from the first page of that PDF.
"""

import io
from typing import Mapping, Optional, Sequence

import fitz

from ..errors import ExportError
from ..logging import get_logger
from .template import render_template

logger = get_logger("core.rendering.card")

POINTS_PER_INCH = 72
CARD_PAGE = fitz.Rect(0, 0, 5.5 * POINTS_PER_INCH, 3.5 * POINTS_PER_INCH)
CARD_MARGIN = 6


def _place_card(writer: "fitz.DocumentWriter", body_html: str, css: Optional[str]) -> bool:
    """
    Lay out one card on a new page.

    Returns:
        True if the content did not fit and was cut off
    """
    story = fitz.Story(html=body_html, user_css=css or "")
    where = CARD_PAGE + (CARD_MARGIN, CARD_MARGIN, -CARD_MARGIN, -CARD_MARGIN)
    device = writer.begin_page(CARD_PAGE)
    more, _ = story.place(where)
    story.draw(device)
    writer.end_page()
    return bool(more)


def render_template_pdf(
    template_html: str,
    css: Optional[str],
    cards: Sequence[Mapping[str, str]],
) -> bytes:
    """
    Render a card template once per contact, one card per page.

    Args:
        template_html: Template HTML with ``{{field}}`` tokens
        css: Template stylesheet
        cards: Card field mappings

    Returns:
        PDF document bytes
    """
    buffer = io.BytesIO()
    writer = fitz.DocumentWriter(buffer)
    truncated = 0
    try:
        for card in cards:
            if _place_card(writer, render_template(template_html, card), css):
                truncated += 1
    except Exception as e:
        raise ExportError(f"Failed to render card template: {e}") from e
    finally:
        writer.close()

    if truncated:
        logger.warning("Card content overflowed the page", cards=truncated)
    logger.info("Rendered template PDF", cards=len(cards))
    return buffer.getvalue()


def render_template_png(
    template_html: str,
    css: Optional[str],
    data: Mapping[str, str],
    zoom: float = 2.0,
) -> bytes:
    """
    Render a single card to PNG.

    Args:
        template_html: Template HTML with ``{{field}}`` tokens
        css: Template stylesheet
        data: Card field mapping
        zoom: Scale factor; 2.0 gives 792 x 504 pixels

    Returns:
        PNG image bytes
    """
    pdf_bytes = render_template_pdf(template_html, css, [data])
    doc = fitz.open("pdf", pdf_bytes)
    try:
        pixmap = doc[0].get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False)
        return pixmap.tobytes("png")
    finally:
        doc.close()
