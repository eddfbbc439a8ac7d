"""
PDF generation with reportlab.

Two layouts are produced from card field mappings (see ``card_data``):

* a tabular log listing, A4 or Letter portrait, with "Page X of Y" footers
* printable card sheets, landscape, 1, 2 or 4 cards of 5.5 x 3.5 inches
  per page
"""

import io
import math
from datetime import datetime, timezone
from functools import lru_cache, partial
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch, mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..errors import ValidationError
from ..logging import get_logger

logger = get_logger("core.rendering.pdf")

PAPER_SIZES = {"A4": A4, "Letter": letter}

# Landscape card sheet sizes in inches
SHEET_SIZES = {"A4": (11.7, 8.3), "Letter": (11.0, 8.5)}

CARD_WIDTH = 5.5
CARD_HEIGHT = 3.5
CARDS_PER_PAGE_CHOICES = (1, 2, 4)

HEADER_FILL = colors.Color(66 / 255, 139 / 255, 202 / 255)
ALTERNATE_FILL = colors.Color(245 / 255, 245 / 255, 245 / 255)

TABLE_HEADERS = [
    "#",
    "Call",
    "Name",
    "Freq",
    "Mode",
    "Date",
    "Time",
    "RST",
    "Power",
    "Ant",
    "QTH",
    "Notes",
]
TABLE_COLUMN_WIDTHS = [w * mm for w in (8, 20, 17, 15, 12, 19, 11, 13, 13, 15, 20, 27)]

CUSTOM_FONT_NAME = "QSLCardFont"


def resolve_paper(paper: str) -> str:
    """
    Normalize a paper size name.

    Raises:
        ValidationError: If the paper size is not A4 or Letter
    """
    for name in PAPER_SIZES:
        if paper.strip().lower() == name.lower():
            return name
    raise ValidationError(
        f"Unsupported paper size: {paper}. Use A4 or Letter",
        details={"field": "format"},
    )


@lru_cache(maxsize=8)
def register_font(font_path: Optional[str] = None) -> Tuple[str, str]:
    """
    Get the (regular, bold) font names to draw with.

    A TrueType font is registered when ``font_path`` is given so that
    callsigns, names and notes outside Latin-1 render correctly.
    """
    if not font_path:
        return "Helvetica", "Helvetica-Bold"

    pdfmetrics.registerFont(TTFont(CUSTOM_FONT_NAME, font_path))
    logger.info("Registered PDF font", font_path=font_path)
    return CUSTOM_FONT_NAME, CUSTOM_FONT_NAME


class NumberedCanvas(canvas.Canvas):
    """Canvas that writes "Page X of Y" once the page count is known."""

    def __init__(self, *args: Any, footer_font: str = "Helvetica", **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._saved_page_states: List[dict] = []
        self._footer_font = footer_font

    def showPage(self) -> None:
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self) -> None:
        total = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self._draw_page_number(total)
            super().showPage()
        super().save()

    def _draw_page_number(self, total: int) -> None:
        width, _ = self._pagesize
        self.setFont(self._footer_font, 8)
        self.setFillColor(colors.grey)
        self.drawCentredString(
            width / 2, 8 * mm, f"Page {self._pageNumber} of {total}"
        )


def render_log_table_pdf(
    rows: Sequence[Mapping[str, str]],
    title: str = "QSL Card Export",
    template_name: Optional[str] = None,
    paper: str = "A4",
    font_path: Optional[str] = None,
    generated_at: Optional[datetime] = None,
) -> bytes:
    """
    Render contacts as a paginated table.

    Args:
        rows: Card field mappings, one per contact
        title: Document title
        template_name: Template named in the header, if any
        paper: ``A4`` or ``Letter``
        font_path: Optional TrueType font for non-Latin text
        generated_at: Export timestamp, defaults to now

    Returns:
        PDF document bytes
    """
    paper = resolve_paper(paper)
    regular, bold = register_font(font_path)
    generated_at = generated_at or datetime.now(timezone.utc)

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "ExportTitle", parent=styles["Title"], fontName=bold, fontSize=18
    )
    info_style = ParagraphStyle(
        "ExportInfo", parent=styles["Normal"], fontName=regular, fontSize=10
    )
    cell_style = ParagraphStyle(
        "ExportCell", parent=styles["Normal"], fontName=regular, fontSize=7, leading=9
    )

    story: List[Any] = [Paragraph(title, title_style)]
    if template_name:
        story.append(Paragraph(f"Template: {_escape(template_name)}", info_style))
    story.append(
        Paragraph(
            f"Export time: {generated_at.strftime('%Y-%m-%d %H:%M:%S')} UTC",
            info_style,
        )
    )
    story.append(Paragraph(f"Total records: {len(rows)}", info_style))
    story.append(Spacer(1, 5 * mm))

    data: List[List[Any]] = [TABLE_HEADERS]
    for index, row in enumerate(rows, start=1):
        data.append(
            [
                str(index),
                Paragraph(_escape(row.get("contactCall", "")), cell_style),
                Paragraph(_escape(row.get("contactName", "")), cell_style),
                row.get("frequency", ""),
                row.get("mode", ""),
                row.get("date", ""),
                row.get("time", ""),
                f"{row.get('rstSent', '')}/{row.get('rstReceived', '')}",
                Paragraph(_escape(row.get("power", "")), cell_style),
                Paragraph(_escape(row.get("antenna", "")), cell_style),
                Paragraph(_escape(row.get("qth", "")), cell_style),
                Paragraph(_escape(row.get("notes", "")), cell_style),
            ]
        )

    table = Table(data, colWidths=TABLE_COLUMN_WIDTHS, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("FONTNAME", (0, 0), (-1, 0), bold),
                ("FONTNAME", (0, 1), (-1, -1), regular),
                ("FONTSIZE", (0, 0), (-1, -1), 7),
                ("BACKGROUND", (0, 0), (-1, 0), HEADER_FILL),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, ALTERNATE_FILL]),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ]
        )
    )
    story.append(table)

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=PAPER_SIZES[paper],
        leftMargin=10 * mm,
        rightMargin=10 * mm,
        topMargin=12 * mm,
        bottomMargin=15 * mm,
        title=title,
    )
    doc.build(story, canvasmaker=partial(NumberedCanvas, footer_font=regular))

    logger.info("Rendered log table PDF", records=len(rows), paper=paper)
    return buffer.getvalue()


def sheet_layout(
    paper: str, cards_per_page: int
) -> Tuple[Tuple[float, float], List[Tuple[float, float]]]:
    """
    Compute card positions on a landscape sheet.

    Cards are laid out in ``ceil(sqrt(n))`` columns with equal gaps around
    them.

    Args:
        paper: ``A4`` or ``Letter``
        cards_per_page: 1, 2 or 4

    Returns:
        Tuple of (page size in inches, top-left card origins in inches
        measured from the top-left page corner)
    """
    if cards_per_page not in CARDS_PER_PAGE_CHOICES:
        raise ValidationError(
            f"cardsPerPage must be one of {list(CARDS_PER_PAGE_CHOICES)}",
            details={"field": "cardsPerPage"},
        )
    page_width, page_height = SHEET_SIZES[resolve_paper(paper)]

    columns = math.ceil(math.sqrt(cards_per_page))
    rows = math.ceil(cards_per_page / columns)
    margin_x = (page_width - columns * CARD_WIDTH) / (columns + 1)
    margin_y = (page_height - rows * CARD_HEIGHT) / (rows + 1)

    origins = []
    for index in range(cards_per_page):
        row, col = divmod(index, columns)
        origins.append(
            (
                margin_x + col * (CARD_WIDTH + margin_x),
                margin_y + row * (CARD_HEIGHT + margin_y),
            )
        )
    return (page_width, page_height), origins


def render_card_sheet_pdf(
    cards: Sequence[Mapping[str, str]],
    paper: str = "A4",
    cards_per_page: int = 1,
    font_path: Optional[str] = None,
) -> bytes:
    """
    Render printable QSL cards.

    Args:
        cards: Card field mappings, one per contact
        paper: ``A4`` or ``Letter``
        cards_per_page: 1, 2 or 4
        font_path: Optional TrueType font for non-Latin text

    Returns:
        PDF document bytes
    """
    (page_width, page_height), origins = sheet_layout(paper, cards_per_page)
    regular, bold = register_font(font_path)

    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=(page_width * inch, page_height * inch))
    pdf.setTitle("QSL Cards")

    for index, card in enumerate(cards):
        slot = index % cards_per_page
        if index > 0 and slot == 0:
            pdf.showPage()
        x, y = origins[slot]
        _draw_card(pdf, card, x, y, page_height, regular, bold)
    pdf.showPage()
    pdf.save()

    logger.info(
        "Rendered card sheet PDF",
        cards=len(cards),
        paper=paper,
        cards_per_page=cards_per_page,
    )
    return buffer.getvalue()


def _draw_card(
    pdf: canvas.Canvas,
    data: Mapping[str, str],
    x: float,
    y: float,
    page_height: float,
    regular: str,
    bold: str,
) -> None:
    """Draw one card whose top-left corner sits at (x, y) inches from the top-left."""
    width, height = CARD_WIDTH, CARD_HEIGHT

    def at(dx: float, dy: float) -> Tuple[float, float]:
        # reportlab measures y from the bottom edge
        return (x + dx) * inch, (page_height - (y + dy)) * inch

    pdf.setStrokeColor(colors.black)
    pdf.setLineWidth(0.02 * inch)
    left, bottom = at(0, height)
    pdf.rect(left, bottom, width * inch, height * inch)

    pdf.setFont(bold, 16)
    pdf.drawCentredString(*at(width / 2, 0.3), "QSL CARD")

    pdf.setFont(bold, 12)
    pdf.drawRightString(*at(width - 0.1, 0.3), data.get("myCall", ""))
    pdf.setFont(regular, 8)
    pdf.drawRightString(*at(width - 0.1, 0.5), data.get("myName", ""))

    pdf.setFont(bold, 12)
    pdf.drawString(*at(0.1, 0.8), "CONFIRMING QSO WITH")

    pdf.setFont(bold, 14)
    pdf.drawString(*at(0.1, 1.1), data.get("contactCall", ""))
    if data.get("contactName"):
        pdf.setFont(regular, 10)
        pdf.drawString(*at(0.1, 1.3), data["contactName"])

    details = [
        f"Date: {data.get('date', '')}",
        f"Time: {data.get('time', '')} UTC",
        f"Freq: {data.get('frequency', '')} MHz",
        f"Mode: {data.get('mode', '')}",
        f"RST: {data.get('rstSent', '')}/{data.get('rstReceived', '')}",
    ]
    pdf.setFont(regular, 8)
    for offset, line in enumerate(details):
        pdf.drawString(*at(0.1, 1.6 + offset * 0.15), line)

    tech_info = [
        f"{label}: {data[key]}"
        for label, key in (("Power", "power"), ("Ant", "antenna"), ("QTH", "qth"))
        if data.get(key)
    ]
    if data.get("locator"):
        tech_info.append(f"Grid: {data['locator']}")
    for offset, line in enumerate(tech_info):
        pdf.drawString(*at(width / 2 + 0.2, 1.6 + offset * 0.15), line)

    if data.get("notes"):
        pdf.setFont(regular, 7)
        lines = simpleSplit(data["notes"], regular, 7, (width - 0.4) * inch)
        for offset, line in enumerate(lines[:3]):
            pdf.drawString(*at(0.1, height - 0.8 + offset * 0.12), line)

    pdf.setFont(regular, 8)
    box = 0.09 * inch
    for dx, label in ((0.1, "PSE QSL"), (1.5, "TNX QSL")):
        bx, by = at(dx, height - 0.4)
        pdf.rect(bx, by, box, box)
        pdf.drawString(bx + box + 0.05 * inch, by, label)

    pdf.line(*at(width - 2, height - 0.4), *at(width - 0.1, height - 0.4))
    pdf.drawString(*at(width - 1, height - 0.2), "Date")


def _escape(value: str) -> str:
    """Escape text for a reportlab Paragraph."""
    return (
        value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    )
