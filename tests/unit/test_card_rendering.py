"""
Unit tests for PyMuPDF card template rendering.
"""

import fitz
import pytest

from qslcard.core.rendering import (
    DEFAULT_CSS,
    DEFAULT_HTML,
    SAMPLE_CARD_DATA,
    render_template_pdf,
    render_template_png,
)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class TestTemplatePdf:
    """Test template cards as PDF."""

    def test_one_page_per_card(self):
        """Test page count and card page size."""
        cards = [dict(SAMPLE_CARD_DATA, contactCall=c) for c in ("K1AB", "K2CD")]
        pdf = render_template_pdf("<p>{{contactCall}}</p>", None, cards)

        with fitz.open("pdf", pdf) as doc:
            assert doc.page_count == 2
            assert doc[0].rect.width == pytest.approx(396)
            assert doc[0].rect.height == pytest.approx(252)
            assert "K1AB" in doc[0].get_text()
            assert "K2CD" in doc[1].get_text()

    def test_default_template(self):
        """Test the built-in template renders sample data."""
        pdf = render_template_pdf(DEFAULT_HTML, DEFAULT_CSS, [SAMPLE_CARD_DATA])
        with fitz.open("pdf", pdf) as doc:
            text = doc[0].get_text()
        assert "QSL CARD" in text
        assert "BH1ABC" in text


class TestTemplatePng:
    """Test template cards as PNG."""

    def test_png_size_follows_zoom(self):
        """Test the pixel size of a 2x render."""
        png = render_template_png("<p>{{myCall}}</p>", "p{color:red}", SAMPLE_CARD_DATA)
        assert png.startswith(PNG_SIGNATURE)

        pixmap = fitz.Pixmap(png)
        assert (pixmap.width, pixmap.height) == (792, 504)

    def test_custom_zoom(self):
        """Test a 1x render."""
        png = render_template_png("<p>hi</p>", None, {}, zoom=1.0)
        pixmap = fitz.Pixmap(png)
        assert (pixmap.width, pixmap.height) == (396, 252)
