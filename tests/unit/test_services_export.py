"""
Unit tests for the export service.
"""

from datetime import date, datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from qslcard.core.errors import NotFoundError, ValidationError
from qslcard.core.repositories.card_template_repository import CardTemplateRepository
from qslcard.core.repositories.qsl_log_repository import QslLogRepository
from qslcard.core.services.export_service import ExportService, export_filename


def make_log(log_id, call):
    return SimpleNamespace(
        id=log_id,
        contact_call=call,
        contact_name="",
        frequency="14.205",
        mode="SSB",
        date=date(2024, 1, 15),
        time="13:30",
        rst_sent="59",
        rst_received="59",
        band="20m",
        power="",
        antenna="",
        qth="",
        locator="",
        notes="",
    )


@pytest.fixture
def operator():
    """The exporting operator."""
    return SimpleNamespace(
        id=7,
        username="operator",
        callsign="BH1ABC",
        name="Zhang San",
        power="100W",
        antenna=None,
        qth=None,
        locator=None,
    )


@pytest.fixture
def template():
    """A visible card template."""
    return SimpleNamespace(
        id=5,
        name="Contest Card",
        html_content="<p>{{contactCall}} de {{myCall}}</p>",
        css_content=None,
    )


@pytest.fixture
def export_service(template):
    """Create an export service over mocked repositories."""
    logs = AsyncMock(spec=QslLogRepository)
    logs.get_many_for_user = AsyncMock(
        return_value=[make_log(2, "K2CD"), make_log(1, "K1AB")]
    )
    templates = AsyncMock(spec=CardTemplateRepository)
    templates.get_visible = AsyncMock(return_value=template)
    return ExportService(logs, templates)


class TestExportData:
    """Test card data for client-side rendering."""

    @pytest.mark.asyncio
    async def test_export_data(self, export_service, operator):
        """Test the payload shape."""
        data = await export_service.export_data(operator, 5, [2, 1], "letter")

        assert data["title"] == "QSL Card Export"
        assert data["format"] == "Letter"
        assert data["template"]["name"] == "Contest Card"
        assert [row["contactCall"] for row in data["logs"]] == ["K2CD", "K1AB"]
        assert data["logs"][0]["myCall"] == "BH1ABC"
        assert data["logs"][0]["power"] == "100W"
        assert "exportTime" in data

    @pytest.mark.asyncio
    async def test_no_matching_logs(self, export_service, operator):
        """Test IDs that belong to nobody visible."""
        export_service.log_repository.get_many_for_user.return_value = []

        with pytest.raises(NotFoundError, match="No matching QSL logs"):
            await export_service.export_data(operator, 5, [99])

    @pytest.mark.asyncio
    async def test_template_not_visible(self, export_service, operator):
        """Test another operator's private template."""
        export_service.template_repository.get_visible.return_value = None

        with pytest.raises(NotFoundError, match="Template not found"):
            await export_service.export_data(operator, 5, [1])

    @pytest.mark.asyncio
    async def test_bad_paper(self, export_service, operator):
        """Test an unsupported paper size."""
        with pytest.raises(ValidationError):
            await export_service.export_data(operator, 5, [1], "A5")


class TestExportFiles:
    """Test rendered downloads."""

    @pytest.mark.asyncio
    async def test_table_pdf(self, export_service, operator):
        """Test the table export."""
        exported = await export_service.table_pdf(operator, [1, 2], template_id=5)

        assert exported.media_type == "application/pdf"
        assert exported.filename.startswith("QSL-Export-")
        assert exported.content.startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_card_sheet_pdf(self, export_service, operator):
        """Test the card sheet export."""
        exported = await export_service.card_sheet_pdf(operator, [1, 2], "A4", 2)

        assert exported.filename.startswith("QSL-Cards-")
        assert exported.content.startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_card_sheet_bad_layout(self, export_service, operator):
        """Test an unsupported cards-per-page value."""
        with pytest.raises(ValidationError):
            await export_service.card_sheet_pdf(operator, [1], "A4", 3)

    @pytest.mark.asyncio
    async def test_template_pdf(self, export_service, operator):
        """Test the template export."""
        exported = await export_service.template_pdf(operator, 5, [1, 2])

        assert exported.filename.startswith("Contest_Card-QSL-")
        assert exported.content.startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_template_png(self, export_service, operator):
        """Test the single-card image export."""
        export_service.log_repository.get_many_for_user.return_value = [
            make_log(1, "K1AB")
        ]

        exported = await export_service.template_png(operator, 5, 1)

        assert exported.media_type == "image/png"
        assert exported.filename == "Contest_Card_QSL_Card.png"
        assert exported.content.startswith(b"\x89PNG")


class TestFilenames:
    """Test download names."""

    def test_export_filename(self):
        """Test the dated name."""
        assert (
            export_filename("QSL-Export", "pdf", datetime(2024, 1, 15))
            == "QSL-Export-2024-01-15.pdf"
        )
