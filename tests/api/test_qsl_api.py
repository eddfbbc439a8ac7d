"""
Tests for QSL log endpoints, including file import and the legacy listing.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from qslcard.api.routes.qsl import upload_logs
from qslcard.core.errors import PayloadTooLargeError

ADIF_LOG = (
    b"Exported by a logger\n<ADIF_VER:5>3.1.0<EOH>\n"
    b"<CALL:4>K1AB<QSO_DATE:8>20240101<TIME_ON:4>1200<MODE:2>CW<BAND:3>40m<EOR>\n"
    b"<CALL:4>K2CD<QSO_DATE:8>20240102<TIME_ON:6>130500<MODE:3>SSB"
    b"<FREQ:6>14.205<RST_SENT:2>59<RST_RCVD:2>57<EOR>\n"
)

CSV_LOG = (
    b"call,name,freq,mode,date,time,rst_sent,rst_rcvd,band\n"
    b"JA1XYZ,Taro,7.074,FT8,2024-02-01,08:15,-10,-12,40m\n"
    b"VK2ABC,Bruce,21.250,SSB,2024-02-02,09:30,59,59,15m\n"
)


def create_log(client, payload, **overrides):
    response = client.post("/api/qsl", json={**payload, **overrides})
    assert response.status_code == 201, response.text
    return response.json()["log"]


class TestQslCrud:
    """Test single-log endpoints."""

    def test_create(self, auth_client, sample_log_payload):
        """Test creating a log."""
        response = auth_client.post("/api/qsl", json=sample_log_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "QSL log created"
        log = body["log"]
        assert log["contactCall"] == "BH9XYZ"
        assert log["mode"] == "SSB"
        assert log["band"] == "20m"
        assert log["date"] == "2024-01-15"
        assert log["qslSent"] is False

    def test_create_minimal(self, auth_client):
        """Test that only call and date are required."""
        response = auth_client.post(
            "/api/qsl", json={"contactCall": "K1AB", "date": "2024-03-01"}
        )
        assert response.status_code == 201
        assert response.json()["log"]["notes"] == ""

    def test_create_requires_date(self, auth_client):
        """Test request validation."""
        response = auth_client.post("/api/qsl", json={"contactCall": "K1AB"})
        assert response.status_code == 422

    def test_create_requires_auth(self, client, sample_log_payload):
        """Test an anonymous request."""
        assert client.post("/api/qsl", json=sample_log_payload).status_code == 401

    def test_get_update_delete(self, auth_client, sample_log_payload):
        """Test the lifecycle of one log."""
        log = create_log(auth_client, sample_log_payload)
        url = f"/api/qsl/{log['id']}"

        assert auth_client.get(url).json()["contactCall"] == "BH9XYZ"

        response = auth_client.put(url, json={"mode": "cw", "qslSent": True})
        assert response.status_code == 200
        assert response.json()["message"] == "QSL log updated"
        updated = response.json()["log"]
        assert updated["mode"] == "CW"
        assert updated["qslSent"] is True
        assert updated["contactName"] == "Li Si"

        response = auth_client.delete(url)
        assert response.json() == {"message": "QSL log deleted"}
        assert auth_client.get(url).status_code == 404

    def test_update_bad_time(self, auth_client, sample_log_payload):
        """Test service-level validation."""
        log = create_log(auth_client, sample_log_payload)
        response = auth_client.put(f"/api/qsl/{log['id']}", json={"time": "99:99"})
        assert response.status_code == 400

    def test_non_integer_id(self, auth_client):
        """Test a malformed path parameter."""
        assert auth_client.get("/api/qsl/abc").status_code == 422

    def test_other_users_log_is_hidden(
        self, client, register_user, sample_log_payload
    ):
        """Test that logs are scoped to their owner."""
        register_user(username="first", email="first@example.com", callsign="BH2DEF")
        log = create_log(client, sample_log_payload)

        register_user()
        assert client.get(f"/api/qsl/{log['id']}").status_code == 404
        assert client.delete(f"/api/qsl/{log['id']}").status_code == 404
        assert client.get("/api/qsl").json()["total"] == 0


class TestQslList:
    """Test listing, search and paging."""

    @pytest.fixture
    def three_logs(self, auth_client, sample_log_payload):
        create_log(auth_client, sample_log_payload, contactCall="K1AB", date="2024-01-01")
        create_log(auth_client, sample_log_payload, contactCall="JA1XYZ", date="2024-01-03")
        create_log(
            auth_client,
            sample_log_payload,
            contactCall="VK2ABC",
            date="2024-01-02",
            qth="Sydney",
        )
        return auth_client

    def test_newest_first(self, three_logs):
        """Test the default ordering."""
        body = three_logs.get("/api/qsl").json()

        assert body["total"] == 3
        assert body["page"] == 1
        assert body["pageSize"] == 20
        assert body["totalPages"] == 1
        assert [log["contactCall"] for log in body["logs"]] == [
            "JA1XYZ",
            "VK2ABC",
            "K1AB",
        ]

    def test_sort_by_call(self, three_logs):
        """Test explicit sorting."""
        body = three_logs.get(
            "/api/qsl", params={"sortBy": "contactCall", "sortOrder": "asc"}
        ).json()
        assert [log["contactCall"] for log in body["logs"]] == [
            "JA1XYZ",
            "K1AB",
            "VK2ABC",
        ]

    def test_paging(self, three_logs):
        """Test page size and page count."""
        body = three_logs.get("/api/qsl", params={"page": 2, "pageSize": 2}).json()
        assert body["totalPages"] == 2
        assert len(body["logs"]) == 1

    def test_search(self, three_logs):
        """Test case-insensitive search across fields."""
        body = three_logs.get("/api/qsl", params={"search": "sydney"}).json()
        assert [log["contactCall"] for log in body["logs"]] == ["VK2ABC"]

    def test_search_wildcards_are_literal(self, three_logs):
        """Test that LIKE wildcards in the search term match only themselves."""
        assert three_logs.get("/api/qsl", params={"search": "_"}).json()["total"] == 0
        assert three_logs.get("/api/qsl", params={"search": "%"}).json()["total"] == 0

        create_log(
            three_logs, {"contactCall": "W1AW", "date": "2024-01-04"}, qth="50%_off"
        )
        body = three_logs.get("/api/qsl", params={"search": "%_"}).json()
        assert [log["contactCall"] for log in body["logs"]] == ["W1AW"]

    def test_bad_sort(self, three_logs):
        """Test an unsortable column."""
        response = three_logs.get("/api/qsl", params={"sortBy": "userId"})
        assert response.status_code == 400

    def test_page_size_limit(self, auth_client):
        """Test query validation."""
        assert auth_client.get("/api/qsl", params={"pageSize": 500}).status_code == 422


class TestQslUpload:
    """Test log file import."""

    def test_adif(self, auth_client):
        """Test an ADIF upload."""
        response = auth_client.post(
            "/api/qsl/upload", files={"file": ("log.adi", ADIF_LOG, "text/plain")}
        )

        assert response.status_code == 200, response.text
        body = response.json()
        assert body["imported"] == 2
        assert body["total"] == 2
        assert body["duplicates"] == 0

        logs = auth_client.get(
            "/api/qsl", params={"sortBy": "contactCall", "sortOrder": "asc"}
        ).json()["logs"]
        assert logs[1]["contactCall"] == "K2CD"
        assert logs[1]["time"] == "13:05"
        assert logs[1]["band"] == "20m"
        assert logs[1]["rstReceived"] == "57"

    def test_csv(self, auth_client):
        """Test a CSV upload with a header row."""
        response = auth_client.post(
            "/api/qsl/upload", files={"file": ("log.csv", CSV_LOG, "text/csv")}
        )

        assert response.status_code == 200, response.text
        assert response.json()["imported"] == 2
        assert auth_client.get("/api/qsl", params={"search": "taro"}).json()["total"] == 1

    def test_reupload_skips_duplicates(self, auth_client):
        """Test importing the same file twice."""
        files = {"file": ("log.csv", CSV_LOG, "text/csv")}
        auth_client.post("/api/qsl/upload", files=files)

        response = auth_client.post("/api/qsl/upload", files=files)

        body = response.json()
        assert body["imported"] == 0
        assert body["duplicates"] == 2
        assert auth_client.get("/api/qsl").json()["total"] == 2

    def test_unsupported_format(self, auth_client):
        """Test an unknown file type."""
        response = auth_client.post(
            "/api/qsl/upload", files={"file": ("log.txt", b"K1AB", "text/plain")}
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "import_error"
        assert "Unsupported file format" in response.json()["detail"]

    def test_too_large(self, auth_client):
        """Test the upload size limit."""
        content = b"call,date\n" + b"K1AB,2024-01-01\n" * 5000
        response = auth_client.post(
            "/api/qsl/upload", files={"file": ("log.csv", content, "text/csv")}
        )
        assert response.status_code == 413

    @pytest.mark.asyncio
    async def test_upload_read_is_bounded(self, monkeypatch):
        """Test that no more than one byte past the limit is read."""
        config = MagicMock()
        config.api.max_upload_bytes = 100
        monkeypatch.setattr("qslcard.api.routes.qsl.get_config", lambda: config)
        upload = MagicMock(filename="log.csv")
        upload.read = AsyncMock(return_value=b"x" * 101)
        service = AsyncMock()
        service.import_file.side_effect = PayloadTooLargeError("too big")

        with pytest.raises(PayloadTooLargeError):
            await upload_logs(file=upload, user=MagicMock(id=7), service=service)

        upload.read.assert_awaited_once_with(101)
        service.import_file.assert_awaited_once_with(
            7, "log.csv", b"x" * 101, max_bytes=100
        )


class TestLegacyQslLogs:
    """Test the older listing and creation endpoints."""

    LEGACY_PAYLOAD = {
        "contactCall": "k1ab",
        "frequency": "7.030",
        "mode": "cw",
        "date": "2024-01-01",
        "time": "12:00",
        "rstSent": "599",
        "rstReceived": "579",
        "band": "40m",
    }

    def test_create_uppercases_band(self, auth_client):
        """Test legacy creation."""
        response = auth_client.post("/api/qsl-logs", json=self.LEGACY_PAYLOAD)

        assert response.status_code == 201
        log = response.json()["log"]
        assert log["band"] == "40M"
        assert log["mode"] == "CW"
        assert log["contactCall"] == "K1AB"

    def test_create_requires_core_fields(self, auth_client):
        """Test stricter validation."""
        payload = {k: v for k, v in self.LEGACY_PAYLOAD.items() if k != "rstSent"}
        assert auth_client.post("/api/qsl-logs", json=payload).status_code == 422

    def test_list(self, auth_client):
        """Test the nested pagination block."""
        auth_client.post("/api/qsl-logs", json=self.LEGACY_PAYLOAD)

        body = auth_client.get("/api/qsl-logs", params={"limit": 5}).json()

        assert len(body["logs"]) == 1
        assert body["pagination"] == {
            "page": 1,
            "limit": 5,
            "total": 1,
            "totalPages": 1,
        }
