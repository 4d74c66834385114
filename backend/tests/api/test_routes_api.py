"""
Tests for the route parsing endpoint.
"""

from fastapi.testclient import TestClient

from app.main import app

client = TestClient(app)

GPX = b"""<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <trk>
    <name>Vatternrundan</name>
    <trkseg>
      <trkpt lat="58.54" lon="15.04"/>
      <trkpt lat="58.55" lon="15.05"/>
    </trkseg>
  </trk>
</gpx>
"""


class TestParseEndpoint:
    """Tests for POST /api/v1/routes/parse."""

    def test_parse_gpx(self):
        response = client.post(
            "/api/v1/routes/parse",
            files={"file": ("race.gpx", GPX, "application/gpx+xml")},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Vatternrundan"
        assert data["coordinates"][0] == [15.04, 58.54]
        assert data["total_distance_km"] > 0
        assert data["invalid_point_count"] == 0

    def test_empty_file(self):
        response = client.post(
            "/api/v1/routes/parse",
            files={"file": ("race.gpx", b"", "application/gpx+xml")},
        )
        assert response.status_code == 400

    def test_fit_rejected(self):
        response = client.post(
            "/api/v1/routes/parse",
            files={"file": ("ride.fit", b"\x0e\x10\x00", "application/octet-stream")},
        )
        assert response.status_code == 400
        assert "GPX" in response.json()["detail"]

    def test_malformed_gpx(self):
        response = client.post(
            "/api/v1/routes/parse",
            files={"file": ("race.gpx", b"<gpx><trk>", "application/gpx+xml")},
        )
        assert response.status_code == 400


class TestHealth:
    def test_health(self):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
