import pytest
from fastapi.testclient import TestClient

from pointpath import api
from pointpath.errors import OCRError

client = TestClient(api.app)


class StubReader:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error

    async def transcribe(self, image_bytes):
        if self.error:
            raise self.error
        return self.text


@pytest.fixture
def stub_reader(monkeypatch):
    def install(**kwargs):
        reader = StubReader(**kwargs)
        monkeypatch.setattr(api.pipeline, "reader", reader)
        return reader

    return install


def test_health():
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"
    assert res.headers["X-Request-ID"]


def test_extract_text():
    res = client.post(
        "/extract",
        json={"text": "American Airlines AA123 JFK to LAX Dec 15, 2024 Economy $450"},
    )
    assert res.status_code == 200
    assert res.json() == {
        "airline": "American Airlines",
        "origin": "JFK",
        "destination": "LAX",
        "departureDate": "Dec 15, 2024",
        "cabinClass": "Economy",
        "cashPrice": 450.0,
    }


def test_extract_empty_text():
    assert client.post("/extract", json={"text": "   "}).json() == {}


def test_partners():
    res = client.get("/partners/Royal Air Maroc")
    assert res.status_code == 200
    body = res.json()
    assert body["isBookable"] is True
    assert body["partnerPrograms"][0]["partnerName"] == "Aer Lingus AerClub"
    assert body["partnerPrograms"][-1]["relationship"] == "Bilateral"


def test_partners_unknown_airline():
    body = client.get("/partners/Unknown Carrier").json()
    assert body == {
        "isBookable": False,
        "partnerPrograms": [],
        "message": "No point path available.",
    }


def test_recommendation():
    res = client.get("/recommendation/British Airways")
    assert res.status_code == 200
    body = res.json()
    assert body["preferredPartner"] == "British Airways Executive Club"
    assert body["iataCode"] == "BA"
    assert body["category"] == "International"
    assert body["isDirectPartner"] is True
    assert body["howToBookSteps"][0] == (
        "Transfer Amex points to British Airways Executive Club at 1:1 ratio"
    )


def test_recommendation_not_bookable():
    res = client.get("/recommendation/Unknown Carrier")
    assert res.status_code == 404
    assert res.json()["detail"] == "No point path available."


def test_analyze_text():
    res = client.post("/analyze", json={"text": "Delta ATL to SEA $1,234.56 Premium"})
    assert res.status_code == 200
    body = res.json()
    assert body["source"] == "text"
    assert body["flight"]["cashPrice"] == 1234.56
    assert body["lookupAirline"] == "Delta Air Lines"
    assert body["bookability"]["isBookable"] is True
    assert body["recommendation"]["name"] == "Delta Air Lines"


def test_airline_search():
    assert client.get("/airlines").json() == api.search_airlines("")
    names = client.get("/airlines", params={"q": "air france"}).json()
    assert names == ["Air France"]


def test_legend():
    body = client.get("/legend").json()
    assert [item["emoji"] for item in body] == ["⭐", "🌐", "🔁"]


def test_extract_image(stub_reader):
    stub_reader(text="Singapore Airlines SQ 25 JFK FRA Business $3,100")
    res = client.post("/extract/image", files={"file": ("shot.png", b"png", "image/png")})
    assert res.status_code == 200
    body = res.json()
    assert body["source"] == "ocr"
    assert body["ocrText"].startswith("Singapore Airlines")
    assert body["flight"]["destination"] == "FRA"
    assert body["recommendation"]["preferredPartner"] == "Singapore Airlines KrisFlyer"


def test_extract_image_empty_upload():
    res = client.post("/extract/image", files={"file": ("shot.png", b"", "image/png")})
    assert res.status_code == 400


def test_extract_image_undecodable():
    # the real reader decodes before any OCR call is made
    res = client.post(
        "/extract/image", files={"file": ("shot.png", b"not an image", "image/png")}
    )
    assert res.status_code == 422


def test_extract_image_ocr_failure(stub_reader):
    stub_reader(error=OCRError("OCR engine failed: quota exceeded"))
    res = client.post("/extract/image", files={"file": ("shot.png", b"png", "image/png")})
    assert res.status_code == 502
    assert "quota exceeded" in res.json()["detail"]
