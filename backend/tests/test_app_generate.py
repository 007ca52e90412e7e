import sys
from pathlib import Path

from fastapi.testclient import TestClient

sys.path.append(str(Path(__file__).resolve().parent.parent))

import app as app_module  # noqa: E402

client = TestClient(app_module.app)


def _payload(**kwargs):
    defaults = {
        "context": "professional",
        "emailBody": "This is urgent, please respond ASAP about the budget deadline!",
    }
    defaults.update(kwargs)
    return defaults


def test_health():
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_generate_returns_reply_subject_and_analysis():
    response = client.post("/api/generate", json=_payload(senderName="Marie"))

    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"reply", "subjectSuggestion", "analysis"}
    assert data["reply"].startswith("Hello Marie,")
    assert data["subjectSuggestion"] == "Re: Budget follow-up"
    assert data["analysis"]["urgency"] == "high"
    assert data["analysis"]["sentiment"] == "neutral"
    assert data["analysis"]["sentimentScore"] == 0
    assert data["analysis"]["keywords"] == ["budget", "deadline"]
    assert data["analysis"]["questions"] == []


def test_generate_rejects_short_body():
    response = client.post("/api/generate", json=_payload(emailBody="   too short   "))

    assert response.status_code == 400
    assert response.json()["detail"] == "The email body must contain at least 10 characters."


def test_generate_rejects_missing_body():
    payload = _payload()
    del payload["emailBody"]

    response = client.post("/api/generate", json=payload)

    assert response.status_code == 400


def test_generate_rejects_unknown_context():
    response = client.post("/api/generate", json=_payload(context="professionnel"))

    assert response.status_code == 400
    assert response.json()["detail"] == "The context must be 'professional' or 'personal'."


def test_generate_rejects_non_object_and_invalid_json():
    response = client.post("/api/generate", json=["not", "an", "object"])
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid request: missing data."

    response = client.post(
        "/api/generate",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400


def test_generate_ignores_non_string_optional_fields():
    response = client.post(
        "/api/generate",
        json=_payload(senderName=42, subject=["Budget"], userSignature=None),
    )

    assert response.status_code == 200
    data = response.json()
    assert data["reply"].startswith("Hello,")
    assert data["reply"].endswith("Kind regards,")
    assert data["subjectSuggestion"] == "Re: Budget follow-up"


def test_generate_honours_configured_minimum_length(monkeypatch):
    monkeypatch.setenv("MIN_EMAIL_BODY_LENGTH", "20")

    response = client.post("/api/generate", json=_payload(emailBody="Fifteen chars!!"))

    assert response.status_code == 400
    assert response.json()["detail"] == "The email body must contain at least 20 characters."


def test_generate_hides_internal_failures(monkeypatch):
    def boom(request):
        raise RuntimeError("lexicon exploded at /srv/secret")

    monkeypatch.setattr(app_module, "generate_email_response", boom)

    response = client.post("/api/generate", json=_payload())

    assert response.status_code == 500
    assert response.json() == {"detail": app_module.GENERIC_FAILURE}
    assert "secret" not in response.text


def test_generate_empty_object_reports_body_length():
    response = client.post("/api/generate", json={})

    assert response.status_code == 400
    assert response.json()["detail"] == "The email body must contain at least 10 characters."
