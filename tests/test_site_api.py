"""Tests for contact, admin, import, sitemap and health endpoints."""

import asyncio
from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

from src.mailer import ContactMailer, build_mailer
from src.main import create_app
from src.schemas import ContactRequest
from src.sitemap import build_sitemap
from tests.conftest import ADMIN_PASSWORD, SITE_URL, FakeMailer

CONTACT = {
    "name": "Ann",
    "email": "ann@example.com",
    "subject": "Hello",
    "message": "Nice site",
}


class TestContact:
    def test_relays_message(self, client, mailer):
        response = client.post("/api/contact", json=CONTACT)

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert [contact.name for contact in mailer.sent] == ["Ann"]

    def test_subject_is_optional(self, client, mailer):
        payload = {key: value for key, value in CONTACT.items() if key != "subject"}
        response = client.post("/api/contact", json=payload)

        assert response.status_code == 200
        assert mailer.sent[0].subject is None

    def test_missing_required_fields_is_400(self, client, mailer):
        response = client.post("/api/contact", json={"name": "Ann"})

        assert response.status_code == 400
        assert mailer.sent == []

    def test_invalid_email_is_400(self, client):
        response = client.post("/api/contact", json={**CONTACT, "email": "not-an-email"})
        assert response.status_code == 400

    def test_relay_failure_still_reports_success(self, storage, object_storage):
        failing = FakeMailer(error=ConnectionError("smtp down"))
        client = TestClient(create_app(storage=storage, object_storage=object_storage, mailer=failing))

        response = client.post("/api/contact", json=CONTACT)

        assert response.status_code == 200
        assert response.json() == {"success": True}

    def test_unconfigured_relay_still_reports_success(self, app, client):
        app.state.mailer = None

        response = client.post("/api/contact", json=CONTACT)

        assert response.json() == {"success": True}


class TestMailer:
    def test_not_configured_without_sender(self):
        mailer = build_mailer(
            username="", password="", mail_from="", port=587,
            server="smtp.example.com", starttls=True, ssl_tls=False, recipient="",
        )
        assert mailer is None

    def test_sends_html_message(self):
        mailer = build_mailer(
            username="apikey", password="key", mail_from="site@example.com", port=587,
            server="smtp.example.com", starttls=True, ssl_tls=False, recipient="owner@example.com",
        )
        assert isinstance(mailer, ContactMailer)
        mailer.fastmail.send_message = AsyncMock()

        asyncio.run(mailer.send_contact_message(ContactRequest(**CONTACT)))

        message = mailer.fastmail.send_message.await_args.args[0]
        assert "Hello" in message.subject
        assert "Ann" in message.subject
        assert "Nice site" in message.body

    def test_body_escapes_html(self):
        contact = ContactRequest(**{**CONTACT, "message": "<script>alert(1)</script>"})
        body = ContactMailer.render_body(contact)

        assert "<script>" not in body
        assert "&lt;script&gt;" in body


class TestAdminVerify:
    def test_correct_password(self, client):
        response = client.post("/api/admin/verify", json={"password": ADMIN_PASSWORD})

        assert response.status_code == 200
        assert response.json() == {"success": True}

    def test_wrong_password_is_401(self, client):
        response = client.post("/api/admin/verify", json={"password": "guess"})
        assert response.status_code == 401

    def test_missing_password_is_400(self, client):
        response = client.post("/api/admin/verify", json={})
        assert response.status_code == 400


class TestImportContent:
    def test_echoes_url(self, client):
        response = client.post("/api/import-content", json={"url": "https://old.example.com/post"})

        assert response.status_code == 200
        assert response.json()["url"] == "https://old.example.com/post"
        assert response.json()["message"]

    def test_missing_url_is_400(self, client):
        assert client.post("/api/import-content", json={}).status_code == 400

    def test_non_string_url_is_400(self, client):
        assert client.post("/api/import-content", json={"url": 42}).status_code == 400


class TestSitemap:
    def test_static_sitemap(self, client):
        response = client.get("/sitemap.xml")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/xml")
        assert f"<loc>{SITE_URL}/</loc>" in response.text
        assert f"<loc>{SITE_URL}/blog</loc>" in response.text

    def test_dynamic_sitemap_lists_published_posts(self, client):
        client.post("/api/blog-posts", json={"title": "Live post", "content": "Body", "published": True})
        client.post("/api/blog-posts", json={"title": "Draft post", "content": "Body"})

        response = client.get("/api/sitemap")

        assert response.status_code == 200
        assert f"<loc>{SITE_URL}/blog/live-post</loc>" in response.text
        assert "draft-post" not in response.text
        assert "<lastmod>2025-01-01</lastmod>" in response.text

    def test_escapes_locations(self):
        xml = build_sitemap("https://example.com/?a=1&b=2")
        assert "&amp;b=2" in xml


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
