"""
Portfolio Backend — Body Sanitization Tests
=============================================

What we test:
    ✅ Tags are stripped from strings, script content is dropped
    ✅ Nested dicts and lists are walked; non-strings are untouched
    ✅ Form submissions are stored without markup (end to end)
    ✅ Malformed JSON still reaches FastAPI's own validation
    ✅ application/*+json and header-less bodies are sanitized too
"""

import pytest

from app.middleware.sanitize import clean_text, sanitize_value


class TestSanitizeValue:

    def test_strips_tags(self):
        assert clean_text("<b>Hello</b> there") == "Hello there"

    def test_drops_script_content(self):
        assert clean_text("<script>alert(1)</script>Great site") == "Great site"

    def test_plain_text_unchanged(self):
        assert clean_text("Just a note") == "Just a note"

    def test_walks_nested_structures(self):
        payload = {
            "name": "<i>Ravi</i>",
            "tags": ["<u>one</u>", "two"],
            "meta": {"note": "<em>x</em>"},
        }
        assert sanitize_value(payload) == {
            "name": "Ravi",
            "tags": ["one", "two"],
            "meta": {"note": "x"},
        }

    @pytest.mark.parametrize("value", [42, 3.5, True, None])
    def test_non_strings_untouched(self, value):
        assert sanitize_value(value) == value


class TestSanitizeMiddleware:

    @pytest.mark.asyncio
    async def test_feedback_is_stored_without_markup(self, api_client):
        response = await api_client.post(
            "/api/feedback",
            json={
                "name": "<b>Ravi</b>",
                "email": "ravi@example.com",
                "feedback": "<script>alert(1)</script>Great site",
            },
        )
        assert response.status_code == 201

        listing = (await api_client.get("/api/feedback")).json()
        assert listing[0]["name"] == "Ravi"
        assert listing[0]["feedback"] == "Great site"

    @pytest.mark.asyncio
    async def test_query_is_stored_without_markup(self, api_client):
        await api_client.post(
            "/api/query",
            json={"name": "Mei", "email": "mei@example.com", "query": "<img src=x onerror=alert(1)>Hire?"},
        )

        listing = (await api_client.get("/api/query")).json()
        assert listing[0]["query"] == "Hire?"

    @pytest.mark.asyncio
    async def test_malformed_json_passes_through(self, api_client):
        response = await api_client.post(
            "/api/feedback",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_structured_json_suffix_is_sanitized(self, api_client):
        response = await api_client.post(
            "/api/feedback",
            content=b'{"name": "<b>Eve</b>", "email": "eve@example.com", '
                    b'"feedback": "<script>alert(1)</script>hi"}',
            headers={"Content-Type": "application/merge-patch+json"},
        )
        assert response.status_code == 201

        listing = (await api_client.get("/api/feedback")).json()
        assert listing[0]["name"] == "Eve"
        assert listing[0]["feedback"] == "hi"

    @pytest.mark.asyncio
    async def test_body_without_content_type_is_sanitized(self, api_client):
        response = await api_client.post(
            "/api/query",
            content=b'{"name": "<i>Mei</i>", "email": "mei@example.com", "query": "<b>Hire?</b>"}',
        )
        assert response.status_code == 201

        listing = (await api_client.get("/api/query")).json()
        assert listing[0]["name"] == "Mei"
        assert listing[0]["query"] == "Hire?"
