"""Integration tests for the quote check and health endpoints."""

from unittest.mock import patch

import pytest

from interview2article.services.quote_matcher import QuoteMatcher
from interview2article.services.quote_verifier import QuoteVerifier, VerifierVerdict


class TranscriptVerifier(QuoteVerifier):
    async def verify(self, quote_text, transcript, sources):
        return VerifierVerdict(found=True, source="TRANSCRIPT", snippet="paraphrased passage")


class TestHealthEndpoint:
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"data": {"status": "ok", "aiVerification": False}, "error": None}

    @pytest.mark.asyncio
    async def test_health_reports_ai_enabled(self, client, monkeypatch):
        monkeypatch.setenv("QUOTE_CHECK_AI_ENABLED", "true")

        response = await client.get("/health")

        assert response.json()["data"]["aiVerification"] is True


class TestCheckQuotesEndpoint:
    @pytest.mark.asyncio
    async def test_scenario_transcript_match(self, client):
        response = await client.post("/api/quotes/check", json={
            "draft": 'As noted, "we ship on Fridays" remains the policy.',
            "transcript": 'The engineer said "we ship on Fridays" during the call.',
        })

        assert response.status_code == 200
        body = response.json()
        assert body["error"] is None
        assert body["data"]["summary"] == {"total": 1, "verified": 1, "unverified": 0}
        quote = body["data"]["quotes"][0]
        assert quote["text"] == "we ship on Fridays"
        assert quote["source"] == "Interview Transcript"
        assert quote["locationHint"] == "line 1"
        assert quote["method"] == "exact"

    @pytest.mark.asyncio
    async def test_scenario_empty_corpus(self, client):
        response = await client.post("/api/quotes/check", json={
            "draft": 'Critics called it "a disaster."',
            "transcript": "",
            "sources": [],
        })

        quote = response.json()["data"]["quotes"][0]
        assert quote["verified"] is False
        assert quote["source"] == "Not Found"
        assert quote["snippet"] is None

    @pytest.mark.asyncio
    async def test_scenario_first_supporting_source(self, client):
        response = await client.post("/api/quotes/check", json={
            "draft": 'It was "a breakthrough moment" indeed.',
            "transcript": "Nothing relevant.",
            "sources": [
                {"id": "s1", "type": "file", "name": "first.txt", "content": "a breakthrough moment, said A"},
                {"id": "s2", "type": "file", "name": "second.txt", "content": "a breakthrough moment, said B"},
            ],
        })

        quote = response.json()["data"]["quotes"][0]
        assert quote["sourceId"] == "s1"
        assert quote["source"] == "first.txt"

    @pytest.mark.asyncio
    async def test_empty_draft_returns_empty_report(self, client):
        response = await client.post("/api/quotes/check", json={"draft": "", "transcript": "text"})

        assert response.status_code == 200
        assert response.json()["data"] == {
            "quotes": [],
            "summary": {"total": 0, "verified": 0, "unverified": 0},
        }

    @pytest.mark.asyncio
    async def test_invalid_source_type_rejected(self, client):
        response = await client.post("/api/quotes/check", json={
            "draft": "x",
            "sources": [{"id": "s1", "type": "video"}],
        })

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_use_ai_flag_passed_to_matcher(self, client):
        with patch(
            "interview2article.api.routes.quotes.verification_service.build_matcher",
            return_value=QuoteMatcher(verifier=TranscriptVerifier()),
        ) as build_matcher:
            response = await client.post("/api/quotes/check", json={
                "draft": '"a paraphrase of the interview"',
                "transcript": "The interview transcript.",
                "useAi": True,
            })

        build_matcher.assert_called_once_with(True)
        quote = response.json()["data"]["quotes"][0]
        assert quote["verified"] is True
        assert quote["method"] == "ai"
        assert quote["snippet"] == "paraphrased passage"
