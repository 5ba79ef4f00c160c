"""Tests for the HTTP surface."""
import asyncio
import json
from datetime import datetime, timezone
from aiohttp.test_utils import TestClient, TestServer
from portfolio_analyzer.application.analysis_service import AnalysisService
from portfolio_analyzer.application.rate_limiter import SlidingWindowRateLimiter
from portfolio_analyzer.application.scoring_engine import ScoringEngine
from portfolio_analyzer.domain.completion_interface import ICompletionClient
from portfolio_analyzer.domain.github_interface import IProfileFetcher
from portfolio_analyzer.domain.models import ProfileRecord, UserInfo
from portfolio_analyzer.infrastructure.http_server import create_app


class StaticFetcher(IProfileFetcher):
    def __init__(self):
        self.closed = False
    
    async def fetch_profile(self, username: str) -> ProfileRecord:
        return ProfileRecord(
            user=UserInfo(login=username),
            repos=(),
            fetched_at=datetime(2024, 1, 1, tzinfo=timezone.utc)
        )
    
    async def close(self) -> None:
        self.closed = True


class StaticCompletionClient(ICompletionClient):
    @property
    def is_configured(self) -> bool:
        return True
    
    @property
    def model(self) -> str:
        return "fake/model"
    
    async def complete(self, system_prompt: str, user_message: str) -> str:
        return json.dumps({
            "total_score": 40,
            "summary": "Thin portfolio.",
            "dimensions": {"documentation": {"score": 4, "comment": "sparse"}},
            "recruiter_verdict": "Pass",
            "actionable_feedback": [],
        })
    
    async def close(self) -> None:
        pass


async def _no_sleep(seconds: float) -> None:
    pass


def _service(max_requests: int = 10, fetcher=None):
    return AnalysisService(
        fetcher or StaticFetcher(),
        ScoringEngine(StaticCompletionClient(), sleep=_no_sleep),
        rate_limiter=SlidingWindowRateLimiter(max_requests=max_requests)
    )


async def _request(service, method: str, path: str, **kwargs):
    client = TestClient(TestServer(create_app(service)))
    await client.start_server()
    try:
        response = await client.request(method, path, **kwargs)
        return response.status, await response.json()
    finally:
        await client.close()


def test_get_analyze():
    """Test GET with a username query parameter."""
    status, body = asyncio.run(_request(_service(), "GET", "/api/analyze?username=octocat"))
    
    assert status == 200
    assert body["success"] is True
    assert body["data"]["total_score"] == 40
    assert body["profileData"]["user"]["login"] == "octocat"


def test_post_json_and_form():
    """Test POST with JSON and form bodies."""
    json_status, json_body = asyncio.run(
        _request(_service(), "POST", "/api/analyze", json={"username": "https://github.com/octocat"})
    )
    form_status, form_body = asyncio.run(
        _request(_service(), "POST", "/api/analyze", data={"username": "octocat"})
    )
    
    assert json_status == 200 and json_body["success"] is True
    assert form_status == 200 and form_body["success"] is True


def test_invalid_username_returns_400():
    status, body = asyncio.run(_request(_service(), "GET", "/api/analyze?username=-bad-"))
    
    assert status == 400
    assert body == {"success": False, "error": "Please enter a valid GitHub username or profile URL."}


def test_rate_limit_keyed_by_forwarded_for():
    """Test clients are rate limited by the first X-Forwarded-For address."""
    service = _service(max_requests=1)
    
    async def scenario():
        client = TestClient(TestServer(create_app(service)))
        await client.start_server()
        try:
            headers_a = {"X-Forwarded-For": "203.0.113.5, 10.0.0.1"}
            first = await client.get("/api/analyze?username=octocat", headers=headers_a)
            second = await client.get("/api/analyze?username=octocat", headers=headers_a)
            other = await client.get("/api/analyze?username=octocat", headers={"X-Real-IP": "198.51.100.7"})
            return first.status, (await second.json())["error"], other.status
        finally:
            await client.close()
    
    first_status, second_error, other_status = asyncio.run(scenario())
    
    assert first_status == 200
    assert second_error.startswith("Too many requests.")
    assert other_status == 200


def test_cleanup_closes_service():
    """Test shutting down the app closes the fetcher and stops the sweeper."""
    fetcher = StaticFetcher()
    
    asyncio.run(_request(_service(fetcher=fetcher), "GET", "/api/analyze?username=octocat"))
    
    assert fetcher.closed is True
