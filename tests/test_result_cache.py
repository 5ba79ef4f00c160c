"""Tests for the analysis result cache."""
from datetime import datetime, timezone
from portfolio_analyzer.application.result_cache import CACHE_TTL_SECONDS, AnalysisCache
from portfolio_analyzer.application.scoring_prompt import MOCK_ANALYSIS
from portfolio_analyzer.domain.models import AnalysisResponse, ProfileRecord, UserInfo


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now
    
    def __call__(self) -> float:
        return self.now


def _response(is_mock: bool = False) -> AnalysisResponse:
    profile = ProfileRecord(
        user=UserInfo(login="Foo"),
        repos=(),
        fetched_at=datetime(2024, 1, 1, tzinfo=timezone.utc)
    )
    result = MOCK_ANALYSIS.with_mock_flag("") if is_mock else MOCK_ANALYSIS
    return AnalysisResponse.ok(result, profile)


def test_lookup_is_case_insensitive():
    """Test storing under "Foo" and reading under "foo" is a hit."""
    cache = AnalysisCache(clock=FakeClock())
    response = _response()
    
    cache.put("Foo", response)
    
    assert cache.get("foo") is response
    assert cache.get("FOO") is response


def test_miss_for_unknown_username():
    """Test an empty cache reports absent."""
    assert AnalysisCache(clock=FakeClock()).get("nobody") is None


def test_mock_responses_are_never_stored():
    """Test mock results stay out of the cache even after a put attempt."""
    cache = AnalysisCache(clock=FakeClock())
    
    stored = cache.put("Foo", _response(is_mock=True))
    
    assert stored is False
    assert cache.get("foo") is None
    assert len(cache) == 0


def test_entry_expires_after_ttl_and_is_evicted():
    """Test lazy expiry deletes the entry on read."""
    clock = FakeClock()
    cache = AnalysisCache(clock=clock)
    cache.put("Foo", _response())
    
    clock.now += CACHE_TTL_SECONDS + 1
    
    assert cache.get("foo") is None
    assert len(cache) == 0


def test_entry_served_within_ttl():
    """Test an entry is still served right at the TTL boundary."""
    clock = FakeClock()
    cache = AnalysisCache(clock=clock)
    response = _response()
    cache.put("Foo", response)
    
    clock.now += CACHE_TTL_SECONDS
    
    assert cache.get("foo") is response
