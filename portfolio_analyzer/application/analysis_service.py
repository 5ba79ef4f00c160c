"""Analysis service orchestrating the profile analysis pipeline."""
import logging
from typing import Optional
from portfolio_analyzer.application.error_translation import (
    classify_error,
    rate_limited_message,
    user_message
)
from portfolio_analyzer.application.rate_limiter import SlidingWindowRateLimiter
from portfolio_analyzer.application.result_cache import AnalysisCache
from portfolio_analyzer.application.scoring_engine import ScoringEngine
from portfolio_analyzer.application.scoring_prompt import build_demo_profile
from portfolio_analyzer.domain.errors import ErrorKind
from portfolio_analyzer.domain.github_interface import IProfileFetcher
from portfolio_analyzer.domain.models import AnalysisResponse
from portfolio_analyzer.domain.username import MAX_USERNAME_LENGTH, normalize_username


logger = logging.getLogger(__name__)

ANONYMOUS_CLIENT = "anonymous"


def client_identifier(forwarded_for: Optional[str], real_ip: Optional[str]) -> str:
    """Derive the rate-limit key from proxy headers.

    Uses the first X-Forwarded-For address, then X-Real-IP, then a shared
    fallback for unidentified clients.
    """
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first
    if real_ip and real_ip.strip():
        return real_ip.strip()
    return ANONYMOUS_CLIENT


class AnalysisService:
    """Application service for analyzing GitHub profiles.

    Sequences rate limiting, input normalization, caching, profile fetching
    and scoring. The cache and rate limiter are injected so their state is
    owned by whoever builds the service.
    """

    def __init__(
        self,
        profile_fetcher: IProfileFetcher,
        scoring_engine: ScoringEngine,
        rate_limiter: Optional[SlidingWindowRateLimiter] = None,
        cache: Optional[AnalysisCache] = None
    ):
        """Initialize analysis service.

        Args:
            profile_fetcher: GitHub profile fetcher implementation
            scoring_engine: Engine scoring fetched profiles
            rate_limiter: Per-client admission control
            cache: Store of recent successful analyses
        """
        self._profile_fetcher = profile_fetcher
        self._scoring_engine = scoring_engine
        self._rate_limiter = rate_limiter if rate_limiter is not None else SlidingWindowRateLimiter()
        self._cache = cache if cache is not None else AnalysisCache()

    @property
    def rate_limiter(self) -> SlidingWindowRateLimiter:
        return self._rate_limiter

    async def analyze(self, raw_input, client_id: str = ANONYMOUS_CLIENT) -> AnalysisResponse:
        """Analyze a GitHub username or profile URL.

        Never raises: every failure is returned as a response carrying a
        user-facing message.

        Args:
            raw_input: Username or profile URL as typed by the user
            client_id: Identifier of the requesting client for rate limiting

        Returns:
            AnalysisResponse with the report and profile, or an error message
        """
        decision = self._rate_limiter.check(client_id)
        if not decision.allowed:
            logger.warning(
                f"[RateLimit] BLOCKED: {client_id} (retry in {decision.retry_after_ms}ms)"
            )
            return AnalysisResponse.failure(rate_limited_message(decision.retry_after_ms))
        logger.info(f"[RateLimit] OK: {client_id} ({decision.remaining} remaining)")

        username = normalize_username(raw_input)
        if not username:
            return AnalysisResponse.failure(user_message(ErrorKind.INVALID_INPUT))

        if len(username) > MAX_USERNAME_LENGTH:
            return AnalysisResponse.failure("Username is too long.")

        cached = self._cache.get(username)
        if cached is not None:
            return cached

        try:
            if ScoringEngine.is_demo_login(username):
                logger.info(f"[Analysis] Using demo profile for: {username}")
                profile = build_demo_profile(username)
            else:
                logger.info(f"[Analysis] Fetching GitHub data for: {username}")
                profile = await self._profile_fetcher.fetch_profile(username)

            logger.info(f"[Analysis] Running AI analysis for: {username}")
            result = await self._scoring_engine.score(profile)
        except Exception as e:
            kind = classify_error(e)
            logger.error(f"[Analysis] Error for {username} ({kind.value}): {e}", exc_info=True)
            return AnalysisResponse.failure(user_message(kind, username))

        logger.info(f"[Analysis] Complete for: {username}")
        response = AnalysisResponse.ok(result, profile)
        if response.is_mock:
            logger.info(f"[Cache] SKIPPED mock data for: {username}")
        else:
            self._cache.put(username, response)
        return response

    async def close(self) -> None:
        """Close connections."""
        await self._profile_fetcher.close()
        await self._scoring_engine.close()
