"""Construction of the analysis service from settings."""
from portfolio_analyzer.application.analysis_service import AnalysisService
from portfolio_analyzer.application.rate_limiter import SlidingWindowRateLimiter
from portfolio_analyzer.application.result_cache import AnalysisCache
from portfolio_analyzer.application.scoring_engine import ScoringEngine
from portfolio_analyzer.config import Settings
from portfolio_analyzer.infrastructure.github_client import GitHubRestClient
from portfolio_analyzer.infrastructure.openrouter_client import OpenRouterCompletionClient


def build_analysis_service(settings: Settings) -> AnalysisService:
    """Wire infrastructure clients into a fresh analysis service.

    The rate limiter and cache start empty and live as long as the service.
    """
    github_client = GitHubRestClient(
        settings.github_token,
        timeout_seconds=settings.github_timeout_seconds
    )
    completion_client = OpenRouterCompletionClient(
        api_key=settings.openrouter_api_key,
        model=settings.ai_model,
        base_url=settings.openrouter_base_url,
        app_url=settings.app_url,
        app_title=settings.app_title
    )
    return AnalysisService(
        profile_fetcher=github_client,
        scoring_engine=ScoringEngine(completion_client, demo_mode=settings.demo_mode),
        rate_limiter=SlidingWindowRateLimiter(),
        cache=AnalysisCache()
    )
