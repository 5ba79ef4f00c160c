"""Scoring engine orchestrating the completion model.

The model's output is treated as untrusted input: it is parsed, validated and
repaired before any field is used. When every attempt fails the engine falls
back to canned demo data, so callers always receive a usable result.
"""
import asyncio
import json
import logging
import math
import re
from typing import Awaitable, Callable
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential
)
from portfolio_analyzer.application.sanitizer import sanitize_profile
from portfolio_analyzer.application.scoring_prompt import (
    FALLBACK_SUMMARY_PREFIX,
    MOCK_ANALYSIS,
    SYSTEM_PROMPT,
    USER_MESSAGE_TEMPLATE
)
from portfolio_analyzer.domain.completion_interface import ICompletionClient
from portfolio_analyzer.domain.errors import MissingConfigError, ModelResponseError
from portfolio_analyzer.domain.models import (
    AnalysisResult,
    DimensionScore,
    DIMENSION_KEYS,
    ProfileRecord,
    RECRUITER_VERDICTS,
    VERDICT_INTERVIEW,
    VERDICT_PASS,
    VERDICT_STRONG_HIRE
)


logger = logging.getLogger(__name__)

DEMO_LOGINS = frozenset({"demo", "test"})

MAX_ATTEMPTS = 2
BASE_DELAY_SECONDS = 2.0
DEMO_LATENCY_SECONDS = 1.5

MAX_TOTAL_SCORE = 100
MAX_DIMENSION_SCORE = 10
# Five dimensions capped at 10 sum to 50; doubling maps the sum onto 0-100.
# Must change together with DIMENSION_KEYS or MAX_DIMENSION_SCORE.
DIMENSION_TOTAL_MULTIPLIER = 2

STRONG_HIRE_THRESHOLD = 70
INTERVIEW_THRESHOLD = 45

CODE_FENCE_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


def extract_json(text: str) -> str:
    """Returns the body of a fenced code block if present, else the whole text."""
    match = CODE_FENCE_PATTERN.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def _to_number(value) -> float:
    """Coerce a loosely typed value to float; anything unparseable becomes 0."""
    if isinstance(value, bool):
        number = float(value)
    elif isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            number = math.copysign(math.inf, value)
    elif isinstance(value, str):
        try:
            number = float(value.strip()) if value.strip() else 0.0
        except ValueError:
            number = 0.0
    else:
        number = 0.0
    return 0.0 if math.isnan(number) else number


def _clamp_round(value: float, upper: int) -> int:
    clamped = max(0.0, min(float(upper), value))
    return int(math.floor(clamped + 0.5))


def verdict_for_score(total_score: int) -> str:
    if total_score >= STRONG_HIRE_THRESHOLD:
        return VERDICT_STRONG_HIRE
    if total_score >= INTERVIEW_THRESHOLD:
        return VERDICT_INTERVIEW
    return VERDICT_PASS


def parse_model_output(raw_text: str) -> dict:
    """Parse the model's text into a dict and check the required fields.

    Raises:
        ModelResponseError: Empty text, invalid JSON or missing fields
    """
    if not raw_text:
        raise ModelResponseError("Empty response from AI")

    try:
        parsed = json.loads(extract_json(raw_text))
    except ValueError as e:
        raise ModelResponseError(f"AI response is not valid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise ModelResponseError("Invalid response structure from AI")

    total_score = parsed.get("total_score")
    if (
        isinstance(total_score, bool)
        or not isinstance(total_score, (int, float))
        or not isinstance(parsed.get("summary"), str)
        or not isinstance(parsed.get("dimensions"), dict)
        or not parsed.get("dimensions")
        or not parsed.get("recruiter_verdict")
    ):
        raise ModelResponseError("Invalid response structure from AI")

    return parsed


def repair_model_output(parsed: dict) -> AnalysisResult:
    """Clamp scores, recompute a missing total and fix the verdict.

    A total that rounds or clamps to zero is taken as an omission by the
    model: it is then rebuilt from the dimension scores.
    """
    raw_dimensions = parsed["dimensions"]
    dimensions = {}
    calculated_total = 0
    for key in DIMENSION_KEYS:
        raw = raw_dimensions.get(key)
        if not isinstance(raw, dict):
            raw = {}
        score = _clamp_round(_to_number(raw.get("score")), MAX_DIMENSION_SCORE)
        comment = raw.get("comment")
        dimensions[key] = DimensionScore(
            score=score,
            comment=comment if isinstance(comment, str) else ""
        )
        calculated_total += score

    total_score = _clamp_round(_to_number(parsed["total_score"]), MAX_TOTAL_SCORE)
    if not total_score:
        total_score = calculated_total * DIMENSION_TOTAL_MULTIPLIER
        logger.info(f"[AI] Recalculated total_score from dimensions: {total_score}")

    verdict = parsed["recruiter_verdict"]
    if verdict not in RECRUITER_VERDICTS:
        verdict = verdict_for_score(total_score)

    feedback = parsed.get("actionable_feedback")
    if not isinstance(feedback, list):
        feedback = []

    return AnalysisResult(
        total_score=total_score,
        summary=parsed["summary"],
        dimensions=dimensions,
        recruiter_verdict=verdict,
        actionable_feedback=tuple(str(item) for item in feedback)
    )


class ScoringEngine:
    """Scores a profile with the completion model, repairing or replacing bad output."""

    def __init__(
        self,
        completion_client: ICompletionClient,
        demo_mode: bool = False,
        max_attempts: int = MAX_ATTEMPTS,
        base_delay_seconds: float = BASE_DELAY_SECONDS,
        demo_latency_seconds: float = DEMO_LATENCY_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    ):
        """Initialize the scoring engine.

        Args:
            completion_client: Model used for live scoring
            demo_mode: Return the canned result for every profile
            max_attempts: Model calls before falling back to demo data
            base_delay_seconds: First backoff delay, doubled on each retry
            demo_latency_seconds: Simulated latency of the demo path
            sleep: Coroutine used for every wait (injectable for tests)
        """
        self._client = completion_client
        self._demo_mode = demo_mode
        self._max_attempts = max_attempts
        self._base_delay_seconds = base_delay_seconds
        self._demo_latency_seconds = demo_latency_seconds
        self._sleep = sleep

    @staticmethod
    def is_demo_login(login: str) -> bool:
        return login.lower() in DEMO_LOGINS

    def is_demo(self, login: str) -> bool:
        return self._demo_mode or self.is_demo_login(login)

    async def score(self, profile: ProfileRecord) -> AnalysisResult:
        """Score a profile.

        Never raises for model failures: exhausted attempts yield the demo
        result marked as mock data.

        Raises:
            MissingConfigError: No model API key is configured
        """
        if self.is_demo(profile.user.login):
            logger.info("[AI] DEMO MODE: Returning mock analysis.")
            await self._sleep(self._demo_latency_seconds)
            return MOCK_ANALYSIS

        if not self._client.is_configured:
            raise MissingConfigError(
                "OPENROUTER_API_KEY is not set. Please add it to your environment."
            )

        user_message = self._build_user_message(profile)

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(multiplier=self._base_delay_seconds),
            retry=retry_if_exception_type(Exception),
            before_sleep=self._log_retry,
            sleep=self._sleep,
            reraise=True
        )

        try:
            async for attempt in retrying:
                with attempt:
                    result = await self._attempt(user_message, attempt.retry_state.attempt_number)
        except Exception as e:
            logger.warning(f"[AI] All attempts failed ({e}). Falling back to MOCK DATA.")
            return MOCK_ANALYSIS.with_mock_flag(FALLBACK_SUMMARY_PREFIX)

        logger.info(
            f"[AI] Success! Score: {result.total_score}, Verdict: {result.recruiter_verdict}"
        )
        return result

    def _build_user_message(self, profile: ProfileRecord) -> str:
        raw_payload = json.dumps(profile.to_dict())
        sanitized_payload = json.dumps(sanitize_profile(profile).to_dict())

        raw_size = len(raw_payload.encode("utf-8"))
        clean_size = len(sanitized_payload.encode("utf-8"))
        reduction = round((1 - clean_size / raw_size) * 100) if raw_size else 0
        logger.info(
            f"[AI] Payload sanitized: {raw_size / 1024:.1f}kb -> "
            f"{clean_size / 1024:.1f}kb ({reduction}% reduction)"
        )

        return USER_MESSAGE_TEMPLATE.format(payload=sanitized_payload)

    async def close(self) -> None:
        await self._client.close()

    async def _attempt(self, user_message: str, attempt_number: int) -> AnalysisResult:
        logger.info(f"[AI] Calling {self._client.model}, attempt {attempt_number}...")
        raw_text = await self._client.complete(SYSTEM_PROMPT, user_message)
        parsed = parse_model_output(raw_text)
        return repair_model_output(parsed)

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception()
        logger.warning(
            f"[AI] Attempt {retry_state.attempt_number} failed: {error}. "
            f"Retrying in {retry_state.next_action.sleep:.1f}s"
        )
