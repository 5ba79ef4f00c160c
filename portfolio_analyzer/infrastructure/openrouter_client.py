"""OpenRouter chat completion client built on the OpenAI SDK."""
import logging
from typing import Optional
import openai
from openai import AsyncOpenAI
from portfolio_analyzer.domain.completion_interface import ICompletionClient
from portfolio_analyzer.domain.errors import ModelNotFoundError, ModelQuotaError


logger = logging.getLogger(__name__)

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"

# Low temperature and a fixed seed keep scores repeatable for the same input
TEMPERATURE = 0.2
MAX_TOKENS = 800
SEED = 42


class OpenRouterCompletionClient(ICompletionClient):
    """Completion client talking to OpenRouter's OpenAI-compatible API."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = OPENROUTER_BASE_URL,
        app_url: str = "http://localhost:3000",
        app_title: str = "GitHub Portfolio Analyzer"
    ):
        self._api_key = api_key
        self._model = model
        self._base_url = base_url
        self._default_headers = {"HTTP-Referer": app_url, "X-Title": app_title}
        self._client: Optional[AsyncOpenAI] = None

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    @property
    def model(self) -> str:
        return self._model

    def _init_client(self) -> AsyncOpenAI:
        """Initialize the SDK client (lazy initialization)."""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                default_headers=self._default_headers
            )
        return self._client

    async def complete(self, system_prompt: str, user_message: str) -> str:
        """Send the exchange to the model and return its text.

        Raises:
            ModelQuotaError: The provider rejected the request for quota reasons
            ModelNotFoundError: The configured model does not exist
        """
        client = self._init_client()
        try:
            completion = await client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_message},
                ],
                temperature=TEMPERATURE,
                max_tokens=MAX_TOKENS,
                seed=SEED,
            )
        except openai.RateLimitError as e:
            raise ModelQuotaError(f"Model quota exceeded: {e}") from e
        except openai.NotFoundError as e:
            raise ModelNotFoundError(f"Model {self._model} not found: {e}") from e

        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""

    async def close(self) -> None:
        """Close the SDK client."""
        if self._client is not None:
            await self._client.close()
            self._client = None
