"""Runtime configuration read from environment variables."""
import logging
import os
from dataclasses import dataclass
from typing import List


logger = logging.getLogger(__name__)

DEFAULT_AI_MODEL = "openai/gpt-4o-mini"
DEFAULT_OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_APP_URL = "http://localhost:3000"
DEFAULT_APP_TITLE = "GitHub Portfolio Analyzer"
DEFAULT_GITHUB_TIMEOUT_SECONDS = 30.0

REQUIRED_VARIABLES = ("GITHUB_TOKEN", "OPENROUTER_API_KEY")


def _flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() == "true"


@dataclass(frozen=True)
class Settings:
    """Settings for the GitHub fetcher, the scoring model and the HTTP server."""
    github_token: str = ""
    openrouter_api_key: str = ""
    ai_model: str = DEFAULT_AI_MODEL
    demo_mode: bool = False
    openrouter_base_url: str = DEFAULT_OPENROUTER_BASE_URL
    app_url: str = DEFAULT_APP_URL
    app_title: str = DEFAULT_APP_TITLE
    github_timeout_seconds: float = DEFAULT_GITHUB_TIMEOUT_SECONDS
    host: str = "0.0.0.0"
    port: int = 8080

    @classmethod
    def from_env(cls) -> 'Settings':
        """Build settings from the process environment.

        Call `load_dotenv` beforehand to pick up a local .env file.
        """
        settings = cls(
            github_token=os.getenv("GITHUB_TOKEN", ""),
            openrouter_api_key=os.getenv("OPENROUTER_API_KEY", ""),
            ai_model=os.getenv("AI_MODEL") or DEFAULT_AI_MODEL,
            demo_mode=_flag("DEMO_MODE") or _flag("NEXT_PUBLIC_DEMO_MODE"),
            openrouter_base_url=os.getenv("OPENROUTER_BASE_URL") or DEFAULT_OPENROUTER_BASE_URL,
            app_url=os.getenv("APP_URL") or DEFAULT_APP_URL,
            github_timeout_seconds=float(
                os.getenv("GITHUB_REQUEST_TIMEOUT_SECONDS") or DEFAULT_GITHUB_TIMEOUT_SECONDS
            ),
            host=os.getenv("HOST") or "0.0.0.0",
            port=int(os.getenv("PORT") or 8080),
        )
        for name in settings.missing_variables():
            logger.warning(f"Missing environment variable: {name}. Add it to your .env file.")
        return settings

    def missing_variables(self) -> List[str]:
        """Names of required variables that are not set."""
        values = {
            "GITHUB_TOKEN": self.github_token,
            "OPENROUTER_API_KEY": self.openrouter_api_key,
        }
        return [name for name in REQUIRED_VARIABLES if not values[name]]
