"""Tests for environment configuration."""
from portfolio_analyzer.config import DEFAULT_AI_MODEL, Settings


def _clear(monkeypatch):
    for name in (
        "GITHUB_TOKEN", "OPENROUTER_API_KEY", "AI_MODEL", "DEMO_MODE",
        "NEXT_PUBLIC_DEMO_MODE", "OPENROUTER_BASE_URL", "APP_URL",
        "GITHUB_REQUEST_TIMEOUT_SECONDS", "HOST", "PORT",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults_and_missing_variables(monkeypatch):
    """Test defaults apply and required variables are reported missing."""
    _clear(monkeypatch)
    
    settings = Settings.from_env()
    
    assert settings.ai_model == DEFAULT_AI_MODEL
    assert settings.demo_mode is False
    assert settings.github_timeout_seconds == 30.0
    assert settings.missing_variables() == ["GITHUB_TOKEN", "OPENROUTER_API_KEY"]


def test_reads_environment(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_abc")
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-or-xyz")
    monkeypatch.setenv("AI_MODEL", "anthropic/claude-3-haiku")
    monkeypatch.setenv("PORT", "9000")
    
    settings = Settings.from_env()
    
    assert settings.github_token == "ghp_abc"
    assert settings.openrouter_api_key == "sk-or-xyz"
    assert settings.ai_model == "anthropic/claude-3-haiku"
    assert settings.port == 9000
    assert settings.missing_variables() == []


def test_demo_mode_flags(monkeypatch):
    """Test both the current and legacy demo mode variables."""
    _clear(monkeypatch)
    monkeypatch.setenv("DEMO_MODE", "TRUE")
    assert Settings.from_env().demo_mode is True
    
    _clear(monkeypatch)
    monkeypatch.setenv("NEXT_PUBLIC_DEMO_MODE", "true")
    assert Settings.from_env().demo_mode is True
    
    _clear(monkeypatch)
    monkeypatch.setenv("DEMO_MODE", "yes")
    assert Settings.from_env().demo_mode is False
