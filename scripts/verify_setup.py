"""Verify that the environment is configured before running the analyzer."""
import sys
from dotenv import load_dotenv
from portfolio_analyzer.config import Settings

# Load environment variables from .env or env file
load_dotenv('.env') or load_dotenv('env')


def check_environment_variables(settings: Settings):
    """Check required environment variables."""
    print("Checking environment variables...")

    missing = settings.missing_variables()
    if missing:
        print(f"❌ Missing required environment variables: {', '.join(missing)}")
        return False

    print("✅ Required environment variables set")
    print(f"   AI_MODEL: {settings.ai_model}")
    print(f"   DEMO_MODE: {settings.demo_mode}")
    return True


def check_github_token(settings: Settings):
    """Verify GitHub token format."""
    print("\nChecking GitHub token...")

    token = settings.github_token
    if not token:
        print("❌ GITHUB_TOKEN not set (public API quota is 60 requests per hour)")
        return False

    if token.startswith("ghp_") or token.startswith("github_pat_"):
        print("✅ GitHub token format looks valid")
        print(f"   Token prefix: {token[:10]}...")
        return True
    else:
        print("⚠️  Token format may be invalid (expected ghp_* or github_pat_*)")
        return True  # Don't fail, might be old format


def check_openrouter_key(settings: Settings):
    """Verify the scoring model API key format."""
    print("\nChecking OpenRouter API key...")

    key = settings.openrouter_api_key
    if not key:
        if settings.demo_mode:
            print("⚠️  OPENROUTER_API_KEY not set, but demo mode is enabled")
            return True
        print("❌ OPENROUTER_API_KEY not set: live scoring is unavailable")
        return False

    if key.startswith("sk-or-"):
        print("✅ OpenRouter key format looks valid")
    else:
        print("⚠️  Key format may be invalid (expected sk-or-*)")
    return True


def main():
    """Run all verification checks."""
    print("=" * 60)
    print("GitHub Portfolio Analyzer - Setup Verification")
    print("=" * 60)

    settings = Settings.from_env()
    checks = [
        ("Environment Variables", check_environment_variables),
        ("GitHub Token", check_github_token),
        ("OpenRouter API Key", check_openrouter_key),
    ]

    results = {}
    for name, check_func in checks:
        results[name] = check_func(settings)

    print("\n" + "=" * 60)
    print("Verification Summary")
    print("=" * 60)

    for name, passed in results.items():
        status = "✅ PASS" if passed else "❌ FAIL"
        print(f"{status}: {name}")

    if all(results.values()):
        print("\n✅ All checks passed! Ready to run the analyzer.")
        print("\nNext steps:")
        print("  python analyze_profile.py octocat")
        print("  python serve.py")
        sys.exit(0)
    else:
        print("\n❌ Some checks failed. Please fix the issues above.")
        print("\nCommon solutions:")
        print("  - Set GITHUB_TOKEN: export GITHUB_TOKEN=your_token")
        print("  - Set OPENROUTER_API_KEY: export OPENROUTER_API_KEY=your_key")
        print("  - Or enable demo mode: export DEMO_MODE=true")
        sys.exit(1)


if __name__ == "__main__":
    main()
