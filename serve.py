"""HTTP entry point serving the analysis API."""
import logging
from aiohttp import web
from dotenv import load_dotenv
from portfolio_analyzer.config import Settings
from portfolio_analyzer.infrastructure.http_server import create_app
from portfolio_analyzer.wiring import build_analysis_service

# Load environment variables from .env or env file
load_dotenv('.env') or load_dotenv('env')


logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    """Start the web server."""
    settings = Settings.from_env()
    if settings.demo_mode:
        logger.info("Demo mode is enabled: every analysis returns demo data")

    app = create_app(build_analysis_service(settings))
    web.run_app(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
