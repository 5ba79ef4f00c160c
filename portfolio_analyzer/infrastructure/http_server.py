"""aiohttp web application exposing the analysis pipeline over HTTP."""
import asyncio
import contextlib
import logging
from aiohttp import web
from portfolio_analyzer.application.analysis_service import AnalysisService, client_identifier


logger = logging.getLogger(__name__)

SERVICE_KEY = web.AppKey("analysis_service", AnalysisService)
SWEEPER_KEY = web.AppKey("rate_limit_sweeper", asyncio.Task)


async def _read_username(request: web.Request) -> str:
    if request.method == "GET":
        return request.query.get("username", "")
    if request.content_type == "application/json":
        try:
            body = await request.json()
        except ValueError:
            return ""
        return body.get("username", "") if isinstance(body, dict) else ""
    form = await request.post()
    return form.get("username", "")


async def analyze_handler(request: web.Request) -> web.Response:
    """Handle GET /api/analyze?username= and POST /api/analyze."""
    service = request.app[SERVICE_KEY]
    client_id = client_identifier(
        request.headers.get("X-Forwarded-For"),
        request.headers.get("X-Real-IP")
    )
    username = await _read_username(request)

    response = await service.analyze(username, client_id)
    return web.json_response(response.to_dict(), status=200 if response.success else 400)


async def _start_sweeper(app: web.Application) -> None:
    service = app[SERVICE_KEY]
    app[SWEEPER_KEY] = asyncio.create_task(service.rate_limiter.run_periodic_sweep())
    logger.info("Started rate limit sweeper")


async def _stop_sweeper(app: web.Application) -> None:
    task = app[SWEEPER_KEY]
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task


async def _close_service(app: web.Application) -> None:
    await app[SERVICE_KEY].close()


def create_app(service: AnalysisService) -> web.Application:
    """Build the web application around an analysis service."""
    app = web.Application()
    app[SERVICE_KEY] = service
    app.router.add_get("/api/analyze", analyze_handler)
    app.router.add_post("/api/analyze", analyze_handler)
    app.on_startup.append(_start_sweeper)
    app.on_cleanup.append(_stop_sweeper)
    app.on_cleanup.append(_close_service)
    return app
