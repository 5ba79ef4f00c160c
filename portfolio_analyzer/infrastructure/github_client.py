"""GitHub REST API client implementation with rate limit tracking and retry logic."""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional
import aiohttp
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type
)
from portfolio_analyzer.domain.errors import (
    BadCredentialsError,
    ProfileNotFoundError,
    UpstreamRateLimitError
)
from portfolio_analyzer.domain.github_interface import IProfileFetcher
from portfolio_analyzer.domain.models import License, ProfileRecord, RepoInfo, UserInfo


logger = logging.getLogger(__name__)

GITHUB_API_BASE_URL = "https://api.github.com"
GITHUB_ACCEPT_HEADER = "application/vnd.github+json"
GITHUB_RAW_ACCEPT_HEADER = "application/vnd.github.raw+json"
GITHUB_API_VERSION = "2022-11-28"
USER_AGENT = "github-portfolio-analyzer"

MAX_REPOS = 6
LOW_RATE_LIMIT_THRESHOLD = 10


class GitHubApiError(Exception):
    """Exception raised for GitHub responses with no more specific meaning."""
    pass


class GitHubRestClient(IProfileFetcher):
    """GitHub REST API client fetching a user, their recent repos and READMEs.

    Implements the IProfileFetcher port, providing an anti-corruption layer
    between the domain and GitHub's API.
    """

    def __init__(
        self,
        access_token: str = "",
        base_url: str = GITHUB_API_BASE_URL,
        timeout_seconds: float = 30.0,
        max_repos: int = MAX_REPOS
    ):
        """Initialize GitHub client.

        Args:
            access_token: GitHub personal access token (optional, raises quota)
            base_url: Root URL of the GitHub REST API
            timeout_seconds: Total timeout applied to every request
            max_repos: Number of most recently updated repos to fetch
        """
        self._access_token = access_token
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._max_repos = max_repos
        self._session: Optional[aiohttp.ClientSession] = None
        self._rate_limit_remaining: Optional[int] = None

    async def _init_session(self) -> aiohttp.ClientSession:
        """Initialize the HTTP session (lazy initialization)."""
        if self._session is None or self._session.closed:
            headers = {
                "Accept": GITHUB_ACCEPT_HEADER,
                "User-Agent": USER_AGENT,
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
            }
            if self._access_token:
                headers["Authorization"] = f"Bearer {self._access_token}"
            self._session = aiohttp.ClientSession(headers=headers, timeout=self._timeout)
        return self._session

    def _track_rate_limit(self, response: aiohttp.ClientResponse) -> None:
        """Record the remaining quota reported by GitHub and warn when it runs low."""
        remaining = response.headers.get("X-RateLimit-Remaining")
        if remaining is None or not remaining.isdigit():
            return
        self._rate_limit_remaining = int(remaining)
        if self._rate_limit_remaining <= LOW_RATE_LIMIT_THRESHOLD:
            logger.warning(
                f"GitHub rate limit nearly exhausted: {self._rate_limit_remaining} "
                f"requests remaining until reset at {response.headers.get('X-RateLimit-Reset')}"
            )

    async def _raise_for_status(self, response: aiohttp.ClientResponse, username: str) -> None:
        """Map GitHub error responses to typed domain errors.

        Raises:
            ProfileNotFoundError: HTTP 404
            BadCredentialsError: HTTP 401
            UpstreamRateLimitError: HTTP 403/429 with an exhausted quota
            GitHubApiError: Any other error status
        """
        if response.status < 400:
            return

        try:
            body = await response.json(content_type=None)
            message = body.get("message", "") if isinstance(body, dict) else ""
        except ValueError:
            message = ""

        if response.status == 404:
            raise ProfileNotFoundError(f"GitHub user {username}: Not Found")
        if response.status == 401:
            raise BadCredentialsError(message or "Bad credentials")
        if response.status in (403, 429) and (
            response.headers.get("X-RateLimit-Remaining") == "0"
            or "rate limit" in message.lower()
        ):
            raise UpstreamRateLimitError(message or "API rate limit exceeded")
        raise GitHubApiError(f"GitHub API error {response.status}: {message}")

    @retry(
        retry=retry_if_exception_type((aiohttp.ClientConnectionError, asyncio.TimeoutError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True
    )
    async def _get_json(self, path: str, username: str, params: Optional[dict] = None):
        """Execute a GET request with retry on connection errors and timeouts.

        Args:
            path: API path below the base URL
            username: Login the request is about, used in error messages
            params: Query string parameters

        Returns:
            Decoded JSON body
        """
        session = await self._init_session()
        async with session.get(f"{self._base_url}{path}", params=params) as response:
            self._track_rate_limit(response)
            await self._raise_for_status(response, username)
            return await response.json()

    async def _fetch_readme(self, owner: str, repo_name: str) -> Optional[str]:
        """Fetch the raw README text of a repository.

        Returns None when the repository has no README or the request fails.
        """
        session = await self._init_session()
        url = f"{self._base_url}/repos/{owner}/{repo_name}/readme"
        try:
            async with session.get(url, headers={"Accept": GITHUB_RAW_ACCEPT_HEADER}) as response:
                self._track_rate_limit(response)
                if response.status == 404:
                    return None
                if response.status >= 400:
                    logger.warning(
                        f"Failed to fetch README for {owner}/{repo_name}: HTTP {response.status}"
                    )
                    return None
                # Legacy READMEs are not always valid UTF-8
                return await response.text(errors="replace")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Failed to fetch README for {owner}/{repo_name}: {e!r}")
            return None

    async def fetch_profile(self, username: str) -> ProfileRecord:
        """Fetch the user, their most recently updated repos and each README.

        README requests run concurrently; a failed README counts as absent.

        Args:
            username: GitHub login

        Returns:
            ProfileRecord domain entity
        """
        logger.info(f"Fetching GitHub profile for {username}")
        raw_user = await self._get_json(f"/users/{username}", username)
        raw_repos = await self._get_json(
            f"/users/{username}/repos",
            username,
            params={
                "sort": "updated",
                "direction": "desc",
                "per_page": str(self._max_repos),
                "type": "owner",
            }
        )
        raw_repos = list(raw_repos)[:self._max_repos]

        readmes = await asyncio.gather(*(
            self._fetch_readme((repo.get("owner") or {}).get("login") or username, repo["name"])
            for repo in raw_repos
        ))

        repos = tuple(
            _to_repo(raw_repo, readme)
            for raw_repo, readme in zip(raw_repos, readmes)
        )
        logger.info(
            f"Fetched {len(repos)} repositories for {username} "
            f"({sum(1 for repo in repos if repo.readme_content)} with README)"
        )

        return ProfileRecord(
            user=_to_user(raw_user),
            repos=repos,
            fetched_at=datetime.now(timezone.utc)
        )

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None


def _to_user(data: dict) -> UserInfo:
    """Transform a GitHub user payload to a domain entity."""
    return UserInfo(
        login=data["login"],
        name=data.get("name"),
        bio=data.get("bio"),
        avatar_url=data.get("avatar_url") or "",
        html_url=data.get("html_url") or "",
        company=data.get("company"),
        location=data.get("location"),
        blog=data.get("blog"),
        twitter_username=data.get("twitter_username"),
        followers=data.get("followers") or 0,
        following=data.get("following") or 0,
        public_repos=data.get("public_repos") or 0,
        public_gists=data.get("public_gists") or 0,
        created_at=data.get("created_at") or "",
        updated_at=data.get("updated_at") or "",
    )


def _to_repo(data: dict, readme: Optional[str]) -> RepoInfo:
    """Transform a GitHub repository payload to a domain entity."""
    raw_license = data.get("license")
    return RepoInfo(
        name=data["name"],
        full_name=data.get("full_name") or "",
        html_url=data.get("html_url") or "",
        description=data.get("description"),
        language=data.get("language"),
        stargazers_count=data.get("stargazers_count") or 0,
        forks_count=data.get("forks_count") or 0,
        watchers_count=data.get("watchers_count") or 0,
        open_issues_count=data.get("open_issues_count") or 0,
        topics=tuple(data.get("topics") or ()),
        created_at=data.get("created_at") or "",
        updated_at=data.get("updated_at") or "",
        pushed_at=data.get("pushed_at") or "",
        homepage=data.get("homepage"),
        fork=bool(data.get("fork")),
        has_wiki=bool(data.get("has_wiki")),
        has_pages=bool(data.get("has_pages")),
        license=License(
            name=raw_license.get("name") or "",
            spdx_id=raw_license.get("spdx_id") or ""
        ) if raw_license else None,
        readme_content=readme,
    )
