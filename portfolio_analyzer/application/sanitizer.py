"""Projection of a profile record down to the fields the scoring prompt uses.

Dropping avatars, URLs, watcher/issue counts and raw README text keeps the
model payload small.
"""
import re
from dataclasses import dataclass, asdict
from typing import List, Optional, Tuple
from portfolio_analyzer.domain.models import ProfileRecord, RepoInfo


MAX_README_LENGTH = 2000
TRUNCATION_MARKER = "\n...[truncated]"

# Applied in order
README_CLEANUP_PATTERNS: List[Tuple[re.Pattern, str]] = [
    # Base64 images: ![alt](data:image/...)
    (re.compile(r"!\[[^\]]*\]\(data:image/[^)]+\)"), ""),
    (re.compile(r"<svg[\s\S]*?</svg>", re.IGNORECASE), "[svg-removed]"),
    # Badges wrapped in a link: [![badge](https://img.shields.io/...)](...)
    (re.compile(r"\[!\[[^\]]*\]\(https?://img\.shields\.io[^)]*\)\]\([^)]*\)"), ""),
    (re.compile(r"!\[[^\]]*\]\(https?://img\.shields\.io[^)]*\)"), ""),
    (re.compile(r"!\[[^\]]*\]\(https?://(?:badges|badge)\.[^)]*\)"), ""),
    (re.compile(r"<!--[\s\S]*?-->"), ""),
    (re.compile(r"\n{3,}"), "\n\n"),
]


@dataclass(frozen=True)
class SanitizedUser:
    login: str
    name: Optional[str]
    bio: Optional[str]
    company: Optional[str]
    blog: Optional[str]
    location: Optional[str]
    followers: int
    following: int
    public_repos: int
    created_at: str


@dataclass(frozen=True)
class SanitizedRepo:
    name: str
    description: Optional[str]
    language: Optional[str]
    stars: int
    forks: int
    topics: Tuple[str, ...]
    homepage: Optional[str]
    license: Optional[str]
    fork: bool
    pushed_at: str
    updated_at: str
    has_readme: bool
    readme_excerpt: Optional[str]


@dataclass(frozen=True)
class SanitizedProfile:
    user: SanitizedUser
    repos: Tuple[SanitizedRepo, ...]

    def to_dict(self) -> dict:
        return {
            "user": asdict(self.user),
            "repos": [
                {**asdict(repo), "topics": list(repo.topics)}
                for repo in self.repos
            ],
        }


def clean_readme(raw: str) -> str:
    """Strip images, badges, SVG and comments from README text and cap its length."""
    cleaned = raw
    for pattern, replacement in README_CLEANUP_PATTERNS:
        cleaned = pattern.sub(replacement, cleaned)
    if len(cleaned) > MAX_README_LENGTH:
        cleaned = cleaned[:MAX_README_LENGTH] + TRUNCATION_MARKER
    return cleaned.strip()


def _sanitize_repo(repo: RepoInfo) -> SanitizedRepo:
    has_readme = bool(repo.readme_content)
    return SanitizedRepo(
        name=repo.name,
        description=repo.description,
        language=repo.language,
        stars=repo.stargazers_count,
        forks=repo.forks_count,
        topics=tuple(repo.topics),
        homepage=repo.homepage,
        license=(repo.license.spdx_id or None) if repo.license else None,
        fork=repo.fork,
        pushed_at=repo.pushed_at,
        updated_at=repo.updated_at,
        has_readme=has_readme,
        readme_excerpt=clean_readme(repo.readme_content) if has_readme else None,
    )


def sanitize_profile(profile: ProfileRecord) -> SanitizedProfile:
    """Build the minimal payload sent to the scoring model. Pure, no I/O."""
    user = profile.user
    return SanitizedProfile(
        user=SanitizedUser(
            login=user.login,
            name=user.name,
            bio=user.bio,
            company=user.company,
            blog=user.blog,
            location=user.location,
            followers=user.followers,
            following=user.following,
            public_repos=user.public_repos,
            created_at=user.created_at,
        ),
        repos=tuple(_sanitize_repo(repo) for repo in profile.repos),
    )
