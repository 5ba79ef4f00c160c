"""Domain models representing core business entities."""
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Optional, Tuple


DIMENSION_KEYS = (
    "documentation",
    "code_structure",
    "consistency",
    "impact",
    "technical_depth",
)

VERDICT_STRONG_HIRE = "Strong Hire"
VERDICT_INTERVIEW = "Interview"
VERDICT_PASS = "Pass"
RECRUITER_VERDICTS = (VERDICT_STRONG_HIRE, VERDICT_INTERVIEW, VERDICT_PASS)


@dataclass(frozen=True)
class UserInfo:
    """Public GitHub account information."""
    login: str
    name: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: str = ""
    html_url: str = ""
    company: Optional[str] = None
    location: Optional[str] = None
    blog: Optional[str] = None
    twitter_username: Optional[str] = None
    followers: int = 0
    following: int = 0
    public_repos: int = 0
    public_gists: int = 0
    created_at: str = ""
    updated_at: str = ""


@dataclass(frozen=True)
class License:
    name: str
    spdx_id: str


@dataclass(frozen=True)
class RepoInfo:
    """A repository owned by the user, with its README attached when present."""
    name: str
    full_name: str = ""
    html_url: str = ""
    description: Optional[str] = None
    language: Optional[str] = None
    stargazers_count: int = 0
    forks_count: int = 0
    watchers_count: int = 0
    open_issues_count: int = 0
    topics: Tuple[str, ...] = ()
    created_at: str = ""
    updated_at: str = ""
    pushed_at: str = ""
    homepage: Optional[str] = None
    fork: bool = False
    has_wiki: bool = False
    has_pages: bool = False
    license: Optional[License] = None
    readme_content: Optional[str] = None


@dataclass(frozen=True)
class ProfileRecord:
    """Immutable snapshot of a GitHub profile and its most recent repositories.

    Built once by the profile fetcher and only read afterwards.
    """
    user: UserInfo
    repos: Tuple[RepoInfo, ...]
    fetched_at: datetime

    def to_dict(self) -> dict:
        """Returns the JSON-ready representation of the record."""
        return {
            "user": asdict(self.user),
            "repos": [
                {**asdict(repo), "topics": list(repo.topics)}
                for repo in self.repos
            ],
            "fetchedAt": self.fetched_at.isoformat(),
        }


@dataclass(frozen=True)
class DimensionScore:
    score: int
    comment: str


@dataclass(frozen=True)
class AnalysisResult:
    """Scored hireability report for one profile.

    Scores are always inside their declared ranges: 0-100 for the total,
    0-10 for each dimension.
    """
    total_score: int
    summary: str
    dimensions: dict
    recruiter_verdict: str
    actionable_feedback: Tuple[str, ...] = ()
    is_mock_data: bool = False

    def with_mock_flag(self, summary_prefix: str) -> 'AnalysisResult':
        """Returns a copy marked as fallback data with a prefixed summary."""
        return AnalysisResult(
            total_score=self.total_score,
            summary=f"{summary_prefix}{self.summary}",
            dimensions=self.dimensions,
            recruiter_verdict=self.recruiter_verdict,
            actionable_feedback=self.actionable_feedback,
            is_mock_data=True
        )

    def to_dict(self) -> dict:
        data = {
            "total_score": self.total_score,
            "summary": self.summary,
            "dimensions": {
                key: {"score": dimension.score, "comment": dimension.comment}
                for key, dimension in self.dimensions.items()
            },
            "recruiter_verdict": self.recruiter_verdict,
            "actionable_feedback": list(self.actionable_feedback),
        }
        if self.is_mock_data:
            data["isMockData"] = True
        return data


@dataclass(frozen=True)
class AnalysisResponse:
    """Terminal artifact of the analysis pipeline; the unit that gets cached."""
    success: bool
    data: Optional[AnalysisResult] = None
    profile_data: Optional[ProfileRecord] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: AnalysisResult, profile_data: ProfileRecord) -> 'AnalysisResponse':
        return cls(success=True, data=data, profile_data=profile_data)

    @classmethod
    def failure(cls, error: str) -> 'AnalysisResponse':
        return cls(success=False, error=error)

    @property
    def is_mock(self) -> bool:
        return self.data is not None and self.data.is_mock_data

    def to_dict(self) -> dict:
        if not self.success:
            return {"success": False, "error": self.error}
        return {
            "success": True,
            "data": self.data.to_dict(),
            "profileData": self.profile_data.to_dict(),
        }


@dataclass
class RateLimitDecision:
    """Outcome of a single rate-limit admission check."""
    allowed: bool
    remaining: int
    retry_after_ms: Optional[int] = None


@dataclass
class CacheEntry:
    response: AnalysisResponse
    timestamp: float


@dataclass
class RateLimitEntry:
    timestamps: list = field(default_factory=list)
