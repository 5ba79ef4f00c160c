"""Scoring rubric for the completion model and canned demo data."""
from datetime import datetime, timezone
from portfolio_analyzer.domain.models import (
    AnalysisResult,
    DimensionScore,
    License,
    ProfileRecord,
    RepoInfo,
    UserInfo,
    VERDICT_INTERVIEW,
)


SYSTEM_PROMPT = """
You are a ruthless Scoring Algorithm, not a Recruiter. Do not "judge" based on potential. Calculate based on PROOF.

**ALGORITHMIC SCORING RULES (Follow Step-by-Step):**

**STEP 1: DETERMINE BASE SCORE (The Ceiling)**
- **User is a Student/Junior (based on bio):** START AT 60. (Max Cap: 85).
- **User is a Founder/Professional:** START AT 80. (Max Cap: 100).

**STEP 2: APPLY BONUSES (Proof of Engineering)**
- **+10 pts:** Has a repo with >50 stars OR a deployed "Production" app (not a demo).
- **+10 pts:** Usage of Advanced Tech: Docker, Kubernetes, AWS, GraphQL, or CI/CD workflows.
- **+5 pts:** Active in the last 7 days.

**STEP 3: APPLY PENALTIES (The "One-Hit Wonder" Filter)**
- **-15 pts (CRITICAL):** If the user has ONLY ONE complex repo (Tier 3) and the rest are Tier 1 (Calculators, To-Do, HTML), apply this penalty.
- **-10 pts:** If "Documentation" is weak (no architecture diagrams, just "npm install").
- **-10 pts:** If >50% of repos haven't been touched in 6 months. (Ignore this if User is Founder).

**STEP 4: FINAL CALCULATION**
(Base + Bonuses - Penalties).
- **HARD CAP:** If User is "Student" and has < 2 Tier 3 Repos, the Final Score CANNOT exceed 65.

**OUTPUT JSON:**
{
  "total_score": number,
  "summary": "Write as a professional justification. Example: 'Base Score: 60 (Student Profile). No major technical bonuses detected. Code structure is decent, but lacks the complexity required for a Senior rating.'",
  "dimensions": {
    "documentation": { "score": 0-10, "comment": "Brief feedback on READMEs" },
    "code_structure": { "score": 0-10, "comment": "Feedback on repo organization" },
    "consistency": { "score": 0-10, "comment": "Based on 'updated_at' dates" },
    "impact": { "score": 0-10, "comment": "Does the project solve a real problem?" },
    "technical_depth": { "score": 0-10, "comment": "Complexity of languages/tools used" }
  },
  "recruiter_verdict": "Pass" | "Interview" | "Strong Hire",
  "actionable_feedback": ["3", "bullet", "points", "of", "specific", "fixes"]
}
"""

USER_MESSAGE_TEMPLATE = "Analyze this GitHub profile:\n\n{payload}"

FALLBACK_SUMMARY_PREFIX = "(System Note: Live analysis failed. Showing demo data.) "

MOCK_ANALYSIS = AnalysisResult(
    total_score=72,
    summary=(
        "Solid profile with clear engineering depth. Projects demonstrate "
        "architectural understanding and consistent contribution history."
    ),
    dimensions={
        "documentation": DimensionScore(8, "READMEs are well-structured with demos and setup steps."),
        "code_structure": DimensionScore(7, "Clean repo organization, though some legacy repos lack structure."),
        "consistency": DimensionScore(7, "Consistent commit history over the past 6 months."),
        "impact": DimensionScore(6, "Mix of portfolio projects and practice repos; some solve real problems."),
        "technical_depth": DimensionScore(8, "Strong grasp of modern stack (Next.js, TypeScript, Cloud Infrastructure)."),
    },
    recruiter_verdict=VERDICT_INTERVIEW,
    actionable_feedback=(
        "Archive or unpin low-quality forked repositories to focus on original work.",
        "Add CONTRIBUTING.md to major projects to encourage open source engagement.",
        "Update dependency chains on older projects to remove security alerts.",
    ),
)


def build_demo_profile(login: str) -> ProfileRecord:
    """Canned profile used for reserved demo logins, built without calling GitHub."""
    return ProfileRecord(
        user=UserInfo(
            login=login,
            name="Demo Developer",
            bio="Full-stack engineer building cloud-native tools.",
            html_url=f"https://github.com/{login}",
            location="Remote",
            followers=128,
            following=12,
            public_repos=24,
            created_at="2018-03-14T09:00:00Z",
            updated_at="2024-05-01T12:00:00Z",
        ),
        repos=(
            RepoInfo(
                name="deploy-dashboard",
                full_name=f"{login}/deploy-dashboard",
                description="Realtime deployment dashboard for Kubernetes clusters.",
                language="TypeScript",
                stargazers_count=64,
                forks_count=9,
                topics=("kubernetes", "nextjs", "dashboard"),
                created_at="2023-01-10T10:00:00Z",
                updated_at="2024-04-28T16:00:00Z",
                pushed_at="2024-04-28T16:00:00Z",
                license=License(name="MIT License", spdx_id="MIT"),
                readme_content="# deploy-dashboard\n\nRealtime view of rollouts across clusters.",
            ),
            RepoInfo(
                name="api-gateway",
                full_name=f"{login}/api-gateway",
                description="GraphQL gateway with caching and rate limiting.",
                language="Go",
                stargazers_count=21,
                forks_count=3,
                topics=("graphql", "docker"),
                created_at="2022-06-02T10:00:00Z",
                updated_at="2024-03-15T08:00:00Z",
                pushed_at="2024-03-15T08:00:00Z",
            ),
        ),
        fetched_at=datetime.now(timezone.utc),
    )
