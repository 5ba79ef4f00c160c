"""Tests for domain models."""
import dataclasses
from datetime import datetime, timezone
import pytest
from portfolio_analyzer.domain.models import (
    AnalysisResponse,
    AnalysisResult,
    DimensionScore,
    License,
    ProfileRecord,
    RepoInfo,
    UserInfo
)


def _profile() -> ProfileRecord:
    return ProfileRecord(
        user=UserInfo(login="octocat", name="The Octocat", followers=10),
        repos=(
            RepoInfo(
                name="hello-world",
                topics=("demo", "git"),
                license=License(name="MIT License", spdx_id="MIT"),
                readme_content="# Hello"
            ),
        ),
        fetched_at=datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    )


def _result(is_mock_data: bool = False) -> AnalysisResult:
    return AnalysisResult(
        total_score=64,
        summary="Decent profile.",
        dimensions={"documentation": DimensionScore(6, "ok")},
        recruiter_verdict="Interview",
        actionable_feedback=("Write tests.",),
        is_mock_data=is_mock_data
    )


def test_profile_record_is_immutable():
    """Test that a ProfileRecord cannot be mutated after construction."""
    profile = _profile()

    with pytest.raises(dataclasses.FrozenInstanceError):
        profile.user = UserInfo(login="someone-else")

    assert profile.user.login == "octocat"


def test_profile_record_to_dict():
    """Test the JSON shape of a ProfileRecord."""
    data = _profile().to_dict()

    assert data["user"]["login"] == "octocat"
    assert data["user"]["followers"] == 10
    assert data["repos"][0]["topics"] == ["demo", "git"]
    assert data["repos"][0]["license"] == {"name": "MIT License", "spdx_id": "MIT"}
    assert data["repos"][0]["readme_content"] == "# Hello"
    assert data["fetchedAt"] == "2024-01-01T12:00:00+00:00"


def test_with_mock_flag_returns_marked_copy():
    """Test marking a result as mock data leaves the original unchanged."""
    result = _result()

    mock = result.with_mock_flag("(note) ")

    assert mock.is_mock_data is True
    assert mock.summary == "(note) Decent profile."
    assert mock.total_score == result.total_score
    assert result.is_mock_data is False  # Original unchanged (immutability)


def test_analysis_result_to_dict_flags_mock_data_only_when_set():
    """Test that isMockData only appears for fallback results."""
    assert "isMockData" not in _result().to_dict()
    assert _result(is_mock_data=True).to_dict()["isMockData"] is True
    assert _result().to_dict()["dimensions"]["documentation"] == {"score": 6, "comment": "ok"}


def test_analysis_response_shapes():
    """Test success and failure response serialization."""
    success = AnalysisResponse.ok(_result(), _profile())
    failure = AnalysisResponse.failure("Something went wrong.")

    assert success.to_dict()["success"] is True
    assert success.to_dict()["data"]["total_score"] == 64
    assert success.to_dict()["profileData"]["user"]["login"] == "octocat"
    assert success.is_mock is False
    assert failure.to_dict() == {"success": False, "error": "Something went wrong."}
    assert failure.is_mock is False


def test_analysis_response_is_mock():
    """Test that a response wrapping fallback data reports itself as mock."""
    response = AnalysisResponse.ok(_result(is_mock_data=True), _profile())

    assert response.is_mock is True
