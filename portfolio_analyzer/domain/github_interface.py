"""Profile fetcher interface (port) for retrieving GitHub profile data.

This is the anti-corruption layer that shields the domain from GitHub API specifics.
"""
from abc import ABC, abstractmethod
from portfolio_analyzer.domain.models import ProfileRecord


class IProfileFetcher(ABC):
    """Abstract interface for GitHub profile retrieval."""
    
    @abstractmethod
    async def fetch_profile(self, username: str) -> ProfileRecord:
        """Fetch a consolidated profile record.
        
        Args:
            username: GitHub login to look up
            
        Returns:
            ProfileRecord with at most 6 owned repositories, most recently
            updated first, each with its README text when one exists
            
        Raises:
            ProfileNotFoundError: The account does not exist
            UpstreamRateLimitError: The GitHub API quota is exhausted
            BadCredentialsError: The configured token was rejected
        """
        pass
    
    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        pass
