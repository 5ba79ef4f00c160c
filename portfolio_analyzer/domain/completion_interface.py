"""Completion model interface (port) used by the scoring engine."""
from abc import ABC, abstractmethod


class ICompletionClient(ABC):
    """Abstract interface for a chat-style text completion model."""
    
    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Whether an API key is available for the model."""
        pass
    
    @property
    @abstractmethod
    def model(self) -> str:
        """Identifier of the model that answers requests."""
        pass
    
    @abstractmethod
    async def complete(self, system_prompt: str, user_message: str) -> str:
        """Send a two-turn exchange and return the model's raw text.
        
        Args:
            system_prompt: Instructions for the system turn
            user_message: Content of the user turn
            
        Returns:
            The response text, possibly empty
        """
        pass
    
    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        pass
