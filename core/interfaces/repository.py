"""
Repository interfaces for data access abstraction.

Following the Repository pattern to abstract the ticket source from generation logic.
"""
from abc import ABC, abstractmethod
from typing import Optional

from core.domain.story import Story


class IStoryRepository(ABC):
    """Interface for story data access."""

    @abstractmethod
    def get_story(self, key: str) -> Optional[Story]:
        """Retrieve a story by its ticket key.

        Args:
            key: Ticket key (e.g., "PROJ-123")

        Returns:
            Story if found, None otherwise
        """
        pass
