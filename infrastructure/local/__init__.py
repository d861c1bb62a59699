"""
Local infrastructure module.

Story repository backed by YAML/JSON files.
"""
from .local_story_repository import LocalStoryRepository

__all__ = ['LocalStoryRepository']
