"""
Interfaces for dependency inversion.

Use cases depend on these abstractions, not on concrete ticket sources or renderers.
"""
from .repository import IStoryRepository
from .output_generator import IArtifactGenerator, IArtifactWriter

__all__ = [
    'IStoryRepository',
    'IArtifactGenerator',
    'IArtifactWriter',
]
