"""
Infrastructure layer - implementations of interfaces.

Contains:
- jira: Jira integration (story source)
- local: YAML/JSON story files (story source)
- export: Artifact generators and writer
- repository_factory: Platform-agnostic repository creation
"""
from .jira import (
    JiraHttpClient,
    JiraHtmlParser,
    JiraStoryRepository
)
from .local import LocalStoryRepository
from .export import (
    ArtifactLayout,
    PageModuleGenerator,
    SpecificationGenerator,
    GlueGenerator,
    ArtifactWriter
)
from .repository_factory import (
    RepositoryFactory,
    get_story_repository
)

__all__ = [
    # Jira
    'JiraHttpClient',
    'JiraHtmlParser',
    'JiraStoryRepository',
    # Local
    'LocalStoryRepository',
    # Export
    'ArtifactLayout',
    'PageModuleGenerator',
    'SpecificationGenerator',
    'GlueGenerator',
    'ArtifactWriter',
    # Repository Factory
    'RepositoryFactory',
    'get_story_repository',
]
