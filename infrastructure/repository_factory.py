"""
Repository factory for platform-agnostic story access.

Creates the appropriate story repository based on project configuration.
"""
from core.interfaces.repository import IStoryRepository
from projects.project_config import ProjectConfig

from infrastructure.jira.jira_repository import JiraStoryRepository
from infrastructure.local.local_story_repository import LocalStoryRepository


class RepositoryFactory:
    """
    Factory for creating the story repository of a project.

    Supports source platforms:
    - jira: stories fetched from Jira Cloud/Server
    - local: stories read from YAML/JSON files
    """

    @staticmethod
    def create_story_repository(config: ProjectConfig) -> IStoryRepository:
        """
        Create a story repository based on the source platform configuration.

        Args:
            config: Project configuration

        Returns:
            Story repository implementation

        Raises:
            ValueError: If the source platform is unsupported or not configured
        """
        source_platform = config.source_platform.lower()

        if source_platform == 'jira':
            if not config.jira:
                raise ValueError(
                    "Jira configuration required when source_platform='jira'. "
                    "Add 'jira' section to your project config."
                )
            return JiraStoryRepository(
                base_url=config.jira.base_url,
                email=config.jira.email,
                api_token=config.jira.api_token,
                project_key=config.jira.project_key,
                ac_field_name=config.jira.ac_field_name,
                is_cloud=config.jira.is_cloud
            )

        elif source_platform == 'local':
            return LocalStoryRepository(config.stories_dir)

        else:
            raise ValueError(
                f"Unsupported source platform: '{source_platform}'. "
                f"Supported platforms: 'jira', 'local'"
            )


def get_story_repository(config: ProjectConfig) -> IStoryRepository:
    """Convenience function to get story repository."""
    return RepositoryFactory.create_story_repository(config)
