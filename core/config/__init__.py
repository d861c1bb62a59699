"""
Configuration management - externalized and extensible.
"""
from dataclasses import dataclass
from typing import Optional

from .environment import EnvironmentConfig


@dataclass
class JiraConfig:
    """Jira connection configuration."""
    base_url: str
    email: str
    api_token: Optional[str]
    project_key: str
    is_cloud: bool = True

    @classmethod
    def from_env(cls) -> 'JiraConfig':
        """Create config from environment variables."""
        return cls(
            base_url=EnvironmentConfig.JIRA_BASE_URL,
            email=EnvironmentConfig.JIRA_EMAIL,
            api_token=EnvironmentConfig.JIRA_API_TOKEN,
            project_key=EnvironmentConfig.JIRA_PROJECT_KEY,
            is_cloud=EnvironmentConfig.JIRA_IS_CLOUD
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url and self.email and self.api_token)


@dataclass
class OutputConfig:
    """Where generated artifacts go."""
    output_dir: str
    pages_dir: str = "pages"
    features_dir: str = "features"
    steps_dir: str = "steps"

    @classmethod
    def default(cls) -> 'OutputConfig':
        """Create default output configuration."""
        return cls(output_dir=EnvironmentConfig.OUTPUT_DIR)


@dataclass
class AppConfig:
    """Application-wide configuration."""
    jira: JiraConfig
    output: OutputConfig
    base_url: str = ""
    stories_dir: str = "stories"
    log_level: str = "INFO"

    @classmethod
    def load(cls) -> 'AppConfig':
        """Load application configuration."""
        return cls(
            jira=JiraConfig.from_env(),
            output=OutputConfig.default(),
            base_url=EnvironmentConfig.BASE_URL,
            stories_dir=EnvironmentConfig.STORIES_DIR,
            log_level=EnvironmentConfig.LOG_LEVEL
        )


__all__ = ['EnvironmentConfig', 'JiraConfig', 'OutputConfig', 'AppConfig']
