"""
Project configuration data classes for multi-project support.
Defines where stories come from and where generated artifacts go for one
application under test.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Any
from pathlib import Path
import yaml
import os
import re

from core.config import AppConfig


SOURCE_PLATFORMS = ('jira', 'local')


@dataclass
class ApplicationConfig:
    """Configuration for the application under test."""
    name: str  # e.g., "Customer Portal"
    base_url: str = ""  # prefix stripped from recorded URLs
    description: str = ""


@dataclass
class JiraProjectConfig:
    """Jira project configuration."""
    base_url: str  # e.g., "https://company.atlassian.net"
    project_key: str  # e.g., "PROJ", "TEST"
    email: str  # User email for authentication
    api_token: Optional[str] = None  # API token (from env var)

    # Jira Cloud vs Server
    is_cloud: bool = True

    # Custom field for Acceptance Criteria (None to auto-discover)
    ac_field_name: Optional[str] = None

    @property
    def organization(self) -> str:
        """Subdomain of a Cloud URL like "https://company.atlassian.net"."""
        match = re.search(r'https?://([^.]+)', self.base_url)
        return match.group(1) if match else ''


@dataclass
class ProjectOutputConfig:
    """Output directory and the per-artifact subdirectories under it."""
    dir: str = "output"
    pages_dir: str = "pages"
    features_dir: str = "features"
    steps_dir: str = "steps"


@dataclass
class ProjectConfig:
    """
    Complete project configuration combining application, source platform
    and output settings. This is the main configuration class that the
    workflows use.
    """
    # Project identifier (used for config file naming)
    project_id: str  # e.g., "default", "customer-portal"

    application: ApplicationConfig
    jira: Optional[JiraProjectConfig] = None

    # Where ticket mode fetches stories: "jira" or "local"
    source_platform: str = "local"

    output: ProjectOutputConfig = field(default_factory=ProjectOutputConfig)

    # Directory holding <KEY>.yaml / <KEY>.json story files (local source)
    stories_dir: str = "stories"

    def __post_init__(self):
        if not self.project_id:
            raise ValueError("project_id cannot be empty")
        self.source_platform = (self.source_platform or 'local').lower()
        if self.source_platform not in SOURCE_PLATFORMS:
            raise ValueError(
                f"Unsupported source platform: '{self.source_platform}'. "
                f"Supported platforms: {', '.join(SOURCE_PLATFORMS)}"
            )

    @classmethod
    def load_from_yaml(cls, yaml_path: str) -> 'ProjectConfig':
        """Load project configuration from a YAML file."""
        with open(yaml_path, 'r') as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProjectConfig':
        """Create ProjectConfig from a dictionary.

        Values missing from the YAML fall back to environment variables;
        the Jira API token is always read from the environment.
        """
        app_data = data.get('application') or {}
        application = ApplicationConfig(
            name=app_data.get('name', 'Application'),
            base_url=app_data.get('base_url', os.getenv('BASE_URL', '')),
            description=app_data.get('description', ''),
        )

        jira_data = data.get('jira') or {}
        jira = None
        if jira_data:
            jira = JiraProjectConfig(
                base_url=jira_data.get('base_url', os.getenv('JIRA_BASE_URL', '')),
                project_key=jira_data.get('project_key', os.getenv('JIRA_PROJECT_KEY', '')),
                email=jira_data.get('email', os.getenv('JIRA_EMAIL', '')),
                api_token=os.getenv('JIRA_API_TOKEN'),  # Always from env for security
                is_cloud=jira_data.get('is_cloud', True),
                ac_field_name=jira_data.get('ac_field_name'),
            )

        output_data = data.get('output') or {}
        output = ProjectOutputConfig(
            dir=output_data.get('dir', os.getenv('OUTPUT_DIR', 'output')),
            pages_dir=output_data.get('pages_dir', 'pages'),
            features_dir=output_data.get('features_dir', 'features'),
            steps_dir=output_data.get('steps_dir', 'steps'),
        )

        return cls(
            project_id=data.get('project_id', ''),
            application=application,
            jira=jira,
            source_platform=data.get('source_platform', 'local'),
            output=output,
            stories_dir=data.get('stories_dir', os.getenv('STORIES_DIR', 'stories')),
        )

    def to_yaml(self) -> str:
        """Serialize configuration to YAML string (secrets excluded)."""
        data = {
            'project_id': self.project_id,
            'application': {
                'name': self.application.name,
                'base_url': self.application.base_url,
                'description': self.application.description,
            },
            'source_platform': self.source_platform,
            'output': {
                'dir': self.output.dir,
                'pages_dir': self.output.pages_dir,
                'features_dir': self.output.features_dir,
                'steps_dir': self.output.steps_dir,
            },
            'stories_dir': self.stories_dir,
        }

        if self.jira:
            data['jira'] = {
                'base_url': self.jira.base_url,
                'project_key': self.jira.project_key,
                'email': self.jira.email,
                'is_cloud': self.jira.is_cloud,
                'ac_field_name': self.jira.ac_field_name,
            }

        return yaml.dump(data, default_flow_style=False, sort_keys=False)

    def save(self, path: str = None) -> str:
        """Save configuration to YAML file."""
        if path is None:
            path = f"projects/configs/{self.project_id}.yaml"

        Path(path).parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            f.write(self.to_yaml())

        return path


def get_default_config() -> ProjectConfig:
    """Built-in configuration: local stories, Jira from the environment when set."""
    app_config = AppConfig.load()

    jira = None
    if app_config.jira.base_url:
        jira = JiraProjectConfig(
            base_url=app_config.jira.base_url,
            project_key=app_config.jira.project_key,
            email=app_config.jira.email,
            api_token=app_config.jira.api_token,
            is_cloud=app_config.jira.is_cloud,
        )

    return ProjectConfig(
        project_id="default",
        application=ApplicationConfig(
            name="Application",
            base_url=app_config.base_url,
        ),
        jira=jira,
        source_platform='jira' if jira else 'local',
        output=ProjectOutputConfig(
            dir=app_config.output.output_dir,
            pages_dir=app_config.output.pages_dir,
            features_dir=app_config.output.features_dir,
            steps_dir=app_config.output.steps_dir,
        ),
        stories_dir=app_config.stories_dir,
    )


def create_new_project_config(project_id: str, app_name: str, **kwargs) -> ProjectConfig:
    """
    Create a new project configuration with minimal required parameters.
    Additional parameters can be customized via kwargs.
    """
    return ProjectConfig(
        project_id=project_id,
        application=ApplicationConfig(
            name=app_name,
            base_url=kwargs.get('base_url', ''),
            description=kwargs.get('description', ''),
        ),
        source_platform=kwargs.get('source_platform', 'local'),
        output=ProjectOutputConfig(dir=kwargs.get('output_dir', 'output')),
        stories_dir=kwargs.get('stories_dir', 'stories'),
    )
