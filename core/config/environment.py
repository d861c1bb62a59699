"""
Environment Configuration Module

Loads environment variables for the test generator.
Project-specific configuration is managed through YAML files in projects/configs/.
"""
import os
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the repository root, then from the working directory
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(dotenv_path=env_path)
load_dotenv()


def _flag(name: str, default: str = "true") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


class EnvironmentConfig:
    """Environment configuration loaded from environment variables."""

    # Jira (ticket mode)
    JIRA_BASE_URL: str = os.getenv("JIRA_BASE_URL", "")
    JIRA_EMAIL: str = os.getenv("JIRA_EMAIL", "")
    JIRA_API_TOKEN: Optional[str] = os.getenv("JIRA_API_TOKEN")
    JIRA_PROJECT_KEY: str = os.getenv("JIRA_PROJECT_KEY", "")
    JIRA_IS_CLOUD: bool = _flag("JIRA_IS_CLOUD")

    # Application under test; the generated page module reads BASE_URL at runtime too
    BASE_URL: str = os.getenv("BASE_URL", "")

    # Output
    OUTPUT_DIR: str = os.getenv("OUTPUT_DIR", "output")

    # Local story files (source_platform: local)
    STORIES_DIR: str = os.getenv("STORIES_DIR", "stories")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    DEFAULT_PROJECT: str = os.getenv("DEFAULT_PROJECT", "default")

    @classmethod
    def validate(cls) -> bool:
        """Check the variables ticket mode needs against Jira."""
        missing = [
            name for name in ("JIRA_BASE_URL", "JIRA_EMAIL", "JIRA_API_TOKEN")
            if not getattr(cls, name)
        ]
        if missing:
            print(f"Warning: environment variables not set: {', '.join(missing)}")
            return False
        return True

    @classmethod
    def get_jira_config(cls) -> dict:
        """Get Jira configuration as a dictionary."""
        return {
            'base_url': cls.JIRA_BASE_URL,
            'email': cls.JIRA_EMAIL,
            'api_token': cls.JIRA_API_TOKEN,
            'project_key': cls.JIRA_PROJECT_KEY,
            'is_cloud': cls.JIRA_IS_CLOUD,
        }


# Module-level exports
JIRA_BASE_URL = EnvironmentConfig.JIRA_BASE_URL
JIRA_EMAIL = EnvironmentConfig.JIRA_EMAIL
JIRA_API_TOKEN = EnvironmentConfig.JIRA_API_TOKEN
JIRA_PROJECT_KEY = EnvironmentConfig.JIRA_PROJECT_KEY
BASE_URL = EnvironmentConfig.BASE_URL
OUTPUT_DIR = EnvironmentConfig.OUTPUT_DIR
STORIES_DIR = EnvironmentConfig.STORIES_DIR
LOG_LEVEL = EnvironmentConfig.LOG_LEVEL
DEFAULT_PROJECT = EnvironmentConfig.DEFAULT_PROJECT
