"""
Project configuration management for multi-project support.
Each project names its application, its story source and its output layout.
"""
from .project_config import (
    ProjectConfig,
    ApplicationConfig,
    JiraProjectConfig,
    ProjectOutputConfig,
    get_default_config
)
from .project_manager import ProjectManager, get_project_manager, get_active_config

__all__ = [
    'ProjectConfig',
    'ApplicationConfig',
    'JiraProjectConfig',
    'ProjectOutputConfig',
    'get_default_config',
    'ProjectManager',
    'get_project_manager',
    'get_active_config'
]
