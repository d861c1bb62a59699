"""
Project Manager - Handles loading, switching, and managing project configurations.
"""
from typing import Dict, Optional, List
from pathlib import Path
import os
import yaml

from .project_config import ProjectConfig, get_default_config


class ProjectManager:
    """
    Manages multiple project configurations.
    Allows loading from YAML files, switching between projects, and
    provides the active project configuration to the rest of the system.
    """

    # Default configs directory
    CONFIGS_DIR = Path(__file__).parent / "configs"

    def __init__(self):
        self._projects: Dict[str, ProjectConfig] = {}
        self._active_project_id: Optional[str] = None

        self._load_builtin_configs()

    def _load_builtin_configs(self):
        """Register the built-in default configuration."""
        default = get_default_config()
        self._projects[default.project_id] = default

    def load_from_directory(self, directory: str = None, verbose: bool = False) -> int:
        """
        Load all YAML project configurations from a directory.

        Args:
            directory: Path to configs directory. Defaults to projects/configs.
            verbose: Print each loaded project

        Returns:
            Number of configurations loaded.
        """
        config_dir = Path(directory) if directory else self.CONFIGS_DIR
        loaded = 0

        if not config_dir.exists():
            return loaded

        for yaml_file in sorted(config_dir.glob("*.y*ml")):
            try:
                config = ProjectConfig.load_from_yaml(str(yaml_file))
            except (OSError, yaml.YAMLError, ValueError, TypeError, AttributeError) as e:
                print(f"  Warning: Could not load {yaml_file}: {e}")
                continue
            self._projects[config.project_id] = config
            loaded += 1
            if verbose:
                print(f"  Loaded project config: {config.project_id}")

        return loaded

    def load_project(self, yaml_path: str) -> ProjectConfig:
        """
        Load a specific project configuration from YAML.

        Args:
            yaml_path: Path to the YAML configuration file.

        Returns:
            The loaded ProjectConfig.
        """
        config = ProjectConfig.load_from_yaml(yaml_path)
        self._projects[config.project_id] = config
        return config

    def get_project(self, project_id: str) -> Optional[ProjectConfig]:
        """Get a project configuration by ID."""
        return self._projects.get(project_id)

    def set_active_project(self, project_id: str) -> bool:
        """
        Set the active project.

        Args:
            project_id: ID of the project to activate.

        Returns:
            True if project was found and activated, False otherwise.
        """
        if project_id in self._projects:
            self._active_project_id = project_id
            return True
        return False

    @property
    def active_project(self) -> Optional[ProjectConfig]:
        """The active project, else DEFAULT_PROJECT, else the built-in default."""
        if self._active_project_id:
            return self._projects.get(self._active_project_id)
        preferred = os.getenv('DEFAULT_PROJECT', 'default')
        return self._projects.get(preferred) or self._projects.get('default')

    def list_projects(self) -> List[str]:
        """List all available project IDs."""
        return sorted(self._projects.keys())

    def register_project(self, config: ProjectConfig) -> None:
        """Register a new project configuration."""
        self._projects[config.project_id] = config

    def save_project(self, project_id: str, path: str = None) -> str:
        """
        Save a project configuration to YAML.

        Args:
            project_id: ID of the project to save.
            path: Optional custom path. Defaults to configs/{project_id}.yaml.

        Returns:
            Path where the file was saved.
        """
        config = self._projects.get(project_id)
        if not config:
            raise ValueError(f"Project not found: {project_id}")

        if path is None:
            path = str(self.CONFIGS_DIR / f"{project_id}.yaml")

        return config.save(path)


# Global project manager instance
_project_manager: Optional[ProjectManager] = None


def get_project_manager() -> ProjectManager:
    """Get the global project manager instance (configs directory loaded)."""
    global _project_manager
    if _project_manager is None:
        _project_manager = ProjectManager()
        _project_manager.load_from_directory()
    return _project_manager


def get_active_config() -> ProjectConfig:
    """Convenience function to get the active project configuration."""
    return get_project_manager().active_project
