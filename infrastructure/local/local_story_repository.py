"""
Local story repository.

Reads stories from files named after their key, so ticket mode works
without a tracker:

    stories/PORTAL-101.yaml
    stories/PORTAL-102.json

Field names follow the Story entity (key, summary, description,
issue_type, status, priority, acceptance_criteria).
"""
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from core.domain.story import Story
from core.interfaces.repository import IStoryRepository
from infrastructure.jira.jira_repository import JiraHtmlParser


class LocalStoryRepository(IStoryRepository):
    """File-system implementation of the story repository."""

    EXTENSIONS = ('.yaml', '.yml', '.json')

    def __init__(self, stories_dir: str):
        self._stories_dir = Path(stories_dir)

    def find_file(self, key: str) -> Optional[Path]:
        """First existing <key>.yaml / .yml / .json file."""
        for extension in self.EXTENSIONS:
            path = self._stories_dir / f"{key}{extension}"
            if path.is_file():
                return path
        return None

    def get_story(self, key: str) -> Optional[Story]:
        path = self.find_file(key)
        if path is None:
            print(f"Story file not found for {key} in {self._stories_dir}")
            return None

        try:
            with open(path, 'r', encoding='utf-8') as f:
                if path.suffix == '.json':
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            print(f"Error reading story {key} from {path}: {e}")
            return None

        if not isinstance(data, dict):
            print(f"Error reading story {key}: {path} does not contain a mapping")
            return None

        try:
            return self._to_story(key, data)
        except ValueError as e:
            print(f"Error mapping story {key}: {e}")
            return None

    @staticmethod
    def _to_story(key: str, data: Dict[str, Any]) -> Story:
        return Story(
            key=str(data.get('key') or key),
            summary=str(data.get('summary') or ''),
            description=str(data.get('description') or ''),
            issue_type=str(data.get('issue_type') or 'Story'),
            status=str(data.get('status') or ''),
            priority=str(data.get('priority') or 'Medium'),
            acceptance_criteria=LocalStoryRepository._criteria(data.get('acceptance_criteria'))
        )

    @staticmethod
    def _criteria(value: Any) -> List[str]:
        """A list is taken item by item; a text block is split into bullets."""
        if not value:
            return []
        if isinstance(value, list):
            return [str(item).strip() for item in value if str(item).strip()]
        return JiraHtmlParser.parse_acceptance_criteria(str(value))
