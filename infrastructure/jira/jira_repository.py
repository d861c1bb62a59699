"""
Jira repository implementation.

Fetches a single issue and maps it onto the Story entity consumed by the
requirement synthesizer.
"""
from typing import Optional, List, Dict, Any
import re

import requests
from bs4 import BeautifulSoup

from core.domain.story import Story
from core.interfaces.repository import IStoryRepository
from .http_client import JiraHttpClient


BULLET_PREFIX = re.compile(
    r'^(?:•|-\s|\*\s|\d+\.(?:\s|$)|AC\s*\d+[:.\s]+|\[\s*[xX]?\s*\]\s*)',
    re.IGNORECASE
)
GHERKIN_START = re.compile(r'^(Given|When|Then|And)\s', re.IGNORECASE)

# Description sections that may hold acceptance criteria, tried in order
AC_SECTIONS = [
    r'(?:Acceptance\s*Criteria|AC)[:\s]*\n(.*?)(?:\n\n|\Z)',
    r'(?:Definition\s*of\s*Done|DoD)[:\s]*\n(.*?)(?:\n\n|\Z)',
    r'(?:Requirements|Criteria)[:\s]*\n(.*?)(?:\n\n|\Z)',
]

MIN_CRITERION_LENGTH = 10


class JiraHtmlParser:
    """Utility class for turning Jira HTML/ADF content into plain text."""

    @staticmethod
    def normalize_to_text(content: Any) -> str:
        """Convert Jira content to plain text.

        Handles both HTML (Jira Server, renderedFields) and ADF (Atlassian
        Document Format, Jira Cloud).
        """
        if not content:
            return ""
        if isinstance(content, dict):
            return JiraHtmlParser._parse_adf(content).strip()
        return JiraHtmlParser._parse_html(content)

    @staticmethod
    def _parse_adf(node: Dict) -> str:
        if not isinstance(node, dict):
            return str(node) if node else ""

        node_type = node.get('type', '')
        children = node.get('content', [])

        def joined() -> str:
            return ''.join(JiraHtmlParser._parse_adf(child) for child in children)

        if node_type == 'text':
            return node.get('text', '')
        if node_type == 'hardBreak':
            return '\n'
        if node_type in ('paragraph', 'heading'):
            text = joined()
            return text + '\n' if text else ''
        if node_type in ('bulletList', 'orderedList'):
            items = []
            for index, child in enumerate(children, 1):
                item = JiraHtmlParser._parse_adf(child).strip()
                if item:
                    marker = f'{index}.' if node_type == 'orderedList' else '•'
                    items.append(f'{marker} {item}')
            return '\n'.join(items) + '\n' if items else ''
        return joined()

    @staticmethod
    def _parse_html(html_content: str) -> str:
        if not isinstance(html_content, str):
            return ""

        soup = BeautifulSoup(html_content, 'html.parser')

        # Flatten lists into bullet lines before extracting text
        for list_tag in soup.find_all(['ul', 'ol']):
            ordered = list_tag.name == 'ol'
            items = []
            for index, li in enumerate(list_tag.find_all('li', recursive=False), start=1):
                text = ' '.join(li.get_text(separator=' ').split())
                if text:
                    items.append(f'{index}. {text}' if ordered else f'• {text}')
            if items:
                list_tag.replace_with(soup.new_string('\n'.join(items)))

        text = soup.get_text(separator='\n')
        return '\n'.join(line.strip() for line in text.split('\n') if line.strip())

    @staticmethod
    def parse_acceptance_criteria(ac_text: str) -> List[str]:
        """Split acceptance-criteria text into one string per criterion.

        A criterion starts at a bullet, a numbered item, an "AC n:" label, a
        checkbox or a Gherkin keyword; continuation lines are joined onto it.
        Criteria shorter than ten characters are dropped.
        """
        if not ac_text:
            return []

        criteria = []
        current: List[str] = []

        def flush() -> None:
            combined = ' '.join(current)
            if len(combined) >= MIN_CRITERION_LENGTH:
                criteria.append(combined)
            current.clear()

        for line in ac_text.strip().split('\n'):
            stripped = line.strip()
            if not stripped:
                continue

            if BULLET_PREFIX.match(stripped) or GHERKIN_START.match(stripped):
                if current:
                    flush()
                cleaned = BULLET_PREFIX.sub('', stripped, count=1).strip()
                if cleaned:
                    current.append(cleaned)
            elif current or len(stripped) > 15:
                current.append(stripped)

        if current:
            flush()
        return criteria


class JiraStoryRepository(IStoryRepository):
    """Jira implementation of the story repository."""

    # Common custom field names for Acceptance Criteria in Jira
    AC_FIELD_NAMES = [
        'Acceptance Criteria',
        'AcceptanceCriteria',
        'acceptance_criteria',
    ]

    def __init__(
        self,
        base_url: str,
        email: str,
        api_token: str,
        project_key: str = "",
        ac_field_name: Optional[str] = None,
        is_cloud: bool = True,
        client: Optional[JiraHttpClient] = None
    ):
        """Initialize repository with Jira configuration.

        Args:
            base_url: Jira instance URL
            email: User email
            api_token: API token
            project_key: Project key used to expand bare numeric keys
            ac_field_name: Field ID holding acceptance criteria (discovered if omitted)
            is_cloud: True for Jira Cloud, False for Server
            client: Preconfigured HTTP client (mainly for tests)
        """
        self._client = client or JiraHttpClient(
            base_url=base_url,
            email=email,
            api_token=api_token,
            is_cloud=is_cloud
        )
        self._project_key = project_key
        self._ac_field_id = ac_field_name
        self._ac_field_searched = bool(ac_field_name)
        self._parser = JiraHtmlParser()

    def issue_key(self, key: str) -> str:
        """Expand "123" to "<PROJECT>-123"; full keys pass through."""
        key = str(key).strip()
        if key.isdigit() and self._project_key:
            return f"{self._project_key}-{key}"
        return key

    def _discover_ac_field(self) -> Optional[str]:
        """Find the field ID for acceptance criteria (searched once)."""
        if self._ac_field_searched:
            return self._ac_field_id
        self._ac_field_searched = True

        try:
            fields = self._client.get_fields()
        except requests.RequestException as e:
            print(f"Error discovering AC field: {e}")
            return None

        names = [n.lower() for n in self.AC_FIELD_NAMES]
        for field in fields:
            field_name = field.get('name', '').lower()
            if any(name in field_name for name in names):
                self._ac_field_id = field.get('id')
                break
        return self._ac_field_id

    def get_story(self, key: str) -> Optional[Story]:
        """Retrieve a story by issue key.

        Returns:
            Story, or None when the issue cannot be fetched or has no summary
        """
        issue_key = self.issue_key(key)
        ac_field = self._discover_ac_field()

        try:
            issue = self._client.get_issue(issue_key, expand=['renderedFields'])
        except requests.RequestException as e:
            print(f"Error retrieving story {issue_key}: {e}")
            return None

        fields = issue.get('fields') or {}
        rendered = issue.get('renderedFields') or {}

        description = self._parser.normalize_to_text(
            rendered.get('description') or fields.get('description')
        )

        ac_text = ''
        if ac_field:
            ac_text = self._parser.normalize_to_text(
                rendered.get(ac_field) or fields.get(ac_field)
            )
        if not ac_text:
            ac_text = self.extract_ac_from_description(description)

        try:
            return Story(
                key=issue.get('key', issue_key),
                summary=fields.get('summary') or '',
                description=description,
                issue_type=self._name_of(fields.get('issuetype'), 'Story'),
                status=self._name_of(fields.get('status'), ''),
                priority=self._name_of(fields.get('priority'), 'Medium'),
                acceptance_criteria=self._parser.parse_acceptance_criteria(ac_text)
            )
        except ValueError as e:
            print(f"Error mapping story {issue_key}: {e}")
            return None

    @staticmethod
    def _name_of(field: Optional[Dict[str, Any]], default: str) -> str:
        if isinstance(field, dict) and field.get('name'):
            return field['name']
        return default

    @staticmethod
    def extract_ac_from_description(description: str) -> str:
        """Extract an acceptance-criteria section from the description."""
        if not description:
            return ""
        for pattern in AC_SECTIONS:
            match = re.search(pattern, description, re.IGNORECASE | re.DOTALL)
            if match:
                return match.group(1).strip()
        return ""
