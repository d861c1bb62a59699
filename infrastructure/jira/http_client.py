"""
Jira HTTP Client - read-only access to Jira Cloud/Server issues.

Handles only HTTP concerns; mapping issues to stories lives in the repository.
Retries are left to the caller: a failed request raises immediately.
"""
import base64
from typing import Any, Dict, List, Optional

import requests


# Issue fields the story mapping reads
STORY_FIELDS = ['summary', 'description', 'issuetype', 'status', 'priority']


class JiraHttpClient:
    """Low-level HTTP client for the Jira REST API."""

    API_VERSION = "3"  # Jira Cloud REST API v3

    def __init__(
        self,
        base_url: str,
        email: str,
        api_token: str,
        timeout: int = 30,
        is_cloud: bool = True,
        session: Optional[requests.Session] = None
    ):
        """Initialize Jira HTTP client.

        Args:
            base_url: Jira instance URL (e.g., "https://company.atlassian.net")
            email: User email for authentication
            api_token: API token (Cloud) or password (Server)
            timeout: Request timeout in seconds
            is_cloud: True for Jira Cloud, False for Jira Server/Data Center
            session: Optional requests session (a new one is created otherwise)
        """
        if not api_token:
            raise ValueError("API token is required")
        if not base_url:
            raise ValueError("Base URL is required")
        if not email:
            raise ValueError("Email is required")

        self._base_url = base_url.rstrip('/')
        self._timeout = timeout
        self._is_cloud = is_cloud
        self._session = session or requests.Session()
        self._session.headers.update(self._create_headers(email, api_token))

    @property
    def base_url(self) -> str:
        """Base URL for API calls."""
        return self._base_url

    @property
    def api_base(self) -> str:
        """REST API root: /rest/api/3 on Cloud, /rest/api/2 on Server."""
        version = self.API_VERSION if self._is_cloud else "2"
        return f"{self._base_url}/rest/api/{version}"

    @staticmethod
    def _create_headers(email: str, api_token: str) -> Dict[str, str]:
        """Basic auth with email:api_token (Cloud) or username:password (Server)."""
        credentials = base64.b64encode(f"{email}:{api_token}".encode()).decode()
        return {
            'Authorization': f'Basic {credentials}',
            'Accept': 'application/json'
        }

    def get(self, endpoint: str, params: Optional[Dict] = None) -> Any:
        """Make GET request to Jira API.

        Args:
            endpoint: API endpoint (relative to API base)
            params: Optional query parameters

        Returns:
            Decoded JSON response

        Raises:
            requests.HTTPError: If request fails
        """
        response = self._session.get(
            f"{self.api_base}/{endpoint}",
            params=params,
            timeout=self._timeout
        )
        response.raise_for_status()
        return response.json()

    def get_fields(self) -> List[Dict[str, Any]]:
        """List field definitions (used to find the acceptance-criteria field)."""
        return self.get("field")

    def get_issue(
        self,
        issue_key: str,
        fields: Optional[List[str]] = None,
        expand: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        """Get a single issue by key.

        Args:
            issue_key: Issue key (e.g., "PROJ-123")
            fields: Fields to return (all fields when omitted)
            expand: Expansions (e.g., ["renderedFields"])

        Returns:
            Issue data
        """
        params = {}
        if fields:
            params['fields'] = ','.join(fields)
        if expand:
            params['expand'] = ','.join(expand)

        return self.get(f"issue/{issue_key}", params=params or None)
