"""
Jira infrastructure module.

Provides the HTTP client and story repository for Jira integration.
"""
from .http_client import JiraHttpClient
from .jira_repository import JiraHtmlParser, JiraStoryRepository

__all__ = ['JiraHttpClient', 'JiraHtmlParser', 'JiraStoryRepository']
