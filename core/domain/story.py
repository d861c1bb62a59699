"""
Story domain entity supplied by the ticket source.
"""
from dataclasses import dataclass, field
from typing import List


@dataclass
class Story:
    """Domain entity representing an issue-tracker story."""
    key: str
    summary: str
    description: str = ""
    issue_type: str = "Story"
    status: str = ""
    priority: str = "Medium"
    acceptance_criteria: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate story after initialization."""
        if not self.key:
            raise ValueError("Story key cannot be empty")
        if not self.summary:
            raise ValueError("Story summary cannot be empty")

    @property
    def full_text(self) -> str:
        """Summary, description and criteria joined for keyword analysis."""
        return "\n".join([self.summary, self.description or ""] + list(self.acceptance_criteria))
