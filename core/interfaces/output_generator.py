"""
Artifact generator interfaces.

Each generator builds an in-memory document tree from resolved actions
inside a shared GenerationContext, then renders that tree to text.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict


class IArtifactGenerator(ABC):
    """Base interface for the page, specification and glue generators."""

    #: Artifact label used in logs and write errors
    artifact: str = ""

    @abstractmethod
    def build(self, *args: Any, **kwargs: Any) -> Any:
        """Build the document tree for this artifact."""
        pass

    @abstractmethod
    def render(self, document: Any) -> str:
        """Render a document tree to file content.

        Args:
            document: Tree returned by build()

        Returns:
            File content as a string
        """
        pass


class IArtifactWriter(ABC):
    """Persists the rendered artifacts of one run."""

    @abstractmethod
    def write(self, layout: Any, contents: Dict[str, str]) -> Dict[str, str]:
        """Write every artifact or none.

        Args:
            layout: Target file layout
            contents: Rendered content keyed by artifact label

        Returns:
            Written file paths keyed by artifact label
        """
        pass
