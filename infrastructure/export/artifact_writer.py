"""
Artifact Writer

Persists the three generated artifacts of a run. A run only succeeds when
all three files are written; on failure the files written by the run are
removed and ArtifactWriteError names the artifact that failed.
"""
import os
from typing import Dict, List, Optional

from core.domain.errors import ArtifactWriteError
from core.interfaces.output_generator import IArtifactWriter
from core.services.metrics.logger import StructuredLogger, get_logger
from .artifact_layout import ArtifactLayout


ARTIFACT_ORDER = ('page', 'specification', 'glue')


class ArtifactWriter(IArtifactWriter):
    """Writes page, specification and glue files for one layout."""

    def __init__(self, logger: Optional[StructuredLogger] = None):
        self._logger = logger or get_logger()

    def write(self, layout: ArtifactLayout, contents: Dict[str, str]) -> Dict[str, str]:
        """Write all artifacts.

        Args:
            layout: Target file layout
            contents: Rendered content keyed by 'page', 'specification', 'glue'

        Returns:
            Written file paths keyed by artifact

        Raises:
            ArtifactWriteError: If any artifact cannot be written
        """
        paths = layout.paths()
        written: List[str] = []

        for artifact in ARTIFACT_ORDER:
            path = paths[artifact]
            try:
                content = contents[artifact]
                os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
                with open(path, 'w', encoding='utf-8') as f:
                    # Opened for writing, so the file now belongs to this run
                    written.append(path)
                    f.write(content)
            except (OSError, KeyError) as e:
                self._rollback(written)
                self._logger.error("artifact_write_failed", artifact=artifact, path=path, error=str(e))
                raise ArtifactWriteError(artifact, path, str(e)) from e

            self._logger.log_artifact(artifact, path, len(content))

        return dict(paths)

    def _rollback(self, paths: List[str]) -> None:
        """Remove files written by the failed run."""
        for path in paths:
            if os.path.isfile(path):
                try:
                    os.remove(path)
                    self._logger.warning("artifact_rollback", path=path)
                except OSError as e:
                    self._logger.error("artifact_rollback_failed", path=path, error=str(e))
