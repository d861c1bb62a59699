"""
Use case: Check that the three artifacts of a test exist on disk.
"""
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

from core.services.name_resolver import to_class_name


@dataclass
class StructureValidation:
    """Presence of the page, specification and glue files of one test."""
    page_exists: bool
    feature_exists: bool
    steps_exist: bool
    paths: Dict[str, str] = field(default_factory=dict)
    missing_files: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.page_exists and self.feature_exists and self.steps_exist


class ValidateStructureUseCase:
    """Use case for validating the generated file structure of a test."""

    def __init__(self, layout_factory: Callable[[str, str], Any]):
        self.layout_factory = layout_factory

    def execute(self, test_name: str, output_dir: str = "output") -> StructureValidation:
        """Validate the artifacts generated for a test name.

        Args:
            test_name: Feature name or class name used at generation time
            output_dir: Root directory the artifacts were written to

        Returns:
            StructureValidation listing missing files
        """
        layout = self.layout_factory(output_dir, to_class_name(test_name))
        paths = layout.paths()
        exists = {artifact: os.path.isfile(path) for artifact, path in paths.items()}

        return StructureValidation(
            page_exists=exists['page'],
            feature_exists=exists['specification'],
            steps_exist=exists['glue'],
            paths=paths,
            missing_files=[path for artifact, path in paths.items() if not exists[artifact]]
        )
