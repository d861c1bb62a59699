"""
File layout of the three generated artifacts.
"""
import os
from dataclasses import dataclass

from core.services.name_resolver import to_snake_case


def page_class_name(class_name: str) -> str:
    """"Login" -> "LoginPage"; names already ending in Page are kept."""
    if class_name.endswith("Page"):
        return class_name
    return f"{class_name}Page"


@dataclass
class ArtifactLayout:
    """Where the page, specification and glue files of one test live.

    pages/<snake>_page.py, features/<snake>.feature and
    steps/test_<snake>_steps.py under the output directory by default.
    """
    output_dir: str
    class_name: str
    pages_dir: str = "pages"
    features_dir: str = "features"
    steps_dir: str = "steps"

    @property
    def page_class(self) -> str:
        return page_class_name(self.class_name)

    @property
    def snake_name(self) -> str:
        return to_snake_case(self.class_name)

    @property
    def page_module(self) -> str:
        return to_snake_case(self.page_class)

    @property
    def page_import(self) -> str:
        """Dotted import path of the page module, relative to the output directory."""
        package = self.pages_dir.strip('/').replace('/', '.')
        return f"{package}.{self.page_module}"

    @property
    def fixture_name(self) -> str:
        return self.page_module

    @property
    def page_path(self) -> str:
        return os.path.join(self.output_dir, self.pages_dir, f"{self.page_module}.py")

    @property
    def feature_path(self) -> str:
        return os.path.join(self.output_dir, self.features_dir, f"{self.snake_name}.feature")

    @property
    def steps_path(self) -> str:
        return os.path.join(self.output_dir, self.steps_dir, f"test_{self.snake_name}_steps.py")

    @property
    def feature_from_steps(self) -> str:
        """Feature file path as referenced from the glue module's directory."""
        relative = os.path.relpath(
            os.path.join(self.features_dir, f"{self.snake_name}.feature"),
            self.steps_dir
        )
        return relative.replace(os.sep, '/')

    def paths(self) -> dict:
        return {
            'page': self.page_path,
            'specification': self.feature_path,
            'glue': self.steps_path,
        }
