"""
Export infrastructure implementations.

Renders the page module, Gherkin specification and pytest-bdd glue module,
and writes them to disk.
"""
from .artifact_layout import ArtifactLayout, page_class_name
from .page_module_generator import PageModuleGenerator, extract_path_from_url
from .specification_generator import SpecificationGenerator
from .glue_generator import GlueGenerator
from .artifact_writer import ArtifactWriter

__all__ = [
    'ArtifactLayout',
    'page_class_name',
    'PageModuleGenerator',
    'extract_path_from_url',
    'SpecificationGenerator',
    'GlueGenerator',
    'ArtifactWriter',
]
