"""
Shared pieces of the two generation use cases: the generator bundle they are
wired with and the result they return.
"""
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from core.interfaces.output_generator import IArtifactGenerator, IArtifactWriter
from core.services.generation_context import GenerationContext
from core.services.metrics.logger import StructuredLogger


@dataclass
class GenerationResult:
    """Outcome of one successful generation run."""
    class_name: str
    files: Dict[str, str] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    constants: List[str] = field(default_factory=list)
    methods: List[str] = field(default_factory=list)
    steps: List[str] = field(default_factory=list)
    skipped_duplicates: int = 0
    story_key: str = ""
    mode: str = "recording"

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)


@dataclass
class ArtifactGenerators:
    """The three artifact generators, the writer and the layout they target.

    layout_factory(output_dir, class_name) returns the file layout passed to
    the glue generator and the writer.
    """
    page: IArtifactGenerator
    specification: IArtifactGenerator
    glue: IArtifactGenerator
    writer: IArtifactWriter
    layout_factory: Callable[[str, str], Any]


def finish_run(
    generators: ArtifactGenerators,
    logger: StructuredLogger,
    context: GenerationContext,
    layout: Any,
    documents: Dict[str, Any],
    mode: str,
    story_key: str,
    started: float,
    warnings: Optional[List[str]] = None
) -> GenerationResult:
    """Render the three built trees, write them and summarize the run."""
    contents = {
        'page': generators.page.render(documents['page']),
        'specification': generators.specification.render(documents['specification']),
        'glue': generators.glue.render(documents['glue']),
    }
    files = generators.writer.write(layout, contents)

    page_module = documents['page']
    glue_module = documents['glue']
    result = GenerationResult(
        class_name=page_module.class_name,
        files=files,
        warnings=list(warnings or []),
        constants=page_module.constant_names,
        methods=page_module.method_names,
        steps=[handler.pattern for handler in glue_module.handlers],
        skipped_duplicates=context.skipped_count,
        story_key=story_key,
        mode=mode
    )

    logger.log_generation(
        class_name=result.class_name,
        mode=mode,
        duration_ms=(time.time() - started) * 1000,
        constants=len(result.constants),
        methods=len(result.methods),
        steps=len(result.steps),
        skipped=result.skipped_duplicates,
        story_key=story_key
    )
    return result
