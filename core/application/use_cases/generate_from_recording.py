"""
Use case: Generate page, specification and glue artifacts from a recording.
"""
import time
from typing import Optional

from core.domain.errors import MissingInputError
from core.services.generation_context import GenerationContext
from core.services.metrics.logger import StructuredLogger, get_logger
from core.services.name_resolver import NameResolver, to_class_name
from core.services.recording_parser import RecordingParser
from .generation import ArtifactGenerators, GenerationResult, finish_run


class GenerateFromRecordingUseCase:
    """Use case for turning recorded browser interactions into test artifacts."""

    def __init__(
        self,
        generators: ArtifactGenerators,
        parser: Optional[RecordingParser] = None,
        resolver: Optional[NameResolver] = None,
        logger: Optional[StructuredLogger] = None
    ):
        """Initialize use case with dependencies.

        Args:
            generators: Page, specification and glue generators plus writer
            parser: Recording parser (default pattern table when omitted)
            resolver: Name resolver
            logger: Structured logger
        """
        self.generators = generators
        self.logger = logger or get_logger()
        self.parser = parser or RecordingParser(logger=self.logger)
        self.resolver = resolver or NameResolver()

    def execute(
        self,
        recording_text: str,
        feature_name: str,
        page_url: Optional[str] = None,
        story_key: str = "",
        output_dir: str = "output"
    ) -> GenerationResult:
        """Execute generation for one recording.

        Args:
            recording_text: Recorded interaction lines
            feature_name: Free-text name the class name is derived from
            page_url: Page URL; defaults to the first recorded navigation
            story_key: Requirement key the artifacts are tagged with
            output_dir: Root directory for the three files

        Returns:
            GenerationResult with written paths and parser warnings

        Raises:
            MissingInputError: If the recording, feature name or story key is absent
            ArtifactWriteError: If an artifact cannot be written
        """
        if recording_text is None:
            raise MissingInputError("recording")
        if not feature_name or not feature_name.strip():
            raise MissingInputError("feature name")
        if not story_key or not story_key.strip():
            raise MissingInputError("story key")

        started = time.time()
        parsed = self.parser.parse(recording_text)
        actions = self.resolver.resolve_all(parsed.actions)

        class_name = to_class_name(feature_name)
        story_key = story_key.strip()
        layout = self.generators.layout_factory(output_dir, class_name)

        # One context per run; page first so the others see its declarations
        context = GenerationContext(self.logger)
        documents = {
            'page': self.generators.page.build(actions, context, class_name, story_key, page_url),
            'specification': self.generators.specification.build(actions, context, class_name, story_key),
            'glue': self.generators.glue.build(actions, context, layout),
        }

        return finish_run(
            self.generators,
            self.logger,
            context,
            layout,
            documents,
            mode="recording",
            story_key=story_key,
            started=started,
            warnings=parsed.warnings
        )
