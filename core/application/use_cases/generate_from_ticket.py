"""
Use case: Generate test artifacts from an issue-tracker story.
"""
import time
from typing import Optional

from core.domain.errors import MissingInputError, TicketFetchError
from core.domain.story import Story
from core.interfaces.repository import IStoryRepository
from core.services.generation_context import GenerationContext
from core.services.metrics.logger import StructuredLogger, get_logger
from core.services.name_resolver import NameResolver
from core.services.requirement_synthesizer import RequirementSynthesizer
from .generation import ArtifactGenerators, GenerationResult, finish_run


class GenerateFromTicketUseCase:
    """Use case for generating artifacts from a story fetched by key.

    The story is synthesized into a TestRequirement, whose elements are
    lowered into synthetic actions so the page module is built exactly as in
    recording mode. Specification and glue follow the requirement's scenarios.
    """

    def __init__(
        self,
        story_repository: IStoryRepository,
        generators: ArtifactGenerators,
        synthesizer: Optional[RequirementSynthesizer] = None,
        resolver: Optional[NameResolver] = None,
        logger: Optional[StructuredLogger] = None
    ):
        self.story_repository = story_repository
        self.generators = generators
        self.logger = logger or get_logger()
        self.synthesizer = synthesizer or RequirementSynthesizer(logger=self.logger)
        self.resolver = resolver or NameResolver()

    def fetch_story(self, ticket_key: str) -> Story:
        """Fetch a story, turning every collaborator failure into TicketFetchError."""
        try:
            story = self.story_repository.get_story(ticket_key)
        except Exception as e:
            self.logger.error("ticket_fetch_failed", ticket_key=ticket_key, error=str(e))
            raise TicketFetchError(ticket_key, str(e)) from e

        if story is None:
            self.logger.error("ticket_fetch_failed", ticket_key=ticket_key, error="not found")
            raise TicketFetchError(ticket_key, "story not found")
        return story

    def execute(
        self,
        ticket_key: str,
        output_dir: str = "output",
        page_url: str = ""
    ) -> GenerationResult:
        """Execute generation for one ticket.

        Args:
            ticket_key: Ticket key (e.g. "PROJ-123")
            output_dir: Root directory for the three files
            page_url: Page URL for the navigation entry point

        Returns:
            GenerationResult with written paths

        Raises:
            MissingInputError: If no ticket key is given
            TicketFetchError: If the story cannot be fetched (nothing is written)
            ArtifactWriteError: If an artifact cannot be written
        """
        if not ticket_key or not ticket_key.strip():
            raise MissingInputError("ticket key")

        started = time.time()
        story = self.fetch_story(ticket_key.strip())
        requirement = self.synthesizer.synthesize(story)
        actions = self.resolver.resolve_all(self.synthesizer.to_actions(requirement, page_url))

        class_name = requirement.name
        layout = self.generators.layout_factory(output_dir, class_name)

        context = GenerationContext(self.logger)
        documents = {
            'page': self.generators.page.build(actions, context, class_name, story.key, page_url),
            'specification': self.generators.specification.build_from_requirement(
                requirement, context, class_name, story.key
            ),
            'glue': self.generators.glue.build_from_requirement(requirement, actions, context, layout),
        }

        return finish_run(
            self.generators,
            self.logger,
            context,
            layout,
            documents,
            mode="ticket",
            story_key=story.key,
            started=started
        )
