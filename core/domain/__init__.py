"""
Domain entities and value objects.
"""
from .action import Action, ActionKind
from .requirement import (
    InteractionKind,
    PageElement,
    Scenario,
    VerificationOptions,
    TestRequirement
)
from .story import Story
from .artifacts import (
    ConstantDecl,
    MethodDecl,
    PageModule,
    StepLine,
    ExamplesTable,
    ScenarioBlock,
    SpecDocument,
    StepHandler,
    GlueModule
)
from .errors import GenerationError, TicketFetchError, ArtifactWriteError, MissingInputError

__all__ = [
    'Action',
    'ActionKind',
    'InteractionKind',
    'PageElement',
    'Scenario',
    'VerificationOptions',
    'TestRequirement',
    'Story',
    'ConstantDecl',
    'MethodDecl',
    'PageModule',
    'StepLine',
    'ExamplesTable',
    'ScenarioBlock',
    'SpecDocument',
    'StepHandler',
    'GlueModule',
    'GenerationError',
    'TicketFetchError',
    'ArtifactWriteError',
    'MissingInputError',
]
