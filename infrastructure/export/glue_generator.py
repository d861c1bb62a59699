"""
Glue Generator

Generates a pytest-bdd step-definition module binding the feature file's
steps to page-object methods. The navigation handler is always first and the
closing verification handler always last.
"""
import re
from typing import Dict, List, Optional, Set, Tuple

from core.domain.action import Action, ActionKind
from core.domain.artifacts import GlueModule, StepHandler
from core.domain.requirement import TestRequirement
from core.interfaces.output_generator import IArtifactGenerator
from core.services.generation_context import GenerationContext
from core.services.name_resolver import decamelize
from .artifact_layout import ArtifactLayout
from .page_module_generator import NAVIGATION_METHOD
from .specification_generator import CLOSING_STEP, precondition_text, split_step


STEP_TYPES = ('given', 'when', 'then')
NAVIGATION_STEP = re.compile(r'\b(?:is on|navigates? to|opens?)\b.*\bpage\b')


def step_function_name(text: str, taken: Set[str]) -> str:
    """snake_case function name for a step, unique within the module."""
    base = re.sub(r'[^a-z0-9]+', '_', text.lower()).strip('_') or 'step'
    if base[0].isdigit() or base.startswith("test"):
        base = f"step_{base}"
    base = base[:60].rstrip('_')

    name = base
    counter = 2
    while name in taken:
        name = f"{base}_{counter}"
        counter += 1
    taken.add(name)
    return name


def handler_pattern(action: Action) -> Tuple[str, Optional[str]]:
    """Step pattern matched by the handler of an action and its parameter name."""
    spoken = decamelize(action.readable_name)
    if action.kind == ActionKind.FILL:
        return f'user enters "{{text}}" into {spoken}', "text"
    if action.kind == ActionKind.SELECT:
        return f'user selects "{{option}}" from {spoken}', "option"
    return action.step_phrase, None


class GlueGenerator(IArtifactGenerator):
    """Generates the step-definition glue module."""

    artifact = "glue"

    def _new_module(self, layout: ArtifactLayout) -> GlueModule:
        return GlueModule(
            class_name=layout.class_name,
            page_class=layout.page_class,
            page_module=layout.page_import,
            feature_file=layout.feature_from_steps,
            fixture_name=layout.fixture_name
        )

    def _navigation_handler(self, glue: GlueModule, context: GenerationContext, taken: Set[str]) -> None:
        pattern = precondition_text(glue.class_name)
        context.glue.should_emit_step(pattern)
        glue.handlers.append(StepHandler(
            step_types=['given'],
            pattern=pattern,
            function_name=step_function_name(f"navigate to {glue.class_name} page", taken),
            page_method=NAVIGATION_METHOD
        ))

    def build(
        self,
        actions: List[Action],
        context: GenerationContext,
        layout: ArtifactLayout
    ) -> GlueModule:
        """Build the recording-mode glue tree.

        One handler per distinct step phrase of a declared action, each
        delegating to that action's page method.
        """
        glue = self._new_module(layout)
        taken: Set[str] = {glue.fixture_name}
        self._navigation_handler(glue, context, taken)

        for action in sorted(actions, key=lambda a: a.sequence_id):
            if action.kind == ActionKind.NAVIGATE or not context.is_declared(action):
                continue

            pattern, parameter = handler_pattern(action)
            if not context.glue.should_emit_step(pattern):
                continue

            glue.handlers.append(StepHandler(
                step_types=['when'],
                pattern=pattern,
                function_name=step_function_name(action.step_phrase, taken),
                page_method=action.method_name,
                parameter=parameter,
                parsed=parameter is not None
            ))

        context.glue.should_emit_step(CLOSING_STEP)
        glue.handlers.append(StepHandler(
            step_types=['then'],
            pattern=CLOSING_STEP,
            function_name=step_function_name("verify page updated", taken)
        ))
        return glue

    def build_from_requirement(
        self,
        requirement: TestRequirement,
        actions: List[Action],
        context: GenerationContext,
        layout: ArtifactLayout
    ) -> GlueModule:
        """Build the ticket-mode glue tree.

        One handler per distinct verbatim step. And/But steps take the type
        of the step before them. A step delegates to navigateTo when it puts
        the user on a page, otherwise to the method of the longest element
        name it mentions, otherwise it is a logged pass-through.
        """
        glue = self._new_module(layout)
        taken: Set[str] = {glue.fixture_name}
        self._navigation_handler(glue, context, taken)

        element_actions = self._element_actions(requirement, actions, context)

        step_types: Dict[str, List[str]] = {}
        for scenario in requirement.scenarios:
            current = 'given'
            for step in scenario.steps:
                keyword, text = split_step(step)
                keyword = keyword.lower()
                if keyword in STEP_TYPES:
                    current = keyword
                types = step_types.setdefault(text, [])
                if current not in types:
                    types.append(current)

        for text, types in step_types.items():
            if not context.glue.should_emit_step(text):
                continue
            handler = StepHandler(
                step_types=[t for t in STEP_TYPES if t in types],
                pattern=text,
                function_name=step_function_name(text, taken)
            )
            if NAVIGATION_STEP.search(text.lower()):
                handler.page_method = NAVIGATION_METHOD
            else:
                target = self._element_for(text, element_actions)
                if target is not None:
                    handler.page_method = target.method_name
                    if target.is_parameterized:
                        handler.argument = target.value or ""
            glue.handlers.append(handler)

        return glue

    @staticmethod
    def _element_actions(
        requirement: TestRequirement,
        actions: List[Action],
        context: GenerationContext
    ) -> List[Tuple[str, Action]]:
        """(lower-cased element name, declared action), longest name first."""
        synthetic = [a for a in sorted(actions, key=lambda a: a.sequence_id) if a.kind != ActionKind.NAVIGATE]
        pairs = [
            (element.name.lower(), action)
            for element, action in zip(requirement.elements, synthetic)
            if context.is_declared(action)
        ]
        return sorted(pairs, key=lambda pair: len(pair[0]), reverse=True)

    @staticmethod
    def _element_for(text: str, element_actions: List[Tuple[str, Action]]) -> Optional[Action]:
        lowered = text.lower()
        for name, action in element_actions:
            if name in lowered:
                return action
        return None

    def render(self, glue: GlueModule) -> str:
        """Render the glue module as Python source."""
        decorators = sorted({t for h in glue.handlers for t in h.step_types})
        imports = decorators + (['parsers'] if any(h.parsed for h in glue.handlers) else []) + ['scenarios']

        lines = [
            '"""',
            f"Step definitions for {glue.class_name}.",
            "",
            f"Binds {glue.feature_file} steps to {glue.page_class} methods.",
            '"""',
            "import logging",
            "",
            "import pytest",
            f"from pytest_bdd import {', '.join(sorted(imports))}",
            "",
            f"from {glue.page_module} import {glue.page_class}",
            "",
            "logger = logging.getLogger(__name__)",
            "",
            f"scenarios({glue.feature_file!r})",
            "",
            "",
            "@pytest.fixture",
            f"def {glue.fixture_name}(page):",
            f'    """{glue.page_class} bound to the Playwright page fixture."""',
            f"    return {glue.page_class}(page)",
        ]

        for handler in glue.handlers:
            lines.extend(["", ""])
            lines.extend(self._render_handler(handler, glue.fixture_name))

        return '\n'.join(lines) + '\n'

    @staticmethod
    def _render_handler(handler: StepHandler, fixture: str) -> List[str]:
        lines = []
        for step_type in handler.step_types:
            if handler.parsed:
                lines.append(f"@{step_type}(parsers.parse({handler.pattern!r}))")
            else:
                lines.append(f"@{step_type}({handler.pattern!r})")

        arguments = fixture
        if handler.parameter:
            arguments = f"{fixture}, {handler.parameter}"
        lines.append(f"def {handler.function_name}({arguments}):")

        if handler.page_method:
            argument = handler.parameter or ''
            if not handler.parameter and handler.argument is not None:
                argument = repr(handler.argument)
            lines.append(f"    {fixture}.{handler.page_method}({argument})")
        else:
            lines.append(f"    logger.info({('Step passed: ' + handler.pattern)!r})")
        return lines
