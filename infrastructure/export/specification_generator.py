"""
Specification Generator

Generates a Gherkin feature file. In recording mode there is one scenario
with one behavior line per declared action; in ticket mode each requirement
scenario becomes its own block with the steps kept verbatim.
"""
import re
from typing import List, Optional, Tuple

from core.domain.action import Action, ActionKind
from core.domain.artifacts import ScenarioBlock, SpecDocument, StepLine
from core.domain.requirement import TestRequirement
from core.interfaces.output_generator import IArtifactGenerator
from core.services.generation_context import GenerationContext
from core.services.name_resolver import decamelize, to_snake_case


CLOSING_STEP = "page should be updated"
STEP_KEYWORD = re.compile(r'^(Given|When|Then|And|But)\s+(.*)$', re.IGNORECASE | re.DOTALL)


def precondition_text(class_name: str) -> str:
    return f"user navigates to {class_name} page"


def behavior_text(action: Action, column: Optional[str] = None) -> str:
    """Specification wording for an action.

    Fill and select lines reference an Examples column holding the recorded value.
    """
    spoken = decamelize(action.readable_name)
    column = column or to_snake_case(action.readable_name)
    if action.kind == ActionKind.FILL:
        return f'user enters "<{column}>" into {spoken}'
    if action.kind == ActionKind.SELECT:
        return f'user selects "<{column}>" from {spoken}'
    return action.step_phrase


def split_step(step: str) -> Tuple[str, str]:
    """'When user logs in' -> ('When', 'user logs in'); keyword defaults to And."""
    match = STEP_KEYWORD.match(step.strip())
    if not match:
        return "And", step.strip()
    return match.group(1), match.group(2).strip()


def table_cell(value: Optional[str]) -> str:
    """Escape a value for a Gherkin table cell (backslash, pipe, newline)."""
    text = (value or "").replace('\\', '\\\\').replace('|', '\\|')
    text = text.replace('\r\n', '\n').replace('\r', '\n')
    return text.replace('\n', '\\n')


class SpecificationGenerator(IArtifactGenerator):
    """Generates the behavior specification document."""

    artifact = "specification"

    def build(
        self,
        actions: List[Action],
        context: GenerationContext,
        class_name: str,
        story_key: str
    ) -> SpecDocument:
        """Build the recording-mode document.

        Only actions whose page method was declared are described, in
        ascending sequence order. Step lines pass through the specification
        deduplicator.
        """
        document = SpecDocument(
            feature_name=f"{class_name} Test",
            tags=[f"@{story_key}", f"@{class_name}"],
            precondition=StepLine("Given", precondition_text(class_name)),
            closing_step=StepLine("Then", CLOSING_STEP)
        )
        scenario = ScenarioBlock(name=f"Complete {class_name} workflow")
        dedup = context.specification

        for action in sorted(actions, key=lambda a: a.sequence_id):
            if action.kind == ActionKind.NAVIGATE or not context.is_declared(action):
                continue

            column = None
            if action.is_parameterized:
                column = to_snake_case(action.readable_name)
                if column in scenario.examples.columns:
                    column = f"{column}_{action.sequence_id}"

            text = behavior_text(action, column)
            if not dedup.should_emit_step(text):
                continue

            keyword = "When" if not scenario.steps else "And"
            scenario.steps.append(StepLine(keyword, text, action.sequence_id))
            if column:
                scenario.examples.add(column, action.value or "")

        document.scenarios.append(scenario)
        return document

    def build_from_requirement(
        self,
        requirement: TestRequirement,
        context: GenerationContext,
        class_name: str,
        story_key: str
    ) -> SpecDocument:
        """Build the ticket-mode document: one block per scenario, steps verbatim."""
        document = SpecDocument(
            feature_name=f"{class_name} Test",
            tags=[f"@{story_key}", f"@{class_name}"],
            description=[line for line in requirement.description.splitlines() if line.strip()],
            precondition=StepLine("Given", precondition_text(class_name)),
            background=True
        )
        context.specification.should_emit_step(document.precondition.text)

        for scenario in requirement.scenarios:
            block = ScenarioBlock(name=scenario.name)
            for step in scenario.steps:
                keyword, text = split_step(step)
                block.steps.append(StepLine(keyword, text))
            document.scenarios.append(block)

        return document

    def render(self, document: SpecDocument) -> str:
        """Render the document as Gherkin."""
        lines = [' '.join(document.tags), f"Feature: {document.feature_name}"]
        for description_line in document.description:
            lines.append(f"  {description_line.strip()}")
        lines.append("")

        if document.background and document.precondition:
            lines.extend([
                "  Background:",
                f"    {document.precondition.render()}",
                "",
            ])

        for scenario in document.scenarios:
            header = "Scenario Outline" if scenario.is_outline else "Scenario"
            lines.append(f"  {header}: {scenario.name}")
            if document.precondition and not document.background:
                lines.append(f"    {document.precondition.render()}")
            for step in scenario.steps:
                lines.append(f"    {step.render()}")
            if document.closing_step:
                lines.append(f"    {document.closing_step.render()}")

            if scenario.examples:
                lines.extend([
                    "",
                    "    Examples:",
                    "      | " + " | ".join(scenario.examples.columns) + " |",
                    "      | " + " | ".join(table_cell(v) for v in scenario.examples.values) + " |",
                ])
            lines.append("")

        return '\n'.join(lines)
