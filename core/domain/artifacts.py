"""
In-memory document trees for the three generated artifacts.

Generators build these trees first and render them to text afterwards, so
uniqueness and ordering can be checked without parsing rendered output.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from .action import ActionKind


@dataclass
class ConstantDecl:
    """A selector constant declared on the page class."""
    name: str
    selector: str


@dataclass
class MethodDecl:
    """A page method performing one primitive operation."""
    name: str
    kind: ActionKind
    readable_name: str
    constant_name: Optional[str] = None
    parameter: Optional[str] = None
    default_value: Optional[str] = None


@dataclass
class PageModule:
    """Page interaction module."""
    class_name: str
    story_key: str
    page_path: str
    constants: List[ConstantDecl] = field(default_factory=list)
    methods: List[MethodDecl] = field(default_factory=list)

    @property
    def constant_names(self) -> List[str]:
        return [c.name for c in self.constants]

    @property
    def method_names(self) -> List[str]:
        return [m.name for m in self.methods]


@dataclass
class StepLine:
    """One Gherkin step line."""
    keyword: str
    text: str
    action_sequence_id: Optional[int] = None

    def render(self) -> str:
        return f"{self.keyword} {self.text}"


@dataclass
class ExamplesTable:
    """Examples table backing a Scenario Outline."""
    columns: List[str] = field(default_factory=list)
    values: List[str] = field(default_factory=list)

    def add(self, column: str, value: str) -> None:
        self.columns.append(column)
        self.values.append(value)

    def __bool__(self) -> bool:
        return bool(self.columns)


@dataclass
class ScenarioBlock:
    """A scenario (or scenario outline) with its steps."""
    name: str
    steps: List[StepLine] = field(default_factory=list)
    examples: ExamplesTable = field(default_factory=ExamplesTable)

    @property
    def is_outline(self) -> bool:
        return bool(self.examples)


@dataclass
class SpecDocument:
    """Behavior specification document."""
    feature_name: str
    tags: List[str] = field(default_factory=list)
    description: List[str] = field(default_factory=list)
    precondition: Optional[StepLine] = None
    scenarios: List[ScenarioBlock] = field(default_factory=list)
    closing_step: Optional[StepLine] = None
    background: bool = False

    @property
    def behavior_lines(self) -> List[StepLine]:
        """Action-derived lines in emission order, across all scenarios."""
        return [
            step for scenario in self.scenarios
            for step in scenario.steps
            if step.action_sequence_id is not None
        ]


@dataclass
class StepHandler:
    """A glue handler binding one step pattern to one page method."""
    step_types: List[str]
    pattern: str
    function_name: str
    page_method: Optional[str] = None
    parameter: Optional[str] = None
    argument: Optional[str] = None
    parsed: bool = False


@dataclass
class GlueModule:
    """Glue module binding specification steps to page methods."""
    class_name: str
    page_class: str
    page_module: str
    feature_file: str
    fixture_name: str
    handlers: List[StepHandler] = field(default_factory=list)

    @property
    def referenced_methods(self) -> List[str]:
        return [h.page_method for h in self.handlers if h.page_method]
