"""
Test requirement domain entities used by ticket-driven generation.
"""
from dataclasses import dataclass, field
from typing import List, Optional
from enum import Enum


class InteractionKind(str, Enum):
    """How a detected page element is interacted with."""
    TYPE = "type"
    CLICK = "click"
    SELECT = "select"
    CHECK = "check"
    PRESS = "press"


@dataclass
class PageElement:
    """A UI element detected in requirement text."""
    name: str
    interaction: InteractionKind
    description: str = ""


@dataclass
class Scenario:
    """A named scenario with its Gherkin steps kept verbatim."""
    name: str
    steps: List[str] = field(default_factory=list)


@dataclass
class VerificationOptions:
    """Verification intent suggested for a requirement."""
    functional: bool = True
    ui: bool = False
    performance: bool = False
    logging: bool = False
    performance_threshold_ms: int = 3000


@dataclass
class TestRequirement:
    """Element + scenario + verification structure for one generated test."""
    __test__ = False

    name: str
    description: str = ""
    source_ticket_key: Optional[str] = None
    elements: List[PageElement] = field(default_factory=list)
    scenarios: List[Scenario] = field(default_factory=list)
    verification: VerificationOptions = field(default_factory=VerificationOptions)

    def __post_init__(self):
        """Validate requirement after initialization."""
        if not self.name:
            raise ValueError("Test requirement name cannot be empty")

    def add_scenario(self, name: str, steps: List[str]) -> Scenario:
        scenario = Scenario(name=name, steps=list(steps))
        self.scenarios.append(scenario)
        return scenario
