"""
Recorded action domain entity.
"""
from dataclasses import dataclass
from typing import Optional
from enum import Enum


class ActionKind(str, Enum):
    """Kinds of recorded browser interactions."""
    NAVIGATE = "navigate"
    CLICK = "click"
    FILL = "fill"
    SELECT = "select"
    CHECK = "check"
    PRESS = "press"


@dataclass
class Action:
    """One recorded interaction.

    The naming fields stay empty until NameResolver fills them. They are
    computed once per action and shared by every artifact generator.
    """
    sequence_id: int
    kind: ActionKind
    selector: Optional[str] = None
    value: Optional[str] = None
    readable_name: str = ""
    constant_name: str = ""
    method_name: str = ""
    step_phrase: str = ""

    def __post_init__(self):
        """Validate action after initialization."""
        if self.sequence_id < 1:
            raise ValueError("Action sequence ID must be positive")
        if self.kind != ActionKind.NAVIGATE and not self.selector:
            raise ValueError(f"{self.kind.value} action requires a selector")

    @property
    def is_parameterized(self) -> bool:
        """Fill and select steps carry a value into the glue handler."""
        return self.kind in (ActionKind.FILL, ActionKind.SELECT)

    @property
    def is_resolved(self) -> bool:
        return bool(self.readable_name and self.method_name and self.step_phrase)
