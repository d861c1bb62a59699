"""
Generation context - the run-scoped deduplication state.

One GenerationContext is created per generation run and passed to every
artifact generator. It owns one Deduplicator per artifact plus the registry
of constants and methods the page module actually declared, so the
specification and glue generators only reference declared units.
"""
from typing import Dict, List, Optional, Set

from core.domain.action import Action, ActionKind
from core.services.metrics.logger import StructuredLogger, get_logger


class Deduplicator:
    """Run-scoped set-membership gate preventing duplicate emission.

    Each should_emit_* method returns True exactly once per distinct value
    and False afterwards. A rejected unit is skipped by the caller, never
    renamed, and the skip is logged.
    """

    UNITS = ('selector', 'constant', 'method', 'step')

    def __init__(self, scope: str, logger: Optional[StructuredLogger] = None):
        self.scope = scope
        self._logger = logger or get_logger()
        self._seen: Dict[str, Set[str]] = {unit: set() for unit in self.UNITS}
        self.skipped: List[tuple] = []

    def _should_emit(self, unit: str, value: str) -> bool:
        seen = self._seen[unit]
        if value in seen:
            self.skipped.append((unit, value))
            self._logger.log_duplicate(self.scope, unit, value)
            return False
        seen.add(value)
        return True

    def should_emit_selector(self, selector: str) -> bool:
        return self._should_emit('selector', selector)

    def should_emit_constant(self, name: str) -> bool:
        return self._should_emit('constant', name)

    def should_emit_method(self, name: str) -> bool:
        return self._should_emit('method', name)

    def should_emit_step(self, phrase: str) -> bool:
        return self._should_emit('step', phrase)

    def seen(self, unit: str) -> Set[str]:
        """Values accepted so far for a unit."""
        return set(self._seen[unit])


class GenerationContext:
    """State shared by the three artifact generators of one run."""

    ARTIFACTS = ('page', 'specification', 'glue')

    def __init__(self, logger: Optional[StructuredLogger] = None):
        self._logger = logger or get_logger()
        self._deduplicators = {
            artifact: Deduplicator(artifact, self._logger) for artifact in self.ARTIFACTS
        }
        self._constants_by_selector: Dict[str, str] = {}
        self._declared_actions: Dict[int, Action] = {}
        self._method_owner: Dict[str, int] = {}

    @property
    def logger(self) -> StructuredLogger:
        return self._logger

    def deduplicator(self, artifact: str) -> Deduplicator:
        """Get the deduplicator for 'page', 'specification' or 'glue'."""
        return self._deduplicators[artifact]

    @property
    def page(self) -> Deduplicator:
        return self._deduplicators['page']

    @property
    def specification(self) -> Deduplicator:
        return self._deduplicators['specification']

    @property
    def glue(self) -> Deduplicator:
        return self._deduplicators['glue']

    # Registry written by the page generator, read by the other two

    def declare_constant(self, selector: str, constant_name: str) -> None:
        self._constants_by_selector[selector] = constant_name

    def constant_for(self, selector: Optional[str]) -> Optional[str]:
        """Constant declared for a selector, if any."""
        if selector is None:
            return None
        return self._constants_by_selector.get(selector)

    def declare_method(self, action: Action) -> None:
        """Record that the page module declares the method of this action."""
        self._declared_actions[action.sequence_id] = action
        self._method_owner[action.method_name] = action.sequence_id

    def is_declared(self, action: Action) -> bool:
        """True when this exact action owns a declared page method."""
        return action.sequence_id in self._declared_actions

    def declared_actions(self, include_navigation: bool = False) -> List[Action]:
        """Declared actions in ascending sequence order."""
        actions = sorted(self._declared_actions.values(), key=lambda a: a.sequence_id)
        if include_navigation:
            return actions
        return [a for a in actions if a.kind != ActionKind.NAVIGATE]

    def method_for(self, method_name: str) -> Optional[Action]:
        sequence_id = self._method_owner.get(method_name)
        if sequence_id is None:
            return None
        return self._declared_actions[sequence_id]

    @property
    def declared_methods(self) -> List[str]:
        return [a.method_name for a in self.declared_actions(include_navigation=True)]

    @property
    def skipped_count(self) -> int:
        return sum(len(d.skipped) for d in self._deduplicators.values())
