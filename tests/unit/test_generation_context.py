"""
Unit tests for the run-scoped deduplicator and generation context.
"""
import sys
from pathlib import Path
from unittest.mock import Mock

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from core.domain.action import Action, ActionKind
from core.services.generation_context import Deduplicator, GenerationContext
from core.services.metrics.logger import StructuredLogger
from core.services.name_resolver import NameResolver


class TestDeduplicator:
    """Test the should_emit_* gates."""

    def setup_method(self):
        self.logger = Mock(spec=StructuredLogger)
        self.dedup = Deduplicator("page", self.logger)

    def test_first_emission_accepted(self):
        assert self.dedup.should_emit_selector("#save") is True

    def test_second_emission_rejected_and_logged(self):
        self.dedup.should_emit_method("clickSave")
        assert self.dedup.should_emit_method("clickSave") is False
        assert self.dedup.skipped == [('method', 'clickSave')]
        self.logger.log_duplicate.assert_called_once_with("page", "method", "clickSave")

    def test_units_are_independent(self):
        assert self.dedup.should_emit_constant("SAVE_1")
        assert self.dedup.should_emit_method("SAVE_1")
        assert self.dedup.should_emit_step("SAVE_1")
        assert self.dedup.should_emit_selector("SAVE_1")
        assert self.dedup.skipped == []

    def test_seen_returns_copy(self):
        self.dedup.should_emit_step("user clicks on save")
        seen = self.dedup.seen('step')
        seen.add("other")
        assert self.dedup.seen('step') == {"user clicks on save"}


class TestGenerationContext:
    """Test the context shared by the three generators."""

    def setup_method(self):
        self.context = GenerationContext(StructuredLogger("testgen.tests", enable_console=False))
        self.resolver = NameResolver()

    def test_one_deduplicator_per_artifact(self):
        assert self.context.page.scope == "page"
        assert self.context.specification.scope == "specification"
        assert self.context.glue.scope == "glue"
        assert self.context.deduplicator("glue") is self.context.glue

    def test_artifact_scopes_do_not_share_state(self):
        assert self.context.specification.should_emit_step("user clicks on save")
        assert self.context.glue.should_emit_step("user clicks on save")

    def test_new_context_starts_empty(self):
        self.context.page.should_emit_selector("#save")
        fresh = GenerationContext(StructuredLogger("testgen.tests", enable_console=False))
        assert fresh.page.should_emit_selector("#save")

    def test_constant_registry(self):
        self.context.declare_constant("#save", "SAVE_1")
        assert self.context.constant_for("#save") == "SAVE_1"
        assert self.context.constant_for("#other") is None
        assert self.context.constant_for(None) is None

    def test_declared_actions_sorted_and_filtered(self):
        navigation = self.resolver.resolve(Action(1, ActionKind.NAVIGATE, value="/"))
        fill = self.resolver.resolve(Action(2, ActionKind.FILL, "#username", "bob"))
        click = self.resolver.resolve(Action(3, ActionKind.CLICK, "#save"))

        self.context.declare_method(click)
        self.context.declare_method(navigation)
        self.context.declare_method(fill)

        assert self.context.declared_actions() == [fill, click]
        assert self.context.declared_actions(include_navigation=True) == [navigation, fill, click]
        assert self.context.declared_methods == ["navigateTo", "enterUsername", "clickSave"]
        assert self.context.method_for("clickSave") is click
        assert self.context.method_for("missing") is None

    def test_is_declared_tracks_exact_action(self):
        first = self.resolver.resolve(Action(1, ActionKind.CLICK, "#save"))
        second = self.resolver.resolve(Action(2, ActionKind.CLICK, "#save"))
        self.context.declare_method(first)

        assert self.context.is_declared(first)
        assert not self.context.is_declared(second)

    def test_skipped_count_sums_all_scopes(self):
        self.context.page.should_emit_selector("#a")
        self.context.page.should_emit_selector("#a")
        self.context.glue.should_emit_step("x")
        self.context.glue.should_emit_step("x")
        assert self.context.skipped_count == 2
