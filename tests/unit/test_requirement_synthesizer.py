"""
Unit tests for the requirement synthesizer.

Tests element detection, scenario synthesis, edge cases, verification
suggestions and lowering to synthetic actions.
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from core.domain.action import ActionKind
from core.domain.requirement import InteractionKind, PageElement
from core.domain.story import Story
from core.services.metrics.logger import StructuredLogger
from core.services.requirement_synthesizer import RequirementSynthesizer


EDGE_CASE_NAMES = [
    "Verify validation with empty fields",
    "Verify validation with invalid data",
    "Verify UI responsiveness",
    "Verify error handling",
]


class TestRequirementSynthesizer:
    """Test synthesize() end to end."""

    def setup_method(self):
        self.synthesizer = RequirementSynthesizer(StructuredLogger("testgen.tests", enable_console=False))

    def test_login_story_without_gherkin(self):
        """Username field, password field and login button with a should-clause."""
        story = Story(
            key="PROJ-7",
            summary="User login",
            description="The page has a Username field, a Password field and a Login button.",
            acceptance_criteria=["After login the user should redirect to dashboard"]
        )

        requirement = self.synthesizer.synthesize(story)

        names = [e.name for e in requirement.elements]
        assert names == ["Username Field", "Password Field", "Login Button"]

        first = requirement.scenarios[0]
        assert first.steps[-1] == "Then the system should redirect to dashboard"
        assert first.steps[0] == "Given user is on the application page"
        assert first.steps[2] == "When user enters valid data in Username Field"
        assert first.steps[4] == "And user clicks on Login Button"

        assert [s.name for s in requirement.scenarios[1:]] == EDGE_CASE_NAMES

    def test_requirement_header(self):
        story = Story(key="PROJ-7", summary="User login", priority="High")
        requirement = self.synthesizer.synthesize(story)

        assert requirement.name == "UserLogin"
        assert requirement.source_ticket_key == "PROJ-7"
        assert requirement.description.startswith("User login\n\nJIRA Story: PROJ-7")
        assert "Priority: High" in requirement.description

    def test_gherkin_criteria_kept_verbatim(self):
        criterion = "\n".join([
            "Given user is on the Login page",
            "When user enters valid data in Username Field",
            "Then the dashboard should be displayed",
        ])
        story = Story(key="PROJ-8", summary="Login", acceptance_criteria=[criterion])

        requirement = self.synthesizer.synthesize(story)

        assert requirement.scenarios[0].steps == criterion.splitlines()

    def test_no_criteria_uses_default_scenarios_then_edge_cases(self):
        story = Story(key="PROJ-9", summary="Profile page", issue_type="Task")
        requirement = self.synthesizer.synthesize(story)

        names = [s.name for s in requirement.scenarios]
        assert names[0] == "Verify Profile page - Happy Path"
        assert names[1] == "Verify all UI elements are functional"
        assert names[2:] == [
            "Verify validation with empty fields",
            "Verify validation with invalid data",
            "Verify error handling",
        ]

    def test_scenario_name_truncated(self):
        name = RequirementSynthesizer.scenario_name("x" * 80)
        assert name == "Verify " + "x" * 50 + "..."


class TestElementDetection:
    """Test keyword-based element detection."""

    def setup_method(self):
        self.synthesizer = RequirementSynthesizer(StructuredLogger("testgen.tests", enable_console=False))

    def test_fallback_pair_when_nothing_detected(self):
        elements = self.synthesizer.detect_elements("Make it better")
        assert [(e.name, e.interaction) for e in elements] == [
            ("Main Action Button", InteractionKind.CLICK),
            ("Input Field", InteractionKind.TYPE),
        ]

    def test_fixed_detection_order(self):
        elements = self.synthesizer.detect_elements("Select a country from the dropdown, then enter email")
        assert [e.name for e in elements] == ["Email Field", "Dropdown"]

    def test_checkbox_is_check_interaction(self):
        elements = self.synthesizer.detect_elements("Tick the remember me checkbox")
        assert elements == [PageElement("Checkbox", InteractionKind.CHECK, "Toggle checkbox")]

    def test_word_boundaries(self):
        elements = self.synthesizer.detect_elements("The savings account summary")
        assert "Save Button" not in [e.name for e in elements]


class TestVerification:
    """Test verification option suggestions."""

    @pytest.mark.parametrize("issue_type, priority, text, expected", [
        ("Story", "Medium", "plain", (True, True, False, False, 3000)),
        ("Bug", "Low", "plain", (True, False, False, True, 3000)),
        ("Task", "High", "plain", (True, False, True, True, 3000)),
        ("Task", "Critical", "plain", (True, False, True, True, 2000)),
        ("Task", "Low", "page load time is slow", (True, False, True, False, 3000)),
        ("Task", "Low", "update the form layout", (True, True, False, False, 3000)),
    ])
    def test_suggest_verification(self, issue_type, priority, text, expected):
        options = RequirementSynthesizer.suggest_verification(issue_type, priority, text)
        assert (
            options.functional, options.ui, options.performance,
            options.logging, options.performance_threshold_ms
        ) == expected


class TestToActions:
    """Test lowering a requirement into synthetic actions."""

    def setup_method(self):
        self.synthesizer = RequirementSynthesizer(StructuredLogger("testgen.tests", enable_console=False))

    def test_navigation_first_then_one_action_per_element(self):
        story = Story(key="PROJ-7", summary="Login", description="username, password, login button, dropdown")
        requirement = self.synthesizer.synthesize(story)

        actions = self.synthesizer.to_actions(requirement, "/login")

        assert actions[0].kind == ActionKind.NAVIGATE
        assert actions[0].value == "/login"
        assert [a.sequence_id for a in actions] == list(range(1, len(actions) + 1))
        assert [a.kind for a in actions[1:]] == [
            ActionKind.FILL, ActionKind.FILL, ActionKind.CLICK, ActionKind.SELECT
        ]
        assert actions[1].selector == '[data-testid="username-field"]'
        assert actions[1].value == "valid username field"
        assert actions[3].value is None
        assert actions[4].value == "Option 1"
