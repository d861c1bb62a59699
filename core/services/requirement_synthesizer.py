"""
Requirement Synthesizer - converts story text into a TestRequirement.

Uses keyword heuristics to detect UI elements, builds Gherkin scenarios from
acceptance criteria, appends standard edge-case scenarios and suggests
verification options from issue type and priority. The requirement can then
be lowered into synthetic Actions for the shared artifact generators.
"""
import re
from typing import List, Optional, Tuple

from core.domain.action import Action, ActionKind
from core.domain.requirement import (
    InteractionKind,
    PageElement,
    Scenario,
    TestRequirement,
    VerificationOptions
)
from core.domain.story import Story
from core.services.metrics.logger import StructuredLogger, get_logger
from core.services.name_resolver import to_class_name


# (pattern over lower-cased story text, element) in emission order
ELEMENT_PATTERNS: List[Tuple[str, PageElement]] = [
    # Input fields
    (r'username|user name|userid|user id', PageElement("Username Field", InteractionKind.TYPE, "Enter username")),
    (r'password|pwd', PageElement("Password Field", InteractionKind.TYPE, "Enter password")),
    (r'email|e-mail', PageElement("Email Field", InteractionKind.TYPE, "Enter email address")),
    (r'first name|firstname', PageElement("First Name Field", InteractionKind.TYPE, "Enter first name")),
    (r'last name|lastname', PageElement("Last Name Field", InteractionKind.TYPE, "Enter last name")),
    (r'phone|telephone|mobile', PageElement("Phone Field", InteractionKind.TYPE, "Enter phone number")),
    (r'address', PageElement("Address Field", InteractionKind.TYPE, "Enter address")),
    (r'search', PageElement("Search Field", InteractionKind.TYPE, "Enter search query")),

    # Buttons
    (r'login button|log in button|sign in|signin', PageElement("Login Button", InteractionKind.CLICK, "Click login button")),
    (r'submit button|submit form', PageElement("Submit Button", InteractionKind.CLICK, "Submit form")),
    (r'save button|\bsave\b', PageElement("Save Button", InteractionKind.CLICK, "Save changes")),
    (r'cancel button|\bcancel\b', PageElement("Cancel Button", InteractionKind.CLICK, "Cancel action")),
    (r'delete button|\bremove\b', PageElement("Delete Button", InteractionKind.CLICK, "Delete item")),
    (r'register button|signup|sign up', PageElement("Register Button", InteractionKind.CLICK, "Register account")),

    # Checkboxes
    (r'checkbox|check box|remember me', PageElement("Checkbox", InteractionKind.CHECK, "Toggle checkbox")),

    # Dropdowns
    (r'dropdown|drop down|\bselect\b|combo', PageElement("Dropdown", InteractionKind.SELECT, "Select from dropdown")),
]

FALLBACK_ELEMENTS = [
    PageElement("Main Action Button", InteractionKind.CLICK, "Primary action button"),
    PageElement("Input Field", InteractionKind.TYPE, "Primary input field"),
]

UI_PATTERN = re.compile(r'\b(?:ui|user interface|layout|design|button|field|form)\b')
PERFORMANCE_PATTERN = re.compile(r'performance|speed|\bfast\b|\bslow\b|timeout|load time')
GHERKIN_LINE = re.compile(r'^(?:given|when|then|and|but)\b', re.IGNORECASE)
SHOULD_CLAUSE = re.compile(r'\bshould\b\s*(.*)', re.IGNORECASE | re.DOTALL)

START_STEP = "Given user is on the application page"

# Sample values typed into synthetic fill/select actions
SAMPLE_VALUES = {
    InteractionKind.TYPE: "valid {name}",
    InteractionKind.SELECT: "Option 1",
    InteractionKind.PRESS: "Enter",
}


def _matches(pattern: str, text: str) -> bool:
    return re.search(pattern, text, re.IGNORECASE) is not None


def _is_feature_type(issue_type: str) -> bool:
    return _matches(r'story|feature', issue_type or '')


def _is_bug_type(issue_type: str) -> bool:
    return _matches(r'bug|defect', issue_type or '')


def _slug(name: str) -> str:
    return re.sub(r'[^a-z0-9]+', '-', name.lower()).strip('-')


class RequirementSynthesizer:
    """Builds a TestRequirement from story text using keyword heuristics."""

    def __init__(self, logger: Optional[StructuredLogger] = None):
        self._logger = logger or get_logger()

    def synthesize(self, story: Story) -> TestRequirement:
        """Convert a story into a TestRequirement.

        Args:
            story: Story supplied by the ticket source

        Returns:
            TestRequirement with elements, scenarios and verification options
        """
        description = (
            f"{story.summary}\n\nJIRA Story: {story.key}"
            f"\nGenerated from: {story.issue_type}\nPriority: {story.priority}"
        )
        requirement = TestRequirement(
            name=to_class_name(story.summary),
            description=description,
            source_ticket_key=story.key
        )

        text = story.full_text
        requirement.elements = self.detect_elements(text)
        requirement.verification = self.suggest_verification(story.issue_type, story.priority, text)

        criteria = [c for c in story.acceptance_criteria if c and c.strip()]
        if criteria:
            for criterion in criteria:
                requirement.add_scenario(
                    self.scenario_name(criterion),
                    self.detailed_steps(criterion, requirement.elements)
                )
        else:
            requirement.scenarios.extend(self.default_scenarios(story.summary, requirement.elements))

        requirement.scenarios.extend(self.edge_case_scenarios(story.issue_type))

        self._logger.info(
            "story_synthesized",
            story_key=story.key,
            elements=len(requirement.elements),
            scenarios=len(requirement.scenarios),
            criteria=len(criteria)
        )
        return requirement

    def detect_elements(self, text: str) -> List[PageElement]:
        """Detect UI elements mentioned in text; falls back to a button/field pair."""
        lowered = (text or '').lower()
        elements = [
            PageElement(element.name, element.interaction, element.description)
            for pattern, element in ELEMENT_PATTERNS
            if re.search(pattern, lowered)
        ]
        if not elements:
            elements = [PageElement(e.name, e.interaction, e.description) for e in FALLBACK_ELEMENTS]
        return elements

    @staticmethod
    def scenario_name(criterion: str) -> str:
        single_line = ' '.join(criterion.split())
        if len(single_line) > 50:
            return f"Verify {single_line[:50]}..."
        return f"Verify {single_line}"

    def detailed_steps(self, criterion: str, elements: List[PageElement]) -> List[str]:
        """Steps for one acceptance criterion.

        Gherkin-shaped lines are kept verbatim. Otherwise a skeleton is
        synthesized: precondition, one interaction per element, and a Then
        step built from the clause following "should".
        """
        steps = [
            line.strip() for line in criterion.splitlines()
            if GHERKIN_LINE.match(line.strip())
        ]
        if steps:
            return steps

        steps = [START_STEP, "And the page is fully loaded"]
        for index, element in enumerate(elements):
            keyword = "When" if index == 0 else "And"
            steps.append(f"{keyword} {self.interaction_phrase(element)}")
        if not elements:
            steps.append(f'When user performs actions for "{criterion.strip()}"')

        steps.append(f"Then the system should {self.expected_result(criterion)}")
        return steps

    @staticmethod
    def interaction_phrase(element: PageElement) -> str:
        phrases = {
            InteractionKind.TYPE: f"user enters valid data in {element.name}",
            InteractionKind.CLICK: f"user clicks on {element.name}",
            InteractionKind.SELECT: f"user selects value from {element.name}",
            InteractionKind.CHECK: f"user checks {element.name}",
            InteractionKind.PRESS: f"user presses key on {element.name}",
        }
        return phrases[element.interaction]

    @staticmethod
    def expected_result(criterion: str) -> str:
        match = SHOULD_CLAUSE.search(criterion)
        if not match:
            return "complete successfully"
        clause = ' '.join(match.group(1).split()).rstrip('.!;')
        return clause or "complete successfully"

    @staticmethod
    def edge_case_scenarios(issue_type: str) -> List[Scenario]:
        scenarios = [
            Scenario("Verify validation with empty fields", [
                START_STEP,
                "When user leaves required fields empty",
                "And user attempts to proceed",
                "Then appropriate validation messages should be displayed",
                "And the action should not proceed",
            ]),
            Scenario("Verify validation with invalid data", [
                START_STEP,
                "When user enters invalid data in fields",
                "And user attempts to proceed",
                "Then validation errors should be displayed",
                "And invalid fields should be highlighted",
            ]),
        ]
        if _is_feature_type(issue_type):
            scenarios.append(Scenario("Verify UI responsiveness", [
                START_STEP,
                "When the page loads",
                "Then all elements should be visible",
                "And the layout should be proper",
                "And no visual glitches should occur",
            ]))
        scenarios.append(Scenario("Verify error handling", [
            START_STEP,
            "When an error condition occurs",
            "Then appropriate error message should be displayed",
            "And user should be able to recover",
            "And application should remain stable",
        ]))
        return scenarios

    def default_scenarios(self, summary: str, elements: List[PageElement]) -> List[Scenario]:
        """Scenarios for stories without acceptance criteria."""
        scenarios = [
            Scenario(f"Verify {summary} - Happy Path", [
                START_STEP,
                "And all prerequisites are met",
                "When user performs the main action",
                "Then the action should complete successfully",
                "And expected result should be displayed",
            ])
        ]
        if elements:
            steps = [START_STEP]
            for index, element in enumerate(elements):
                keyword = "When" if index == 0 else "And"
                steps.append(f"{keyword} user interacts with {element.name}")
            steps.extend([
                "Then all elements should respond correctly",
                "And no errors should occur",
            ])
            scenarios.append(Scenario("Verify all UI elements are functional", steps))
        return scenarios

    @staticmethod
    def suggest_verification(issue_type: str, priority: str, text: str) -> VerificationOptions:
        lowered = (text or '').lower()
        priority = priority or ''
        options = VerificationOptions(functional=True)

        if UI_PATTERN.search(lowered) or _is_feature_type(issue_type):
            options.ui = True

        high_priority = _matches(r'high|critical|blocker', priority)
        if high_priority or PERFORMANCE_PATTERN.search(lowered):
            options.performance = True
            options.performance_threshold_ms = 2000 if _matches(r'critical|blocker', priority) else 3000

        if _is_bug_type(issue_type) or high_priority:
            options.logging = True

        return options

    @staticmethod
    def element_selector(element: PageElement) -> str:
        return f'[data-testid="{_slug(element.name)}"]'

    def to_actions(self, requirement: TestRequirement, page_url: str = "") -> List[Action]:
        """Lower requirement elements into synthetic actions.

        A navigation action comes first, then one action per element with a
        data-testid selector derived from the element name.
        """
        kinds = {
            InteractionKind.TYPE: ActionKind.FILL,
            InteractionKind.CLICK: ActionKind.CLICK,
            InteractionKind.SELECT: ActionKind.SELECT,
            InteractionKind.CHECK: ActionKind.CHECK,
            InteractionKind.PRESS: ActionKind.PRESS,
        }
        actions = [Action(sequence_id=1, kind=ActionKind.NAVIGATE, value=page_url)]
        for element in requirement.elements:
            sample = SAMPLE_VALUES.get(element.interaction)
            value = sample.format(name=element.name.lower()) if sample else None
            actions.append(Action(
                sequence_id=len(actions) + 1,
                kind=kinds[element.interaction],
                selector=self.element_selector(element),
                value=value
            ))
        return actions
