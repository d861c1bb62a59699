"""
Name Resolver - derives identifiers for recorded actions.

For each Action a readable name is extracted from the selector, then the
constant name, method name and step phrase are derived from it. Naming is a
pure function of (selector, kind, sequence_id), so identical input always
yields identical names.
"""
import re
from typing import Callable, List, Optional, Tuple

from core.domain.action import Action, ActionKind


# Suffixes stripped from #id selectors ("#login-btn" -> "login")
ID_SUFFIX_PATTERN = re.compile(r'[-_](?:btn|button|input|field|link|txt|id)$', re.IGNORECASE)

# Generic trailing words dropped from cleaned names ("Sign In Button" -> "Sign In")
GENERIC_SUFFIX_PATTERN = re.compile(r'\s+(?:button|btn|input|field|link|checkbox|radio)$', re.IGNORECASE)

TOGGLE_WORDS = ('toggle', 'switch')


def _after(prefix: str) -> Callable[[str], Optional[str]]:
    def extract(selector: str) -> Optional[str]:
        if selector.startswith(prefix):
            return selector[len(prefix):]
        return None
    return extract


def _search(pattern: str, flags: int = 0, spaced: bool = False) -> Callable[[str], Optional[str]]:
    compiled = re.compile(pattern, flags)

    def extract(selector: str) -> Optional[str]:
        match = compiled.search(selector)
        if not match:
            return None
        value = match.group(1)
        return re.sub(r'[-_]', ' ', value) if spaced else value
    return extract


def _id_selector(selector: str) -> Optional[str]:
    match = re.match(r'^#([\w-]+)', selector)
    if not match:
        return None
    return ID_SUFFIX_PATTERN.sub('', match.group(1))


# Ordered readable-name rules; the first rule returning a value wins
READABLE_NAME_RULES: List[Tuple[str, Callable[[str], Optional[str]]]] = [
    ('text', _after('text=')),
    ('placeholder', _after('placeholder=')),
    ('label', _after('label=')),
    ('id', _id_selector),
    ('role', _search(r'^role=\w+\[\s*name\s*=\s*["\']?((?:\\.|[^"\'\]])+)')),
    ('has-text', _search(r':has-text\(\s*["\']([^"\']+)["\']')),
    ('name', _search(r'(?<![\w-])name\s*=\s*["\']([^"\']+)["\']')),
    ('placeholder-attr', _search(r'placeholder\s*=\s*["\']([^"\']+)["\']')),
    ('aria-label', _search(r'aria-label\s*=\s*["\']([^"\']+)["\']')),
    ('title', _search(r'title\s*=\s*["\']([^"\']+)["\']')),
    ('value', _search(r'(?<![\w-])value\s*=\s*["\']([^"\']+)["\']')),
    ('class', _search(r'^\.([\w-]+)', spaced=True)),
    ('data-testid', _search(r'data-test-?id\s*=\s*["\']?([\w-]+)', spaced=True)),
]


def decamelize(name: str) -> str:
    """'SignInForm' -> 'sign in form'."""
    spaced = re.sub(r'([a-z0-9])([A-Z])', r'\1 \2', name)
    spaced = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1 \2', spaced)
    return spaced.lower().strip()


def to_upper_snake(name: str) -> str:
    """'SignIn' -> 'SIGN_IN'."""
    return re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', name).upper()


def to_snake_case(name: str) -> str:
    """'LoginPage' or 'Login Page' -> 'login_page'."""
    words = re.sub(r'[^A-Za-z0-9]+', ' ', decamelize(name)).split()
    return '_'.join(words)


def to_pascal_case(text: str) -> str:
    """Capitalize each word and lower-case the rest: 'sign IN' -> 'SignIn'."""
    return ''.join(word[0].upper() + word[1:].lower() for word in text.split() if word)


def clean_name(raw: str) -> str:
    """Strip non-alphanumerics, collapse whitespace and drop generic suffix words."""
    cleaned = re.sub(r'[^A-Za-z0-9]+', ' ', raw)
    cleaned = re.sub(r'\s+', ' ', cleaned).strip()
    cleaned = GENERIC_SUFFIX_PATTERN.sub('', cleaned)
    return cleaned.strip()


def to_class_name(text: str) -> str:
    """Turn a feature name or story summary into a class name.

    Args:
        text: Free text such as "Login page - happy path"

    Returns:
        PascalCase identifier starting with a letter, "DefaultClass" when empty
    """
    cleaned = re.sub(r'[^A-Za-z0-9\s]', ' ', text or '').strip()
    if not cleaned:
        return "DefaultClass"

    # Keep existing inner capitals of single-word names like "MyAccount"
    words = cleaned.split()
    if len(words) == 1 and re.search(r'[a-z][A-Z]', words[0]):
        class_name = words[0][0].upper() + words[0][1:]
    else:
        class_name = to_pascal_case(cleaned)

    if not class_name[0].isalpha():
        class_name = "Class" + class_name
    return class_name


class NameResolver:
    """Derives readable, constant, method and step names for actions."""

    NAVIGATION_NAME = "Page"

    def readable_name(self, selector: Optional[str]) -> str:
        """Extract a PascalCase readable name from a selector.

        Args:
            selector: Raw or tagged selector (e.g. "#login-btn", "label=Email")

        Returns:
            PascalCase name; "Element" when nothing usable remains,
            "Number<digits>" for all-numeric names, "Element" prefixed
            when the name would start with a digit
        """
        if not selector:
            return "Element"

        raw = selector
        for _rule, extract in READABLE_NAME_RULES:
            value = extract(selector)
            if value:
                raw = value
                break

        cleaned = clean_name(raw)
        if not cleaned:
            return "Element"
        if cleaned.replace(' ', '').isdigit():
            return "Number" + cleaned.replace(' ', '')

        name = to_pascal_case(cleaned)
        # Derived constants and methods must stay valid identifiers
        if name[0].isdigit():
            name = "Element" + name
        return name

    @staticmethod
    def constant_name(readable_name: str, sequence_id: int) -> str:
        """UPPER_SNAKE readable name suffixed with the sequence id."""
        return f"{to_upper_snake(readable_name)}_{sequence_id}"

    @staticmethod
    def method_name(kind: ActionKind, readable_name: str, sequence_id: int) -> str:
        """Verb-prefixed method name for an action kind."""
        if kind == ActionKind.NAVIGATE:
            return "navigateTo"

        name = readable_name
        if name == "Value":
            name = f"Field{sequence_id}"
        lower = name.lower()

        if kind == ActionKind.CLICK:
            return "click" + name
        if kind == ActionKind.FILL:
            if "search" in lower:
                return "search" + (name.replace("Search", "") or "Field")
            if "email" in lower:
                return "enterEmail"
            if "password" in lower:
                return "enterPassword"
            if "username" in lower:
                return "enterUsername"
            return "enter" + name
        if kind == ActionKind.SELECT:
            return "select" + name
        if kind == ActionKind.CHECK:
            if any(word in lower for word in TOGGLE_WORDS):
                return "toggle" + (name.replace("Toggle", "").replace("Switch", "") or "Option")
            return "check" + name
        if kind == ActionKind.PRESS:
            return "pressKeyOn" + name

        raise ValueError(f"Unsupported action kind: {kind}")

    @staticmethod
    def step_phrase(kind: ActionKind, readable_name: str) -> str:
        """Natural-language step phrase for an action kind."""
        spoken = decamelize(readable_name)
        phrases = {
            ActionKind.CLICK: f"user clicks on {spoken}",
            ActionKind.FILL: f"user enters text into {spoken}",
            ActionKind.SELECT: f"user selects option from {spoken}",
            ActionKind.CHECK: f"user checks {spoken}",
            ActionKind.PRESS: f"user presses key on {spoken}",
            ActionKind.NAVIGATE: "user navigates to page",
        }
        return phrases[kind]

    def resolve(self, action: Action) -> Action:
        """Fill the derived naming fields of an action in place."""
        if action.kind == ActionKind.NAVIGATE:
            action.readable_name = self.NAVIGATION_NAME
        else:
            action.readable_name = self.readable_name(action.selector)

        action.constant_name = self.constant_name(action.readable_name, action.sequence_id)
        action.method_name = self.method_name(action.kind, action.readable_name, action.sequence_id)
        action.step_phrase = self.step_phrase(action.kind, action.readable_name)
        return action

    def resolve_all(self, actions: List[Action]) -> List[Action]:
        """Resolve every action once, in sequence order."""
        for action in sorted(actions, key=lambda a: a.sequence_id):
            self.resolve(action)
        return actions
