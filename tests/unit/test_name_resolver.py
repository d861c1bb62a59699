"""
Unit tests for the name resolver and naming helpers.
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from core.domain.action import Action, ActionKind
from core.services.name_resolver import (
    NameResolver,
    decamelize,
    to_class_name,
    to_snake_case,
    to_upper_snake
)


class TestReadableName:
    """Readable names extracted from selectors."""

    def setup_method(self):
        self.resolver = NameResolver()

    @pytest.mark.parametrize("selector, expected", [
        ("text=Sign In", "SignIn"),
        ("placeholder=Search products", "SearchProducts"),
        ("label=Email address", "EmailAddress"),
        ("#username", "Username"),
        ("#login-btn", "Login"),
        ("#first_name-input", "FirstName"),
        ('role=button[name="Sign In"]', "SignIn"),
        ('button:has-text("Checkout")', "Checkout"),
        ('input[name="email"]', "Email"),
        ('input[aria-label="Zip code"]', "ZipCode"),
        (".nav-menu", "NavMenu"),
        ('[data-testid="login-button"]', "Login"),
    ])
    def test_selector_rules(self, selector, expected):
        assert self.resolver.readable_name(selector) == expected

    def test_empty_selector(self):
        assert self.resolver.readable_name(None) == "Element"
        assert self.resolver.readable_name("") == "Element"

    def test_symbol_only_selector(self):
        assert self.resolver.readable_name("text=???") == "Element"

    def test_numeric_name(self):
        assert self.resolver.readable_name("text=42") == "Number42"

    @pytest.mark.parametrize("selector, expected", [
        ("#2fa-code", "Element2faCode"),
        ("text=3 items", "Element3Items"),
    ])
    def test_digit_leading_name_gets_prefix(self, selector, expected):
        assert self.resolver.readable_name(selector) == expected


class TestDerivedNames:
    """Constant, method and step names."""

    def test_constant_name_uses_sequence_id(self):
        assert NameResolver.constant_name("SignIn", 4) == "SIGN_IN_4"

    @pytest.mark.parametrize("kind, readable, expected", [
        (ActionKind.CLICK, "SignIn", "clickSignIn"),
        (ActionKind.FILL, "Username", "enterUsername"),
        (ActionKind.FILL, "WorkEmail", "enterEmail"),
        (ActionKind.FILL, "Password", "enterPassword"),
        (ActionKind.FILL, "SearchBox", "searchBox"),
        (ActionKind.FILL, "City", "enterCity"),
        (ActionKind.SELECT, "Country", "selectCountry"),
        (ActionKind.CHECK, "Terms", "checkTerms"),
        (ActionKind.CHECK, "DarkModeToggle", "toggleDarkMode"),
        (ActionKind.PRESS, "Search", "pressKeyOnSearch"),
        (ActionKind.NAVIGATE, "Page", "navigateTo"),
    ])
    def test_method_names(self, kind, readable, expected):
        assert NameResolver.method_name(kind, readable, 2) == expected

    def test_generic_value_name_gets_sequence_suffix(self):
        assert NameResolver.method_name(ActionKind.FILL, "Value", 7) == "enterField7"

    @pytest.mark.parametrize("kind, expected", [
        (ActionKind.CLICK, "user clicks on sign in"),
        (ActionKind.FILL, "user enters text into sign in"),
        (ActionKind.SELECT, "user selects option from sign in"),
        (ActionKind.CHECK, "user checks sign in"),
        (ActionKind.PRESS, "user presses key on sign in"),
    ])
    def test_step_phrases(self, kind, expected):
        assert NameResolver.step_phrase(kind, "SignIn") == expected


class TestResolve:
    """NameResolver.resolve fills every naming field once."""

    def setup_method(self):
        self.resolver = NameResolver()

    def test_resolve_action(self):
        action = self.resolver.resolve(Action(3, ActionKind.FILL, "#password", "x"))
        assert action.readable_name == "Password"
        assert action.constant_name == "PASSWORD_3"
        assert action.method_name == "enterPassword"
        assert action.step_phrase == "user enters text into password"
        assert action.is_resolved

    @pytest.mark.parametrize("selector", ["#2fa-code", "#123", "text=???", ".9-lives"])
    def test_derived_names_are_identifiers(self, selector):
        action = self.resolver.resolve(Action(2, ActionKind.FILL, selector, "x"))
        assert action.constant_name.isidentifier()
        assert action.method_name.isidentifier()

    def test_digit_leading_constant(self):
        action = self.resolver.resolve(Action(2, ActionKind.FILL, "#2fa-code", "123456"))
        assert action.constant_name == "ELEMENT2FA_CODE_2"
        assert action.method_name == "enterElement2faCode"

    def test_resolve_navigation(self):
        action = self.resolver.resolve(Action(1, ActionKind.NAVIGATE, value="/login"))
        assert action.readable_name == "Page"
        assert action.method_name == "navigateTo"

    def test_same_readable_name_distinct_constants(self):
        actions = self.resolver.resolve_all([
            Action(1, ActionKind.CLICK, "#save"),
            Action(2, ActionKind.CLICK, "text=Save"),
        ])
        assert actions[0].constant_name == "SAVE_1"
        assert actions[1].constant_name == "SAVE_2"

    def test_deterministic(self):
        def run():
            actions = [
                Action(1, ActionKind.NAVIGATE, value="/login"),
                Action(2, ActionKind.FILL, "#username", "bob"),
                Action(3, ActionKind.CLICK, "text=Sign In"),
            ]
            return [
                (a.constant_name, a.method_name, a.step_phrase)
                for a in NameResolver().resolve_all(actions)
            ]

        assert run() == run()


class TestNamingHelpers:
    """Case conversion helpers."""

    def test_decamelize(self):
        assert decamelize("SignInForm") == "sign in form"
        assert decamelize("HTMLParser") == "html parser"

    def test_to_upper_snake(self):
        assert to_upper_snake("SignIn") == "SIGN_IN"

    def test_to_snake_case(self):
        assert to_snake_case("LoginPage") == "login_page"
        assert to_snake_case("Login Page") == "login_page"

    @pytest.mark.parametrize("text, expected", [
        ("Login", "Login"),
        ("user login - happy path", "UserLoginHappyPath"),
        ("MyAccount", "MyAccount"),
        ("3D viewer", "Class3dViewer"),
        ("", "DefaultClass"),
        ("!!!", "DefaultClass"),
    ])
    def test_to_class_name(self, text, expected):
        assert to_class_name(text) == expected
