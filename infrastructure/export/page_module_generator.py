"""
Page Module Generator

Generates a Python Playwright page-object module from resolved actions.
Follows the same export pattern as the specification and glue generators:
build a document tree inside the run's GenerationContext, then render it.
"""
from typing import List, Optional
from urllib.parse import urlparse

from core.domain.action import Action, ActionKind
from core.domain.artifacts import ConstantDecl, MethodDecl, PageModule
from core.interfaces.output_generator import IArtifactGenerator
from core.services.generation_context import GenerationContext
from .artifact_layout import page_class_name


NAVIGATION_METHOD = "navigateTo"

# kind -> (parameter, start message, call, done message)
PRIMITIVES = {
    ActionKind.CLICK: (None, "Clicking on {name}", "click()", "Clicked on {name}"),
    ActionKind.FILL: ("text", "Entering text into {name}", "fill(text)", "Entered text into {name}"),
    ActionKind.SELECT: ("option", "Selecting option from {name}", "select_option(option)", "Selected option from {name}"),
    ActionKind.CHECK: (None, "Checking {name}", "check()", "Checked {name}"),
    ActionKind.PRESS: ("key", "Pressing key on {name}", "press(key)", "Pressed key on {name}"),
}


def extract_path_from_url(url: Optional[str], base_url: Optional[str] = None) -> str:
    """Get the page path for a recorded URL.

    Relative paths are kept as-is. Absolute URLs under base_url lose the
    base prefix; other absolute URLs keep only their path and query.

    Args:
        url: Recorded navigation URL
        base_url: Application base URL

    Returns:
        Page path, or empty string for the base page
    """
    if not url or not url.strip():
        return ""

    url = url.strip()
    if url.startswith('/'):
        return url
    if not url.startswith(('http://', 'https://')):
        return url

    if base_url and base_url.strip():
        base = base_url.strip().rstrip('/')
        if url.startswith(base):
            return url[len(base):]

    parsed = urlparse(url)
    path = parsed.path or ""
    if parsed.query:
        path = f"{path}?{parsed.query}"
    return path


class PageModuleGenerator(IArtifactGenerator):
    """Generates the page interaction module."""

    artifact = "page"

    def __init__(self, base_url: str = ""):
        self._base_url = base_url

    def build(
        self,
        actions: List[Action],
        context: GenerationContext,
        class_name: str,
        story_key: str,
        page_url: Optional[str] = None
    ) -> PageModule:
        """Build the page module tree.

        Declares one constant per unseen selector and one method per unseen
        method name, and registers both in the context for the other
        generators. The navigation entry point is always declared first.

        Args:
            actions: Resolved actions in any order (processed by sequence id)
            context: Run-scoped generation context
            class_name: Test class name (e.g. "Login")
            story_key: Requirement key the module is tagged with
            page_url: Page URL; defaults to the first recorded navigation

        Returns:
            PageModule tree
        """
        ordered = sorted(actions, key=lambda a: a.sequence_id)
        if page_url is None:
            page_url = next((a.value for a in ordered if a.kind == ActionKind.NAVIGATE and a.value), "")

        module = PageModule(
            class_name=class_name,
            story_key=story_key,
            page_path=extract_path_from_url(page_url, self._base_url)
        )
        dedup = context.page

        dedup.should_emit_method(NAVIGATION_METHOD)
        module.methods.append(MethodDecl(NAVIGATION_METHOD, ActionKind.NAVIGATE, class_name))

        navigation_owner = None
        for action in ordered:
            if action.kind == ActionKind.NAVIGATE:
                # Only the first navigation owns the entry point
                if navigation_owner is None:
                    navigation_owner = action
                    context.declare_method(action)
                else:
                    dedup.should_emit_method(NAVIGATION_METHOD)
                continue

            if dedup.should_emit_selector(action.selector):
                if dedup.should_emit_constant(action.constant_name):
                    module.constants.append(ConstantDecl(action.constant_name, action.selector))
                    context.declare_constant(action.selector, action.constant_name)

            constant_name = context.constant_for(action.selector)
            if constant_name is None:
                context.logger.warning(
                    "method_skipped",
                    reason="no constant declared for selector",
                    selector=action.selector,
                    method=action.method_name
                )
                continue

            if not dedup.should_emit_method(action.method_name):
                continue

            parameter = PRIMITIVES[action.kind][0]
            module.methods.append(MethodDecl(
                name=action.method_name,
                kind=action.kind,
                readable_name=action.readable_name,
                constant_name=constant_name,
                parameter=parameter,
                default_value=(action.value or "Enter") if action.kind == ActionKind.PRESS else None
            ))
            context.declare_method(action)

        return module

    def render(self, module: PageModule) -> str:
        """Render the page module as Python source."""
        lines = [
            '"""',
            f"Page object for {module.class_name}.",
            "",
            "Auto-generated page object; regenerate instead of editing.",
            f"Story: {module.story_key}",
            '"""',
            "import logging",
            "import os",
            "",
            "from playwright.sync_api import Locator, Page",
            "",
            "logger = logging.getLogger(__name__)",
            "",
            'BASE_URL = os.getenv("BASE_URL", "")',
            "",
            "",
            f"class {page_class_name(module.class_name)}:",
            f'    """Page object for {module.class_name}."""',
            "",
            f"    PAGE_PATH = {module.page_path!r}",
            "",
        ]

        for constant in module.constants:
            lines.append(f"    {constant.name} = {constant.selector!r}")
        if module.constants:
            lines.append("")

        lines.extend([
            "    def __init__(self, page: Page):",
            "        self.page = page",
            "",
            "    def _locate(self, selector: str) -> Locator:",
            '        """Resolve placeholder= and label= selectors to accessor locators."""',
            '        if selector.startswith("placeholder="):',
            '            return self.page.get_by_placeholder(selector[len("placeholder="):])',
            '        if selector.startswith("label="):',
            '            return self.page.get_by_label(selector[len("label="):])',
            "        return self.page.locator(selector)",
        ])

        for method in module.methods:
            lines.append("")
            lines.extend(self._render_method(method))

        return '\n'.join(lines) + '\n'

    @staticmethod
    def _render_method(method: MethodDecl) -> List[str]:
        if method.kind == ActionKind.NAVIGATE:
            return [
                f"    def {method.name}(self) -> None:",
                f'        logger.info("Navigating to {method.readable_name} page")',
                "        self.page.goto(BASE_URL + self.PAGE_PATH)",
                '        logger.info("Navigated to %s", self.page.url)',
            ]

        parameter, start, call, done = PRIMITIVES[method.kind]
        if parameter and method.default_value is not None:
            signature = f"self, {parameter}: str = {method.default_value!r}"
        elif parameter:
            signature = f"self, {parameter}: str"
        else:
            signature = "self"

        return [
            f"    def {method.name}({signature}) -> None:",
            f'        logger.info("{start.format(name=method.readable_name)}")',
            f"        self._locate(self.{method.constant_name}).{call}",
            f'        logger.info("{done.format(name=method.readable_name)}")',
        ]
