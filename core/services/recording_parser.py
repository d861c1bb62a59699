"""
Recording Parser - turns recorded Playwright call lines into Actions.

Each line is tested against an ordered table of RecordingPattern entries.
The first entry that matches wins; supporting a new call shape means
appending an entry rather than adding a branch to the scan loop.

Priority order:
1. Navigation (navigate/goto)
2. Locator chains: locator(sel).click()/fill()/selectOption()/check()/press()
3. Semantic accessors: getByRole/getByText/getByPlaceholder/getByLabel,
   normalized to tagged selectors such as "label=Email"
4. Legacy flat calls: click(sel), fill(sel, text), ...
"""
import re
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple
from re import Match, Pattern

from core.domain.action import Action, ActionKind
from core.services.metrics.logger import StructuredLogger, get_logger


# Optional "await " and "page." receiver in front of every call shape
_PREFIX = r'^(?:await\s+)?(?:(?:self\.)?page\.)?'
# Optional statement terminator at end of line
_END = r'\s*;?\s*$'
# Trailing options argument, e.g. ", { force: true }" or ", timeout=500"
_OPTIONS = r'(?:\s*,.*?)?'

COMMENT_PREFIXES = ('//', '#', 'import ', 'from ', 'package ', '/*', '*')

Extracted = Tuple[Optional[str], Optional[str]]


def _quoted(group: str) -> str:
    """Regex for a single-, double- or backtick-quoted string captured as `group`."""
    return (
        rf'(?P<{group}_q>["\'`])'
        rf'(?P<{group}>(?:\\.|(?!(?P={group}_q)).)*)'
        rf'(?P={group}_q)'
    )


def _names(*names: str) -> str:
    return '(?:' + '|'.join(names) + ')'


ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    'b': '\b',
    'f': '\f',
    'v': '\v',
}

_ESCAPE = re.compile(r'\\(u\{[0-9A-Fa-f]{1,6}\}|u[0-9A-Fa-f]{4}|x[0-9A-Fa-f]{2}|.)', re.DOTALL)


def _decode_escape(match: Match) -> str:
    code = match.group(1)
    if len(code) > 1 and code[0] in 'ux':
        point = int(code[1:].strip('{}'), 16)
        return chr(point) if point <= 0x10FFFF else match.group(0)
    return ESCAPES.get(code, code)


def unescape(text: str) -> str:
    """Decode backslash escapes inside a captured string literal.

    Control escapes (\\n, \\t, ...) and \\xHH / \\uXXXX / \\u{...} code points
    are decoded; any other escaped character stands for itself.
    """
    decoded = _ESCAPE.sub(_decode_escape, text)
    # Join escaped surrogate pairs; lone halves become U+FFFD
    return decoded.encode('utf-16-le', 'surrogatepass').decode('utf-16-le', 'replace')


_CLICK = r'\.click\([^)]*\)'
_CHECK = r'\.check\([^)]*\)'
_FILL = r'\.fill\(\s*' + _quoted('val') + _OPTIONS + r'\)'
_SELECT = r'\.' + _names('selectOption', 'select_option') + r'\(\s*' + _quoted('val') + _OPTIONS + r'\)'
_PRESS = r'\.press\(\s*' + _quoted('val') + _OPTIONS + r'\)'

_LOCATOR = _PREFIX + r'locator\(\s*' + _quoted('sel') + _OPTIONS + r'\)\s*'
_BY_ROLE = _PREFIX + _names('getByRole', 'get_by_role') + r'\((?P<args>.*)\)\s*'
_BY_TEXT = _PREFIX + _names('getByText', 'get_by_text') + r'\(\s*' + _quoted('sel') + _OPTIONS + r'\)\s*'
_BY_PLACEHOLDER = (
    _PREFIX + _names('getByPlaceholder', 'get_by_placeholder')
    + r'\(\s*' + _quoted('sel') + _OPTIONS + r'\)\s*'
)
_BY_LABEL = _PREFIX + _names('getByLabel', 'get_by_label') + r'\(\s*' + _quoted('sel') + _OPTIONS + r'\)\s*'

_ROLE_CONSTANT = re.compile(r'AriaRole\.(\w+)')
_ROLE_LITERAL = re.compile(r'^\s*["\'](\w+)["\']')
_ROLE_NAME = re.compile(r'(?:setName\(\s*|\bname\s*[=:]\s*)' + _quoted('name'))


@dataclass
class RecordingPattern:
    """One recognizable call shape: a matcher plus an extractor."""
    name: str
    kind: ActionKind
    regex: Pattern
    extractor: Callable[[Match], Optional[Extracted]]

    def match(self, line: str) -> Optional[Extracted]:
        found = self.regex.match(line)
        if not found:
            return None
        return self.extractor(found)


@dataclass
class ParseResult:
    """Outcome of parsing one recording."""
    actions: List[Action] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    unrecognized_lines: List[Tuple[int, str]] = field(default_factory=list)
    fallback_used: bool = False

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)


def _navigation(match: Match) -> Extracted:
    return None, unescape(match.group('url'))


def _selector(match: Match) -> Optional[Extracted]:
    selector = unescape(match.group('sel')).strip()
    if not selector:
        return None
    return selector, None


def _selector_value(match: Match) -> Optional[Extracted]:
    selector = unescape(match.group('sel')).strip()
    if not selector:
        return None
    return selector, unescape(match.group('val'))


def _tagged(prefix: str, with_value: bool = False) -> Callable[[Match], Optional[Extracted]]:
    """Build an extractor that tags the accessor argument, e.g. label=Email."""
    def extract(match: Match) -> Optional[Extracted]:
        text = unescape(match.group('sel'))
        if not text.strip():
            return None
        value = unescape(match.group('val')) if with_value else None
        return f"{prefix}={text}", value
    return extract


def role_selector(args: str) -> Optional[str]:
    """Normalize getByRole arguments to a role=<role>[name="..."] selector.

    Accepts AriaRole.BUTTON constants and quoted role strings, with the
    accessible name given as setName("..."), name="..." or { name: '...' }.
    """
    role_match = _ROLE_CONSTANT.search(args) or _ROLE_LITERAL.search(args)
    if not role_match:
        return None
    role = role_match.group(1).lower()

    name_match = _ROLE_NAME.search(args)
    if not name_match:
        return f"role={role}"

    name = unescape(name_match.group('name')).replace('"', '\\"')
    return f'role={role}[name="{name}"]'


def _role(with_value: bool = False) -> Callable[[Match], Optional[Extracted]]:
    def extract(match: Match) -> Optional[Extracted]:
        selector = role_selector(match.group('args'))
        if not selector:
            return None
        value = unescape(match.group('val')) if with_value else None
        return selector, value
    return extract


def _compile(pattern: str) -> Pattern:
    return re.compile(pattern + _END)


def default_patterns() -> List[RecordingPattern]:
    """The built-in call-shape table in priority order."""
    return [
        # 1. Navigation
        RecordingPattern(
            'navigate', ActionKind.NAVIGATE,
            _compile(_PREFIX + _names('navigate', 'goto') + r'\(\s*' + _quoted('url') + _OPTIONS + r'\)'),
            _navigation
        ),

        # 2. Locator chains
        RecordingPattern('locator.click', ActionKind.CLICK, _compile(_LOCATOR + _CLICK), _selector),
        RecordingPattern('locator.fill', ActionKind.FILL, _compile(_LOCATOR + _FILL), _selector_value),
        RecordingPattern('locator.selectOption', ActionKind.SELECT, _compile(_LOCATOR + _SELECT), _selector_value),
        RecordingPattern('locator.check', ActionKind.CHECK, _compile(_LOCATOR + _CHECK), _selector),
        RecordingPattern('locator.press', ActionKind.PRESS, _compile(_LOCATOR + _PRESS), _selector_value),

        # 3. Semantic accessors
        RecordingPattern('getByRole.click', ActionKind.CLICK, _compile(_BY_ROLE + _CLICK), _role()),
        RecordingPattern('getByRole.fill', ActionKind.FILL, _compile(_BY_ROLE + _FILL), _role(with_value=True)),
        RecordingPattern('getByText.click', ActionKind.CLICK, _compile(_BY_TEXT + _CLICK), _tagged('text')),
        RecordingPattern(
            'getByPlaceholder.fill', ActionKind.FILL,
            _compile(_BY_PLACEHOLDER + _FILL), _tagged('placeholder', with_value=True)
        ),
        RecordingPattern('getByLabel.click', ActionKind.CLICK, _compile(_BY_LABEL + _CLICK), _tagged('label')),
        RecordingPattern(
            'getByLabel.fill', ActionKind.FILL,
            _compile(_BY_LABEL + _FILL), _tagged('label', with_value=True)
        ),
        RecordingPattern(
            'getByLabel.press', ActionKind.PRESS,
            _compile(_BY_LABEL + _PRESS), _tagged('label', with_value=True)
        ),
        RecordingPattern('getByLabel.check', ActionKind.CHECK, _compile(_BY_LABEL + _CHECK), _tagged('label')),

        # 4. Legacy flat calls
        RecordingPattern(
            'click', ActionKind.CLICK,
            _compile(_PREFIX + r'click\(\s*' + _quoted('sel') + _OPTIONS + r'\)'),
            _selector
        ),
        RecordingPattern(
            'fill', ActionKind.FILL,
            _compile(_PREFIX + r'fill\(\s*' + _quoted('sel') + r'\s*,\s*' + _quoted('val') + _OPTIONS + r'\)'),
            _selector_value
        ),
        RecordingPattern(
            'selectOption', ActionKind.SELECT,
            _compile(
                _PREFIX + _names('selectOption', 'select_option')
                + r'\(\s*' + _quoted('sel') + r'\s*,\s*' + _quoted('val') + _OPTIONS + r'\)'
            ),
            _selector_value
        ),
        RecordingPattern(
            'check', ActionKind.CHECK,
            _compile(_PREFIX + r'check\(\s*' + _quoted('sel') + _OPTIONS + r'\)'),
            _selector
        ),
        RecordingPattern(
            'press', ActionKind.PRESS,
            _compile(_PREFIX + r'press\(\s*' + _quoted('sel') + r'\s*,\s*' + _quoted('val') + _OPTIONS + r'\)'),
            _selector_value
        ),
    ]


class RecordingParser:
    """Parses recorded browser interactions into an ordered list of Actions."""

    FALLBACK_WARNING = "No recognizable actions found; using a single navigation action"

    def __init__(
        self,
        patterns: Optional[List[RecordingPattern]] = None,
        logger: Optional[StructuredLogger] = None
    ):
        """Initialize parser.

        Args:
            patterns: Call-shape table in priority order (defaults to the built-in table)
            logger: Structured logger (defaults to the global logger)
        """
        self._patterns = patterns if patterns is not None else default_patterns()
        self._logger = logger or get_logger()

    @property
    def patterns(self) -> List[RecordingPattern]:
        return list(self._patterns)

    @staticmethod
    def is_skippable(line: str) -> bool:
        """Blank, comment, import and package lines are ignored silently."""
        return not line or line.startswith(COMMENT_PREFIXES)

    def match_line(self, line: str) -> Optional[Tuple[RecordingPattern, Extracted]]:
        """Find the first pattern matching a stripped line."""
        for pattern in self._patterns:
            extracted = pattern.match(line)
            if extracted is not None:
                return pattern, extracted
        return None

    def parse(self, text: str) -> ParseResult:
        """Parse raw recording text.

        Args:
            text: Recording content, one call per line

        Returns:
            ParseResult with actions numbered from 1 in line order. Never raises
            for unrecognized content: lost lines are reported as warnings and an
            empty recording yields one synthetic navigation action.
        """
        start = time.time()
        result = ParseResult()

        for line_number, raw_line in enumerate((text or '').splitlines(), start=1):
            line = raw_line.strip()
            if self.is_skippable(line):
                continue

            matched = self.match_line(line)
            if matched is None:
                result.unrecognized_lines.append((line_number, line))
                result.warnings.append(f"Line {line_number} not recognized: {line}")
                self._logger.warning("line_unrecognized", line_number=line_number, text=line)
                continue

            pattern, (selector, value) = matched
            result.actions.append(Action(
                sequence_id=len(result.actions) + 1,
                kind=pattern.kind,
                selector=selector,
                value=value
            ))
            self._logger.debug("line_parsed", line_number=line_number, pattern=pattern.name)

        if not result.actions:
            result.actions.append(Action(sequence_id=1, kind=ActionKind.NAVIGATE, value=""))
            result.warnings.append(self.FALLBACK_WARNING)
            result.fallback_used = True

        self._logger.log_parsing(
            parser="recording",
            duration_ms=(time.time() - start) * 1000,
            actions=len(result.actions),
            unrecognized=len(result.unrecognized_lines),
            fallback_used=result.fallback_used
        )
        return result
