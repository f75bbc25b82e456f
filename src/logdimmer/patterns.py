"""Predefined log statement patterns for the supported languages.

Every pattern is a lexical approximation of a logging call. They allow one
level of nested parentheses inside the arguments and do not understand
string literals or comments, so look-alike text inside those is matched too.
"""

import re

# All patterns may span several source lines. Word characters are ASCII only.
PATTERN_FLAGS = re.MULTILINE | re.DOTALL | re.ASCII

# Arguments with at most one level of balanced parentheses: "(a, f(b), c)"
_NESTED_ARGS = r"\([^()]*(?:\([^()]*\)[^()]*)*\)"

_CONSOLE_CALL = r"console\.(?:log|warn|error|info|debug|trace)\s*\([^)]*\);?"


def _compile(*expressions: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(expression, PATTERN_FLAGS) for expression in expressions)


LOG_PATTERNS: dict[str, tuple[re.Pattern[str], ...]] = {
    # Applied after the language specific patterns, whatever the language.
    "general": _compile(
        rf"\blog\.\w+\s*{_NESTED_ARGS}(?:\.\w+\s*{_NESTED_ARGS})*;?",
        rf"\bLog\.\w+\s*{_NESTED_ARGS}(?:\.\w+\s*{_NESTED_ARGS})*;?",
    ),
    "typescript": _compile(_CONSOLE_CALL),
    "javascript": _compile(_CONSOLE_CALL),
    "go": _compile(
        r"logger\.\w+\s*\([^)]*\)",
        # receiver.Logs.Level(args) plus any chained calls up to the next ';'
        r"\w+\.Logs\.\w+\((?:[^()]|\([^()]*\))*\)[^;]*;?",
    ),
    "cpp": _compile(
        r"std::(?:cout|cerr|clog)\s*<<[^;]*;?",
        r"(?:cout|cerr|clog)\s*<<[^;]*;?",
    ),
}

# Editor language ids -> pattern table keys
LANGUAGE_MAP: dict[str, str] = {
    "typescript": "typescript",
    "javascript": "javascript",
    "typescriptreact": "typescript",
    "javascriptreact": "javascript",
    "go": "go",
    "cpp": "cpp",
    "c++": "cpp",
}

DEFAULT_LANGUAGE = "typescript"


def resolve_pattern_key(language_id: str) -> str:
    """Map an editor language id onto a key of ``LOG_PATTERNS``.

    Unknown ids fall back to the TypeScript patterns.
    """
    return LANGUAGE_MAP.get(language_id, DEFAULT_LANGUAGE)


def get_log_patterns_for_language(language_id: str) -> list[re.Pattern[str]]:
    """Get the ordered patterns to run for a language.

    Args:
        language_id: Language id of the document (e.g. "typescriptreact")

    Returns:
        Language specific patterns followed by the general patterns
    """
    language_patterns = LOG_PATTERNS[resolve_pattern_key(language_id)]
    return [*language_patterns, *LOG_PATTERNS["general"]]
