"""Glob matching for changed file paths.

The dialect follows minimatch defaults so that configuration written for
the GitHub Action behaves the same here:

    *       any characters within one path segment
    ?       one character within a segment
    **      zero or more whole segments (only as a full segment)
    [abc]   character class, [!abc] / [^abc] negated
    {a,b}   alternation
    !pat    negates the whole pattern

With ``dot=False`` wildcards never match a segment starting with ``.``
unless the pattern spells the dot out (``.github/**``).
"""

import re
from functools import lru_cache
from typing import Iterable, List, Pattern, Tuple

from ..errors import Err, Ok, ParseError, Result

# Applied to file analysis, never to category matching.
DEFAULT_EXCLUDES: List[str] = [
    # IDE and editor directories
    ".vscode/**",
    ".idea/**",
    # Version control and hooks
    ".husky/**",
    ".git/**",
    # Dependencies
    "node_modules/**",
    # Lock files
    "**/*.lock",
    "**/package-lock.json",
    "**/pnpm-lock.yaml",
    "**/yarn.lock",
    "**/composer.lock",
    "**/Gemfile.lock",
    "**/Cargo.lock",
    "**/poetry.lock",
    "**/Pipfile.lock",
    "**/uv.lock",
    # OS files
    "**/.DS_Store",
    "**/Thumbs.db",
    # Tool configuration
    "**/.dockerignore",
    "**/.coderabbit.yaml",
    "**/.github/actionlint.yaml",
]


def expand_braces(pattern: str) -> List[str]:
    """Expand ``{a,b}`` alternations, including nested ones."""
    depth = 0
    start = -1
    commas: List[int] = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "{":
            if depth == 0:
                start = i
                commas = []
            depth += 1
        elif ch == "," and depth == 1:
            commas.append(i)
        elif ch == "}" and depth > 0:
            depth -= 1
            if depth == 0 and commas:
                bounds = [start] + commas + [i]
                prefix, suffix = pattern[:start], pattern[i + 1:]
                expanded: List[str] = []
                for k in range(len(bounds) - 1):
                    option = pattern[bounds[k] + 1:bounds[k + 1]]
                    expanded.extend(expand_braces(prefix + option + suffix))
                return expanded
        i += 1
    return [pattern]


def _translate_segment(segment: str, dot: bool) -> str:
    """Translate one path segment (no slashes) into a regex fragment."""
    out: List[str] = []
    i = 0
    while i < len(segment):
        ch = segment[i]
        if ch == "\\" and i + 1 < len(segment):
            out.append(re.escape(segment[i + 1]))
            i += 2
        elif ch == "*":
            while i < len(segment) and segment[i] == "*":
                i += 1
            out.append("[^/]*")
        elif ch == "?":
            out.append("[^/]")
            i += 1
        elif ch == "[":
            j = i + 1
            if j < len(segment) and segment[j] in "!^":
                j += 1
            if j < len(segment) and segment[j] == "]":
                j += 1
            end = segment.find("]", j)
            if end == -1:
                out.append(re.escape(ch))
                i += 1
                continue
            body = segment[i + 1:end]
            negated = body[0] in "!^"
            if negated:
                body = body[1:]
            body = body.replace("\\", "\\\\").replace("]", "\\]")
            out.append(f"[^/{body}]" if negated else f"[{body}]")
            i = end + 1
        else:
            out.append(re.escape(ch))
            i += 1

    regex = "".join(out)
    if not dot and segment[:1] in ("*", "?", "["):
        regex = r"(?!\.)" + regex
    return regex


def _translate(pattern: str, dot: bool) -> str:
    """Translate a brace-free glob into a full-match regex."""
    any_segment = r"[^/]+" if dot else r"(?!\.)[^/]+"

    segments: List[str] = []
    for segment in pattern.split("/"):
        if segment == "**" and segments and segments[-1] == "**":
            continue
        segments.append(segment)

    regex = ""
    last_index = len(segments) - 1
    for i, segment in enumerate(segments):
        if segment == "**":
            if i == last_index:
                if i == 0:
                    regex += f"(?:{any_segment}(?:/{any_segment})*)?"
                else:
                    # "src/**" also matches "src" itself
                    regex = regex[:-1] + f"(?:/{any_segment})*"
            else:
                regex += f"(?:{any_segment}/)*"
        else:
            regex += _translate_segment(segment, dot)
            if i != last_index:
                regex += "/"
    return regex


@lru_cache(maxsize=1024)
def compile_pattern(pattern: str, dot: bool = False) -> Tuple[Tuple[Pattern, ...], bool]:
    """Compile a glob into regexes plus a negation flag (cached)."""
    negated = False
    while pattern.startswith("!"):
        negated = not negated
        pattern = pattern[1:]
    if pattern.startswith("./"):
        pattern = pattern[2:]

    regexes = tuple(re.compile(_translate(p, dot)) for p in expand_braces(pattern))
    return regexes, negated


def match_pattern(path: str, pattern: str, dot: bool = False) -> bool:
    """Return True if ``path`` matches the glob ``pattern``."""
    if path.startswith("./"):
        path = path[2:]
    regexes, negated = compile_pattern(pattern, dot)
    matched = any(regex.fullmatch(path) for regex in regexes)
    return matched != negated


def matches_any(path: str, patterns: Iterable[str], dot: bool = False) -> bool:
    """Return True if ``path`` matches at least one pattern."""
    return any(match_pattern(path, pattern, dot) for pattern in patterns)


def filter_matching(paths: Iterable[str], patterns: List[str], dot: bool = False) -> List[str]:
    """Paths matching any of ``patterns``, in input order."""
    return [path for path in paths if matches_any(path, patterns, dot)]


def is_excluded(path: str, patterns: Iterable[str]) -> bool:
    """Exclusion check; dotfiles are matched by wildcards here."""
    return matches_any(path, patterns, dot=True)


def validate_pattern(pattern: object) -> Result[str, ParseError]:
    """
    Check that a glob pattern is usable.

    Returns the normalised pattern (leading ``./`` stripped) or a
    ParseError for empty, absolute or unbalanced patterns.
    """
    if not isinstance(pattern, str):
        return Err(ParseError(repr(pattern), "Pattern must be a string"))

    normalized = pattern.strip()
    if normalized.startswith("./"):
        normalized = normalized[2:]
    if not normalized:
        return Err(ParseError(pattern, "Pattern must not be empty"))
    if normalized.startswith("/"):
        return Err(ParseError(pattern, "Pattern must be relative to the repository root"))

    brackets = 0
    braces = 0
    i = 0
    while i < len(normalized):
        ch = normalized[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "[":
            brackets += 1
        elif ch == "]" and brackets > 0:
            brackets -= 1
        elif ch == "{":
            braces += 1
        elif ch == "}":
            braces -= 1
            if braces < 0:
                return Err(ParseError(pattern, "Unbalanced braces"))
        i += 1

    if brackets:
        return Err(ParseError(pattern, "Unclosed character class"))
    if braces:
        return Err(ParseError(pattern, "Unbalanced braces"))
    return Ok(normalized)
