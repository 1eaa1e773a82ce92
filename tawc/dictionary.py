# -*- coding: utf-8 -*-
"""
=============================================================================
Dictionary loading and pattern compilation
=============================================================================

Dictionary format (LIWC compatible):

    %
    1   posemo
    2   negemo
    %
    happy*      1
    /^joy(ful)?$/i  1
    sad*        2

- A line holding only "%" opens / closes a category block.
- Inside a block: "<code> <name>" category map lines.
- Outside a block: "<pattern> <cat> [<cat> ...]" rule lines, "%..." comments.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .config import AnalyzerConfig, LoadError

COMMENT_FLAG = "%"

_WS = re.compile(r"\s+")
_REGEX_TOKEN = re.compile(r"^/(.*)/([ix]*)$")

# Trailing flags accepted after /regex/
_REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "x": re.VERBOSE,
}


class ParseState(Enum):
    SCANNING_RULES = "rules"
    SCANNING_CATEGORIES = "categories"


# --- Matchers (tagged variants behind matches()) ---
@dataclass(frozen=True)
class LiteralWildcard:
    """Whole-word, case-insensitive match; "*" stands for any run of characters."""
    pattern: str
    regex: "re.Pattern"

    @classmethod
    def compile(cls, pattern: str) -> "LiteralWildcard":
        # Escape everything except "*" which becomes a wildcard
        rx = "^" + re.escape(pattern).replace(r"\*", ".*") + "$"
        return cls(pattern, re.compile(rx, re.IGNORECASE))

    def matches(self, word: str) -> bool:
        return self.regex.fullmatch(word) is not None


@dataclass(frozen=True)
class FullRegex:
    """/regex/flags rule; unanchored unless the expression anchors itself."""
    pattern: str
    regex: "re.Pattern"

    @classmethod
    def compile(cls, pattern: str) -> "FullRegex":
        m = _REGEX_TOKEN.match(pattern)
        if m is None:
            raise ValueError(f"not a /regex/ token: {pattern}")
        body, letters = m.group(1), m.group(2)
        flags = 0
        for letter in letters:
            if letter not in _REGEX_FLAGS:
                raise ValueError(f"unsupported regex flag '{letter}'")
            flags |= _REGEX_FLAGS[letter]
        return cls(pattern, re.compile(body, flags))

    def matches(self, word: str) -> bool:
        return self.regex.search(word) is not None


Matcher = Union[LiteralWildcard, FullRegex]


def compile_pattern(token: str) -> Matcher:
    """Regex when delimited by slashes, wildcard literal otherwise."""
    if _REGEX_TOKEN.match(token):
        return FullRegex.compile(token)
    return LiteralWildcard.compile(token)


@dataclass(frozen=True)
class Rule:
    matcher: Matcher
    categories: Tuple[str, ...]
    line_no: int = 0

    def matches(self, word: str) -> bool:
        return self.matcher.matches(word)


RuleSet = Tuple[Rule, ...]


class CategoryRegistry:
    """Category code -> display name (codes without a name map to None)."""

    def __init__(self, names: Optional[Dict[str, str]] = None):
        self._names: Dict[str, str] = dict(names or {})

    def name(self, code: str) -> Optional[str]:
        return self._names.get(code)

    def codes(self) -> List[str]:
        return list(self._names)

    def items(self):
        return self._names.items()

    def __contains__(self, code) -> bool:
        return code in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"CategoryRegistry({self._names!r})"


def clean_line(line: str) -> str:
    """Strip trailing whitespace and collapse whitespace runs."""
    return _WS.sub(" ", line.rstrip())


def _split_dictionary(lines: Iterable[str]):
    """
    Run the two-state scanner over the raw lines.
    return: (cat_map, [(line_no, pattern, [cat codes...]), ...])
    """
    cat_map: Dict[str, str] = {}
    raw_rules: List[Tuple[int, str, List[str]]] = []
    state = ParseState.SCANNING_RULES

    for line_no, line in enumerate(lines, 1):
        clean = clean_line(line)

        if clean == COMMENT_FLAG:
            state = (ParseState.SCANNING_CATEGORIES if state is ParseState.SCANNING_RULES
                     else ParseState.SCANNING_RULES)
            continue

        parts = clean.split()
        if not parts:
            continue

        if state is ParseState.SCANNING_CATEGORIES:
            if len(parts) > 1:
                cat_map[parts[0]] = " ".join(parts[1:])
            continue

        if clean.startswith(COMMENT_FLAG):
            continue  # single-line comment
        pattern, cats = parts[0], parts[1:]
        if not cats:
            raise LoadError(f"line {line_no}: rule '{clean}' has no category")
        raw_rules.append((line_no, pattern, cats))

    return cat_map, raw_rules


def build_rules(raw_rules, registry: CategoryRegistry, config: AnalyzerConfig) -> RuleSet:
    """
    raw_rules: [(line_no, pattern, [cat codes...]), ...]
    return: rules in dictionary order, filtered by config.categories
    """
    compiled: List[Rule] = []
    for line_no, pattern, cats in raw_rules:
        try:
            matcher = compile_pattern(pattern)
        except (re.error, ValueError) as e:
            raise LoadError(f"line {line_no}: invalid pattern '{pattern}' ({e})") from e

        # Keep only selected categories (by code or by display name)
        kept = tuple(dict.fromkeys(c for c in cats if config.keeps_category(c, registry.name(c))))
        if not kept:
            continue
        compiled.append(Rule(matcher, kept, line_no))
    return tuple(compiled)


def parse_dictionary(lines: Iterable[str], config: Optional[AnalyzerConfig] = None) -> Tuple[RuleSet, CategoryRegistry]:
    config = config or AnalyzerConfig()
    cat_map, raw_rules = _split_dictionary(lines)
    registry = CategoryRegistry(cat_map)
    return build_rules(raw_rules, registry, config), registry


def load_dictionary(path, config: Optional[AnalyzerConfig] = None) -> Tuple[RuleSet, CategoryRegistry]:
    try:
        with open(path, encoding="utf-8") as f:
            lines = f.read().splitlines()
    except OSError as e:
        raise LoadError(f"Dictionary does not exist or is not readable: {path}") from e
    except UnicodeDecodeError as e:
        raise LoadError(f"Dictionary is not UTF-8 encoded: {path} ({e})") from e
    return parse_dictionary(lines, config)
