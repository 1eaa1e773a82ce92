# -*- coding: utf-8 -*-
"""
Analyzer configuration and error types.

All switches of a run live in one frozen AnalyzerConfig that is passed to
each component entry point (dictionary compiler, aggregator, runner).
"""

from dataclasses import dataclass, replace
from typing import FrozenSet, Iterable, Optional

DEFAULT_CACHE_SIZE = 10000

FILTER_INCLUDE = "include"
FILTER_EXCLUDE = "exclude"


class LoadError(ValueError):
    """A dictionary line could not be compiled (or the dictionary could not be read)."""


class ConfigError(ValueError):
    """Invalid configuration input, detected before the dictionary is loaded."""


@dataclass(frozen=True)
class AnalyzerConfig:
    sanitize: bool = True            # False = raw mode (whitespace split only)
    percent: bool = False            # Convert counts to % of total words
    digits: int = -1                 # Rounding for percent values (<0 = no rounding)
    categories: Optional[FrozenSet[str]] = None   # include/exclude set (codes or names)
    filter_mode: str = FILTER_INCLUDE             # include | exclude
    cache_size: int = DEFAULT_CACHE_SIZE          # 0 disables the cache
    line_based: bool = False         # Group input lines by leading id
    trace: bool = False              # Print every word and the category it matches
    verbose: bool = False            # Debug output on stderr
    sort: bool = False               # Sort categories by value (desc)

    def validate(self) -> "AnalyzerConfig":
        if self.filter_mode not in (FILTER_INCLUDE, FILTER_EXCLUDE):
            raise ConfigError(f"Unknown filter mode '{self.filter_mode}' (expected include or exclude)")
        if self.categories is not None and not self.categories:
            raise ConfigError(f"--{self.filter_mode} needs at least one category")
        if self.cache_size < 0:
            raise ConfigError(f"Cache size must be >= 0 (got {self.cache_size})")
        return self

    def with_filter(self, categories: Optional[Iterable[str]], mode: str) -> "AnalyzerConfig":
        cats = None if categories is None else frozenset(categories)
        return replace(self, categories=cats, filter_mode=mode).validate()

    def keeps_category(self, code: str, name: Optional[str] = None) -> bool:
        """True when the category survives the include/exclude filter."""
        if self.categories is None:
            return True
        selected = code in self.categories or (name is not None and name in self.categories)
        return selected == (self.filter_mode == FILTER_INCLUDE)


def parse_category_filter(include: Optional[str], exclude: Optional[str]):
    """
    Turn --include / --exclude option values ("cat0,cat1,...") into (set, mode).
    Returns (None, "include") when neither is given.
    """
    if include is not None and exclude is not None:
        raise ConfigError("--include and --exclude cannot be used together")
    raw, mode = (include, FILTER_INCLUDE) if include is not None else (exclude, FILTER_EXCLUDE)
    if raw is None:
        return None, FILTER_INCLUDE

    cats = [c.strip() for c in raw.split(",")]
    if not cats or any(not c for c in cats):
        raise ConfigError(f"--{mode} expects a comma separated category list, got '{raw}'")
    return frozenset(cats), mode
