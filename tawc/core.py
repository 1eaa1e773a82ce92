"""
=============================================================================
Word classification and category counting
=============================================================================
"""

import re
from collections import Counter
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from .cache import ClassificationCache
from .config import AnalyzerConfig
from .dictionary import RuleSet

_NON_WORD = re.compile(r"\W")
_DIGITS = re.compile(r"[0-9]")
_WS = re.compile(r"\s+")

TOTAL = "total"
NO_MATCH: Tuple[str, ...] = ()

Number = Union[int, float]
ResultPairs = List[Tuple[str, Number]]


# --- Word -> categories (first match wins, cache-backed) ---
class Classifier:
    """
    Resolves a word to the categories of the first rule (dictionary order)
    that matches it. Later matching rules are never consulted.
    """

    def __init__(self, rules: RuleSet, cache: Optional[ClassificationCache] = None,
                 trace: Optional[Callable[[str, str], None]] = None):
        self.rules = rules
        self.cache = cache if cache is not None else ClassificationCache()
        self.trace = trace
        self.hits = 0
        self.misses = 0

    def lookup(self, word: str) -> Tuple[str, ...]:
        """Categories of the first matching rule, bypassing the cache."""
        for rule in self.rules:
            if rule.matches(word):
                return rule.categories
        return NO_MATCH

    def classify(self, word: str) -> Tuple[str, ...]:
        cats = self.cache.get(word)
        if cats is not None:
            self.cache.touch(word)
            self.hits += 1
        else:
            cats = self.lookup(word)
            self.cache.record(word, cats)
            self.misses += 1

        if self.trace is not None:
            for cat in cats:
                self.trace(word, cat)
        return cats


def print_match(word: str, category: str) -> None:
    print(f"{word} matches {category}")


def build_classifier(rules: RuleSet, config: AnalyzerConfig) -> Classifier:
    cache = ClassificationCache(config.cache_size)
    return Classifier(rules, cache, trace=print_match if config.trace else None)


# --- Tokenization ---
def sanitize(text: str) -> str:
    """Non-word characters and ASCII digits become spaces, whitespace collapsed."""
    text = _NON_WORD.sub(" ", text)
    text = _DIGITS.sub(" ", text)
    return _WS.sub(" ", text)


def tokenize(text: str, sanitize_input: bool = True) -> List[str]:
    if sanitize_input:
        text = sanitize(text)
    return [w for w in text.split() if w]


# --- Counting ---
def count_categories(tokens: Sequence[str], classifier: Classifier) -> Counter:
    """
    One increment per category per occurrence; unmatched words add nothing.
    Counter keeps first-seen order of the categories.
    """
    counter = Counter()
    for word in tokens:
        counter.update(classifier.classify(word))
    return counter


def count_total_words(tokens: Sequence[str]) -> int:
    return len(tokens)


def aggregate(text: str, classifier: Classifier, config: AnalyzerConfig) -> Tuple[Counter, int]:
    tokens = tokenize(text, config.sanitize)
    return count_categories(tokens, classifier), count_total_words(tokens)


def round_digits(value: float, digits: int) -> float:
    """Round to `digits` decimals, halves away from zero; negative digits leave the value as is."""
    if digits < 0:
        return value
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def to_percent(counts: Dict[str, int], total: int, digits: int = -1) -> Dict[str, float]:
    """count / total * 100 for each category; zero total words gives 0.0 everywhere."""
    if total == 0:
        return {cat: 0.0 for cat in counts}
    return {cat: round_digits(n / total * 100, digits) for cat, n in counts.items()}


def build_result(counts: Dict[str, int], total: int, config: AnalyzerConfig) -> ResultPairs:
    """
    [(category, value), ..., ("total", total)]
    Values are raw counts or percentages; "total" is never converted.
    """
    values = to_percent(counts, total, config.digits) if config.percent else dict(counts)
    pairs: ResultPairs = list(values.items())
    if config.sort:
        pairs = sort_result(pairs)
    pairs.append((TOTAL, total))
    return pairs


def sort_result(pairs: ResultPairs) -> ResultPairs:
    """Descending by value; ties keep their order, "total" stays last."""
    body = [p for p in pairs if p[0] != TOTAL]
    tail = [p for p in pairs if p[0] == TOTAL]
    return sorted(body, key=lambda p: p[1], reverse=True) + tail


def analyze_text(text: str, classifier: Classifier, config: AnalyzerConfig) -> ResultPairs:
    counts, total = aggregate(text, classifier, config)
    return build_result(counts, total, config)
