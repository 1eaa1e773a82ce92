# -*- coding: utf-8 -*-
"""
Line-based mode: every input line is "<id> <text...>".
Lines sharing an id are concatenated (input order) and counted as one group.
"""

from typing import Dict, Iterable

from .config import AnalyzerConfig
from .core import Classifier, ResultPairs, analyze_text


def group_lines(lines: Iterable[str]) -> Dict[str, str]:
    """
    Return {id: text} in first-appearance order of the ids.
    Lines with fewer than two tokens contribute nothing.
    """
    groups: Dict[str, str] = {}
    for line in lines:
        parts = line.split()
        if len(parts) < 2:
            continue
        gid, rest = parts[0], " ".join(parts[1:])
        groups[gid] = f"{groups[gid]} {rest}" if gid in groups else rest
    return groups


def analyze_groups(groups: Dict[str, str], classifier: Classifier,
                   config: AnalyzerConfig) -> Dict[str, ResultPairs]:
    """Fresh counts per id; the classifier (and its cache) is shared by all ids."""
    return {gid: analyze_text(text, classifier, config) for gid, text in groups.items()}
