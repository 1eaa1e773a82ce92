# -*- coding: utf-8 -*-
"""
Child process side of parallel line-based runs.

◎ Roles
- Initialize each child process once (load and compile the dictionary, create a private cache)
- Count one id group (text -> tokens -> classification -> result pairs)

Every worker owns its own ClassificationCache; nothing mutable is shared
between processes, results are merged by the parent.
"""

from typing import Optional, Tuple

from .config import AnalyzerConfig
from .core import Classifier, ResultPairs, analyze_text, build_classifier
from .dictionary import load_dictionary

# ---- Resources held per child process (process-wide global) ----
_WORKER_CLASSIFIER: Optional[Classifier] = None
_WORKER_CONFIG: Optional[AnalyzerConfig] = None


def init_worker(dic_path: str, config: AnalyzerConfig):
    """
    Called once at each process startup. Load the dictionary here.
    """
    global _WORKER_CLASSIFIER, _WORKER_CONFIG

    rules, _ = load_dictionary(dic_path, config)
    _WORKER_CONFIG = config
    _WORKER_CLASSIFIER = build_classifier(rules, config)


def process_group(item: Tuple[str, str]) -> Tuple[str, ResultPairs]:
    """
    item: (id, text)
    return: (id, [(category, value), ..., ("total", n)])
    """
    assert _WORKER_CLASSIFIER is not None and _WORKER_CONFIG is not None
    gid, text = item
    return gid, analyze_text(text, _WORKER_CLASSIFIER, _WORKER_CONFIG)
