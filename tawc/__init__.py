# tawc/__init__.py
__version__ = "1.4.0"

from .config import AnalyzerConfig, ConfigError, LoadError
from .dictionary import CategoryRegistry, Rule, load_dictionary, parse_dictionary
from .cache import ClassificationCache
from .core import Classifier, aggregate, analyze_text, build_classifier, build_result, tokenize, to_percent
from .grouping import analyze_groups, group_lines
__all__ = ["AnalyzerConfig", "ConfigError", "LoadError",
           "CategoryRegistry", "Rule", "load_dictionary", "parse_dictionary",
           "ClassificationCache",
           "Classifier", "aggregate", "analyze_text", "build_classifier", "build_result",
           "tokenize", "to_percent",
           "analyze_groups", "group_lines"]
