# tawc/tests/conftest.py
import textwrap
import pytest

from tawc.config import AnalyzerConfig
from tawc.core import build_classifier
from tawc.dictionary import load_dictionary

@pytest.fixture
def emo_dic_path(tmp_path):
    """
    Minimal LIWC-like dictionary (categories: posemo=1, negemo=2, i=3).
    Uses % to delimit the category block. Includes wildcard (*) and /regex/ rules.
    """
    dic_text = textwrap.dedent("""\
        %
        1    posemo
        2    negemo
        3    i
        %
        % single-line comment
        happy*    1
        sad*      2
        /^joy(ful)?$/i    1
        i    3
        me   3
    """)
    p = tmp_path / "emo.dic"
    p.write_text(dic_text, encoding="utf-8")
    return str(p)

@pytest.fixture
def emo_rules(emo_dic_path):
    rules, _ = load_dictionary(emo_dic_path)
    return rules

@pytest.fixture
def classifier(emo_rules):
    return build_classifier(emo_rules, AnalyzerConfig())
