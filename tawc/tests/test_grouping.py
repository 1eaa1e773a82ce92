# tawc/tests/test_grouping.py
from tawc.config import AnalyzerConfig
from tawc.core import build_classifier
from tawc.dictionary import parse_dictionary
from tawc.grouping import analyze_groups, group_lines

def test_group_lines_concatenates_same_id_in_order():
    lines = "id1 happy sad\nid1 happy\nid2 joy".splitlines()
    groups = group_lines(lines)
    assert groups == {"id1": "happy sad happy", "id2": "joy"}
    assert list(groups) == ["id1", "id2"]

def test_first_appearance_order_of_ids():
    lines = ["b x", "a y", "b z", "c w"]
    assert list(group_lines(lines)) == ["b", "a", "c"]

def test_short_lines_contribute_nothing():
    lines = ["", "   ", "lonely", "id1 a", "id2", "id1   b\tc  "]
    groups = group_lines(lines)
    assert groups == {"id1": "a b c"}

def test_grouping_completeness():
    lines = ["x a b", "y c", "x d", "z", "y e f g"]
    groups = group_lines(lines)
    contributed = sum(len(l.split()) - 1 for l in lines if len(l.split()) >= 2)
    assert sum(len(t.split()) for t in groups.values()) == contributed

def test_analyze_groups_fresh_counts_shared_cache():
    rules, _ = parse_dictionary(["happy* posemo", "sad* negemo", "joy posemo"])
    cfg = AnalyzerConfig()
    clf = build_classifier(rules, cfg)
    groups = group_lines("id1 happy sad\nid1 happy\nid2 joy happy".splitlines())
    results = analyze_groups(groups, clf, cfg)
    assert dict(results["id1"]) == {"posemo": 2, "negemo": 1, "total": 3}
    assert dict(results["id2"]) == {"posemo": 2, "total": 2}
    # "happy" seen in id1 is a cache hit in id2
    assert clf.hits == 2
    assert clf.misses == 3
