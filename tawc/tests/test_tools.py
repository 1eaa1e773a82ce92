# tawc/tests/test_tools.py
import pytest

from tawc import tools
from tawc.grouping import group_lines

def test_clean_text_matches_analyzer_sanitizing():
    assert tools.clean_text("Hi, you2!\n(ok)") == "Hi you ok "

def test_clean_lines_keeps_line_structure():
    assert tools.clean_lines(["a,b", "c1d"]) == ["a b", "c d"]

def test_combine_files_builds_line_based_input(tmp_path):
    a = tmp_path / "speaker a.txt"
    b = tmp_path / "b.txt"
    a.write_text("Happy, happy!\nday", encoding="utf-8")
    b.write_text("sad", encoding="utf-8")
    out = tools.combine_files([str(a), str(b)])
    groups = group_lines(out.splitlines())
    assert groups == {"speakera.txt": "Happy happy day", "b.txt": "sad"}

def test_combine_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        tools.combine_files([str(tmp_path / "nope.txt")])

def test_main_clean_keeplines(tmp_path, capsys):
    f = tmp_path / "in.txt"
    f.write_text("a-b\nc", encoding="utf-8")
    assert tools.main(["clean", "--keeplines", str(f)]) == 0
    assert capsys.readouterr().out == "a b\nc\n"

def test_main_combine_missing_file_fails(tmp_path, capsys):
    assert tools.main(["combine", str(tmp_path / "nope.txt")]) == 1
    assert "[ERROR]" in capsys.readouterr().err
