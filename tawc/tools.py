# -*- coding: utf-8 -*-
"""
Input preparation helpers

Modes:
  clean    Sanitize the input file the same way the analyzer does
  combine  Combine the given input files into one line-based file ("<name> <text>" per file)

Example:
python -m tawc.tools clean --keeplines transcript.txt
python -m tawc.tools combine speaker_a.txt speaker_b.txt > combined.txt
"""

import re
import sys
import argparse
from pathlib import Path
from typing import Iterable, List, Optional

from .core import sanitize

_WS = re.compile(r"\s+")


def clean_text(text: str) -> str:
    return sanitize(text)


def clean_lines(lines: Iterable[str]) -> List[str]:
    """Sanitize each line separately (line breaks are kept)."""
    return [sanitize(line) for line in lines]


def group_id_for(path) -> str:
    """File name without directories and whitespace, used as the line id."""
    return _WS.sub("", Path(path).name)


def combine_files(paths: Iterable[str]) -> str:
    lines = []
    for path in paths:
        p = Path(path)
        if not p.is_file():
            raise FileNotFoundError(f"Input file does not exist or is not readable: {path}")
        lines.append(f"{group_id_for(p)} {sanitize(p.read_text(encoding='utf-8'))}")
    return "".join(line + "\n" for line in lines)


def _read_source(path: Optional[str]) -> List[str]:
    if path is None:
        return sys.stdin.read().splitlines()
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Input file does not exist or is not readable: {path}")
    return p.read_text(encoding="utf-8").splitlines()


def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="tinyTAWC input preparation tools")
    sub = ap.add_subparsers(dest="mode", required=True)

    p_clean = sub.add_parser("clean", help="Sanitize the input file the same way tinyTAWC would")
    p_clean.add_argument("input", nargs="?", default=None, help="Input file (default: STDIN)")
    p_clean.add_argument("--keeplines", action="store_true", help="Keep linebreaks when cleaning")

    p_combine = sub.add_parser("combine", help="Combine the given input files into a line-based one")
    p_combine.add_argument("inputs", nargs="+", help="Input files (STDIN is not supported)")
    return ap.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        if args.mode == "clean":
            lines = _read_source(args.input)
            if args.keeplines:
                print("\n".join(clean_lines(lines)))
            else:
                print(clean_text(" ".join(lines)))
        else:
            sys.stdout.write(combine_files(args.inputs))
    except FileNotFoundError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
