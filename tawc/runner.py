# -*- coding: utf-8 -*-
"""
tinyTAWC execution script
Example execution:
python -m tawc.runner path/to/dictionary.dic input.txt --percent --round 2
python -m tawc.runner path/to/dictionary.dic combined.txt --lines \
  --procs 4 --chunksize 16 --out ./results/counts.csv

If no input file is given, input data is read from STDIN.
"""

import sys
import argparse
from pathlib import Path
from typing import Dict, List, Optional
import platform
import multiprocessing as mp
import pandas as pd

from . import __version__
from .config import AnalyzerConfig, ConfigError, LoadError, parse_category_filter
from .core import TOTAL, Classifier, ResultPairs, analyze_text, build_classifier
from .dictionary import CategoryRegistry, RuleSet, load_dictionary
from .grouping import analyze_groups, group_lines

# Child process side processing
from .workers import init_worker, process_group

DOCUMENT_ID = "document"


def log_debug(config: AnalyzerConfig, msg: str):
    if config.verbose:
        print(f"[DEBUG] {msg}", file=sys.stderr)


def num_to_human(number: int) -> str:
    if number < 1000:
        return str(number)
    if number < 1000000:
        return f"{(number // 100) / 10}k"
    return f"{(number // 100000) / 10}M"


def get_ctx():
    """Determine start method based on platform. Use fork on Linux."""
    return mp.get_context("fork" if platform.system() == "Linux" else "spawn")


# --- Output rendering ---
def _fmt_value(value) -> str:
    return "0" if value is None else str(value)


def format_machine(pairs: ResultPairs, gid: Optional[str] = None) -> str:
    """"cat0:value0 cat1:value1 ... total:n", prefixed with "%id" in line-based mode."""
    body = " ".join(f"{cat}:{_fmt_value(v)}" for cat, v in pairs)
    return body if gid is None else f"%{gid} {body}"


def format_human(pairs: ResultPairs, registry: CategoryRegistry) -> List[str]:
    rows = []
    for cat, value in pairs:
        name = registry.name(cat)
        rows.append(f"{_fmt_value(value)} {cat}" + (f" ({name})" if name else ""))
    return rows


def render(results: Dict[str, ResultPairs], registry: CategoryRegistry,
           human: bool, line_based: bool) -> List[str]:
    out: List[str] = []
    if human:
        out.append("count | category | category name (if present)")
    for gid, pairs in results.items():
        if human:
            if line_based:
                out.append(f"%{gid}")
            out.extend(format_human(pairs, registry))
        else:
            out.append(format_machine(pairs, gid if line_based else None))
    return out


def results_to_frame(results: Dict[str, ResultPairs], percent: bool = False) -> pd.DataFrame:
    """One row per id, one column per category (first-seen order), "total" last."""
    rows = []
    for gid, pairs in results.items():
        rec = {"id": gid}
        rec.update(dict(pairs))
        rows.append(rec)
    df = pd.DataFrame(rows)
    if df.empty:
        return df
    cats = [c for c in df.columns if c not in ("id", TOTAL)]
    if cats:
        # Categories an id never used are 0, not missing
        df[cats] = df[cats].fillna(0)
        if not percent:
            df[cats] = df[cats].astype(int)
    return df[["id"] + cats + [TOTAL]]


# --- Running ---
def run_groups_parallel(groups: Dict[str, str],
                        dic_path: str,
                        config: AnalyzerConfig,
                        procs: int,
                        chunksize: int) -> Dict[str, ResultPairs]:
    """Each worker compiles the dictionary once and keeps its own cache."""
    print(f"[INFO] ids: {len(groups)} | procs={procs} chunksize={chunksize}", file=sys.stderr)
    ctx = get_ctx()
    results: Dict[str, ResultPairs] = {}
    with ctx.Pool(
        processes=procs,
        initializer=init_worker,
        initargs=(dic_path, config),
    ) as pool:
        # imap keeps the first-appearance order of the ids
        for gid, pairs in pool.imap(process_group, list(groups.items()), chunksize=chunksize):
            results[gid] = pairs
    return results


def run(text: str,
        rules: RuleSet,
        config: AnalyzerConfig,
        dic_path: Optional[str] = None,
        procs: int = 1,
        chunksize: int = 8) -> Dict[str, ResultPairs]:
    """Analyze one document, or every id group in line-based mode."""
    if not config.line_based:
        classifier = build_classifier(rules, config)
        results = {DOCUMENT_ID: analyze_text(text, classifier, config)}
        _log_stats(config, classifier, rules)
        return results

    groups = group_lines(text.splitlines())
    log_debug(config, f"Found {len(groups)} ids")
    if procs > 1 and dic_path is not None and len(groups) > 1:
        return run_groups_parallel(groups, dic_path, config, procs, chunksize)

    classifier = build_classifier(rules, config)
    results = analyze_groups(groups, classifier, config)
    _log_stats(config, classifier, rules)
    return results


def _log_stats(config: AnalyzerConfig, classifier: Classifier, rules: RuleSet):
    words = classifier.hits + classifier.misses
    log_debug(config, f"Classified {num_to_human(words)} words against {num_to_human(len(rules))} rules")
    log_debug(config, f"Cache: {classifier.hits} hits, {classifier.misses} misses, "
                      f"{len(classifier.cache)} entries, {classifier.cache.evictions} eviction passes, "
                      f"threshold={classifier.cache.threshold}")


def build_config(args) -> AnalyzerConfig:
    categories, mode = parse_category_filter(args.include, args.exclude)
    if args.procs < 1:
        raise ConfigError(f"--procs must be >= 1 (got {args.procs})")
    if args.chunksize < 1:
        raise ConfigError(f"--chunksize must be >= 1 (got {args.chunksize})")
    return AnalyzerConfig(
        sanitize=not args.raw,
        percent=args.percent,
        digits=args.round,
        categories=categories,
        filter_mode=mode,
        cache_size=args.cache_size,
        line_based=args.lines,
        trace=args.show_matching,
        verbose=args.verbose,
        sort=args.sort,
    ).validate()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="tinyTAWC - dictionary based word category counter")
    parser.add_argument("dictionary", type=str,
                        help="Path to LIWC compatible dictionary file (.dic)")
    parser.add_argument("input", type=str, nargs="?", default=None,
                        help="Input text file (default: STDIN)")
    parser.add_argument("-r", "--raw", action="store_true",
                        help="Use raw input data with no sanitizing")
    parser.add_argument("--include", type=str, default=None,
                        help='Include only the given categories ("cat0,cat1,...")')
    parser.add_argument("--exclude", type=str, default=None,
                        help='Include everything except the given categories ("cat0,cat1,...")')
    parser.add_argument("-p", "--percent", action="store_true",
                        help="Show output in percent of total words")
    parser.add_argument("--round", type=int, default=-1,
                        help="Round percent values to N digits (negative = no rounding)")
    parser.add_argument("-s", "--sort", action="store_true",
                        help="Sort output by count (desc)")
    parser.add_argument("-l", "--lines", action="store_true",
                        help="Line-based input: first token of each line is an id")
    parser.add_argument("--cache-size", type=int, default=10000,
                        help="Maximum number of cached words (0 disables the cache)")
    parser.add_argument("--human", action="store_true",
                        help="Show human-readable output")
    parser.add_argument("-m", "--show-matching", action="store_true",
                        help="Show every word and the category it matches")
    parser.add_argument("-d", "--verbose", action="store_true",
                        help="Show debug information")
    parser.add_argument("--out", type=str, default=None,
                        help="Also save results as CSV")
    parser.add_argument("--procs", type=int, default=1,
                        help="Number of parallel processes (line-based mode)")
    parser.add_argument("--chunksize", type=int, default=8,
                        help="chunksize for imap")
    parser.add_argument("-v", "--version", action="version",
                        version=f"tinyTAWC v{__version__} - Always sanity-check your results. Try --help for help.")
    return parser.parse_args(argv)


def read_input(path: Optional[str]) -> str:
    if path is None:
        return sys.stdin.read()
    p = Path(path)
    if not p.is_file():
        raise ConfigError(f"Input file does not exist or is not readable: {path}")
    try:
        return p.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigError(f"Input file is not UTF-8 encoded: {path} ({e})") from e


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        config = build_config(args)
        dic_path = str(Path(args.dictionary).resolve())
        log_debug(config, f'Dict file: "{dic_path}"')
        log_debug(config, f'Input file: "{args.input or "STDIN"}"')

        rules, registry = load_dictionary(dic_path, config)
        text = read_input(args.input)
    except (ConfigError, LoadError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    log_debug(config, f"Parsed {len(registry)} categories")
    log_debug(config, f"Parsed {len(rules)} word rules")
    if not rules:
        print("[WARN] dictionary has no usable rules; every word counts as unmatched", file=sys.stderr)

    results = run(text, rules, config, dic_path=dic_path,
                  procs=args.procs, chunksize=args.chunksize)

    for line in render(results, registry, human=args.human, line_based=config.line_based):
        print(line)

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        df = results_to_frame(results, percent=config.percent)
        df.to_csv(out_path, index=False)
        print(f"[OK] saved: {out_path} ({len(df)} rows)", file=sys.stderr)

    log_debug(config, "Done")
    return 0


if __name__ == "__main__":
    sys.exit(main())
