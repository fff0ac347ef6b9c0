#!/usr/bin/env python3
"""
Build start-codon and coding-ORF datasets from annotated genomes.

Commands:
  orfsets strain GENOME_DIR [-n 2] [--fuzz 2.0]          random pegs, balanced
  orfsets stest  GENOME_FILE                              every peg, unbalanced
  orfsets otrain GENOME_DIR [-n 3] [-w 5000] [--fuzz 2.0] random regions, balanced

Common options: --left/--right window spans (default 52/20), -o output file
(default stdout), --config YAML defaults, --seed, --summary JSON, -v.
"""
from __future__ import annotations

import argparse
import random
from typing import List, Optional

from .config import RunConfig, build_config
from .errors import OrfSetError
from .genome import iter_genomes, load_genome
from .logutil import get_logger
from .metrics_io import write_run_summary
from .samplers import SAMPLERS
from .writer import BalancedLabelWriter, RunCounters

OPTION_FIELDS = ("num_left", "num_right", "num", "width", "fuzz", "seed", "output", "summary", "log_file")


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--left", dest="num_left", type=int, default=None, help="positions left of the candidate base (default 52)")
    common.add_argument("--right", dest="num_right", type=int, default=None, help="positions right of the candidate base (default 20)")
    common.add_argument("-o", "--output", default=None, help="output file (default stdout)")
    common.add_argument("--config", default=None, help="YAML file of option defaults")
    common.add_argument("--seed", type=int, default=None)
    common.add_argument("--summary", default=None, help="merge run counts into this JSON file")
    common.add_argument("--log-file", dest="log_file", default=None)
    common.add_argument("-v", "--verbose", action="store_true", default=None)

    ap = argparse.ArgumentParser(prog="orfsets", description="Labeled start/ORF datasets from annotated genomes")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("strain", parents=[common], help="start training set from random pegs")
    p.add_argument("input", help="genome directory (or one genome file)")
    p.add_argument("-n", "--num", "--pegs", dest="num", type=int, default=None, help="pegs per genome (default 2)")
    p.add_argument("--fuzz", type=float, default=None, help="allowed majority:minority ratio, 0 disables (default 2.0)")

    p = sub.add_parser("stest", parents=[common], help="start testing set from every peg of one genome")
    p.add_argument("input", help="genome file")

    p = sub.add_parser("otrain", parents=[common], help="coding-ORF training set from random regions")
    p.add_argument("input", help="genome directory (or one genome file)")
    p.add_argument("-n", "--num", dest="num", type=int, default=None, help="regions per genome (default 3)")
    p.add_argument("-w", "--width", dest="width", type=int, default=None, help="region width, at least 1000 (default 5000)")
    p.add_argument("--fuzz", type=float, default=None, help="allowed majority:minority ratio, 0 disables (default 2.0)")
    return ap


def run(cfg: RunConfig) -> RunCounters:
    """Execute one validated run and return its counters."""
    genomes = [load_genome(cfg.input)] if cfg.command == "stest" else iter_genomes(cfg.input)
    rng = random.Random(cfg.seed)
    counters = RunCounters()
    sampler_cls = SAMPLERS[cfg.command]
    kwargs = {"num_left": cfg.num_left, "num_right": cfg.num_right, "rng": rng}
    if cfg.command in ("strain", "otrain"):
        kwargs["num"] = cfg.num
    if cfg.command == "otrain":
        kwargs["width"] = cfg.width
    with BalancedLabelWriter.open(cfg.output, cfg.fuzz, counters, rng) as writer:
        sampler_cls(writer, **kwargs).run(genomes)
    if cfg.summary:
        write_run_summary(cfg.summary, cfg.command, cfg.to_dict(), counters.to_dict())
    return counters


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    log = get_logger(verbose=bool(args.verbose), log_file=args.log_file)
    overrides = {k: getattr(args, k, None) for k in OPTION_FIELDS}
    overrides["verbose"] = args.verbose
    try:
        cfg = build_config(args.command, args.input, overrides, args.config)
        if cfg.verbose or cfg.log_file != args.log_file:
            log = get_logger(verbose=cfg.verbose, log_file=cfg.log_file)
        log.debug("Options: %s", cfg.to_dict())
        run(cfg)
    except OrfSetError as exc:
        log.error("[error] %s", exc)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
