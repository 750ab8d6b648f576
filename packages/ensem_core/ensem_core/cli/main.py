"""ensem_core.cli.main

Entry point for the `ensem` CLI.

Commands:
- ensem calc FILE
- ensem print FILE
- ensem op {add,sub,mul,div,atan2,cmplx,concat} A B --out OUT
- ensem unary {neg,conj,real,imag,norm2,timesi,sqrt,exp,log} FILE --out OUT
- ensem shift FILE N --out OUT [--circular]
- ensem extract FILE FIRST LAST --out OUT
- ensem replicate FILE TIMES --out OUT
"""

from __future__ import annotations

import argparse
import logging
import sys

from ensem_core.analysis.estimator import estimate
from ensem_core.analysis.report import format_calc, format_ensemble
from ensem_core.config import EnsemConfig, load_config
from ensem_core.core import arithmetic, timeslice
from ensem_core.errors import EnsemError
from ensem_core.io.ensemble_file import read_ensemble, write_ensemble

logger = logging.getLogger(__name__)

BINARY_OPS = {
    "add": arithmetic.add,
    "sub": arithmetic.subtract,
    "mul": arithmetic.multiply,
    "div": arithmetic.divide,
    "atan2": arithmetic.arctan2,
    "cmplx": arithmetic.cmplx,
    "concat": timeslice.concatenate,
}

UNARY_OPS = {
    "neg": arithmetic.negate,
    "conj": arithmetic.conjugate,
    "real": arithmetic.real_part,
    "imag": arithmetic.imag_part,
    "norm2": arithmetic.norm2,
    "timesi": arithmetic.times_i,
    "sqrt": arithmetic.sqrt,
    "exp": arithmetic.exp,
    "log": arithmetic.log,
}


def _read(path: str, cfg: EnsemConfig):
    return read_ensemble(path, resampling=cfg.resampling)


def _write(path: str, ens, cfg: EnsemConfig) -> None:
    write_ensemble(path, ens, precision=cfg.write_precision)
    logger.info("wrote %s", path)


def cmd_calc(args, cfg: EnsemConfig) -> None:
    sys.stdout.write(format_calc(estimate(_read(args.file, cfg))))


def cmd_print(args, cfg: EnsemConfig) -> None:
    sys.stdout.write(format_ensemble(_read(args.file, cfg), precision=cfg.write_precision))


def cmd_op(args, cfg: EnsemConfig) -> None:
    result = BINARY_OPS[args.op](_read(args.a, cfg), _read(args.b, cfg))
    _write(args.out, result, cfg)


def cmd_unary(args, cfg: EnsemConfig) -> None:
    _write(args.out, UNARY_OPS[args.op](_read(args.file, cfg)), cfg)


def cmd_shift(args, cfg: EnsemConfig) -> None:
    fn = timeslice.cshift if args.circular else timeslice.shift
    _write(args.out, fn(_read(args.file, cfg), args.amount), cfg)


def cmd_extract(args, cfg: EnsemConfig) -> None:
    _write(args.out, timeslice.extract(_read(args.file, cfg), args.first, args.last), cfg)


def cmd_replicate(args, cfg: EnsemConfig) -> None:
    _write(args.out, timeslice.replicate(_read(args.file, cfg), args.times), cfg)


def build_parser():
    p = argparse.ArgumentParser(prog="ensem", description="Jackknife/bootstrap ensemble arithmetic.")
    p.add_argument("--config", type=str, default=None, help="Path to YAML config file")
    p.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_calc = sub.add_parser("calc", help="Print mean and error per time slice")
    p_calc.add_argument("file", help="Ensemble file")
    p_calc.set_defaults(func=cmd_calc)

    p_print = sub.add_parser("print", help="Echo an ensemble in file layout")
    p_print.add_argument("file", help="Ensemble file")
    p_print.set_defaults(func=cmd_print)

    p_op = sub.add_parser("op", help="Combine two ensembles")
    p_op.add_argument("op", choices=sorted(BINARY_OPS))
    p_op.add_argument("a", help="First ensemble file")
    p_op.add_argument("b", help="Second ensemble file")
    p_op.add_argument("--out", required=True, help="Output ensemble file")
    p_op.set_defaults(func=cmd_op)

    p_un = sub.add_parser("unary", help="Apply a unary operation")
    p_un.add_argument("op", choices=sorted(UNARY_OPS))
    p_un.add_argument("file", help="Ensemble file")
    p_un.add_argument("--out", required=True, help="Output ensemble file")
    p_un.set_defaults(func=cmd_unary)

    p_sh = sub.add_parser("shift", help="Shift along the time axis")
    p_sh.add_argument("file", help="Ensemble file")
    p_sh.add_argument("amount", type=int, help="Shift amount (may be negative)")
    p_sh.add_argument("--circular", action="store_true", help="Wrap around instead of zero-filling")
    p_sh.add_argument("--out", required=True, help="Output ensemble file")
    p_sh.set_defaults(func=cmd_shift)

    p_ex = sub.add_parser("extract", help="Extract an inclusive range of time slices")
    p_ex.add_argument("file", help="Ensemble file")
    p_ex.add_argument("first", type=int)
    p_ex.add_argument("last", type=int)
    p_ex.add_argument("--out", required=True, help="Output ensemble file")
    p_ex.set_defaults(func=cmd_extract)

    p_rep = sub.add_parser("replicate", help="Repeat every bin TIMES times")
    p_rep.add_argument("file", help="Ensemble file")
    p_rep.add_argument("times", type=int)
    p_rep.add_argument("--out", required=True, help="Output ensemble file")
    p_rep.set_defaults(func=cmd_replicate)

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        cfg = load_config(args.config)
        level = logging.DEBUG if args.verbose else cfg.log_level
        logging.basicConfig(level=level, format="%(levelname)s %(message)s")
        args.func(args, cfg)
    except EnsemError as exc:
        print(f"ensem: error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
