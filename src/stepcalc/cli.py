"""Command-line interface for stepcalc."""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from stepcalc.errors import EvalError, ParseError, TemplateError
from stepcalc.numeric import DEFAULT_CONFIG, ArithmeticConfig

if TYPE_CHECKING:
    from stepcalc.api import Calculation

CONFIG_FILENAME = "stepcalc.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    expression: str
    variables: dict[str, str]
    arithmetic: ArithmeticConfig
    show_steps: bool
    show_terms: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="stepcalc",
        description="Exact decimal calculator with step-by-step output",
    )
    p.add_argument(
        "expression",
        nargs="?",
        default=None,
        help="Expression to evaluate (default or '-': read from stdin)",
    )
    p.add_argument(
        "-e",
        "--var",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Define a template variable used as {{ NAME }} (repeatable)",
    )
    p.add_argument(
        "--vars",
        metavar="FILE",
        help="File of 'name = value' variable definitions",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_FILENAME})",
    )
    p.add_argument(
        "--places",
        type=int,
        default=None,
        metavar="N",
        help=f"Fractional digits kept by division (default: {DEFAULT_CONFIG.places})",
    )
    p.add_argument(
        "--max-exponent",
        type=int,
        default=None,
        metavar="N",
        help=f"Largest allowed exponent magnitude (default: {DEFAULT_CONFIG.max_exponent})",
    )
    p.add_argument("--no-steps", action="store_true", help="Do not print intermediate steps")
    p.add_argument("--terms", action="store_true", help="Print top-level terms with running totals")
    p.add_argument("--debug", action="store_true", help="Dump AST to stderr")
    return p


def parse_var_arg(s: str) -> tuple[str, str]:
    """Parse a NAME=VALUE string into (name, value)."""
    if "=" not in s:
        raise argparse.ArgumentTypeError(f"invalid variable format (expected NAME=VALUE): {s}")
    name, _, value = s.partition("=")
    name = name.strip()
    if not name:
        raise argparse.ArgumentTypeError(f"invalid variable format (empty name): {s}")
    return name, value.strip()


def load_config(config_path: Path | None, base_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else base_dir / CONFIG_FILENAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace, base_dir: Path | None = None) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    from stepcalc.template import parse_variables

    if base_dir is None:
        base_dir = Path.cwd()

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, base_dir)

    # Variables: config < --vars file < -e flags
    variables: dict[str, str] = {}
    cfg_vars = config.get("variables")
    if isinstance(cfg_vars, dict):
        for k, v in cfg_vars.items():
            variables[str(k)] = str(v)
    if args.vars:
        variables.update(parse_variables(Path(args.vars).read_text(encoding="utf-8")))
    for raw in args.var:
        name, value = parse_var_arg(raw)
        variables[name] = value

    # Arithmetic: config < CLI
    places = DEFAULT_CONFIG.places
    max_exponent = DEFAULT_CONFIG.max_exponent
    cfg_arith = config.get("arithmetic")
    if isinstance(cfg_arith, dict):
        cfg_places = cfg_arith.get("places")
        if isinstance(cfg_places, int):
            places = cfg_places
        cfg_max = cfg_arith.get("max_exponent")
        if isinstance(cfg_max, int):
            max_exponent = cfg_max
    if args.places is not None:
        places = args.places
    if args.max_exponent is not None:
        max_exponent = args.max_exponent
    try:
        arithmetic = ArithmeticConfig(places=places, max_exponent=max_exponent)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None

    # Display: config < CLI
    show_steps = True
    show_terms = False
    cfg_display = config.get("display")
    if isinstance(cfg_display, dict):
        if isinstance(cfg_display.get("steps"), bool):
            show_steps = cfg_display["steps"]
        if isinstance(cfg_display.get("terms"), bool):
            show_terms = cfg_display["terms"]
    if args.no_steps:
        show_steps = False
    if args.terms:
        show_terms = True

    if args.expression is None or args.expression == "-":
        expression = sys.stdin.read()
    else:
        expression = args.expression

    return CliOptions(
        expression=expression,
        variables=variables,
        arithmetic=arithmetic,
        show_steps=show_steps,
        show_terms=show_terms,
        debug=args.debug,
    )


def run(options: CliOptions) -> Calculation:
    """Calculate the expression described by options."""
    from stepcalc import calculate
    from stepcalc.debug import dump_ast

    calc = calculate(options.expression, options.variables, options.arithmetic)
    if options.debug:
        dump_ast(calc.ast)
    return calc


def render_result(calc: Calculation, options: CliOptions) -> str:
    """Format a calculation as plain text for the terminal."""
    from stepcalc.formatting import format_number

    lines = [f"= {calc.display}"]
    if options.show_steps and calc.steps:
        lines.append("steps:")
        for i, step in enumerate(calc.steps, start=1):
            lines.append(f"  {i}. {step}")
    if options.show_terms:
        lines.append("terms:")
        for term in calc.terms:
            lines.append(
                f"  {term.index}. {term.text} = {format_number(term.value)}"
                f"  (running total {format_number(term.running_total)})"
            )
    return "\n".join(lines) + "\n"


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except TemplateError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    try:
        calc = run(options)
    except (ParseError, TemplateError) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except EvalError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    sys.stdout.write(render_result(calc, options))
    return 0
