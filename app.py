"""Console front end for the expression calculator."""
from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from typing import Iterable, List, TextIO

from config.runtime import RuntimeSettings
from engine.catalog import CATALOG
from engine.errors import (
    AllocationFailureError,
    CalculatorError,
    InvalidInputError,
    UndefinedResultError,
)
from tools.calculator import CalculatorTool

RESET = "\033[0m"
INFO = "\033[35m"
RESULT = "\033[32m"
ERROR = "\033[31m"

if not sys.stdout.isatty():
    RESET = INFO = RESULT = ERROR = ""

PROMPT = "Enter an arithmetic expression: "

VALUE_OPTIONS = ("--precision", "--log-mode")


def build_calculator(precision: int | None = None, log_mode: str | None = None) -> CalculatorTool:
    settings = RuntimeSettings.from_env()
    if precision is not None:
        settings = replace(settings, precision=precision)
    return CalculatorTool(settings=settings, log_mode=log_mode)


def run_expressions(calculator: CalculatorTool, expressions: Iterable[str], out: TextIO | None = None) -> int:
    out = out or sys.stdout
    status = 0
    for expression in expressions:
        try:
            evaluation = calculator.evaluate(expression)
        except CalculatorError as exc:
            print(f"{ERROR}Error:{RESET} {exc}", file=out, flush=True)
            status = 1
            continue
        if evaluation is None:
            print(f"{ERROR}Error:{RESET} empty expression", file=out, flush=True)
            status = 1
            continue
        print(f"{RESULT}Result:{RESET} {evaluation.text}", file=out, flush=True)
    return status


def run_session(calculator: CalculatorTool, stdin: TextIO | None = None, out: TextIO | None = None) -> int:
    """Read-eval-print loop; a blank line or end of file ends the session."""
    stdin = stdin or sys.stdin
    out = out or sys.stdout
    while True:
        print(PROMPT, end="", file=out, flush=True)
        line = stdin.readline()
        if not line:
            print(file=out, flush=True)
            return 0
        try:
            evaluation = calculator.evaluate(line)
        except InvalidInputError as exc:
            print(f"{ERROR}Invalid input:{RESET} {exc}", file=out, flush=True)
            continue
        except UndefinedResultError as exc:
            print(f"{ERROR}{exc}{RESET}", file=out, flush=True)
            continue
        except AllocationFailureError as exc:
            print(f"{ERROR}Fatal:{RESET} {exc}", file=out, flush=True)
            return 1
        except CalculatorError as exc:
            print(f"{ERROR}Error:{RESET} {exc}", file=out, flush=True)
            continue
        if evaluation is None:
            return 0
        print(f"{RESULT}Result:{RESET} {evaluation.text}", file=out, flush=True)


def print_functions(out: TextIO | None = None) -> None:
    out = out or sys.stdout
    print(f"{INFO}Functions:{RESET} {len(CATALOG)} functions, {len(CATALOG.names())} names", file=out, flush=True)
    for spec in CATALOG:
        aliases = ", ".join(CATALOG.aliases_of(spec.id))
        print(f"  {spec.name:<8} {spec.arity.describe():<20} aliases: {aliases}", file=out, flush=True)


def split_arguments(argv: List[str]) -> List[str]:
    """Move expressions behind "--" so a leading unary minus is not read as an option.

    An expression never starts with "--" (a forbidden pair), so every
    "--name" token is an option and "-h" is the only single-dash one.
    """
    options: List[str] = []
    expressions: List[str] = []
    args = iter(argv)
    for arg in args:
        if arg == "--":
            expressions.extend(args)
            break
        if arg == "-h" or arg.startswith("--"):
            options.append(arg)
            if arg in VALUE_OPTIONS:
                value = next(args, None)
                if value is not None:
                    options.append(value)
            continue
        expressions.append(arg)
    if expressions:
        return options + ["--"] + expressions
    return options


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Arithmetic expression calculator", allow_abbrev=False)
    parser.add_argument("expressions", nargs="*", help="Expressions to evaluate; omit for an interactive session")
    parser.add_argument("--precision", type=int, help="Fractional digits for non-integral results")
    parser.add_argument("--log-mode", choices=["off", "normal", "detail"], help="Calculator log verbosity")
    parser.add_argument("--detail", action="store_true", help="Shortcut for --log-mode detail")
    parser.add_argument("--functions", action="store_true", help="List the supported functions and exit")
    args = parser.parse_args(split_arguments(sys.argv[1:] if argv is None else list(argv)))
    if args.functions:
        print_functions()
        return
    log_mode = "detail" if args.detail else args.log_mode
    calculator = build_calculator(precision=args.precision, log_mode=log_mode)
    if args.expressions:
        status = run_expressions(calculator, args.expressions)
    else:
        status = run_session(calculator)
    if status:
        sys.exit(status)


if __name__ == "__main__":
    main()
