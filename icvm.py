#!/usr/bin/env python3
"""
icvm - Intcode VM command-line driver

One CLI for running Intcode programs outside a puzzle driver:
    icvm run     - Load a program, patch it, queue input, run it
    icvm search  - Find the noun/verb patch that leaves a target at address 0

Usage:
    python icvm.py <command> [options]
    python icvm.py <command> --help

Examples:
    python icvm.py run diagnostic.txt -i 5
    python icvm.py run gravity.txt --noun 12 --verb 2 --dump 0
    python icvm.py run springdroid.txt --ascii --interactive
    python icvm.py search gravity.txt --target 19690720

Exit codes:
    0  program finished
    1  bad arguments or unreadable program file
    2  fatal VM error (unknown opcode, bad mode, ...)
    3  program is waiting for input that was never supplied
    4  search found no matching noun/verb
"""

import argparse
import logging
import re
import sys
from pathlib import Path

from intcode import Computer, ExecutionStatus, IntcodeError, parse_program, __version__
from intcode.errors import CellOverflow
from intcode.config import DEFAULT_SEARCH_MAX, NOUN_ADDRESS, RESULT_ADDRESS, VERB_ADDRESS
from intcode.log_setup import setup_logging
from intcode.mem.memory import check_cell

logger = logging.getLogger("intcode.icvm")

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_VM_ERROR = 2
EXIT_STARVED = 3
EXIT_NOT_FOUND = 4

ASCII_LIMIT = 128


def cell_value(text: str) -> int:
    """argparse type: a signed integer that fits in one 64-bit cell."""
    try:
        return check_cell(int(text))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {text!r}")
    except CellOverflow:
        raise argparse.ArgumentTypeError(f"{text} does not fit in a 64-bit cell")


def address_value(text: str) -> int:
    """argparse type: a non-negative memory address."""
    match = re.fullmatch(r'\s*\+?([0-9]+)\s*', text)
    if not match:
        raise argparse.ArgumentTypeError(f"expected a non-negative address, got {text!r}")
    return int(match.group(1))


def parse_patch(value: str):
    """Parse an ADDR=VALUE patch argument."""
    match = re.fullmatch(r'\s*([0-9]+)\s*=\s*([+-]?[0-9]+)\s*', value)
    if not match:
        raise argparse.ArgumentTypeError(f"expected ADDR=VALUE, got {value!r}")
    return int(match.group(1)), cell_value(match.group(2))


def encode_text(line: str):
    """ASCII input: character codes of line followed by a newline (10)."""
    return [ord(c) for c in line] + [10]


def render_output(values, ascii_mode: bool) -> str:
    """Format drained output: one number per line, or decoded ASCII text."""
    if not ascii_mode:
        return ''.join(f"{v}\n" for v in values)
    parts = []
    for v in values:
        if 0 <= v < ASCII_LIMIT:
            parts.append(chr(v))
        else:
            parts.append(f"{v}\n")
    return ''.join(parts)


def read_program(source: str) -> str:
    if source == '-':
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="icvm",
        description="Intcode VM - run and probe Intcode programs",
    )
    parser.add_argument("--version", action="version", version=f"icvm {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log VM state transitions to stderr")
    parser.add_argument("--log-level", default=None,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Console log level (default: WARNING, DEBUG with -v)")
    parser.add_argument("--log-dir", default=None,
                        help="Also write a DEBUG log file into this directory")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Run a program")
    run.add_argument("program", help="Program file ('-' for stdin)")
    run.add_argument("-i", "--input", dest="inputs", type=cell_value, action="append",
                     default=[], metavar="VALUE",
                     help="Queue an input value (repeatable)")
    run.add_argument("--patch", type=parse_patch, action="append", default=[],
                     metavar="ADDR=VALUE", help="Patch a memory cell before running")
    run.add_argument("--noun", type=cell_value, default=None, help="Patch address 1")
    run.add_argument("--verb", type=cell_value, default=None, help="Patch address 2")
    run.add_argument("--ascii", action="store_true",
                     help="Decode output as ASCII text; interactive input is text")
    run.add_argument("--interactive", action="store_true",
                     help="Read a line from stdin each time the program waits for input")
    run.add_argument("--dump", type=address_value, action="append", default=[], metavar="ADDR",
                     help="Print a memory cell after the run (repeatable)")

    search = sub.add_parser("search", help="Search noun/verb patches for a target result")
    search.add_argument("program", help="Program file ('-' for stdin)")
    search.add_argument("--target", type=cell_value, required=True,
                        help="Value wanted at address 0 after the run")
    search.add_argument("--max", type=address_value, default=DEFAULT_SEARCH_MAX,
                        help=f"Largest noun/verb to try (default: {DEFAULT_SEARCH_MAX})")
    return parser


# ══════════════════════════════════════════════
# Commands
# ══════════════════════════════════════════════

def cmd_run(args, cells) -> int:
    computer = Computer(cells)
    for address, value in args.patch:
        computer.write_memory(address, value)
    if args.noun is not None:
        computer.write_memory(NOUN_ADDRESS, args.noun)
    if args.verb is not None:
        computer.write_memory(VERB_ADDRESS, args.verb)
    computer.send_inputs(args.inputs)

    while True:
        try:
            status = computer.run()
        except IntcodeError:
            sys.stdout.write(render_output(computer.drain_outputs(), args.ascii))
            raise
        sys.stdout.write(render_output(computer.drain_outputs(), args.ascii))
        if status is ExecutionStatus.FINISHED:
            break

        if not args.interactive:
            logger.error("Program is waiting for input at address %d",
                         computer.instruction_pointer)
            return EXIT_STARVED

        sys.stdout.flush()
        line = sys.stdin.readline()
        if not line:
            logger.error("End of input while program waits at address %d",
                         computer.instruction_pointer)
            return EXIT_STARVED
        line = line.rstrip('\n')
        if args.ascii:
            computer.send_inputs(encode_text(line))
        else:
            tokens = [t for t in re.split(r'[\s,]+', line) if t]
            try:
                values = [check_cell(int(t)) for t in tokens]
            except (ValueError, CellOverflow):
                logger.error("Not a list of 64-bit integers: %r", line)
                return EXIT_USAGE
            computer.send_inputs(values)

    for address in args.dump:
        print(f"{address}: {computer.peek_memory(address)}")
    return EXIT_OK


def cmd_search(args, cells) -> int:
    for noun in range(args.max + 1):
        for verb in range(args.max + 1):
            computer = Computer(cells)
            computer.fixup(noun, verb)
            try:
                computer.run().assert_finished()
            except IntcodeError as e:
                logger.debug("noun=%d verb=%d failed: %s", noun, verb, e)
                continue
            if computer.peek_memory(RESULT_ADDRESS) == args.target:
                logger.info("Found noun=%d verb=%d", noun, verb)
                print(100 * noun + verb)
                return EXIT_OK
    logger.error("No noun/verb in 0..%d produces %d", args.max, args.target)
    return EXIT_NOT_FOUND


COMMANDS = {
    "run": cmd_run,
    "search": cmd_search,
}


def main(argv=None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # argparse exits 2 on bad arguments; --help and --version exit 0
        return EXIT_OK if e.code == 0 else EXIT_USAGE

    if args.log_level:
        console_level = getattr(logging, args.log_level)
    else:
        console_level = logging.DEBUG if args.verbose else logging.WARNING
    setup_logging(console_level=console_level, log_dir=args.log_dir, force=True)

    if args.command == "run" and args.program == '-' and args.interactive:
        logger.error("Cannot read the program from stdin in interactive mode")
        return EXIT_USAGE

    try:
        cells = parse_program(read_program(args.program))
    except OSError as e:
        logger.error("Error reading %s: %s", args.program, e)
        return EXIT_USAGE
    except IntcodeError as e:
        logger.error("Malformed program %s: %s", args.program, e)
        return EXIT_USAGE

    try:
        return COMMANDS[args.command](args, cells)
    except IntcodeError as e:
        logger.error("VM error: %s", e)
        return EXIT_VM_ERROR


if __name__ == "__main__":
    sys.exit(main())
