"""Command-line driver for the editor.

Reads one command per line from a script file or stdin::

    add add
    set 2 5
    connect 1 2
    add multiply
    set 3 3
    move 3 445 205
    compute

Usage::

    arithflow pipeline.txt
    arithflow --config editor.yaml -v < pipeline.txt
"""
from __future__ import annotations

import argparse
import logging
import shlex
import sys
from typing import Callable, Dict, List, Optional, TextIO

from arithflow import __version__
from arithflow.editor import Editor, format_number
from arithflow.errors import ArithflowError

logger = logging.getLogger(__name__)


class CommandError(ValueError):
    """Malformed command line."""


def _float(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise CommandError(f"not a number: {text!r}") from None


def _cmd_add(editor: Editor, args: List[str]) -> str:
    if len(args) not in (1, 3):
        raise CommandError("usage: add KIND [X Y]")
    if len(args) == 3:
        block = editor.add_block(args[0], _float(args[1]), _float(args[2]))
    else:
        block = editor.add_block(args[0])
    return f"added {block.kind} {block.block_id}"


def _cmd_set(editor: Editor, args: List[str]) -> str:
    if len(args) != 2:
        raise CommandError("usage: set ID VALUE")
    editor.set_value(args[0], args[1])
    return f"set {args[0]} = {args[1]!r}"


def _cmd_move(editor: Editor, args: List[str]) -> str:
    if len(args) != 3:
        raise CommandError("usage: move ID X Y")
    wire = editor.drag_block(args[0], _float(args[1]), _float(args[2]))
    block = editor.graph.get_block(args[0])
    if block is None:
        raise CommandError(f"no block {args[0]}")
    out = f"moved {block.block_id} to ({format_number(block.position.x)}, {format_number(block.position.y)})"
    if wire is not None:
        out += f", wired {wire.source_id} -> {wire.target_id}"
    return out


def _cmd_connect(editor: Editor, args: List[str]) -> str:
    if len(args) != 2:
        raise CommandError("usage: connect SRC TGT")
    wire = editor.connect(args[0], args[1])
    return f"wired {wire.source_id} -> {wire.target_id}"


def _cmd_disconnect(editor: Editor, args: List[str]) -> str:
    if len(args) != 2:
        raise CommandError("usage: disconnect SRC TGT")
    if not editor.disconnect(args[0], args[1]):
        raise CommandError(f"no wire {args[0]} -> {args[1]}")
    return f"unwired {args[0]} -> {args[1]}"


def _cmd_delete(editor: Editor, args: List[str]) -> str:
    if len(args) != 1:
        raise CommandError("usage: delete ID")
    removed = editor.delete_block(args[0])
    return f"deleted {args[0]} ({len(removed)} wire(s))"


def _cmd_list(editor: Editor, args: List[str]) -> str:
    lines = []
    for b in editor.list_blocks():
        value = "" if b.value is None else f" {b.value!r}"
        lines.append(
            f"  {b.block_id:>4s}  {b.kind:10s}{value}  "
            f"({format_number(b.position.x)}, {format_number(b.position.y)})"
        )
    for w in editor.list_wires():
        lines.append(f"  {w.source_id} -> {w.target_id}")
    return "\n".join(lines)


def _cmd_compute(editor: Editor, args: List[str]) -> str:
    result = editor.compute()
    if not result.ok:
        raise CommandError(result.message)
    return result.message


COMMANDS: Dict[str, Callable[[Editor, List[str]], str]] = {
    "add": _cmd_add,
    "set": _cmd_set,
    "move": _cmd_move,
    "connect": _cmd_connect,
    "disconnect": _cmd_disconnect,
    "delete": _cmd_delete,
    "list": _cmd_list,
    "compute": _cmd_compute,
}


def execute_line(editor: Editor, line: str) -> Optional[str]:
    """Run one command line. Returns its output, None for blank/comment lines."""
    parts = shlex.split(line, comments=True)
    if not parts:
        return None
    name, args = parts[0].lower(), parts[1:]
    handler = COMMANDS.get(name)
    if handler is None:
        raise CommandError(f"unknown command {name!r}; known: {', '.join(COMMANDS)}")
    return handler(editor, args)


def run_script(
    editor: Editor,
    stream: TextIO,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """Execute every line of stream; returns 1 if any line failed, else 0."""
    if out is None:
        out = sys.stdout
    if err is None:
        err = sys.stderr
    status = 0
    for lineno, line in enumerate(stream, start=1):
        logger.debug("line %d: %s", lineno, line.rstrip())
        try:
            output = execute_line(editor, line)
        except (ArithflowError, KeyError, ValueError) as e:
            msg = e.args[0] if isinstance(e, KeyError) and e.args else e
            print(f"line {lineno}: {msg}", file=err)
            status = 1
            continue
        if output:
            print(output, file=out)
    return status


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="arithflow", description="Arithmetic block-chain editor")
    parser.add_argument("script", nargs="?", help="Command file (default: stdin)")
    parser.add_argument("--config", help="Editor config (YAML)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"arithflow {__version__}")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    editor = Editor(config=args.config)
    if args.script:
        with open(args.script, "r", encoding="utf-8") as f:
            return run_script(editor, f)
    return run_script(editor, sys.stdin)


if __name__ == "__main__":
    sys.exit(main())
