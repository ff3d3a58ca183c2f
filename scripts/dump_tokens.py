#!/usr/bin/env python3
"""Dump the lexer's token stream for one script file."""

from __future__ import annotations

import argparse
from pathlib import Path

from jominilint.lexer import Lexer, dump_tokens
from jominilint.parser import read_script_file


def main() -> int:
    parser = argparse.ArgumentParser(description="Dump lexer tokens for a script file")
    parser.add_argument("path", type=Path, help="Script file to lex")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the dump to this file instead of stdout",
    )
    parser.add_argument(
        "--no-trivia",
        action="store_true",
        help="Leave out whitespace, newline and comment tokens",
    )
    args = parser.parse_args()

    text = read_script_file(args.path)
    lexer = Lexer(text)
    tokens = lexer.lex()
    if args.no_trivia:
        tokens = [token for token in tokens if not token.kind.is_trivia]
    lines = dump_tokens(tokens, text)
    for error in lexer.errors:
        lines.append(f"error at {error.range.as_tuple()}: {error.spec.message}")

    if args.output is None:
        print("\n".join(lines))
    else:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text("\n".join(lines) + "\n", encoding="utf-8")
        print(f"Wrote {len(tokens)} tokens to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
