"""Parser: script text to block trees."""

from jominilint.parser.grammar import Parser
from jominilint.parser.options import ParseMode, ParserOptions
from jominilint.parser.parse import parse_file, parse_text, read_failure_reason, read_script_file

__all__ = [
    "ParseMode",
    "Parser",
    "ParserOptions",
    "parse_file",
    "parse_text",
    "read_failure_reason",
    "read_script_file",
]
