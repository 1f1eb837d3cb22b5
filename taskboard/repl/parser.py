"""
FILE: taskboard/repl/parser.py
PURPOSE: Turn a REPL input line into a command, positional args and flags
EXPORTS:
  - ParseResult (dataclass for parsed commands)
  - parse_command(input_str) -> ParseResult
DEPENDENCIES:
  - shlex (shell-like quoting)
NOTES:
  - Quoted values stay whole: add todo --title "Write the docs"
  - Long flags take the next token as value unless it is another flag
  - --flag=value is accepted too
  - Short aliases (-t, -d, -D, -p) map to their long names
  - Command names are case-insensitive; argument case is preserved
"""

import shlex
from dataclasses import dataclass, field
from typing import Dict, List


# Short flag -> long flag name
FLAG_ALIASES = {
    "t": "title",
    "d": "description",
    "D": "deadline",
    "p": "position",
    "y": "yes",
}


@dataclass
class ParseResult:
    """
    One parsed REPL line.

    Attributes:
        command: Lower-cased command name ("add", "mv", "grab")
        args: Positional arguments in order
        flags: Flag values keyed by long name; bare flags map to True
        raw_input: The stripped input line
    """
    command: str
    args: List[str] = field(default_factory=list)
    flags: Dict[str, str | bool] = field(default_factory=dict)
    raw_input: str = ""

    def flag_text(self, name: str) -> str | None:
        """
        Value of a flag that expects text.

        A flag given without a value reads as empty text, so
        "edit 123456 --description" clears the description.
        """
        value = self.flags.get(name)
        if value is None:
            return None
        if value is True:
            return ""
        return value


def _is_flag(token: str) -> bool:
    if token.startswith("--"):
        return len(token) > 2
    return len(token) == 2 and token[0] == "-" and token[1] in FLAG_ALIASES


def _flag_name(token: str) -> str:
    if token.startswith("--"):
        return token[2:]
    return FLAG_ALIASES[token[1]]


def parse_command(input_str: str) -> ParseResult:
    """
    Parse REPL input into command, args, and flags.

    Examples:
        >>> parse_command("mv 123456 done")
        ParseResult(command="mv", args=["123456", "done"], flags={})

        >>> parse_command('add todo --title "Write docs" -D 2025-03-01')
        ParseResult(command="add", args=["todo"],
                    flags={"title": "Write docs", "deadline": "2025-03-01"})

        >>> parse_command("ls --json")
        ParseResult(command="ls", args=[], flags={"json": True})

    Returns:
        ParseResult; empty input gives command=""
    """
    input_str = input_str.strip()
    if not input_str:
        return ParseResult(command="", raw_input=input_str)

    try:
        tokens = shlex.split(input_str)
    except ValueError:
        # Unclosed quote: fall back to whitespace splitting
        tokens = input_str.split()

    if not tokens:
        return ParseResult(command="", raw_input=input_str)

    command = tokens[0].lower()
    args: List[str] = []
    flags: Dict[str, str | bool] = {}
    i = 1

    while i < len(tokens):
        token = tokens[i]

        if token.startswith("--") and "=" in token:
            name, value = token[2:].split("=", 1)
            flags[name] = value
            i += 1
        elif _is_flag(token):
            name = _flag_name(token)
            if i + 1 < len(tokens) and not _is_flag(tokens[i + 1]):
                flags[name] = tokens[i + 1]
                i += 2
            else:
                flags[name] = True
                i += 1
        else:
            args.append(token)
            i += 1

    return ParseResult(command=command, args=args, flags=flags, raw_input=input_str)
