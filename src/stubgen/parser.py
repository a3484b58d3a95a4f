"""
Stub DSL Parser (Raw Input → Stub Model).

Converts stub generator text into a Stub command tree.

Syntax:
    read N:int name:word(50)      one line of input, in order
    write some answer             text until a blank line
    loop N read x:int y:float     repeat a read or write N times
    loopline N x:int              N values of x on one line
    OUTPUT / INPUT / STATEMENT    documentation sections

Syntax Notes:
    - The DSL is line and keyword anchored, not a full grammar
    - Newlines are tokens ("\\n"); a blank line is two in a row
    - Sections and write blocks end at a blank line
"""

import re
from typing import List, Optional
from enum import Enum

from stubgen.logging_config import get_logger
from stubgen.model import (
    Stub,
    Command,
    Read,
    Write,
    Loop,
    LoopLine,
    Var,
    VarType,
    InputComment,
)

logger = get_logger(__name__)

NEWLINE = "\n"

_BLANK_LINE = re.compile(r"\n[ \t\r]*\n")
_TOKEN_SEPARATOR = re.compile(r"[ \t\r\f\v]+")
_SIZED_TYPE = re.compile(r"(word|string)\((\d+)\)")

_SIMPLE_TYPES = {
    "int": VarType.INT,
    "float": VarType.FLOAT,
    "long": VarType.LONG,
    "bool": VarType.BOOL,
}


class ParseErrorKind(Enum):
    """What went wrong while parsing a stub generator."""
    UNKNOWN_KEYWORD = "unknown_keyword"
    UNKNOWN_TYPE = "unknown_type"
    UNEXPECTED_TOKEN = "unexpected_token"
    MISSING_ARGUMENT = "missing_argument"


class StubParseError(Exception):
    """
    Raised when stub generator parsing fails.

    Attributes:
        kind: ParseErrorKind
        token: Offending token (None at end of stream)
        position: Index of the offending token in the token stream
    """

    def __init__(self, message: str, kind: ParseErrorKind,
                 token: Optional[str] = None, position: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.token = token
        self.position = position


def tokenize(generator: str) -> List[str]:
    """
    Split stub generator text into tokens.

    Every newline becomes its own "\\n" token, so a blank line (even one
    holding stray spaces) is two consecutive "\\n" tokens.

    Args:
        generator: Raw DSL text

    Returns:
        Flat token list
    """
    normalized = generator.replace(NEWLINE, f" {NEWLINE} ")
    normalized = _BLANK_LINE.sub(f"{NEWLINE} {NEWLINE}", normalized)
    return [token for token in _TOKEN_SEPARATOR.split(normalized) if token]


class _StubParser:
    """Single pass, one token lookahead parser over a token list."""

    def __init__(self, tokens: List[str]):
        self._tokens = tokens
        self._pos = 0

    def _next(self) -> Optional[str]:
        if self._pos >= len(self._tokens):
            return None
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def _has_more(self) -> bool:
        return self._pos < len(self._tokens)

    def _error(self, message: str, kind: ParseErrorKind, token: Optional[str]) -> StubParseError:
        position = self._pos - 1 if token is not None else self._pos
        return StubParseError(message, kind, token=token, position=position)

    def parse(self) -> Stub:
        stub = Stub()

        while self._has_more():
            token = self._next()
            if token == "read":
                stub.commands.append(self._parse_read())
            elif token == "write":
                stub.commands.append(self._parse_write())
            elif token == "loop":
                stub.commands.append(self._parse_loop())
            elif token == "loopline":
                stub.commands.append(self._parse_loopline())
            elif token == "OUTPUT":
                stub.output_comment = self._parse_text_block()
            elif token == "INPUT":
                stub.input_comments.extend(self._parse_input_comments())
            elif token == "STATEMENT":
                self._skip_to_next_line()
                stub.statement = self._parse_text_block()
            elif token in (NEWLINE, ""):
                continue
            else:
                raise self._error(
                    f"Error parsing stub generator: unknown keyword '{token}'",
                    ParseErrorKind.UNKNOWN_KEYWORD, token,
                )

        return stub

    def _parse_read(self) -> Read:
        return Read(self._parse_variable_list())

    def _parse_write(self) -> Write:
        return Write(self._parse_text_block())

    def _parse_loop(self) -> Loop:
        count = self._next()
        if count is None or count == NEWLINE:
            raise self._error(
                "Loop stub not provided with loop count",
                ParseErrorKind.MISSING_ARGUMENT, count,
            )

        return Loop(count=count, command=self._parse_read_or_write())

    def _parse_loopline(self) -> LoopLine:
        obj = self._next()
        if obj is None or obj == NEWLINE:
            raise self._error(
                "Loopline stub not provided with identifier to loop through",
                ParseErrorKind.MISSING_ARGUMENT, obj,
            )

        return LoopLine(object=obj, variables=self._parse_variable_list())

    def _parse_read_or_write(self) -> Command:
        token = self._next()
        while token in (NEWLINE, ""):
            token = self._next()

        if token == "read":
            return self._parse_read()
        if token == "write":
            return self._parse_write()
        if token is None:
            raise self._error(
                "Loop with no command in stub generator",
                ParseErrorKind.MISSING_ARGUMENT, None,
            )
        raise self._error(
            f"Error parsing loop command in stub generator, got: '{token}'",
            ParseErrorKind.UNEXPECTED_TOKEN, token,
        )

    def _parse_variable(self, token: str) -> Var:
        name, _, type_token = token.partition(":")
        type_token = type_token.split(":")[0]

        if type_token in _SIMPLE_TYPES:
            return Var(name, _SIMPLE_TYPES[type_token])

        match = _SIZED_TYPE.fullmatch(type_token)
        if match is None:
            raise self._error(
                f"Failed to parse variable type for token: {token}",
                ParseErrorKind.UNKNOWN_TYPE, token,
            )
        return Var(name, VarType(match.group(1)), max_length=int(match.group(2)))

    def _parse_variable_list(self) -> List[Var]:
        variables = []

        while self._has_more():
            token = self._next()
            if token == NEWLINE:
                break
            if token == "":
                continue
            if ":" not in token:
                raise self._error(
                    f"Error in stub generator variable list, found '{token}'",
                    ParseErrorKind.UNEXPECTED_TOKEN, token,
                )
            variables.append(self._parse_variable(token))

        return variables

    def _parse_input_comments(self) -> List[InputComment]:
        self._skip_to_next_line()
        comments = []

        while self._has_more():
            token = self._next()
            if token == NEWLINE:
                break
            if token.endswith(":"):
                comments.append(InputComment(token[:-1], self._read_to_end_of_line()))
            else:
                self._skip_to_next_line()

        return comments

    def _read_to_end_of_line(self) -> str:
        output = []

        while self._has_more():
            token = self._next()
            if token == NEWLINE:
                break
            output.append(token)

        return " ".join(output)

    def _skip_to_next_line(self) -> None:
        while self._has_more():
            token = self._next()
            if token == NEWLINE:
                break

    def _parse_text_block(self) -> str:
        output = []

        while self._has_more():
            token = self._next()
            if token == NEWLINE:
                following = self._next()
                if following is None or following == NEWLINE:
                    break
                token = NEWLINE + following
            output.append(token)

        return " ".join(output)


def parse_tokens(tokens: List[str]) -> Stub:
    """
    Parse a token stream into a Stub.

    Args:
        tokens: Output of tokenize()

    Returns:
        Stub with commands and documentation sections

    Raises:
        StubParseError: If the stream is malformed
    """
    stub = _StubParser(list(tokens)).parse()
    logger.debug(
        "Parsed stub generator",
        commands=len(stub.commands),
        input_comments=len(stub.input_comments),
    )
    return stub


def parse_stub_string(generator: str) -> Stub:
    """
    Parse stub generator text into a Stub.

    Raises:
        StubParseError: If parsing fails
    """
    return parse_tokens(tokenize(generator))


def parse_stub_file(filepath: str) -> Stub:
    """
    Parse a stub generator file into a Stub.

    Args:
        filepath: Path to the DSL file

    Raises:
        FileNotFoundError: If file doesn't exist
        StubParseError: If parsing fails
    """
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"Stub generator file not found: {filepath}")

    return parse_stub_string(content)


__all__ = [
    "tokenize",
    "parse_tokens",
    "parse_stub_string",
    "parse_stub_file",
    "StubParseError",
    "ParseErrorKind",
    "NEWLINE",
]
