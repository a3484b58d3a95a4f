"""
Identifier casing for target languages.

Converts DSL variable names into a language's naming convention:
    - snake_case   (numRows -> num_rows)
    - camel_case   (num_rows stays, NumRows -> numRows)
    - pascal_case  (numRows -> NumRows)

All-uppercase identifiers are treated as constants and bypass the
conversion. Keyword escaping always runs last.
"""

import re
from enum import Enum
from typing import Callable, Iterable, List, Optional


_SC_WORD_BREAK = re.compile(r"([a-z])([A-Z])")
_PC_WORD_BREAK = re.compile(r"([A-Z]*)([A-Z][a-z])")
_PC_WORD_END = re.compile(r"([A-Z])([A-Z]*$)")

_WORD = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")


class VariableNameFormat(Enum):
    """Naming conventions a language can declare for its variables."""

    SNAKE_CASE = "snake_case"
    CAMEL_CASE = "camel_case"
    PASCAL_CASE = "pascal_case"

    def convert(self, variable_name: str) -> str:
        if not variable_name:
            return variable_name
        if self == VariableNameFormat.SNAKE_CASE:
            return _to_snake_case(variable_name)
        if self == VariableNameFormat.PASCAL_CASE:
            return variable_name[0].upper() + _pascalize(variable_name[1:])
        return variable_name[0].lower() + _pascalize(variable_name[1:])


def _to_snake_case(variable_name: str) -> str:
    return _SC_WORD_BREAK.sub(lambda m: f"{m.group(1)}_{m.group(2).lower()}", variable_name).lower()


def _pascalize(tail: str) -> str:
    # HTTPServer -> HttpServer, then a trailing ID -> Id
    start_replaced = _PC_WORD_BREAK.sub(lambda m: m.group(1).lower() + m.group(2), tail)
    return _PC_WORD_END.sub(lambda m: m.group(1) + m.group(2).lower(), start_replaced)


def is_uppercase_identifier(identifier: str) -> bool:
    """True when every character is an uppercase letter."""
    return all(c.isupper() for c in identifier)


def escape_keyword(identifier: str, keywords: Iterable[str]) -> str:
    if identifier in keywords:
        return f"_{identifier}"
    return identifier


def transform_variable_name(
    variable_format: VariableNameFormat,
    identifier: str,
    keywords: Iterable[str] = (),
    allow_uppercase_vars: Optional[bool] = None,
) -> str:
    """
    Adapt a DSL identifier to a target language.

    Args:
        variable_format: Language naming convention
        identifier: Name as written in the DSL
        keywords: Reserved words of the language
        allow_uppercase_vars: False lowercases all-caps identifiers,
            True or None keeps them as they are

    Returns:
        Converted and keyword-escaped identifier
    """
    # All-caps names are constants: kept as is unless the language forbids them
    if is_uppercase_identifier(identifier):
        if allow_uppercase_vars is False:
            converted = identifier.lower()
        else:
            converted = identifier
    else:
        converted = variable_format.convert(identifier)

    return escape_keyword(converted, keywords)


def split_words(text: str) -> List[str]:
    """Split free text or an identifier into its words."""
    return _WORD.findall(text)


def case_filter(variable_format: VariableNameFormat) -> Callable[[object], str]:
    """
    Build the `case` template filter for a naming convention.

    Unlike VariableNameFormat.convert, the filter accepts arbitrary text
    ("number of rows" -> number_of_rows / numberOfRows / NumberOfRows).
    """

    def snake_case(value: object) -> str:
        return "_".join(word.lower() for word in split_words(str(value)))

    def mixed_case(value: object) -> str:
        words = split_words(str(value))
        if not words:
            return ""
        return words[0].lower() + "".join(word.capitalize() for word in words[1:])

    def camel_case(value: object) -> str:
        return "".join(word.capitalize() for word in split_words(str(value)))

    filters = {
        VariableNameFormat.SNAKE_CASE: snake_case,
        VariableNameFormat.CAMEL_CASE: mixed_case,
        VariableNameFormat.PASCAL_CASE: camel_case,
    }
    return filters[variable_format]


__all__ = [
    "VariableNameFormat",
    "is_uppercase_identifier",
    "escape_keyword",
    "transform_variable_name",
    "split_words",
    "case_filter",
]
