"""
Per-variable template records for read and loopline templates.

Resolves a Var against a Language: the name is converted to the language's
naming convention and the DSL type is looked up in its type-token table.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from stubgen.language import Language
from stubgen.model import Stub, Var


@dataclass(frozen=True)
class ReadData:
    """
    What a template sees for one variable.

    Properties:
        name: Identifier in the target language's convention
        var_type: DSL type name ("int", "word", ...)
        type_token: Language token for the type, None if the table has none
        max_length: Capacity for word/string variables
        input_comment: Documentation from the INPUT section, if any
    """

    name: str
    var_type: str
    type_token: Optional[str] = None
    max_length: Optional[int] = None
    input_comment: Optional[str] = None


def resolve_read_data(language: Language, var: Var, input_comment: Optional[str] = None) -> ReadData:
    return ReadData(
        name=language.transform_variable_name(var.name),
        var_type=var.var_type.value,
        type_token=language.type_tokens.token_for(var.var_type),
        max_length=var.max_length,
        input_comment=input_comment,
    )


def resolve_variables(language: Language, stub: Stub, variables: List[Var]) -> List[ReadData]:
    """Resolve a variable list in read order, attaching INPUT comments by DSL name."""
    return [
        resolve_read_data(language, var, stub.get_input_comment(var.name))
        for var in variables
    ]


__all__ = ["ReadData", "resolve_read_data", "resolve_variables"]
