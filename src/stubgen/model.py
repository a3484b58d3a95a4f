"""
Core Stub Model Objects

Defines the abstract command tree produced by the stub DSL parser.

These are pure data classes representing:
    - Variables (typed input slots)
    - Commands (read, write, loop, loopline)
    - Input comments (documentation for input variables)
    - Stubs (root container)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about target languages or templates
        - Are immutable once handed to a renderer
        - Are fully serializable
        - Represent structure, not behavior
"""

from abc import ABC
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class VarType(Enum):
    """
    Primitive input types understood by the DSL.

    WORD and STRING are length-bounded and always carry a max_length.
    """

    INT = "int"
    FLOAT = "float"
    LONG = "long"
    BOOL = "bool"
    WORD = "word"
    STRING = "string"

    @property
    def is_sized(self) -> bool:
        return self in (VarType.WORD, VarType.STRING)


@dataclass(frozen=True)
class Var:
    """
    Declares one variable read from input.

    Examples:
        N:int          -> Var("N", VarType.INT)
        name:word(50)  -> Var("name", VarType.WORD, max_length=50)

    Properties:
        name: Identifier as written in the DSL (not yet case-converted)
        var_type: VarType enum
        max_length: Capacity for WORD/STRING, None otherwise

    INVARIANT:
        max_length is present iff var_type is WORD or STRING.
    """

    name: str
    var_type: VarType
    max_length: Optional[int] = None

    def __post_init__(self):
        if self.var_type.is_sized and self.max_length is None:
            raise ValueError(f"{self.var_type.value} variable '{self.name}' requires a max_length")
        if not self.var_type.is_sized and self.max_length is not None:
            raise ValueError(f"{self.var_type.value} variable '{self.name}' cannot have a max_length")


@dataclass(frozen=True)
class InputComment:
    """Documents the meaning of one input variable (from the INPUT section)."""

    variable: str
    comment: str


class Command(ABC):
    """
    Base class for all stub commands.

    Structure only. Rendering belongs in backends.
    """
    pass


@dataclass(frozen=True)
class Read(Command):
    """
    Reads one line of input into the listed variables.

    Order of variables is the read order.
    """

    variables: List[Var] = field(default_factory=list)


@dataclass(frozen=True)
class Write(Command):
    """
    Writes a literal block of text.

    Newlines inside message are preserved; each line is rendered separately.
    """

    message: str


@dataclass(frozen=True)
class Loop(Command):
    """
    Repeats a single nested command.

    Example:
        loop N read x:int

    Becomes:
        Loop(count="N", command=Read([Var("x", VarType.INT)]))

    Properties:
        count: Identifier or literal giving the number of iterations
        command: Exactly one nested Read or Write
    """

    count: str
    command: Command


@dataclass(frozen=True)
class LoopLine(Command):
    """
    Reads all listed variables `object` times from a single line.

    Example:
        loopline N x:int y:int
    """

    object: str
    variables: List[Var] = field(default_factory=list)


@dataclass
class Stub:
    """
    Root container for one parsed stub generator.

    Everything a renderer emits MUST be derivable from this object
    and the target Language alone.

    Properties:
        commands: Ordered top-level commands
        input_comments: Variable documentation, in DSL order
        output_comment: Text from the OUTPUT section
        statement: Text from the STATEMENT section
    """

    commands: List[Command] = field(default_factory=list)
    input_comments: List[InputComment] = field(default_factory=list)
    output_comment: str = ""
    statement: str = ""

    def get_input_comment(self, variable: str) -> Optional[str]:
        """
        Retrieve the comment documenting a variable.

        Args:
            variable: Variable name as written in the DSL

        Returns:
            Comment text or None if the variable is undocumented
        """
        for input_comment in self.input_comments:
            if input_comment.variable == variable:
                return input_comment.comment
        return None
