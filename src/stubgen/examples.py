"""
Example stub generator for proof-of-concept and demos.

A small puzzle reading a point count, the points, and a line of weights,
with statement, input and output documentation.
"""
from stubgen.model import Stub, Read, Write, Loop, LoopLine, Var, VarType, InputComment


EXAMPLE_GENERATOR = """\
read numPoints:int
loop numPoints read x:int y:int label:word(10)
loopline numPoints weight:float
write answer

STATEMENT
Find the heaviest point.

INPUT
numPoints: the number of points
x: horizontal coordinate
y: vertical coordinate

OUTPUT
The label of the heaviest point.
"""


def build_example_stub() -> Stub:
    """Hand-built Stub equal to parsing EXAMPLE_GENERATOR."""
    stub = Stub()

    stub.commands = [
        Read([Var("numPoints", VarType.INT)]),
        Loop(
            count="numPoints",
            command=Read([
                Var("x", VarType.INT),
                Var("y", VarType.INT),
                Var("label", VarType.WORD, max_length=10),
            ]),
        ),
        LoopLine(object="numPoints", variables=[Var("weight", VarType.FLOAT)]),
        Write("answer"),
    ]

    stub.statement = "Find the heaviest point."
    stub.input_comments = [
        InputComment("numPoints", "the number of points"),
        InputComment("x", "horizontal coordinate"),
        InputComment("y", "vertical coordinate"),
    ]
    # OUTPUT text starts on the line after the keyword
    stub.output_comment = "\nThe label of the heaviest point."

    return stub
