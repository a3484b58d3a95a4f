"""
Test the example stub generator shipped for demos.

Validates that parsing the example DSL yields exactly the hand-built Stub.
"""

from stubgen.examples import EXAMPLE_GENERATOR, build_example_stub
from stubgen.model import Loop, LoopLine
from stubgen.parser import parse_stub_string


def test_example_parses_to_hand_built_stub():
    assert parse_stub_string(EXAMPLE_GENERATOR) == build_example_stub()


def test_example_stub_structure():
    stub = build_example_stub()

    # read, loop, loopline, write
    assert len(stub.commands) == 4
    assert isinstance(stub.commands[1], Loop)
    assert isinstance(stub.commands[2], LoopLine)

    assert stub.get_input_comment("numPoints") == "the number of points"
    assert stub.get_input_comment("weight") is None
