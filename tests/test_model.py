"""
Tests for Stub Model Objects

These tests verify:
    - Basic model creation
    - The max_length invariant on variables
    - Immutability of commands
    - Retrieval methods
"""

import dataclasses

import pytest
from stubgen.model import (
    VarType,
    Var,
    InputComment,
    Read,
    Write,
    Loop,
    LoopLine,
    Stub,
)


class TestVar:
    """Test Var objects."""

    def test_create_numeric_variable(self):
        var = Var("N", VarType.INT)
        assert var.name == "N"
        assert var.var_type == VarType.INT
        assert var.max_length is None

    def test_create_sized_variable(self):
        var = Var("name", VarType.WORD, max_length=50)
        assert var.max_length == 50

    def test_sized_type_requires_length(self):
        with pytest.raises(ValueError):
            Var("name", VarType.STRING)

    def test_numeric_type_rejects_length(self):
        with pytest.raises(ValueError):
            Var("N", VarType.INT, max_length=3)

    def test_is_sized(self):
        assert VarType.WORD.is_sized
        assert VarType.STRING.is_sized
        assert not VarType.INT.is_sized
        assert not VarType.BOOL.is_sized

    def test_var_is_frozen(self):
        var = Var("N", VarType.INT)
        with pytest.raises(dataclasses.FrozenInstanceError):
            var.name = "M"


class TestCommands:
    """Test command objects."""

    def test_read_keeps_order(self):
        cmd = Read([Var("b", VarType.INT), Var("a", VarType.INT)])
        assert [v.name for v in cmd.variables] == ["b", "a"]

    def test_loop_wraps_one_command(self):
        inner = Write("hello")
        cmd = Loop(count="N", command=inner)
        assert cmd.command is inner

    def test_loopline(self):
        cmd = LoopLine(object="N", variables=[Var("x", VarType.FLOAT)])
        assert cmd.object == "N"
        assert cmd.variables[0].var_type == VarType.FLOAT

    def test_commands_are_frozen(self):
        cmd = Write("hello")
        with pytest.raises(dataclasses.FrozenInstanceError):
            cmd.message = "bye"

    def test_commands_compare_by_value(self):
        assert Read([Var("N", VarType.INT)]) == Read([Var("N", VarType.INT)])
        assert Write("a") != Write("b")


class TestStub:
    """Test the Stub root container."""

    def test_empty_stub(self):
        stub = Stub()
        assert stub.commands == []
        assert stub.input_comments == []
        assert stub.output_comment == ""
        assert stub.statement == ""

    def test_get_input_comment(self):
        stub = Stub(input_comments=[
            InputComment("N", "number of rows"),
            InputComment("M", "number of columns"),
        ])
        assert stub.get_input_comment("M") == "number of columns"
        assert stub.get_input_comment("X") is None
