"""
Tests for the template-driven stub renderer.

These tests verify that Stub trees are turned into source code through a
language's templates. Exact output is checked against a small "toy"
language written to a temporary directory; the bundled languages are
checked for the lines a user would expect to see.

Tests cover:
    - Read / write / loop / loopline rendering
    - Identifier transformation and keyword escaping
    - Blank-line normalization between commands
    - Missing templates and template errors
    - Deterministic output
"""

import pytest
from stubgen.backends import RenderError, StubRenderer, render_stub, ReadData
from stubgen.backends.read_data import resolve_variables
from stubgen.examples import EXAMPLE_GENERATOR
from stubgen.language import load_language
from stubgen.model import Stub, Read, Var, VarType, InputComment
from stubgen.parser import parse_stub_string


TOY_CONFIG = """\
name: toy
variable_format: camel_case
source_file_ext: toy
type_tokens:
  Int: i32
  Float: f64
  Long: i64
  Bool: flag
  Word: str
  String: text
keywords: ["loop"]
"""

TOY_TEMPLATES = {
    "main.toy.jinja": "BEGIN\n{% for command in commands %}{{ command }}{% endfor %}END\n",
    "read.toy.jinja": (
        "{% for var in vars %}read {{ var.name }}: {{ var.type_token }}"
        "{% if var.max_length %}[{{ var.max_length }}]{% endif %}\n{% endfor %}"
    ),
    "write.toy.jinja": "{% for message in messages %}say {{ message }}\n{% endfor %}",
    "loop.toy.jinja": "repeat {{ count }}\n{% for line in inner %}  {{ line }}\n{% endfor %}done",
    "loopline.toy.jinja": "each {{ object }}:{% for var in vars %} {{ var.name }}{% endfor %}",
}


@pytest.fixture
def toy_dir(tmp_path):
    lang_dir = tmp_path / "toy"
    lang_dir.mkdir()
    (lang_dir / "stub_config.yaml").write_text(TOY_CONFIG, encoding="utf-8")
    for name, text in TOY_TEMPLATES.items():
        (lang_dir / name).write_text(text, encoding="utf-8")
    return tmp_path


@pytest.fixture
def toy(toy_dir):
    return load_language("toy", template_dirs=[toy_dir])


def render(language, generator):
    return render_stub(language, parse_stub_string(generator))


class TestToyRendering:
    """Exact output through the toy language."""

    def test_empty_stub(self, toy):
        assert render_stub(toy, Stub()) == "BEGIN\nEND\n"

    def test_read_and_write(self, toy):
        assert render(toy, "read NumRows:int\nwrite Hello\n") == (
            "BEGIN\n"
            "read numRows: i32\n"
            "say Hello\n"
            "END\n"
        )

    def test_sized_types_expose_max_length(self, toy):
        assert render(toy, "read name:word(20) line:string(256)\n") == (
            "BEGIN\n"
            "read name: str[20]\n"
            "read line: text[256]\n"
            "END\n"
        )

    def test_keyword_escaped(self, toy):
        assert render(toy, "read loop:int\n") == "BEGIN\nread _loop: i32\nEND\n"

    def test_write_lines_rendered_separately(self, toy):
        assert render(toy, "write Hello\nWorld\n") == "BEGIN\nsay Hello \nsay World\nEND\n"

    def test_write_splits_on_newline_only(self, toy):
        assert render(toy, "write a\u2028b\x85c\n") == "BEGIN\nsay a\u2028b\x85c\nEND\n"

    def test_loop_inner_splits_on_newline_only(self, toy):
        assert render(toy, "loop 2 write a\u2028b\n") == "BEGIN\nrepeat 2\n  say a\u2028b\ndone\nEND\n"

    def test_loop_indents_inner_lines(self, toy):
        assert render(toy, "loop N read x:int y:float\n") == (
            "BEGIN\n"
            "repeat N\n"
            "  read x: i32\n"
            "  read y: f64\n"
            "done\n"
            "END\n"
        )

    def test_loop_count_identifier_transformed(self, toy):
        assert render(toy, "loop NumRows write hi\n") == "BEGIN\nrepeat numRows\n  say hi\ndone\nEND\n"

    def test_loop_count_literal_untouched(self, toy):
        assert render(toy, "loop 3 write hi\n") == "BEGIN\nrepeat 3\n  say hi\ndone\nEND\n"

    def test_loopline(self, toy):
        assert render(toy, "loopline N a:int b:word(5)\n") == "BEGIN\neach N: a b\nEND\n"

    def test_commands_keep_order(self, toy):
        output = render(toy, "write first\n\nread N:int\n\nwrite last\n")
        assert output.index("say first") < output.index("read N") < output.index("say last")

    def test_blank_lines_collapsed(self):
        assert StubRenderer._normalize("a\n\n\nb") == "a\nb\n"
        assert StubRenderer._normalize("a\n") == "a\n"

    def test_deterministic(self, toy):
        stub = parse_stub_string(EXAMPLE_GENERATOR)
        assert render_stub(toy, stub) == render_stub(toy, stub)


class TestTemplateContext:
    """Test what templates receive."""

    def test_main_receives_sections(self, toy_dir, toy):
        (toy_dir / "toy" / "main.toy.jinja").write_text(
            "{{ statement }}|{{ output_comment }}|{{ input_comments[0].variable }}", encoding="utf-8"
        )
        output = render(toy, "STATEMENT\nDo it.\n\nINPUT\nN: count\n\nOUTPUT result\n")
        assert output == "Do it.|result|N"

    def test_case_filter_follows_convention(self, toy_dir, toy):
        (toy_dir / "toy" / "main.toy.jinja").write_text("{{ 'number of rows' | case }}", encoding="utf-8")
        assert render_stub(toy, Stub()) == "numberOfRows"

    def test_type_tokens_passed_to_read(self, toy_dir, toy):
        (toy_dir / "toy" / "read.toy.jinja").write_text("{{ type_tokens.Long }}", encoding="utf-8")
        assert render(toy, "read N:int\n") == "BEGIN\ni64\nEND\n"

    def test_read_data_carries_input_comments(self, toy):
        stub = Stub(
            commands=[],
            input_comments=[InputComment("numRows", "how many rows")],
        )
        data = resolve_variables(toy, stub, [
            Var("numRows", VarType.INT),
            Var("label", VarType.WORD, max_length=8),
        ])
        assert data == [
            ReadData(name="numRows", var_type="int", type_token="i32", input_comment="how many rows"),
            ReadData(name="label", var_type="word", type_token="str", max_length=8),
        ]


class TestRenderErrors:
    """Missing templates and template failures raise RenderError."""

    def test_missing_template(self, toy_dir, toy):
        (toy_dir / "toy" / "loopline.toy.jinja").unlink()
        with pytest.raises(RenderError) as exc_info:
            render(toy, "loopline N x:int\n")
        assert exc_info.value.template_name == "loopline.toy.jinja"

    def test_undefined_variable(self, toy_dir, toy):
        (toy_dir / "toy" / "main.toy.jinja").write_text("{{ nope }}", encoding="utf-8")
        with pytest.raises(RenderError) as exc_info:
            render_stub(toy, Stub())
        assert exc_info.value.template_name == "main.toy.jinja"

    def test_syntax_error(self, toy_dir, toy):
        (toy_dir / "toy" / "write.toy.jinja").write_text("{% for %}", encoding="utf-8")
        with pytest.raises(RenderError) as exc_info:
            render(toy, "write hi\n")
        assert exc_info.value.template_name == "write.toy.jinja"

    def test_no_partial_output(self, toy_dir, toy):
        (toy_dir / "toy" / "loop.toy.jinja").unlink()
        stub = parse_stub_string("read N:int\nloop N write hi\n")
        renderer = StubRenderer(toy, stub)
        with pytest.raises(RenderError):
            renderer.render()

    def test_unsupported_command(self, toy):
        renderer = StubRenderer(toy, Stub())
        with pytest.raises(TypeError):
            renderer.render_command(object())


class TestBundledLanguages:
    """Smoke tests of the bundled template sets on the example stub."""

    @pytest.fixture
    def example(self):
        return parse_stub_string(EXAMPLE_GENERATOR)

    def test_python(self, example):
        output = render_stub(load_language("python"), example)
        assert "num_points = int(input().strip())  # the number of points\n" in output
        assert "for i in range(num_points):\n    inputs = input().split()\n" in output
        assert "    x = int(inputs[0])  # horizontal coordinate\n" in output
        assert "    label = inputs[2]\n" in output
        assert "for i in input().split():\n    weight = float(i)\n" in output
        assert 'print("answer")\n' in output
        assert "# Find the heaviest point.\n" in output
        assert "# The label of the heaviest point.\n" in output

    def test_ruby(self, example):
        output = render_stub(load_language("ruby"), example)
        assert "num_points = gets.to_i # the number of points\n" in output
        assert "num_points.times do\n" in output
        assert '  label = inputs[2].chomp\n' in output
        assert 'puts "answer"\n' in output

    def test_ruby_lowercases_uppercase_count(self):
        output = render(load_language("ruby"), "read N:int\nloop N read x:int\n")
        assert "n = gets.to_i\nn.times do\n  x = gets.to_i\nend\n" in output

    def test_java(self, example):
        output = render_stub(load_language("java"), example)
        assert "        int numPoints = in.nextInt(); // the number of points\n" in output
        assert "        for (int i = 0; i < numPoints; i++) {\n" in output
        assert "            String label = in.next();\n" in output
        assert '        System.out.println("answer");\n' in output
        assert " * Find the heaviest point.\n" in output

    def test_write_quotes_escaped(self):
        output = render(load_language("python"), 'write say "hi"\n')
        assert 'print("say \\"hi\\"")' in output

    @pytest.mark.parametrize("name, generator, expected", [
        ("python", "write C:\\new\\table\n", 'print("C:\\\\new\\\\table")\n'),
        ("java", "write a\\d+\n", '        System.out.println("a\\\\d+");\n'),
        ("ruby", "write Total #{n}\n", 'puts "Total \\#{n}"\n'),
        ("ruby", 'write say "\\"\n', 'puts "say \\"\\\\\\""\n'),
    ])
    def test_write_backslashes_and_interpolation_escaped(self, name, generator, expected):
        assert expected in render(load_language(name), generator)

    @pytest.mark.parametrize("name", ["python", "ruby", "java"])
    def test_deterministic(self, name, example):
        language = load_language(name)
        assert render_stub(language, example) == render_stub(language, example)
