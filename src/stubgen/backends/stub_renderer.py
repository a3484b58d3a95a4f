"""
Template-driven stub generator for target languages.

Converts a Stub into source code using the language's jinja2 templates:

    main.<ext>.jinja       whole file, receives the rendered commands
    read.<ext>.jinja       one Read command
    write.<ext>.jinja      one Write command
    loop.<ext>.jinja       one Loop, receives the inner command's lines
    loopline.<ext>.jinja   one LoopLine command

Commands are rendered bottom-up: a loop renders its inner command first
and hands the resulting lines to its own template for indentation.
"""

import re
from typing import Any, Dict, List

import jinja2

from stubgen.backends.read_data import resolve_variables
from stubgen.language import Language
from stubgen.logging_config import get_logger
from stubgen.model import Stub, Command, Read, Write, Loop, LoopLine, Var

logger = get_logger(__name__)

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_REPEATED_NEWLINES = re.compile(r"\n{2,}")


class RenderError(Exception):
    """
    Raised when a stub cannot be rendered.

    Attributes:
        template_name: Template that was missing or failed
    """

    def __init__(self, message: str, template_name: str):
        super().__init__(message)
        self.template_name = template_name


class StubRenderer:
    """Renders one Stub with one Language. Holds its own template environment."""

    def __init__(self, language: Language, stub: Stub):
        self.language = language
        self.stub = stub
        self.env = language.build_environment()

    def render(self) -> str:
        """
        Render the whole stub through the main template.

        Raises:
            RenderError: If a template is missing or fails to evaluate
        """
        commands = [self._normalize(self.render_command(cmd)) for cmd in self.stub.commands]

        return self._render_template("main", {
            "commands": commands,
            "statement": self.stub.statement,
            "output_comment": self.stub.output_comment,
            "input_comments": [
                {"variable": c.variable, "comment": c.comment} for c in self.stub.input_comments
            ],
        })

    def render_command(self, cmd: Command) -> str:
        if isinstance(cmd, Read):
            return self._render_read(cmd.variables)
        elif isinstance(cmd, Write):
            return self._render_write(cmd.message)
        elif isinstance(cmd, Loop):
            return self._render_loop(cmd.count, cmd.command)
        elif isinstance(cmd, LoopLine):
            return self._render_loopline(cmd.object, cmd.variables)
        raise TypeError(f"Unsupported Command type: {type(cmd)}")

    @staticmethod
    def _lines(text: str) -> List[str]:
        # Only "\n" ends a line; a trailing newline does not start an empty one
        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()
        return lines

    @staticmethod
    def _normalize(rendered: str) -> str:
        return _REPEATED_NEWLINES.sub("\n", f"{rendered}\n")

    def _identifier(self, value: str) -> str:
        # Loop counts may be literals ("3") which stay untouched
        if _IDENTIFIER.fullmatch(value):
            return self.language.transform_variable_name(value)
        return value

    def _render_write(self, message: str) -> str:
        return self._render_template("write", {"messages": self._lines(message)})

    def _render_read(self, variables: List[Var]) -> str:
        return self._render_template("read", {
            "vars": resolve_variables(self.language, self.stub, variables),
            "type_tokens": self.language.type_tokens.to_dict(),
        }).rstrip()

    def _render_loop(self, count: str, cmd: Command) -> str:
        inner = self._lines(self.render_command(cmd))
        return self._render_template("loop", {
            "count": self._identifier(count),
            "inner": inner,
        })

    def _render_loopline(self, obj: str, variables: List[Var]) -> str:
        return self._render_template("loopline", {
            "object": self._identifier(obj),
            "vars": resolve_variables(self.language, self.stub, variables),
            "type_tokens": self.language.type_tokens.to_dict(),
        })

    def _render_template(self, kind: str, context: Dict[str, Any]) -> str:
        template_name = self.language.template_name(kind)
        try:
            template = self.env.get_template(template_name)
            return template.render(**context)
        except jinja2.TemplateNotFound as e:
            logger.error("Template not found", language=self.language.name, template=template_name)
            raise RenderError(f"Could not find {kind} template: {e}", template_name) from e
        except jinja2.TemplateError as e:
            logger.error("Template rendering failed", template=template_name, error=str(e))
            raise RenderError(f"Failed to render template {template_name}: {e}", template_name) from e
        except Exception as e:
            logger.error("Template rendering failed", template=template_name, error=str(e))
            raise RenderError(f"Unexpected error rendering {template_name}: {e}", template_name) from e


def render_stub(language: Language, stub: Stub) -> str:
    """
    Generate target-language source code for a stub.

    Args:
        language: Loaded target Language
        stub: Parsed Stub

    Returns:
        Source code text

    Raises:
        RenderError: If a template is missing or fails to evaluate
    """
    output = StubRenderer(language, stub).render()
    logger.debug("Rendered stub", language=language.name, length=len(output))
    return output


__all__ = ["StubRenderer", "RenderError", "render_stub"]
