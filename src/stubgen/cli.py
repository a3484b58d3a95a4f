"""CLI interface for stub generation."""

import argparse
import sys
from pathlib import Path

from stubgen.backends import RenderError, render_stub
from stubgen.language import LanguageError, available_languages, load_language
from stubgen.logging_config import get_logger, setup_logging
from stubgen.parser import StubParseError, parse_stub_string
from stubgen.serialization import stub_to_json, stub_to_yaml

logger = get_logger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stubgen",
        description="Stub Generator - Generate puzzle input/output boilerplate from the stub DSL",
    )

    parser.add_argument(
        "language",
        nargs="?",
        help="Target language name or alias (e.g., python, rb, java)",
    )

    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        help="Stub generator file (default: read from stdin)",
    )

    parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Write generated code to this file instead of stdout",
    )

    parser.add_argument(
        "--templates-dir",
        type=Path,
        action="append",
        default=[],
        help="Extra directory of language templates, searched before the bundled ones (repeatable)",
    )

    parser.add_argument(
        "--dump",
        choices=["json", "yaml"],
        help="Print the parsed stub tree instead of generating code",
    )

    parser.add_argument(
        "--list-languages",
        action="store_true",
        help="List available languages and exit",
    )

    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (default: WARNING)",
    )

    return parser


def main(argv=None) -> int:
    """Main CLI entry point for stub generation."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    if args.list_languages:
        for name in available_languages(args.templates_dir):
            print(name)
        return 0

    if args.dump is not None and args.input is None and args.language is not None:
        # With --dump the only positional is the input file
        args.input = Path(args.language)

    if args.dump is None and args.language is None:
        parser.error("a language is required unless --dump or --list-languages is given")

    try:
        if args.input is not None:
            generator = args.input.read_text(encoding="utf-8")
        else:
            generator = sys.stdin.read()
    except OSError as e:
        print(f"Error reading stub generator: {e}", file=sys.stderr)
        return 1

    try:
        stub = parse_stub_string(generator)

        if args.dump == "json":
            output = stub_to_json(stub) + "\n"
        elif args.dump == "yaml":
            output = stub_to_yaml(stub)
        else:
            language = load_language(args.language, template_dirs=args.templates_dir)
            output = render_stub(language, stub)
    except StubParseError as e:
        print(f"Parse error at token {e.position}: {e}", file=sys.stderr)
        return 1
    except LanguageError as e:
        print(f"Language error: {e}", file=sys.stderr)
        return 1
    except RenderError as e:
        print(f"Render error in {e.template_name}: {e}", file=sys.stderr)
        return 1

    if args.output is not None:
        args.output.write_text(output, encoding="utf-8")
        logger.info("Wrote stub", path=str(args.output))
    else:
        sys.stdout.write(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
