#!/usr/bin/env python3
"""
Demo: Generate stubs for every bundled language.

Parses the example stub generator once and renders it with each template set.
"""

from stubgen.examples import EXAMPLE_GENERATOR
from stubgen.parser import parse_stub_string
from stubgen.language import available_languages, load_language
from stubgen.backends import render_stub
from stubgen.serialization import stub_to_yaml


def main():
    stub = parse_stub_string(EXAMPLE_GENERATOR)

    print("=" * 80)
    print("STUB GENERATOR DEMO")
    print("=" * 80)

    print("\nPARSED STUB:")
    print("-" * 80)
    print(stub_to_yaml(stub))

    for name in available_languages():
        language = load_language(name)

        print(f"\n{name.upper()} ({language.variable_format.value}):")
        print("-" * 80)
        print(render_stub(language, stub))

    print("=" * 80)


if __name__ == "__main__":
    main()
