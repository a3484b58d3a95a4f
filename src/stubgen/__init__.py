"""
Stub Generator Package

Turns a compact stub DSL describing a puzzle's input/output contract
into ready-to-compile boilerplate for a target programming language.

Pipeline:
    DSL text -> tokenize -> parse -> Stub -> render (per Language) -> source

ARCHITECTURAL GUARANTEE:
------------------------
The Stub model contains ZERO knowledge of target languages.
All language specifics live in template directories
(stub_config.yaml + jinja templates).
"""

__version__ = "0.1.0"
