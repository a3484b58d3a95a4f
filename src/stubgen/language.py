"""
Target language configuration.

Each language lives in its own template directory:

    templates/<name>/stub_config.yaml      naming convention, keywords, type tokens
    templates/<name>/<kind>.<ext>.jinja    main, read, write, loop, loopline

Languages are looked up by directory name first and by alias second,
in user supplied template directories before the bundled ones.
A loaded Language is never mutated, so one instance can serve many renders.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import jinja2
import yaml

from stubgen.casing import VariableNameFormat, case_filter, escape_keyword, transform_variable_name
from stubgen.logging_config import get_logger
from stubgen.model import Var, VarType

logger = get_logger(__name__)

CONFIG_FILENAME = "stub_config.yaml"
TEMPLATES_ENV_VAR = "STUBGEN_TEMPLATES_DIR"
BUNDLED_TEMPLATES_DIR = Path(__file__).parent / "templates"


def escape_string(text: str, extra: str = "") -> str:
    """
    Escape text for a double-quoted string literal.

    Backslashes and quotes are always escaped, then each character of
    `extra` (e.g. "#" for ruby interpolation).
    """
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    for char in extra:
        escaped = escaped.replace(char, "\\" + char)
    return escaped


class LanguageError(Exception):
    """Base class for language configuration failures."""
    pass


class LanguageNotFoundError(LanguageError):
    """Raised when no language matches a name or alias."""

    def __init__(self, name: str):
        super().__init__(f"Unsupported language: {name}")
        self.name = name


class LanguageConfigError(LanguageError):
    """Raised when a stub_config.yaml file is unreadable or invalid."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(f"{message} ({path})" if path else message)
        self.path = path


@dataclass(frozen=True)
class TypeTokens:
    """
    Target-language text for each DSL type.

    A None token means the language's templates handle the type themselves.
    """

    int: Optional[str] = None
    float: Optional[str] = None
    long: Optional[str] = None
    bool: Optional[str] = None
    word: Optional[str] = None
    string: Optional[str] = None

    def token_for(self, var_type: VarType) -> Optional[str]:
        return getattr(self, var_type.value)

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {var_type.value.capitalize(): self.token_for(var_type) for var_type in VarType}


@dataclass(frozen=True)
class Language:
    """
    Loaded configuration of one target language.

    Properties:
        name: Directory name of the language (e.g. "python")
        variable_format: Naming convention for variables
        source_file_ext: Extension used in template names (e.g. "py")
        type_tokens: TypeTokens table
        keywords: Reserved identifiers, escaped with a leading underscore
        allow_uppercase_vars: False lowercases all-caps identifiers
        aliases: Alternate names accepted by load_language()
        template_dir: Directory holding the jinja templates
    """

    name: str
    variable_format: VariableNameFormat
    source_file_ext: str
    type_tokens: TypeTokens = field(default_factory=TypeTokens)
    keywords: frozenset = frozenset()
    allow_uppercase_vars: Optional[bool] = None
    aliases: tuple = ()
    template_dir: Optional[Path] = None

    def transform_variable_name(self, variable_name: str) -> str:
        return transform_variable_name(
            self.variable_format,
            variable_name,
            keywords=self.keywords,
            allow_uppercase_vars=self.allow_uppercase_vars,
        )

    def transform_variable(self, var: Var) -> Var:
        return Var(self.transform_variable_name(var.name), var.var_type, max_length=var.max_length)

    def escape_keywords(self, variable_name: str) -> str:
        return escape_keyword(variable_name, self.keywords)

    def template_name(self, kind: str) -> str:
        return f"{kind}.{self.source_file_ext}.jinja"

    def build_environment(self) -> jinja2.Environment:
        """
        Create a fresh template environment for this language.

        Undefined template variables are errors, and the `case` filter
        follows the language's naming convention.
        """
        if self.template_dir is None:
            raise LanguageConfigError(f"Language '{self.name}' has no template directory")

        env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(self.template_dir)),
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=True,
            autoescape=False,
        )
        env.filters["case"] = case_filter(self.variable_format)
        env.filters["escape_string"] = escape_string
        return env


def _require(config: Dict[str, Any], key: str, expected: type, path: Path) -> Any:
    if key not in config:
        raise LanguageConfigError(f"Missing required key '{key}'", path)
    value = config[key]
    if not isinstance(value, expected):
        raise LanguageConfigError(f"Key '{key}' must be a {expected.__name__}", path)
    return value


def _optional_list(config: Dict[str, Any], key: str, path: Path) -> List[str]:
    value = config.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise LanguageConfigError(f"Key '{key}' must be a list of strings", path)
    return value


def _type_tokens_from_dict(d: Dict[str, Any], path: Path) -> TypeTokens:
    tokens = {}
    for key, value in d.items():
        field_name = str(key).lower()
        if field_name not in {var_type.value for var_type in VarType}:
            raise LanguageConfigError(f"Unknown type token '{key}'", path)
        if value is not None and not isinstance(value, str):
            raise LanguageConfigError(f"Type token '{key}' must be a string", path)
        tokens[field_name] = value
    return TypeTokens(**tokens)


def language_from_dict(config: Dict[str, Any], template_dir: Optional[Path] = None,
                       path: Optional[Path] = None) -> Language:
    """
    Build a Language from a parsed stub_config mapping.

    Raises:
        LanguageConfigError: If a key is missing or has the wrong shape
    """
    path = path or template_dir
    if not isinstance(config, dict):
        raise LanguageConfigError("Stub configuration must be a mapping", path)

    name = _require(config, "name", str, path)
    ext = _require(config, "source_file_ext", str, path)
    format_value = _require(config, "variable_format", str, path)
    try:
        variable_format = VariableNameFormat(format_value)
    except ValueError:
        raise LanguageConfigError(f"Unknown variable_format '{format_value}'", path)

    allow_uppercase_vars = config.get("allow_uppercase_vars")
    if allow_uppercase_vars is not None and not isinstance(allow_uppercase_vars, bool):
        raise LanguageConfigError("Key 'allow_uppercase_vars' must be a boolean", path)

    return Language(
        name=name,
        variable_format=variable_format,
        source_file_ext=ext,
        type_tokens=_type_tokens_from_dict(_require(config, "type_tokens", dict, path), path),
        keywords=frozenset(_optional_list(config, "keywords", path)),
        allow_uppercase_vars=allow_uppercase_vars,
        aliases=tuple(alias.lower() for alias in _optional_list(config, "aliases", path)),
        template_dir=template_dir,
    )


def load_language_file(config_path: Path) -> Language:
    """
    Load a Language from a stub_config.yaml file.

    Templates are looked up next to the configuration file.

    Raises:
        LanguageConfigError: If the file cannot be read or is invalid
    """
    config_path = Path(config_path)
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
    except OSError as e:
        raise LanguageConfigError(f"No stub configuration could be read: {e}", config_path)
    except yaml.YAMLError as e:
        raise LanguageConfigError(f"There was an error loading the stub configuration: {e}", config_path)

    return language_from_dict(config, template_dir=config_path.parent, path=config_path)


def template_search_path(template_dirs: Optional[Sequence[os.PathLike]] = None) -> List[Path]:
    """
    Directories searched for language folders, highest priority first.

    Explicit template_dirs come first, then STUBGEN_TEMPLATES_DIR entries,
    then the templates bundled with the package.
    """
    search_path = [Path(d) for d in (template_dirs or [])]
    env_dirs = os.environ.get(TEMPLATES_ENV_VAR, "")
    search_path.extend(Path(d) for d in env_dirs.split(os.pathsep) if d)
    search_path.append(BUNDLED_TEMPLATES_DIR)
    return search_path


def _config_files(search_path: List[Path]) -> List[Path]:
    config_files = []
    for directory in search_path:
        if directory.is_dir():
            config_files.extend(sorted(directory.glob(f"*/{CONFIG_FILENAME}")))
    return config_files


def load_language(name: str, template_dirs: Optional[Sequence[os.PathLike]] = None) -> Language:
    """
    Find and load a language by name or alias (case-insensitive).

    Args:
        name: Language directory name or one of its aliases
        template_dirs: Extra directories searched before the bundled templates

    Returns:
        Language ready to render

    Raises:
        LanguageNotFoundError: If nothing matches
        LanguageConfigError: If the matching configuration is invalid
    """
    wanted = name.lower()
    search_path = template_search_path(template_dirs)

    for directory in search_path:
        config_path = directory / wanted / CONFIG_FILENAME
        if config_path.is_file():
            logger.debug("Resolved language by name", language=wanted, path=str(config_path))
            return load_language_file(config_path)

    for config_path in _config_files(search_path):
        try:
            language = load_language_file(config_path)
        except LanguageConfigError as e:
            logger.warning("Skipping invalid stub configuration", path=str(config_path), error=str(e))
            continue
        if wanted in language.aliases:
            logger.debug("Resolved language by alias", alias=wanted, language=language.name)
            return language

    raise LanguageNotFoundError(name)


def available_languages(template_dirs: Optional[Sequence[os.PathLike]] = None) -> List[str]:
    """Names of every language folder on the search path, without duplicates."""
    names = []
    for config_path in _config_files(template_search_path(template_dirs)):
        if config_path.parent.name not in names:
            names.append(config_path.parent.name)
    return sorted(names)


__all__ = [
    "Language",
    "TypeTokens",
    "LanguageError",
    "LanguageNotFoundError",
    "LanguageConfigError",
    "language_from_dict",
    "load_language_file",
    "load_language",
    "available_languages",
    "template_search_path",
    "escape_string",
]
