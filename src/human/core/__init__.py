"""Core Human functionality: statement reader, IR, extractors, builder, serialization."""

from . import ir
from .builder import ApplicationBuilder, build_application, compile_source
from .classify import classify, classify_all
from .errors import (
    BuildError,
    ErrorContext,
    HumanError,
    ParseError,
    SerializationError,
)
from .manifest import ProjectManifest, find_manifest, load_manifest
from .parser import Program, Statement, parse_file, parse_source
from .serialize import from_json, from_yaml, to_json, to_yaml

__all__ = [
    "ir",
    "HumanError",
    "ParseError",
    "BuildError",
    "SerializationError",
    "ErrorContext",
    "Program",
    "Statement",
    "parse_source",
    "parse_file",
    "classify",
    "classify_all",
    "ApplicationBuilder",
    "build_application",
    "compile_source",
    "to_json",
    "from_json",
    "to_yaml",
    "from_yaml",
    "ProjectManifest",
    "load_manifest",
    "find_manifest",
]
