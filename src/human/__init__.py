"""
Human - compile plain-English application descriptions into an Intent IR.

The IR is framework-agnostic: code generators, the CI/CD config generator
and the static-analysis engine all read the same Application tree.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.builder import build_application, compile_source
from .core.errors import BuildError, HumanError, ParseError, SerializationError

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "build_application",
    "compile_source",
    "HumanError",
    "ParseError",
    "BuildError",
    "SerializationError",
]
