"""cligen - generate argparse front ends from annotated argument classes.

Example usage:
    from cligen import GeneratorConfig, generate

    result = generate(
        GeneratorConfig(
            source_file="commands.py",
            command="serve",
            help="Starts an HTTP server",
        )
    )
    print(result.output_path)
"""

from cligen.config import GeneratorConfig, load_generator_config
from cligen.directives import build_descriptor, lookup_tag, parse_directives
from cligen.errors import (
    CligenError,
    DeclarationNotFound,
    DirectiveSyntaxError,
    FlagConflictError,
    InvocationError,
    OutputWriteError,
    SourceParseError,
)
from cligen.field_kinds import FieldKind
from cligen.generator import GenerationResult, Generator, generate
from cligen.locator import find_declaration
from cligen.markers import cli_args
from cligen.models import FieldDeclaration, FieldDescriptor, SourceDeclaration

__version__ = "0.1.0"

__all__ = [
    # Markers
    "cli_args",
    # Models
    "FieldDeclaration",
    "FieldDescriptor",
    "FieldKind",
    "SourceDeclaration",
    # Pipeline
    "build_descriptor",
    "find_declaration",
    "lookup_tag",
    "parse_directives",
    "GenerationResult",
    "Generator",
    "GeneratorConfig",
    "generate",
    "load_generator_config",
    # Errors
    "CligenError",
    "DeclarationNotFound",
    "DirectiveSyntaxError",
    "FlagConflictError",
    "InvocationError",
    "OutputWriteError",
    "SourceParseError",
]
