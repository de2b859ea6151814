"""End-to-end generation of a command front end from a source file."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .config.schema import GeneratorConfig
from .directives import build_descriptor
from .emitter import (
    find_flag_conflicts,
    module_stem,
    render_front_end,
    render_impl_stub,
    render_project_descriptor,
    write_impl_stub,
    write_output,
    write_project_descriptor,
)
from .errors import DirectiveSyntaxError, FlagConflictError
from .field_kinds import FieldKind
from .locator import find_declaration
from .models import FieldDescriptor, SourceDeclaration
from .source import load_source_declarations
from .template_renderer import TemplateSet, load_templates

LOGGER = logging.getLogger(__name__)

PROJECT_DESCRIPTOR = "pyproject.toml"


@dataclass(frozen=True)
class GenerationResult:
    """Files produced by one generation run."""

    struct_name: str
    descriptors: tuple[FieldDescriptor, ...]
    output_path: Path
    project_path: Path | None = None
    stub_path: Path | None = None
    stub_created: bool = False


class Generator:
    """Runs the source -> descriptors -> files pipeline for one command."""

    def __init__(self, config: GeneratorConfig, templates: TemplateSet | None = None) -> None:
        self.config = config
        self.templates = load_templates() if templates is None else templates

    @property
    def output_path(self) -> Path:
        return Path(self.config.output)

    @property
    def cli_module(self) -> str:
        return self.output_path.stem

    @property
    def impl_module(self) -> str:
        return f"{module_stem(self.config.command)}_impl"

    @property
    def impl_path(self) -> Path:
        return self.output_path.parent / f"{self.impl_module}.py"

    @property
    def project_path(self) -> Path:
        return self.output_path.parent / PROJECT_DESCRIPTOR

    def locate(self) -> SourceDeclaration:
        declarations = load_source_declarations(
            self.config.source_file, decorator=self.config.marker_decorator
        )
        return find_declaration(
            declarations,
            self.config.command,
            marker=self.config.marker,
            source=str(self.config.source_file),
        )

    def describe(self, declaration: SourceDeclaration) -> list[FieldDescriptor]:
        """Resolve the fields of ``declaration`` into descriptors.

        Unrecognized directive tokens and unsupported field types are logged;
        with ``strict_directives`` the former abort the run. Conflicting flags
        always abort it.
        """
        descriptors = [build_descriptor(field, self.config.tag_key) for field in declaration.fields]
        problems: list[str] = []
        for descriptor in descriptors:
            for token in descriptor.unrecognized:
                message = f"{declaration.name}.{descriptor.name}: unrecognized directive {token!r}"
                LOGGER.warning(message)
                problems.append(message)
            if descriptor.kind is FieldKind.UNKNOWN:
                LOGGER.warning(
                    f"{declaration.name}.{descriptor.name}: type {descriptor.declared_type!r} "
                    "is not supported, no flag is generated"
                )
        if problems and self.config.strict_directives:
            raise DirectiveSyntaxError("; ".join(problems))
        conflicts = find_flag_conflicts(descriptors)
        if conflicts:
            raise FlagConflictError(f"{declaration.name}: " + "; ".join(conflicts))
        return descriptors

    def generate(self) -> GenerationResult:
        """Generate the front end and its companion files.

        Raises:
            SourceParseError: If the source file cannot be read or parsed.
            DeclarationNotFound: If no class matches the command.
            DirectiveSyntaxError: In strict mode, on unrecognized directives.
            FlagConflictError: If two fields would register the same flag.
            OutputWriteError: If an output file cannot be written.
        """
        config = self.config
        declaration = self.locate()
        descriptors = self.describe(declaration)

        front_end = render_front_end(
            config.command,
            config.help,
            declaration.name,
            descriptors,
            self.impl_module,
            templates=self.templates,
        )
        output_path = write_output(self.output_path, front_end)
        LOGGER.info(f"Generated {output_path} from {declaration.name}")

        project_path = None
        if config.emit_project:
            descriptor_text = render_project_descriptor(
                config.command,
                config.help,
                self.cli_module,
                self.impl_module,
                requires_python=config.requires_python,
                templates=self.templates,
            )
            project_path = write_project_descriptor(self.project_path, descriptor_text)

        stub_path = None
        stub_created = False
        if config.emit_stub:
            stub_path = self.impl_path
            stub_text = render_impl_stub(
                config.command,
                declaration.name,
                descriptors,
                self.cli_module,
                templates=self.templates,
            )
            stub_created = write_impl_stub(stub_path, stub_text)

        return GenerationResult(
            struct_name=declaration.name,
            descriptors=tuple(descriptors),
            output_path=output_path,
            project_path=project_path,
            stub_path=stub_path,
            stub_created=stub_created,
        )


def generate(config: GeneratorConfig) -> GenerationResult:
    return Generator(config).generate()


__all__ = ["GenerationResult", "Generator", "generate"]
