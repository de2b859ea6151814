"""Configuration dataclasses for a generation run.

These types are designed for use with compoconf so that settings can be
read from YAML files and merged with command line overrides.
"""

from __future__ import annotations

from dataclasses import dataclass, field, MISSING
from pathlib import Path

from compoconf import ConfigInterface

from ..directives import DEFAULT_TAG_KEY
from ..emitter import module_stem
from ..locator import DEFAULT_NAME_MARKER
from ..markers import DEFAULT_MARKER_DECORATOR


def default_output_path(command: str) -> str:
    stem = module_stem(command)
    return str(Path(f"cmd_{stem}") / f"{stem}_cli.py")


@dataclass(kw_only=True)
class GeneratorConfig(ConfigInterface):
    """Parameters of one generation run.

    Attributes:
        source_file: Python file holding the argument classes.
        command: Command name; selects the argument class and names the outputs.
        help: Help text printed by the generated ``--help`` path.
        output: Path of the generated front end. Defaults to
            ``cmd_<command>/<command>_cli.py``.
        tag_key: Annotation key holding the directive list.
        marker: Substring every argument class name must contain.
        marker_decorator: Decorator name of the explicit ``@cli_args`` marker.
        emit_stub: Create ``<command>_impl.py`` next to the output if missing.
        emit_project: Rewrite ``pyproject.toml`` next to the output.
        strict_directives: Fail the run on unrecognized directive tokens.
        requires_python: ``requires-python`` of the generated project.
    """

    class_name: str = "Generator"
    source_file: str = field(default=MISSING)
    command: str = field(default=MISSING)
    help: str = ""
    output: str | None = None
    tag_key: str = DEFAULT_TAG_KEY
    marker: str = DEFAULT_NAME_MARKER
    marker_decorator: str = DEFAULT_MARKER_DECORATOR
    emit_stub: bool = True
    emit_project: bool = True
    strict_directives: bool = False
    requires_python: str = ">=3.10"

    def __post_init__(self):
        self.output = self.output or default_output_path(self.command)


__all__ = ["GeneratorConfig", "default_output_path"]
