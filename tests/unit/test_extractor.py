import ast
from pathlib import Path

import pytest

from cligen.errors import SourceParseError
from cligen.extractor import UNKNOWN_TYPE, extract_fields, resolve_type, split_annotated
from cligen.field_kinds import FieldKind, kind_for_type
from cligen.source import load_declarations, load_source_declarations, parse_source


def _expr(text: str) -> ast.expr:
    return ast.parse(text, mode="eval").body


def _class(text: str) -> ast.ClassDef:
    node = ast.parse(text).body[0]
    assert isinstance(node, ast.ClassDef)
    return node


@pytest.mark.parametrize(
    "annotation,expected",
    [
        ("int", "int"),
        ("str", "str"),
        ("list[str]", "list[str]"),
        ("List[int]", "list[int]"),
        ("typing.List[str]", "list[str]"),
        ("Optional[int]", "optional[int]"),
        ("str | None", "optional[str]"),
        ("None | str", "optional[str]"),
        ("Union[int, None]", "optional[int]"),
        ("'list[str]'", "list[str]"),
        ("list[list[str]]", "list[list[str]]"),
        ("dict[str, int]", UNKNOWN_TYPE),
        ("pathlib.Path", UNKNOWN_TYPE),
        ("int | str", UNKNOWN_TYPE),
        ("Union[int, str, None]", UNKNOWN_TYPE),
        ("'not valid ('", UNKNOWN_TYPE),
    ],
)
def test_resolve_type(annotation, expected):
    assert resolve_type(_expr(annotation)) == expected


def test_kind_for_type():
    assert kind_for_type("str") is FieldKind.STRING
    assert kind_for_type("int") is FieldKind.INTEGER
    assert kind_for_type("bool") is FieldKind.BOOLEAN
    assert kind_for_type("list[str]") is FieldKind.STRING_LIST
    assert kind_for_type("list[int]") is FieldKind.UNKNOWN
    assert kind_for_type("optional[str]") is FieldKind.UNKNOWN
    assert kind_for_type("float") is FieldKind.UNKNOWN


def test_split_annotated_takes_first_string_metadata():
    type_expr, annotation = split_annotated(_expr("Annotated[int, 42, 'cli:\"port\"', 'other']"))
    assert resolve_type(type_expr) == "int"
    assert annotation == 'cli:"port"'


def test_split_annotated_without_string_metadata():
    type_expr, annotation = split_annotated(_expr("typing.Annotated[str, Marker()]"))
    assert resolve_type(type_expr) == "str"
    assert annotation == ""


def test_split_annotated_passes_plain_types_through():
    type_expr, annotation = split_annotated(_expr("list[str]"))
    assert resolve_type(type_expr) == "list[str]"
    assert annotation == ""


def test_extract_fields_in_declaration_order():
    class_def = _class(
        '''
class DeployCLIArgs:
    """Docstring."""

    mode = "fast"
    registry: ClassVar[dict] = {}
    target: Annotated[str, 'cli:"target,t"']
    replicas: int = 3
    labels: Annotated[list[str], 'cli:"label"'] = []
    timeout: float

    def run(self) -> None:
        pass
'''
    )
    fields = extract_fields(class_def)

    assert [field.name for field in fields] == ["target", "replicas", "labels", "timeout"]
    assert [field.declared_type for field in fields] == ["str", "int", "list[str]", "float"]
    assert fields[0].annotation == 'cli:"target,t"'
    assert fields[1].annotation == ""
    assert fields[0].lineno == 7


def test_load_declarations_lists_top_level_classes_only():
    module = parse_source(
        """
class First:
    a: int

    class Nested:
        b: int

def helper():
    class Hidden:
        c: int

@cli_args("serve")
@other("build")
class Second:
    pass
"""
    )
    declarations = load_declarations(module)

    assert [declaration.name for declaration in declarations] == ["First", "Second"]
    assert [field.name for field in declarations[0].fields] == ["a"]
    assert declarations[1].markers == ("serve",)


def test_load_declarations_with_dotted_marker():
    module = parse_source("import cligen\n\n@cligen.cli_args('deploy')\nclass Anything:\n    x: int\n")
    assert load_declarations(module)[0].markers == ("deploy",)


def test_parse_source_rejects_invalid_python():
    with pytest.raises(SourceParseError):
        parse_source("class Broken(:\n    pass\n", filename="broken.py")


def test_load_source_declarations_missing_file(tmp_path: Path):
    with pytest.raises(SourceParseError):
        load_source_declarations(tmp_path / "missing.py")


def test_load_source_declarations_reads_sample(commands_source: Path):
    declarations = load_source_declarations(commands_source)
    assert [declaration.name for declaration in declarations] == ["ServeCLIArgs", "BuildCLIArgs"]
    build = declarations[1]
    assert [field.name for field in build.fields] == [
        "output",
        "verbose",
        "tags",
        "platform",
        "timeout",
    ]
