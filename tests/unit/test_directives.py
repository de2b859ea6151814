import pytest

from cligen.directives import (
    DirectiveKind,
    Recognized,
    Unrecognized,
    build_descriptor,
    lookup_tag,
    parse_directives,
)
from cligen.field_kinds import FieldKind
from cligen.models import FieldDeclaration


def _field(annotation: str, name: str = "Port", declared_type: str = "int") -> FieldDeclaration:
    return FieldDeclaration(name=name, declared_type=declared_type, annotation=annotation)


def test_lookup_tag_finds_key_among_pairs():
    tag = 'json:"port" cli:"port,p,default:8080" yaml:"p"'
    assert lookup_tag(tag, "cli") == "port,p,default:8080"
    assert lookup_tag(tag, "json") == "port"
    assert lookup_tag(tag, "xml") is None


def test_lookup_tag_unescapes_quoted_value():
    assert lookup_tag(r'cli:"name,usage:say \"hi\""', "cli") == 'name,usage:say "hi"'


def test_lookup_tag_keeps_tabs_and_decodes_escapes():
    tag = 'cli:"env,required,options:a|b,usage:Target\tenv"'
    assert lookup_tag(tag, "cli") == "env,required,options:a|b,usage:Target\tenv"
    assert lookup_tag(r'cli:"name,usage:\x41\101\a"', "cli") == "name,usage:AA\a"
    descriptor = build_descriptor(_field(tag, name="Env", declared_type="str"))
    assert descriptor.required is True
    assert descriptor.options == ("a", "b")


def test_lookup_tag_stops_at_malformed_pair():
    assert lookup_tag('broken cli:"port"', "cli") is None
    assert lookup_tag('cli:"unterminated', "cli") is None
    assert lookup_tag("", "cli") is None


def test_parse_directives_tags_every_token():
    directives = parse_directives("env,e,required,options:a|b,usage:Target env,bogus")
    assert directives == [
        Recognized(DirectiveKind.NAME, "env", "env"),
        Recognized(DirectiveKind.SHORT, "e", "e"),
        Recognized(DirectiveKind.REQUIRED, True, "required"),
        Recognized(DirectiveKind.OPTIONS, ("a", "b"), "options:a|b"),
        Recognized(DirectiveKind.USAGE, "Target env", "usage:Target env"),
        Unrecognized("bogus"),
    ]


def test_parse_directives_skips_empty_name_and_tokens():
    directives = parse_directives(",,p, ")
    assert directives == [Recognized(DirectiveKind.SHORT, "p", "p")]


def test_empty_annotation_yields_default_descriptor():
    descriptor = build_descriptor(_field("", name="Tags", declared_type="list[str]"))
    assert descriptor.cli_name == "tags"
    assert descriptor.kind is FieldKind.STRING_LIST
    assert descriptor.short is None
    assert descriptor.default is None
    assert descriptor.required is False
    assert descriptor.options is None
    assert descriptor.help is None


def test_missing_or_empty_key_yields_default_descriptor():
    assert build_descriptor(_field('json:"port"')).cli_name == "port"
    assert build_descriptor(_field('cli:""')).cli_name == "port"


def test_first_token_renames_flag():
    descriptor = build_descriptor(_field('cli:"listen-port"'))
    assert descriptor.cli_name == "listen-port"
    assert descriptor.name == "Port"


@pytest.mark.parametrize(
    "literal",
    ["8080", "0x1F", "./dist", "a b", "x:y", "default:nested", "${HOME}", "%s"],
)
def test_default_is_kept_verbatim(literal):
    descriptor = build_descriptor(_field(f'cli:"port,default:{literal}"'))
    assert descriptor.default == literal


def test_empty_default_is_distinct_from_missing_default():
    assert build_descriptor(_field('cli:"port,default:"')).default == ""
    assert build_descriptor(_field('cli:"port"')).default is None


def test_last_short_flag_wins():
    descriptor = build_descriptor(_field('cli:"port,p,q"'))
    assert descriptor.short == "q"


def test_options_preserve_order_and_duplicates():
    descriptor = build_descriptor(
        _field('cli:"env,options:c|a|b|a"', name="Env", declared_type="str")
    )
    assert descriptor.options == ("c", "a", "b", "a")


def test_required_and_default_coexist():
    descriptor = build_descriptor(_field('cli:"port,required,default:1"'))
    assert descriptor.required is True
    assert descriptor.default == "1"


def test_usage_sets_help_text():
    descriptor = build_descriptor(_field('cli:"port,usage:Port to listen on"'))
    assert descriptor.help == "Port to listen on"


def test_unrecognized_tokens_are_collected_not_raised():
    descriptor = build_descriptor(_field('cli:"port, bogus ,p,optoins:a|b"'))
    assert descriptor.short == "p"
    assert descriptor.options is None
    assert descriptor.unrecognized == ("bogus", "optoins:a|b")


@pytest.mark.parametrize(
    "annotation",
    ['cli:"', 'cli:"\\"', "cli:port", ":::", 'cli:"a,,,|,:"', "\x00\x7f", 'cli:"\\u12"'],
)
def test_malformed_annotations_never_raise(annotation):
    descriptor = build_descriptor(_field(annotation))
    assert descriptor.name == "Port"
