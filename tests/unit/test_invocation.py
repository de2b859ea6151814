import pytest

from cligen.comments import find_generate_comments
from cligen.errors import InvocationError
from cligen.invocation import Invocation, parse_invocation


def test_positional_form():
    assert parse_invocation(["serve", "Starts an HTTP server"]) == Invocation(
        command="serve", help="Starts an HTTP server"
    )
    assert parse_invocation(["serve", "Help", "out/cli.py"]).output == "out/cli.py"


def test_long_form_with_equals():
    invocation = parse_invocation(["--command=build", "--help=Builds the application"])
    assert invocation == Invocation(command="build", help="Builds the application")


def test_long_form_with_separate_values():
    invocation = parse_invocation(["--command", "build", "--output", "x.py", "--help", "Builds"])
    assert invocation == Invocation(command="build", help="Builds", output="x.py")


@pytest.mark.parametrize(
    "tokens",
    [
        [],
        ["serve"],
        ["serve", "help", "out.py", "extra"],
        ["--help=only help"],
        ["--command=serve", "--verbose"],
        ["--command"],
        ["", "help"],
    ],
)
def test_invalid_invocations(tokens):
    with pytest.raises(InvocationError):
        parse_invocation(tokens)


def test_find_generate_comments_in_order(commands_source):
    invocations = find_generate_comments(commands_source.read_text())
    assert invocations == [
        Invocation(command="serve", help="Starts an HTTP server"),
        Invocation(command="build", help="Builds the application"),
    ]


def test_find_generate_comments_ignores_other_comments():
    text = "# cligen is great\n#cligen: deploy 'Deploy it' out.py\nx = 1  # cligen: no\n"
    assert find_generate_comments(text) == [
        Invocation(command="deploy", help="Deploy it", output="out.py")
    ]


def test_find_generate_comments_reports_line():
    with pytest.raises(InvocationError) as excinfo:
        find_generate_comments("\n# cligen: serve 'unterminated\n")
    assert "line 2" in str(excinfo.value)
