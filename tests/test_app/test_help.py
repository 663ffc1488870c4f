import io

from argwalk import Arg, Command
from argwalk.help import get_usage, render_help, render_version


def build_root():
    root = Command("git", "The stupid content tracker")
    root.set_out(io.StringIO())
    root.add_arg(Arg.boolean_option("verbose", "v", "Be verbose"))

    clone = Command("clone", "Clone a repository", aliases=["cl"])
    clone.set_group_id("start a working area")
    clone.add_arg(Arg.positional("REPO", "Repository to clone"))
    clone.add_arg(
        Arg.single_value_option_with_valid_values(
            "depth", "d", "History depth", ["1", "10"]
        )
    )
    clone.set_example("git clone https://example.com/repo.git")

    secret = Command("secret", "Internal command")
    secret.set_hidden(True)

    root.add_subcommands([clone, secret])
    return root, clone


def test_usage():
    root, clone = build_root()
    assert get_usage(root) == "git [OPTIONS] [COMMAND]"
    assert get_usage(clone) == "git clone [OPTIONS] <REPO>"
    clone.set_use("git clone <url>")
    assert get_usage(clone) == "git clone <url>"


def test_root_help_lists_visible_subcommands():
    root, _ = build_root()
    render_help(root)
    output = root.out_or_stdout().getvalue()
    assert "usage: git [OPTIONS] [COMMAND]" in output
    assert "The stupid content tracker" in output
    assert "start a working area:" in output
    assert "clone, cl" in output
    assert "secret" not in output
    assert "-v, --verbose" in output
    assert "-h, --help" in output


def test_subcommand_help():
    root, clone = build_root()
    render_help(clone)
    output = root.out_or_stdout().getvalue()
    assert "positional:" in output
    assert "Repository to clone" in output
    assert "-d, --depth {1,10}" in output
    assert "examples:" in output
    assert "git clone https://example.com/repo.git" in output


def test_render_version():
    root, _ = build_root()
    root.set_version("2.45.0")
    render_version(root)
    assert root.out_or_stdout().getvalue() == "git 2.45.0\n"
