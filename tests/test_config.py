import textwrap

import pytest

from argwalk import (
    App,
    ArgumentDeclarationError,
    ArgumentParseError,
    CommandProperty,
    ErrorKind,
)
from argwalk.config import ArgConfig, ArgKind, CommandConfig, loader

HOOKS_MODULE = """
calls = []


def record(command, args):
    calls.append((command.name, list(args)))
"""

YAML_CONFIG = """
name: tool
description: A configured tool
version: 0.3.0
args:
  - name: verbose
    kind: boolean
    short: v
  - name: format
    kind: single
    short: f
    valid_values: [json, text]
    default: text
commands:
  - name: build
    description: Build targets
    aliases: [b]
    properties: [positional_arg_required]
    args:
      - name: TARGETS
        kind: positional
        max_values: 3
      - name: jobs
        kind: option
        short: j
        placeholder: N
    hooks:
      run: hooks_module.record
"""

TOML_CONFIG = """
name = "tool"
properties = ["subcommand_required"]

[[args]]
name = "include"
kind = "multi"
short = "I"
max_values = 4
delimiter = ";"

[[commands]]
name = "serve"
hidden = true

[[commands.args]]
name = "port"
kind = "single"
short = "p"
"""


@pytest.fixture
def hooks_module(tmp_path, monkeypatch):
    (tmp_path / "hooks_module.py").write_text(HOOKS_MODULE, encoding="UTF-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    import hooks_module

    hooks_module.calls.clear()
    return hooks_module


@pytest.mark.asyncio
async def test_yaml_loader(tmp_path, hooks_module):
    path = tmp_path / "argwalk.yaml"
    path.write_text(YAML_CONFIG, encoding="UTF-8")

    app = loader(path)
    assert isinstance(app, App)
    assert app.name == "tool"
    assert app.version == "0.3.0"

    root = app.root_command()
    build = root.find_subcommand("b")
    assert build is not None and build.name == "build"
    assert build.has_property(CommandProperty.POSITIONAL_ARG_REQUIRED)
    assert build.find_short_option("j").value_placeholder == "N"

    matches = app.parse_from(["-v", "build", "all", "docs"])
    assert matches.get_single_value("format") == "text"
    assert matches.subcommand_matches("build").get_multi_values("TARGETS") == [
        "all",
        "docs",
    ]

    assert await app.run(["b", "lib"]) == 0
    assert hooks_module.calls == [("build", ["lib"])]


def test_toml_loader(tmp_path):
    path = tmp_path / "argwalk.toml"
    path.write_text(TOML_CONFIG, encoding="UTF-8")

    app = loader(str(path))
    root = app.root_command()
    assert root.has_property(CommandProperty.SUBCOMMAND_REQUIRED)
    assert root.find_subcommand("serve").hidden

    matches = app.parse_from(["-I=a;b", "serve", "-p", "8080"])
    assert matches.get_multi_values("include") == ["a", "b"]
    assert matches.subcommand_matches("serve").get_single_value("port") == "8080"


def test_loaded_tree_reports_parse_errors(tmp_path, hooks_module):
    path = tmp_path / "argwalk.yml"
    path.write_text(YAML_CONFIG, encoding="UTF-8")
    app = loader(path)
    with pytest.raises(ArgumentParseError) as exc_info:
        app.parse_from(["--format", "xml"])
    assert exc_info.value.error.kind is ErrorKind.INVALID_OPTION_VALUE


def test_arg_kind_aliases():
    assert ArgKind("flag") is ArgKind.BOOLEAN
    assert ArgKind("LIST") is ArgKind.MULTI
    with pytest.raises(ValueError):
        ArgKind("tuple")


def test_arg_config_validation():
    with pytest.raises(ValueError):
        ArgConfig(name="FILE", kind="positional", short="f")
    with pytest.raises(ValueError):
        ArgConfig(name="verbose", kind="boolean", index=1)
    with pytest.raises(ValueError):
        ArgConfig(name="verbose", kind="unknown")


def test_arg_config_to_arg():
    arg = ArgConfig(
        name="level",
        kind="single",
        long="log-level",
        valid_values=["info", "debug"],
        default="info",
        allow_empty=True,
    ).to_arg()
    assert arg.long_name == "log-level"
    assert arg.default_values == ["info"]
    assert arg.has_property("empty")


@pytest.mark.parametrize("long", ["-x", "log=level"])
def test_arg_config_rejects_invalid_long_name(long):
    with pytest.raises(ArgumentDeclarationError):
        ArgConfig(name="level", kind="single", long=long).to_arg()


def test_command_config_suggest_for():
    config = CommandConfig.model_validate(
        {
            "name": "tool",
            "commands": [{"name": "remove", "suggest_for": ["delete", "del"]}],
        }
    )
    root = config.to_command()
    assert root.find_subcommand("remove").suggest_for == ["delete", "del"]
    assert root.find_suggestions("delete") == ["remove"]


def test_invalid_hook_type(tmp_path):
    path = tmp_path / "argwalk.yaml"
    path.write_text(
        textwrap.dedent(
            """
            name: tool
            hooks:
              during: os.getcwd
            """
        ),
        encoding="UTF-8",
    )
    with pytest.raises(ValueError):
        loader(path)


def test_unsupported_format(tmp_path):
    path = tmp_path / "argwalk.json"
    path.write_text("{}", encoding="UTF-8")
    with pytest.raises(ValueError, match="Unsupported config format"):
        loader(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        loader(tmp_path / "missing.yaml")


def test_bad_path_type():
    with pytest.raises(TypeError):
        loader(42)


def test_config_must_be_mapping(tmp_path):
    path = tmp_path / "argwalk.yaml"
    path.write_text("- just\n- a list\n", encoding="UTF-8")
    with pytest.raises(ValueError, match="must contain a dictionary"):
        loader(path)
