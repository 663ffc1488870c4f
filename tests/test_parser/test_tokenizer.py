import pytest

from argwalk import Arg, Command
from argwalk.parser import TokenKind, Tokenizer


@pytest.fixture
def command():
    command = Command("app")
    command.add_arg(Arg.boolean_option("verbose", "v"))
    command.add_arg(Arg.boolean_option("quiet", "q"))
    command.add_arg(Arg.single_value_option("output", "o"))
    return command


def drain(tokenizer, command):
    tokens = []
    while (token := tokenizer.next_token(command)) is not None:
        tokens.append(token)
    return tokens


def test_positional_and_single_dash(command):
    tokens = drain(Tokenizer(["file", "-"]), command)
    assert [token.kind for token in tokens] == [TokenKind.POSITIONAL, TokenKind.POSITIONAL]
    assert [token.value for token in tokens] == ["file", "-"]


def test_long_options(command):
    tokens = drain(Tokenizer(["--verbose", "--output=a=b", "--output="]), command)
    assert tokens[0].kind is TokenKind.LONG_OPTION
    assert tokens[0].arg.name == "verbose"
    assert tokens[1].kind is TokenKind.LONG_OPTION_WITH_VALUE
    assert tokens[1].value == "a=b"
    assert tokens[2].kind is TokenKind.LONG_OPTION_WITH_VALUE
    assert tokens[2].value == ""


def test_unknown_long_option(command):
    (token,) = drain(Tokenizer(["--nope"]), command)
    assert token.arg is None
    assert token.option_text() == "--nope"


def test_short_chain_of_switches(command):
    tokens = drain(Tokenizer(["-vq"]), command)
    assert [token.name for token in tokens] == ["v", "q"]
    assert all(token.kind is TokenKind.SHORT_OPTION for token in tokens)


def test_short_chain_ending_with_value_option(command):
    tokens = drain(Tokenizer(["-vofile"]), command)
    assert [token.name for token in tokens] == ["v", "o"]
    assert tokens[1].kind is TokenKind.SHORT_OPTION_WITH_VALUE
    assert tokens[1].value == "file"


@pytest.mark.parametrize("raw, value", [("-o=file", "file"), ("-ofile", "file"), ("-o=", "")])
def test_short_attached_value(command, raw, value):
    (token,) = drain(Tokenizer([raw]), command)
    assert token.kind is TokenKind.SHORT_OPTION_WITH_VALUE
    assert token.value == value


def test_short_value_option_without_value_reads_next_string(command):
    tokenizer = Tokenizer(["-o", "file"])
    token = tokenizer.next_token(command)
    assert token.kind is TokenKind.SHORT_OPTION
    assert tokenizer.peek_value() == "file"
    assert tokenizer.next_value() == "file"
    assert tokenizer.next_token(command) is None


def test_switch_with_equals_carries_value(command):
    (token,) = drain(Tokenizer(["-v=yes"]), command)
    assert token.kind is TokenKind.SHORT_OPTION_WITH_VALUE
    assert token.arg.name == "verbose"
    assert token.value == "yes"


def test_unknown_short_stops_chain(command):
    tokens = drain(Tokenizer(["-vxq"]), command)
    assert [token.name for token in tokens] == ["v", "x"]
    assert tokens[1].arg is None
    assert tokens[1].option_text() == "-x"


def test_end_of_options(command):
    tokenizer = Tokenizer(["--", "-v", "--output"])
    tokens = drain(tokenizer, command)
    assert tokenizer.end_of_options
    assert [token.kind for token in tokens] == [TokenKind.POSITIONAL, TokenKind.POSITIONAL]
    assert [token.value for token in tokens] == ["-v", "--output"]


def test_peek_value_refuses_options(command):
    tokenizer = Tokenizer(["-o", "-v"])
    tokenizer.next_token(command)
    assert tokenizer.peek_value() is None
    assert tokenizer.next_value() is None
    assert tokenizer.remaining() == ["-v"]


def test_peek_value_blocked_by_pending_chain(command):
    tokenizer = Tokenizer(["-vq", "value"])
    tokenizer.next_token(command)
    assert tokenizer.peek_value() is None
    assert tokenizer.next_token(command).name == "q"
    assert tokenizer.peek_value() == "value"


def test_tokenizer_is_lazy(command):
    tokenizer = Tokenizer(["-v", "run", "-o", "x"])
    tokenizer.next_token(command)
    assert tokenizer.remaining() == ["run", "-o", "x"]
