import pytest

from argwalk.exceptions import ArgumentDeclarationError
from argwalk.parser import Arg, ArgProperty


def test_boolean_option_is_switch():
    arg = Arg.boolean_option("verbose", "v", "Verbose output")
    assert arg.long_name == "verbose"
    assert arg.short_name == "v"
    assert arg.is_switch
    assert not arg.takes_value
    assert (arg.min_values, arg.max_values) == (0, 0)
    assert not arg.is_positional


def test_single_value_option():
    arg = Arg.single_value_option("output", "o", "Output file")
    assert arg.takes_value
    assert (arg.min_values, arg.max_values) == (1, 1)
    assert arg.values_delimiter is None


def test_multi_values_option():
    arg = Arg.multi_values_option("tag", "t", "Tags", max_values=3)
    assert (arg.min_values, arg.max_values) == (1, 3)
    assert arg.values_delimiter == ","
    assert arg.get_placeholder_text() == "TAG..."


def test_multi_values_option_requires_positive_max():
    with pytest.raises(ArgumentDeclarationError):
        Arg.multi_values_option("tag", "t", "Tags", max_values=0)


def test_positional():
    arg = Arg.positional("FILE", "File to run")
    assert arg.is_positional
    assert arg.takes_value
    assert arg.index is None
    assert (arg.min_values, arg.max_values) == (1, 1)


def test_positional_cannot_drop_values():
    with pytest.raises(ArgumentDeclarationError):
        Arg.positional("FILE", max_values=0)
    with pytest.raises(ArgumentDeclarationError):
        Arg.positional("FILE").set_min_values(0).set_max_values(0)


def test_takes_value_property_implies_one_value():
    arg = Arg("mode", long_name="mode", properties={"value"})
    assert arg.has_property(ArgProperty.TAKES_VALUE)
    assert (arg.min_values, arg.max_values) == (1, 1)


@pytest.mark.parametrize("short_name", ["ab", "-", "="])
def test_invalid_short_name(short_name):
    with pytest.raises(ArgumentDeclarationError):
        Arg.boolean_option("verbose", short_name)


@pytest.mark.parametrize("long_name", ["", "-verbose", "a=b"])
def test_invalid_long_name(long_name):
    with pytest.raises(ArgumentDeclarationError):
        Arg("verbose", long_name=long_name)


@pytest.mark.parametrize("long_name", ["", "-verbose", "a=b"])
def test_set_long_name_validates(long_name):
    arg = Arg.boolean_option("verbose", "v")
    with pytest.raises(ArgumentDeclarationError):
        arg.set_long_name(long_name)
    assert arg.long_name == "verbose"


def test_set_names():
    arg = Arg.single_value_option("output", "o").set_long_name("out").set_short_name("O")
    assert (arg.short_name, arg.long_name) == ("O", "out")
    with pytest.raises(ArgumentDeclarationError):
        arg.set_short_name("--")


def test_invalid_arity():
    arg = Arg.multi_values_option("tag", "t", max_values=2)
    with pytest.raises(ArgumentDeclarationError):
        arg.set_min_values(3)
    with pytest.raises(ArgumentDeclarationError):
        arg.set_min_values(-1)


def test_delimiter_must_be_single_character():
    arg = Arg.multi_values_option("tag", "t", max_values=2)
    with pytest.raises(ArgumentDeclarationError):
        arg.set_values_delimiter(",,")
    assert arg.set_values_delimiter(";").values_delimiter == ";"


def test_valid_values_and_defaults():
    arg = Arg.single_value_option_with_valid_values(
        "color", "c", "Color", ["red", "green"]
    )
    assert arg.is_valid_value("red")
    assert not arg.is_valid_value("blue")
    assert arg.get_placeholder_text() == "{red,green}"

    arg.set_default_value("green")
    assert arg.default_values == ["green"]
    with pytest.raises(ArgumentDeclarationError):
        arg.set_default_value("blue")


def test_valid_values_must_be_strings():
    arg = Arg.single_value_option("color", "c")
    with pytest.raises(ArgumentDeclarationError):
        arg.set_valid_values("red")
    with pytest.raises(ArgumentDeclarationError):
        arg.set_valid_values([1, 2])


def test_no_allow_list_accepts_anything():
    arg = Arg.single_value_option("name", "n")
    assert arg.is_valid_value("")
    assert arg.is_valid_value("anything")


def test_flags_and_placeholder_text():
    arg = Arg.single_value_option("output", "o").set_value_placeholder("PATH")
    assert arg.get_flags_text() == "-o, --output"
    assert arg.get_placeholder_text() == "PATH"

    long_only = Arg.boolean_option("version", None)
    assert long_only.get_flags_text() == "--version"


def test_index_must_be_positive():
    with pytest.raises(ArgumentDeclarationError):
        Arg.positional("FILE", index=0)
    with pytest.raises(ArgumentDeclarationError):
        Arg.positional("FILE").set_index(-2)


def test_property_aliases():
    arg = Arg.single_value_option("name", "n").set_property("empty")
    assert arg.has_property(ArgProperty.ALLOW_EMPTY_VALUE)
    arg.unset_property(ArgProperty.ALLOW_EMPTY_VALUE)
    assert not arg.has_property("empty")
