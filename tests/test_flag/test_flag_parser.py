import pytest

from flagtree.exceptions import (
    DuplicateFlagError,
    MalformedBoolError,
    MissingFlagValueError,
    MissingRequiredFlagError,
    UnrecognizedFlagError,
)
from flagtree.flag import (
    FlagParser,
    bool_flag,
    string_flag,
    string_list,
    string_param,
)
from flagtree.signals import HelpSignal


def test_string_flag_default_when_absent():
    result = FlagParser([string_flag("name", default="default")]).parse([])
    assert result.values.string_values["name"] == "default"
    assert result.subcommand is None
    assert "name" not in result.values.seen


def test_string_flag_space_separated():
    result = FlagParser([string_flag("name")]).parse(["--name", "foo"])
    assert result.values.string_values["name"] == "foo"
    assert "name" in result.values.seen


def test_string_flag_space_separated_value_is_verbatim():
    parser = FlagParser([string_flag("name"), bool_flag("bool")])
    result = parser.parse(["--name", "foo=bar"])
    assert result.values.string_values["name"] == "foo=bar"

    result = parser.parse(["--name", "--bool"])
    assert result.values.string_values["name"] == "--bool"
    assert result.values.bool_values["bool"] is False


def test_first_equals_splits_name_from_value():
    result = FlagParser([string_flag("name")]).parse(["--name=foo=bar"])
    assert result.values.string_values["name"] == "foo=bar"


def test_flag_name_containing_equals():
    result = FlagParser([string_flag("name=foo")]).parse(["--name=foo=bar"])
    assert result.values.string_values["name=foo"] == "bar"


def test_declared_name_wins_at_first_equals():
    parser = FlagParser([string_flag("name"), string_flag("name=foo")])
    result = parser.parse(["--name=foo=bar"])
    assert result.values.string_values["name"] == "foo=bar"
    assert result.values.string_values["name=foo"] == ""


def test_bool_flag_name_containing_equals():
    result = FlagParser([bool_flag("a=b")]).parse(["--a=b"])
    assert result.values.bool_values["a=b"] is True


def test_empty_inline_value_is_missing_value():
    parser = FlagParser([string_flag("name")])
    with pytest.raises(MissingFlagValueError, match="Missing value for flag --name"):
        parser.parse(["--name="])
    with pytest.raises(MissingFlagValueError, match="Missing value for flag --name"):
        parser.parse(["--name=", "subcommand"])


def test_inline_value_ending_in_equals_is_missing_value():
    parser = FlagParser([string_flag("name"), string_list("tag")])
    with pytest.raises(MissingFlagValueError, match="--name"):
        parser.parse(["--name=foo="])
    with pytest.raises(MissingFlagValueError, match="--tag"):
        parser.parse(["--tag=a=="])
    result = parser.parse(["--name", "foo="])
    assert result.values.string_values["name"] == "foo="


def test_value_flag_at_end_of_input_is_missing_value():
    with pytest.raises(MissingFlagValueError):
        FlagParser([string_flag("name")]).parse(["--name"])
    with pytest.raises(MissingFlagValueError):
        FlagParser([string_list("tag")]).parse(["--tag"])


def test_unrecognized_flag():
    with pytest.raises(UnrecognizedFlagError, match="--other=1"):
        FlagParser([string_flag("name")]).parse(["--other=1"])


def test_positional_flag_never_matches_dashed_token():
    with pytest.raises(UnrecognizedFlagError):
        FlagParser([string_param("target")]).parse(["--target", "x"])


def test_bool_flag_bare_is_true_regardless_of_default():
    result = FlagParser([bool_flag("bool", default=False)]).parse(["--bool"])
    assert result.values.bool_values["bool"] is True
    result = FlagParser([bool_flag("bool", default=True)]).parse(["--bool"])
    assert result.values.bool_values["bool"] is True


def test_bool_flag_does_not_consume_next_token():
    result = FlagParser([bool_flag("bool")]).parse(["--bool", "false"])
    assert result.values.bool_values["bool"] is True
    assert result.values.positionals == ("false",)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("false", False),
        ("False", False),
        ("FALSE", False),
        ("f", False),
        ("0", False),
        ("true", True),
        ("T", True),
        ("1", True),
    ],
)
def test_bool_flag_explicit_value(text, expected):
    result = FlagParser([bool_flag("bool", default=not expected)]).parse(
        [f"--bool={text}"]
    )
    assert result.values.bool_values["bool"] is expected


def test_bool_flag_empty_inline_value():
    with pytest.raises(MissingFlagValueError, match="Missing value for flag --bool"):
        FlagParser([bool_flag("bool")]).parse(["--bool="])


def test_bool_flag_malformed_value():
    with pytest.raises(MalformedBoolError) as excinfo:
        FlagParser([bool_flag("bool")]).parse(["--bool=NOT_VALID"])
    assert "--bool" in str(excinfo.value)
    assert "NOT_VALID" in str(excinfo.value)
    assert excinfo.value.value == "NOT_VALID"


def test_last_occurrence_wins():
    parser = FlagParser([string_flag("name"), bool_flag("bool")])
    result = parser.parse(["--name", "a", "--bool", "--name=b", "--bool=false"])
    assert result.values.string_values["name"] == "b"
    assert result.values.bool_values["bool"] is False


def test_string_list_appends_every_occurrence():
    result = FlagParser([string_list("tag", default=["x"])]).parse(
        ["--tag", "a", "--tag=b", "--tag", "c=d"]
    )
    assert result.values.list_values["tag"] == ("a", "b", "c=d")


def test_string_list_default_when_absent():
    result = FlagParser([string_list("tag", default=["x", "y"])]).parse([])
    assert result.values.list_values["tag"] == ("x", "y")


def test_positional_tokens_are_not_split_on_equals():
    result = FlagParser([string_list("args")]).parse(["foo=1", "bar=2"])
    assert result.values.list_values["args"] == ("foo=1", "bar=2")
    assert result.values.positionals == ("foo=1", "bar=2")


def test_positional_params_bind_in_order():
    parser = FlagParser(
        [string_param("src"), string_param("dst"), string_list("rest"), bool_flag("v")]
    )
    result = parser.parse(["a", "--v", "b", "c", "d"])
    assert result.values.string_values["src"] == "a"
    assert result.values.string_values["dst"] == "b"
    assert result.values.list_values["rest"] == ("c", "d")
    assert result.values.positionals == ("a", "b", "c", "d")


def test_sink_extends_flag_values():
    result = FlagParser([string_list("args")]).parse(["--args", "a", "b"])
    assert result.values.list_values["args"] == ("a", "b")


def test_end_of_flags_marker():
    parser = FlagParser([string_flag("name")], subcommands={"run"})
    result = parser.parse(["--name", "x", "--", "--name", "run"])
    assert result.values.string_values["name"] == "x"
    assert result.values.positionals == ("--name", "run")
    assert result.subcommand is None


def test_first_positional_selects_subcommand():
    parser = FlagParser([bool_flag("verbose")], subcommands={"run"})
    result = parser.parse(["--verbose", "run", "--name", "x"])
    assert result.values.bool_values["verbose"] is True
    assert result.subcommand == "run"
    assert result.remaining == ("--name", "x")


def test_later_positional_does_not_select_subcommand():
    parser = FlagParser([], subcommands={"run"})
    result = parser.parse(["other", "run"])
    assert result.subcommand is None
    assert result.values.positionals == ("other", "run")


def test_required_flag_missing():
    with pytest.raises(MissingRequiredFlagError, match="--env"):
        FlagParser([string_flag("env", required=True)]).parse([])
    with pytest.raises(MissingRequiredFlagError, match="<target>"):
        FlagParser([string_param("target", required=True)]).parse([])


def test_help_flag_raises_help_signal():
    with pytest.raises(HelpSignal):
        FlagParser([string_flag("name")]).parse(["--help"])


def test_declared_help_flag_is_a_normal_flag():
    result = FlagParser([bool_flag("help")]).parse(["--help"])
    assert result.values.bool_values["help"] is True


def test_duplicate_flag_names_rejected():
    with pytest.raises(DuplicateFlagError):
        FlagParser([string_flag("name"), bool_flag("name")])


def test_resolved_values_are_read_only():
    result = FlagParser([string_flag("name")]).parse(["--name", "x"])
    with pytest.raises(TypeError):
        result.values.string_values["name"] = "y"  # type: ignore[index]
