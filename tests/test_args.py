import pytest

from deskmates.args import ArgType, Argument, ArgumentList, UsageError


def spawn_args():
    return ArgumentList(
        [
            Argument("data-id", "Data ID of the shimeji to spawn", ArgType.INT),
            Argument("name", "Name of the shimeji to spawn", ArgType.STRING),
            Argument("behavior", "Initial behavior for the shimeji", ArgType.STRING_LIST),
            Argument("x", "Initial X position for the shimeji", ArgType.DOUBLE),
            Argument("json", "Print the API response as JSON", ArgType.BOOL),
        ]
    )


def test_defaults_when_nothing_given():
    values = spawn_args().parse([])
    assert values == {
        "data-id": None,
        "name": None,
        "behavior": None,
        "x": None,
        "json": False,
    }


def test_flag_takes_no_value():
    values = spawn_args().parse(["--json", "--name", "Shimeji"])
    assert values["json"] is True
    assert values["name"] == "Shimeji"


def test_list_collects_values_in_order():
    values = spawn_args().parse(["--behavior", "Fall", "--behavior", "Sit"])
    assert values["behavior"] == ["Fall", "Sit"]


def test_last_string_wins():
    values = spawn_args().parse(["--name", "a", "--name", "b"])
    assert values["name"] == "b"


def test_int_and_double_conversion():
    values = spawn_args().parse(["--data-id", "7", "--x", "12.5"])
    assert values["data-id"] == 7
    assert values["x"] == 12.5


@pytest.mark.parametrize("text", ["abc", "1.5", "", "99999999999", "1_0"])
def test_invalid_int_rejected(text):
    with pytest.raises(UsageError):
        spawn_args().parse(["--data-id", text])


@pytest.mark.parametrize("text", ["abc", "", "1_0"])
def test_invalid_double_rejected(text):
    with pytest.raises(UsageError):
        spawn_args().parse(["--x", text])


def test_missing_value_rejected():
    with pytest.raises(UsageError):
        spawn_args().parse(["--name"])


def test_unknown_option_rejected():
    with pytest.raises(UsageError):
        spawn_args().parse(["--colour", "red"])


def test_word_without_dashes_rejected():
    with pytest.raises(UsageError):
        spawn_args().parse(["name"])


def test_required_option_must_be_given():
    arguments = ArgumentList(
        [
            Argument("id", "ID of the shimeji to dismiss", ArgType.STRING, True),
            Argument("selector", "JavaScript code for filtering shimeji", ArgType.STRING),
        ]
    )
    with pytest.raises(UsageError):
        arguments.parse(["--selector", "true"])
    assert arguments.parse(["--id", "newest"])["id"] == "newest"


def test_parse_is_repeatable():
    arguments = spawn_args()
    arguments.parse(["--behavior", "Fall"])
    assert arguments.parse([])["behavior"] is None


def test_duplicate_names_rejected():
    with pytest.raises(ValueError):
        ArgumentList(
            [Argument("json", "a", ArgType.BOOL), Argument("json", "b", ArgType.BOOL)]
        )


def test_usage_lists_options_in_order():
    text = spawn_args().usage("shijima-qt", "spawn")
    lines = text.splitlines()
    assert lines[0] == "Usage: shijima-qt spawn [options...]"
    assert [line.split()[0] for line in lines[1:]] == [
        "--data-id",
        "--name",
        "--behavior",
        "--x",
        "--json",
    ]
    assert text.endswith("\n")


def test_usage_pads_labels_and_names_types():
    lines = spawn_args().usage("prog", "spawn").splitlines()
    assert lines[2] == "  --" + "name (string)".ljust(20) + " Name of the shimeji to spawn"
    assert "(int)" in lines[1]
    assert "(double)" in lines[4]
    assert lines[5] == "  --" + "json".ljust(20) + " Print the API response as JSON"