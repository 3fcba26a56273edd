import json

import pytest

from deskmates.settings import (
    BACKGROUND_KEY,
    DEFAULT_BACKGROUND,
    MAX_COPIES_KEY,
    MULTIPLICATION_KEY,
    README_TEXT,
    SLIDER_MAX,
    SLIDER_MIN,
    USER_SCALE_KEY,
    ManagerSettings,
    color_to_string,
    custom_scale_text,
    load_settings,
    mascot_names_in,
    parse_color,
    prepare_mascots_dir,
    preset_checked,
    save_settings,
    scale_text,
    scale_to_slider,
    slider_to_scale,
)


def test_defaults_match_menu_initial_values():
    settings = ManagerSettings()
    assert settings.multiplication_enabled is True
    assert settings.max_mascots_per_character == 1
    assert settings.windowed_mode_background == "#FF0000"
    assert settings.user_scale == 1.0


@pytest.mark.parametrize("value, breeding", [(1, False), (3, True), (9, True), (0, True)])
def test_set_max_copies_drives_multiplication(value, breeding):
    settings = ManagerSettings()
    assert settings.set_max_copies(value) is breeding
    assert settings.multiplication_enabled is breeding
    assert settings.max_mascots_per_character == value


def test_set_max_copies_rejects_negative():
    with pytest.raises(ValueError):
        ManagerSettings().set_max_copies(-1)


def test_set_user_scale_and_rejects_nonpositive():
    settings = ManagerSettings()
    settings.set_user_scale(1.75)
    assert settings.user_scale == 1.75
    with pytest.raises(ValueError):
        settings.set_user_scale(0)


def test_set_multiplication():
    settings = ManagerSettings()
    settings.set_multiplication(False)
    assert settings.multiplication_enabled is False


def test_save_load_round_trip(tmp_path):
    settings = ManagerSettings()
    settings.set_max_copies(6)
    settings.set_user_scale(0.5)
    settings.windowed_mode_background = color_to_string(0, 128, 255)
    path = tmp_path / "conf" / "settings.json"
    save_settings(settings, path)
    assert load_settings(path) == settings
    stored = json.loads(path.read_text())
    assert stored[MAX_COPIES_KEY] == 6
    assert stored[USER_SCALE_KEY] == 0.5


def test_load_missing_file_gives_defaults(tmp_path):
    assert load_settings(tmp_path / "absent.json") == ManagerSettings()


def test_load_corrupt_file_gives_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    assert load_settings(path) == ManagerSettings()


def test_load_ignores_bad_values(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({
        MULTIPLICATION_KEY: "yes",
        MAX_COPIES_KEY: -4,
        BACKGROUND_KEY: "not a colour",
        USER_SCALE_KEY: 0,
    }))
    assert load_settings(path) == ManagerSettings()


def test_load_normalises_short_colour(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({BACKGROUND_KEY: "#f00"}))
    assert load_settings(path).windowed_mode_background == DEFAULT_BACKGROUND


def test_color_to_string_uppercase_and_masked():
    assert color_to_string(255, 0, 0) == "#FF0000"
    assert color_to_string(256 + 255, 0, 0) == color_to_string(255, 0, 0)


@pytest.mark.parametrize("rgb", [(0, 0, 0), (18, 52, 86), (255, 255, 255), (171, 205, 239)])
def test_color_round_trip(rgb):
    assert parse_color(color_to_string(*rgb)) == rgb


def test_parse_color_short_form_and_errors():
    assert parse_color("#F00") == parse_color("#FF0000")
    with pytest.raises(ValueError):
        parse_color("red")
    with pytest.raises(ValueError):
        parse_color("#12345")


def test_scale_texts():
    assert scale_text(0.25) == "0.250x"
    assert custom_scale_text(1.0) == "Custom... (" + scale_text(1.0) + ")"


def test_slider_round_trip_and_clamp():
    for value in (SLIDER_MIN, 1500, SLIDER_MAX):
        assert scale_to_slider(slider_to_scale(value)) == value
    assert scale_to_slider(0.01) == SLIDER_MIN
    assert scale_to_slider(50.0) == SLIDER_MAX


def test_preset_checked_tolerance():
    assert preset_checked(1.004, 1.0)
    assert not preset_checked(1.02, 1.0)


def test_prepare_mascots_dir_creates_readme_once(tmp_path):
    target = tmp_path / "data" / "mascots"
    result = prepare_mascots_dir(target)
    readme = result / "README.txt"
    assert result.is_dir()
    assert readme.read_text() == README_TEXT
    readme.write_text("custom")
    prepare_mascots_dir(target)
    assert readme.read_text() == "custom"


def test_mascot_names_in(tmp_path):
    for name in ("beta.mascot", "Alpha.mascot", ".mascot", "other", "gamma.mascot"):
        (tmp_path / name).mkdir()
    (tmp_path / "file.mascot").write_text("")
    assert mascot_names_in(tmp_path) == ["Alpha", "beta", "gamma"]