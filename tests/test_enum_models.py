from __future__ import annotations

import pytest

from velox_core.core.enums import EnumModel


def test_mode_rejects_unknown_value(invalid) -> None:
    mode = EnumModel("mode", ("erg", "resistance", "slope"), on_invalid=invalid)

    assert mode.set("slope") == "slope"
    assert mode.set("ergo") == "erg"
    assert invalid.calls == ["ergo"]


def test_explicit_default() -> None:
    page = EnumModel("page", ("settings", "home", "workouts"), default="home")

    assert page.value == "home"
    assert page.set("nope") == "home"


def test_theme_switch() -> None:
    theme = EnumModel("theme", ("dark", "light"))

    assert theme.switch("dark") == "light"
    assert theme.switch("light") == "dark"


@pytest.mark.parametrize("value", ["dark", "light"])
def test_switch_is_an_involution(value: str) -> None:
    theme = EnumModel("theme", ("dark", "light"))

    assert theme.switch(theme.switch(value)) == value


def test_switch_unknown_value_reports_and_defaults(invalid) -> None:
    measurement = EnumModel("measurement", ("metric", "imperial"), on_invalid=invalid)

    assert measurement.switch("nautical") == "metric"
    assert invalid.calls == ["nautical"]


def test_switch_not_available_on_non_binary_enum() -> None:
    mode = EnumModel("mode", ("erg", "resistance", "slope"))

    with pytest.raises(TypeError):
        mode.switch("erg")


def test_invalid_enum_definition() -> None:
    with pytest.raises(ValueError):
        EnumModel("empty", ())
    with pytest.raises(ValueError):
        EnumModel("theme", ("dark", "light"), default="blue")
