"""Text shown in a mascot's inspector window."""

from __future__ import annotations

from deskmates.environment import Area, DArea, DVec

NOT_VISIBLE = "not visible"


def double_to_string(value: float) -> str:
    """Format with six decimals, then cut (not round) to two."""
    text = "%f" % value
    dot = text.rfind(".")
    if dot != -1:
        text = text[: dot + 3]
    return text


def vec_to_string(x: float, y: float) -> str:
    return f"x: {double_to_string(x)}, y: {double_to_string(y)}"


def dvec_to_string(vec: DVec) -> str:
    return (
        f"{vec_to_string(vec.x, vec.y)}"
        f", dx: {double_to_string(vec.dx)}, dy: {double_to_string(vec.dy)}"
    )


def area_to_string(area: Area) -> str:
    return (
        f"x: {double_to_string(area.left)}, y: {double_to_string(area.top)}"
        f", width: {double_to_string(area.width())}"
        f", height: {double_to_string(area.height())}"
    )


def darea_to_string(area: DArea) -> str:
    return (
        f"{area_to_string(area)}"
        f", dx: {double_to_string(area.dx)}, dy: {double_to_string(area.dy)}"
    )


def active_ie_to_string(area: DArea) -> str:
    """Describe the active window, or say it is not visible."""
    if area.visible():
        return darea_to_string(area)
    return NOT_VISIBLE