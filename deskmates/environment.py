"""Geometry of the space mascots live in, and how it is refreshed each tick."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

SUBTICK_COUNT = 4
TICK_INTERVAL_MS = 40 // SUBTICK_COUNT
HIDDEN_EDGE = -50.0


@dataclass(frozen=True)
class Rect:
    """An integer rectangle whose right and bottom edges are inclusive."""

    left: int = 0
    top: int = 0
    width: int = 0
    height: int = 0

    def right(self) -> int:
        return self.left + self.width - 1

    def bottom(self) -> int:
        return self.top + self.height - 1


@dataclass
class Area:
    """A region given by its four edges."""

    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0

    def width(self) -> float:
        return self.right - self.left

    def height(self) -> float:
        return self.bottom - self.top


@dataclass
class DArea(Area):
    """A region that also remembers how far it moved since the last tick."""

    dx: float = 0.0
    dy: float = 0.0

    def visible(self) -> bool:
        return self.width() > 0 and self.height() > 0


@dataclass
class Border:
    """A horizontal line such as a floor or a ceiling."""

    y: float = 0.0
    xstart: float = 0.0
    xend: float = 0.0


@dataclass
class DVec:
    """A point together with its movement since the last tick."""

    x: float = 0.0
    y: float = 0.0
    dx: float = 0.0
    dy: float = 0.0


@dataclass
class WindowInfo:
    """The foreground window as reported by the window observer."""

    available: bool = False
    uid: int = 0
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


def _hidden_area() -> DArea:
    return DArea(HIDDEN_EDGE, HIDDEN_EDGE, HIDDEN_EDGE, HIDDEN_EDGE)


@dataclass
class Environment:
    """Everything a mascot can see: screen, floor, ceiling, cursor and windows."""

    screen: Area = field(default_factory=Area)
    floor: Border = field(default_factory=Border)
    work_area: Area = field(default_factory=Area)
    ceiling: Border = field(default_factory=Border)
    active_ie: DArea = field(default_factory=_hidden_area)
    cursor: DVec = field(default_factory=DVec)
    subtick_count: int = 1
    allows_breeding: bool = True
    _scale: float = 1.0

    def set_scale(self, scale: float) -> None:
        self._scale = scale

    def get_scale(self) -> float:
        return self._scale

    def reset_scale(self) -> None:
        self._scale = 1.0


def update_environment(
    env: Environment,
    geometry: Rect,
    available: Rect,
    cursor: tuple[int, int],
    current_window: WindowInfo | None,
    previous_window: WindowInfo | None,
    windowed_mode: bool,
    user_scale: float,
) -> None:
    """Refresh ``env`` from a screen's full and available geometry."""
    taskbar_height = max(geometry.bottom() - available.bottom(), 0)
    status_bar_height = max(available.top - geometry.top, 0)

    env.screen = Area(
        float(geometry.top + status_bar_height),
        float(geometry.right()),
        float(geometry.bottom()),
        float(geometry.left),
    )
    env.floor = Border(
        float(geometry.bottom() - taskbar_height),
        float(geometry.left),
        float(geometry.right()),
    )
    env.work_area = Area(
        float(geometry.top),
        float(geometry.right()),
        float(geometry.bottom() - taskbar_height),
        float(geometry.left),
    )
    env.ceiling = Border(
        float(geometry.top), float(geometry.left), float(geometry.right())
    )

    current = current_window
    if (
        not windowed_mode
        and current is not None
        and current.available
        and abs(current.x) > 1
        and abs(current.y) > 1
    ):
        active = DArea(
            current.y,
            current.x + current.width,
            current.y + current.height,
            current.x,
        )
        previous = previous_window
        if previous is not None and previous.available and previous.uid == current.uid:
            active.dy = current.y - previous.y
            if active.dy == 0:
                active.dy = current.height - previous.height
            active.dx = current.x - previous.x
            if active.dx == 0:
                active.dx = current.width - previous.width
        env.active_ie = active
    else:
        env.active_ie = _hidden_area()

    x, y = cursor
    env.cursor = DVec(float(x), float(y), x - env.cursor.x, y - env.cursor.y)
    env.subtick_count = SUBTICK_COUNT
    env.set_scale(1.0 / math.sqrt(user_scale))