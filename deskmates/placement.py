"""Where a mascot's window goes on screen and how its image is drawn in it."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from deskmates.environment import Area, Rect

Point = tuple[int, int]
AlphaLookup = Callable[[int, int], int]


def _qround(value: float) -> int:
    """Round half away from zero, as integer points are rounded when scaled."""
    if value >= 0:
        return int(math.floor(value + 0.5))
    return int(math.ceil(value - 0.5))


@dataclass(frozen=True)
class Placement:
    """The result of laying a frame out: window geometry and draw parameters."""

    window_x: int
    window_y: int
    window_width: int
    window_height: int
    anchor_in_window: Point
    draw_origin: Point
    draw_scale: float

    def needs_repaint(self, previous: Placement | None) -> bool:
        """Whether moving from ``previous`` to this placement changes the drawing."""
        if previous is None:
            return True
        return (
            self.window_width != previous.window_width
            or self.window_height != previous.window_height
            or self.draw_origin != previous.draw_origin
            or self.draw_scale != previous.draw_scale
        )


def is_mirrored(right_name: str, looking_right: bool) -> bool:
    """A frame is drawn flipped when it faces right but has no right-facing image."""
    return not right_name and looking_right


def _clamp_axis(position: int, size: int, limit: int) -> tuple[int, int]:
    """Keep a window inside ``[0, limit]``; return (position, draw shift)."""
    if position < 0:
        return 0, position
    if position + size > limit:
        return limit - size, position - limit + size
    return position, 0


def place_window(
    anchor: tuple[float, float],
    frame_anchor: tuple[float, float],
    original_size: tuple[int, int],
    image_offset: Rect,
    screen: Area,
    scale: float,
    mirrored: bool,
) -> Placement:
    """Lay out the window for a frame anchored at ``anchor`` in screen coordinates.

    The window is kept on screen; when it would cross an edge, the image is
    shifted inside the window instead so the mascot still appears where its
    anchor says.
    """
    if not scale > 0:
        raise ValueError(f"scale must be positive: {scale}")
    original_width, original_height = original_size
    screen_width = int(screen.width() / scale)
    screen_height = int(screen.height() / scale)
    window_width = int(original_width / scale)
    window_height = int(original_height / scale)

    frame_x, frame_y = frame_anchor
    if mirrored:
        anchor_in_window = (
            int((original_width - frame_x) / scale),
            int(frame_y / scale),
        )
    else:
        anchor_in_window = (int(frame_x / scale), int(frame_y / scale))

    screen_left = int(screen.left)
    screen_top = int(screen.top)
    win_x = int(anchor[0]) - anchor_in_window[0] - screen_left
    win_y = int(anchor[1]) - anchor_in_window[1] - screen_top
    win_x, shift_x = _clamp_axis(win_x, window_width, screen_width)
    win_y, shift_y = _clamp_axis(win_y, window_height, screen_height)
    win_x += screen_left
    win_y += screen_top

    if mirrored:
        shift_x += int((original_width - image_offset.right()) / scale)
        shift_y += int(image_offset.top / scale)
    else:
        shift_x += _qround(image_offset.left / scale)
        shift_y += _qround(image_offset.top / scale)

    return Placement(
        window_x=win_x,
        window_y=win_y,
        window_width=window_width,
        window_height=window_height,
        anchor_in_window=anchor_in_window,
        draw_origin=(shift_x, shift_y),
        draw_scale=scale,
    )


def point_inside(
    point: Point,
    draw_origin: Point,
    image_size: tuple[int, int],
    draw_scale: float,
    alpha_at: AlphaLookup,
) -> bool:
    """Whether a window-local point falls on a non-transparent pixel of the image.

    ``alpha_at(x, y)`` gives a pixel's alpha in image coordinates. The drawn
    bounds are inclusive of their far edge; a point there lies past the last
    pixel and counts as opaque.
    """
    width, height = image_size
    drawn_width = int(width / draw_scale)
    drawn_height = int(height / draw_scale)
    local_x = point[0] - draw_origin[0]
    local_y = point[1] - draw_origin[1]
    if local_x < 0 or local_y < 0 or local_x > drawn_width or local_y > drawn_height:
        return False
    pixel_x = _qround(local_x * draw_scale)
    pixel_y = _qround(local_y * draw_scale)
    if not (0 <= pixel_x < width and 0 <= pixel_y < height):
        return True
    return alpha_at(pixel_x, pixel_y) != 0