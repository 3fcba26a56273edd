"""The set of live mascots and the bookkeeping the manager does on it."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Iterator, NamedTuple, Protocol

MAX_LISTED_NAMES = 5
DELETE_PROMPT = "Are you sure you want to delete these shimeji?"
IMPORT_FAILED = "Could not import any mascots from the specified archive(s)."


class RosterMascot(Protocol):
    """What the roster needs to know about a live mascot."""

    @property
    def name(self) -> str: ...

    @property
    def mascot_id(self) -> int: ...

    @property
    def x(self) -> int: ...

    @property
    def y(self) -> int: ...

    def mark_for_deletion(self) -> None: ...

    def point_inside(self, x: int, y: int) -> bool: ...


class MascotRoster:
    """Live mascots in spawn order, also reachable by their id."""

    def __init__(self) -> None:
        self._mascots: list[RosterMascot] = []
        self._by_id: dict[int, RosterMascot] = {}

    def __iter__(self) -> Iterator[RosterMascot]:
        return iter(list(self._mascots))

    def __len__(self) -> int:
        return len(self._mascots)

    def __contains__(self, mascot: object) -> bool:
        return mascot in self._mascots

    @property
    def by_id(self) -> dict[int, RosterMascot]:
        return dict(self._by_id)

    def get(self, mascot_id: int) -> RosterMascot | None:
        return self._by_id.get(mascot_id)

    def add(self, mascot: RosterMascot) -> None:
        """Append a newly spawned mascot."""
        self._mascots.append(mascot)
        self._by_id[mascot.mascot_id] = mascot

    def remove(self, mascot: RosterMascot) -> None:
        """Forget a mascot; raises ValueError if it is not in the roster."""
        self._mascots.remove(mascot)
        if self._by_id.get(mascot.mascot_id) is mascot:
            del self._by_id[mascot.mascot_id]

    def kill_all(self, name: str | None = None) -> None:
        """Mark every mascot, or every mascot called ``name``, for deletion."""
        for mascot in self._mascots:
            if name is None or mascot.name == name:
                mascot.mark_for_deletion()

    def kill_all_but_one(self, keep: RosterMascot) -> None:
        """Mark every mascot except ``keep`` for deletion."""
        for mascot in self._mascots:
            if mascot is not keep:
                mascot.mark_for_deletion()

    def kill_all_but_one_named(self, name: str) -> None:
        """Keep the oldest mascot called ``name`` and mark its namesakes."""
        found = False
        for mascot in self._mascots:
            if mascot.name != name:
                continue
            if not found:
                found = True
                continue
            mascot.mark_for_deletion()

    def enforce_limit(self, limit: int) -> None:
        """Mark the newest copies of each character beyond ``limit``; 0 is unlimited."""
        if limit <= 0:
            return
        counts: Counter[str] = Counter()
        for mascot in self._mascots:
            counts[mascot.name] += 1
            if counts[mascot.name] > limit:
                mascot.mark_for_deletion()

    def count_by_name(self, name: str) -> int:
        return sum(1 for mascot in self._mascots if mascot.name == name)

    def can_spawn(self, name: str, limit: int) -> bool:
        """Whether another copy of ``name`` fits under ``limit``; 0 is unlimited."""
        return limit <= 0 or self.count_by_name(name) < limit

    def hit_test(self, x: int, y: int) -> RosterMascot | None:
        """Return the first mascot drawn at screen position (x, y)."""
        for mascot in self._mascots:
            if mascot.point_inside(x - mascot.x, y - mascot.y):
                return mascot
        return None


def normalize_breed_name(name: str, fallback: str) -> str:
    """Resolve a breed request's target: the parent if empty, else the last path part."""
    if name == "":
        name = fallback
    name = name.rsplit("\\", 1)[-1]
    return name.rsplit("/", 1)[-1]


def delete_prompt_message(names: Iterable[str]) -> str:
    """Build the confirmation text shown before deleting shimeji."""
    names = list(names)
    if not names:
        raise ValueError("no shimeji selected")
    lines = [DELETE_PROMPT]
    lines.extend(f"* {name}" for name in names[:MAX_LISTED_NAMES])
    if len(names) > MAX_LISTED_NAMES:
        lines.append(f"... and {len(names) - MAX_LISTED_NAMES} other(s)")
    return "\n".join(lines)


class ImportSummary(NamedTuple):
    message: str
    success: bool


def import_summary(count: int) -> ImportSummary:
    """Describe the outcome of an import that changed ``count`` mascots."""
    if count > 0:
        plural = "" if count == 1 else "s"
        return ImportSummary(f"Imported {count} mascot{plural}.", True)
    return ImportSummary(IMPORT_FAILED, False)