"""In-memory shot tracker with simple aggregate statistics."""

from __future__ import annotations

import itertools
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional

from models.shot_record import ClubSummary, Shot, ShotStats

CLUBS = [
    "Driver",
    "3 Wood",
    "5 Wood",
    "4 Iron",
    "5 Iron",
    "6 Iron",
    "7 Iron",
    "8 Iron",
    "9 Iron",
    "Pitching Wedge",
    "Sand Wedge",
    "Lob Wedge",
    "Putter",
]

RESULTS = [
    "Fairway Hit",
    "Green in Regulation",
    "Missed Left",
    "Missed Right",
    "Short",
    "Long",
    "In the Hole",
]

DRIVER = "Driver"
FAIRWAY_HIT = "Fairway Hit"

INVALID_SHOT = "Please fill in all fields with valid data."


def sample_shots() -> List[tuple]:
    """(club, distance, result) rows shown on a fresh tracker, oldest first."""
    return [
        ("Pitching Wedge", 115, "Short"),
        ("Driver", 250, "Missed Right"),
        ("7 Iron", 160, "Green in Regulation"),
        ("Driver", 265, "Fairway Hit"),
    ]


def _round_half_up(numerator: int, denominator: int) -> int:
    """Round a ratio to the nearest integer with halves going up, as the tracker displays it."""
    return int((Decimal(numerator) / Decimal(denominator)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _mean(values: List[int]) -> Optional[int]:
    return _round_half_up(sum(values), len(values)) if values else None


class ShotLog:
    """Hold logged shots newest first and summarize them."""

    def __init__(self, seed: Iterable[tuple] = ()) -> None:
        self._ids = itertools.count(1)
        self._shots: List[Shot] = []
        for club, distance, result in seed:
            self.log(club, distance, result)

    def __len__(self) -> int:
        return len(self._shots)

    @property
    def shots(self) -> List[Shot]:
        return list(self._shots)

    def log(self, club: str, distance: int | str, result: str) -> Shot:
        """Validate and record a shot; it becomes the first entry."""
        if club not in CLUBS or result not in RESULTS:
            raise ValueError(INVALID_SHOT)
        if isinstance(distance, bool):
            raise ValueError(INVALID_SHOT)
        try:
            yards = int(str(distance).strip())
        except ValueError as exc:
            raise ValueError(INVALID_SHOT) from exc
        if yards <= 0:
            raise ValueError(INVALID_SHOT)

        shot = Shot(id=next(self._ids), club=club, distance=yards, result=result)
        self._shots.insert(0, shot)
        return shot

    def stats(self) -> ShotStats:
        drives = [shot for shot in self._shots if shot.club == DRIVER]
        fairway_hits = sum(1 for shot in drives if shot.result == FAIRWAY_HIT)

        by_club: Dict[str, List[int]] = {}
        for shot in self._shots:
            by_club.setdefault(shot.club, []).append(shot.distance)

        return ShotStats(
            total_shots=len(self._shots),
            avg_driving_distance=_mean([shot.distance for shot in drives]),
            fairway_hit_percentage=_round_half_up(fairway_hits * 100, len(drives)) if drives else None,
            by_club=[
                ClubSummary(club=club, shots=len(by_club[club]), avg_distance=_mean(by_club[club]))
                for club in CLUBS
                if club in by_club
            ],
        )
