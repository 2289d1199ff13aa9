from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class Shot:
    """A single manually logged shot.

    Attributes:
        id: Monotonic identifier assigned by the shot log.
        club: Club used, one of the tracker's club vocabulary.
        distance: Carry plus roll in yards (positive integer).
        result: Outcome label, one of the tracker's result vocabulary.
        date: When the shot was logged.
    """

    id: int
    club: str
    distance: int
    result: str
    date: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "club": self.club,
            "distance": self.distance,
            "result": self.result,
            "date": self.date.isoformat(),
        }


@dataclass
class ClubSummary:
    """Per-club count and rounded average distance."""

    club: str
    shots: int
    avg_distance: int


@dataclass
class ShotStats:
    """Aggregates shown at the top of the shot tracker.

    Driving figures are `None` when no Driver shot has been logged.
    """

    total_shots: int
    avg_driving_distance: Optional[int]
    fairway_hit_percentage: Optional[int]
    by_club: List[ClubSummary] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_shots": self.total_shots,
            "avg_driving_distance": self.avg_driving_distance,
            "fairway_hit_percentage": self.fairway_hit_percentage,
            "by_club": [
                {"club": s.club, "shots": s.shots, "avg_distance": s.avg_distance} for s in self.by_club
            ],
        }
