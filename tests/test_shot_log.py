"""Tests for the in-memory shot tracker."""

import pytest

from services.shots.shot_log import CLUBS, INVALID_SHOT, ShotLog, sample_shots


def test_sample_log_is_newest_first():
    log = ShotLog(sample_shots())

    assert [shot.club for shot in log.shots] == ["Driver", "7 Iron", "Driver", "Pitching Wedge"]
    assert [shot.id for shot in log.shots] == [4, 3, 2, 1]


def test_sample_stats():
    stats = ShotLog(sample_shots()).stats()

    assert stats.total_shots == 4
    assert stats.avg_driving_distance == 258
    assert stats.fairway_hit_percentage == 50
    assert [summary.club for summary in stats.by_club] == ["Driver", "7 Iron", "Pitching Wedge"]


def test_empty_log_has_no_driving_stats():
    stats = ShotLog().stats()

    assert stats.total_shots == 0
    assert stats.avg_driving_distance is None
    assert stats.fairway_hit_percentage is None
    assert stats.to_dict()["by_club"] == []


def test_log_accepts_numeric_text():
    log = ShotLog()

    shot = log.log("Sand Wedge", " 42 ", "Short")

    assert shot.distance == 42
    assert log.shots[0] is shot
    assert shot.to_dict()["date"]


@pytest.mark.parametrize(
    "club, distance, result",
    [
        ("Driver", 0, "Fairway Hit"),
        ("Driver", -10, "Fairway Hit"),
        ("Driver", "far", "Fairway Hit"),
        ("Driver", "", "Fairway Hit"),
        ("Driver", True, "Fairway Hit"),
        ("Hybrid", 200, "Fairway Hit"),
        ("Driver", 200, "Topped"),
    ],
)
def test_invalid_shots_rejected(club, distance, result):
    log = ShotLog()

    with pytest.raises(ValueError, match=INVALID_SHOT):
        log.log(club, distance, result)
    assert len(log) == 0


def test_by_club_follows_club_order():
    log = ShotLog()
    log.log("Putter", 3, "In the Hole")
    log.log("Driver", 240, "Missed Left")
    log.log("Putter", 8, "Short")

    summaries = log.stats().by_club

    assert [s.club for s in summaries] == [club for club in CLUBS if club in {"Putter", "Driver"}]
    assert summaries[1].shots == 2
    assert summaries[1].avg_distance == 6


def test_fairway_percentage_rounds_half_up():
    log = ShotLog()
    log.log("Driver", 250, "Fairway Hit")
    for _ in range(7):
        log.log("Driver", 250, "Missed Left")

    assert log.stats().fairway_hit_percentage == 13


def test_driving_average_rounds_half_up():
    log = ShotLog()
    log.log("Driver", 262, "Fairway Hit")
    log.log("Driver", 263, "Missed Right")

    stats = log.stats()

    assert stats.avg_driving_distance == 263
    assert stats.by_club[0].avg_distance == 263
