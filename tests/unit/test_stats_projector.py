"""Tests for project_distribution (ordering and half-up percentages)."""

from spin_admin.application.dtos.stats import PrizeShare
from spin_admin.application.services.stats_projector import project_distribution


def test_basic_projection() -> None:
    assert project_distribution({"gold": 3, "silver": 1}) == [
        PrizeShare("gold", 3, 75),
        PrizeShare("silver", 1, 25),
    ]


def test_empty_mapping() -> None:
    assert project_distribution({}) == []


def test_zero_total_gives_zero_percentages() -> None:
    shares = project_distribution({"gold": 0, "silver": 0})
    assert [s.percentage for s in shares] == [0, 0]
    assert [s.label for s in shares] == ["gold", "silver"]


def test_ties_sorted_by_label() -> None:
    shares = project_distribution({"b": 2, "a": 2, "c": 5})
    assert [s.label for s in shares] == ["c", "a", "b"]


def test_half_rounds_up() -> None:
    # 1/8 = 12.5%, 7/8 = 87.5%
    shares = project_distribution({"rare": 1, "common": 7})
    assert [(s.label, s.percentage) for s in shares] == [("common", 88), ("rare", 13)]


def test_percentages_sum_to_about_100() -> None:
    shares = project_distribution({"a": 1, "b": 1, "c": 1})
    assert [s.percentage for s in shares] == [33, 33, 33]
    assert abs(sum(s.percentage for s in shares) - 100) <= len(shares)


def test_deterministic_for_any_input_order() -> None:
    first = project_distribution({"x": 4, "y": 9, "z": 4})
    second = project_distribution({"z": 4, "y": 9, "x": 4})
    assert first == second
