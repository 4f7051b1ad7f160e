"""
Tests for coordinate-to-neighborhood resolution.
"""
import pytest

from civic_reports import neighborhoods
from civic_reports.neighborhoods import NEIGHBORHOODS, Neighborhood, resolve_neighborhood


@pytest.mark.parametrize("neighborhood", NEIGHBORHOODS, ids=lambda n: n.name)
def test_reference_point_resolves_to_itself(neighborhood):
    assert resolve_neighborhood(neighborhood.lat, neighborhood.lng) == neighborhood.name


def test_point_near_kala_resolves_to_kala():
    assert resolve_neighborhood(41.1100, 20.0790) == "Lagja Kala"


def test_far_away_point_still_gets_a_neighborhood():
    """Any coordinate maps to its closest reference point, however far."""
    assert resolve_neighborhood(41.20, 20.20) == "Lagja Bradashesh"
    assert resolve_neighborhood(40.0, 19.0) in {n.name for n in NEIGHBORHOODS}


def test_tie_goes_to_first_listed(monkeypatch):
    monkeypatch.setattr(neighborhoods, "NEIGHBORHOODS", (
        Neighborhood("East", 0.0, 1.0),
        Neighborhood("West", 0.0, -1.0),
    ))
    assert resolve_neighborhood(0.0, 0.0) == "East"


def test_list_has_fifteen_entries():
    assert len(NEIGHBORHOODS) == 15
    assert NEIGHBORHOODS[0].name == "Lagja 5 Maji"
