"""
Neighborhoods of Elbasan and coordinate-to-neighborhood resolution
"""
import math
from typing import NamedTuple


class Neighborhood(NamedTuple):
    name: str
    lat: float
    lng: float


NEIGHBORHOODS: tuple[Neighborhood, ...] = (
    Neighborhood("Lagja 5 Maji", 41.1128, 20.0892),
    Neighborhood("Lagja 28 Nëntori", 41.1145, 20.0823),
    Neighborhood("Lagja Kala", 41.1098, 20.0789),
    Neighborhood("Lagja Luigj Gurakuqi", 41.1189, 20.0901),
    Neighborhood("Lagja Partizani", 41.1167, 20.0756),
    Neighborhood("Lagja Skënderbeu", 41.1112, 20.0934),
    Neighborhood("Lagja 11 Nëntori", 41.1078, 20.0867),
    Neighborhood("Lagja Republika", 41.1201, 20.0812),
    Neighborhood("Lagja Kongresi i Elbasanit", 41.1156, 20.0878),
    Neighborhood("Lagja Aqif Pasha", 41.1089, 20.0945),
    Neighborhood("Lagja Dyli Haxhire", 41.1234, 20.0789),
    Neighborhood("Lagja Shën Koll", 41.1045, 20.0823),
    Neighborhood("Lagja Sopotit", 41.0989, 20.0901),
    Neighborhood("Lagja Shirgjan", 41.0912, 20.0756),
    Neighborhood("Lagja Bradashesh", 41.1312, 20.1023),
)

# Initial map centre for the location picker
MAP_CENTER = (41.1128, 20.0892)


def resolve_neighborhood(latitude: float, longitude: float) -> str:
    """Return the name of the reference point closest to the coordinates.

    Plain Euclidean distance on the raw degrees; on a tie the neighborhood
    listed first wins.
    """
    closest = NEIGHBORHOODS[0].name
    min_distance = math.inf

    for neighborhood in NEIGHBORHOODS:
        distance = math.hypot(latitude - neighborhood.lat, longitude - neighborhood.lng)
        if distance < min_distance:
            min_distance = distance
            closest = neighborhood.name

    return closest
