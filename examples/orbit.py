"""Orbit Example for lazyeager.

Vertices may return any Python object. Here a pydantic model carries
the orbital parameters of a circular low Earth orbit, and the period
and velocity are derived from it.

Solving only ``period`` leaves ``velocity`` and ``summary`` untouched:
    lazyeager solve examples/orbit.py --node period
"""

import math

from pydantic import BaseModel

import lazyeager as le

EARTH_MU = 3.986004418e14  # m^3/s^2
EARTH_RADIUS = 6_371_000.0  # m


class Orbit(BaseModel):
    altitude: float  # m
    inclination: float  # deg


graph = le.Graph()


@graph.vertex()
def orbit() -> Orbit:
    return Orbit(altitude=550_000.0, inclination=97.6)


@graph.vertex(depends=["orbit"])
def semi_major_axis(orbit: Orbit) -> float:
    return EARTH_RADIUS + orbit.altitude


@graph.vertex(depends=["semi_major_axis"])
def period(a: float) -> float:
    """Orbital period in seconds."""
    return 2 * math.pi * math.sqrt(a**3 / EARTH_MU)


@graph.vertex(depends=["semi_major_axis"])
def velocity(a: float) -> float:
    """Circular orbital velocity in m/s."""
    return math.sqrt(EARTH_MU / a)


@graph.vertex(depends=["orbit", "period", "velocity"])
def summary(orbit: Orbit, period: float, velocity: float) -> dict[str, float]:
    return {
        "altitude_km": orbit.altitude / 1000,
        "period_min": period / 60,
        "velocity_km_s": velocity / 1000,
    }
