"""Infection Rules - pure checks behind the crowd-sourced infection flag.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - The flag only moves false -> true; next_infected_state never returns False
      for a survivor that is already infected
"""

from app.core.domain_types import INFECTION_THRESHOLD
from app.core.errors import SelfAccusationError


def check_not_self_accusation(accuser_id: int, accused_id: int) -> None:
    if accuser_id == accused_id:
        raise SelfAccusationError(accuser_id)


def next_infected_state(
    currently_infected: bool,
    distinct_accusers: int,
    threshold: int = INFECTION_THRESHOLD,
) -> bool:
    """Infected once `threshold` distinct survivors have reported, never un-flipped."""
    return currently_infected or distinct_accusers >= threshold
