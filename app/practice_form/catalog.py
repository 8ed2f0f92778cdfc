from __future__ import annotations

from typing import Dict, Tuple

GENDERS: Tuple[str, ...] = ("Male", "Female", "Other")
HOBBIES: Tuple[str, ...] = ("Sports", "Reading", "Music")
SUBJECTS: Tuple[str, ...] = ("Maths", "Physics", "Chemistry", "English", "Computer Science")

# City lists mirror the options the practice form offers for each state.
CITIES_BY_STATE: Dict[str, Tuple[str, ...]] = {
    "NCR": ("Delhi", "Gurgaon", "Noida"),
    "Uttar Pradesh": ("Agra", "Lucknow", "Merrut"),
    "Haryana": ("Karnal", "Panipat"),
    "Rajasthan": ("Jaipur", "Jaiselmer"),
}
STATES: Tuple[str, ...] = tuple(CITIES_BY_STATE)

MIN_AGE = 18
MAX_AGE = 60


def cities_for(state: str) -> Tuple[str, ...]:
    return CITIES_BY_STATE.get(state, ())
