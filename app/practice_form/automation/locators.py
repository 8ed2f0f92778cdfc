from __future__ import annotations

from enum import Enum


class Locator(str, Enum):
    """Selectors of the practice form, addressed by name."""

    FIRST_NAME = "#firstName"
    LAST_NAME = "#lastName"
    EMAIL = "#userEmail"
    # The page's own id carries the typo.
    GENDER_WRAPPER = "#genterWrapper"
    MOBILE = "#userNumber"
    DATE_OF_BIRTH_INPUT = "#dateOfBirthInput"
    SUBJECTS_INPUT = "#subjectsInput"
    HOBBIES_WRAPPER = "#hobbiesWrapper"
    UPLOAD_PICTURE = "#uploadPicture"
    CURRENT_ADDRESS = "#currentAddress"
    STATE_CONTAINER = "#state"
    CITY_CONTAINER = "#city"
    STATE_INPUT = "#react-select-3-input"
    CITY_INPUT = "#react-select-4-input"
    # react-select renders the committed choice as a singleValue element; the
    # open options menu lives in the same container.
    STATE_VALUE = "#state [class*='singleValue'], #state .single-value"
    CITY_VALUE = "#city [class*='singleValue'], #city .single-value"
    SUBMIT = "#submit"
    MODAL_TITLE = ".modal-title"

    @property
    def selector(self) -> str:
        return self.value

    def describe(self) -> str:
        return f"{self.name.lower()} ({self.value})"
