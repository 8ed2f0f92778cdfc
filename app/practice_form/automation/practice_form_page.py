from __future__ import annotations

import datetime as dt
import logging
import re
from pathlib import Path
from typing import Optional, Union

from ..config import FORM_PATH
from ..errors import ElementNotFoundError, FormSequenceError
from .locators import Locator
from .waits import poll_until, wait_for_locator

LOGGER = logging.getLogger(__name__)

# English abbreviations regardless of the process locale; the date picker only
# understands these.
MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)
SUBMITTED_TITLE = "Thanks for submitting the form"


def format_birth_date(iso_date: str) -> str:
    """Render ``YYYY-MM-DD`` the way the date picker input shows it: ``15 Jan 1990``."""
    parsed = dt.date.fromisoformat(iso_date.strip())
    return f"{parsed.day:02d} {MONTH_ABBREVIATIONS[parsed.month - 1]} {parsed.year}"


class PracticeFormPage:
    def __init__(self, page, timeout_ms: int = 10000, path: str = FORM_PATH) -> None:
        self.page = page
        self.timeout_ms = timeout_ms
        self.path = path
        self.committed_state: Optional[str] = None

    def _require(self, locator, description: str, state: str = "visible"):
        result = wait_for_locator(locator, self.timeout_ms, state=state)
        if not result:
            raise ElementNotFoundError(description, self.timeout_ms, result.reason)
        return locator

    def _element(self, locator: Locator, state: str = "visible"):
        return self._require(self.page.locator(locator.selector).first, locator.describe(), state)

    def _fill_text(self, locator: Locator, value: str) -> None:
        element = self._element(locator)
        element.clear()
        element.fill(value)

    def _choose_label(self, group: Locator, text: str) -> None:
        option = self.page.locator(group.selector).locator("label").filter(
            has_text=re.compile(rf"^\s*{re.escape(text)}\s*$")
        )
        self._require(option.first, f"option '{text}' in {group.describe()}").click()

    def _committed_value(self, locator: Locator) -> str:
        texts = self.page.locator(locator.selector).all_inner_texts()
        return texts[0].strip() if texts else ""

    def _choose_from_dropdown(
        self, container: Locator, field_input: Locator, committed: Locator, value: str
    ) -> None:
        self._element(container).click()
        element = self._element(field_input, state="attached")
        element.press_sequentially(value)
        element.press("Enter")
        result = poll_until(lambda: self._committed_value(committed) == value, self.timeout_ms)
        if not result:
            raise ElementNotFoundError(f"committed value '{value}' in {committed.describe()}", self.timeout_ms)

    def open(self) -> None:
        LOGGER.info("Opening %s", self.path)
        self.page.goto(self.path)
        self.committed_state = None

    def set_first_name(self, value: str) -> None:
        self._fill_text(Locator.FIRST_NAME, value)

    def set_last_name(self, value: str) -> None:
        self._fill_text(Locator.LAST_NAME, value)

    def set_email(self, value: str) -> None:
        self._fill_text(Locator.EMAIL, value)

    def choose_gender(self, label: str) -> None:
        self._choose_label(Locator.GENDER_WRAPPER, label)

    def set_mobile(self, value: str) -> None:
        self._fill_text(Locator.MOBILE, value)

    def set_birth_date(self, iso_date: str) -> str:
        formatted = format_birth_date(iso_date)
        element = self._element(Locator.DATE_OF_BIRTH_INPUT)
        element.click()
        element.press("ControlOrMeta+a")
        element.press_sequentially(formatted)
        element.press("Enter")
        return formatted

    def add_subject(self, subject: str) -> None:
        element = self._element(Locator.SUBJECTS_INPUT)
        element.press_sequentially(subject)
        element.press("Enter")

    def choose_hobby(self, label: str) -> None:
        self._choose_label(Locator.HOBBIES_WRAPPER, label)

    def attach_picture(self, path: Union[str, Path]) -> None:
        picture = Path(path)
        if not picture.is_file():
            raise FileNotFoundError(f"Picture to upload is missing: {picture}")
        self._element(Locator.UPLOAD_PICTURE, state="attached").set_input_files(str(picture))

    def set_address(self, value: str) -> None:
        self._fill_text(Locator.CURRENT_ADDRESS, value)

    def choose_state(self, state: str) -> None:
        self._choose_from_dropdown(Locator.STATE_CONTAINER, Locator.STATE_INPUT, Locator.STATE_VALUE, state)
        self.committed_state = state

    def choose_city(self, city: str) -> None:
        if self.committed_state is None:
            raise FormSequenceError("choose_state must complete before choose_city")
        self._choose_from_dropdown(Locator.CITY_CONTAINER, Locator.CITY_INPUT, Locator.CITY_VALUE, city)

    def submit(self) -> None:
        self._element(Locator.SUBMIT).click()

    def assert_submitted(self, title: str = SUBMITTED_TITLE) -> None:
        modal_title = self.page.locator(Locator.MODAL_TITLE.selector).filter(has_text=title)
        self._require(modal_title.first, f"{Locator.MODAL_TITLE.describe()} '{title}'")
