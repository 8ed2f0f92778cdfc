from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from ..config import AppConfig
from ..schemas import FormRecord
from .page_errors import PageErrorGuard
from .practice_form_page import PracticeFormPage
from .session import BrowserSession, append_run_log

LOGGER = logging.getLogger(__name__)

Step = Tuple[str, Callable[[], object]]


def fill_steps(
    form_page: PracticeFormPage, record: FormRecord, picture: Optional[Union[str, Path]] = None
) -> List[Step]:
    """The field operations in the order the form is filled."""
    steps: List[Step] = [
        ("first_name", lambda: form_page.set_first_name(record.first_name)),
        ("last_name", lambda: form_page.set_last_name(record.last_name)),
        ("email", lambda: form_page.set_email(record.email)),
        ("gender", lambda: form_page.choose_gender(record.gender)),
        ("mobile", lambda: form_page.set_mobile(record.mobile)),
        ("birth_date", lambda: form_page.set_birth_date(record.birth_date)),
        ("subject", lambda: form_page.add_subject(record.subject)),
        ("hobby", lambda: form_page.choose_hobby(record.hobby)),
    ]
    if picture is not None:
        steps.append(("picture", lambda: form_page.attach_picture(picture)))
    steps.extend(
        [
            ("address", lambda: form_page.set_address(record.address)),
            ("state", lambda: form_page.choose_state(record.state)),
            ("city", lambda: form_page.choose_city(record.city)),
        ]
    )
    return steps


FILL_ORDER = (
    "first_name",
    "last_name",
    "email",
    "gender",
    "mobile",
    "birth_date",
    "subject",
    "hobby",
    "picture",
    "address",
    "state",
    "city",
)


def _run_steps(steps: List[Step], guard: Optional[PageErrorGuard]) -> None:
    for name, step in steps:
        LOGGER.debug("Step %s", name)
        step()
        if guard is not None:
            guard.raise_for_errors()


def fill_practice_form(
    form_page: PracticeFormPage,
    record: FormRecord,
    picture: Optional[Union[str, Path]] = None,
    guard: Optional[PageErrorGuard] = None,
) -> None:
    _run_steps(fill_steps(form_page, record, picture), guard)


def submit_practice_form(
    form_page: PracticeFormPage,
    record: FormRecord,
    guard: Optional[PageErrorGuard] = None,
    picture: Optional[Union[str, Path]] = None,
) -> None:
    fill_practice_form(form_page, record, picture=picture, guard=guard)
    _run_steps([("submit", form_page.submit), ("assert_submitted", form_page.assert_submitted)], guard)


def run_scenario(
    config: AppConfig,
    record: FormRecord,
    run_dir: Path,
    picture: Optional[Union[str, Path]] = None,
    session_factory: Callable[..., BrowserSession] = BrowserSession,
) -> int:
    """Open the form, fill, submit and confirm, in a fresh session per attempt.

    Retries the whole scenario ``config.scenario_retries`` times and re-raises
    the last failure. Returns the number of attempts used.
    """
    run_dir = Path(run_dir)
    run_dir.mkdir(parents=True, exist_ok=True)
    attempts = config.scenario_retries + 1
    for attempt in range(1, attempts + 1):
        start_time = time.perf_counter()
        try:
            with session_factory(config, run_dir / f"attempt-{attempt}") as session:
                form_page = PracticeFormPage(
                    session.page, timeout_ms=config.browser.command_timeout_ms, path=config.form_path
                )
                form_page.open()
                submit_practice_form(form_page, record, guard=session.guard, picture=picture)
        except Exception as exc:
            duration_ms = int((time.perf_counter() - start_time) * 1000)
            append_run_log(run_dir, f"Attempt {attempt}/{attempts} failed after {duration_ms}ms: {exc}")
            if attempt == attempts:
                raise
            LOGGER.warning("Scenario attempt %s/%s failed, retrying: %s", attempt, attempts, exc)
            continue
        duration_ms = int((time.perf_counter() - start_time) * 1000)
        append_run_log(run_dir, f"Attempt {attempt}/{attempts} submitted in {duration_ms}ms")
        return attempt
    raise AssertionError("scenario loop exited without a result")
