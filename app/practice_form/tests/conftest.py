import datetime as dt
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from practice_form.automation.practice_form_page import PracticeFormPage  # noqa: E402
from practice_form.automation.session import BrowserSession  # noqa: E402
from practice_form.config import AppConfig, BrowserConfig, RetryConfig  # noqa: E402
from practice_form.data_factory import DataFactory  # noqa: E402
from practice_form.schemas import FormRecord  # noqa: E402

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"
LOCAL_FORM_PATH = FIXTURES_DIR / "practice_form.html"
FROZEN_TODAY = dt.date(2026, 10, 19)


def local_form_config(tmp_path: Path) -> AppConfig:
    if not LOCAL_FORM_PATH.exists():
        pytest.fail(f"Local form fixture missing at {LOCAL_FORM_PATH}")
    return AppConfig(
        base_url=FIXTURES_DIR.resolve().as_uri() + "/",
        form_path=LOCAL_FORM_PATH.name,
        fixtures_dir=tmp_path / "fixtures",
        runs_dir=tmp_path / "runs",
        browser=BrowserConfig(headless=True, command_timeout_ms=3000, navigation_timeout_ms=10000),
        retries=RetryConfig(run_mode=0, open_mode=0),
    )


@pytest.fixture()
def sample_record() -> FormRecord:
    return FormRecord(
        first_name="Jane",
        last_name="Doe",
        email="jane.doe@example.com",
        gender="Female",
        mobile="2065551212",
        birth_date="1990-01-15",
        subject="Physics",
        hobby="Reading",
        address="123 Main St",
        state="Uttar Pradesh",
        city="Lucknow",
    )


@pytest.fixture()
def factory(tmp_path: Path) -> DataFactory:
    return DataFactory(tmp_path / "fixtures", seed=1234, today=FROZEN_TODAY)


@pytest.fixture()
def local_config(tmp_path: Path) -> AppConfig:
    return local_form_config(tmp_path)


@pytest.fixture()
def browser_session(local_config: AppConfig, tmp_path: Path):
    with BrowserSession(local_config, tmp_path / "session") as session:
        yield session


@pytest.fixture()
def form_page(browser_session: BrowserSession, local_config: AppConfig) -> PracticeFormPage:
    form = PracticeFormPage(
        browser_session.page,
        timeout_ms=local_config.browser.command_timeout_ms,
        path=local_config.form_path,
    )
    form.open()
    return form
