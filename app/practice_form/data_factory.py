from __future__ import annotations

import datetime as dt
import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from dateutil.relativedelta import relativedelta
from faker import Faker
from pydantic import ValidationError

from .catalog import CITIES_BY_STATE, GENDERS, HOBBIES, MAX_AGE, MIN_AGE, STATES, SUBJECTS
from .errors import FixtureWriteError, GenerationError
from .schemas import FormRecord

LOGGER = logging.getLogger(__name__)

FIXTURE_SUFFIX = ".json"
DEFAULT_FIXTURE = "generated/formData"


def age_on(birth: dt.date, today: dt.date) -> int:
    return relativedelta(today, birth).years


def birth_date_bounds(today: dt.date, min_age: int = MIN_AGE, max_age: int = MAX_AGE) -> tuple:
    """Earliest and latest birth dates whose age on ``today`` is within bounds."""
    latest = today - relativedelta(years=min_age)
    earliest = today - relativedelta(years=max_age + 1) + dt.timedelta(days=1)
    return earliest, latest


def _with_suffix(name: str) -> str:
    return name if name.lower().endswith(FIXTURE_SUFFIX) else f"{name}{FIXTURE_SUFFIX}"


class DataFactory:
    def __init__(
        self,
        fixtures_dir: Path,
        seed: Optional[int] = None,
        locale: str = "en_US",
        today: Optional[dt.date] = None,
    ) -> None:
        self.fixtures_dir = Path(fixtures_dir)
        self._today = today
        self._faker = Faker(locale)
        if seed is not None:
            self._faker.seed_instance(seed)

    @property
    def today(self) -> dt.date:
        return self._today or dt.date.today()

    def _pick(self, pool: Sequence[str], name: str) -> str:
        if not pool:
            raise GenerationError(f"value pool '{name}' is empty")
        return self._faker.random_element(elements=tuple(pool))

    def _birth_date(self) -> dt.date:
        earliest, latest = birth_date_bounds(self.today)
        return self._faker.date_between_dates(date_start=earliest, date_end=latest)

    def generate(self) -> FormRecord:
        state = self._pick(STATES, "states")
        city = self._pick(CITIES_BY_STATE.get(state, ()), f"cities[{state}]")
        try:
            return FormRecord(
                first_name=self._faker.first_name(),
                last_name=self._faker.last_name(),
                email=self._faker.email(),
                gender=self._pick(GENDERS, "genders"),
                mobile=self._faker.numerify("##########"),
                birth_date=self._birth_date().isoformat(),
                subject=self._pick(SUBJECTS, "subjects"),
                hobby=self._pick(HOBBIES, "hobbies"),
                address=self._faker.street_address(),
                state=state,
                city=city,
            )
        except ValidationError as exc:
            raise GenerationError(f"generated record is invalid: {exc}") from exc

    def fixture_path(self, name: str) -> Path:
        relative = Path(_with_suffix(name))
        if relative.is_absolute():
            raise FixtureWriteError(f"fixture name must be relative: {name}", path=name)
        root = self.fixtures_dir.resolve()
        target = (root / relative).resolve()
        if root != target and root not in target.parents:
            raise FixtureWriteError(f"fixture name escapes the fixtures area: {name}", path=name)
        return target

    def persist(self, record: FormRecord, destination: str) -> FormRecord:
        target = self.fixture_path(destination)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(json.dumps(record.to_fixture(), indent=2) + "\n")
        except OSError as exc:
            raise FixtureWriteError(f"unable to write fixture {target}: {exc}", path=str(target)) from exc
        LOGGER.info("Wrote fixture %s", target)
        return record

    def load(self, name: str) -> FormRecord:
        target = self.fixture_path(name)
        return FormRecord.model_validate(json.loads(target.read_text()))

    def write_fixture(self, destination: str = DEFAULT_FIXTURE) -> FormRecord:
        return self.persist(self.generate(), destination)
