from __future__ import annotations

import argparse
import json
from typing import List, Optional

from practice_form.config import AppConfig, configure_logging
from practice_form.data_factory import DEFAULT_FIXTURE, DataFactory


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Generate a practice form record and write it as a fixture.")
    parser.add_argument("name", nargs="?", default=DEFAULT_FIXTURE, help="fixture name relative to the fixtures dir")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    config = AppConfig.from_env()
    configure_logging(config)
    factory = DataFactory(config.fixtures_dir, seed=args.seed)
    record = factory.write_fixture(args.name)
    print(json.dumps(record.to_fixture(), indent=2))


if __name__ == "__main__":
    main()
