"""Preview a routine parse from the command line.

    python -m routines.main "iris walks jax every weekday at 7am" --people people.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Sequence

from routines.core.routine_format import describe_recurrence, format_clock_time
from routines.core.routine_models import ParsedRoutine, Person
from routines.core.routine_parse import is_valid_parsed_routine, parse_routine
from routines.core.routine_record import parsed_routine_to_record
from routines.infra.config import load_people, load_settings
from routines.infra.logging_config import configure_logging_from_settings

LOGGER = logging.getLogger(__name__)


def build_preview(parsed: ParsedRoutine, *, today: date | None = None) -> dict[str, Any]:
    chips = [describe_recurrence(parsed.recurrence)]
    if parsed.time:
        chips.append(format_clock_time(parsed.time))
    elif parsed.time_of_day:
        chips.append(parsed.time_of_day)
    if parsed.assignee_name:
        chips.append(parsed.assignee_name)
    valid = is_valid_parsed_routine(parsed)
    return {
        "raw": parsed.raw,
        "action": parsed.action,
        "assignee": parsed.assignee,
        "assignee_name": parsed.assignee_name,
        "recurrence": {"type": parsed.recurrence.type, **_recurrence_fields(parsed)},
        "time": parsed.time,
        "time_of_day": parsed.time_of_day,
        "tokens": [{"text": token.text, "kind": token.kind} for token in parsed.tokens],
        "chips": chips,
        "valid": valid,
        "record": parsed_routine_to_record(parsed, today=today).to_dict() if valid else None,
    }


def _recurrence_fields(parsed: ParsedRoutine) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    days = getattr(parsed.recurrence, "days", None)
    if days:
        fields["days"] = list(days)
    interval = getattr(parsed.recurrence, "interval", None)
    if interval:
        fields["interval"] = interval
    return fields


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="routines", description="Preview a natural-language routine parse.")
    parser.add_argument("text", help="Routine sentence, e.g. 'gym monday and wednesday at 6pm'")
    parser.add_argument("--people", type=Path, default=None, help="JSON list of {id, name} objects")
    parser.add_argument("--today", type=date.fromisoformat, default=None, help="Anchor date (YYYY-MM-DD)")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = load_settings()
    configure_logging_from_settings(settings)

    people: list[Person] = []
    people_path = args.people or settings.people_path
    if people_path is not None:
        try:
            people = load_people(people_path)
        except RuntimeError as exc:
            LOGGER.error("preview.people failed: %s", exc)
            return 2
    LOGGER.debug("preview.start env=%s people=%s", settings.app_env, len(people))

    parsed = parse_routine(args.text, people)
    preview = build_preview(parsed, today=args.today)
    print(json.dumps(preview, ensure_ascii=False, indent=2))
    return 0 if preview["valid"] else 1


if __name__ == "__main__":
    sys.exit(main())
