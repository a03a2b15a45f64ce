from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from routines.core.routine_models import Person

LOGGER = logging.getLogger(__name__)

DEFAULT_LOG_LEVEL = "INFO"

_DEV_ENVS = {"dev", "development", "local"}


@dataclass(frozen=True)
class Settings:
    app_env: str
    log_level: str
    log_file: Path | None
    people_path: Path | None


def resolve_env_label(raw_env: dict[str, str] | None = None) -> str:
    source = raw_env if raw_env is not None else os.environ
    env = source.get("APP_ENV", "prod").strip().lower()
    return "dev" if env in _DEV_ENVS else "prod"


def load_settings(raw_env: dict[str, str] | None = None) -> Settings:
    if raw_env is None:
        load_dotenv()
    env = raw_env if raw_env is not None else os.environ

    log_level = (env.get("LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL
    return Settings(
        app_env=resolve_env_label(dict(env)),
        log_level=log_level,
        log_file=_parse_optional_path(env.get("LOG_FILE")),
        people_path=_parse_optional_path(env.get("ROUTINES_PEOPLE_PATH")),
    )


def load_people(path: Path) -> list[Person]:
    """Read a JSON list of ``{"id": ..., "name": ...}`` objects."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        LOGGER.error("config.people unreadable path=%s error=%s", path, exc)
        raise RuntimeError(f"People file is not readable: {path}") from exc
    except json.JSONDecodeError as exc:
        LOGGER.error("config.people invalid json path=%s error=%s", path, exc)
        raise RuntimeError(f"People file is not valid JSON: {path}") from exc
    if not isinstance(payload, list):
        raise RuntimeError(f"People file must contain a JSON list: {path}")
    people: list[Person] = []
    for item in payload:
        if not isinstance(item, dict) or "id" not in item or "name" not in item:
            LOGGER.warning("config.people skipped entry without id/name path=%s", path)
            continue
        people.append(Person.from_mapping(item))
    return people


def _parse_optional_path(value: str | None) -> Path | None:
    if value is None:
        return None
    trimmed = value.strip()
    if not trimmed:
        return None
    return Path(trimmed)
