from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional

from dotenv import load_dotenv

from config import get_settings_module

from .attendance.repository import PunchRepository
from .common.datetime_utils import resolve_zone
from .container import Container, build_container
from .core.enums import OvernightPolicy
from .core.exceptions import ValidationError
from .reports.repository import DailySummaryRepository
from .schedules.model import Schedule
from .users.repository import EmployeeRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    module: str
    tz: Optional[tzinfo]
    schedule: Schedule
    overnight_policy: OvernightPolicy
    history_limit: int
    report_days: int
    log_level: str
    debug: bool = False


def _resolve_policy(value: str) -> OvernightPolicy:
    try:
        return OvernightPolicy(str(value).lower())
    except ValueError as exc:
        raise ValidationError(f"Unknown overnight schedule policy: {value!r}") from exc


def load_settings(module_name: Optional[str] = None) -> Settings:
    """Read the settings module picked by APP_ENV (after loading .env)."""
    load_dotenv(override=False)
    module_name = module_name or get_settings_module()
    settings = importlib.import_module(module_name)

    return Settings(
        module=module_name,
        tz=resolve_zone(getattr(settings, "TIMEZONE", "")),
        schedule=Schedule.from_strings(
            getattr(settings, "DEFAULT_SCHEDULE_START", "09:00"),
            getattr(settings, "DEFAULT_SCHEDULE_END", "18:00"),
        ),
        overnight_policy=_resolve_policy(getattr(settings, "OVERNIGHT_SCHEDULE_POLICY", "naive")),
        history_limit=int(getattr(settings, "HISTORY_LIMIT", 10)),
        report_days=int(getattr(settings, "REPORT_DAYS", 7)),
        log_level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        debug=bool(getattr(settings, "DEBUG", False)),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(
    *,
    punches: PunchRepository,
    employees: EmployeeRepository,
    summaries: DailySummaryRepository,
    settings: Optional[Settings] = None,
) -> Container:
    """Wire the services around caller-supplied repositories."""
    settings = settings or load_settings()
    configure_logging(settings)

    if settings.debug:
        logger.debug(
            "[timekeeping] settings=%s tz=%s schedule=%s policy=%s",
            settings.module,
            settings.tz,
            settings.schedule.to_dict(),
            settings.overnight_policy.value,
        )

    return build_container(
        punches=punches,
        employees=employees,
        summaries=summaries,
        tz=settings.tz,
        schedule=settings.schedule,
        overnight_policy=settings.overnight_policy,
        history_limit=settings.history_limit,
        report_days=settings.report_days,
    )
