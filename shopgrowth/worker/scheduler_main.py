"""Dedicated APScheduler worker process for daily task reminders."""
from __future__ import annotations

import logging
import signal
import threading
from datetime import datetime
from zoneinfo import ZoneInfo

from apscheduler.schedulers.background import BackgroundScheduler

from shopgrowth.core.config import settings
from shopgrowth.core.logging import configure_logging
from shopgrowth.db.session import SessionLocal
from shopgrowth.services.reminder_runner import run_reminders_for_all_plans
from shopgrowth.services.stores import SqlKeyValueStore
from shopgrowth.services.task_tracker import weekday_name


logger = logging.getLogger(__name__)


def main() -> None:
    configure_logging(log_level=settings.log_level)
    logger.info("Reminder worker starting (enabled=%s)", settings.reminders_enabled)

    scheduler = BackgroundScheduler(timezone=settings.scheduler_timezone)

    if settings.reminders_enabled:
        register_jobs(scheduler)
        scheduler.start()
    else:
        logger.warning("Reminders disabled via config; worker will idle")

    stop_event = threading.Event()

    def shutdown(signum, frame):  # pragma: no cover - signal handler
        logger.info("Reminder worker shutting down (signal=%s)", signum)
        if scheduler.running:
            scheduler.shutdown(wait=False)
        stop_event.set()

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)

    try:
        stop_event.wait()
    except KeyboardInterrupt:  # pragma: no cover - manual stop
        shutdown(signal.SIGINT, None)


def register_jobs(scheduler: BackgroundScheduler) -> None:
    scheduler.add_job(
        run_daily_reminder_job,
        trigger="cron",
        day_of_week="mon-fri",
        hour=settings.reminder_hour,
        minute=settings.reminder_minute,
        id="daily_task_reminders",
        replace_existing=True,
    )
    logger.info(
        "Registered reminder job (time=%02d:%02d %s)",
        settings.reminder_hour,
        settings.reminder_minute,
        settings.scheduler_timezone,
    )


def run_daily_reminder_job() -> None:
    day = weekday_name(datetime.now(ZoneInfo(settings.scheduler_timezone)).date())
    session = SessionLocal()
    try:
        run_reminders_for_all_plans(session, SqlKeyValueStore(session), day=day)
    except Exception:
        logger.exception("Daily reminder job failed")
    finally:
        session.close()


if __name__ == "__main__":  # pragma: no cover - manual launch
    main()
