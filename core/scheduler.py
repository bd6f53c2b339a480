# core/scheduler.py
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from core.config import settings
from core.logging_config import logger


def run_scheduled_sweep():
    """Runs the orphan upload sweep; failures are logged, never raised into the scheduler."""
    from jobs.orphan_sweep_job import run

    try:
        logger.info("[SCHEDULER] Starting orphan upload sweep...")
        run()
    except Exception as e:
        logger.error(f"[SCHEDULER] Orphan sweep failed: {e}", exc_info=True)


def start_scheduler() -> BackgroundScheduler:
    """
    Initialize the APScheduler background process.
    Runs the orphan sweep every ORPHAN_SWEEP_INTERVAL_MINUTES.
    """
    scheduler = BackgroundScheduler(timezone="UTC")

    scheduler.add_job(
        run_scheduled_sweep,
        trigger=IntervalTrigger(minutes=settings.ORPHAN_SWEEP_INTERVAL_MINUTES),
        id="orphan_sweep_job",
        replace_existing=True,
    )

    scheduler.start()
    logger.info(
        f"⏰ Scheduler started. Orphan sweep every {settings.ORPHAN_SWEEP_INTERVAL_MINUTES} minutes."
    )
    return scheduler
