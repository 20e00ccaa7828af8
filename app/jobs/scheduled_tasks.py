import threading
import time
import schedule

from core.config import settings
from core.logging import get_module_logger
from jobs.group_members_report import run_group_members_report

logger = get_module_logger()


def safe_run(job):
    def wrapper(*args, **kwargs):
        try:
            job(*args, **kwargs)
        except Exception as e:
            logger.error(
                "safe_run_error",
                function=job.__name__,
                module=job.__module__,
                error=str(e),
                job_args=args,
                job_kwargs=kwargs,
            )

    return wrapper


def init():
    """Register the daily report; returns False when no run time is configured."""
    run_at = settings.membership_report.REPORT_SCHEDULE_TIME
    if not run_at:
        logger.warning("report_schedule_not_configured")
        return False

    if not settings.membership_report.REPORT_OUTPUT_PATH:
        # scheduled runs only log per-group counts
        logger.warning("report_output_path_not_configured", run_at=run_at)

    schedule.every().day.at(run_at).do(safe_run(run_group_members_report))
    schedule.every(5).minutes.do(safe_run(scheduler_heartbeat))
    logger.info("scheduled_tasks_initialized", run_at=run_at)
    return True


def scheduler_heartbeat():
    logger.info(
        "running_scheduler_heartbeat", module="scheduled_tasks", time=time.ctime()
    )


def run_continuously(interval=1):
    """Continuously run, while executing pending jobs at each
    elapsed time interval.
    @return cease_continuous_run: threading. Event which can
    be set to cease continuous run. Missed jobs are not caught up:
    a daily job whose time passed while the thread slept runs once.
    """
    cease_continuous_run = threading.Event()

    class ScheduleThread(threading.Thread):
        @classmethod
        def run(cls):
            while not cease_continuous_run.is_set():
                schedule.run_pending()
                time.sleep(interval)

    continuous_thread = ScheduleThread()
    continuous_thread.start()
    return cease_continuous_run
