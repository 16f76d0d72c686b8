# services/scheduler.py

import asyncio
import logging
from datetime import datetime
from typing import Callable, List, Optional

from apscheduler.events import EVENT_JOB_ERROR, JobExecutionEvent
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from utils.datetime_utils import get_timezone, parse_hhmm

logger = logging.getLogger(__name__)


class DailyScheduler:
    """
    Ежедневные триггеры по местному времени

    Каждая задача срабатывает раз в сутки в HH:MM часового пояса
    планировщика. Корутины выполняются отдельными задачами asyncio,
    обычные функции - в пуле потоков, поэтому медленный колбэк
    не задерживает следующие срабатывания.
    """

    def __init__(self, timezone: str):
        self.timezone = get_timezone(timezone)
        self.scheduler = AsyncIOScheduler(timezone=self.timezone)
        self._running = False
        self.scheduler.add_listener(self._on_job_error, EVENT_JOB_ERROR)

    def schedule(self, time_of_day: str, callback: Callable, job_id: Optional[str] = None) -> str:
        """Запланировать callback каждый день в time_of_day (HH:MM)"""
        hour, minute = parse_hhmm(time_of_day)
        trigger = CronTrigger(hour=hour, minute=minute, timezone=self.timezone)
        job = self.scheduler.add_job(
            callback,
            trigger,
            id=job_id,
            name=f"daily@{hour:02d}:{minute:02d}",
            replace_existing=job_id is not None,
            misfire_grace_time=60,
            coalesce=True,
        )
        logger.info(f"⏰ Запланировано ежедневно в {hour:02d}:{minute:02d} ({self.timezone.zone}), задача {job.id}")
        return job.id

    def next_fire_time(self, job_id: str, now: Optional[datetime] = None) -> Optional[datetime]:
        job = self.scheduler.get_job(job_id)
        if job is None:
            return None
        # у ожидающей задачи (до start()) next_run_time ещё не вычислен
        next_run_time = getattr(job, "next_run_time", None)
        if next_run_time is not None and now is None:
            return next_run_time
        now = now or datetime.now(self.timezone)
        return job.trigger.get_next_fire_time(None, now)

    def jobs(self) -> List[str]:
        return [job.id for job in self.scheduler.get_jobs()]

    @property
    def running(self) -> bool:
        return self._running

    def start(self):
        """Запуск; повторный вызов во время работы ничего не делает"""
        if self._running:
            logger.warning("⚠️ Планировщик уже запущен")
            return
        self.scheduler.start()
        self._running = True
        logger.info("✅ Планировщик запущен")

    async def stop(self):
        """Остановка без ожидания выполняющихся колбэков; повторный вызов ничего не делает"""
        if not self._running:
            return
        self._running = False
        # AsyncIOScheduler.shutdown выполняется в цикле событий через call_soon_threadsafe
        self.scheduler.shutdown(wait=False)
        while self.scheduler.running:
            await asyncio.sleep(0)
        logger.info("🛑 Планировщик остановлен")

    def _on_job_error(self, event: JobExecutionEvent):
        logger.error(f"❌ Ошибка в задаче {event.job_id}: {event.exception!r}")
