"""
Energy Scheduler for the Energy Balancer

This module contains the periodic driver: a QThread that runs one
optimizer pass per interval and reports status through Qt signals
until it is stopped.
"""

import logging
from typing import Optional

from PyQt6.QtCore import QMutex, QThread, QWaitCondition, pyqtSignal

from .energy_units import InvalidConfiguration, SchedulerCancelled
from .optimizer import EnergyOptimizer

logger = logging.getLogger(__name__)

# Qt timers and waits take a signed 32-bit millisecond count
MAX_TIMER_SECONDS = (2 ** 31 - 1) / 1000


class EnergyScheduler(QThread):
    """
    Periodic optimizer driver running in a separate thread
    with status updates via Qt signals.
    """

    # Qt Signals for pass updates
    pass_completed = pyqtSignal(int, list)     # Pass number, status pairs
    status_updated = pyqtSignal(str)           # Formatted status report
    log_updated = pyqtSignal(str)              # Log message
    consumer_exhausted = pyqtSignal(list)      # Names of unmatched consumers
    scheduler_failed = pyqtSignal(str)         # Error message
    scheduler_stopped = pyqtSignal(int)        # Passes run by this thread

    def __init__(self, optimizer: EnergyOptimizer, interval: float = 1.0,
                 max_passes: Optional[int] = None, parent=None):
        super().__init__(parent)
        if not 0 < interval <= MAX_TIMER_SECONDS:
            raise InvalidConfiguration(
                f"Scheduler interval must be in (0, {MAX_TIMER_SECONDS}] seconds: {interval}"
            )
        if max_passes is not None and max_passes < 0:
            raise InvalidConfiguration(f"max_passes must not be negative: {max_passes}")

        self.optimizer = optimizer
        self.interval = float(interval)
        self.max_passes = max_passes
        self.passes_run = 0
        self.is_cancelled = False

        self._mutex = QMutex()
        self._wake = QWaitCondition()

    def stop(self):
        """Ask the loop to finish and wake it if it is sleeping"""
        self._mutex.lock()
        try:
            self.is_cancelled = True
            self.requestInterruption()
            self._wake.wakeAll()
        finally:
            self._mutex.unlock()

    def stop_and_wait(self, timeout_ms: Optional[int] = None) -> bool:
        """Stop the loop and join the thread"""
        self.stop()
        if timeout_ms is None:
            return self.wait()
        return self.wait(timeout_ms)

    def run(self):
        """Main scheduling loop (runs in separate thread)"""
        self.passes_run = 0
        self._log(f"Scheduler started (interval {self.interval:.2f}s)")

        try:
            while not self._reached_max_passes():
                self._check_cancelled()
                self._run_one_pass()
                if self._reached_max_passes():
                    self._log(f"Reached max passes ({self.max_passes})")
                    break
                self._sleep_interval()

        except SchedulerCancelled:
            self._log("Scheduler cancelled")
        except Exception as e:
            error_msg = f"Scheduler error: {str(e)}"
            logger.error(error_msg, exc_info=True)
            self.scheduler_failed.emit(error_msg)

        self._log(f"Scheduler stopped after {self.passes_run} pass(es)")
        self.scheduler_stopped.emit(self.passes_run)

    def run_passes(self, count: int):
        """Run ``count`` passes on the calling thread without sleeping"""
        for _ in range(count):
            self._run_one_pass()

    def _run_one_pass(self):
        self.optimizer.optimize()
        self.passes_run += 1
        pass_number = self.optimizer.pass_count

        status = self.optimizer.status()
        self.pass_completed.emit(pass_number, status)
        self.status_updated.emit(self.optimizer.format_status(pass_number))

        if self.optimizer.last_exhausted:
            self.consumer_exhausted.emit(list(self.optimizer.last_exhausted))

    def _reached_max_passes(self) -> bool:
        return self.max_passes is not None and self.passes_run >= self.max_passes

    def _sleep_interval(self):
        self._mutex.lock()
        try:
            if not self.is_cancelled:
                self._wake.wait(self._mutex, int(self.interval * 1000))
        finally:
            self._mutex.unlock()
        self._check_cancelled()

    def _check_cancelled(self):
        if self.is_cancelled or self.isInterruptionRequested():
            raise SchedulerCancelled("Scheduler was stopped")

    def _log(self, message: str):
        logger.info(message)
        self.log_updated.emit(message)
