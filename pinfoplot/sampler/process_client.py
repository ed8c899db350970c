import logging
from typing import Protocol

import psutil

from pinfoplot.errors import MetricQueryError, ProcessNotFoundError

logger = logging.getLogger(__name__)


class MetricsProvider(Protocol):
    """What the sampler needs from a process: liveness plus the three metric families."""

    def is_running(self) -> bool: ...

    def memory_info(self) -> tuple[int, int]: ...

    def io_counters(self) -> tuple[int, int]: ...

    def cpu_fraction(self) -> float: ...


class ProcessClient:
    """Adapter for psutil.Process, translating psutil failures into pinfoplot errors."""

    process: psutil.Process

    def __init__(self, process: psutil.Process) -> None:
        self.process = process

    @classmethod
    def from_pid(cls, pid: int) -> "ProcessClient":
        try:
            process = psutil.Process(pid)
        except (psutil.NoSuchProcess, psutil.AccessDenied) as exc:
            raise ProcessNotFoundError(f"process {pid} not found or not accessible: {exc}") from exc
        return cls(process)

    @property
    def pid(self) -> int:
        return self.process.pid

    def is_running(self) -> bool:
        """
        Returns False once the process has exited.

        psutil keeps reporting an exited but not yet reaped child as running, so zombies are
        checked explicitly through the process status.
        """
        if not self.process.is_running():
            return False
        try:
            return self.process.status() != psutil.STATUS_ZOMBIE
        except psutil.NoSuchProcess:
            return False
        except psutil.AccessDenied:
            logger.debug(f"status of pid {self.pid} not readable, trusting is_running()")
            return True

    def memory_info(self) -> tuple[int, int]:
        """Returns (rss, vms) in bytes."""
        try:
            mem = self.process.memory_info()
        except psutil.Error as exc:
            raise MetricQueryError(f"memory query failed for pid {self.pid}: {exc}") from exc
        return mem.rss, mem.vms

    def io_counters(self) -> tuple[int, int]:
        """Returns the cumulative (read_count, write_count) operation counters."""
        try:
            io = self.process.io_counters()
        except AttributeError as exc:
            raise MetricQueryError("I/O counters are not supported on this platform") from exc
        except psutil.Error as exc:
            raise MetricQueryError(f"I/O query failed for pid {self.pid}: {exc}") from exc
        return io.read_count, io.write_count

    def cpu_fraction(self) -> float:
        """
        Returns CPU utilization since the previous call as a fraction (1.0 == one full core).

        The first call has no previous reference point and psutil reports 0.0 for it.
        """
        try:
            percent = self.process.cpu_percent(interval=None)
        except psutil.Error as exc:
            raise MetricQueryError(f"CPU query failed for pid {self.pid}: {exc}") from exc
        return percent / 100
