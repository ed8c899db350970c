import logging
import time
from datetime import datetime, timedelta
from typing import Callable

from pinfoplot.config import SamplerConfig
from pinfoplot.errors import InsufficientSamplesError, ProcessNotFoundError
from pinfoplot.sampler.process_client import MetricsProvider, ProcessClient
from pinfoplot.sampler.sample import Sample, SamplingRun

MIN_SAMPLES = 2

logger = logging.getLogger(__name__)


class Sampler:
    """
    Polls a single process at a fixed interval and collects a SamplingRun.

    The loop runs on the calling thread. Each iteration takes one sample, sleeps for exactly
    the configured interval and then re-checks whether the process is still alive, so the
    run ends at most one interval after the process exits.
    """

    config: SamplerConfig

    def __init__(
        self,
        config: SamplerConfig,
        client_factory: Callable[[int], MetricsProvider] = ProcessClient.from_pid,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config
        self._client_factory = client_factory
        self._clock = clock
        self._sleep = sleep

    def validate(self) -> None:
        """Rejects configurations that cannot describe a trend, before any process is touched."""
        duration = self.config.duration
        interval = self.config.interval

        if interval <= timedelta(0):
            raise InsufficientSamplesError(f"sampling interval must be positive, got {interval}")
        if duration < timedelta(0):
            raise InsufficientSamplesError(f"sampling duration must not be negative: {duration}")

        # duration == 0 means sampling until the process exits
        if duration > timedelta(0) and duration // interval < MIN_SAMPLES:
            raise InsufficientSamplesError(
                f"need at least {MIN_SAMPLES} samples, the sampling interval ({interval}) is too "
                f"long or the sampling duration ({duration}) is too short"
            )

    def run(self, pid: int) -> SamplingRun:
        self.validate()
        if pid <= 0:
            raise ProcessNotFoundError(f"invalid pid {pid}")

        client = self._client_factory(pid)
        if not client.is_running():
            raise ProcessNotFoundError(f"process {pid} is not running")

        duration = self.config.duration
        interval = self.config.interval
        until_exit = duration == timedelta(0)

        sampling_run = SamplingRun(pid=pid, interval=interval, start_time=datetime.now())
        anchor = self._clock()
        logger.info(
            f"Sampling pid {pid} every {interval.total_seconds():.3f}s "
            + ("until it exits" if until_exit else f"for {duration.total_seconds():.3f}s")
        )

        running = True
        elapsed = self._elapsed_since(anchor)
        while running and (until_exit or elapsed <= duration):
            sample = self._take_sample(client, elapsed)
            sampling_run.samples.append(sample)
            logger.debug(f"pid {pid} sample #{len(sampling_run)}: {sample}")

            self._sleep(interval.total_seconds())
            running = client.is_running()
            elapsed = self._elapsed_since(anchor)

        if not running:
            logger.info(f"Process {pid} exited, stopping after {len(sampling_run)} samples")
        else:
            logger.info(f"Sampling window elapsed, collected {len(sampling_run)} samples")

        return sampling_run

    def _elapsed_since(self, anchor: float) -> timedelta:
        return timedelta(seconds=max(self._clock() - anchor, 0.0))

    @staticmethod
    def _take_sample(client: MetricsProvider, elapsed: timedelta) -> Sample:
        # A sample is all three metric families or nothing: any query error propagates.
        rss, vms = client.memory_info()
        read_ops, write_ops = client.io_counters()
        cpu = client.cpu_fraction()

        return Sample(
            elapsed=elapsed,
            resident_memory_kb=rss / 1024,
            virtual_memory_kb=vms / 1024,
            io_read_ops=read_ops,
            io_write_ops=write_ops,
            cpu_fraction=cpu,
        )
