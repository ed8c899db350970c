from dataclasses import dataclass, field
from datetime import datetime, timedelta


@dataclass(frozen=True)
class Sample:
    elapsed: timedelta
    resident_memory_kb: float
    virtual_memory_kb: float
    io_read_ops: int
    io_write_ops: int
    cpu_fraction: float


@dataclass
class SamplingRun:
    """Samples collected from one process, ordered by elapsed time since start_time."""

    pid: int
    interval: timedelta
    start_time: datetime
    samples: list[Sample] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def duration(self) -> timedelta:
        if not self.samples:
            return timedelta(0)
        return self.samples[-1].elapsed

    def elapsed_seconds(self) -> list[float]:
        return [sample.elapsed.total_seconds() for sample in self.samples]
