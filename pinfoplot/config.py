import os
import re
from dataclasses import dataclass, field
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")

_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def parse_duration(value: str) -> timedelta:
    """
    Parses a duration string such as "50ms", "1.5s" or "1m30s".

    A bare "0" is accepted as the zero duration; any other number needs a unit.
    """
    text = value.strip()
    if text == "0":
        return timedelta(0)

    total = 0.0
    position = 0
    for match in _DURATION_PART.finditer(text):
        if match.start() != position:
            break
        number, unit = match.groups()
        total += float(number) * _UNIT_SECONDS[unit]
        position = match.end()

    if not text or position != len(text):
        raise ValueError(f"invalid duration {value!r}")

    return timedelta(seconds=total)


@dataclass(frozen=True)
class SamplerConfig:
    """How long and how often the target process is polled. duration == 0 samples until exit."""

    duration: timedelta = timedelta(seconds=10)
    interval: timedelta = timedelta(milliseconds=50)


@dataclass(frozen=True)
class RenderConfig:
    width: str = "10cm"
    height: str = "8cm"
    output_path: str = "pinfo.png"
    dpi: int = 96


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable configuration container.
    """

    sampler: SamplerConfig = field(default_factory=SamplerConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    log_file: str | None = None

    @classmethod
    def from_env(cls) -> "AppConfig":
        return cls(
            sampler=SamplerConfig(
                duration=parse_duration(os.getenv("PINFOPLOT_DURATION", "10s")),
                interval=parse_duration(os.getenv("PINFOPLOT_INTERVAL", "50ms")),
            ),
            render=RenderConfig(
                width=os.getenv("PINFOPLOT_WIDTH", "10cm"),
                height=os.getenv("PINFOPLOT_HEIGHT", "8cm"),
                output_path=os.getenv("PINFOPLOT_OUTPUT", "pinfo.png"),
                dpi=int(os.getenv("PINFOPLOT_DPI", "96")),
            ),
            log_file=os.getenv("PINFOPLOT_LOG_FILE"),
        )
