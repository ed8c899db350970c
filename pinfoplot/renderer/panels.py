from dataclasses import dataclass

import numpy as np

from pinfoplot.errors import EmptyPlotError
from pinfoplot.sampler.sample import SamplingRun

X_LABEL = "t (s)"
LINE_WIDTH = 1.0

RED = "#ff0000"
GREEN = "#00ff00"
BLACK = "#000000"


@dataclass(frozen=True)
class PlotSeries:
    label: str
    color: str
    x: np.ndarray
    y: np.ndarray
    linewidth: float = LINE_WIDTH


@dataclass(frozen=True)
class PlotPanel:
    title: str
    x_label: str
    y_label: str
    series: tuple[PlotSeries, ...]


def build_memory_panel(sampling_run: SamplingRun) -> PlotPanel:
    """Resident and virtual memory size in KB."""
    x = _elapsed_axis(sampling_run, "Memory")
    rss = np.array([s.resident_memory_kb for s in sampling_run.samples], dtype=float)
    vms = np.array([s.virtual_memory_kb for s in sampling_run.samples], dtype=float)

    return PlotPanel(
        title=f"Memory Plot of PID {sampling_run.pid}",
        x_label=X_LABEL,
        y_label="KB",
        series=(
            PlotSeries(label="RSS", color=RED, x=x, y=rss),
            PlotSeries(label="VMS", color=GREEN, x=x, y=vms),
        ),
    )


def build_io_panel(sampling_run: SamplingRun) -> PlotPanel:
    """Cumulative read and write operation counts, each from its own counter."""
    x = _elapsed_axis(sampling_run, "IO")
    reads = np.array([s.io_read_ops for s in sampling_run.samples], dtype=float)
    writes = np.array([s.io_write_ops for s in sampling_run.samples], dtype=float)

    return PlotPanel(
        title=f"IO Plot of PID {sampling_run.pid}",
        x_label=X_LABEL,
        y_label="op",
        series=(
            PlotSeries(label="IO Read", color=RED, x=x, y=reads),
            PlotSeries(label="IO Write", color=GREEN, x=x, y=writes),
        ),
    )


def build_cpu_panel(sampling_run: SamplingRun) -> PlotPanel:
    x = _elapsed_axis(sampling_run, "CPU")
    cpu = np.array([s.cpu_fraction for s in sampling_run.samples], dtype=float) * 100

    return PlotPanel(
        title=f"CPU Plot of PID {sampling_run.pid}",
        x_label=X_LABEL,
        y_label="%",
        series=(PlotSeries(label="CPU", color=BLACK, x=x, y=cpu),),
    )


def build_panels(sampling_run: SamplingRun) -> list[PlotPanel]:
    """Returns the memory, IO and CPU panels, in that order."""
    return [
        build_memory_panel(sampling_run),
        build_io_panel(sampling_run),
        build_cpu_panel(sampling_run),
    ]


def _elapsed_axis(sampling_run: SamplingRun, family: str) -> np.ndarray:
    if not sampling_run.samples:
        raise EmptyPlotError(f"no samples to build the {family} plot of PID {sampling_run.pid}")
    return np.array(sampling_run.elapsed_seconds(), dtype=float)
