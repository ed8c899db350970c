from datetime import datetime, timedelta

import numpy as np
import pytest

from pinfoplot.errors import EmptyPlotError
from pinfoplot.renderer.panels import (
    LINE_WIDTH,
    build_cpu_panel,
    build_io_panel,
    build_memory_panel,
    build_panels,
)
from pinfoplot.sampler.sample import Sample, SamplingRun


def _make_run(count: int = 4, pid: int = 77) -> SamplingRun:
    samples = [
        Sample(
            elapsed=timedelta(milliseconds=250 * i),
            resident_memory_kb=1000.0 + i,
            virtual_memory_kb=5000.0 + 10 * i,
            io_read_ops=5 * i,
            io_write_ops=2 * i + 1,
            cpu_fraction=0.5 * i,
        )
        for i in range(count)
    ]
    return SamplingRun(
        pid=pid,
        interval=timedelta(milliseconds=250),
        start_time=datetime(2024, 1, 1),
        samples=samples,
    )


def test_build_memory_panel_has_rss_and_vms_series():
    panel = build_memory_panel(_make_run())
    assert panel.title == "Memory Plot of PID 77"
    assert panel.x_label == "t (s)"
    assert panel.y_label == "KB"
    assert [s.label for s in panel.series] == ["RSS", "VMS"]
    rss, vms = panel.series
    np.testing.assert_allclose(rss.y, [1000, 1001, 1002, 1003])
    np.testing.assert_allclose(vms.y, [5000, 5010, 5020, 5030])
    assert rss.color != vms.color


def test_build_io_panel_uses_independent_read_and_write_counters():
    panel = build_io_panel(_make_run())
    assert panel.y_label == "op"
    read, write = panel.series
    assert (read.label, write.label) == ("IO Read", "IO Write")
    np.testing.assert_allclose(read.y, [0, 5, 10, 15])
    np.testing.assert_allclose(write.y, [1, 3, 5, 7])
    assert read.color != write.color


def test_build_cpu_panel_scales_fraction_to_percent():
    panel = build_cpu_panel(_make_run())
    assert panel.y_label == "%"
    (cpu,) = panel.series
    assert cpu.label == "CPU"
    np.testing.assert_allclose(cpu.y, [0, 50, 100, 150])


def test_panels_use_elapsed_seconds_as_x_axis():
    for panel in build_panels(_make_run()):
        for series in panel.series:
            np.testing.assert_allclose(series.x, [0.0, 0.25, 0.5, 0.75])
            assert series.linewidth == LINE_WIDTH


def test_build_panels_returns_memory_io_cpu_in_order():
    titles = [panel.title for panel in build_panels(_make_run(pid=5))]
    assert titles == ["Memory Plot of PID 5", "IO Plot of PID 5", "CPU Plot of PID 5"]


@pytest.mark.parametrize("builder", [build_memory_panel, build_io_panel, build_cpu_panel])
def test_builders_when_run_has_no_samples_raise_empty_plot_error(builder):
    with pytest.raises(EmptyPlotError):
        builder(_make_run(count=0))
