import os
from types import SimpleNamespace

import psutil
import pytest

from pinfoplot.errors import MetricQueryError, ProcessNotFoundError
from pinfoplot.sampler.process_client import ProcessClient


def _make_process(mocker, pid: int = 1234):
    process = mocker.MagicMock()
    process.pid = pid
    process.is_running.return_value = True
    process.status.return_value = psutil.STATUS_RUNNING
    return process


def test_memory_info_returns_rss_and_vms_bytes(mocker):
    process = _make_process(mocker)
    process.memory_info.return_value = SimpleNamespace(rss=1024, vms=4096)
    client = ProcessClient(process)
    assert client.memory_info() == (1024, 4096)


def test_io_counters_returns_read_and_write_counts(mocker):
    process = _make_process(mocker)
    process.io_counters.return_value = SimpleNamespace(
        read_count=7, write_count=3, read_bytes=700, write_bytes=300
    )
    client = ProcessClient(process)
    assert client.io_counters() == (7, 3)


def test_cpu_fraction_converts_percent_to_fraction(mocker):
    process = _make_process(mocker)
    process.cpu_percent.return_value = 150.0
    client = ProcessClient(process)
    assert client.cpu_fraction() == pytest.approx(1.5)
    process.cpu_percent.assert_called_once_with(interval=None)


@pytest.mark.parametrize(
    "query, psutil_method",
    [
        ("memory_info", "memory_info"),
        ("io_counters", "io_counters"),
        ("cpu_fraction", "cpu_percent"),
    ],
)
def test_queries_when_psutil_fails_raise_metric_query_error(mocker, query, psutil_method):
    process = _make_process(mocker)
    getattr(process, psutil_method).side_effect = psutil.AccessDenied(pid=1234)
    client = ProcessClient(process)
    with pytest.raises(MetricQueryError, match="1234"):
        getattr(client, query)()


def test_io_counters_when_platform_lacks_support_raises_metric_query_error(mocker):
    process = _make_process(mocker)
    process.io_counters.side_effect = AttributeError("io_counters")
    client = ProcessClient(process)
    with pytest.raises(MetricQueryError, match="not supported"):
        client.io_counters()


def test_is_running_when_process_is_alive_returns_true(mocker):
    client = ProcessClient(_make_process(mocker))
    assert client.is_running() is True


def test_is_running_when_process_exited_returns_false(mocker):
    process = _make_process(mocker)
    process.is_running.return_value = False
    client = ProcessClient(process)
    assert client.is_running() is False
    process.status.assert_not_called()


def test_is_running_when_process_is_zombie_returns_false(mocker):
    process = _make_process(mocker)
    process.status.return_value = psutil.STATUS_ZOMBIE
    client = ProcessClient(process)
    assert client.is_running() is False


def test_is_running_when_process_vanishes_during_status_returns_false(mocker):
    process = _make_process(mocker)
    process.status.side_effect = psutil.NoSuchProcess(pid=1234)
    client = ProcessClient(process)
    assert client.is_running() is False


def test_from_pid_when_process_does_not_exist_raises_process_not_found(mocker):
    mocker.patch(
        "pinfoplot.sampler.process_client.psutil.Process",
        side_effect=psutil.NoSuchProcess(pid=999999),
    )
    with pytest.raises(ProcessNotFoundError, match="999999"):
        ProcessClient.from_pid(999999)


def test_from_pid_when_access_is_denied_raises_process_not_found(mocker):
    mocker.patch(
        "pinfoplot.sampler.process_client.psutil.Process",
        side_effect=psutil.AccessDenied(pid=1),
    )
    with pytest.raises(ProcessNotFoundError):
        ProcessClient.from_pid(1)


def test_from_pid_with_current_process_reports_running_and_memory():
    client = ProcessClient.from_pid(os.getpid())
    assert client.pid == os.getpid()
    assert client.is_running() is True
    rss, vms = client.memory_info()
    assert rss > 0
    assert vms >= rss
