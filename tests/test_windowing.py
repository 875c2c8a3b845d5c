import pytest

from capture_analyzer.analysis.windowing import (
    ThroughputWindower,
    WindowingParams,
    average_throughput,
    calculate_throughput,
    peak_throughput,
)
from capture_analyzer.data.structures import PacketRecord


def _pkt(ts, length):
    return PacketRecord(number=0, timestamp=ts, source="a", destination="b", protocol="TCP", length=length, info="")


def test_buckets_are_floor_aligned_and_sorted():
    packets = [_pkt(12.0, 50), _pkt(0.5, 100), _pkt(4.99, 200), _pkt(5.0, 300)]
    samples = calculate_throughput(packets, interval=5)
    assert [sample.time for sample in samples] == [0, 5, 10]
    first = samples[0]
    assert first.bytes == 300
    assert first.packets == 2
    assert first.bytes_per_second == 60.0
    assert first.packets_per_second == 0.4
    assert samples[1].bytes == 300
    assert samples[2].bytes == 50


def test_rates_divide_by_interval_not_elapsed_time():
    samples = calculate_throughput([_pkt(3.0, 1000)], interval=2.0)
    assert samples[0].time == 2.0
    assert samples[0].bytes_per_second == 500.0


def test_empty_series():
    assert calculate_throughput([], interval=5) == []
    assert average_throughput([]) == 0.0
    assert peak_throughput([]) is None


def test_average_and_peak():
    samples = calculate_throughput([_pkt(0, 100), _pkt(1, 300), _pkt(2, 300)], interval=1)
    assert average_throughput(samples) == pytest.approx(700 / 3)
    peak = peak_throughput(samples)
    assert peak is not None
    assert peak.time == 1


def test_non_positive_interval_rejected():
    with pytest.raises(ValueError):
        ThroughputWindower(WindowingParams(interval=0))
