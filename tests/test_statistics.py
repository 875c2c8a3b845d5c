from capture_analyzer.analysis.statistics import extract_statistics
from capture_analyzer.data.structures import PacketRecord


def _pkt(ts, src="10.0.0.1", dst="10.0.0.2", proto="TCP", length=100, info=""):
    return PacketRecord(number=0, timestamp=ts, source=src, destination=dst, protocol=proto, length=length, info=info)


def test_counts_sum_to_total():
    packets = [
        _pkt(1.0, proto="TCP"),
        _pkt(2.0, proto="UDP", src="10.0.0.3"),
        _pkt(3.0, proto="TCP", dst="10.0.0.9"),
        _pkt(4.0, proto="DNS"),
    ]
    stats = extract_statistics(packets)
    assert stats.total_packets == 4
    assert sum(stats.protocols.values()) == 4
    assert sum(stats.sources.values()) == 4
    assert sum(stats.destinations.values()) == 4
    assert stats.protocols == {"TCP": 2, "UDP": 1, "DNS": 1}


def test_time_range_starts_from_first_packet():
    stats = extract_statistics([_pkt(105.5), _pkt(100.25), _pkt(110.0)])
    assert stats.time_start == 100.25
    assert stats.time_end == 110.0
    assert stats.duration == 9.75


def test_average_rounds_half_up():
    stats = extract_statistics([_pkt(0, length=2), _pkt(0, length=3)])
    assert stats.total_bytes == 5
    assert stats.avg_packet_size == 3
    stats = extract_statistics([_pkt(0, length=100), _pkt(0, length=101), _pkt(0, length=101)])
    assert stats.avg_packet_size == 101


def test_empty_fields_are_unknown():
    stats = extract_statistics([_pkt(0, src="", dst="", proto="")])
    assert stats.protocols == {"Unknown": 1}
    assert stats.sources == {"Unknown": 1}
    assert stats.destinations == {"Unknown": 1}


def test_empty_capture():
    stats = extract_statistics([])
    assert stats.total_packets == 0
    assert stats.total_bytes == 0
    assert stats.avg_packet_size == 0
    assert stats.protocols == {}
    assert stats.time_start is None and stats.time_end is None
    assert stats.duration == 0.0
