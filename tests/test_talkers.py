from capture_analyzer.analysis.talkers import identify_top_talkers
from capture_analyzer.data.structures import PacketRecord


def _pkt(src, dst, length):
    return PacketRecord(number=0, timestamp=0.0, source=src, destination=dst, protocol="TCP", length=length, info="")


def test_sent_and_received_tallies():
    packets = [_pkt("10.0.0.1", "8.8.8.8", 100), _pkt("8.8.8.8", "10.0.0.1", 400)]
    talkers = identify_top_talkers(packets)
    assert [talker.address for talker in talkers] == ["10.0.0.1", "8.8.8.8"]
    local = talkers[0]
    assert local.sent_packets == 1 and local.sent_bytes == 100
    assert local.received_packets == 1 and local.received_bytes == 400
    assert local.total_bytes == 500
    assert local.total_packets == 2
    assert local.address_type == "Private IPv4"
    assert talkers[1].address_type == "Public IPv4"


def test_ranking_is_descending_and_stable_on_ties():
    packets = [
        _pkt("c", "x", 10),
        _pkt("a", "y", 10),
        _pkt("b", "z", 50),
    ]
    talkers = identify_top_talkers(packets, limit=10)
    assert [talker.address for talker in talkers] == ["b", "z", "c", "x", "a", "y"]


def test_source_only_address_has_zero_received():
    (talker, _) = identify_top_talkers([_pkt("s", "d", 10)])
    assert talker.address == "s"
    assert talker.received_packets == 0
    assert talker.received_bytes == 0


def test_limit_truncates():
    packets = [_pkt(f"10.0.0.{i}", "10.0.1.1", i) for i in range(1, 9)]
    talkers = identify_top_talkers(packets, limit=3)
    assert len(talkers) == 3
    assert talkers[0].address == "10.0.1.1"
    assert identify_top_talkers([], limit=5) == []
