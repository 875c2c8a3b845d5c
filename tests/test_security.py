from capture_analyzer.analysis.security import SecurityScanner, detect_security_issues
from capture_analyzer.config.types import SecurityConfig
from capture_analyzer.data.structures import PacketRecord, Severity


def _pkt(src="10.0.0.1", dst="10.0.0.2", proto="TCP", info=""):
    return PacketRecord(number=0, timestamp=0.0, source=src, destination=dst, protocol=proto, length=60, info=info)


def _syn_sweep(source, ports):
    return [_pkt(src=source, info=f"40000 > {port} [SYN] Seq=0") for port in ports]


def test_port_scan_detected():
    findings = detect_security_issues(_syn_sweep("X", range(1, 26)))
    assert len(findings) == 1
    finding = findings[0]
    assert finding.type == "Potential Port Scan"
    assert finding.severity is Severity.HIGH
    assert finding.source == "X"
    assert finding.metric == "ports_scanned"
    assert finding.value == 25
    assert finding.to_dict()["ports_scanned"] == 25


def test_port_scan_threshold_is_strict_and_counts_distinct_ports():
    packets = _syn_sweep("X", range(1, 21)) + _syn_sweep("X", range(1, 21))
    assert detect_security_issues(packets) == []
    syn_ack = [_pkt(src="Y", info=f"{port} > 40000 [SYN, ACK]") for port in range(1, 30)]
    assert detect_security_issues(syn_ack) == []


def test_icmp_volume_per_label():
    packets = [_pkt(proto="ICMPv6") for _ in range(51)] + [_pkt(proto="ICMP") for _ in range(50)]
    findings = detect_security_issues(packets)
    assert [(f.type, f.protocol, f.value) for f in findings] == [("High ICMP Traffic", "ICMPv6", 51)]
    assert findings[0].severity is Severity.MEDIUM


def test_retransmissions_need_global_and_per_destination_volume():
    packets = [_pkt(dst="D1", info="[TCP Retransmission] 1 > 2") for _ in range(6)]
    packets += [_pkt(dst="D2", info="[TCP Retransmission] 1 > 2") for _ in range(5)]
    findings = detect_security_issues(packets)
    assert [(f.destination, f.value, f.metric) for f in findings] == [("D1", 6, "retransmission_count")]

    only_ten = [_pkt(dst="D1", info="[TCP Retransmission]") for _ in range(10)]
    assert detect_security_issues(only_ten) == []


def test_findings_order_and_idempotence():
    packets = (
        [_pkt(dst="D", info="[TCP Retransmission]") for _ in range(11)]
        + [_pkt(proto="ICMP") for _ in range(51)]
        + _syn_sweep("B", range(100, 130))
        + _syn_sweep("A", range(100, 130))
    )
    scanner = SecurityScanner()
    first = scanner.scan(packets)
    assert [f.type for f in first] == [
        "Potential Port Scan",
        "Potential Port Scan",
        "High ICMP Traffic",
        "Multiple Failed Connections",
    ]
    assert [f.source for f in first[:2]] == ["B", "A"]
    assert scanner.scan(packets) == first


def test_thresholds_come_from_config():
    config = SecurityConfig(port_scan_threshold=2, icmp_threshold=1)
    findings = detect_security_issues(_syn_sweep("X", [1, 2, 3]) + [_pkt(proto="ICMP")] * 2, config)
    assert [f.type for f in findings] == ["Potential Port Scan", "High ICMP Traffic"]
