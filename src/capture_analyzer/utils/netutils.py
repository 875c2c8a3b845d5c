"""Address, port and unit helpers used when presenting analysis results."""

from __future__ import annotations

import ipaddress
from typing import Dict, Optional

WELL_KNOWN_SERVICES: Dict[int, str] = {
    20: "FTP-DATA",
    21: "FTP",
    22: "SSH",
    23: "Telnet",
    25: "SMTP",
    53: "DNS",
    67: "DHCP",
    68: "DHCP",
    80: "HTTP",
    110: "POP3",
    143: "IMAP",
    443: "HTTPS",
    445: "SMB",
    465: "SMTPS",
    587: "SMTP",
    993: "IMAPS",
    995: "POP3S",
    1433: "MSSQL",
    3306: "MySQL",
    3389: "RDP",
    5432: "PostgreSQL",
    5900: "VNC",
    6379: "Redis",
    7680: "Teredo",
    8080: "HTTP-Alt",
    8443: "HTTPS-Alt",
    27017: "MongoDB",
}


def _parse(address: Optional[str]):
    if not address:
        return None
    try:
        return ipaddress.ip_address(address.strip())
    except ValueError:
        return None


def is_ipv4(address: Optional[str]) -> bool:
    return isinstance(_parse(address), ipaddress.IPv4Address)


def is_ipv6(address: Optional[str]) -> bool:
    return isinstance(_parse(address), ipaddress.IPv6Address)


def is_private_ip(address: Optional[str]) -> bool:
    """Loopback, link-local and RFC 1918 / unique-local ranges."""

    parsed = _parse(address)
    if parsed is None:
        return False
    if parsed.is_loopback or parsed.is_link_local:
        return True
    if isinstance(parsed, ipaddress.IPv6Address):
        return parsed in ipaddress.ip_network("fc00::/7")
    return any(parsed in ipaddress.ip_network(net) for net in ("10.0.0.0/8", "172.16.0.0/12", "192.168.0.0/16"))


def address_type(address: Optional[str]) -> str:
    """Human readable class of an address; non-IP strings (MAC, hostnames) are ``Other``."""

    if not address:
        return "Unknown"
    parsed = _parse(address)
    if parsed is None:
        return "Other"
    if parsed.is_loopback:
        return "Loopback"
    v6 = is_ipv6(address)
    if is_private_ip(address):
        return "Private IPv6" if v6 else "Private IPv4"
    if parsed.is_multicast:
        return "Multicast"
    if not v6 and str(parsed) == "255.255.255.255":
        return "Broadcast"
    return "Public IPv6" if v6 else "Public IPv4"


def port_service(port: int) -> str:
    return WELL_KNOWN_SERVICES.get(port, f"Port {port}")


def port_range(port: int) -> str:
    if 0 <= port <= 1023:
        return "Well-Known"
    if 1024 <= port <= 49151:
        return "Registered"
    if 49152 <= port <= 65535:
        return "Dynamic/Private"
    return "Invalid"


def _scaled(value: float, base: int, units: list[str], decimals: int) -> str:
    index = 0
    while value >= base and index < len(units) - 1:
        value /= base
        index += 1
    return f"{round(value, decimals):g} {units[index]}"


def format_bytes(num_bytes: float, decimals: int = 2) -> str:
    if num_bytes <= 0:
        return "0 Bytes"
    return _scaled(num_bytes, 1024, ["Bytes", "KB", "MB", "GB", "TB"], max(decimals, 0))


def format_bandwidth(bits_per_second: float) -> str:
    if bits_per_second <= 0:
        return "0 bps"
    return _scaled(bits_per_second, 1000, ["bps", "Kbps", "Mbps", "Gbps", "Tbps"], 2)


def format_duration(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, remainder = divmod(seconds, 60)
    if minutes < 60:
        return f"{int(minutes)}m {remainder:.0f}s"
    hours, minutes = divmod(int(minutes), 60)
    return f"{hours}h {minutes}m"


def packets_per_second(packets: int, duration: float) -> float:
    return packets / duration if duration else 0.0


def bandwidth_bps(num_bytes: int, duration: float) -> float:
    return num_bytes * 8 / duration if duration else 0.0


__all__ = [
    "address_type",
    "bandwidth_bps",
    "format_bandwidth",
    "format_bytes",
    "format_duration",
    "is_ipv4",
    "is_ipv6",
    "is_private_ip",
    "packets_per_second",
    "port_range",
    "port_service",
]
