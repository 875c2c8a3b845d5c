"""Heuristic classification of the free-text ``Info`` column.

Every marker the analyzers look for in the dissector summary lives here, so a
source that provides structured TCP flags only has to replace this module.

Pattern table
-------------

==================  ==============================================  ===========================
name                match                                           used by
==================  ==============================================  ===========================
``syn``             ``[SYN]`` present and no ``ACK`` anywhere      connections
``syn_scan``        ``[SYN]`` present                              port-scan heuristic
``syn_ack``         ``[SYN, ACK]`` present                         connections
``ack``             ``[ACK]`` present                              connections
``fin``             ``[FIN`` present (``[FIN]``, ``[FIN, ACK]``)   connections
``rst``             ``[RST`` present                               connection issues
``retransmission``  ``Retransmission`` present                     security, connection issues
``dup_ack``         ``Dup ACK`` present                            connection issues
``dns_query``       ``Standard query <id> <type> <domain>``        DNS analyzer
``dns_response``    ``response`` present                           DNS analyzer
port pair           ``<src> > <dst>`` or ``<src> → <dst>``          connections
destination port    ``> <dst>`` or ``→ <dst>``                      port-scan heuristic
==================  ==============================================  ===========================
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

SYN_MARKER = "[SYN]"
SYN_ACK_MARKER = "[SYN, ACK]"
ACK_MARKER = "[ACK]"
FIN_MARKER = "[FIN"
RST_MARKER = "[RST"
RETRANSMISSION_MARKER = "Retransmission"
DUP_ACK_MARKER = "Dup ACK"
DNS_QUERY_MARKER = "Standard query"
DNS_RESPONSE_MARKER = "response"

PORT_PAIR_PATTERN = re.compile(r"(\d+)\s*(?:>|→)\s*(\d+)")
DESTINATION_PORT_PATTERN = re.compile(r"(?:>|→)\s*(\d+)")
DNS_QUERY_PATTERN = re.compile(r"Standard query\s+\S+\s+(\w+)\s+(.+)")


def is_syn(info: str) -> bool:
    """Bare SYN: the opening packet of a handshake."""

    return SYN_MARKER in info and "ACK" not in info


def has_syn(info: str) -> bool:
    return SYN_MARKER in info


def is_syn_ack(info: str) -> bool:
    return SYN_ACK_MARKER in info


def is_ack(info: str) -> bool:
    return ACK_MARKER in info


def is_fin(info: str) -> bool:
    return FIN_MARKER in info


def is_rst(info: str) -> bool:
    return RST_MARKER in info


def is_retransmission(info: str) -> bool:
    return RETRANSMISSION_MARKER in info


def is_dup_ack(info: str) -> bool:
    return DUP_ACK_MARKER in info


def port_pair(info: str) -> Optional[Tuple[str, str]]:
    """First ``src > dst`` port annotation, as strings."""

    match = PORT_PAIR_PATTERN.search(info)
    if match is None:
        return None
    return match.group(1), match.group(2)


def destination_port(info: str) -> Optional[str]:
    match = DESTINATION_PORT_PATTERN.search(info)
    return match.group(1) if match else None


def dns_query(info: str) -> Optional[Tuple[str, str]]:
    """``(type, domain)`` of a standard query summary."""

    if DNS_QUERY_MARKER not in info:
        return None
    match = DNS_QUERY_PATTERN.search(info)
    if match is None:
        return None
    return match.group(1), match.group(2)


def is_dns_response(info: str) -> bool:
    return DNS_RESPONSE_MARKER in info


__all__ = [
    "destination_port",
    "dns_query",
    "has_syn",
    "is_ack",
    "is_dns_response",
    "is_dup_ack",
    "is_fin",
    "is_retransmission",
    "is_rst",
    "is_syn",
    "is_syn_ack",
    "port_pair",
]
