"""DNS query and response inventory."""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Sequence

from ..data.structures import PacketRecord
from . import flags


@dataclass(frozen=True)
class DnsQuery:
    packet_number: int
    time: float
    type: str
    domain: str
    source: str


@dataclass(frozen=True)
class DnsResponse:
    packet_number: int
    time: float
    info: str
    source: str


@dataclass(frozen=True)
class DnsSummary:
    """Queries, responses and the domains they mention."""

    queries: List[DnsQuery] = field(default_factory=list)
    responses: List[DnsResponse] = field(default_factory=list)

    @property
    def total_queries(self) -> int:
        return len(self.queries)

    @property
    def total_responses(self) -> int:
        return len(self.responses)

    @property
    def unique_domains(self) -> List[str]:
        return list(dict.fromkeys(query.domain for query in self.queries))

    @property
    def query_types(self) -> Dict[str, int]:
        return dict(Counter(query.type for query in self.queries))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_queries": self.total_queries,
            "total_responses": self.total_responses,
            "queries": [asdict(query) for query in self.queries],
            "responses": [asdict(response) for response in self.responses],
            "unique_domains": self.unique_domains,
            "query_types": self.query_types,
        }


def analyze_dns(packets: Sequence[PacketRecord]) -> DnsSummary:
    """Collect DNS queries and responses.

    A summary such as ``Standard query response 0x1 A example.com`` matches
    both shapes and is counted in both lists.
    """

    queries: List[DnsQuery] = []
    responses: List[DnsResponse] = []
    for packet in packets:
        if packet.protocol != "DNS":
            continue
        query = flags.dns_query(packet.info)
        if query is not None:
            query_type, domain = query
            queries.append(
                DnsQuery(
                    packet_number=packet.number,
                    time=packet.timestamp,
                    type=query_type,
                    domain=domain,
                    source=packet.source,
                )
            )
        if flags.is_dns_response(packet.info):
            responses.append(
                DnsResponse(
                    packet_number=packet.number,
                    time=packet.timestamp,
                    info=packet.info,
                    source=packet.source,
                )
            )
    return DnsSummary(queries=queries, responses=responses)


__all__ = ["DnsQuery", "DnsResponse", "DnsSummary", "analyze_dns"]
