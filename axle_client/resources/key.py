# axle_client/resources/key.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, ClassVar, Dict, List, Optional

from axle_client.constants import KEY_DEFAULT_QPD, KEY_DEFAULT_QPS, Granularity
from axle_client.envelope import Stats, wire_field
from axle_client.resources.base import Resource, fetch_charts, fetch_stats

if TYPE_CHECKING:
    from axle_client.client import AxleClient
    from axle_client.resources.api import Api


@dataclass
class Key(Resource):
    """A caller credential. Quotas below zero mean no limit."""
    KIND: ClassVar[str] = "key"
    LABEL: ClassVar[str] = "Key"

    shared_secret: str = wire_field("sharedSecret", str, "", omit_empty=True)
    qpd: int = wire_field("qpd", int, KEY_DEFAULT_QPD)
    qps: int = wire_field("qps", int, KEY_DEFAULT_QPS)
    for_apis: List[str] = wire_field("forApis", list, default_factory=list, omit_empty=True)
    disabled: bool = wire_field("disabled", bool, False)
    created_at: float = wire_field("createdAt", float, 0.0, omit_empty=True)
    updated_at: float = wire_field("updatedAt", float, 0.0, omit_empty=True)

    def apis(self) -> Dict[str, "Api"]:
        from axle_client.resources.api import Api

        return Api.collection(self.client, self.path_for(self.identifier, "apis"), {"resolve": "true"})

    @classmethod
    def charts(cls, client: "AxleClient", granularity: Granularity | str) -> Dict[str, int]:
        """Most used keys and their hit counts."""
        return fetch_charts(client, "keys/charts", granularity)

    def api_charts(self, granularity: Granularity | str) -> Dict[str, int]:
        return fetch_charts(self.client, self.path_for(self.identifier, "apicharts"), granularity)

    def stats(self, from_: datetime, to: datetime, granularity: Granularity | str,
              for_api: Optional[str] = None) -> Stats:
        return fetch_stats(self.client, self.path_for(self.identifier, "stats"),
                           from_, to, granularity, forapi=for_api)
