# axle_client/resources/api.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, ClassVar, Dict, Optional, Tuple

from axle_client.constants import (
    API_DEFAULT_ENDPOINT_TIMEOUT, API_DEFAULT_MAX_REDIRECTS, DEFAULT_FROM, DEFAULT_TO,
    ApiFormat, Granularity, Protocol,
)
from axle_client.envelope import Stats, wire_field
from axle_client.resources.base import (
    Resource, fetch_charts, fetch_linked_key, fetch_stats, page_params,
)
from axle_client.utils import escape

if TYPE_CHECKING:
    from axle_client.client import AxleClient
    from axle_client.resources.key import Key


@dataclass
class Api(Resource):
    """
    An upstream endpoint proxied by the server.

    `endpoint` is required: a save without one fails before any request is
    made, and a response payload without "endPoint" is rejected.
    """
    KIND: ClassVar[str] = "api"
    LABEL: ClassVar[str] = "Api"
    REQUIRED: ClassVar[Tuple[str, ...]] = ("endPoint",)

    endpoint: str = wire_field("endPoint", str, "", omit_empty=True)
    protocol: Protocol = wire_field("protocol", Protocol, Protocol.HTTP)
    api_format: ApiFormat = wire_field("apiFormat", ApiFormat, ApiFormat.JSON)
    global_cache: int = wire_field("globalCache", int, 0)
    endpoint_timeout: int = wire_field("endPointTimeout", int, API_DEFAULT_ENDPOINT_TIMEOUT)
    endpoint_max_redirects: int = wire_field("endPointMaxRedirects", int, API_DEFAULT_MAX_REDIRECTS)
    # first matching group becomes the key; api_key / apiaxle_key params win
    extract_key_regex: str = wire_field("extractKeyRegex", str, "", omit_empty=True)
    default_path: str = wire_field("defaultPath", str, "", omit_empty=True)
    disabled: bool = wire_field("disabled", bool, False)
    strict_ssl: bool = wire_field("strictSSL", bool, True)
    created_at: float = wire_field("createdAt", float, 0.0, omit_empty=True)
    updated_at: float = wire_field("updatedAt", float, 0.0, omit_empty=True)

    # ------------------------------------------------------------------
    # Key links
    # ------------------------------------------------------------------
    @classmethod
    def link_key_to(cls, client: "AxleClient", api_identifier: str, key_identifier: str) -> "Key":
        return fetch_linked_key(client, cls.path_for(api_identifier, "linkkey", escape(key_identifier)), key_identifier)

    @classmethod
    def unlink_key_from(cls, client: "AxleClient", api_identifier: str, key_identifier: str) -> "Key":
        return fetch_linked_key(client, cls.path_for(api_identifier, "unlinkkey", escape(key_identifier)), key_identifier)

    def link_key(self, key_identifier: str) -> "Key":
        return self.link_key_to(self.client, self.identifier, key_identifier)

    def unlink_key(self, key_identifier: str) -> "Key":
        return self.unlink_key_from(self.client, self.identifier, key_identifier)

    def keys(self, from_: int = DEFAULT_FROM, to: int = DEFAULT_TO) -> Dict[str, "Key"]:
        from axle_client.resources.key import Key

        return Key.collection(self.client, self.path_for(self.identifier, "keys"), page_params(from_, to))

    # ------------------------------------------------------------------
    # Stats / charts
    # ------------------------------------------------------------------
    @classmethod
    def charts(cls, client: "AxleClient", granularity: Granularity | str) -> Dict[str, int]:
        """Top apis and their hit counts across the server."""
        return fetch_charts(client, "apis/charts", granularity)

    def key_charts(self, granularity: Granularity | str) -> Dict[str, int]:
        """Top keys hitting this api and their hit counts."""
        return fetch_charts(self.client, self.path_for(self.identifier, "keycharts"), granularity)

    def stats(self, from_: datetime, to: datetime, granularity: Granularity | str,
              for_key: Optional[str] = None) -> Stats:
        return fetch_stats(self.client, self.path_for(self.identifier, "stats"),
                           from_, to, granularity, forkey=for_key)
