# axle_client/resources/keyring.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, ClassVar, Dict, Optional

from axle_client.constants import DEFAULT_FROM, DEFAULT_TO, Granularity
from axle_client.envelope import Stats, wire_field
from axle_client.errors import UnsupportedOperationError
from axle_client.resources.base import (
    LifecycleState, Resource, fetch_linked_key, fetch_stats, page_params,
)
from axle_client.utils import escape

if TYPE_CHECKING:
    from axle_client.resources.key import Key


@dataclass
class KeyRing(Resource):
    """
    A named grouping of keys.

    KeyRings carry no editable fields, so the server has nothing to update:
    once persisted, save() is refused locally.
    """
    KIND: ClassVar[str] = "keyring"
    LABEL: ClassVar[str] = "KeyRing"

    created_at: float = wire_field("createdAt", float, 0.0, omit_empty=True)
    updated_at: float = wire_field("updatedAt", float, 0.0, omit_empty=True)

    def save(self) -> "KeyRing":
        if self.state is LifecycleState.PERSISTED:
            raise UnsupportedOperationError("Unable to update key rings, it's not yet supported")
        return super().save()

    def link_key(self, key_identifier: str) -> "Key":
        path = self.path_for(self.identifier, "linkkey", escape(key_identifier))
        return fetch_linked_key(self.client, path, key_identifier)

    def unlink_key(self, key_identifier: str) -> "Key":
        path = self.path_for(self.identifier, "unlinkkey", escape(key_identifier))
        return fetch_linked_key(self.client, path, key_identifier)

    def keys(self, from_: int = DEFAULT_FROM, to: int = DEFAULT_TO) -> Dict[str, "Key"]:
        from axle_client.resources.key import Key

        return Key.collection(self.client, self.path_for(self.identifier, "keys"), page_params(from_, to))

    def stats(self, from_: datetime, to: datetime, granularity: Granularity | str,
              for_api: Optional[str] = None) -> Stats:
        return fetch_stats(self.client, self.path_for(self.identifier, "stats"),
                           from_, to, granularity, forapi=for_api)
