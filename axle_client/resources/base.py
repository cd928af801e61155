# axle_client/resources/base.py
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Dict, Optional, Sequence, Tuple, Type, TypeVar

from axle_client import envelope, utils
from axle_client.constants import DEFAULT_FROM, DEFAULT_TO, Granularity
from axle_client.errors import DeletedResourceError, MissingFieldError
from axle_client.logger import get_logger

if TYPE_CHECKING:
    from axle_client.client import AxleClient

log = get_logger("Axle.Resource")

R = TypeVar("R", bound="Resource")


class LifecycleState(Enum):
    NEW = "new"
    PERSISTED = "persisted"
    DELETED = "deleted"


@dataclass
class Resource:
    """
    A handle on one server-side entity.

    Constructed locally in NEW state. The first successful save() creates it
    (POST) and moves it to PERSISTED; later saves update it (PUT). Handles
    returned by get()/list()/link calls start out PERSISTED. After delete()
    the handle is DELETED and refuses further saves.
    """
    KIND: ClassVar[str] = ""
    LABEL: ClassVar[str] = "Resource"
    REQUIRED: ClassVar[Tuple[str, ...]] = ()

    client: "AxleClient" = field(repr=False, compare=False)
    identifier: str
    state: LifecycleState = field(default=LifecycleState.NEW, init=False, compare=False)

    # ------------------------------------------------------------------
    # Addressing / serialization
    # ------------------------------------------------------------------
    @classmethod
    def path_for(cls, identifier: str, *parts: str) -> str:
        return "/".join((cls.KIND, utils.escape(identifier)) + parts)

    @property
    def path(self) -> str:
        return self.path_for(self.identifier)

    @property
    def url(self) -> str:
        return self.client.url_for(self.path)

    def to_dict(self) -> Dict[str, Any]:
        return envelope.encode_fields(self, envelope.wire_fields(self))

    @property
    def created(self) -> Optional[datetime]:
        return utils.ms_to_datetime(getattr(self, "created_at", 0))

    @property
    def updated(self) -> Optional[datetime]:
        return utils.ms_to_datetime(getattr(self, "updated_at", 0))

    def __str__(self) -> str:
        return f"{self.LABEL} - {self.url}: {utils.pretty_json(self.to_dict())}"

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    @classmethod
    def from_payload(cls: Type[R], client: "AxleClient", identifier: str, body,
                     path: Sequence[str] = envelope.RESULTS) -> R:
        obj = cls(client, identifier)
        envelope.decode_into(obj, body, path)
        obj.state = LifecycleState.PERSISTED
        return obj

    @classmethod
    def get(cls: Type[R], client: "AxleClient", identifier: str) -> R:
        body = client.request("GET", cls.path_for(identifier))
        return cls.from_payload(client, identifier, body)

    @classmethod
    def collection(cls: Type[R], client: "AxleClient", path: str,
                   params: Optional[Dict[str, Any]] = None) -> Dict[str, R]:
        body = client.request("GET", path, params=params)
        return {
            identifier: cls.from_payload(client, identifier, payload, ())
            for identifier, payload in envelope.decode_collection(body).items()
        }

    @classmethod
    def list(cls: Type[R], client: "AxleClient", from_: int = DEFAULT_FROM,
             to: int = DEFAULT_TO) -> Dict[str, R]:
        return cls.collection(client, f"{cls.KIND}s", page_params(from_, to))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def check_required(self) -> None:
        body = self.to_dict()
        for wire in self.REQUIRED:
            if wire not in body:
                raise MissingFieldError(wire, self.LABEL)

    def save(self: R) -> R:
        if self.state is LifecycleState.DELETED:
            raise DeletedResourceError(f"{self.LABEL} {self.identifier} has been deleted")
        self.check_required()

        creating = self.state is LifecycleState.NEW
        self.updated_at = utils.now_ms()
        method = "POST" if creating else "PUT"
        body = self.client.request(method, self.path, body=self.to_dict())
        envelope.decode_into(self, body, envelope.RESULTS if creating else envelope.UPDATED_RESULTS)

        self.state = LifecycleState.PERSISTED
        log.info(f"[{self.LABEL}] {'created' if creating else 'updated'} {self.identifier}")
        return self

    @classmethod
    def delete_by_id(cls, client: "AxleClient", identifier: str) -> None:
        path = cls.path_for(identifier)
        body = client.request("DELETE", path)
        envelope.decode_success(body, f"Delete of {cls.LABEL} at {client.url_for(path)}")
        log.info(f"[{cls.LABEL}] deleted {identifier}")

    def delete(self) -> None:
        if self.state is LifecycleState.DELETED:
            raise DeletedResourceError(f"{self.LABEL} {self.identifier} has already been deleted")
        self.delete_by_id(self.client, self.identifier)
        self.state = LifecycleState.DELETED


# ----------------------------------------------------------------------
# Query helpers shared by the resource modules
# ----------------------------------------------------------------------
def page_params(from_: int, to: int) -> Dict[str, Any]:
    return {"resolve": "true", "from": from_, "to": to}


def fetch_charts(client: "AxleClient", path: str, granularity: Granularity | str) -> Dict[str, int]:
    body = client.request("GET", path, params={"granularity": Granularity(granularity).value})
    return envelope.decode_charts(body)


def fetch_stats(client: "AxleClient", path: str, from_: datetime, to: datetime,
                granularity: Granularity | str, **filters: Optional[str]) -> envelope.Stats:
    params: Dict[str, Any] = {
        "from": utils.to_unix(from_),
        "to": utils.to_unix(to),
        "granularity": Granularity(granularity).value,
    }
    params.update({name: value for name, value in filters.items() if value})
    body = client.request("GET", path, params=params)
    return envelope.decode_stats(body)


def fetch_linked_key(client: "AxleClient", path: str, key_identifier: str):
    from axle_client.resources.key import Key

    body = client.request("PUT", path, body={})
    return Key.from_payload(client, key_identifier, body)
