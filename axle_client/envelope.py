"""
axle_client.envelope
--------------------
Decoding of the server's response envelope.

Every response is a JSON object with the payload nested under "results"
("results" -> "new" for updates). Resources declare their wire mapping with
`wire_field()`; the helpers here walk to the payload, check required fields and
copy typed values onto the resource.
"""

from __future__ import annotations
from dataclasses import MISSING, field, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, NamedTuple, Sequence, Tuple, Union
import json

from axle_client.constants import HitType
from axle_client.errors import MalformedResponseError, MissingFieldError, OperationFailedError

RESULTS = ("results",)
UPDATED_RESULTS = ("results", "new")

Stats = Dict[Union[HitType, str], Dict[datetime, Dict[int, int]]]


class Field(NamedTuple):
    attr: str
    wire: str
    kind: Any
    omit_empty: bool = False


def wire_field(wire: str, kind: Any, default: Any = MISSING, default_factory: Any = MISSING,
               omit_empty: bool = False):
    """dataclass field() carrying its JSON name and type."""
    return field(
        default=default,
        default_factory=default_factory,
        metadata={"wire": wire, "kind": kind, "omit_empty": omit_empty},
    )


def wire_fields(obj_or_cls) -> Tuple[Field, ...]:
    return tuple(
        Field(f.name, f.metadata["wire"], f.metadata["kind"], f.metadata["omit_empty"])
        for f in fields(obj_or_cls)
        if "wire" in f.metadata
    )


# ------------------------------------------------------------------
# Envelope navigation
# ------------------------------------------------------------------
def load_json(body: bytes | str | dict) -> Dict[str, Any]:
    if isinstance(body, dict):
        return body
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as e:
        raise MalformedResponseError(f"Unable to unmarshal response: {e}") from e
    if not isinstance(data, dict):
        raise MalformedResponseError(f"Response was not a JSON object: {type(data).__name__}")
    return data


def unwrap(body: bytes | str | dict, path: Sequence[str]) -> Dict[str, Any]:
    """Descend through `path`; every step must land on a JSON object."""
    current: Dict[str, Any] = load_json(body)
    for key in path:
        if key not in current:
            raise MalformedResponseError(f"Response map did not contain expected key: {key}", key=key)
        value = current[key]
        if not isinstance(value, dict):
            raise MalformedResponseError(f"key {key} did not contain map", key=key)
        current = value
    return current


def results(body: bytes | str | dict) -> Any:
    """Raw value under "results", whatever its JSON type."""
    data = load_json(body)
    if "results" not in data:
        raise MalformedResponseError("Response map did not contain expected key: results", key="results")
    return data["results"]


# ------------------------------------------------------------------
# Field mapping
# ------------------------------------------------------------------
def _decode_value(f: Field, value: Any) -> Any:
    kind = f.kind
    if isinstance(kind, type) and issubclass(kind, Enum):
        try:
            return kind(value)
        except ValueError as e:
            raise MalformedResponseError(f"Unexpected value {value!r} for {f.wire}", key=f.wire) from e

    if kind is bool and isinstance(value, bool):
        return value
    if kind is str and isinstance(value, str):
        return value
    if kind in (int, float) and isinstance(value, (int, float)) and not isinstance(value, bool):
        if kind is int:
            if isinstance(value, float) and not value.is_integer():
                raise MalformedResponseError(f"{f.wire} is not an integer: {value!r}", key=f.wire)
            return int(value)
        return float(value)
    if kind is list and isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)

    raise MalformedResponseError(
        f"{f.wire} has wrong type: expected {getattr(kind, '__name__', kind)}, got {type(value).__name__}",
        key=f.wire,
    )


def _encode_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return value


def encode_fields(obj: Any, mapping: Iterable[Field]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for f in mapping:
        value = getattr(obj, f.attr)
        if f.omit_empty and not value:
            continue
        out[f.wire] = _encode_value(value)
    return out


def decode_fields(payload: Dict[str, Any], mapping: Iterable[Field]) -> Dict[str, Any]:
    """Typed attribute values for the wire keys present in payload (nulls skipped)."""
    out: Dict[str, Any] = {}
    for f in mapping:
        value = payload.get(f.wire)
        if value is None:
            continue
        out[f.attr] = _decode_value(f, value)
    return out


def check_required(payload: Dict[str, Any], required: Iterable[str], kind: str = "resource") -> None:
    for wire in required:
        if wire not in payload:
            raise MissingFieldError(wire, kind)


def decode_into(target: Any, body: bytes | str | dict, path: Sequence[str]) -> Any:
    """
    Populate `target` from the payload found at `path`.

    The target's REQUIRED wire names are checked before anything is decoded,
    and nothing is assigned unless every field decodes cleanly.
    """
    payload = unwrap(body, path)
    check_required(payload, getattr(target, "REQUIRED", ()), getattr(target, "LABEL", "resource"))
    values = decode_fields(payload, wire_fields(target))
    for attr, value in values.items():
        setattr(target, attr, value)
    return target


# ------------------------------------------------------------------
# Non-entity payloads
# ------------------------------------------------------------------
def decode_success(body: bytes | str | dict, what: str = "request") -> None:
    value = results(body)
    if not isinstance(value, bool):
        raise MalformedResponseError(f"Unable to extract response object from {what}", key="results")
    if not value:
        raise OperationFailedError(f"{what} failed")


def decode_collection(body: bytes | str | dict) -> Dict[str, Dict[str, Any]]:
    """identifier -> entity payload, from a resolve=true listing."""
    listing = unwrap(body, RESULTS)
    for identifier, payload in listing.items():
        if not isinstance(payload, dict):
            raise MalformedResponseError(f"Entry {identifier} in listing is not an object", key=identifier)
    return listing


def _parse_int(raw: str, what: str) -> int:
    # plain decimal digits only; int() would also take "1_000" and " 12 "
    digits = raw[1:] if isinstance(raw, str) and raw.startswith("-") else raw
    if not (isinstance(digits, str) and digits.isascii() and digits.isdigit()):
        raise MalformedResponseError(f"Bad {what} in stats: {raw!r}", key=str(raw))
    return int(raw)


def _count(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponseError(f"Bad count at {where}: {value!r}", key=where)
    try:
        return int(value)
    except (OverflowError, ValueError) as e:
        raise MalformedResponseError(f"Bad count at {where}: {value!r}", key=where) from e


def _bucket(ts_raw: str) -> datetime:
    seconds = _parse_int(ts_raw, "time bucket")
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise MalformedResponseError(f"Time bucket out of range in stats: {ts_raw!r}", key=ts_raw) from e


def decode_stats(body: bytes | str | dict) -> Stats:
    """
    results: {hit type: {unix seconds: {status code: count}}}
    becomes {HitType: {datetime (UTC): {int: int}}}. Classifications this
    client does not know are kept under their plain string name.
    """
    raw = unwrap(body, RESULTS)
    stats: Stats = {}
    for hit_name, buckets in raw.items():
        try:
            hit_type: HitType | str = HitType(hit_name)
        except ValueError:
            hit_type = hit_name
        if not isinstance(buckets, dict):
            raise MalformedResponseError(f"Bad stats object for {hit_name}", key=hit_name)

        per_time = stats.setdefault(hit_type, {})
        for ts_raw, codes in buckets.items():
            bucket = _bucket(ts_raw)
            if not isinstance(codes, dict):
                raise MalformedResponseError(f"Bad stats object for {hit_name}/{ts_raw}", key=ts_raw)
            per_code = per_time.setdefault(bucket, {})
            for code_raw, count in codes.items():
                per_code[_parse_int(code_raw, "status code")] = _count(count, f"{hit_name}/{ts_raw}/{code_raw}")
    return stats


def decode_charts(body: bytes | str | dict) -> Dict[str, int]:
    raw = unwrap(body, RESULTS)
    return {name: _count(count, name) for name, count in raw.items()}
