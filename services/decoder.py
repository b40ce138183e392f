"""Decoding of GetAll property replies into sensor records."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Union

from bus.reply import PropertyReply, Variant
from models.records import SensorRecord, Threshold, ValueKind
from services.errors import MissingValueError, ProtocolError, TypeMismatchError

logger = logging.getLogger(__name__)

BOOLEAN_TAG = "b"


@dataclass(frozen=True, slots=True)
class ValueSlot:
    """The ``Value`` reading."""


@dataclass(frozen=True, slots=True)
class ThresholdSlot:
    threshold: Threshold


Slot = Union[ValueSlot, ThresholdSlot]

PROPERTY_SLOTS: Dict[str, Slot] = {"Value": ValueSlot()}
PROPERTY_SLOTS.update(
    {threshold.property_name: ThresholdSlot(threshold) for threshold in Threshold}
)

_VALUE_KINDS: Dict[str, ValueKind] = {kind.tag: kind for kind in ValueKind}


def decode(reply: PropertyReply, object_path: str | None = None) -> SensorRecord:
    """Turn a GetAll reply into a :class:`SensorRecord`.

    Only known property names are interpreted; anything else is skipped
    without looking at its type. The reply is released on every exit path.

    Raises:
        ProtocolError: the reply is not an ``a{sv}`` array, or a threshold
            property is not a boolean.
        TypeMismatchError: ``Value`` is neither a double nor an int64.
        MissingValueError: no ``Value`` property was present.
    """
    path = object_path or reply.object_path
    record = SensorRecord()
    try:
        for entry in reply.entries():
            slot = PROPERTY_SLOTS.get(entry.name)
            if isinstance(slot, ValueSlot):
                _read_value(record, entry.value, path)
            elif isinstance(slot, ThresholdSlot):
                record.set_threshold(
                    slot.threshold, _read_boolean(entry.name, entry.value, path)
                )
            else:
                logger.debug(
                    "Skipping unrecognised property",
                    extra={"object_path": path, "property_name": entry.name},
                )
    finally:
        reply.close()

    if not record.is_complete:
        raise MissingValueError("no Value property", object_path=path)
    return record


def _read_value(record: SensorRecord, variant: Variant, path: str) -> None:
    kind = _VALUE_KINDS.get(variant.tag)
    if kind is None:
        raise TypeMismatchError(
            f"invalid type {variant.tag!r}, expected 'd/x'",
            object_path=path,
            tag=variant.tag,
        )
    payload = variant.payload
    if kind is ValueKind.double:
        if isinstance(payload, bool) or not isinstance(payload, (int, float)):
            raise ProtocolError(
                f"Value tagged 'd' holds {type(payload).__name__}",
                object_path=path,
            )
        record.set_value(kind, float(payload))
    else:
        if isinstance(payload, bool) or not isinstance(payload, int):
            raise ProtocolError(
                f"Value tagged 'x' holds {type(payload).__name__}",
                object_path=path,
            )
        record.set_value(kind, payload)


def _read_boolean(name: str, variant: Variant, path: str) -> bool:
    if variant.tag != BOOLEAN_TAG:
        raise ProtocolError(
            f"{name} has type {variant.tag!r}, expected 'b'",
            object_path=path,
        )
    try:
        return int(variant.payload) != 0
    except (TypeError, ValueError) as exc:
        raise ProtocolError(
            f"{name} holds a non-boolean payload",
            object_path=path,
        ) from exc
