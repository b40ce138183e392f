"""Scoped access to the payload of a Properties.GetAll reply."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Tuple

from jeepney.low_level import HeaderFields, Message

from services.errors import ProtocolError

PROPERTIES_SIGNATURE = "a{sv}"


@dataclass(frozen=True, slots=True)
class Variant:
    """A self-describing value: the payload's type signature plus the payload."""

    tag: str
    payload: Any


@dataclass(frozen=True, slots=True)
class PropertyEntry:
    name: str
    value: Variant


class PropertyReply:
    """Reply payload of one GetAll call.

    ``entries()`` walks the outer ``a{sv}`` container. The payload is held
    until ``close()``; after that the reply can no longer be read.
    """

    def __init__(self, object_path: str, signature: str, body: Tuple[Any, ...]) -> None:
        self.object_path = object_path
        self.signature = signature
        self._body: Tuple[Any, ...] | None = body
        self.release_count = 0

    @classmethod
    def from_message(cls, object_path: str, message: Message) -> "PropertyReply":
        signature = message.header.fields.get(HeaderFields.signature, "")
        return cls(object_path, signature, message.body)

    @classmethod
    def from_properties(
        cls,
        object_path: str,
        properties: Mapping[str, Tuple[str, Any]] | Iterable[Tuple[str, Tuple[str, Any]]],
    ) -> "PropertyReply":
        """Build a well-formed reply from ``name -> (tag, payload)`` pairs."""
        if not isinstance(properties, Mapping):
            properties = list(properties)
        return cls(object_path, PROPERTIES_SIGNATURE, (properties,))

    @property
    def released(self) -> bool:
        return self.release_count > 0

    def entries(self) -> Iterator[PropertyEntry]:
        if self._body is None:
            raise ProtocolError(
                f"reply for {self.object_path} was already released",
                object_path=self.object_path,
            )
        if self.signature != PROPERTIES_SIGNATURE or len(self._body) != 1:
            raise ProtocolError(
                f"expected reply signature {PROPERTIES_SIGNATURE!r}, got {self.signature!r}",
                object_path=self.object_path,
            )
        container = self._body[0]
        if isinstance(container, Mapping):
            items: Iterable[Any] = container.items()
        elif isinstance(container, (list, tuple)):
            items = container
        else:
            raise ProtocolError(
                f"reply body is not a property array: {type(container).__name__}",
                object_path=self.object_path,
            )
        return self._iter_entries(items)

    def _iter_entries(self, items: Iterable[Any]) -> Iterator[PropertyEntry]:
        for item in items:
            yield self._open_entry(item)

    def _open_entry(self, item: Any) -> PropertyEntry:
        try:
            name, variant = item
        except (TypeError, ValueError) as exc:
            raise ProtocolError(
                "property entry is not a (name, variant) pair",
                object_path=self.object_path,
            ) from exc
        if not isinstance(name, str):
            raise ProtocolError(
                f"property name is not a string: {name!r}",
                object_path=self.object_path,
            )
        if not (
            isinstance(variant, tuple)
            and len(variant) == 2
            and isinstance(variant[0], str)
        ):
            raise ProtocolError(
                f"property {name!r} does not hold a variant",
                object_path=self.object_path,
            )
        return PropertyEntry(name=name, value=Variant(tag=variant[0], payload=variant[1]))

    def close(self) -> None:
        if self._body is None:
            return
        self._body = None
        self.release_count += 1

    def __enter__(self) -> "PropertyReply":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
