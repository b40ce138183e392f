from __future__ import annotations

import logging
from typing import Optional

from jeepney import DBusAddress, new_method_call
from jeepney.io.blocking import DBusConnection, open_dbus_connection
from jeepney.low_level import HeaderFields, MessageType

from bus.reply import PropertyReply
from models.descriptors import SensorDescriptor
from services.errors import BusCallError, BusConnectionError

PROPERTIES_INTERFACE = "org.freedesktop.DBus.Properties"

logger = logging.getLogger(__name__)


class BusClient:
    """Minimal blocking D-Bus client for reading sensor properties."""

    def __init__(self, connection: DBusConnection, timeout: Optional[float] = None) -> None:
        self._connection = connection
        self._timeout = timeout

    @classmethod
    def connect_default(cls, bus: str = "SYSTEM", timeout: Optional[float] = None) -> "BusClient":
        try:
            connection = open_dbus_connection(bus=bus)
        except (OSError, KeyError, ValueError) as exc:
            raise BusConnectionError(str(exc) or type(exc).__name__) from exc
        logger.debug("Connected to %s bus", bus)
        return cls(connection, timeout=timeout)

    def close(self) -> None:
        self._connection.close()

    def __enter__(self) -> "BusClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def get_all(self, descriptor: SensorDescriptor) -> PropertyReply:
        """Fetch every property of ``descriptor`` with a single GetAll call."""
        address = DBusAddress(
            descriptor.object_path,
            bus_name=descriptor.service,
            interface=PROPERTIES_INTERFACE,
        )
        message = new_method_call(address, "GetAll", "s", ("",))
        try:
            reply = self._connection.send_and_get_reply(message, timeout=self._timeout)
        except OSError as exc:
            raise BusCallError(
                f"GetAll failed: {exc}",
                object_path=descriptor.object_path,
            ) from exc

        if reply.header.message_type == MessageType.error:
            error_name = reply.header.fields.get(HeaderFields.error_name, "")
            message = f"GetAll failed: {error_name}"
            if reply.body and isinstance(reply.body[0], str):
                message = f"{message}: {reply.body[0]}"
            raise BusCallError(
                message,
                object_path=descriptor.object_path,
                error_name=error_name,
            )
        return PropertyReply.from_message(descriptor.object_path, reply)
