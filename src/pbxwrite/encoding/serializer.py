"""Serializer — walks a value tree and emits the ASCII plist dialect.

Two container families share one traversal:
- Indenting (sequence, map, struct): one entry per line, indented one
  level deeper than the opening delimiter.
- Flat (tuple, tagged variants): always written on a single line, even
  when nested inside an indenting container.

INVARIANT: one Serializer per top-level ``encode`` call. The buffer and
indent depth are never reset or shared.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sized
from decimal import Decimal
from enum import Enum
from types import TracebackType
from typing import Any

from pbxwrite.config.models import EncodeOptions
from pbxwrite.encoding.contract import Serializable
from pbxwrite.encoding.errors import EncodeError

logger = logging.getLogger(__name__)

_ESCAPES: dict[str, str] = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def format_float(value: float) -> str:
    """Shortest decimal form of *value*, no exponent and no trailing zeros.

    ``1.0`` renders as ``1``, ``1e-07`` as ``0.0000001``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return format(Decimal(repr(value)).normalize(), "f")


def escape_string(text: str) -> str:
    """Backslash-escape quotes, backslashes, and control characters."""
    parts: list[str] = []
    for ch in text:
        if ch in _ESCAPES:
            parts.append(_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            parts.append(f"\\U{ord(ch):04x}")
        else:
            parts.append(ch)
    return "".join(parts)


# ---------------------------------------------------------------------------
# Compound writers
# ---------------------------------------------------------------------------


class _Compound(ABC):
    """Base for the writers returned by ``Serializer.serialize_<compound>``.

    Usable as a context manager: leaving the block without an exception
    writes the closing delimiter. Calling :meth:`end` directly works too.
    """

    def __init__(self, serializer: Serializer) -> None:
        self._ser = serializer
        self._ended = False

    def __enter__(self) -> Any:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.end()

    def end(self) -> None:
        if self._ended:
            return
        self._ended = True
        self._close()

    @abstractmethod
    def _close(self) -> None:
        """Write the closing delimiter."""


class SerializeSeq(_Compound):
    """``(`` one element per line, each followed by ``,`` ``)``."""

    def element(self, value: Any) -> None:
        self._ser.begin_line()
        self._ser.serialize_value(value)
        self._ser.write(",")

    def _close(self) -> None:
        self._ser.dedent()
        self._ser.begin_line()
        self._ser.write(")")


class SerializeTuple(_Compound):
    """Flat ``[a,b,c]`` body; also used for tuple-variant payloads."""

    def __init__(self, serializer: Serializer, closing: str) -> None:
        super().__init__(serializer)
        self._closing = closing
        self._first = True

    def element(self, value: Any) -> None:
        if not self._first:
            self._ser.write(",")
        self._first = False
        self._ser.serialize_value(value)

    def _close(self) -> None:
        self._ser.write(self._closing)


class SerializeMap(_Compound):
    """``{`` one ``key = value;`` pair per line ``}``."""

    def entry(self, key: Any, value: Any) -> None:
        self._ser.begin_line()
        self._ser.serialize_value(key)
        self._ser.write(" = ")
        self._ser.serialize_value(value)
        self._ser.write(";")

    def _close(self) -> None:
        self._ser.dedent()
        self._ser.begin_line()
        self._ser.write("}")


class SerializeStruct(SerializeMap):
    """Like a map, but keys are literal field names written unquoted."""

    def field(self, name: str, value: Any) -> None:
        self._ser.begin_line()
        self._ser.write(name)
        self._ser.write(" = ")
        self._ser.serialize_value(value)
        self._ser.write(";")


class SerializeStructVariant(_Compound):
    """Flat ``"name":value`` pairs inside ``{"Variant":{...}}``."""

    def __init__(self, serializer: Serializer) -> None:
        super().__init__(serializer)
        self._first = True

    def field(self, name: str, value: Any) -> None:
        if not self._first:
            self._ser.write(",")
        self._first = False
        self._ser.serialize_str(name)
        self._ser.write(":")
        self._ser.serialize_value(value)

    def _close(self) -> None:
        self._ser.write("}}")


# ---------------------------------------------------------------------------
# Serializer
# ---------------------------------------------------------------------------


class Serializer:
    """Formatting state plus one method per value category.

    Attributes:
        options: Output options (indent unit, string escaping).
    """

    def __init__(self, options: EncodeOptions | None = None) -> None:
        self.options = options or EncodeOptions()
        self._chunks: list[str] = []
        self._indent_level = 0

    @property
    def output(self) -> str:
        return "".join(self._chunks)

    @property
    def indent_level(self) -> int:
        return self._indent_level

    def write(self, text: str) -> None:
        self._chunks.append(text)

    def begin_line(self) -> None:
        self._chunks.append("\n" + self.options.indent * self._indent_level)

    def indent(self) -> None:
        self._indent_level += 1

    def dedent(self) -> None:
        self._indent_level -= 1

    # ── Scalars ──────────────────────────────────────────────────────

    def serialize_bool(self, value: bool) -> None:
        self.write("true" if value else "false")

    def serialize_int(self, value: int) -> None:
        self.write(str(int(value)))

    def serialize_float(self, value: float) -> None:
        self.write(format_float(float(value)))

    def serialize_char(self, value: str) -> None:
        if len(value) != 1:
            raise EncodeError.custom(f"expected a single character, got {len(value)}")
        self.serialize_str(value)

    def serialize_str(self, value: str) -> None:
        # str-mixin enums format as "Kind.NAME"; take the raw string value
        text = str.__str__(value)
        if self.options.escape_strings:
            text = escape_string(text)
        self.write(f'"{text}"')

    def serialize_bytes(self, value: bytes) -> None:
        with self.serialize_seq(len(value)) as seq:
            for byte in value:
                seq.element(byte)

    def serialize_none(self) -> None:
        self.serialize_unit()

    def serialize_some(self, value: Any) -> None:
        self.serialize_value(value)

    def serialize_unit(self) -> None:
        self.write("null")

    def serialize_unit_struct(self, name: str) -> None:
        self.serialize_unit()

    def serialize_newtype_struct(self, name: str, value: Any) -> None:
        self.serialize_value(value)

    # ── Tagged variants ──────────────────────────────────────────────

    def serialize_unit_variant(self, name: str, variant: str) -> None:
        self.serialize_str(variant)

    def serialize_newtype_variant(self, name: str, variant: str, value: Any) -> None:
        self.write("{")
        self.serialize_str(variant)
        self.write(":")
        self.serialize_value(value)
        self.write("}")

    def serialize_tuple_variant(self, name: str, variant: str, length: int) -> SerializeTuple:
        self.write("{")
        self.serialize_str(variant)
        self.write(":[")
        return SerializeTuple(self, closing="]}")

    def serialize_struct_variant(
        self, name: str, variant: str, length: int
    ) -> SerializeStructVariant:
        self.write("{")
        self.serialize_str(variant)
        self.write(":{")
        return SerializeStructVariant(self)

    # ── Containers ───────────────────────────────────────────────────

    def serialize_seq(self, length: int | None = None) -> SerializeSeq:
        self.write("(")
        self.indent()
        return SerializeSeq(self)

    def serialize_tuple(self, length: int) -> SerializeTuple:
        self.write("[")
        return SerializeTuple(self, closing="]")

    def serialize_tuple_struct(self, name: str, length: int) -> SerializeTuple:
        return self.serialize_tuple(length)

    def serialize_map(self, length: int | None = None) -> SerializeMap:
        self.write("{")
        self.indent()
        return SerializeMap(self)

    def serialize_struct(self, name: str, length: int) -> SerializeStruct:
        self.write("{")
        self.indent()
        return SerializeStruct(self)

    # ── Dispatch ─────────────────────────────────────────────────────

    def serialize_value(self, value: Any) -> None:
        """Route *value* to the method for its category.

        ``Serializable`` wins over every builtin check. Plain enums become
        unit variants; int- and str-valued enums degrade to their value.
        """
        if isinstance(value, Serializable):
            value.serialize(self)
        elif value is None:
            self.serialize_none()
        elif isinstance(value, bool):
            self.serialize_bool(value)
        elif isinstance(value, Enum) and not isinstance(value, (int, str)):
            self.serialize_unit_variant(type(value).__name__, value.name)
        elif isinstance(value, int):
            self.serialize_int(value)
        elif isinstance(value, float):
            self.serialize_float(value)
        elif isinstance(value, str):
            self.serialize_str(value)
        elif isinstance(value, (bytes, bytearray, memoryview)):
            self.serialize_bytes(bytes(value))
        elif isinstance(value, tuple):
            with self.serialize_tuple(len(value)) as tup:
                for item in value:
                    tup.element(item)
        elif isinstance(value, Mapping):
            with self.serialize_map(len(value)) as mapping:
                for key, item in value.items():
                    mapping.entry(key, item)
        elif isinstance(value, (set, frozenset)):
            msg = f"cannot encode unordered {type(value).__name__}"
            raise EncodeError.custom(msg)
        elif isinstance(value, Iterable):
            length = len(value) if isinstance(value, Sized) else None
            with self.serialize_seq(length) as seq:
                for item in value:
                    seq.element(item)
        else:
            msg = f"unsupported value type: {type(value).__name__}"
            raise EncodeError.custom(msg)


def encode(value: Any, *, options: EncodeOptions | None = None) -> str:
    """Encode *value* as ASCII plist text.

    Raises:
        EncodeError: A value refused to serialize or has no plist form.
            Nothing written before the failure is returned.
    """
    serializer = Serializer(options)
    try:
        serializer.serialize_value(value)
    except EncodeError:
        logger.debug("Encoding %s failed", type(value).__name__, exc_info=True)
        raise
    text = serializer.output
    logger.debug("Encoded %s (%d chars)", type(value).__name__, len(text))
    return text
