"""Encoders — one strategy per encodable kind, turning a value into a document node.

Invariants:
    - Every encoder exposes signature (kind + shape identity), accepts_null and encode()
    - Two encoders with equal signatures encode the same shape
    - encode() returns plain dict/list/str/int/float/bool/None trees only
    - Encoders hold no mutable state; they are rebuilt on every resolve call

Design Decisions:
    - Frozen dataclasses per kind over one class with a kind switch: each shape
      owns its encode rule (ADR: ExMA no god objects)
    - Nested values in structural/custom encoders are re-resolved at encode time
      through an injected encode_value callable, never through a global resolver
"""

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, ClassVar, Protocol

from envelope_kit.core.domain_types import Document, ScalarKind
from envelope_kit.core.errors import InvalidMapKeyError, contract_violation


def qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


class Encoder(Protocol):
    """Structural contract shared by every resolved encoder."""
    accepts_null: bool

    @property
    def signature(self) -> str: ...

    def encode(self, value: Any) -> Any: ...


def _key_text(node: Any, raw_key: Any) -> str:
    """Document keys must be text. Primitives are stringified; anything else fails."""
    if isinstance(node, str):
        return node
    if isinstance(node, bool):
        return "true" if node else "false"
    if isinstance(node, (int, float)):
        return str(node)
    raise InvalidMapKeyError(type(raw_key).__name__)


# ─── Pass-through & Scalars ──────────────────────────────────────

@dataclass(frozen=True)
class PassThroughEncoder:
    accepts_null: ClassVar[bool] = True

    @property
    def signature(self) -> str:
        return "document"

    def encode(self, value: Any) -> Any:
        return value.node if isinstance(value, Document) else value


_SCALAR_CASTS: dict[ScalarKind, Callable[[Any], Any]] = {
    ScalarKind.STRING: str,
    ScalarKind.INTEGER: int,
    ScalarKind.FLOAT: float,
    ScalarKind.BOOLEAN: bool,
}


@dataclass(frozen=True)
class ScalarEncoder:
    """placeholder marks the default chosen for empty or all-null collections."""
    kind: ScalarKind
    placeholder: bool = False
    accepts_null: ClassVar[bool] = False

    @property
    def signature(self) -> str:
        return self.kind.value

    def encode(self, value: Any) -> Any:
        if value is None:
            raise contract_violation(
                f"Null reached non-nullable {self.kind.value} encoder",
            )
        return _SCALAR_CASTS[self.kind](value)


@dataclass(frozen=True)
class EnumEncoder:
    """Enum members encode as their primitive value, else as their name."""
    enum_type: type[Enum]
    accepts_null: ClassVar[bool] = False

    @property
    def signature(self) -> str:
        return f"enum:{qualified_name(self.enum_type)}"

    def encode(self, value: Enum) -> Any:
        raw = value.value
        if isinstance(raw, (str, int, float, bool)):
            return raw
        return value.name


@dataclass(frozen=True)
class NullableEncoder:
    inner: Encoder
    accepts_null: ClassVar[bool] = True

    @property
    def signature(self) -> str:
        return f"{self.inner.signature}?"

    def encode(self, value: Any) -> Any:
        if value is None:
            return None
        return self.inner.encode(value)


# ─── Collections ─────────────────────────────────────────────────

@dataclass(frozen=True)
class SequenceEncoder:
    element: Encoder
    accepts_null: ClassVar[bool] = False

    @property
    def signature(self) -> str:
        return f"list<{self.element.signature}>"

    def encode(self, value: Any) -> list:
        return [self.element.encode(item) for item in value]


@dataclass(frozen=True)
class SetEncoder:
    """Sets encode as arrays in iteration order."""
    element: Encoder
    accepts_null: ClassVar[bool] = False

    @property
    def signature(self) -> str:
        return f"set<{self.element.signature}>"

    def encode(self, value: Any) -> list:
        return [self.element.encode(item) for item in value]


@dataclass(frozen=True)
class MappingEncoder:
    key: Encoder
    value: Encoder
    accepts_null: ClassVar[bool] = False

    @property
    def signature(self) -> str:
        return f"map<{self.key.signature},{self.value.signature}>"

    def encode(self, value: Any) -> dict:
        document: dict[str, Any] = {}
        for raw_key, raw_value in value.items():
            if raw_key is None:
                raise InvalidMapKeyError("NoneType")
            document[_key_text(self.key.encode(raw_key), raw_key)] = self.value.encode(raw_value)
        return document


@dataclass(frozen=True)
class MapEntryEncoder:
    """A single pair encodes as a one-key object."""
    key: Encoder
    value: Encoder
    accepts_null: ClassVar[bool] = False

    @property
    def signature(self) -> str:
        return f"entry<{self.key.signature},{self.value.signature}>"

    def encode(self, value: Any) -> dict:
        return {_key_text(self.key.encode(value.key), value.key): self.value.encode(value.value)}


@dataclass(frozen=True)
class FixedArrayEncoder:
    component: Encoder
    accepts_null: ClassVar[bool] = False

    @property
    def signature(self) -> str:
        return f"array<{self.component.signature}>"

    def encode(self, value: Any) -> list:
        return [self.component.encode(item) for item in value]


# ─── Domain Scalars ──────────────────────────────────────────────

@dataclass(frozen=True)
class DateEncoder:
    accepts_null: ClassVar[bool] = False

    @property
    def signature(self) -> str:
        return "date"

    def encode(self, value: dt.date) -> str:
        return value.isoformat()


@dataclass(frozen=True)
class DateTimeEncoder:
    """ISO-8601 without offset. Aware values are shifted to UTC first."""
    accepts_null: ClassVar[bool] = False

    @property
    def signature(self) -> str:
        return "datetime"

    def encode(self, value: dt.datetime) -> str:
        if value.tzinfo is not None and value.utcoffset() is not None:
            value = value.astimezone(dt.timezone.utc).replace(tzinfo=None)
        return value.isoformat()


@dataclass(frozen=True)
class LocaleEncoder:
    accepts_null: ClassVar[bool] = False

    @property
    def signature(self) -> str:
        return "locale"

    def encode(self, value: Any) -> str:
        return value.tag


@dataclass(frozen=True)
class UniqueIdEncoder:
    accepts_null: ClassVar[bool] = False

    @property
    def signature(self) -> str:
        return "uuid"

    def encode(self, value: Any) -> str:
        return str(value)


# ─── Declared-Type Fallbacks ─────────────────────────────────────

@dataclass(frozen=True)
class CustomEncoder:
    """Application-registered conversion; its result is encoded recursively."""
    value_type: type
    convert: Callable[[Any], Any] = field(compare=False, repr=False)
    encode_value: Callable[[Any], Any] = field(compare=False, repr=False)
    accepts_null: ClassVar[bool] = False

    @property
    def signature(self) -> str:
        return f"custom:{qualified_name(self.value_type)}"

    def encode(self, value: Any) -> Any:
        return self.encode_value(self.convert(value))


@dataclass(frozen=True)
class StructuralEncoder:
    """Field-by-field object from the type's declared fields: (wire_name, attribute) pairs."""
    value_type: type
    fields: tuple[tuple[str, str], ...]
    encode_value: Callable[[Any], Any] = field(compare=False, repr=False)
    accepts_null: ClassVar[bool] = False

    @property
    def signature(self) -> str:
        return f"struct:{qualified_name(self.value_type)}"

    def encode(self, value: Any) -> dict:
        return {
            wire_name: self.encode_value(getattr(value, attribute))
            for wire_name, attribute in self.fields
        }
