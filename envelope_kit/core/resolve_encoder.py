"""Type Resolver — picks the encoder for a runtime value of unknown static shape.

Invariants:
    - Dispatch order is fixed, first match wins:
        1. Document                      → PassThroughEncoder
        2. Sequence / dict values view   → SequenceEncoder(unified elements)
        3. collections.abc.Set           → SetEncoder(unified elements)
        4. Mapping                       → MappingEncoder(unified keys, unified values)
        5. Entry                         → MapEntryEncoder (None key or value fails)
        6. array.array / bytes           → FixedArrayEncoder from the declared typecode
        7. datetime, date, Locale, UUID  → fixed-format domain scalar encoders
        8. declared type                 → enum, primitive, custom, structural
    - Total: a value nothing matches raises UnresolvableTypeError, never falls through
    - No caching: every call re-resolves (values may differ in shape call to call)

Design Decisions:
    - Collections are unified recursively before the structural fallback: a raw
      sequence is not a record (ADR: order matters)
    - datetime checked before date: datetime subclasses date
    - Named tuples skip the sequence branch and encode as records
    - Dispatch on the collections.abc interfaces, not concrete classes: range,
      deque and dict views resolve like lists and sets; text and byte strings
      are excluded from the sequence branch
    - Custom encoders are the single open extension point, registered at
      construction and looked up along the MRO (ADR: explicit collaborators)
"""

import array
import dataclasses
import datetime as dt
import logging
from collections import UserString
from collections.abc import Mapping, Sequence, Set, ValuesView
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable
from uuid import UUID

from pydantic import BaseModel

from envelope_kit.core.domain_types import Document, Entry, Locale, ScalarKind
from envelope_kit.core.encoders import (
    CustomEncoder, DateEncoder, DateTimeEncoder, Encoder, EnumEncoder,
    FixedArrayEncoder, LocaleEncoder, MapEntryEncoder, MappingEncoder,
    PassThroughEncoder, ScalarEncoder, SequenceEncoder, SetEncoder,
    StructuralEncoder, UniqueIdEncoder,
)
from envelope_kit.core.errors import MissingKeyOrValueError, UnresolvableTypeError
from envelope_kit.core.unify_elements import unify_elements

logger = logging.getLogger(__name__)

# array.array typecode → component kind (declared element type, never inspected)
_TYPECODE_KINDS: dict[str, ScalarKind] = {
    "b": ScalarKind.INTEGER, "B": ScalarKind.INTEGER,
    "h": ScalarKind.INTEGER, "H": ScalarKind.INTEGER,
    "i": ScalarKind.INTEGER, "I": ScalarKind.INTEGER,
    "l": ScalarKind.INTEGER, "L": ScalarKind.INTEGER,
    "q": ScalarKind.INTEGER, "Q": ScalarKind.INTEGER,
    "f": ScalarKind.FLOAT, "d": ScalarKind.FLOAT,
    "u": ScalarKind.STRING, "w": ScalarKind.STRING,
}

# Registered as Sequence but encoded as scalars or fixed arrays
_NOT_COLLECTIONS: tuple[type, ...] = (str, UserString, bytes, bytearray, array.array)

# bool before int: bool subclasses int
_PRIMITIVE_KINDS: tuple[tuple[type, ScalarKind], ...] = (
    (bool, ScalarKind.BOOLEAN),
    (int, ScalarKind.INTEGER),
    (float, ScalarKind.FLOAT),
    (str, ScalarKind.STRING),
)


def _is_named_tuple(value: Any) -> bool:
    return isinstance(value, tuple) and hasattr(type(value), "_fields")


def _is_ordered_collection(value: Any) -> bool:
    """Sequences and dict views, minus text, byte strings, arrays and named tuples."""
    if isinstance(value, _NOT_COLLECTIONS) or _is_named_tuple(value):
        return False
    return isinstance(value, (Sequence, ValuesView))


class TypeResolver:
    """Maps runtime values to encoders. Stateless apart from the frozen custom registry."""

    def __init__(
        self, custom_encoders: Mapping[type, Callable[[Any], Any]] | None = None,
    ):
        self._custom = MappingProxyType(dict(custom_encoders or {}))

    def encode_value(self, value: Any) -> Any:
        """Encode any value into a document node. None encodes as null."""
        if value is None:
            return None
        return self.resolve(value).encode(value)

    def resolve(self, value: Any) -> Encoder:
        """Return the encoder for value. Raises EnvelopeError subclasses on failure."""
        if value is None:
            raise UnresolvableTypeError("NoneType", "null has no encoder of its own")
        if isinstance(value, Document):
            return PassThroughEncoder()
        if _is_ordered_collection(value):
            return SequenceEncoder(unify_elements(value, self.resolve))
        if isinstance(value, Set):
            return SetEncoder(unify_elements(value, self.resolve))
        if isinstance(value, Mapping):
            return MappingEncoder(
                unify_elements(value.keys(), self.resolve),
                unify_elements(value.values(), self.resolve),
            )
        if isinstance(value, Entry):
            return self._resolve_entry(value)
        if isinstance(value, (array.array, bytes, bytearray)):
            return FixedArrayEncoder(self._resolve_component(value))
        if isinstance(value, dt.datetime):
            return DateTimeEncoder()
        if isinstance(value, dt.date):
            return DateEncoder()
        if isinstance(value, Locale):
            return LocaleEncoder()
        if isinstance(value, UUID):
            return UniqueIdEncoder()
        return self._resolve_declared_type(value)

    # ─── Helpers ─────────────────────────────────────────────────

    def _resolve_entry(self, entry: Entry) -> Encoder:
        if entry.key is None:
            raise MissingKeyOrValueError("key")
        if entry.value is None:
            raise MissingKeyOrValueError("value")
        return MapEntryEncoder(self.resolve(entry.key), self.resolve(entry.value))

    def _resolve_component(self, value: array.array | bytes | bytearray) -> Encoder:
        """Component encoder from the array's declared element type."""
        if not isinstance(value, array.array):
            return ScalarEncoder(ScalarKind.INTEGER)
        kind = _TYPECODE_KINDS.get(value.typecode)
        if kind is None:
            raise UnresolvableTypeError(
                "array.array", f"unsupported component typecode '{value.typecode}'",
            )
        return ScalarEncoder(kind)

    def _resolve_declared_type(self, value: Any) -> Encoder:
        """Fallback: the value's own declared type decides."""
        value_type = type(value)
        if isinstance(value, Enum):
            return EnumEncoder(value_type)
        for primitive, kind in _PRIMITIVE_KINDS:
            if isinstance(value, primitive):
                return ScalarEncoder(kind)
        for candidate in value_type.__mro__:
            convert = self._custom.get(candidate)
            if convert is not None:
                return CustomEncoder(candidate, convert, self.encode_value)
        fields = _declared_fields(value)
        if fields is not None:
            return StructuralEncoder(value_type, fields, self.encode_value)
        logger.warning(
            f"No encoder for {value_type.__module__}.{value_type.__qualname__}",
        )
        raise UnresolvableTypeError(value_type.__qualname__)


def _declared_fields(value: Any) -> tuple[tuple[str, str], ...] | None:
    """(wire_name, attribute) pairs in declaration order, or None for non-records."""
    if isinstance(value, BaseModel):
        return tuple(
            (info.serialization_alias or info.alias or name, name)
            for name, info in type(value).model_fields.items()
        )
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return tuple((f.name, f.name) for f in dataclasses.fields(value))
    if _is_named_tuple(value):
        return tuple((name, name) for name in type(value)._fields)
    return None


_default_resolver = TypeResolver()


def encode_value(value: Any) -> Any:
    """Encode value with the default resolver (no custom encoders)."""
    return _default_resolver.encode_value(value)
