"""Collection Element Unifier — one shared element encoder for a whole collection.

Invariants:
    - Every non-null element is resolved; identical encoders are deduplicated
    - The remaining encoders must merge into one shape, else MixedElementTypeError
      listing every distinct element signature found, in first-seen order, even
      those that merged before the failing one (never coerced)
    - Empty or all-null collections fall back to the string scalar encoder
    - Any null element wraps the selected encoder in NullableEncoder,
      unless the selected encoder already accepts null

Design Decisions:
    - Pure function taking the resolve callable: the unifier and the resolver
      recurse into each other without a module-level instance (ADR: stateless core)
    - String default for empty collections kept as-is: it is what an empty or
      all-null collection resolves to, and changing it alters wire compatibility
    - The default is flagged as a placeholder so shapes that differ only by
      nullability, or by an element kind an empty collection left undecided,
      merge: [[1], []] and [[1], [None]] are one shape
"""

import logging
from typing import Any, Callable, Iterable

from envelope_kit.core.domain_types import ScalarKind
from envelope_kit.core.encoders import (
    Encoder, FixedArrayEncoder, MapEntryEncoder, MappingEncoder, NullableEncoder,
    ScalarEncoder, SequenceEncoder, SetEncoder,
)
from envelope_kit.core.errors import MixedElementTypeError

logger = logging.getLogger(__name__)


def unify_elements(
    elements: Iterable[Any], resolve: Callable[[Any], Encoder],
) -> Encoder:
    """Return the single encoder usable for every element. Raises MixedElementTypeError."""
    has_null = False
    distinct: dict[Encoder, None] = {}
    for element in elements:
        if element is None:
            has_null = True
            continue
        distinct.setdefault(resolve(element), None)

    selected: Encoder | None = None
    for encoder in distinct:
        selected = encoder if selected is None else merge_encoders(selected, encoder)
        if selected is None:
            kinds = list(dict.fromkeys(e.signature for e in distinct))
            logger.warning(
                f"Mixed element types in collection: {', '.join(kinds)}",
                extra={"error_code": "MIXED_ELEMENT_TYPES", "kinds": kinds},
            )
            raise MixedElementTypeError(kinds)

    if selected is None:
        selected = ScalarEncoder(ScalarKind.STRING, placeholder=True)
    if selected.accepts_null:
        return selected
    if has_null:
        return NullableEncoder(selected)
    return selected


def merge_encoders(a: Encoder, b: Encoder) -> Encoder | None:
    """Common shape of a and b, or None when they are incompatible."""
    if _is_placeholder(a):
        return b
    if _is_placeholder(b):
        return a
    if isinstance(a, NullableEncoder) or isinstance(b, NullableEncoder):
        inner = merge_encoders(_strip_nullable(a), _strip_nullable(b))
        if inner is None:
            return None
        return inner if inner.accepts_null else NullableEncoder(inner)
    if type(a) is not type(b):
        return None

    if isinstance(a, (SequenceEncoder, SetEncoder)):
        element = merge_encoders(a.element, b.element)
        return None if element is None else type(a)(element)
    if isinstance(a, FixedArrayEncoder):
        component = merge_encoders(a.component, b.component)
        return None if component is None else FixedArrayEncoder(component)
    if isinstance(a, (MappingEncoder, MapEntryEncoder)):
        key = merge_encoders(a.key, b.key)
        value = merge_encoders(a.value, b.value)
        if key is None or value is None:
            return None
        return type(a)(key, value)
    return a if a.signature == b.signature else None


def _is_placeholder(encoder: Encoder) -> bool:
    return isinstance(encoder, ScalarEncoder) and encoder.placeholder


def _strip_nullable(encoder: Encoder) -> Encoder:
    return encoder.inner if isinstance(encoder, NullableEncoder) else encoder
