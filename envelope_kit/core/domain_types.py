"""Domain Types — value types the resolver recognizes by identity.

Invariants:
    - Document wraps an already-built document node (passed through verbatim)
    - Entry is a single key/value record, distinct from a 2-tuple
    - Locale.tag is BCP-47-like: language lowercase, script titlecase, region uppercase
    - All value types are frozen: safe to share across threads

Design Decisions:
    - Frozen dataclasses over NamedTuple: a NamedTuple is a tuple and would be
      dispatched as a sequence (ADR: dispatch order is by runtime identity)
    - str Enums: serialize to JSON without custom encoders
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any


# ─── Scalar Kinds ────────────────────────────────────────────────

class ScalarKind(str, Enum):
    """Primitive document kinds, also the signature of scalar encoders."""
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"


# ─── Wrappers ────────────────────────────────────────────────────

@dataclass(frozen=True)
class Document:
    """A value that already is a document node (dict/list/scalar/None tree)."""
    node: Any


@dataclass(frozen=True)
class Entry:
    """A single key/value pair. Neither side may be None when encoded."""
    key: Any
    value: Any


# ─── Locale ──────────────────────────────────────────────────────

_LANGUAGE = re.compile(r"^[A-Za-z]{2,8}$")
_SCRIPT = re.compile(r"^[A-Za-z]{4}$")
_REGION = re.compile(r"^(?:[A-Za-z]{2}|\d{3})$")


@dataclass(frozen=True)
class Locale:
    """Culture tag: language plus optional script and region."""
    language: str
    region: str | None = None
    script: str | None = None

    @property
    def tag(self) -> str:
        parts = [self.language.lower()]
        if self.script:
            parts.append(self.script.title())
        if self.region:
            parts.append(self.region.upper())
        return "-".join(parts)

    @classmethod
    def parse(cls, tag: str) -> "Locale":
        """Parse 'pt-BR', 'pt_BR' or 'zh-Hant-TW'. Raises ValueError on malformed tags."""
        parts = re.split(r"[-_]", tag.strip())
        if not parts or not _LANGUAGE.match(parts[0]):
            raise ValueError(f"Invalid locale tag: {tag!r}")
        language, script, region = parts[0].lower(), None, None
        for part in parts[1:]:
            if script is None and region is None and _SCRIPT.match(part):
                script = part.title()
            elif region is None and _REGION.match(part):
                region = part.upper()
            else:
                raise ValueError(f"Invalid locale tag: {tag!r}")
        return cls(language=language, region=region, script=script)

    def __str__(self) -> str:
        return self.tag
