"""Response Variants — the closed set of outcomes an endpoint can return.

Invariants:
    - Exactly one variant per instance; variants are frozen after construction
    - Data.payload is never None
    - Either holds exactly one Response branch, never both, never neither
    - ContinuousList cursor metadata is always present (has_more=False = last page)
    - File is never document-encoded (routed to raw byte streaming)

Design Decisions:
    - Tagged union of frozen dataclasses over an inheritance tree: encoders and the
      status mapper match exhaustively on the class (ADR: sealed variant)
    - Construction-time checks raise EncodingContractViolation: a malformed
      envelope is a programming defect, not bad user input
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Union

from envelope_kit.core.errors import contract_violation


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class ErrorDetail:
    """Validation-error record. value must be resolvable when present."""
    message: str
    property: str | None = None
    value: Any = None


@dataclass(frozen=True)
class ContinuousList:
    """One page of an ordered listing plus how to fetch the next one."""
    items: tuple = ()
    page_size: int = 20
    current_page: int = 1
    has_more: bool = False

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

    @property
    def next_page(self) -> int | None:
        return self.current_page + 1 if self.has_more else None

    @classmethod
    def from_overfetch(
        cls, rows: Iterable[Any], page_size: int, current_page: int = 1,
    ) -> "ContinuousList":
        """Build a page from a query that fetched page_size + 1 rows.

        The extra row only proves another page exists; it is not returned.
        """
        rows = list(rows)
        return cls(
            items=tuple(rows[:page_size]),
            page_size=page_size,
            current_page=current_page,
            has_more=len(rows) > page_size,
        )


# ─── Variants ────────────────────────────────────────────────────

@dataclass(frozen=True)
class Ok:
    pass


@dataclass(frozen=True)
class Data:
    payload: Any

    def __post_init__(self):
        if self.payload is None:
            raise contract_violation("Data payload cannot be None; use Ok", "Data")


@dataclass(frozen=True)
class Error:
    detail: ErrorDetail

    @classmethod
    def of(cls, message: str, property: str | None = None, value: Any = None) -> "Error":
        return cls(ErrorDetail(message=message, property=property, value=value))


@dataclass(frozen=True)
class Errors:
    details: tuple[ErrorDetail, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "details", tuple(self.details))


@dataclass(frozen=True)
class Listing:
    page: ContinuousList


@dataclass(frozen=True)
class File:
    path: Path

    def __post_init__(self):
        object.__setattr__(self, "path", Path(self.path))


@dataclass(frozen=True)
class Either:
    left: "Response | None" = None
    right: "Response | None" = None

    def __post_init__(self):
        if (self.left is None) == (self.right is None):
            raise contract_violation("Either must hold exactly one branch", "Either")
        if not is_response(self.active):
            raise contract_violation(
                f"Either branch must be a Response, got {type(self.active).__name__}",
                "Either",
            )

    @property
    def is_left(self) -> bool:
        return self.left is not None

    @property
    def active(self) -> "Response":
        return self.left if self.left is not None else self.right


Response = Union[Ok, Data, Error, Errors, Listing, File, Either]

RESPONSE_TYPES: tuple[type, ...] = (Ok, Data, Error, Errors, Listing, File, Either)


def is_response(value: Any) -> bool:
    return isinstance(value, RESPONSE_TYPES)
