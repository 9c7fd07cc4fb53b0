"""Collection Element Unifier — tests for homogeneity enforcement and null policy.

Tests cover:
    - Homogeneous collections yield the shared element encoder
    - Two or more incompatible kinds raise MixedElementTypeError with exactly those kinds
    - Empty and all-null collections default to the string scalar
    - Null elements wrap the encoder in NullableEncoder unless it already accepts null
    - Shapes differing only by nullability or by undecided empty collections merge
    - A failed merge reports every distinct element signature and logs them
"""

import logging
from datetime import date

import pytest

from envelope_kit.core.domain_types import Document, ScalarKind
from envelope_kit.core.encoders import (
    NullableEncoder, PassThroughEncoder, ScalarEncoder, SequenceEncoder,
)
from envelope_kit.core.errors import MixedElementTypeError
from envelope_kit.core.unify_elements import merge_encoders, unify_elements


# ─── Homogeneity ─────────────────────────────────────────────────

def test_homogeneous_elements_share_one_encoder(resolver):
    assert unify_elements([1, 2, 3], resolver.resolve) == ScalarEncoder(ScalarKind.INTEGER)


def test_mixed_kinds_raise_with_exactly_those_kinds(resolver):
    with pytest.raises(MixedElementTypeError) as exc_info:
        unify_elements([1, "a", 2, date(2024, 1, 1), "b"], resolver.resolve)
    assert exc_info.value.kinds == ["integer", "string", "date"]
    assert exc_info.value.code == "MIXED_ELEMENT_TYPES"


def test_mixed_error_is_not_swallowed_for_nested_collections(resolver):
    with pytest.raises(MixedElementTypeError):
        unify_elements([[1, "a"]], resolver.resolve)


# ─── Null Policy ─────────────────────────────────────────────────

def test_empty_collection_defaults_to_string(resolver):
    encoder = unify_elements([], resolver.resolve)
    assert isinstance(encoder, ScalarEncoder)
    assert encoder.signature == "string"


def test_all_null_collection_defaults_to_nullable_string(resolver):
    encoder = unify_elements([None, None], resolver.resolve)
    assert isinstance(encoder, NullableEncoder)
    assert encoder.inner.signature == "string"


def test_null_elements_wrap_encoder_in_nullable(resolver):
    encoder = unify_elements([1, None, 3], resolver.resolve)
    assert encoder == NullableEncoder(ScalarEncoder(ScalarKind.INTEGER))
    assert encoder.signature == "integer?"
    assert [encoder.encode(v) for v in [1, None, 3]] == [1, None, 3]


def test_null_tolerant_encoder_is_not_wrapped(resolver):
    encoder = unify_elements([Document({"a": 1}), None], resolver.resolve)
    assert encoder == PassThroughEncoder()


def test_elements_are_consumed_once(resolver):
    encoder = unify_elements((n for n in [1, None]), resolver.resolve)
    assert encoder.signature == "integer?"


# ─── Shape Merging ───────────────────────────────────────────────

def test_empty_inner_collection_merges_with_decided_one(resolver):
    encoder = unify_elements([[1], []], resolver.resolve)
    assert encoder == SequenceEncoder(ScalarEncoder(ScalarKind.INTEGER))
    assert encoder.encode([[1], []]) == [[1], []]


def test_undecided_collection_listed_first_still_merges(resolver):
    encoder = unify_elements([[], ["a"], [None]], resolver.resolve)
    assert encoder.signature == "list<string?>"
    assert encoder.encode([[], ["a"], [None]]) == [[], ["a"], [None]]


def test_nullability_difference_merges_to_nullable(resolver):
    encoder = unify_elements([[1, None], [2]], resolver.resolve)
    assert encoder.signature == "list<integer?>"


def test_merge_rejects_different_leaf_kinds():
    integer = ScalarEncoder(ScalarKind.INTEGER)
    string = ScalarEncoder(ScalarKind.STRING)
    assert merge_encoders(SequenceEncoder(integer), SequenceEncoder(string)) is None
    assert merge_encoders(integer, SequenceEncoder(integer)) is None


def test_merge_placeholder_yields_other_side():
    placeholder = ScalarEncoder(ScalarKind.STRING, placeholder=True)
    integer = ScalarEncoder(ScalarKind.INTEGER)
    assert merge_encoders(placeholder, integer) == integer
    assert merge_encoders(integer, placeholder) == integer


def test_placeholder_default_is_distinct_from_plain_string(resolver):
    encoder = unify_elements([], resolver.resolve)
    assert encoder == ScalarEncoder(ScalarKind.STRING, placeholder=True)
    assert encoder != ScalarEncoder(ScalarKind.STRING)
    assert encoder.encode("x") == "x"


# ─── Failure Reporting ───────────────────────────────────────────

def test_failed_merge_reports_signatures_that_merged_earlier(resolver):
    with pytest.raises(MixedElementTypeError) as exc_info:
        unify_elements([[1], [1, None], ["a"]], resolver.resolve)
    assert exc_info.value.kinds == ["list<integer>", "list<integer?>", "list<string>"]


def test_mixed_kinds_are_logged_with_kinds_extra(resolver, caplog):
    with caplog.at_level(logging.WARNING, logger="envelope_kit.core.unify_elements"):
        with pytest.raises(MixedElementTypeError):
            unify_elements([1, "a"], resolver.resolve)
    records = [r for r in caplog.records if getattr(r, "kinds", None)]
    assert len(records) == 1
    assert records[0].kinds == ["integer", "string"]
    assert records[0].error_code == "MIXED_ELEMENT_TYPES"
