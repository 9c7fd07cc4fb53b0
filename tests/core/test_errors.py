"""Error Hierarchy — codes, categories and the REST error body.

Tests:
    - Each error carries its code, category and the context fields it fills
    - to_response() shape used by the shell handlers
"""

from envelope_kit.core.errors import (
    EncodingContractViolation, EnvelopeError, ErrorCategory, ErrorContext,
    ErrorSeverity, InvalidMapKeyError, MissingKeyOrValueError,
    MixedElementTypeError, UnresolvableTypeError,
)


def test_unresolvable_type_records_type_name():
    error = UnresolvableTypeError("Decimal", reason="no custom encoder")
    assert error.code == "UNRESOLVABLE_TYPE"
    assert error.category is ErrorCategory.RESOLUTION
    assert error.context.value_type == "Decimal"
    assert "Decimal" in error.message and "no custom encoder" in error.message


def test_mixed_element_types_lists_kinds():
    error = MixedElementTypeError(["integer", "string"])
    assert error.kinds == ["integer", "string"]
    assert error.context.debug_info == {"kinds": ["integer", "string"]}
    assert "integer, string" in error.message


def test_missing_key_or_value_names_the_side():
    assert "Entry(None, ...)" in MissingKeyOrValueError("key").message
    assert "Entry(..., None)" in MissingKeyOrValueError("value").message


def test_invalid_map_key_is_structural():
    error = InvalidMapKeyError("tuple")
    assert error.category is ErrorCategory.STRUCTURE
    assert error.key_type == "tuple"


def test_contract_violation_is_critical():
    error = EncodingContractViolation("broken", ErrorContext(variant="File"))
    assert error.severity is ErrorSeverity.CRITICAL
    assert error.context.variant == "File"


def test_all_errors_share_the_base_and_default_to_500():
    for error in (
        UnresolvableTypeError("X"), MixedElementTypeError(["a", "b"]),
        MissingKeyOrValueError("key"), InvalidMapKeyError("tuple"),
        EncodingContractViolation("broken"),
    ):
        assert isinstance(error, EnvelopeError)
        assert error.http_status == 500


def test_to_response_shape():
    body = EncodingContractViolation("broken", ErrorContext(variant="File")).to_response()
    error = body["error"]
    assert error["code"] == "ENCODING_CONTRACT_VIOLATION"
    assert error["message"] == "broken"
    assert error["category"] == "contract"
    assert error["severity"] == "critical"
    assert error["context"] == {"value_type": None, "variant": "File"}
    assert "timestamp" in error
