"""Status Mapper — every variant maps to exactly one status, Either included.

Tests:
    - Error / Errors → 422
    - Ok / Data / Listing / File → 200
    - Either takes the status of its active branch, at any depth
"""

import pytest

from envelope_kit.core.map_status import response_status
from envelope_kit.core.responses import (
    ContinuousList, Data, Either, Error, ErrorDetail, Errors, File, Listing, Ok,
)


@pytest.mark.parametrize("response", [
    Ok(),
    Data({"a": 1}),
    Listing(ContinuousList()),
    File("report.csv"),
])
def test_success_variants_map_to_200(response):
    assert response_status(response) == 200


@pytest.mark.parametrize("response", [
    Error.of("bad"),
    Errors([ErrorDetail("bad")]),
    Errors(),
])
def test_error_variants_map_to_422(response):
    assert response_status(response) == 422


def test_either_left_error_maps_to_422():
    assert response_status(Either(left=Error.of("bad"))) == 422


def test_either_right_ok_maps_to_200():
    assert response_status(Either(right=Ok())) == 200


def test_nested_either_follows_active_branch():
    assert response_status(Either(left=Either(right=Errors()))) == 422


def test_status_is_a_plain_int():
    assert type(response_status(Ok())) is int
