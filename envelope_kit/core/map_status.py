"""Status Mapper — transport status code for each response variant.

Invariants:
    - Pure and total: no state, no failure modes
    - Error / Errors → 422; Either → status of the active branch; everything else → 200

Design Decisions:
    - http.HTTPStatus over framework constants: core never imports the transport
"""

from http import HTTPStatus

from envelope_kit.core.responses import Either, Error, Errors, Response


def response_status(response: Response) -> int:
    match response:
        case Error() | Errors():
            return HTTPStatus.UNPROCESSABLE_ENTITY.value
        case Either():
            return response_status(response.active)
        case _:
            return HTTPStatus.OK.value
