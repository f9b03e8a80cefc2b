from __future__ import annotations

import pytest

from crpt_client.core.domain.enums import ErrorKind
from crpt_client.core.domain.errors import (
    BadStatusError,
    CancelledError,
    InvalidInputError,
    SerializationError,
    SubmissionError,
    TransportError,
)


@pytest.mark.parametrize(
    "error, kind, sent",
    [
        (InvalidInputError("x"), ErrorKind.INVALID_INPUT, False),
        (SerializationError("x"), ErrorKind.SERIALIZATION, False),
        (TransportError("x"), ErrorKind.TRANSPORT, True),
        (BadStatusError(500), ErrorKind.BAD_STATUS, True),
        (CancelledError("x"), ErrorKind.CANCELLED, False),
    ],
)
def test_error_kinds_and_sent_flag(error, kind, sent):
    assert isinstance(error, SubmissionError)
    assert error.kind is kind
    assert error.sent is sent


def test_invalid_input_is_value_error():
    assert isinstance(InvalidInputError("x"), ValueError)


def test_bad_status_carries_code_and_body():
    e = BadStatusError(503, b"busy")
    assert e.status_code == 503
    assert e.body == b"busy"
    assert "503" in str(e)


def test_bare_submission_error_has_no_kind():
    e = SubmissionError("x")
    assert e.kind is None
    assert e.sent is False
