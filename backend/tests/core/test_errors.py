"""Error Hierarchy: codes, statuses and the REST envelope."""

from matchbox.core.errors import (
    BlockedError, ErrorCategory, ErrorContext, ErrorSeverity, InvalidPairError,
    MatchboxError, ResourceNotFoundError, StoreError,
)


def test_every_error_is_a_matchbox_error():
    for err in (
        InvalidPairError("bad"),
        BlockedError(),
        ResourceNotFoundError("Match", "m1"),
        StoreError("boom", "insert_membership"),
    ):
        assert isinstance(err, MatchboxError)


def test_status_codes():
    assert InvalidPairError("bad").http_status == 400
    assert BlockedError().http_status == 403
    assert ResourceNotFoundError("Match", "m1").http_status == 404
    assert StoreError("boom", "get_match").http_status == 503


def test_blocked_error_has_user_facing_message():
    err = BlockedError(ErrorContext(user_id="u1", other_user_id="u2"))

    assert err.code == "USER_BLOCKED"
    assert err.severity is ErrorSeverity.WARNING
    assert err.to_response()["error"]["message"] == "You can't message this person."


def test_blocked_error_keeps_custom_user_message():
    err = BlockedError(ErrorContext(user_message="Not available"))

    assert err.context.user_message == "Not available"


def test_store_error_names_operation():
    err = StoreError("OperationalError", "create_conversation")

    assert err.operation == "create_conversation"
    assert err.category is ErrorCategory.DATABASE
    assert "create_conversation" in str(err)


def test_response_envelope_carries_ids():
    err = ResourceNotFoundError(
        "Match", "m1", ErrorContext(match_id="m1", conversation_id="c2"),
    )

    body = err.to_response()["error"]

    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["message"] == "Match 'm1' not found"
    assert body["category"] == "resource_not_found"
    assert body["context"] == {"conversation_id": "c2", "match_id": "m1"}
    assert body["timestamp"]


def test_only_store_errors_are_retryable():
    assert StoreError("boom", "get_match").to_response()["error"]["retryable"] is True
    assert BlockedError().to_response()["error"]["retryable"] is False


def test_response_omits_unknown_ids_and_user_ids():
    err = InvalidPairError("bad", ErrorContext(user_id="u1", other_user_id="u1"))

    assert err.to_response()["error"]["context"] == {}
