from concept_social.concepts.friending import FriendRequestNotFoundError
from concept_social.errors import (
    BadValuesError,
    ConceptError,
    ErrorKind,
    NotAllowedError,
    NotFoundError,
    UnauthenticatedError,
    UnimplementedError,
    format_message,
)


def test_format_message_fills_positional_placeholders():
    assert format_message("{0} and {1}", "a", "b") == "a and b"
    assert format_message("{0} and {1}", "a") == "a and {1}"


def test_format_message_does_not_expand_placeholders_in_arguments():
    assert format_message("between {0} and {1}", "{1}", "bob") == "between {1} and bob"
    assert format_message("{0}", "{0}") == "{0}"


def test_status_codes_follow_kind():
    assert BadValuesError("x").status_code == 400
    assert UnauthenticatedError("x").status_code == 401
    assert NotAllowedError("x").status_code == 403
    assert NotFoundError("x").status_code == 404
    assert UnimplementedError().status_code == 501
    assert ConceptError("x", kind=ErrorKind.NOT_FOUND).status_code == 404


def test_unimplemented_message_names_feature():
    error = UnimplementedError("Sorting.sort")
    assert str(error) == "Sorting.sort: Functionality not yet implemented!"
    assert error.kind is ErrorKind.NOT_IMPLEMENTED


def test_format_with_keeps_tag_kind_and_payload():
    error = FriendRequestNotFoundError("id-1", "id-2")
    assert error.payload == {"users": ["id-1", "id-2"]}

    renamed = error.format_with("alice", "bob")
    assert renamed.message == "Friend request from alice to bob does not exist!"
    assert renamed.tag == "friend_request_not_found"
    assert renamed.status_code == 404
    assert renamed.payload == error.payload
