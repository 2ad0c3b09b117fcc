"""Domain Types — verifies rich type definitions and enum values."""

from app.core.domain_types import (
    AuthState, FlashCategory, ReplyId, Timestamp, TopicId, Username,
)


def test_identity_types_wrap_primitives():
    assert TopicId(1) == 1
    assert ReplyId(2) == 2
    assert Username("alice") == "alice"
    assert Timestamp(1_700_000_000) == 1_700_000_000


def test_auth_state_has_two_states():
    assert set(AuthState) == {AuthState.ANONYMOUS, AuthState.AUTHENTICATED}


def test_flash_categories_serialize_to_string():
    assert FlashCategory.INFO.value == "info"
    assert FlashCategory.ERROR.value == "error"
    assert len(FlashCategory) == 2
