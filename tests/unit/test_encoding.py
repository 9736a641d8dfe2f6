"""
Unit tests for ACL membership encoding.
"""
import pytest

from aclstore.acl.encoding import SEPARATOR, canonical_acl, decode_acl, encode_acl, valid_user
from aclstore.core.exceptions import BadRequestError, BadUsernameError


class TestCanonicalACL:
    """Test canonical ordering of member lists."""

    def test_sorts_and_removes_duplicates(self):
        assert canonical_acl(["c", "a", "b", "a", "c"]) == ["a", "b", "c"]

    def test_strictly_ascending_input_unchanged(self):
        acl = ["alice", "bob", "carol"]
        assert canonical_acl(acl) == acl

    def test_adjacent_duplicates_are_collapsed(self):
        assert canonical_acl(["a", "a"]) == ["a"]

    def test_short_lists(self):
        assert canonical_acl([]) == []
        assert canonical_acl(["only"]) == ["only"]

    def test_does_not_mutate_input(self):
        acl = ["b", "a"]
        canonical_acl(acl)
        assert acl == ["b", "a"]


class TestValidUser:
    """Test user name validation."""

    def test_valid_names(self):
        assert valid_user("alice")
        assert valid_user("group:everyone")
        assert valid_user(" ")

    def test_invalid_names(self):
        assert not valid_user("")
        assert not valid_user("a" + SEPARATOR + "b")


class TestEncodeDecode:
    """Test encoding to and decoding from stored bytes."""

    def test_encode_is_canonical(self):
        assert encode_acl(["b", "a", "b"]) == b"a\nb"

    def test_empty_acl_encodes_to_empty_bytes(self):
        assert encode_acl([]) == b""
        assert decode_acl(b"") == []

    def test_decode(self):
        assert decode_acl(b"alice\nbob") == ["alice", "bob"]

    def test_non_ascii_names(self):
        assert decode_acl(encode_acl(["ünal", "zoë"])) == ["zoë", "ünal"]

    def test_invalid_user_rejected(self):
        with pytest.raises(BadUsernameError) as exc_info:
            encode_acl(["alice", "bad\nname"])

        assert str(exc_info.value) == 'invalid user name "bad\\nname"'
        assert isinstance(exc_info.value, BadRequestError)

    def test_empty_user_rejected(self):
        with pytest.raises(BadUsernameError, match='invalid user name ""'):
            encode_acl([""])

    def test_unencodable_user_rejected(self):
        assert not valid_user("\ud800")

        with pytest.raises(BadUsernameError) as exc_info:
            encode_acl(["alice", "\ud800"])

        assert str(exc_info.value) == 'invalid user name "\\ud800"'
        assert str(exc_info.value).isascii()

    def test_non_string_member_rejected(self):
        assert not valid_user(None)

        with pytest.raises(BadUsernameError, match="invalid user name null"):
            encode_acl(["a", None])
