import pytest

from music_nft_registry import constants as const
from music_nft_registry.errors import (
    InvalidDescriptionError,
    InvalidEditionLimitError,
    InvalidFileHashError,
    InvalidRoyaltyRateError,
    InvalidTitleError,
    InvalidTokenIdError,
    MetadataEncodingError,
)
from music_nft_registry.hashing import (
    compute_file_hash,
    file_hash_from_hex,
    file_hash_hex,
)
from music_nft_registry.validation import (
    decode_metadata_json,
    encode_metadata_json,
    is_positive_int,
    is_valid_identity,
    validate_description,
    validate_edition_limit,
    validate_file_hash,
    validate_royalty_rate,
    validate_title,
    validate_token_id,
)
from tests.helpers.factories import new_address


class TestIsPositiveInt:
    def test_valid(self) -> None:
        assert is_positive_int(1) is True

    def test_zero_invalid(self) -> None:
        assert is_positive_int(0) is False

    def test_bool_invalid(self) -> None:
        assert is_positive_int(True) is False

    def test_non_int_invalid(self) -> None:
        assert is_positive_int("1") is False


class TestIsValidIdentity:
    def test_generated_address(self) -> None:
        assert is_valid_identity(new_address()) is True

    def test_garbage(self) -> None:
        assert is_valid_identity("ST1CREATOR") is False

    def test_non_string(self) -> None:
        assert is_valid_identity(None) is False


class TestFieldValidators:
    def test_token_id(self) -> None:
        validate_token_id(1)
        with pytest.raises(InvalidTokenIdError):
            validate_token_id(0)

    def test_title_bounds(self) -> None:
        validate_title("x")
        validate_title("x" * const.MAX_TITLE_LENGTH)
        with pytest.raises(InvalidTitleError):
            validate_title("")
        with pytest.raises(InvalidTitleError):
            validate_title("x" * (const.MAX_TITLE_LENGTH + 1))

    def test_description_bounds(self) -> None:
        validate_description("")
        validate_description("x" * const.MAX_DESCRIPTION_LENGTH)
        with pytest.raises(InvalidDescriptionError):
            validate_description("x" * (const.MAX_DESCRIPTION_LENGTH + 1))

    def test_file_hash_size(self) -> None:
        validate_file_hash(b"\x01" * 32)
        with pytest.raises(InvalidFileHashError):
            validate_file_hash(b"")
        with pytest.raises(InvalidFileHashError):
            validate_file_hash("x" * 32)  # type: ignore[arg-type]
        validate_file_hash(bytearray(32))

    def test_edition_limit_bounds(self) -> None:
        validate_edition_limit(1)
        validate_edition_limit(1000)
        with pytest.raises(InvalidEditionLimitError):
            validate_edition_limit(0)
        with pytest.raises(InvalidEditionLimitError):
            validate_edition_limit(1001)

    def test_royalty_rate_bounds(self) -> None:
        validate_royalty_rate(0)
        validate_royalty_rate(20)
        with pytest.raises(InvalidRoyaltyRateError):
            validate_royalty_rate(21)


class TestHashing:
    def test_file_hash_is_sha256(self) -> None:
        expected = bytes.fromhex(
            "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        )
        assert compute_file_hash(b"") == expected

    def test_hex_helpers(self) -> None:
        digest = compute_file_hash(b"track")
        assert file_hash_from_hex(file_hash_hex(digest)) == digest

    def test_from_hex_rejects_wrong_size(self) -> None:
        with pytest.raises(ValueError, match="32 bytes"):
            file_hash_from_hex("00" * 31)

    def test_from_hex_rejects_non_hex(self) -> None:
        with pytest.raises(ValueError, match="hex"):
            file_hash_from_hex("zz")


class TestMetadataJson:
    def test_rejects_non_utf8(self) -> None:
        with pytest.raises(MetadataEncodingError, match="UTF-8"):
            decode_metadata_json(b"\xff")

    def test_rejects_invalid_json(self) -> None:
        with pytest.raises(MetadataEncodingError, match="valid JSON"):
            decode_metadata_json(b"{")

    def test_rejects_non_serializable(self) -> None:
        with pytest.raises(MetadataEncodingError, match="JSON-serializable"):
            encode_metadata_json({"x": object()})

    def test_compact_encoding(self) -> None:
        assert encode_metadata_json({"a": 1, "b": "é"}) == '{"a":1,"b":"é"}'.encode()
