import json
from collections.abc import Mapping

from algosdk import encoding

from . import constants as const
from .errors import (
    InvalidDescriptionError,
    InvalidEditionLimitError,
    InvalidFileHashError,
    InvalidRoyaltyRateError,
    InvalidTitleError,
    InvalidTokenIdError,
    MetadataEncodingError,
)


def is_positive_int(value: object) -> bool:
    """Return True if `value` is an integer (not a bool) greater than zero."""
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def is_valid_identity(value: object) -> bool:
    """Return True if `value` is a well formed Algorand address."""
    return isinstance(value, str) and encoding.is_valid_address(value)


def validate_token_id(token_id: object) -> None:
    if not is_positive_int(token_id):
        raise InvalidTokenIdError(f"Token id must be a positive integer, got {token_id!r}")


def validate_title(title: str) -> None:
    if not (const.MIN_TITLE_LENGTH <= len(title) <= const.MAX_TITLE_LENGTH):
        raise InvalidTitleError(
            f"Title must be {const.MIN_TITLE_LENGTH}..{const.MAX_TITLE_LENGTH} characters"
        )


def validate_description(description: str) -> None:
    if len(description) > const.MAX_DESCRIPTION_LENGTH:
        raise InvalidDescriptionError(
            f"Description must be at most {const.MAX_DESCRIPTION_LENGTH} characters"
        )


def validate_file_hash(file_hash: bytes) -> None:
    if not isinstance(file_hash, (bytes, bytearray, memoryview)):
        raise InvalidFileHashError(
            f"File hash must be bytes, got {type(file_hash).__name__}"
        )
    if len(file_hash) != const.FILE_HASH_SIZE:
        raise InvalidFileHashError(
            f"File hash must be exactly {const.FILE_HASH_SIZE} bytes, got {len(file_hash)}"
        )


def validate_edition_limit(edition_limit: int) -> None:
    if not (const.MIN_EDITION_LIMIT <= edition_limit <= const.MAX_EDITION_LIMIT):
        raise InvalidEditionLimitError(
            f"Edition limit must be in [{const.MIN_EDITION_LIMIT}, {const.MAX_EDITION_LIMIT}]"
        )


def validate_royalty_rate(rate: int) -> None:
    if not (const.MIN_ROYALTY_RATE <= rate <= const.MAX_ROYALTY_RATE):
        raise InvalidRoyaltyRateError(
            f"Royalty rate must be in [{const.MIN_ROYALTY_RATE}, {const.MAX_ROYALTY_RATE}]"
        )


def decode_metadata_json(data: bytes) -> dict[str, object]:
    """
    Decode exported token metadata bytes into a Python dict.

    The export format is a UTF-8 JSON *object* without BOM.
    """
    if data.startswith(b"\xef\xbb\xbf"):
        raise MetadataEncodingError("Metadata MUST NOT include a UTF-8 BOM")

    try:
        txt = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MetadataEncodingError("Metadata is not valid UTF-8") from e

    try:
        obj: object = json.loads(txt)
    except json.JSONDecodeError as e:
        raise MetadataEncodingError("Metadata is not valid JSON") from e

    if not isinstance(obj, dict):
        raise MetadataEncodingError("Metadata JSON MUST be an object")
    return obj


def encode_metadata_json(obj: Mapping[str, object]) -> bytes:
    """
    Encode a JSON object to UTF-8 bytes without BOM.
    """
    try:
        txt = json.dumps(obj, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise MetadataEncodingError("Object is not JSON-serializable") from e
    return txt.encode("utf-8")
