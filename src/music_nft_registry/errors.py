from __future__ import annotations

import enum


class ErrorCode(enum.IntEnum):
    """Registry rejection reasons. Values match the original contract error codes."""

    NOT_AUTHORIZED = 100
    INVALID_EDITION_LIMIT = 101
    INVALID_TITLE = 102
    INVALID_DESCRIPTION = 103
    INVALID_FILE_HASH = 104
    MAX_EDITION_REACHED = 105
    NO_TOKEN = 106
    NOT_OWNER = 107
    INVALID_TOKEN_ID = 108
    METADATA_FROZEN = 109
    INVALID_ROYALTY_RATE = 110
    INVALID_ROYALTY_RECIPIENT = 111
    ALREADY_BURNED = 112
    INVALID_UPDATE = 114
    MAX_TOKENS_EXCEEDED = 115
    INVALID_MINT_FEE = 116
    AUTHORITY_NOT_SET = 117
    INVALID_AUTHORITY = 118
    ALREADY_SET = 119
    INVALID_FEE = 120
    INVALID_MAX = 121


class MusicNftRegistryError(Exception):
    """Base class for all registry errors."""

    code: ErrorCode | None = None


class NotAuthorizedError(MusicNftRegistryError, PermissionError):
    """Raised when the sender is not the registry authority or the token creator."""

    code = ErrorCode.NOT_AUTHORIZED


class InvalidEditionLimitError(MusicNftRegistryError, ValueError):
    """Raised when an edition limit is outside [1, 1000]."""

    code = ErrorCode.INVALID_EDITION_LIMIT


class InvalidTitleError(MusicNftRegistryError, ValueError):
    """Raised when a title is empty or longer than 100 characters."""

    code = ErrorCode.INVALID_TITLE


class InvalidDescriptionError(MusicNftRegistryError, ValueError):
    """Raised when a description is longer than 256 characters."""

    code = ErrorCode.INVALID_DESCRIPTION


class InvalidFileHashError(MusicNftRegistryError, ValueError):
    """Raised when a file hash is not a 32-byte digest."""

    code = ErrorCode.INVALID_FILE_HASH


class MaxEditionReachedError(MusicNftRegistryError, RuntimeError):
    """Raised when a token has already issued all of its editions."""

    code = ErrorCode.MAX_EDITION_REACHED


class NoTokenError(MusicNftRegistryError, LookupError):
    """Raised when a token was never minted (or has no live owner)."""

    code = ErrorCode.NO_TOKEN


class NotOwnerError(MusicNftRegistryError, PermissionError):
    """Raised when the sender does not own the token."""

    code = ErrorCode.NOT_OWNER


class InvalidTokenIdError(MusicNftRegistryError, ValueError):
    """Raised when a token id is not a positive integer."""

    code = ErrorCode.INVALID_TOKEN_ID


class MetadataFrozenError(MusicNftRegistryError, RuntimeError):
    """Raised when mutating (or re-freezing) a token whose metadata is frozen."""

    code = ErrorCode.METADATA_FROZEN


class InvalidRoyaltyRateError(MusicNftRegistryError, ValueError):
    """Raised when a royalty rate is outside [0, 20]."""

    code = ErrorCode.INVALID_ROYALTY_RATE


class InvalidRoyaltyRecipientError(MusicNftRegistryError, ValueError):
    """Raised when the royalty recipient is the sender (or a malformed address)."""

    code = ErrorCode.INVALID_ROYALTY_RECIPIENT


class AlreadyBurnedError(MusicNftRegistryError, RuntimeError):
    """Raised when burning a token that is already burned."""

    code = ErrorCode.ALREADY_BURNED


class InvalidUpdateError(MusicNftRegistryError, ValueError):
    """Raised when an ownership update targets a malformed recipient address."""

    code = ErrorCode.INVALID_UPDATE


class MaxTokensExceededError(MusicNftRegistryError, RuntimeError):
    """Raised when issuing a new id would exceed the registry token cap."""

    code = ErrorCode.MAX_TOKENS_EXCEEDED


class InvalidMintFeeError(MusicNftRegistryError, RuntimeError):
    """Raised when the mint fee payment to the authority could not be settled."""

    code = ErrorCode.INVALID_MINT_FEE


class AuthorityNotSetError(MusicNftRegistryError, RuntimeError):
    """Raised when minting before the registry authority is configured."""

    code = ErrorCode.AUTHORITY_NOT_SET


class InvalidAuthorityError(MusicNftRegistryError, ValueError):
    """Raised when an authority candidate is empty or not a valid address."""

    code = ErrorCode.INVALID_AUTHORITY


class AlreadySetError(MusicNftRegistryError, RuntimeError):
    """Raised when setting the authority a second time."""

    code = ErrorCode.ALREADY_SET


class InvalidFeeError(MusicNftRegistryError, ValueError):
    """Raised when a new mint fee is not strictly positive."""

    code = ErrorCode.INVALID_FEE


class InvalidMaxError(MusicNftRegistryError, ValueError):
    """
    Raised when a new token cap does not exceed the last issued token id.

    The cap can never fall to (or below) ids that were already issued.
    """

    code = ErrorCode.INVALID_MAX


class MetadataEncodingError(MusicNftRegistryError, ValueError):
    """Raised when exported token metadata bytes are not a valid UTF-8 JSON object."""


_ERRORS_BY_CODE: dict[ErrorCode, type[MusicNftRegistryError]] = {
    cls.code: cls
    for cls in (
        NotAuthorizedError,
        InvalidEditionLimitError,
        InvalidTitleError,
        InvalidDescriptionError,
        InvalidFileHashError,
        MaxEditionReachedError,
        NoTokenError,
        NotOwnerError,
        InvalidTokenIdError,
        MetadataFrozenError,
        InvalidRoyaltyRateError,
        InvalidRoyaltyRecipientError,
        AlreadyBurnedError,
        InvalidUpdateError,
        MaxTokensExceededError,
        InvalidMintFeeError,
        AuthorityNotSetError,
        InvalidAuthorityError,
        AlreadySetError,
        InvalidFeeError,
        InvalidMaxError,
    )
    if cls.code is not None
}


def error_for_code(code: int) -> type[MusicNftRegistryError]:
    """
    Return the exception class raised for a numeric error code.

    Raises:
        ValueError: if `code` is not a registry error code.
    """
    return _ERRORS_BY_CODE[ErrorCode(code)]
