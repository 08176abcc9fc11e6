# ruff: noqa: RUF022
"""
Music NFT Registry.

Public entrypoints:
- :class:`music_nft_registry.registry.MusicNftRegistry`
- :class:`music_nft_registry.registry.RegistryConfig`

The registry issues, transfers and burns music tokens, manages their royalties and
editions, and freezes their metadata. Mint fees settle through a pluggable ledger
(in memory, or ALGO payments through an AlgoKit `AlgorandClient`).
"""

from __future__ import annotations

from . import constants
from .errors import (
    AlreadyBurnedError,
    AlreadySetError,
    AuthorityNotSetError,
    ErrorCode,
    InvalidAuthorityError,
    InvalidDescriptionError,
    InvalidEditionLimitError,
    InvalidFeeError,
    InvalidFileHashError,
    InvalidMaxError,
    InvalidMintFeeError,
    InvalidRoyaltyRateError,
    InvalidRoyaltyRecipientError,
    InvalidTitleError,
    InvalidTokenIdError,
    InvalidUpdateError,
    MaxEditionReachedError,
    MaxTokensExceededError,
    MetadataEncodingError,
    MetadataFrozenError,
    MusicNftRegistryError,
    NoTokenError,
    NotAuthorizedError,
    NotOwnerError,
    error_for_code,
)
from .events import EventLog, EventSink
from .hashing import compute_file_hash
from .ledger import AlgorandPaymentLedger, InMemoryLedger, Ledger, LedgerTransfer
from .models import (
    Identity,
    OwnerRecord,
    OwnerState,
    RegistryEvent,
    RegistryParameters,
    RoyaltyRecord,
    TokenMetadata,
    decode_token_metadata,
    encode_token_metadata,
)
from .registry import MusicNftRegistry, RegistryConfig
from .rounds import AlgodRoundSource, HeightSource, ManualHeight
from .validation import is_valid_identity

__all__ = [
    # Facade
    "MusicNftRegistry",
    "RegistryConfig",
    # Collaborators
    "AlgodRoundSource",
    "AlgorandPaymentLedger",
    "EventLog",
    "EventSink",
    "HeightSource",
    "InMemoryLedger",
    "Ledger",
    "LedgerTransfer",
    "ManualHeight",
    # Errors
    "ErrorCode",
    "error_for_code",
    "MusicNftRegistryError",
    "AlreadyBurnedError",
    "AlreadySetError",
    "AuthorityNotSetError",
    "InvalidAuthorityError",
    "InvalidDescriptionError",
    "InvalidEditionLimitError",
    "InvalidFeeError",
    "InvalidFileHashError",
    "InvalidMaxError",
    "InvalidMintFeeError",
    "InvalidRoyaltyRateError",
    "InvalidRoyaltyRecipientError",
    "InvalidTitleError",
    "InvalidTokenIdError",
    "InvalidUpdateError",
    "MaxEditionReachedError",
    "MaxTokensExceededError",
    "MetadataEncodingError",
    "MetadataFrozenError",
    "NoTokenError",
    "NotAuthorizedError",
    "NotOwnerError",
    # Models
    "Identity",
    "OwnerRecord",
    "OwnerState",
    "RegistryEvent",
    "RegistryParameters",
    "RoyaltyRecord",
    "TokenMetadata",
    "decode_token_metadata",
    "encode_token_metadata",
    # Hashing
    "compute_file_hash",
    # Validation
    "is_valid_identity",
    # Constants
    "constants",
]
