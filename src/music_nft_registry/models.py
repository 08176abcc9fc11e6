from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, replace

from . import constants as const
from .errors import MetadataEncodingError
from .hashing import file_hash_from_hex, file_hash_hex
from .validation import decode_metadata_json, encode_metadata_json

# Identities are opaque principal strings (Algorand addresses in production).
Identity = str


class OwnerState(enum.Enum):
    NEVER_MINTED = "never_minted"
    BURNED = "burned"
    OWNED = "owned"


@dataclass(frozen=True, slots=True)
class OwnerRecord:
    """
    Three-way owner lookup result.

    `get_owner` collapses "never minted" and "burned" into `None`; this record keeps
    them apart.
    """

    state: OwnerState
    owner: Identity | None = None

    @staticmethod
    def never_minted() -> OwnerRecord:
        return OwnerRecord(OwnerState.NEVER_MINTED)

    @staticmethod
    def burned() -> OwnerRecord:
        return OwnerRecord(OwnerState.BURNED)

    @staticmethod
    def owned(owner: Identity) -> OwnerRecord:
        return OwnerRecord(OwnerState.OWNED, owner)

    @property
    def exists(self) -> bool:
        return self.state is not OwnerState.NEVER_MINTED

    @property
    def is_burned(self) -> bool:
        return self.state is OwnerState.BURNED


@dataclass(frozen=True, slots=True)
class RoyaltyRecord:
    rate: int
    recipient: Identity
    updated_at: int


_METADATA_JSON_KEYS = (
    "creator",
    "title",
    "description",
    "file_hash",
    "edition_limit",
    "edition_count",
    "created_at",
    "royalty_rate",
    "royalty_recipient",
    "active",
    "frozen",
)


@dataclass(frozen=True, slots=True)
class TokenMetadata:
    """
    Metadata recorded for a music token.

    Records are immutable; the registry replaces them wholesale on every change.
    """

    creator: Identity
    title: str
    description: str
    file_hash: bytes
    edition_limit: int
    edition_count: int
    created_at: int
    royalty_rate: int
    royalty_recipient: Identity
    active: bool = True
    frozen: bool = False

    @property
    def editions_remaining(self) -> int:
        return self.edition_limit - self.edition_count

    @property
    def can_mint_edition(self) -> bool:
        return self.edition_count < self.edition_limit

    def with_royalty(self, *, rate: int, recipient: Identity) -> TokenMetadata:
        return replace(self, royalty_rate=rate, royalty_recipient=recipient)

    def with_next_edition(self) -> TokenMetadata:
        return replace(self, edition_count=self.edition_count + 1)

    def burned(self) -> TokenMetadata:
        return replace(self, active=False)

    def frozen_copy(self) -> TokenMetadata:
        return replace(self, frozen=True)

    def to_json_dict(self) -> dict[str, object]:
        return {
            "creator": self.creator,
            "title": self.title,
            "description": self.description,
            "file_hash": file_hash_hex(self.file_hash),
            "edition_limit": self.edition_limit,
            "edition_count": self.edition_count,
            "created_at": self.created_at,
            "royalty_rate": self.royalty_rate,
            "royalty_recipient": self.royalty_recipient,
            "active": self.active,
            "frozen": self.frozen,
        }

    @staticmethod
    def from_json_dict(obj: Mapping[str, object]) -> TokenMetadata:
        missing = [k for k in _METADATA_JSON_KEYS if k not in obj]
        if missing:
            raise MetadataEncodingError(
                f"Token metadata is missing fields: {', '.join(missing)}"
            )
        try:
            return TokenMetadata(
                creator=str(obj["creator"]),
                title=str(obj["title"]),
                description=str(obj["description"]),
                file_hash=file_hash_from_hex(str(obj["file_hash"])),
                edition_limit=int(obj["edition_limit"]),  # type: ignore[call-overload]
                edition_count=int(obj["edition_count"]),  # type: ignore[call-overload]
                created_at=int(obj["created_at"]),  # type: ignore[call-overload]
                royalty_rate=int(obj["royalty_rate"]),  # type: ignore[call-overload]
                royalty_recipient=str(obj["royalty_recipient"]),
                active=bool(obj["active"]),
                frozen=bool(obj["frozen"]),
            )
        except (TypeError, ValueError) as e:
            raise MetadataEncodingError(f"Invalid token metadata field: {e}") from e


def encode_token_metadata(metadata: TokenMetadata) -> bytes:
    """Encode token metadata as a compact UTF-8 JSON object for external indexers."""
    return encode_metadata_json(metadata.to_json_dict())


def decode_token_metadata(data: bytes) -> TokenMetadata:
    return TokenMetadata.from_json_dict(decode_metadata_json(data))


@dataclass(frozen=True, slots=True)
class RegistryEvent:
    """
    A named registry event.

    `token_id` is the token the event is about; for `edition_minted` it is the
    original token and `new_id` is the issued edition.
    """

    name: str
    token_id: int
    round: int
    to: Identity | None = None
    new_id: int | None = None


@dataclass(frozen=True, slots=True)
class RegistryParameters:
    max_title_length: int
    max_description_length: int
    file_hash_size: int
    max_edition_limit: int
    max_royalty_rate: int
    max_tokens: int
    mint_fee: int

    @staticmethod
    def defaults() -> RegistryParameters:
        return RegistryParameters(
            max_title_length=const.MAX_TITLE_LENGTH,
            max_description_length=const.MAX_DESCRIPTION_LENGTH,
            file_hash_size=const.FILE_HASH_SIZE,
            max_edition_limit=const.MAX_EDITION_LIMIT,
            max_royalty_rate=const.MAX_ROYALTY_RATE,
            max_tokens=const.DEFAULT_MAX_TOKENS,
            mint_fee=const.DEFAULT_MINT_FEE,
        )
