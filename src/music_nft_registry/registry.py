from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import NoReturn

from . import constants as const
from .errors import (
    AlreadyBurnedError,
    AlreadySetError,
    AuthorityNotSetError,
    InvalidAuthorityError,
    InvalidFeeError,
    InvalidMaxError,
    InvalidMintFeeError,
    InvalidRoyaltyRecipientError,
    InvalidUpdateError,
    MaxEditionReachedError,
    MaxTokensExceededError,
    MetadataFrozenError,
    MusicNftRegistryError,
    NoTokenError,
    NotAuthorizedError,
    NotOwnerError,
)
from .events import EventLog, EventSink
from .ledger import Ledger
from .models import (
    Identity,
    OwnerRecord,
    RegistryEvent,
    RegistryParameters,
    RoyaltyRecord,
    TokenMetadata,
)
from .rounds import HeightSource, ManualHeight
from .validation import (
    is_valid_identity,
    validate_description,
    validate_edition_limit,
    validate_file_hash,
    validate_royalty_rate,
    validate_title,
    validate_token_id,
)

logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def _reject(error: MusicNftRegistryError) -> NoReturn:
    code = error.code.name if error.code is not None else type(error).__name__
    logger.debug("Rejected: %s (%s)", code, error)
    raise error


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    """
    Initial parameters of a Music NFT Registry.

    `validate_addresses` requires authority, royalty recipient and transfer recipient
    identities to be well formed Algorand addresses.
    """

    max_tokens: int = const.DEFAULT_MAX_TOKENS
    mint_fee: int = const.DEFAULT_MINT_FEE
    validate_addresses: bool = False

    def __post_init__(self) -> None:
        if self.max_tokens < 0:
            raise ValueError("max_tokens must be non-negative")
        if self.mint_fee <= 0:
            raise ValueError("mint_fee must be > 0")

    @classmethod
    def from_environment(
        cls, environ: Mapping[str, str] | None = None
    ) -> RegistryConfig:
        """
        Build a config from `MUSIC_NFT_*` environment variables, falling back to defaults.
        """
        env = os.environ if environ is None else environ
        max_tokens = const.DEFAULT_MAX_TOKENS
        mint_fee = const.DEFAULT_MINT_FEE
        validate_addresses = False
        if const.ENV_MAX_TOKENS in env:
            max_tokens = _parse_int(const.ENV_MAX_TOKENS, env[const.ENV_MAX_TOKENS])
        if const.ENV_MINT_FEE in env:
            mint_fee = _parse_int(const.ENV_MINT_FEE, env[const.ENV_MINT_FEE])
        if const.ENV_VALIDATE_ADDRESSES in env:
            validate_addresses = _parse_bool(
                const.ENV_VALIDATE_ADDRESSES, env[const.ENV_VALIDATE_ADDRESSES]
            )
        return cls(
            max_tokens=max_tokens,
            mint_fee=mint_fee,
            validate_addresses=validate_addresses,
        )


class MusicNftRegistry:
    """
    Registry of music tokens and their editions.

    Every mutating method validates all of its preconditions before writing anything:
    a method either raises a `MusicNftRegistryError` and leaves the registry untouched,
    or applies all of its writes. Calls must be serialized by the host.
    """

    def __init__(
        self,
        *,
        ledger: Ledger,
        config: RegistryConfig | None = None,
        height: HeightSource | None = None,
        events: EventSink | None = None,
    ) -> None:
        self.config = config or RegistryConfig()
        self.ledger = ledger
        self.height: HeightSource = height if height is not None else ManualHeight()
        self.events: EventSink = events if events is not None else EventLog()

        self._last_token_id = 0
        self._max_tokens = self.config.max_tokens
        self._mint_fee = self.config.mint_fee
        self._authority: Identity | None = None

        # Absent key: never minted. `None` value: burned.
        self._owners: dict[int, Identity | None] = {}
        self._metadata: dict[int, TokenMetadata] = {}
        self._royalty_history: dict[int, RoyaltyRecord] = {}

    # ------------------------------------------------------------------
    # Authority bootstrap
    # ------------------------------------------------------------------

    @property
    def authority(self) -> Identity | None:
        return self._authority

    @property
    def mint_fee(self) -> int:
        return self._mint_fee

    @property
    def max_tokens(self) -> int:
        return self._max_tokens

    def set_authority(self, candidate: Identity) -> None:
        """
        Set the registry authority. The authority can be set exactly once.

        Raises:
            AlreadySetError: if the authority is already set.
            InvalidAuthorityError: if the candidate is empty or not a valid address.
        """
        if self._authority is not None:
            _reject(AlreadySetError("Authority is already set"))
        if not isinstance(candidate, str) or not candidate:
            _reject(InvalidAuthorityError("Authority must be a non-empty identity"))
        if self.config.validate_addresses and not is_valid_identity(candidate):
            _reject(InvalidAuthorityError(f"Invalid authority address: {candidate}"))

        self._authority = candidate
        logger.info("Registry authority set to %s", candidate)

    def _require_authority(self, sender: Identity) -> None:
        if self._authority is None or sender != self._authority:
            _reject(NotAuthorizedError("Unauthorized, must be the registry authority"))

    def set_mint_fee(self, *, sender: Identity, new_fee: int) -> None:
        self._require_authority(sender)
        if new_fee <= 0:
            _reject(InvalidFeeError("Mint fee must be > 0"))

        self._mint_fee = new_fee
        logger.info("Mint fee set to %d", new_fee)

    def set_max_tokens(self, *, sender: Identity, new_max: int) -> None:
        self._require_authority(sender)
        if new_max <= self._last_token_id:
            _reject(
                InvalidMaxError(
                    f"Max tokens must exceed the last token id ({self._last_token_id})"
                )
            )

        self._max_tokens = new_max
        logger.info("Max tokens set to %d", new_max)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _owner_record(self, token_id: int) -> OwnerRecord:
        if token_id not in self._owners:
            return OwnerRecord.never_minted()
        owner = self._owners[token_id]
        if owner is None:
            return OwnerRecord.burned()
        return OwnerRecord.owned(owner)

    def _require_owner(self, token_id: int, sender: Identity) -> None:
        record = self._owner_record(token_id)
        if record.owner is None:
            _reject(NoTokenError(f"Token {token_id} has no owner"))
        if sender != record.owner:
            _reject(NotOwnerError(f"Sender does not own token {token_id}"))

    def _require_metadata(self, token_id: int) -> TokenMetadata:
        metadata = self._metadata.get(token_id)
        if metadata is None:
            _reject(NoTokenError(f"Token {token_id} does not exist"))
        return metadata

    def _require_unfrozen(self, token_id: int, metadata: TokenMetadata) -> None:
        if metadata.frozen:
            _reject(MetadataFrozenError(f"Metadata of token {token_id} is frozen"))

    def _require_capacity(self) -> None:
        if self._last_token_id >= self._max_tokens:
            _reject(
                MaxTokensExceededError(f"Token cap of {self._max_tokens} reached")
            )

    def _require_royalty_recipient(self, recipient: Identity, sender: Identity) -> None:
        if recipient == sender:
            _reject(
                InvalidRoyaltyRecipientError(
                    "Royalty recipient must differ from the sender"
                )
            )
        if self.config.validate_addresses and not is_valid_identity(recipient):
            _reject(
                InvalidRoyaltyRecipientError(
                    f"Invalid royalty recipient address: {recipient}"
                )
            )

    def _emit(self, event: RegistryEvent) -> None:
        self.events.emit(event)

    # ------------------------------------------------------------------
    # Mint
    # ------------------------------------------------------------------

    def mint(
        self,
        *,
        sender: Identity,
        title: str,
        description: str,
        file_hash: bytes,
        edition_limit: int,
        royalty_rate: int,
        royalty_recipient: Identity,
    ) -> int:
        """
        Mint a new music token owned by `sender` and return its id.

        The mint fee is transferred from `sender` to the authority before any state is
        written; if the ledger reports a failed transfer nothing is minted.

        Raises:
            MaxTokensExceededError, InvalidTitleError, InvalidDescriptionError,
            InvalidFileHashError, InvalidEditionLimitError, InvalidRoyaltyRateError,
            InvalidRoyaltyRecipientError, AuthorityNotSetError: on validation
                failure, checked in this order.
            InvalidMintFeeError: if the ledger did not settle the mint fee.
        """
        # Preconditions
        self._require_capacity()
        validate_title(title)
        validate_description(description)
        validate_file_hash(file_hash)
        validate_edition_limit(edition_limit)
        validate_royalty_rate(royalty_rate)
        self._require_royalty_recipient(royalty_recipient, sender)
        authority = self._authority
        if authority is None:
            _reject(AuthorityNotSetError("Registry authority is not set"))

        now = self.height()

        # Fee settlement
        if not self.ledger.transfer(self._mint_fee, sender, authority):
            _reject(
                InvalidMintFeeError(
                    f"Mint fee of {self._mint_fee} could not be paid to the authority"
                )
            )

        # Commit
        new_id = self._last_token_id + 1
        self._owners[new_id] = sender
        self._metadata[new_id] = TokenMetadata(
            creator=sender,
            title=title,
            description=description,
            file_hash=bytes(file_hash),
            edition_limit=edition_limit,
            edition_count=const.FIRST_EDITION_COUNT,
            created_at=now,
            royalty_rate=royalty_rate,
            royalty_recipient=royalty_recipient,
            active=True,
            frozen=False,
        )
        self._royalty_history[new_id] = RoyaltyRecord(
            rate=royalty_rate, recipient=royalty_recipient, updated_at=now
        )
        self._last_token_id = new_id

        self._emit(RegistryEvent(const.EVENT_MINTED, new_id, round=now))
        logger.info("Minted token %d for %s", new_id, sender)
        return new_id

    # ------------------------------------------------------------------
    # Ownership
    # ------------------------------------------------------------------

    def transfer(self, *, sender: Identity, token_id: int, recipient: Identity) -> None:
        """
        Transfer a live token from its owner to `recipient`.
        """
        validate_token_id(token_id)
        self._require_owner(token_id, sender)
        # A None owner encodes a burned token.
        if not isinstance(recipient, str) or not recipient:
            _reject(InvalidUpdateError("Recipient must be a non-empty identity"))
        if self.config.validate_addresses and not is_valid_identity(recipient):
            _reject(InvalidUpdateError(f"Invalid recipient address: {recipient}"))

        now = self.height()
        self._owners[token_id] = recipient

        self._emit(
            RegistryEvent(const.EVENT_TRANSFERRED, token_id, round=now, to=recipient)
        )
        logger.info("Transferred token %d from %s to %s", token_id, sender, recipient)

    def burn(self, *, sender: Identity, token_id: int) -> None:
        """
        Burn a token. Its metadata is kept for historical reads with `active=False`.

        Raises:
            NoTokenError: if the token was never minted.
            AlreadyBurnedError: if the token is already burned.
            NotOwnerError: if the sender does not own the token.
        """
        validate_token_id(token_id)
        record = self._owner_record(token_id)
        if record.is_burned:
            _reject(AlreadyBurnedError(f"Token {token_id} is already burned"))
        self._require_owner(token_id, sender)
        metadata = self._metadata.get(token_id)
        if metadata is None or not metadata.active:
            _reject(AlreadyBurnedError(f"Token {token_id} is already burned"))

        now = self.height()
        self._owners[token_id] = None
        self._metadata[token_id] = metadata.burned()

        self._emit(RegistryEvent(const.EVENT_BURNED, token_id, round=now))
        logger.info("Burned token %d", token_id)

    # ------------------------------------------------------------------
    # Royalties & metadata
    # ------------------------------------------------------------------

    def update_royalty(
        self,
        *,
        sender: Identity,
        token_id: int,
        new_rate: int,
        new_recipient: Identity,
    ) -> None:
        """
        Replace the royalty rate and recipient of an unfrozen token, restricted to its owner.

        The royalty history keeps only the latest record.
        """
        validate_token_id(token_id)
        metadata = self._require_metadata(token_id)
        self._require_owner(token_id, sender)
        self._require_unfrozen(token_id, metadata)
        validate_royalty_rate(new_rate)
        self._require_royalty_recipient(new_recipient, sender)

        now = self.height()
        self._metadata[token_id] = metadata.with_royalty(
            rate=new_rate, recipient=new_recipient
        )
        self._royalty_history[token_id] = RoyaltyRecord(
            rate=new_rate, recipient=new_recipient, updated_at=now
        )

        self._emit(RegistryEvent(const.EVENT_ROYALTY_UPDATED, token_id, round=now))
        logger.info("Updated royalty of token %d to %d%%", token_id, new_rate)

    def freeze_metadata(self, *, sender: Identity, token_id: int) -> None:
        """
        Permanently freeze a token's metadata, restricted to its owner.

        Freezing is not idempotent: freezing a frozen token raises `MetadataFrozenError`.
        """
        validate_token_id(token_id)
        metadata = self._require_metadata(token_id)
        self._require_owner(token_id, sender)
        self._require_unfrozen(token_id, metadata)

        now = self.height()
        self._metadata[token_id] = metadata.frozen_copy()

        self._emit(RegistryEvent(const.EVENT_METADATA_FROZEN, token_id, round=now))
        logger.info("Froze metadata of token %d", token_id)

    # ------------------------------------------------------------------
    # Editions
    # ------------------------------------------------------------------

    def mint_edition(self, *, sender: Identity, token_id: int) -> int:
        """
        Issue a new edition of `token_id`, restricted to the token's original creator.

        The edition receives a copy of the original metadata as it stands before the
        original's edition count is incremented, so it can issue editions of its own.
        The copy keeps `frozen` and `active`, so an edition of a burned token is owned
        by the creator but reports `active=False` and cannot be burned.
        No mint fee is charged.

        Raises:
            NoTokenError: if the token was never minted.
            NotAuthorizedError: if the sender is not the token creator.
            MaxEditionReachedError: if all editions were already issued.
            MaxTokensExceededError: if the registry token cap is reached.
        """
        validate_token_id(token_id)
        metadata = self._require_metadata(token_id)
        if sender != metadata.creator:
            _reject(NotAuthorizedError("Only the token creator can mint editions"))
        if not metadata.can_mint_edition:
            _reject(
                MaxEditionReachedError(
                    f"Token {token_id} reached its edition limit of {metadata.edition_limit}"
                )
            )
        self._require_capacity()

        now = self.height()
        new_id = self._last_token_id + 1
        self._owners[new_id] = sender
        self._metadata[new_id] = metadata
        self._metadata[token_id] = metadata.with_next_edition()
        self._last_token_id = new_id

        self._emit(
            RegistryEvent(const.EVENT_EDITION_MINTED, token_id, round=now, new_id=new_id)
        )
        logger.info("Minted edition %d of token %d", new_id, token_id)
        return new_id

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_metadata(self, token_id: int) -> TokenMetadata | None:
        return self._metadata.get(token_id)

    def get_royalty_history(self, token_id: int) -> RoyaltyRecord | None:
        return self._royalty_history.get(token_id)

    def get_owner(self, token_id: int) -> Identity | None:
        """
        Return the current owner, or None if the token was never minted or is burned.

        Use `get_owner_state` to tell those two cases apart.
        """
        return self._owners.get(token_id)

    def get_owner_state(self, token_id: int) -> OwnerRecord:
        return self._owner_record(token_id)

    def get_last_token_id(self) -> int:
        return self._last_token_id

    def verify_ownership(self, token_id: int, owner: Identity) -> bool:
        current = self._owners.get(token_id)
        return current is not None and current == owner

    def is_metadata_frozen(self, token_id: int) -> bool:
        metadata = self._metadata.get(token_id)
        return metadata.frozen if metadata is not None else False

    def get_registry_parameters(self) -> RegistryParameters:
        return RegistryParameters(
            max_title_length=const.MAX_TITLE_LENGTH,
            max_description_length=const.MAX_DESCRIPTION_LENGTH,
            file_hash_size=const.FILE_HASH_SIZE,
            max_edition_limit=const.MAX_EDITION_LIMIT,
            max_royalty_rate=const.MAX_ROYALTY_RATE,
            max_tokens=self._max_tokens,
            mint_fee=self._mint_fee,
        )
