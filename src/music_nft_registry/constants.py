"""Music NFT Registry constants."""

from typing import Final

# ---------------------------------------------------------------------------
# Token metadata bounds
# ---------------------------------------------------------------------------
MIN_TITLE_LENGTH: Final[int] = 1
MAX_TITLE_LENGTH: Final[int] = 100
MAX_DESCRIPTION_LENGTH: Final[int] = 256

FILE_HASH_SIZE: Final[int] = 32  # SHA-256 digest

MIN_EDITION_LIMIT: Final[int] = 1
MAX_EDITION_LIMIT: Final[int] = 1000
FIRST_EDITION_COUNT: Final[int] = 1


# ---------------------------------------------------------------------------
# Royalties
# ---------------------------------------------------------------------------
MIN_ROYALTY_RATE: Final[int] = 0
MAX_ROYALTY_RATE: Final[int] = 20  # percent


# ---------------------------------------------------------------------------
# Registry defaults
# ---------------------------------------------------------------------------
DEFAULT_MAX_TOKENS: Final[int] = 10_000
DEFAULT_MINT_FEE: Final[int] = 500  # microALGO


# ---------------------------------------------------------------------------
# Environment variables
# ---------------------------------------------------------------------------
ENV_MAX_TOKENS: Final[str] = "MUSIC_NFT_MAX_TOKENS"
ENV_MINT_FEE: Final[str] = "MUSIC_NFT_MINT_FEE"
ENV_VALIDATE_ADDRESSES: Final[str] = "MUSIC_NFT_VALIDATE_ADDRESSES"


# ---------------------------------------------------------------------------
# Event names
# ---------------------------------------------------------------------------
EVENT_MINTED: Final[str] = "minted"
EVENT_TRANSFERRED: Final[str] = "transferred"
EVENT_BURNED: Final[str] = "burned"
EVENT_ROYALTY_UPDATED: Final[str] = "royalty_updated"
EVENT_METADATA_FROZEN: Final[str] = "metadata_frozen"
EVENT_EDITION_MINTED: Final[str] = "edition_minted"
