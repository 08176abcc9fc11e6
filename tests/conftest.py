import pytest

from music_nft_registry import (
    EventLog,
    InMemoryLedger,
    ManualHeight,
    MusicNftRegistry,
    RegistryConfig,
)

from .helpers.factories import mint_token, new_address


@pytest.fixture(scope="session")
def authority() -> str:
    return new_address()


@pytest.fixture(scope="session")
def creator() -> str:
    return new_address()


@pytest.fixture(scope="session")
def collector() -> str:
    return new_address()


@pytest.fixture(scope="session")
def royalty_receiver() -> str:
    return new_address()


@pytest.fixture(scope="session")
def outsider() -> str:
    return new_address()


@pytest.fixture(scope="function")
def ledger() -> InMemoryLedger:
    return InMemoryLedger()


@pytest.fixture(scope="function")
def height() -> ManualHeight:
    return ManualHeight(current=100)


@pytest.fixture(scope="function")
def event_log() -> EventLog:
    return EventLog()


@pytest.fixture(scope="function")
def registry(
    ledger: InMemoryLedger, height: ManualHeight, event_log: EventLog
) -> MusicNftRegistry:
    """A registry with no authority configured."""
    return MusicNftRegistry(
        ledger=ledger, config=RegistryConfig(), height=height, events=event_log
    )


@pytest.fixture(scope="function")
def live_registry(registry: MusicNftRegistry, authority: str) -> MusicNftRegistry:
    """A registry whose authority is set, ready to mint."""
    registry.set_authority(authority)
    return registry


@pytest.fixture(scope="function")
def minted_token(
    live_registry: MusicNftRegistry, creator: str, royalty_receiver: str
) -> int:
    return mint_token(live_registry, sender=creator, royalty_recipient=royalty_receiver)
