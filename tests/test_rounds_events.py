"""
Unit tests for music_nft_registry.rounds and music_nft_registry.events.

Tests cover:
- ManualHeight
- AlgodRoundSource
- EventLog ordering and filters
- Round stamping of registry records and events
"""

from unittest.mock import Mock

import pytest
from algosdk.v2client.algod import AlgodClient

from music_nft_registry import (
    AlgodRoundSource,
    EventLog,
    InMemoryLedger,
    ManualHeight,
    MusicNftRegistry,
    RegistryEvent,
    constants,
)
from tests.helpers.factories import mint_token


class TestManualHeight:
    def test_default(self) -> None:
        assert ManualHeight()() == 0

    def test_advance(self) -> None:
        height = ManualHeight(current=10)
        assert height.advance() == 11
        assert height.advance(4) == 15
        assert height() == 15

    def test_advance_negative(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            ManualHeight().advance(-1)


class TestAlgodRoundSource:
    def test_last_round(self) -> None:
        algod_mock = Mock(spec=AlgodClient)
        algod_mock.status.return_value = {"last-round": 4242, "time-since-last-round": 1}
        assert AlgodRoundSource(algod=algod_mock)() == 4242

    def test_unexpected_shape(self) -> None:
        algod_mock = Mock(spec=AlgodClient)
        algod_mock.status.return_value = {"round": 1}
        with pytest.raises(RuntimeError, match="Unexpected algod response"):
            AlgodRoundSource(algod=algod_mock)()

    def test_registry_stamps_algod_round(
        self, authority: str, creator: str, royalty_receiver: str
    ) -> None:
        algod_mock = Mock(spec=AlgodClient)
        algod_mock.status.return_value = {"last-round": 777}
        registry = MusicNftRegistry(
            ledger=InMemoryLedger(), height=AlgodRoundSource(algod=algod_mock)
        )
        registry.set_authority(authority)
        token_id = mint_token(
            registry, sender=creator, royalty_recipient=royalty_receiver
        )
        metadata = registry.get_metadata(token_id)
        assert metadata is not None
        assert metadata.created_at == 777


class TestEventLog:
    def test_append_order(self) -> None:
        log = EventLog()
        first = RegistryEvent(constants.EVENT_MINTED, 1, round=1)
        second = RegistryEvent(constants.EVENT_TRANSFERRED, 1, round=2, to="B")
        log.emit(first)
        log.emit(second)
        assert log.events == (first, second)
        assert list(log) == [first, second]
        assert log.last == second
        assert len(log) == 2

    def test_empty(self) -> None:
        log = EventLog()
        assert log.last is None
        assert log.events == ()

    def test_filters(self) -> None:
        log = EventLog()
        log.emit(RegistryEvent(constants.EVENT_MINTED, 1, round=1))
        log.emit(RegistryEvent(constants.EVENT_EDITION_MINTED, 1, round=2, new_id=2))
        log.emit(RegistryEvent(constants.EVENT_BURNED, 2, round=3))
        assert [e.round for e in log.named(constants.EVENT_BURNED)] == [3]
        assert [e.round for e in log.for_token(2)] == [2, 3]
        assert [e.round for e in log.for_token(1)] == [1, 2]

    def test_events_snapshot_is_immutable(self) -> None:
        log = EventLog()
        log.emit(RegistryEvent(constants.EVENT_MINTED, 1, round=1))
        snapshot = log.events
        log.emit(RegistryEvent(constants.EVENT_BURNED, 1, round=2))
        assert len(snapshot) == 1


def test_events_stamped_with_current_round(
    live_registry: MusicNftRegistry,
    event_log: EventLog,
    height: ManualHeight,
    creator: str,
    collector: str,
    royalty_receiver: str,
) -> None:
    token_id = mint_token(
        live_registry, sender=creator, royalty_recipient=royalty_receiver
    )
    height.advance(3)
    live_registry.transfer(sender=creator, token_id=token_id, recipient=collector)
    assert [e.round for e in event_log] == [100, 103]


def test_custom_event_sink(authority: str, creator: str, royalty_receiver: str) -> None:
    sink = Mock()
    registry = MusicNftRegistry(ledger=InMemoryLedger(), events=sink)
    registry.set_authority(authority)
    token_id = mint_token(registry, sender=creator, royalty_recipient=royalty_receiver)
    sink.emit.assert_called_once_with(
        RegistryEvent(constants.EVENT_MINTED, token_id, round=0)
    )
