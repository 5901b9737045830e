import dataclasses

import pytest

from uscf_roster.core.models import (
    EnrichedPlayer,
    IdentifierSet,
    PlayerEntry,
    RatingSnapshot,
)


class TestRatingSnapshot:
    def test_defaults_to_unrated(self):
        snapshot = RatingSnapshot()
        assert list(snapshot) == ["R", "Q", "B", "OR", "OQ", "OB"]
        assert snapshot.is_unrated()

    def test_values_stored_as_strings(self):
        snapshot = RatingSnapshot({"R": 1500})
        assert snapshot["R"] == "1500"
        assert not snapshot.is_unrated()

    def test_unknown_category_rejected(self):
        with pytest.raises(KeyError):
            RatingSnapshot({"CORR": "1700"})
        snapshot = RatingSnapshot()
        with pytest.raises(KeyError):
            snapshot.update(X="1")


class TestIdentifierSet:
    def test_candidates_never_overlap_trusted(self):
        ids = IdentifierSet(
            trusted=frozenset({"10123456"}),
            candidate=frozenset({"10123456", "30123456"}),
        )
        assert ids.candidate == frozenset({"30123456"})

    def test_merged(self):
        ids = IdentifierSet(trusted=frozenset({"10123456"}), candidate=frozenset({"30123456"}))
        assert ids.merged({"30123456"}) == {"10123456", "30123456"}
        assert ids.merged(set()) == {"10123456"}


class TestEnrichedPlayer:
    def test_from_entry_fills_defaults(self):
        player = EnrichedPlayer.from_entry(
            PlayerEntry(identifier="12345678", name="A, B"), {"R": "1200"}
        )
        assert player.ratings["R"] == "1200"
        assert player.ratings["OB"] == "Unrated"

    def test_immutable(self):
        snapshot = RatingSnapshot({"R": "1200"})
        player = EnrichedPlayer(identifier="12345678", name="A, B", ratings=snapshot)
        snapshot["R"] = "9999"
        assert player.ratings["R"] == "1200"
        with pytest.raises(TypeError):
            player.ratings["R"] = "1300"  # type: ignore[index]
        with pytest.raises(dataclasses.FrozenInstanceError):
            player.name = "C"  # type: ignore[misc]
