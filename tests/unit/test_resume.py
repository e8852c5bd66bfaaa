"""Unit tests for resuming a deck at the last viewed flashcard."""
from types import SimpleNamespace

import pytest

from sync_client.resume import resume_index

DECK_3 = [{"id": "0005"}, {"id": "0006"}, {"id": "0007"}, {"id": "0008"}]


@pytest.mark.unit
class TestResumeIndex:
    def test_resumes_at_stored_card(self):
        assert resume_index("3-0007", "3", DECK_3) == 2

    def test_other_deck_opens_at_start(self):
        assert resume_index("3-0007", "5", DECK_3) == 0

    def test_removed_card_opens_at_start(self):
        assert resume_index("3-0099", "3", DECK_3) == 0

    def test_nothing_stored_opens_at_start(self):
        assert resume_index(None, "3", DECK_3) == 0

    def test_malformed_id_opens_at_start(self):
        assert resume_index("3-00-07", "3", DECK_3) == 0

    def test_empty_deck(self):
        assert resume_index("3-0007", "3", []) == 0

    def test_accepts_objects_with_id(self):
        cards = [SimpleNamespace(id="a"), SimpleNamespace(id="b")]
        assert resume_index("x-b", "x", cards) == 1
