from typing import Any, Optional, Sequence

from sync_client.flashcard_ids import decode_flashcard_id


def _card_id(card: Any) -> Optional[str]:
    if isinstance(card, dict):
        return card.get("id")
    return getattr(card, "id", None)


def resume_index(last_flashcard_id: Optional[str], deck_id: str, cards: Sequence[Any]) -> int:
    """
    Index to open `deck_id` at, given the user's last viewed flashcard.

    Falls back to 0 when there is no usable resume point: nothing stored, an
    unparseable id, a different deck, or a card no longer in the deck.
    Cards may be dicts or objects with an `id`.
    """
    ref = decode_flashcard_id(last_flashcard_id)
    if ref is None or ref.deck_id != deck_id:
        return 0
    for index, card in enumerate(cards):
        if _card_id(card) == ref.card_id:
            return index
    return 0
