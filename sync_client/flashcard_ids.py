"""
Composite flashcard ids: "<deckId>-<cardId>".

Deck and card ids are opaque, so they are joined as given. The hyphen is the
only separator: an id whose parts themselves contain a hyphen is stored but
cannot be split back, and decoding treats anything that does not split into
exactly two non-empty parts as "no resume point".
"""

from typing import NamedTuple, Optional

SEPARATOR = "-"


class FlashcardRef(NamedTuple):
    deck_id: str
    card_id: str


def encode_flashcard_id(deck_id: str, card_id: str) -> str:
    return f"{deck_id}{SEPARATOR}{card_id}"


def is_ambiguous(deck_id: str, card_id: str) -> bool:
    """True when the encoded id for this pair will not decode back to it."""
    return SEPARATOR in deck_id or SEPARATOR in card_id or not deck_id or not card_id


def decode_flashcard_id(flashcard_id: Optional[str]) -> Optional[FlashcardRef]:
    if not flashcard_id:
        return None
    parts = flashcard_id.split(SEPARATOR)
    if len(parts) != 2 or not all(parts):
        return None
    return FlashcardRef(deck_id=parts[0], card_id=parts[1])
