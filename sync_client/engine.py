"""
Client-side progress sync engine.

Holds a working copy of the signed-in user's progress (last lesson, last
flashcard) for display, loads it once per identity and applies updates
optimistically:

    Empty --identity--> Loading --fetch done (ok or failed)--> Ready
      ^                                                          |
      +------------------------ logout --------------------------+

Each field has its own generation counter. A response only changes the
working copy if its generation is still the latest issued for that field and
it belongs to the current identity; anything else is stale and dropped.
Failed updates roll the field back to the last value known to be stored,
never to None unless nothing was stored.

Runs on one asyncio event loop; reads never await the network.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, Set

from sync_client.errors import LoadFailed, MutationFailed, NotAuthenticated
from sync_client.flashcard_ids import FlashcardRef, decode_flashcard_id, encode_flashcard_id, is_ambiguous
from sync_client.identity import IdentityContext
from sync_client.models import ProgressSnapshot
from sync_client.resume import resume_index

logger = logging.getLogger(__name__)

LESSON_FIELD = "last_lesson_id"
FLASHCARD_FIELD = "last_flashcard_id"
FIELDS = (LESSON_FIELD, FLASHCARD_FIELD)

ProgressListener = Callable[[ProgressSnapshot], None]


class SyncState(str, Enum):
    EMPTY = "empty"
    LOADING = "loading"
    READY = "ready"


class ProgressBackend(Protocol):
    async def fetch(self, user_id: str) -> ProgressSnapshot: ...

    async def update(
        self,
        user_id: str,
        *,
        lesson_id: Optional[str] = None,
        flashcard_id: Optional[str] = None,
    ) -> ProgressSnapshot: ...


@dataclass
class _FieldSlot:
    value: Optional[str] = None  # working copy
    confirmed: Optional[str] = None  # last value known to be stored
    generation: int = 0  # latest mutation issued
    confirmed_generation: int = 0  # mutation that produced `confirmed`; 0 = from load
    latest_settled: bool = True  # response for `generation` has arrived


class ProgressSyncEngine:
    def __init__(self, endpoint: ProgressBackend, identity: Optional[IdentityContext] = None):
        self._endpoint = endpoint
        self._state = SyncState.EMPTY
        self._user_id: Optional[str] = None
        # Bumped on every identity change; responses from older sessions are ignored.
        self._session = 0
        self._slots: Dict[str, _FieldSlot] = self._fresh_slots()
        self._load_task: Optional[asyncio.Task] = None
        # Strong references to in-flight updates until they finish.
        self._update_tasks: Set[asyncio.Task] = set()
        self._listeners: List[ProgressListener] = []
        self._unsubscribe: Optional[Callable[[], None]] = None
        if identity is not None:
            self._unsubscribe = identity.subscribe(self.on_identity_changed)
            self.on_identity_changed(identity.user_id)

    # ----- reads (synchronous) -----

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def user_id(self) -> Optional[str]:
        return self._user_id

    @property
    def is_loading(self) -> bool:
        return self._state is SyncState.LOADING

    @property
    def is_mutating(self) -> bool:
        return any(not slot.latest_settled for slot in self._slots.values())

    @property
    def pending_updates(self) -> int:
        """Update requests still in flight, including superseded ones."""
        return len(self._update_tasks)

    @property
    def last_lesson_id(self) -> Optional[str]:
        return self._slots[LESSON_FIELD].value

    @property
    def last_flashcard_id(self) -> Optional[str]:
        return self._slots[FLASHCARD_FIELD].value

    @property
    def last_flashcard(self) -> Optional[FlashcardRef]:
        return decode_flashcard_id(self.last_flashcard_id)

    def snapshot(self) -> ProgressSnapshot:
        return ProgressSnapshot(
            user_id=self._user_id,
            last_lesson_id=self.last_lesson_id,
            last_flashcard_id=self.last_flashcard_id,
        )

    def resume_index(self, deck_id: str, cards: Sequence[Any]) -> int:
        """Where to open `deck_id`, based on the current last flashcard."""
        return resume_index(self.last_flashcard_id, deck_id, cards)

    def subscribe(self, listener: ProgressListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ----- identity / load -----

    def on_identity_changed(self, user_id: Optional[str]) -> None:
        if user_id == self._user_id:
            # Same identity: the loaded (or loading) copy stays as is.
            return
        self._session += 1
        self._user_id = user_id
        self._slots = self._fresh_slots()
        self._load_task = None
        if user_id is None:
            self._state = SyncState.EMPTY
            logger.debug("progress cleared on sign-out")
        else:
            self._state = SyncState.LOADING
            self._ensure_load_started()
        self._notify()

    async def load(self) -> ProgressSnapshot:
        """
        Wait for the current identity's progress. Fetches at most once per
        identity; later calls return the working copy.
        """
        task = self._ensure_load_started()
        if task is not None:
            await asyncio.shield(task)
        return self.snapshot()

    def _ensure_load_started(self) -> Optional[asyncio.Task]:
        if self._state is not SyncState.LOADING:
            return None
        if self._load_task is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                # No loop yet; the first load() call starts the fetch.
                return None
            self._load_task = loop.create_task(self._load(self._user_id, self._session))
        return self._load_task

    async def _load(self, user_id: str, session: int) -> None:
        try:
            remote = await self._endpoint.fetch(user_id)
        except LoadFailed as exc:
            logger.warning("progress load failed user_id=%s, starting empty: %s", user_id, exc)
            remote = ProgressSnapshot(user_id=user_id)
        except Exception:
            logger.exception("progress load crashed user_id=%s, starting empty", user_id)
            remote = ProgressSnapshot(user_id=user_id)

        if session != self._session:
            logger.debug("dropping progress load for previous identity user_id=%s", user_id)
            return

        for name, slot in self._slots.items():
            if slot.confirmed_generation:
                # An update issued while loading already reached the store.
                continue
            slot.confirmed = getattr(remote, name)
            if slot.latest_settled:
                slot.value = slot.confirmed
        self._state = SyncState.READY
        self._notify()

    # ----- mutations -----

    def update_last_lesson(self, lesson_id: str) -> "asyncio.Task[Optional[ProgressSnapshot]]":
        """
        Set the last lesson now and persist it in the background.

        The returned task resolves to the server's view on success, raises
        MutationFailed after rolling back, or resolves to None when a newer
        update has superseded this one.
        """
        self._require_identity()
        return self._mutate(LESSON_FIELD, lesson_id)

    def update_last_flashcard(self, card_id: str, deck_id: str) -> "asyncio.Task[Optional[ProgressSnapshot]]":
        """Same protocol as update_last_lesson, storing "<deckId>-<cardId>"."""
        self._require_identity()
        if is_ambiguous(deck_id, card_id):
            logger.warning(
                "flashcard id deck_id=%r card_id=%r is stored but cannot be resumed from", deck_id, card_id
            )
        return self._mutate(FLASHCARD_FIELD, encode_flashcard_id(deck_id, card_id))

    def _require_identity(self) -> None:
        if self._user_id is None:
            raise NotAuthenticated("User must be logged in to save progress")

    def _mutate(self, field: str, value: str) -> "asyncio.Task[Optional[ProgressSnapshot]]":
        loop = asyncio.get_running_loop()
        self._ensure_load_started()
        slot = self._slots[field]
        slot.generation += 1
        slot.latest_settled = False
        slot.value = value
        self._notify()
        task = loop.create_task(self._send(field, value, slot.generation, self._user_id, self._session))
        self._update_tasks.add(task)
        task.add_done_callback(self._update_done)
        return task

    def _update_done(self, task: asyncio.Task) -> None:
        self._update_tasks.discard(task)
        # Callers may drop the task; the failure is already logged and rolled back.
        if not task.cancelled():
            task.exception()

    async def _send(
        self, field: str, value: str, generation: int, user_id: str, session: int
    ) -> Optional[ProgressSnapshot]:
        kwargs = {"lesson_id": value} if field == LESSON_FIELD else {"flashcard_id": value}
        try:
            result = await self._endpoint.update(user_id, **kwargs)
        except Exception as exc:
            if isinstance(exc, MutationFailed):
                failure = exc
            else:
                logger.exception("progress update crashed field=%s user_id=%s", field, user_id)
                failure = MutationFailed(f"progress update failed: {exc!r}")
            if not self._roll_back(field, generation, session):
                return None
            logger.warning(
                "progress update failed, rolled back field=%s user_id=%s value=%s: %s",
                field, user_id, self._slots[field].value, failure,
            )
            self._notify()
            if failure is exc:
                raise
            raise failure from exc

        slot = self._slot_for(field, session)
        if slot is None:
            return result
        if generation > slot.confirmed_generation:
            slot.confirmed = value
            slot.confirmed_generation = generation
        if generation == slot.generation:
            slot.latest_settled = True
        elif slot.latest_settled:
            # The newest update already failed; show what is now stored.
            slot.value = slot.confirmed
            self._notify()
        return result

    def _roll_back(self, field: str, generation: int, session: int) -> bool:
        """Restore the confirmed value if `generation` is still the latest. False when stale."""
        slot = self._slot_for(field, session)
        if slot is None or generation != slot.generation:
            logger.debug("dropping stale failure field=%s generation=%s", field, generation)
            return False
        slot.latest_settled = True
        slot.value = slot.confirmed
        return True

    def _slot_for(self, field: str, session: int) -> Optional[_FieldSlot]:
        if session != self._session:
            return None
        return self._slots[field]

    # ----- misc -----

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    @staticmethod
    def _fresh_slots() -> Dict[str, _FieldSlot]:
        return {name: _FieldSlot() for name in FIELDS}
