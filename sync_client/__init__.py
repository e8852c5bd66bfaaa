"""
Client-side progress sync for the Lingua API.

Typical wiring:

    config = SyncClientConfig.from_env()
    http = httpx.AsyncClient(base_url=config.api_base, timeout=config.timeout_seconds)
    identity = IdentityContext()
    engine = ProgressSyncEngine(ProgressEndpoint(config, http), identity)
    auth = AuthApi(http, identity)

    await auth.login(email, password)     # engine starts loading progress
    await engine.load()
    engine.update_last_lesson("3")        # visible immediately, persisted in background
"""

from sync_client.api_client import AuthApi, ContentApi
from sync_client.config import SyncClientConfig
from sync_client.endpoint import ProgressEndpoint
from sync_client.engine import ProgressSyncEngine, SyncState
from sync_client.errors import (
    ApiError,
    LoadFailed,
    MutationFailed,
    NotAuthenticated,
    ProgressSyncError,
)
from sync_client.flashcard_ids import FlashcardRef, decode_flashcard_id, encode_flashcard_id
from sync_client.identity import IdentityContext, IdentityUser
from sync_client.models import ProgressSnapshot
from sync_client.resume import resume_index

__all__ = [
    "AuthApi",
    "ContentApi",
    "SyncClientConfig",
    "ProgressEndpoint",
    "ProgressSyncEngine",
    "SyncState",
    "ApiError",
    "LoadFailed",
    "MutationFailed",
    "NotAuthenticated",
    "ProgressSyncError",
    "FlashcardRef",
    "decode_flashcard_id",
    "encode_flashcard_id",
    "IdentityContext",
    "IdentityUser",
    "ProgressSnapshot",
    "resume_index",
]
