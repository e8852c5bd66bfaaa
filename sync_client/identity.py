import logging
from typing import Callable, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

IdentityListener = Callable[[Optional[str]], None]


class IdentityUser(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: str
    username: str
    email: str


class IdentityContext:
    """
    Holds the signed-in user (or None) and tells listeners whenever the user
    id changes. Listeners run synchronously, in subscription order.
    """

    def __init__(self, user: Optional[IdentityUser] = None):
        self._user = user
        self._listeners: List[IdentityListener] = []

    @property
    def user(self) -> Optional[IdentityUser]:
        return self._user

    @property
    def user_id(self) -> Optional[str]:
        return self._user.id if self._user else None

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def login(self, user: IdentityUser) -> None:
        self._set(user)

    def logout(self) -> None:
        self._set(None)

    def _set(self, user: Optional[IdentityUser]) -> None:
        previous = self.user_id
        self._user = user
        if self.user_id == previous:
            return
        logger.debug("identity changed %s -> %s", previous, self.user_id)
        for listener in list(self._listeners):
            listener(self.user_id)
