"""
Process-wide store container.

``init_stores`` is called once by the app factory; the result lives on
``app.state.stores`` for the lifetime of the process and is cleared on
shutdown.  There is no implicit reset in between.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from database.models import TodoRecord, UserRecord
from database.store import InMemoryStore, KeyValueStore

logger = logging.getLogger(__name__)


@dataclass
class Stores:
    # users are keyed by email (the login key); todos by todo id
    users: KeyValueStore[UserRecord] = field(default_factory=InMemoryStore)
    todos: KeyValueStore[TodoRecord] = field(default_factory=InMemoryStore)

    def close(self) -> None:
        logger.info(
            "Releasing stores (%d users, %d todos)", len(self.users), len(self.todos)
        )
        self.users.clear()
        self.todos.clear()


def init_stores() -> Stores:
    stores = Stores()
    logger.info("In-memory stores initialised")
    return stores
