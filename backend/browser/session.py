"""
Session context for one client.

Everything the lifecycle manager reads or mutates lives here instead of in
module globals: storage, the in-memory token, the cookie string, the current
location, the last activity time and the refresh timer handle.
"""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from .storage import KeyValueStorage, MemoryStorage


@dataclass
class SessionContext:
    storage: KeyValueStorage = field(default_factory=MemoryStorage)
    memory_token: Optional[str] = None
    cookie_string: str = ""
    location: str = "/"
    visible: bool = True
    last_activity: float = field(default_factory=time.time)
    refresh_task: Optional[asyncio.Task] = None
    # Called with the new path whenever the client navigates
    on_navigate: Optional[Callable[[str], None]] = None

    def navigate(self, path: str) -> None:
        self.location = path
        if self.on_navigate is not None:
            self.on_navigate(path)
