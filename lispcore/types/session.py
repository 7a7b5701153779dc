from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Callable

from lispcore.types.environment import Environment


@dataclass(eq=False)
class Session:
    """One isolated interpreter state: an id, its own Environment and its own lock.

    `closed` is only flipped while holding `lock`; anything that acquires the
    lock must check it before touching `env`.
    """

    id: str
    env: Environment = field(default_factory=Environment)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    created_at: float = field(default_factory=time.monotonic)
    last_access: float = 0.0
    closed: bool = False

    def __post_init__(self):
        if not self.last_access:
            self.last_access = self.created_at

    def touch(self, clock: Callable[[], float] = time.monotonic) -> None:
        self.last_access = clock()

    def idle_for(self, now: float) -> float:
        return now - self.last_access
