"""
Navigation state carrier.

A bounded stack of frames, one per forward navigation. Each frame records
the path being left, the path being entered and an opaque context (list
filters, scroll anchor, selected tab). Going back from a path pops the
newest frame that entered it and hands its context back; with no such
frame the caller gets an empty context. The oldest frames fall off silently
once the stack is full.

Every navigation also bumps a screen epoch. Work started on a screen keeps
the token it saw; ``is_current`` tells a late response whether its screen
is still showing.
"""
import copy
import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from exam_builder.config import settings
from exam_builder.navigation.routes import page_to_route, PAGE_IDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NavigationFrame:
    from_path: str
    to_path: str
    context: Dict[str, Any] = field(default_factory=dict)


@dataclass
class BackResult:
    path: Optional[str]
    context: Dict[str, Any]
    restored: bool


class NavigationCarrier:
    def __init__(self, max_depth: int = None):
        self.max_depth = max_depth or settings.NAVIGATION_STACK_DEPTH
        self._frames = deque(maxlen=self.max_depth)
        self._epoch = 0
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._frames)

    @property
    def depth(self) -> int:
        return len(self._frames)

    def navigate(self, from_path: str, to: str, context: Optional[Dict[str, Any]] = None,
                 data: Optional[Dict[str, str]] = None) -> str:
        """Push a frame for leaving ``from_path`` and return the target path.

        ``to`` is either a path or a builder page id (with ``data`` for its
        route parameters).
        """
        to_path = page_to_route(to, data) if to in PAGE_IDS else to
        frame = NavigationFrame(from_path, to_path, copy.deepcopy(context or {}))
        with self._lock:
            if len(self._frames) == self.max_depth:
                logger.debug("Navigation stack full, evicting %s", self._frames[0].from_path)
            self._frames.append(frame)
            self._epoch += 1
        return to_path

    def back(self, current_path: str) -> BackResult:
        """Pop the newest frame that entered ``current_path``.

        Frames pushed after it belong to screens already left and are
        dropped with it.
        """
        with self._lock:
            self._epoch += 1
            for index in range(len(self._frames) - 1, -1, -1):
                frame = self._frames[index]
                if frame.to_path == current_path:
                    while len(self._frames) > index:
                        self._frames.pop()
                    return BackResult(frame.from_path, copy.deepcopy(frame.context), True)
        return BackResult(None, {}, False)

    def peek(self) -> Optional[NavigationFrame]:
        with self._lock:
            return self._frames[-1] if self._frames else None

    def clear(self):
        with self._lock:
            self._frames.clear()
            self._epoch += 1

    # ---------------------------
    # Screen tokens
    # ---------------------------

    def screen_token(self) -> int:
        return self._epoch

    def is_current(self, token: int) -> bool:
        return token == self._epoch

    def apply_if_current(self, token: int, apply: Callable[[], Any]) -> bool:
        """Run ``apply`` only if no navigation happened since ``token``."""
        if not self.is_current(token):
            logger.debug("Dropping late response for screen %s (now %s)", token, self._epoch)
            return False
        apply()
        return True


class CarrierRegistry:
    """One carrier per session key."""

    def __init__(self, max_depth: int = None):
        self.max_depth = max_depth
        self._carriers: Dict[Any, NavigationCarrier] = {}
        self._lock = threading.Lock()

    def for_session(self, key) -> NavigationCarrier:
        with self._lock:
            if key not in self._carriers:
                self._carriers[key] = NavigationCarrier(self.max_depth)
            return self._carriers[key]

    def discard(self, key):
        with self._lock:
            self._carriers.pop(key, None)

    def clear(self):
        with self._lock:
            self._carriers.clear()


# One carrier per signed-in user
registry = CarrierRegistry()
