"""
Optimistic Toggle Module

This module implements the optimistic like/save toggles. A toggle flips its
local state before any network activity, tells the caller about the new value,
persists it through the community API, and restores the value captured at call
time if the request fails. Failures are logged, never raised and never retried.
"""

from typing import Any, Callable, Optional

from data.models import InteractableItem, ItemType, LikeState, SaveState, Settled, Pending, ToggleState
from services.protocols import CommunityApi
from utils.logger import get_logger

logger = get_logger(__name__)


class OptimisticToggle:
    """
    Abstract base for a boolean toggle with optimistic update and rollback.

    Not used directly: subclasses must implement _flip, _persist and _notify.
    """

    action = "toggle"

    def __init__(self, item: InteractableItem, api: CommunityApi, initial: Any,
                 on_change: Optional[Callable[..., None]] = None):
        self.item = item
        self.api = api
        self.on_change = on_change
        self.state: ToggleState = Settled(initial)

    @property
    def current(self) -> Any:
        """The value the user currently sees."""
        return self.state.value

    @property
    def is_pending(self) -> bool:
        return isinstance(self.state, Pending)

    def toggle(self) -> Any:
        """
        Flip the value, persist it, and roll back if persisting fails.

        Returns:
            The value shown once the request has resolved.
        """
        prior = self.current
        new_value = self._flip(prior)
        pending = Pending(new_value, prior)
        self.state = pending

        if self.on_change:
            self._notify(new_value)

        try:
            self._persist(new_value)
        except Exception as e:
            self.state = Settled(prior)
            logger.error(f"Error toggling {self.action} for {self.item.type.value} {self.item.id}: {e}")
            return self.current

        # A toggle made while this request was in flight owns the state now
        if self.state is pending:
            self.state = Settled(new_value)
        return self.current

    def _flip(self, value: Any) -> Any:
        raise NotImplementedError

    def _persist(self, value: Any) -> None:
        raise NotImplementedError

    def _notify(self, value: Any) -> None:
        raise NotImplementedError


class LikeToggle(OptimisticToggle):
    """Like button state for a post, recipe or comment."""

    action = "like"

    def __init__(self, item: InteractableItem, api: CommunityApi, initial_likes: int = 0,
                 initial_liked: bool = False,
                 on_like: Optional[Callable[[bool, int], None]] = None):
        super().__init__(item, api, LikeState(initial_liked, initial_likes), on_like)

    @property
    def liked(self) -> bool:
        return self.current.liked

    @property
    def count(self) -> int:
        return self.current.count

    def _flip(self, value: LikeState) -> LikeState:
        liked = not value.liked
        return LikeState(liked, value.count + 1 if liked else value.count - 1)

    def _persist(self, value: LikeState) -> None:
        self.api.set_liked(self.item, value.liked)

    def _notify(self, value: LikeState) -> None:
        self.on_change(value.liked, value.count)


class SaveToggle(OptimisticToggle):
    """Save (bookmark) button state for a post or recipe."""

    action = "save"

    def __init__(self, item: InteractableItem, api: CommunityApi, initial_saved: bool = False,
                 on_save: Optional[Callable[[bool], None]] = None):
        if item.type is ItemType.COMMENT:
            raise ValueError("Comments cannot be saved")
        super().__init__(item, api, SaveState(initial_saved), on_save)

    @property
    def saved(self) -> bool:
        return self.current.saved

    @property
    def label(self) -> str:
        return "Saved" if self.saved else "Save"

    def _flip(self, value: SaveState) -> SaveState:
        return SaveState(not value.saved)

    def _persist(self, value: SaveState) -> None:
        self.api.set_saved(self.item, value.saved)

    def _notify(self, value: SaveState) -> None:
        self.on_change(value.saved)
