"""
Service Protocol Definitions

This module defines typing.Protocol interfaces for the collaborators used by the
interaction widgets. These protocols enable loose coupling, dependency injection,
and easier testing.

Protocols defined:
- CommunityApi: Interface for the community REST API
- Notifier: Blocking user-facing alerts and confirmations
- Clipboard: Writing text to the system clipboard
- NativeShare: A platform share sheet
- UrlOpener: Opening external links
"""

from typing import Protocol, Optional, List, Dict, Any

from data.models import Comment, InteractableItem, Recipe, SuccessStory


class CommunityApi(Protocol):
    """Protocol defining the interface for the community REST API.

    Implementations raise ApiError subclasses on failure.
    """

    def set_liked(self, item: InteractableItem, liked: bool) -> None:
        """Persist the liked flag for an item.

        Args:
            item: The post, recipe or comment being liked.
            liked: The new value.
        """
        ...

    def set_saved(self, item: InteractableItem, saved: bool) -> None:
        """Persist the saved flag for an item."""
        ...

    def get_comments(self, item: InteractableItem) -> List[Comment]:
        """Fetch the full comment list for an item."""
        ...

    def add_comment(
        self,
        item: InteractableItem,
        content: str,
        parent_comment_id: Optional[str] = None
    ) -> Comment:
        """Create a comment and return the server's authoritative copy.

        Args:
            item: The post or recipe being commented on.
            content: Trimmed comment text.
            parent_comment_id: Id of the comment being replied to, if any.

        Returns:
            The created comment.
        """
        ...

    def get_recipe(self, recipe_id: str) -> Recipe:
        """Fetch a single recipe."""
        ...

    def create_recipe(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create a recipe."""
        ...

    def update_recipe(self, recipe_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Update a recipe owned by the acting user."""
        ...

    def delete_recipe(self, recipe_id: str) -> None:
        """Delete a recipe owned by the acting user."""
        ...

    def get_success_stories(self, params: Optional[Dict[str, str]] = None) -> List[SuccessStory]:
        """Fetch success stories matching the query parameters."""
        ...

    def add_health_record(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create a health record for a pet."""
        ...


class Notifier(Protocol):
    """Protocol for blocking user-facing messages."""

    def alert(self, message: str) -> None:
        """Show a message the user must acknowledge."""
        ...

    def confirm(self, message: str) -> bool:
        """Ask a yes/no question; True means proceed."""
        ...


class Clipboard(Protocol):
    def copy(self, text: str) -> None:
        ...


class NativeShare(Protocol):
    """A platform share sheet. Raises if the user cancels or sharing fails."""

    def share(self, title: str, text: str, url: str) -> None:
        ...


class UrlOpener(Protocol):
    def open(self, url: str, new_window: bool = True) -> None:
        ...
