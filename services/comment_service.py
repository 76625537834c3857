"""
Comment Service Module

This module implements the comment thread attached to a post or recipe.
The thread loads its comments lazily on first expansion and keeps them for
its lifetime. New comments appear only after the server confirms them;
failures are reported through the blocking notifier.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from config import settings
from data.models import Comment, InteractableItem, ItemType
from services.protocols import CommunityApi, Notifier
from services.toggle_service import LikeToggle
from utils.helpers import format_time_ago, pluralize
from utils.exceptions import user_message
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class CommentEntry:
    """A rendered comment: the comment, its own like toggle, and its replies."""
    comment: Comment
    like: LikeToggle
    time_ago: str
    initial: str
    replies: List["CommentEntry"] = field(default_factory=list)


@dataclass
class CommentThreadView:
    """Everything a front end needs to draw the thread."""
    count_label: str
    expanded: bool
    loading: bool
    submitting: bool
    placeholder: Optional[str]
    entries: List[CommentEntry]


class CommentThread:
    """Lazily loaded comment list for one item."""

    def __init__(self, item: InteractableItem, api: CommunityApi, notifier: Notifier,
                 initial_comment_count: int = 0):
        if item.type is ItemType.COMMENT:
            raise ValueError("Comment threads belong to posts or recipes")
        self.item = item
        self.api = api
        self.notifier = notifier

        self.comments: List[Comment] = []
        self.comment_count = initial_comment_count
        self.expanded = False
        self.loaded = False
        self.loading = False
        self.submitting = False

        self._likes: Dict[str, LikeToggle] = {}

    # --- loading ---
    def toggle(self) -> None:
        """Expand or collapse the thread, loading comments on first expansion."""
        if not self.expanded and not self.loaded:
            self.load()
        self.expanded = not self.expanded

    def load(self) -> None:
        """Fetch the full comment list unless it has already been loaded."""
        if self.loaded:
            return

        self.loading = True
        try:
            comments = self.api.get_comments(self.item)
            self.comments = comments
            self.comment_count = len(comments)
            self.loaded = True
            logger.debug(f"Loaded {len(comments)} comments for {self.item.type.value} {self.item.id}")
        except Exception as e:
            logger.error(f"Error fetching comments: {e}")
        finally:
            self.loading = False

    # --- submission ---
    def submit(self, content: str, parent_comment_id: Optional[str] = None) -> Optional[Comment]:
        """
        Post a comment and add the server's copy to the thread.

        Args:
            content: Comment text; blank text is ignored
            parent_comment_id: Id of the top-level comment being replied to

        Returns:
            Optional[Comment]: The created comment, or None if nothing was added
        """
        text = (content or "").strip()
        if not text:
            return None

        self.submitting = True
        try:
            comment = self.api.add_comment(self.item, text, parent_comment_id)
        except Exception as e:
            logger.error(f"Error adding comment: {e}")
            self.notifier.alert(user_message(e, "Failed to add comment"))
            return None
        finally:
            self.submitting = False

        self._insert(comment, parent_comment_id)
        self.comment_count += 1
        return comment

    def _insert(self, comment: Comment, parent_comment_id: Optional[str]) -> None:
        if parent_comment_id:
            for parent in self.comments:
                if parent.id == parent_comment_id:
                    comment.replies = []
                    parent.replies.insert(0, comment)
                    return
        self.comments.insert(0, comment)

    # --- rendering ---
    def like_for(self, comment: Comment) -> LikeToggle:
        """Return the like toggle owned by a comment or reply."""
        toggle = self._likes.get(comment.id)
        if toggle is None:
            toggle = LikeToggle(
                InteractableItem(comment.id, ItemType.COMMENT),
                self.api,
                initial_likes=comment.likes,
                initial_liked=comment.liked,
            )
            self._likes[comment.id] = toggle
        return toggle

    @property
    def count_label(self) -> str:
        return pluralize(self.comment_count, "comment")

    def view(self, now: Optional[datetime] = None) -> CommentThreadView:
        placeholder = None
        if not self.loading and not self.comments:
            placeholder = settings.EMPTY_COMMENTS_PLACEHOLDER

        entries = []
        if self.expanded and not self.loading:
            entries = [self._entry(c, now, depth=0) for c in self.comments]

        return CommentThreadView(
            count_label=self.count_label,
            expanded=self.expanded,
            loading=self.loading,
            submitting=self.submitting,
            placeholder=placeholder if self.expanded else None,
            entries=entries,
        )

    def _entry(self, comment: Comment, now: Optional[datetime], depth: int) -> CommentEntry:
        replies = []
        if depth == 0:
            replies = [self._entry(r, now, depth=1) for r in comment.replies]
        return CommentEntry(
            comment=comment,
            like=self.like_for(comment),
            time_ago=format_time_ago(comment.created_at, now),
            initial=comment.user_name[:1].upper(),
            replies=replies,
        )
