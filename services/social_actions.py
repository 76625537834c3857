"""
Social Actions Module

This module composes the like, comment, save and share widgets into the single
action row shown under a post or recipe.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from data.models import InteractableItem
from services.comment_service import CommentThread
from services.protocols import Clipboard, CommunityApi, NativeShare, Notifier, UrlOpener
from services.share_service import ShareAction
from services.toggle_service import LikeToggle, SaveToggle


@dataclass
class SocialActionsView:
    """Snapshot of the action row."""
    liked: bool
    likes: int
    saved: bool
    comment_label: Optional[str]
    share_url: str


class SocialActions:
    """Like, comment, save and share controls for one content item."""

    def __init__(self, item: InteractableItem, api: CommunityApi, notifier: Notifier,
                 title: str, description: str = "",
                 initial_likes: int = 0, initial_liked: bool = False,
                 initial_saved: bool = False, initial_comments: int = 0,
                 show_comments: bool = True,
                 on_like: Optional[Callable[[bool, int], None]] = None,
                 on_save: Optional[Callable[[bool], None]] = None,
                 origin: Optional[str] = None,
                 native_share: Optional[NativeShare] = None,
                 clipboard: Optional[Clipboard] = None,
                 opener: Optional[UrlOpener] = None):
        self.item = item
        self.like = LikeToggle(item, api, initial_likes=initial_likes,
                               initial_liked=initial_liked, on_like=on_like)
        self.comments: Optional[CommentThread] = None
        if show_comments:
            self.comments = CommentThread(item, api, notifier, initial_comment_count=initial_comments)
        self.save = SaveToggle(item, api, initial_saved=initial_saved, on_save=on_save)
        self.share = ShareAction(item, title, description, origin=origin,
                                 native_share=native_share, clipboard=clipboard, opener=opener)

    def view(self) -> SocialActionsView:
        return SocialActionsView(
            liked=self.like.liked,
            likes=self.like.count,
            saved=self.save.saved,
            comment_label=self.comments.count_label if self.comments else None,
            share_url=self.share.share_url,
        )
