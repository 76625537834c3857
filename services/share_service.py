"""
Share Service Module

This module builds share links for community posts and recipes and dispatches
them to a native share sheet or to the fallback targets: copy link,
Twitter/X intent, Facebook sharer and email. Nothing here talks to the
community API.
"""

import time
from typing import Callable, Optional

from config import settings
from data.models import InteractableItem
from services.protocols import Clipboard, NativeShare, UrlOpener
from utils.exceptions import ShareError
from utils.helpers import encode_uri_component
from utils.logger import get_logger

logger = get_logger(__name__)


class ShareAction:
    """Share button for a single content item."""

    def __init__(self, item: InteractableItem, title: str, description: str = "",
                 url: Optional[str] = None, origin: Optional[str] = None,
                 native_share: Optional[NativeShare] = None,
                 clipboard: Optional[Clipboard] = None,
                 opener: Optional[UrlOpener] = None,
                 clock: Callable[[], float] = time.monotonic):
        """
        Initialize the share action.

        Args:
            item: The item being shared
            title: Display title of the item
            description: Optional description used as share/email text
            url: Explicit share URL; derived from origin and item when omitted
            origin: Site origin (defaults to settings.SITE_ORIGIN)
            native_share: Platform share sheet, if the runtime has one
            clipboard: Clipboard used by copy_link
            opener: Opens external share targets
            clock: Monotonic time source for the copy confirmation
        """
        self.item = item
        self.title = title
        self.description = description or ""
        self.explicit_url = url
        self.origin = (origin or settings.SITE_ORIGIN).rstrip("/")
        self.native_share = native_share
        self.clipboard = clipboard
        self.opener = opener
        self.clock = clock

        self.menu_open = False
        self._copied_until: Optional[float] = None

    @property
    def share_url(self) -> str:
        return self.explicit_url or f"{self.origin}{self.item.page_path}"

    @property
    def share_text(self) -> str:
        return f"Check out this {self.item.type.value}: {self.title}"

    @property
    def dialog_title(self) -> str:
        return f"Share {self.item.type.value}"

    # --- dispatch ---
    def share(self) -> bool:
        """
        Share through the native share sheet, or open the fallback menu.

        Returns:
            bool: True if the native share sheet was used, False if the menu opened
        """
        if self.native_share is None:
            self.menu_open = True
            return False

        try:
            self.native_share.share(
                title=self.title,
                text=self.description or self.share_text,
                url=self.share_url,
            )
        except Exception as e:
            logger.info(f"Share cancelled or failed: {e}")
        return True

    def close_menu(self) -> None:
        self.menu_open = False

    # --- fallback targets ---
    def copy_link(self) -> bool:
        """
        Copy the share URL and start the confirmation period.

        Returns:
            bool: True if the clipboard accepted the link
        """
        if self.clipboard is None:
            logger.error("Failed to copy: no clipboard available")
            return False

        try:
            self.clipboard.copy(self.share_url)
        except Exception as e:
            logger.error(f"Failed to copy: {e}")
            return False

        self._copied_until = self.clock() + settings.COPY_CONFIRMATION_SECONDS
        return True

    @property
    def copied(self) -> bool:
        """True while the "Copied to clipboard!" confirmation should show."""
        return self._copied_until is not None and self.clock() < self._copied_until

    @property
    def copy_label(self) -> str:
        return "Copied to clipboard!" if self.copied else "Copy link"

    def twitter_url(self) -> str:
        return (f"{settings.TWITTER_INTENT_URL}?text={encode_uri_component(self.share_text)}"
                f"&url={encode_uri_component(self.share_url)}")

    def facebook_url(self) -> str:
        return f"{settings.FACEBOOK_SHARER_URL}?u={encode_uri_component(self.share_url)}"

    def email_url(self) -> str:
        body = f"{self.description}\n\n{self.share_url}"
        return f"mailto:?subject={encode_uri_component(self.title)}&body={encode_uri_component(body)}"

    def share_to_twitter(self) -> str:
        url = self.twitter_url()
        self._open(url, new_window=True)
        return url

    def share_to_facebook(self) -> str:
        url = self.facebook_url()
        self._open(url, new_window=True)
        return url

    def share_via_email(self) -> str:
        url = self.email_url()
        self._open(url, new_window=False)
        return url

    def _open(self, url: str, new_window: bool) -> None:
        if self.opener is None:
            logger.warning(f"No URL opener configured, share link: {url}")
            return
        try:
            self.opener.open(url, new_window=new_window)
        except ShareError as e:
            logger.warning(f"Could not open share target: {e}")
