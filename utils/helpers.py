"""
Helper Utility Module

This module provides various helper functions used throughout the community client.
"""

import base64
import mimetypes
import os
from datetime import datetime, timezone
from typing import List, Optional, Union
from urllib.parse import quote


def encode_uri_component(value: str) -> str:
    """
    Percent-encode a value the way JavaScript's encodeURIComponent does.

    Args:
        value: The text to encode

    Returns:
        str: The encoded text
    """
    return quote(value, safe="!~*'()")


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp from the API.

    Args:
        value: An ISO string (a trailing 'Z' is accepted), a datetime, or None

    Returns:
        Optional[datetime]: The parsed timestamp, or None if missing or invalid
    """
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        return None


def format_time_ago(dt: Optional[datetime], now: Optional[datetime] = None) -> str:
    """
    Format a timestamp as a short relative time for comment headers.

    Args:
        dt: The timestamp to format
        now: Reference time (defaults to the current time)

    Returns:
        str: 'Just now', '3h ago', 'Yesterday', '4d ago' or a date
    """
    if dt is None:
        return ""

    if now is None:
        now = datetime.now(timezone.utc) if dt.tzinfo else datetime.now()
    elif (now.tzinfo is None) != (dt.tzinfo is None):
        # Compare naive timestamps as UTC
        if dt.tzinfo is None:
            now = now.astimezone(timezone.utc).replace(tzinfo=None)
        else:
            now = now.replace(tzinfo=timezone.utc)

    diff = now - dt
    diff_hours = int(diff.total_seconds() // 3600)
    diff_days = diff.days

    if diff_hours < 1:
        return "Just now"
    if diff_hours < 24:
        return f"{diff_hours}h ago"
    if diff_days == 1:
        return "Yesterday"
    if diff_days < 7:
        return f"{diff_days}d ago"
    return dt.strftime("%m/%d/%Y")


def split_lines(text: str) -> List[str]:
    """
    Split multi-line form text into its non-blank lines.

    Args:
        text: Text with one entry per line

    Returns:
        List[str]: The lines that contain something other than whitespace
    """
    if not text:
        return []
    return [line for line in text.split('\n') if line.strip()]


def pluralize(count: int, singular: str, plural: Optional[str] = None) -> str:
    """
    Render a count with the matching noun form.

    Args:
        count: The number to render
        singular: Noun used when count is exactly 1
        plural: Noun used otherwise (defaults to singular + 's')

    Returns:
        str: e.g. '1 comment', '3 comments'
    """
    noun = singular if count == 1 else (plural or f"{singular}s")
    return f"{count} {noun}"


def encode_photo_data_url(path: str) -> str:
    """
    Read an image file and encode it as a base64 data URL.

    Args:
        path: Path to the image file

    Returns:
        str: A 'data:<mime>;base64,...' URL

    Raises:
        ValueError: If the file is not an image
        OSError: If the file cannot be read
    """
    mime_type, _ = mimetypes.guess_type(path)
    if not mime_type or not mime_type.startswith("image/"):
        raise ValueError(f"Not an image file: {os.path.basename(path)}")

    with open(path, "rb") as f:
        encoded = base64.b64encode(f.read()).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def add_photos(photos: List[str], paths: List[str], max_photos: int = 5) -> List[str]:
    """
    Append encoded photos to an existing list, stopping at the limit.

    Args:
        photos: Photos already attached (data URLs or remote URLs)
        paths: Image files to add
        max_photos: Maximum photos allowed in total

    Returns:
        List[str]: A new list with the added photos
    """
    result = list(photos)
    for path in paths:
        if len(result) >= max_photos:
            break
        result.append(encode_photo_data_url(path))
    return result
