"""
Success Story Service Module

This module backs the success-stories gallery: it holds the active filters,
re-fetches the stories whenever a filter changes, and tracks which stories the
user has liked during this session.
"""

from dataclasses import fields
from typing import List, Set

from config import settings
from data.models import StoryFilters, SuccessStory
from services.protocols import CommunityApi
from utils.logger import get_logger

logger = get_logger(__name__)

FILTER_NAMES = {f.name for f in fields(StoryFilters)}

TRANSFORMATION_LABELS = {
    'weight-loss': 'Weight Loss',
    'energy': 'Energy Boost',
    'coat-health': 'Coat Health',
    'digestive': 'Digestive Health',
    'allergies': 'Allergy Relief',
    'behavior': 'Behavior',
    'overall': 'Overall Health',
}


def transformation_label(transformation_type: str) -> str:
    return TRANSFORMATION_LABELS.get(transformation_type, transformation_type)


class SuccessStoryBrowser:
    """Filterable, sortable list of success stories."""

    def __init__(self, api: CommunityApi, filters: StoryFilters = None):
        self.api = api
        self.filters = filters or StoryFilters(sort_by=settings.DEFAULT_STORY_SORT)
        self.stories: List[SuccessStory] = []
        self.loading = False
        self.liked_stories: Set[str] = set()

    def refresh(self) -> List[SuccessStory]:
        """
        Fetch stories for the current filters.

        Returns:
            List[SuccessStory]: The stories, or an empty list if the fetch failed
        """
        self.loading = True
        try:
            self.stories = self.api.get_success_stories(self.filters.to_params())
            logger.info(f"Retrieved {len(self.stories)} success stories")
        except Exception as e:
            logger.error(f"Error fetching success stories: {e}")
            self.stories = []
        finally:
            self.loading = False
        return self.stories

    def set_filter(self, **changes: str) -> List[SuccessStory]:
        """
        Change one or more filters and re-fetch.

        Args:
            **changes: Any of pet_type, transformation_type, timeframe, sort_by

        Returns:
            List[SuccessStory]: The refreshed stories
        """
        for name, value in changes.items():
            if name not in FILTER_NAMES:
                raise ValueError(f"Unknown story filter: {name}")
            if name == "sort_by" and value not in settings.STORY_SORT_OPTIONS:
                raise ValueError(f"Unknown sort order: {value}")
            setattr(self.filters, name, value)
        return self.refresh()

    def toggle_like(self, story_id: str) -> bool:
        """Toggle the local like marker for a story; returns the new state."""
        if story_id in self.liked_stories:
            self.liked_stories.discard(story_id)
            return False
        self.liked_stories.add(story_id)
        return True

    def display_likes(self, story: SuccessStory) -> int:
        """Like count including the user's own like from this session."""
        return story.likes + (1 if story.id in self.liked_stories else 0)

    @property
    def empty_message(self) -> str:
        return "No stories found" if not self.loading and not self.stories else ""
