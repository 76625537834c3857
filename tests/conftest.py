"""
Shared Test Fixtures for the Community Client

This module provides common fixtures used across all test modules.
Fixtures include a mock community API, a recording notifier, log capture,
HTTP response mocks, and data factories for API payloads.
"""

import pytest
from unittest.mock import MagicMock
from typing import Optional, Dict, Any, List
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from data.api_client import CommunityApiClient
from data.models import Comment, InteractableItem, ItemType


# =============================================================================
# Item Fixtures
# =============================================================================

@pytest.fixture
def post_item():
    """A community post identity."""
    return InteractableItem("post-1", ItemType.POST)


@pytest.fixture
def recipe_item():
    """A community recipe identity."""
    return InteractableItem("recipe-42", ItemType.RECIPE)


# =============================================================================
# Collaborator Fixtures
# =============================================================================

@pytest.fixture
def mock_api():
    """
    Mock community API with the same interface as CommunityApiClient.

    Every method succeeds by default; set side_effect to simulate failures.

    Usage:
        def test_failure(mock_api):
            mock_api.set_liked.side_effect = ApiRequestError("offline")

    Returns:
        MagicMock: A mock constrained to CommunityApiClient's attributes.
    """
    api = MagicMock(spec=CommunityApiClient)
    api.set_liked.return_value = None
    api.set_saved.return_value = None
    api.get_comments.return_value = []
    api.get_success_stories.return_value = []
    api.delete_recipe.return_value = None
    return api


class RecordingNotifier:
    """Notifier that records alerts and answers confirmations from a preset value."""

    def __init__(self, confirm_answer: bool = True):
        self.alerts: List[str] = []
        self.confirmations: List[str] = []
        self.confirm_answer = confirm_answer

    def alert(self, message: str) -> None:
        self.alerts.append(message)

    def confirm(self, message: str) -> bool:
        self.confirmations.append(message)
        return self.confirm_answer


@pytest.fixture
def notifier():
    """
    Notifier that records every alert and confirmation.

    Usage:
        def test_alert(notifier):
            ...
            assert notifier.alerts == ["Failed to add comment"]

    Returns:
        RecordingNotifier: Confirms by default; set confirm_answer = False to decline.
    """
    return RecordingNotifier()


# =============================================================================
# Logging Fixtures
# =============================================================================

@pytest.fixture
def capture_logs():
    """
    Capture log messages for assertion in tests.

    Returns:
        list: A list that will contain captured log records.
    """
    import logging

    class LogCapture(logging.Handler):
        def __init__(self):
            super().__init__()
            self.records = []

        def emit(self, record):
            self.records.append(record)

    handler = LogCapture()
    handler.setLevel(logging.DEBUG)

    root_logger = logging.getLogger()
    original_level = root_logger.level
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(handler)

    # Application loggers propagate through "community", which may have been raised by main()
    app_logger = logging.getLogger("community")
    original_app_level = app_logger.level
    app_logger.setLevel(logging.DEBUG)

    yield handler.records

    app_logger.setLevel(original_app_level)
    root_logger.removeHandler(handler)
    root_logger.setLevel(original_level)


# =============================================================================
# HTTP Response Fixtures
# =============================================================================

@pytest.fixture
def mock_http_response():
    """
    Factory fixture for creating mock HTTP responses.

    Usage:
        def test_http_request(mock_http_response):
            response = mock_http_response(status_code=200, json_data={'success': True})

    Returns:
        callable: A factory function for creating mock responses.
    """
    def _create_response(
        status_code: int = 200,
        json_data: Optional[Any] = None,
        url: str = 'https://community.example.com'
    ) -> MagicMock:
        """
        Create a mock HTTP response object.

        Args:
            status_code: HTTP status code (default 200).
            json_data: Value to return from response.json(); None makes json() raise.
            url: The URL of the response.

        Returns:
            MagicMock: A mock response object mimicking requests.Response.
        """
        mock_response = MagicMock()
        mock_response.status_code = status_code
        mock_response.url = url
        mock_response.ok = 200 <= status_code < 300

        if json_data is not None:
            mock_response.json.return_value = json_data
        else:
            mock_response.json.side_effect = ValueError("No JSON data")

        return mock_response

    return _create_response


@pytest.fixture
def mock_session(mock_http_response):
    """
    Mock requests Session for CommunityApiClient tests.

    Returns:
        MagicMock: A session whose request() returns an empty successful response.
    """
    session = MagicMock()
    session.headers = {}
    session.request.return_value = mock_http_response(json_data={"success": True})
    return session


# =============================================================================
# Data Factories
# =============================================================================

@pytest.fixture
def comment_data_factory():
    """
    Factory fixture for comment payloads in the API's camelCase format.

    Usage:
        def test_comments(comment_data_factory):
            payload = comment_data_factory(id='c1', content='Great recipe!')

    Returns:
        callable: A factory function returning comment dictionaries.
    """
    def _create_comment(
        id: str = 'c1',
        user_id: str = 'user-7',
        user_name: str = 'Maya',
        content: str = 'My husky loves this!',
        likes: int = 0,
        liked: bool = False,
        created_at: str = '2024-05-01T12:00:00Z',
        replies: Optional[List[Dict[str, Any]]] = None,
    ) -> Dict[str, Any]:
        data = {
            'id': id,
            'userId': user_id,
            'userName': user_name,
            'content': content,
            'likes': likes,
            'liked': liked,
            'createdAt': created_at,
        }
        if replies is not None:
            data['replies'] = replies
        return data

    return _create_comment


@pytest.fixture
def comment_factory(comment_data_factory):
    """Factory fixture for parsed Comment objects."""
    def _create(**kwargs) -> Comment:
        return Comment.from_api(comment_data_factory(**kwargs))

    return _create


@pytest.fixture
def recipe_data_factory():
    """
    Factory fixture for recipe payloads in the API's camelCase format.

    Returns:
        callable: A factory function returning recipe dictionaries.
    """
    def _create_recipe(
        id: str = 'recipe-42',
        user_id: str = 'demo-user',
        title: str = 'Chicken & Sardine Bowl',
        **overrides
    ) -> Dict[str, Any]:
        data = {
            'id': id,
            'userId': user_id,
            'userName': 'Demo User',
            'title': title,
            'description': 'Balanced prey-model bowl for adult dogs.',
            'ingredients': ['500g chicken thighs', '2 sardines', '50g beef liver'],
            'instructions': ['Chop the chicken', 'Mix everything', 'Portion and freeze'],
            'photos': [],
            'prepTime': '15 min',
            'servings': '4',
            'likes': 12,
            'saves': 3,
            'liked': False,
            'saved': True,
            'comments': 2,
            'createdAt': '2024-04-20T08:30:00Z',
        }
        data.update(overrides)
        return data

    return _create_recipe


@pytest.fixture
def story_data_factory():
    """Factory fixture for success story payloads."""
    def _create_story(id: str = 's1', **overrides) -> Dict[str, Any]:
        data = {
            'id': id,
            'petName': 'Biscuit',
            'petType': 'dog',
            'breed': 'Beagle',
            'age': 6,
            'ownerName': 'Sam',
            'location': 'Leeds',
            'transformationType': 'weight-loss',
            'timeframe': '6-months',
            'storyText': 'Lost 4kg and got his spark back.',
            'healthImprovements': ['Weight', 'Energy'],
            'weightBefore': 18.5,
            'weightAfter': 14.5,
            'vetApproved': True,
            'dateSubmitted': '2024-03-01T00:00:00Z',
            'likes': 31,
            'comments': 4,
        }
        data.update(overrides)
        return data

    return _create_story
