"""
Community API Client

This module handles all communication with the community REST API.
It wraps a requests Session carrying the acting user's header, joins
paths onto the configured base URL, and converts transport failures and
unsuccessful responses into the application's ApiError hierarchy.
"""

from typing import Any, Dict, List, Optional

import requests
from requests import Session

from config import settings
from data.models import ActingUser, Comment, InteractableItem, Recipe, SuccessStory
from utils.exceptions import ApiRequestError, ApiResponseError
from utils.logger import get_logger

logger = get_logger(__name__)


class CommunityApiClient:
    """HTTP client for the community, success-story and health endpoints."""

    def __init__(self, base_url: Optional[str] = None, acting_user: Optional[ActingUser] = None,
                 timeout: Optional[float] = None, session: Optional[Session] = None):
        """
        Initialize the client.

        Args:
            base_url: API root such as https://example.com (defaults to settings.API_BASE_URL)
            acting_user: Identity sent with every request (defaults to settings.ACTING_USER_ID)
            timeout: Seconds per request (defaults to settings.REQUEST_TIMEOUT)
            session: Pre-built requests Session, mainly for tests
        """
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.acting_user = acting_user or ActingUser(settings.ACTING_USER_ID)
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.session: Session = session or requests.Session()
        self.session.headers.update(self.acting_user.headers(settings.USER_ID_HEADER))

    # --- helpers ---
    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, json_payload: Optional[Dict[str, Any]] = None,
                 params: Optional[Dict[str, Any]] = None,
                 default_error: str = "Request failed") -> Dict[str, Any]:
        """
        Send a request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: Path below the base URL
            json_payload: JSON body (optional)
            params: Query parameters (optional)
            default_error: Message used when the server gives no error text

        Returns:
            Dict[str, Any]: The decoded body ({} when the body is empty or not JSON)

        Raises:
            ApiRequestError: If no response was received
            ApiResponseError: If the status is not 2xx or the body reports success: false
        """
        url = self._url(path)
        logger.debug(f"{method} {url}")

        try:
            resp = self.session.request(
                method, url, json=json_payload, params=params, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise ApiRequestError(f"{method} {path} failed: {e}") from e

        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {"data": body}

        if not resp.ok:
            raise ApiResponseError(body.get("error") or default_error, status_code=resp.status_code)
        if body.get("success") is False:
            raise ApiResponseError(body.get("error") or default_error, status_code=resp.status_code)

        return body

    # --- social toggles ---
    def set_liked(self, item: InteractableItem, liked: bool) -> None:
        self._request("POST", f"{item.api_path}/like", json_payload={"liked": liked},
                      default_error="Failed to update like")

    def set_saved(self, item: InteractableItem, saved: bool) -> None:
        self._request("POST", f"{item.api_path}/save", json_payload={"saved": saved},
                      default_error="Failed to update save")

    # --- comments ---
    def get_comments(self, item: InteractableItem) -> List[Comment]:
        body = self._request("GET", f"{item.api_path}/comments",
                             default_error="Failed to load comments")
        return [Comment.from_api(c) for c in body.get("data") or []]

    def add_comment(self, item: InteractableItem, content: str,
                    parent_comment_id: Optional[str] = None) -> Comment:
        payload: Dict[str, Any] = {"content": content}
        if parent_comment_id:
            payload["parentCommentId"] = parent_comment_id

        body = self._request("POST", f"{item.api_path}/comments", json_payload=payload,
                             default_error="Failed to add comment")
        if not body.get("data"):
            raise ApiResponseError("Failed to add comment")
        return Comment.from_api(body["data"])

    # --- recipes ---
    def get_recipe(self, recipe_id: str) -> Recipe:
        body = self._request("GET", f"/api/community/recipes/{recipe_id}",
                             default_error="Recipe not found")
        return Recipe.from_api(body.get("data") or {})

    def create_recipe(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        body = self._request("POST", "/api/community/recipes", json_payload=payload,
                             default_error="Failed to create recipe")
        return body.get("data") or {}

    def update_recipe(self, recipe_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        body = self._request("PATCH", f"/api/community/recipes/{recipe_id}", json_payload=payload,
                             default_error="Failed to update recipe")
        return body.get("data") or {}

    def delete_recipe(self, recipe_id: str) -> None:
        self._request("DELETE", f"/api/community/recipes/{recipe_id}",
                      default_error="Failed to delete recipe")

    # --- success stories ---
    def get_success_stories(self, params: Optional[Dict[str, str]] = None) -> List[SuccessStory]:
        body = self._request("GET", "/api/success-stories", params=params,
                             default_error="Failed to load success stories")
        return [SuccessStory.from_api(s) for s in body.get("data") or []]

    # --- health records ---
    def add_health_record(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        body = self._request("POST", "/api/health/records", json_payload=payload,
                             default_error="Failed to add health record")
        return body.get("data") or {}
