"""
Recipe Service Module

This module handles creating, editing and deleting community recipes on
behalf of the acting user. Nothing is applied locally until the server
accepts the change, and every failure is shown to the user.
"""

from typing import Any, Dict, List, Optional

from config import settings
from data.models import ActingUser, Recipe, RecipeDraft
from services.protocols import CommunityApi, Notifier
from utils.helpers import add_photos, split_lines
from utils.exceptions import user_message
from utils.logger import get_logger

logger = get_logger(__name__)


def build_recipe_payload(draft: RecipeDraft) -> Dict[str, Any]:
    """
    Convert a recipe draft into the API's request body.

    Args:
        draft: The edited recipe form

    Returns:
        Dict[str, Any]: Body for the create and update endpoints
    """
    return {
        "title": draft.title,
        "description": draft.description,
        "ingredientsList": split_lines(draft.ingredients),
        "instructionsList": split_lines(draft.instructions),
        "servings": draft.servings,
        "prepTime": draft.prep_time,
        "photos": list(draft.photos),
    }


def attach_photos(draft: RecipeDraft, paths: List[str]) -> RecipeDraft:
    """Encode image files into the draft, up to settings.MAX_RECIPE_PHOTOS."""
    draft.photos = add_photos(draft.photos, paths, max_photos=settings.MAX_RECIPE_PHOTOS)
    return draft


class RecipeEditor:
    """Create/edit/delete controls for community recipes."""

    def __init__(self, api: CommunityApi, notifier: Notifier, acting_user: ActingUser,
                 recipe: Optional[Recipe] = None):
        self.api = api
        self.notifier = notifier
        self.acting_user = acting_user
        self.recipe = recipe
        self.busy = False

    @property
    def can_edit(self) -> bool:
        """Whether edit controls should be shown; the server enforces ownership."""
        return self.recipe is not None and self.recipe.user_id == self.acting_user.user_id

    def draft(self) -> RecipeDraft:
        if self.recipe is None:
            return RecipeDraft(title="")
        return RecipeDraft.from_recipe(self.recipe)

    def create(self, draft: RecipeDraft) -> Optional[Dict[str, Any]]:
        """
        Submit a new recipe.

        Returns:
            Optional[Dict[str, Any]]: The created recipe data, or None on failure
        """
        return self._send("create", lambda: self.api.create_recipe(build_recipe_payload(draft)))

    def update(self, draft: RecipeDraft) -> bool:
        """
        Save edits to the current recipe.

        Returns:
            bool: True if the server accepted the update
        """
        if self.recipe is None:
            raise ValueError("No recipe to update")
        result = self._send("update", lambda: self.api.update_recipe(self.recipe.id, build_recipe_payload(draft)))
        return result is not None

    def delete(self) -> bool:
        """
        Delete the current recipe after the user confirms.

        Returns:
            bool: True if the recipe was deleted
        """
        if self.recipe is None:
            raise ValueError("No recipe to delete")
        if not self.notifier.confirm(settings.DELETE_RECIPE_CONFIRMATION):
            logger.info(f"Deletion of recipe {self.recipe.id} cancelled")
            return False

        result = self._send("delete", lambda: self.api.delete_recipe(self.recipe.id) or {})
        return result is not None

    def _send(self, verb: str, call) -> Optional[Dict[str, Any]]:
        self.busy = True
        try:
            result = call()
            logger.info(f"Recipe {verb} succeeded")
            return result if result is not None else {}
        except Exception as e:
            logger.error(f"Error trying to {verb} recipe: {e}")
            self.notifier.alert(user_message(e, f"Failed to {verb} recipe"))
            return None
        finally:
            self.busy = False
