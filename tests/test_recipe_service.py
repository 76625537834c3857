"""
Tests for Recipe Service - Creating, Editing and Deleting Recipes
"""

import base64
import pytest
from unittest.mock import patch
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from data.models import ActingUser, Recipe, RecipeDraft
from services.recipe_service import RecipeEditor, attach_photos, build_recipe_payload
from utils.exceptions import ApiRequestError, ApiResponseError


@pytest.fixture
def recipe(recipe_data_factory):
    return Recipe.from_api(recipe_data_factory(user_id='owner-1'))


@pytest.fixture
def owner():
    return ActingUser('owner-1')


@pytest.fixture
def editor(mock_api, notifier, owner, recipe):
    return RecipeEditor(mock_api, notifier, owner, recipe)


# =============================================================================
# Payload Tests
# =============================================================================

class TestBuildRecipePayload:
    """Tests for converting drafts to API bodies."""

    def test_lines_are_split_and_blank_lines_dropped(self):
        draft = RecipeDraft(
            title="Duck Mix",
            ingredients="1kg duck necks\n\n200g hearts\n   \n",
            instructions="Portion\nFreeze",
            servings="6",
            prep_time="20 min",
        )

        payload = build_recipe_payload(draft)

        assert payload == {
            "title": "Duck Mix",
            "description": "",
            "ingredientsList": ["1kg duck necks", "200g hearts"],
            "instructionsList": ["Portion", "Freeze"],
            "servings": "6",
            "prepTime": "20 min",
            "photos": [],
        }

    def test_draft_from_recipe_round_trips_lines(self, recipe):
        payload = build_recipe_payload(RecipeDraft.from_recipe(recipe))

        assert payload["ingredientsList"] == recipe.ingredients
        assert payload["instructionsList"] == recipe.instructions


class TestAttachPhotos:
    """Tests for encoding photo files into a draft."""

    def test_photos_encoded_as_data_urls(self, tmp_path):
        photo = tmp_path / "bowl.png"
        photo.write_bytes(b"\x89PNG fake")
        draft = RecipeDraft(title="Bowl")

        attach_photos(draft, [str(photo)])

        expected = base64.b64encode(b"\x89PNG fake").decode("ascii")
        assert draft.photos == [f"data:image/png;base64,{expected}"]

    def test_photo_limit(self, tmp_path):
        paths = []
        for i in range(4):
            path = tmp_path / f"p{i}.jpg"
            path.write_bytes(b"jpg")
            paths.append(str(path))
        draft = RecipeDraft(title="Bowl", photos=["https://cdn.example/a.jpg", "https://cdn.example/b.jpg"])

        with patch('services.recipe_service.settings') as mock_settings:
            mock_settings.MAX_RECIPE_PHOTOS = 5
            attach_photos(draft, paths)

        assert len(draft.photos) == 5
        assert draft.photos[:2] == ["https://cdn.example/a.jpg", "https://cdn.example/b.jpg"]

    def test_non_image_rejected(self, tmp_path):
        notes = tmp_path / "notes.txt"
        notes.write_text("not a photo")

        with pytest.raises(ValueError):
            attach_photos(RecipeDraft(title="Bowl"), [str(notes)])


# =============================================================================
# RecipeEditor Tests
# =============================================================================

class TestRecipeEditor:
    """Tests for the owner-only edit controls."""

    def test_owner_can_edit(self, editor):
        assert editor.can_edit is True

    def test_other_user_cannot_edit(self, mock_api, notifier, recipe):
        editor = RecipeEditor(mock_api, notifier, ActingUser('someone-else'), recipe)

        assert editor.can_edit is False

    def test_new_recipe_cannot_be_edited(self, mock_api, notifier, owner):
        editor = RecipeEditor(mock_api, notifier, owner)

        assert editor.can_edit is False
        assert editor.draft() == RecipeDraft(title="")

    def test_create(self, mock_api, notifier, owner):
        mock_api.create_recipe.return_value = {"id": "r9"}
        editor = RecipeEditor(mock_api, notifier, owner)

        result = editor.create(RecipeDraft(title="Bowl", ingredients="a\nb"))

        assert result == {"id": "r9"}
        payload = mock_api.create_recipe.call_args.args[0]
        assert payload["ingredientsList"] == ["a", "b"]
        assert editor.busy is False

    def test_create_failure_alerts(self, mock_api, notifier, owner):
        mock_api.create_recipe.side_effect = ApiResponseError("Title is required", status_code=400)
        editor = RecipeEditor(mock_api, notifier, owner)

        assert editor.create(RecipeDraft(title="")) is None
        assert notifier.alerts == ["Title is required"]

    def test_update(self, editor, mock_api):
        mock_api.update_recipe.return_value = {"id": "recipe-42"}
        draft = editor.draft()
        draft.title = "Renamed"

        assert editor.update(draft) is True
        recipe_id, payload = mock_api.update_recipe.call_args.args
        assert recipe_id == "recipe-42"
        assert payload["title"] == "Renamed"

    def test_update_failure_uses_default_message(self, editor, mock_api, notifier):
        mock_api.update_recipe.side_effect = ApiResponseError("")

        assert editor.update(editor.draft()) is False
        assert notifier.alerts == ["Failed to update recipe"]

    def test_update_without_recipe(self, mock_api, notifier, owner):
        with pytest.raises(ValueError):
            RecipeEditor(mock_api, notifier, owner).update(RecipeDraft(title="x"))

    def test_delete_requires_confirmation(self, editor, mock_api, notifier):
        notifier.confirm_answer = False

        assert editor.delete() is False
        mock_api.delete_recipe.assert_not_called()
        assert notifier.confirmations == [
            "Are you sure you want to delete this recipe? This action cannot be undone."
        ]

    def test_delete_confirmed(self, editor, mock_api):
        assert editor.delete() is True
        mock_api.delete_recipe.assert_called_once_with("recipe-42")

    def test_delete_failure_alerts(self, editor, mock_api, notifier):
        mock_api.delete_recipe.side_effect = ApiResponseError("Forbidden", status_code=403)

        assert editor.delete() is False
        assert notifier.alerts == ["Forbidden"]

    def test_delete_transport_failure_shows_generic_message(self, editor, mock_api, notifier):
        mock_api.delete_recipe.side_effect = ApiRequestError("DELETE /api/community/recipes/recipe-42 failed: timeout")

        assert editor.delete() is False
        assert notifier.alerts == ["Failed to delete recipe"]
