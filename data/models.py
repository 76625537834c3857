"""
Data Models for the Community Client

This module contains the data classes used throughout the application:
item identities, toggle snapshots and state, and the community content
records exchanged with the REST API.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from utils.helpers import parse_timestamp


class ItemType(Enum):
    """Kinds of content that can be liked, saved, commented on or shared."""
    POST = "post"
    RECIPE = "recipe"
    COMMENT = "comment"

    @property
    def collection(self) -> str:
        """Pluralised path segment used by the community API."""
        return _COLLECTIONS[self]


_COLLECTIONS = {
    ItemType.POST: "posts",
    ItemType.RECIPE: "recipes",
    ItemType.COMMENT: "comments",
}


@dataclass(frozen=True)
class InteractableItem:
    """Opaque identity of something the user can interact with."""
    id: str
    type: ItemType

    @property
    def api_path(self) -> str:
        return f"/api/community/{self.type.collection}/{self.id}"

    @property
    def page_path(self) -> str:
        return f"/community/{self.type.collection}/{self.id}"


@dataclass(frozen=True)
class ActingUser:
    """The identity on whose behalf mutating requests are sent."""
    user_id: str

    def headers(self, header_name: str = "x-user-id") -> Dict[str, str]:
        return {header_name: self.user_id}


# =============================================================================
# Toggle snapshots and state
# =============================================================================

@dataclass(frozen=True)
class LikeState:
    liked: bool
    count: int


@dataclass(frozen=True)
class SaveState:
    saved: bool


@dataclass(frozen=True)
class Settled:
    """No request in flight; `value` is what the user sees."""
    value: Any


@dataclass(frozen=True)
class Pending:
    """A persist request is in flight for `value`; `prior` is restored on failure."""
    value: Any
    prior: Any


ToggleState = Union[Settled, Pending]


# =============================================================================
# Community content
# =============================================================================

@dataclass
class Comment:
    """A comment on a post or recipe, with at most one level of replies."""
    id: str
    user_id: str
    user_name: str
    content: str
    likes: int = 0
    liked: bool = False
    created_at: Optional[datetime] = None
    replies: List["Comment"] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Dict[str, Any], allow_replies: bool = True) -> "Comment":
        """
        Build a Comment from the API's camelCase payload.

        Args:
            data: One comment object from the API.
            allow_replies: Whether nested replies are kept. Replies of replies
                are always dropped.

        Returns:
            Comment: The parsed comment.
        """
        replies = []
        if allow_replies:
            replies = [cls.from_api(r, allow_replies=False) for r in data.get("replies") or []]

        return cls(
            id=str(data.get("id")),
            user_id=str(data.get("userId") or ""),
            user_name=data.get("userName") or "Anonymous",
            content=data.get("content") or "",
            likes=int(data.get("likes") or 0),
            liked=bool(data.get("liked") or False),
            created_at=parse_timestamp(data.get("createdAt")),
            replies=replies,
        )


@dataclass
class Recipe:
    """A community-submitted recipe."""
    id: str
    user_id: str
    user_name: str
    title: str
    description: str = ""
    ingredients: List[str] = field(default_factory=list)
    instructions: List[str] = field(default_factory=list)
    photos: List[str] = field(default_factory=list)
    prep_time: str = ""
    servings: str = ""
    likes: int = 0
    saves: int = 0
    liked: bool = False
    saved: bool = False
    comments: int = 0
    created_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Recipe":
        return cls(
            id=str(data.get("id")),
            user_id=str(data.get("userId") or ""),
            user_name=data.get("userName") or "",
            title=data.get("title") or "",
            description=data.get("description") or "",
            ingredients=list(data.get("ingredients") or []),
            instructions=list(data.get("instructions") or []),
            photos=list(data.get("photos") or []),
            prep_time=str(data.get("prepTime") or ""),
            servings=str(data.get("servings") or ""),
            likes=int(data.get("likes") or 0),
            saves=int(data.get("saves") or 0),
            liked=bool(data.get("liked") or False),
            saved=bool(data.get("saved") or False),
            comments=int(data.get("comments") or 0),
            created_at=parse_timestamp(data.get("createdAt")),
        )


@dataclass
class RecipeDraft:
    """Editable form of a recipe; ingredients and instructions are one per line."""
    title: str
    description: str = ""
    ingredients: str = ""
    instructions: str = ""
    servings: str = ""
    prep_time: str = ""
    photos: List[str] = field(default_factory=list)

    @classmethod
    def from_recipe(cls, recipe: Recipe) -> "RecipeDraft":
        return cls(
            title=recipe.title,
            description=recipe.description,
            ingredients="\n".join(recipe.ingredients),
            instructions="\n".join(recipe.instructions),
            servings=recipe.servings,
            prep_time=recipe.prep_time,
            photos=list(recipe.photos),
        )


@dataclass
class SuccessStory:
    """A before/after raw feeding transformation story."""
    id: str
    pet_name: str
    pet_type: str
    breed: str = ""
    age: Optional[float] = None
    owner_name: str = ""
    location: str = ""
    transformation_type: str = ""
    timeframe: str = ""
    before_photo: str = ""
    after_photo: str = ""
    story_text: str = ""
    health_improvements: List[str] = field(default_factory=list)
    weight_before: Optional[float] = None
    weight_after: Optional[float] = None
    vet_approved: bool = False
    date_submitted: Optional[datetime] = None
    likes: int = 0
    comments: int = 0

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "SuccessStory":
        return cls(
            id=str(data.get("id")),
            pet_name=data.get("petName") or "",
            pet_type=data.get("petType") or "other",
            breed=data.get("breed") or "",
            age=data.get("age"),
            owner_name=data.get("ownerName") or "",
            location=data.get("location") or "",
            transformation_type=data.get("transformationType") or "",
            timeframe=data.get("timeframe") or "",
            before_photo=data.get("beforePhoto") or "",
            after_photo=data.get("afterPhoto") or "",
            story_text=data.get("storyText") or "",
            health_improvements=list(data.get("healthImprovements") or []),
            weight_before=data.get("weightBefore"),
            weight_after=data.get("weightAfter"),
            vet_approved=bool(data.get("vetApproved") or False),
            date_submitted=parse_timestamp(data.get("dateSubmitted")),
            likes=int(data.get("likes") or 0),
            comments=int(data.get("comments") or 0),
        )


@dataclass
class StoryFilters:
    """Gallery filters; "all" disables a filter."""
    pet_type: str = "all"
    transformation_type: str = "all"
    timeframe: str = "all"
    sort_by: str = "likes"

    def to_params(self) -> Dict[str, str]:
        params = {}
        if self.pet_type != "all":
            params["petType"] = self.pet_type
        if self.transformation_type != "all":
            params["transformationType"] = self.transformation_type
        if self.timeframe != "all":
            params["timeframe"] = self.timeframe
        params["sortBy"] = self.sort_by
        return params


@dataclass
class HealthRecord:
    """A vet visit, vaccination or other health event for a pet."""
    pet_id: str
    type: str
    date: str
    title: str
    provider: str
    notes: str = ""
    next_due_date: str = ""
    cost: Optional[float] = None
    photos: List[str] = field(default_factory=list)
    id: Optional[str] = None

    REQUIRED_FIELDS = ("pet_id", "type", "date", "title", "provider")

    def missing_fields(self) -> List[str]:
        return [name for name in self.REQUIRED_FIELDS if not str(getattr(self, name) or "").strip()]

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            "petId": self.pet_id,
            "type": self.type,
            "date": self.date,
            "title": self.title,
            "provider": self.provider,
            "notes": self.notes,
            "nextDueDate": self.next_due_date,
            "photos": self.photos,
        }
        if self.cost is not None:
            payload["cost"] = float(self.cost)
        return payload
