"""Domain models for recipes and their viewer-relative projections."""

from collections.abc import Mapping
from dataclasses import dataclass, field

from smart_recipe.domain.models import UserRecord


@dataclass(frozen=True)
class UserSummary:
    """Public-safe user fields attached to recipes."""

    id: str
    name: str | None
    image: str | None

    @classmethod
    def from_payload(cls, data: Mapping[str, object]) -> "UserSummary":
        return cls(
            id=str(data["id"]),
            name=_optional_str(data.get("name")),
            image=_optional_str(data.get("image")),
        )

    def to_payload(self) -> dict[str, object]:
        return {"id": self.id, "name": self.name, "image": self.image}


@dataclass(frozen=True)
class Recipe:
    """A stored recipe with its full owner and liked-by user records."""

    id: str
    owner: UserRecord
    liked_by: tuple[UserRecord, ...] = ()
    fields: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class ExtendedRecipe:
    """A recipe shaped for one viewer."""

    id: str
    owner: UserSummary
    liked_by: tuple[UserSummary, ...]
    owns: bool
    liked: bool
    fields: dict[str, object] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, data: Mapping[str, object]) -> "ExtendedRecipe":
        """Build a recipe from the internal API's JSON representation."""
        reserved = {"id", "owner", "liked_by", "owns", "liked"}
        liked_by = data.get("liked_by") or []
        return cls(
            id=str(data["id"]),
            owner=UserSummary.from_payload(data["owner"]),  # type: ignore[arg-type]
            liked_by=tuple(
                UserSummary.from_payload(entry)
                for entry in liked_by  # type: ignore[union-attr]
            ),
            owns=bool(data.get("owns", False)),
            liked=bool(data.get("liked", False)),
            fields={key: value for key, value in data.items() if key not in reserved},
        )

    def to_payload(self) -> dict[str, object]:
        """Serialize the recipe into the internal API's JSON representation."""
        return {
            **self.fields,
            "id": self.id,
            "owner": self.owner.to_payload(),
            "liked_by": [entry.to_payload() for entry in self.liked_by],
            "owns": self.owns,
            "liked": self.liked,
        }


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)
