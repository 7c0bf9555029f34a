"""
Category Models

Categories come from two places:
- a static list of predefined categories (JSON array of {"category": str})
- user-entered custom categories, persisted separately from records

DESIGN DECISION: The UI's "Others" option is modelled as a tagged choice.
The sentinel label is compared exactly once, in choice_from_selection();
everything downstream works with PredefinedCategory / CustomCategoryRequest.
"""

import json
from importlib import resources
from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from spending_tracker.config import ConfigurationError


DEFAULT_CATEGORIES_RESOURCE = "spending_categories.json"


class PredefinedCategoryEntry(BaseModel):
    """One entry of the static predefined category list."""

    category: str = Field(..., min_length=1)


class PredefinedCategory(BaseModel):
    """The user picked a category from the list."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["predefined"] = "predefined"
    name: str


class CustomCategoryRequest(BaseModel):
    """The user picked "Others" and typed a category name."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["custom"] = "custom"
    raw_text: str = ""


CategoryChoice = Union[PredefinedCategory, CustomCategoryRequest]


def choice_from_selection(
    selected: str,
    other_text: str = "",
    others_label: str = "Others",
) -> CategoryChoice:
    """Map the form's (selected, other_text) pair to a category choice."""
    if selected == others_label:
        return CustomCategoryRequest(raw_text=other_text or "")
    return PredefinedCategory(name=selected or "")


class CategorySet(BaseModel):
    """
    Predefined plus custom categories.

    Custom categories have set semantics and keep insertion order.
    Matching is case-sensitive and exact.
    """

    predefined: list[str] = Field(default_factory=list)
    custom: list[str] = Field(default_factory=list)

    @property
    def all(self) -> list[str]:
        """Predefined followed by custom, without duplicates."""
        return list(dict.fromkeys([*self.predefined, *self.custom]))

    def contains(self, name: str) -> bool:
        return name in self.predefined or name in self.custom

    def with_custom(self, name: str) -> "CategorySet":
        """Return a copy with ``name`` appended to the custom list."""
        return CategorySet(predefined=list(self.predefined), custom=[*self.custom, name])


_ENTRIES_ADAPTER = TypeAdapter(list[PredefinedCategoryEntry])


def load_predefined_categories(path: Optional[str] = None) -> list[str]:
    """
    Load the static predefined category list.

    Args:
        path: JSON file with a list of {"category": str} entries.
              The packaged default list is used when None.

    Raises:
        ConfigurationError: If the file is missing or malformed
    """
    try:
        if path is None:
            raw = (
                resources.files("spending_tracker.data")
                .joinpath(DEFAULT_CATEGORIES_RESOURCE)
                .read_text(encoding="utf-8")
            )
        else:
            raw = Path(path).expanduser().read_text(encoding="utf-8")
        entries = _ENTRIES_ADAPTER.validate_python(json.loads(raw))
    except (OSError, json.JSONDecodeError, PydanticValidationError) as e:
        raise ConfigurationError(
            f"Could not load predefined categories from {path or DEFAULT_CATEGORIES_RESOURCE}: {e}"
        ) from e

    return list(dict.fromkeys(entry.category for entry in entries))
