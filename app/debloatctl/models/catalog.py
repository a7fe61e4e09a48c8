"""Catalog models for package classification.

This module defines the Pydantic model for one entry of the
classification catalog (the curated list of known packages).
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from debloatctl.models.package import ALL_LISTS, UNLISTED

# List names reserved for the filter engine
RESERVED_LIST_NAMES = frozenset({ALL_LISTS, UNLISTED})


class CatalogEntry(BaseModel):
    """Classification of a single known package.

    Attributes:
        id: Package identifier this entry describes.
        list_name: Catalog list the package belongs to (JSON key ``list``).
        description: Human-readable explanation of what the package does.
        dependencies: Packages this one depends on.
        needed_by: Packages that depend on this one (JSON key ``neededBy``).
        labels: Free-form tags.
        removal: Removal recommendation (e.g., 'Recommended', 'Expert').
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: Annotated[str, Field(min_length=1, description="Package identifier")]
    list_name: Annotated[str, Field(alias="list", min_length=1, description="Catalog list")]
    description: Annotated[str | None, Field(description="Package description")] = None
    dependencies: Annotated[list[str] | None, Field(description="Required packages")] = None
    needed_by: Annotated[
        list[str] | None,
        Field(alias="neededBy", description="Dependent packages"),
    ] = None
    labels: Annotated[list[str] | None, Field(description="Free-form tags")] = None
    removal: Annotated[str | None, Field(description="Removal recommendation")] = None

    @field_validator("list_name")
    @classmethod
    def validate_list_name(cls, v: str) -> str:
        """Reject list names that collide with filter sentinels."""
        name = v.strip()
        if not name:
            msg = "List name cannot be blank"
            raise ValueError(msg)
        if name in RESERVED_LIST_NAMES:
            msg = f"'{name}' is reserved and cannot be used as a catalog list"
            raise ValueError(msg)
        return name

    @field_validator("description")
    @classmethod
    def normalize_description(cls, v: str | None) -> str | None:
        """Treat blank descriptions as missing."""
        if v is None:
            return None
        return v.strip() or None
