# =============================================================================
# core/models.py  —  Data Models (the "nouns" of IcePanel)
# =============================================================================
#
# These dataclasses give names to the JSON records the IcePanel API sends
# back.  They are deliberately loose: every field has an empty default and
# from_json() never fails on a missing key.  The remote API is the source of
# truth for shape; the renderers in core/format.py only check whether a
# field is present before printing it.
#
# Only the fields something in this package reads are modelled.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional


def _name_of(value: Any) -> str:
    if isinstance(value, dict):
        return value.get("name") or ""
    return ""


# -----------------------------------------------------------------------------
# ModelObject — a node in the C4 model (system, app, store, component, ...)
# -----------------------------------------------------------------------------
@dataclass
class ModelObject:
    """One model object."""

    id: str = ""
    name: str = ""
    type: str = ""
    status: str = ""
    description: str = ""
    external: Optional[bool] = None    # None = the API didn't say
    handle_id: str = ""                # used for the "View in IcePanel" link
    parent_id: Optional[str] = None    # "root" for top-level objects
    domain_id: str = ""
    child_ids: list[str] = field(default_factory=list)
    team_ids: list[str] = field(default_factory=list)
    technology_names: list[str] = field(default_factory=list)
    labels: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: dict) -> "ModelObject":
        technologies = data.get("technologies") or {}
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            type=data.get("type", ""),
            status=data.get("status", ""),
            description=data.get("description") or "",
            external=data.get("external"),
            handle_id=data.get("handleId", ""),
            parent_id=data.get("parentId"),
            domain_id=data.get("domainId", ""),
            child_ids=list(data.get("childIds") or []),
            team_ids=list(data.get("teamIds") or []),
            technology_names=[
                name for name in (_name_of(t) for t in technologies.values()) if name
            ],
            labels=dict(data.get("labels") or {}),
        )


# -----------------------------------------------------------------------------
# ModelConnection — an edge between two model objects
# -----------------------------------------------------------------------------
@dataclass
class ModelConnection:
    """A relationship between two model objects."""

    id: str = ""
    name: str = ""
    origin_id: str = ""
    target_id: str = ""
    direction: Optional[str] = None    # "outgoing", "bidirectional" or None
    status: str = ""
    description: str = ""

    @classmethod
    def from_json(cls, data: dict) -> "ModelConnection":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            origin_id=data.get("originId", ""),
            target_id=data.get("targetId", ""),
            direction=data.get("direction"),
            status=data.get("status", ""),
            description=data.get("description") or "",
        )


@dataclass
class CatalogTechnology:
    """A technology from the global catalog or the organization."""

    id: str = ""
    name: str = ""
    name_short: str = ""
    description: str = ""
    docs_url: str = ""
    website_url: str = ""
    status: str = ""
    type: str = ""
    provider: str = ""
    category: str = ""
    default_slug: str = ""

    @classmethod
    def from_json(cls, data: dict) -> "CatalogTechnology":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            name_short=data.get("nameShort") or "",
            description=data.get("description") or "",
            docs_url=data.get("docsUrl") or "",
            website_url=data.get("websiteUrl") or "",
            status=data.get("status") or "",
            type=data.get("type") or "",
            provider=data.get("provider") or "",
            category=data.get("category") or "",
            default_slug=data.get("defaultSlug") or "",
        )


@dataclass
class Team:
    """An organization team; teams own model objects."""

    id: str = ""
    name: str = ""
    user_ids: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict) -> "Team":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            user_ids=list(data.get("userIds") or []),
        )


@dataclass
class Diagram:
    """A named view over a subset of model objects."""

    id: str = ""
    name: str = ""
    description: str = ""
    view_type: str = ""                # landscape | context | container | component
    root_object_id: Optional[str] = None
    object_ids: list[str] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""
    version_id: str = ""

    @classmethod
    def from_json(cls, data: dict) -> "Diagram":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            description=data.get("description") or "",
            view_type=data.get("viewType") or data.get("type") or "",
            root_object_id=data.get("rootObjectId"),
            object_ids=list(data.get("objectIds") or []),
            created_at=data.get("createdAt") or "",
            updated_at=data.get("updatedAt") or "",
            version_id=data.get("versionId") or "",
        )


@dataclass
class Landscape:
    """A workspace holding one architecture model."""

    id: str = ""
    name: str = ""
    description: str = ""
    visibility: str = ""
    icon: str = ""

    @classmethod
    def from_json(cls, data: dict) -> "Landscape":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            description=data.get("description") or "",
            visibility=data.get("visibility") or "",
            icon=data.get("icon") or "",
        )


@dataclass
class Version:
    """A snapshot of a landscape's model."""

    id: str = ""
    name: str = ""
    description: str = ""
    landscape_id: str = ""
    created_at: str = ""

    @classmethod
    def from_json(cls, data: dict) -> "Version":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            description=data.get("description") or "",
            landscape_id=data.get("landscapeId") or "",
            created_at=data.get("createdAt") or "",
        )
