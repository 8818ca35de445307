# =============================================================================
# core/schemas.py  —  Tool Argument Schemas
# =============================================================================
#
# One pydantic model per tool.  The same model does three jobs:
#   1. its JSON schema is what MCP clients see as the tool's parameters
#   2. it validates the raw arguments before any network call is made
#   3. it remembers which fields the caller actually sent
#
# Point 3 matters for filters: a field the caller left out must not be sent
# to the API at all, while a field the caller set to null must be sent as
# "null" (e.g. parentId=null means "top-level objects only").  pydantic
# tracks this in model_fields_set, and set_fields() dumps exactly those.
#
# Field names are snake_case in Python and camelCase on the wire.
# =============================================================================

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, ValidationError
from pydantic.alias_generators import to_camel

from core.errors import InvalidArgument

# IcePanel identifiers are 20-character opaque strings.
Identifier = Annotated[str, StringConstraints(min_length=20, max_length=20)]

ObjectType = Literal["actor", "app", "component", "group", "root", "store", "system"]
CreatableObjectType = Literal["actor", "app", "component", "group", "store", "system"]
Status = Literal["deprecated", "future", "live", "removed"]
Direction = Literal["outgoing", "bidirectional"]
ViewType = Literal["landscape", "context", "container", "component"]
Visibility = Literal["private", "public"]
Provider = Literal[
    "aws", "azure", "gcp", "microsoft", "salesforce", "atlassian", "apache", "supabase"
]
TechnologyType = Literal[
    "data-storage", "deployment", "framework-library", "gateway", "other", "language",
    "message-broker", "network", "protocol", "runtime", "service-tool",
]
Restriction = Literal["actor", "app", "component", "connection", "group", "store", "system"]
TechnologyStatus = Literal["approved", "pending-review", "rejected"]

_SEARCH_DESCRIPTION = "Fuzzy search text; results are re-ranked best match first"


def _describe_errors(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "arguments"
        parts.append(f"{location}: {error['msg']}")
    return "Invalid arguments: " + "; ".join(parts)


class ToolArguments(BaseModel):
    """Base class for every tool's argument record."""

    model_config = ConfigDict(alias_generator=to_camel, extra="forbid")

    @classmethod
    def parse(cls, arguments: Optional[dict[str, Any]]):
        """Validate raw MCP arguments.

        Raises:
            InvalidArgument: listing every field that failed.
        """
        try:
            return cls.model_validate(arguments or {})
        except ValidationError as exc:
            raise InvalidArgument(_describe_errors(exc)) from exc

    @classmethod
    def json_schema(cls) -> dict[str, Any]:
        return cls.model_json_schema(by_alias=True)

    def set_fields(self, *, exclude: set[str] = frozenset()) -> dict[str, Any]:
        """Fields the caller sent (explicit nulls included), camelCased."""
        return self.model_dump(by_alias=True, exclude_unset=True, exclude=set(exclude))

    def present_fields(self, *, exclude: set[str] = frozenset()) -> dict[str, Any]:
        """Fields with a value, defaults included, camelCased."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude=set(exclude))


class NoArguments(ToolArguments):
    pass


class LandscapeArguments(ToolArguments):
    landscape_id: Identifier = Field(description="ID of the landscape")


class VersionedArguments(LandscapeArguments):
    version_id: str = Field("latest", min_length=1, description="ID of the landscape version")


PATH_FIELDS = {"landscape_id", "version_id"}


# -----------------------------------------------------------------------------
# Landscapes & versions
# -----------------------------------------------------------------------------
class CreateLandscapeArguments(ToolArguments):
    name: str = Field(min_length=1, description="Name of the landscape")
    description: Optional[str] = Field(None, description="Description of the landscape")
    icon: Optional[str] = Field(None, description="Icon for the landscape")
    visibility: Visibility = Field("private", description="Visibility of the landscape")


class UpdateLandscapeArguments(LandscapeArguments):
    name: str = Field(None, min_length=1, description="New name of the landscape")
    description: Optional[str] = Field(None, description="New description")
    icon: Optional[str] = Field(None, description="New icon")
    visibility: Visibility = Field(None, description="New visibility")


class CreateVersionArguments(LandscapeArguments):
    name: str = Field(min_length=1, description="Name of the version")
    description: Optional[str] = Field(None, description="Description of the version")
    base_version_id: Optional[str] = Field(None, description="Version to branch from")


# -----------------------------------------------------------------------------
# Model objects
# -----------------------------------------------------------------------------
class GetModelObjectsArguments(VersionedArguments):
    domain_id: Union[Identifier, list[Identifier]] = Field(None, description="Domain ID(s)")
    external: bool = Field(False, description="Include only external (true) or internal (false) objects")
    name: str = Field(None, description="Exact name filter")
    parent_id: Optional[str] = Field(
        None, description="Parent object ID; null selects top-level objects"
    )
    status: Union[Status, list[Status]] = Field(None, description="Status or statuses")
    type: Union[ObjectType, list[ObjectType]] = Field(None, description="Object type(s)")
    technology_id: Union[Identifier, list[Identifier]] = Field(
        None,
        description="The technology ID - useful to find all objects using a specific technology or technologies",
    )
    team_id: Union[Identifier, list[Identifier]] = Field(
        None,
        description="The team ID - useful to find all objects owned by a specific team or teams",
    )
    labels: dict[str, str] = Field(None, description="Label key/value pairs to match")
    search: Optional[str] = Field(None, description=_SEARCH_DESCRIPTION)


class GetModelObjectArguments(VersionedArguments):
    model_object_id: Identifier = Field(description="ID of the model object")
    include_hierarchical_info: bool = Field(
        False,
        description=(
            "Include hierarchical information like parent and child objects. "
            "(Only use this when necessary as it is an expensive operation.)"
        ),
    )


class ModelObjectArguments(VersionedArguments):
    model_object_id: Identifier = Field(description="ID of the model object")


class CreateModelObjectArguments(VersionedArguments):
    name: str = Field(min_length=1, description="Name of the model object")
    type: CreatableObjectType = Field(description="Type of the model object")
    parent_id: Optional[str] = Field(
        None, description="ID of the parent object (required for apps, stores and components)"
    )
    description: Optional[str] = Field(None, description="Description of the model object")
    domain_id: Optional[str] = Field(None, description="ID of the domain")
    external: bool = Field(False, description="Whether the object is external")
    status: Status = Field("live", description="Status of the model object")
    technology_id: Optional[str] = Field(None, description="ID of the technology")
    team_id: Optional[str] = Field(None, description="ID of the owning team")


class UpdateModelObjectArguments(ModelObjectArguments):
    name: str = Field(None, min_length=1, description="New name")
    type: CreatableObjectType = Field(None, description="New type")
    parent_id: Optional[str] = Field(None, description="New parent object ID")
    description: Optional[str] = Field(None, description="New description")
    domain_id: Optional[str] = Field(None, description="New domain ID")
    external: bool = Field(None, description="Whether the object is external")
    status: Status = Field(None, description="New status")
    technology_id: Optional[str] = Field(None, description="New technology ID")
    team_id: Optional[str] = Field(None, description="New owning team ID")
    labels: dict[str, str] = Field(None, description="Replacement labels")


# -----------------------------------------------------------------------------
# Model connections
# -----------------------------------------------------------------------------
class GetModelConnectionsArguments(VersionedArguments):
    direction: Optional[Direction] = Field(
        None, description="Connection direction; null selects connections without one"
    )
    handle_id: Union[str, list[str]] = Field(None, description="Handle ID(s)")
    labels: dict[str, str] = Field(None, description="Label key/value pairs to match")
    name: str = Field(None, description="Exact name filter")
    origin_id: Union[Identifier, list[Identifier]] = Field(None, description="Origin object ID(s)")
    status: Union[Status, list[Status]] = Field(None, description="Status or statuses")
    target_id: Union[Identifier, list[Identifier]] = Field(None, description="Target object ID(s)")
    search: Optional[str] = Field(None, description=_SEARCH_DESCRIPTION)


class ConnectionArguments(VersionedArguments):
    connection_id: Identifier = Field(description="ID of the connection")


class CreateModelConnectionArguments(VersionedArguments):
    name: str = Field(min_length=1, description="Name/description of the connection")
    origin_id: str = Field(min_length=1, description="ID of the origin model object")
    target_id: str = Field(min_length=1, description="ID of the target model object")
    description: Optional[str] = Field(None, description="Detailed description of the connection")
    direction: Direction = Field("outgoing", description="Direction of the connection")
    status: Status = Field("live", description="Status of the connection")


class UpdateModelConnectionArguments(ConnectionArguments):
    name: str = Field(None, min_length=1, description="New name")
    direction: Direction = Field(None, description="New direction")
    description: Optional[str] = Field(None, description="New description")
    status: Status = Field(None, description="New status")
    labels: dict[str, str] = Field(None, description="Replacement labels")


# -----------------------------------------------------------------------------
# Domains
# -----------------------------------------------------------------------------
class CreateDomainArguments(VersionedArguments):
    name: str = Field(min_length=1, description="Name of the domain")
    description: Optional[str] = Field(None, description="Description of the domain")
    color: Optional[str] = Field(None, description="Color of the domain (hex code)")


class UpdateDomainArguments(VersionedArguments):
    domain_id: Identifier = Field(description="ID of the domain")
    name: str = Field(None, min_length=1, description="New name")
    description: Optional[str] = Field(None, description="New description")
    color: Optional[str] = Field(None, description="New color (hex code)")


# -----------------------------------------------------------------------------
# Technologies & teams
# -----------------------------------------------------------------------------
class GetTechnologyCatalogArguments(ToolArguments):
    provider: Optional[Union[Provider, list[Provider]]] = Field(None, description="Provider(s)")
    type: Optional[Union[TechnologyType, list[TechnologyType]]] = Field(
        None, description="Technology type(s)"
    )
    restrictions: Union[Restriction, list[Restriction]] = Field(
        None, description="Object types the technology can be assigned to"
    )
    search: Optional[str] = Field(None, description="Search by name and description")


class CreateOrganizationTechnologyArguments(ToolArguments):
    name: str = Field(min_length=1, description="Name of the technology")
    type: Optional[TechnologyType] = Field(None, description="Technology type")
    provider: Optional[Provider] = Field(None, description="Provider")
    icon: Optional[str] = Field(None, description="Icon URL")
    description: Optional[str] = Field(None, description="Description of the technology")
    restrictions: Optional[list[Restriction]] = Field(
        None, description="Object types the technology can be assigned to"
    )
    status: Optional[TechnologyStatus] = Field(None, description="Review status")


class GetTeamsArguments(ToolArguments):
    search: Optional[str] = Field(None, description="Search by name")


# -----------------------------------------------------------------------------
# Diagrams
# -----------------------------------------------------------------------------
class DiagramArguments(VersionedArguments):
    diagram_id: str = Field(min_length=1, description="ID of the diagram")


class CreateDiagramArguments(VersionedArguments):
    name: str = Field(min_length=1, description="Name of the diagram")
    view_type: ViewType = Field(description="Type of diagram view")
    description: Optional[str] = Field(None, description="Description of the diagram")
    root_object_id: Optional[str] = Field(
        None, description="ID of the root object (required for context, container, and component views)"
    )
    object_ids: list[str] = Field(
        default_factory=list, description="IDs of objects to include in the diagram"
    )


class CreateDiagramWithObjectsArguments(CreateDiagramArguments):
    object_ids: list[str] = Field(min_length=1, description="IDs of objects to include in the diagram")


class UpdateDiagramArguments(DiagramArguments):
    name: str = Field(None, min_length=1, description="New name of the diagram")
    view_type: ViewType = Field(None, description="New type of diagram view")
    description: Optional[str] = Field(None, description="New description")
    root_object_id: Optional[str] = Field(None, description="New root object ID")
    object_ids: list[str] = Field(None, description="Replacement list of object IDs")


class AddObjectsToDiagramArguments(DiagramArguments):
    object_ids: list[str] = Field(min_length=1, description="IDs of objects to add to the diagram")
