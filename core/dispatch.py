# =============================================================================
# core/dispatch.py  —  Tool Dispatch Layer
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Holds the registry of tools (name, description, argument schema,
#   handler) and runs one invocation end to end:
#
#     raw arguments ─▶ validate ─▶ handler (fetch, search, render) ─▶ Success
#                          │                    │
#                          └──── any error ─────┴──────────────────▶ Failure
#
#   invoke() never raises.  Whatever goes wrong becomes a Failure carrying
#   the tool's error prefix plus the message, and the MCP layer sends that
#   back as ordinary text.  Validation runs before the handler, so bad
#   arguments never cost a network call.
# =============================================================================

from dataclasses import dataclass, field
import logging
from typing import Any, Callable, Optional, Union

import httpx

from core import handlers, schemas
from core.config import Settings
from core.errors import IcePanelError
from core.handlers import ToolContext
from core.icepanel import IcePanelClient

logger = logging.getLogger(__name__)

_C4_PREAMBLE = (
    "IcePanel is a C4 diagramming tool. C4 is a framework for visualizing "
    "the architecture of software systems."
)


@dataclass
class Success:
    """Text blocks to return, one per rendered record."""

    blocks: list[str] = field(default_factory=list)


@dataclass
class Failure:
    """A human-readable error message, returned instead of raised."""

    message: str

    @property
    def blocks(self) -> list[str]:
        return [self.message]


Outcome = Union[Success, Failure]


@dataclass(frozen=True)
class ToolSpec:
    """Everything needed to expose and run one tool."""

    name: str
    description: str
    arguments: type[schemas.ToolArguments]
    handler: Callable[[ToolContext, Any], list[str]]
    error_prefix: str = "Error"


# -----------------------------------------------------------------------------
# The registry
# -----------------------------------------------------------------------------
TOOLS: list[ToolSpec] = [
    # --- Landscapes & versions ---
    ToolSpec(
        "getLandscapes",
        "Get all your landscapes from IcePanel",
        schemas.NoArguments,
        handlers.get_landscapes,
    ),
    ToolSpec(
        "getLandscape",
        "Get a specific landscape from IcePanel",
        schemas.LandscapeArguments,
        handlers.get_landscape,
    ),
    ToolSpec(
        "verifyLandscape",
        "Verify that a landscape exists before creating objects",
        schemas.LandscapeArguments,
        handlers.verify_landscape,
        "Error verifying landscape",
    ),
    ToolSpec(
        "createLandscape",
        "Create a new landscape in IcePanel",
        schemas.CreateLandscapeArguments,
        handlers.create_landscape,
        "Error creating landscape",
    ),
    ToolSpec(
        "updateLandscape",
        "Update a landscape's name, description, icon or visibility. Only the fields you pass are changed.",
        schemas.UpdateLandscapeArguments,
        handlers.update_landscape,
        "Error updating landscape",
    ),
    ToolSpec(
        "deleteLandscape",
        "Delete a landscape from IcePanel",
        schemas.LandscapeArguments,
        handlers.delete_landscape,
        "Error deleting landscape",
    ),
    ToolSpec(
        "getVersion",
        "Get a version of an IcePanel landscape (defaults to the latest version)",
        schemas.VersionedArguments,
        handlers.get_version,
    ),
    ToolSpec(
        "createVersion",
        "Create a new version (snapshot) of an IcePanel landscape",
        schemas.CreateVersionArguments,
        handlers.create_version,
        "Error creating version",
    ),
    # --- Model objects ---
    ToolSpec(
        "getModelObjects",
        f"""
Get all the model objects in an IcePanel landscape.
{_C4_PREAMBLE}
To get the C1 level objects - query for 'system' type.
To get the C2 level objects - query for 'app' and 'store' types.
To get the C3 level objects - query for the 'component' type.

The 'group' and 'actor' types can be used in any of the levels, and should generally be included in user queries.
- 'group' - is a type agnostic group which groups objects together
- 'actor' - is an actor in the system, typically a kind of user. Ex. 'our customer', 'admin user', etc.

Use this tool to filter / query against many model objects at once. It provides high level details such as name, ID, type, status, and external.

Prefer filtering by Technology ID and Team ID when the query is asking things like:
- "What services does the Automations Team own?"
- "We need to upgrade our .NET applications - what is affected by this?"
""",
        schemas.GetModelObjectsArguments,
        handlers.get_model_objects,
    ),
    ToolSpec(
        "getModelObject",
        f"""
Get detailed information about a model object in IcePanel.
{_C4_PREAMBLE}
Use this tool to get detailed information about a model object, such as its description, type, hierarchical information (i.e. parent and children objects), any teams associated with it, as well as the technologies it uses.
""",
        schemas.GetModelObjectArguments,
        handlers.get_model_object,
    ),
    ToolSpec(
        "getModelObjectRelationships",
        f"""
Get information about the relationships a model object has in IcePanel.
{_C4_PREAMBLE}
Use this tool when you want to know about what objects are related to the current object. It provides a succinct list of related items.
""",
        schemas.ModelObjectArguments,
        handlers.get_model_object_relationships,
    ),
    ToolSpec(
        "createModelObject",
        "Create a new model object in an IcePanel landscape (system, app, store, component, group, actor)",
        schemas.CreateModelObjectArguments,
        handlers.create_model_object,
        "Error creating model object",
    ),
    ToolSpec(
        "updateModelObject",
        "Update a model object in an IcePanel landscape. Only the fields you pass are changed.",
        schemas.UpdateModelObjectArguments,
        handlers.update_model_object,
        "Error updating model object",
    ),
    ToolSpec(
        "deleteModelObject",
        "Delete a model object from an IcePanel landscape",
        schemas.ModelObjectArguments,
        handlers.delete_model_object,
        "Error deleting model object",
    ),
    # --- Model connections ---
    ToolSpec(
        "getModelConnections",
        f"""
Get the connections between model objects in an IcePanel landscape.
{_C4_PREAMBLE}
Filter by origin, target, status, direction, name or labels; use 'search' for fuzzy matching on name and description.
""",
        schemas.GetModelConnectionsArguments,
        handlers.get_model_connections,
    ),
    ToolSpec(
        "getModelConnection",
        "Get a specific connection from an IcePanel landscape",
        schemas.ConnectionArguments,
        handlers.get_model_connection,
    ),
    ToolSpec(
        "createModelConnection",
        "Create a new connection between model objects in an IcePanel landscape",
        schemas.CreateModelConnectionArguments,
        handlers.create_model_connection,
        "Error creating connection",
    ),
    ToolSpec(
        "updateModelConnection",
        "Update a connection in an IcePanel landscape. Only the fields you pass are changed.",
        schemas.UpdateModelConnectionArguments,
        handlers.update_model_connection,
        "Error updating connection",
    ),
    ToolSpec(
        "deleteModelConnection",
        "Delete a connection from an IcePanel landscape",
        schemas.ConnectionArguments,
        handlers.delete_model_connection,
        "Error deleting connection",
    ),
    # --- Domains ---
    ToolSpec(
        "createDomain",
        "Create a new domain in an IcePanel landscape",
        schemas.CreateDomainArguments,
        handlers.create_domain,
        "Error creating domain",
    ),
    ToolSpec(
        "updateDomain",
        "Update a domain in an IcePanel landscape. Only the fields you pass are changed.",
        schemas.UpdateDomainArguments,
        handlers.update_domain,
        "Error updating domain",
    ),
    # --- Technologies & teams ---
    ToolSpec(
        "getTechnologyCatalog",
        f"""
Get the technology catalog in IcePanel.
{_C4_PREAMBLE}
Use this tool to get the technology catalog, which is a list of all the technologies available in the system.
""",
        schemas.GetTechnologyCatalogArguments,
        handlers.get_technology_catalog,
    ),
    ToolSpec(
        "createOrganizationTechnology",
        "Add a technology to your organization's own technology list in IcePanel",
        schemas.CreateOrganizationTechnologyArguments,
        handlers.create_organization_technology,
        "Error creating technology",
    ),
    ToolSpec(
        "getTeams",
        f"""
Get the teams in IcePanel.
{_C4_PREAMBLE}
Use this tool to get the teams in IcePanel, teams are assigned as owners to different Model Objects within IcePanel.
""",
        schemas.GetTeamsArguments,
        handlers.get_teams,
    ),
    # --- Diagrams ---
    ToolSpec(
        "getDiagrams",
        "Get all diagrams for an IcePanel landscape",
        schemas.VersionedArguments,
        handlers.get_diagrams,
        "Error getting diagrams",
    ),
    ToolSpec(
        "getDiagram",
        "Get a specific diagram from an IcePanel landscape",
        schemas.DiagramArguments,
        handlers.get_diagram,
        "Error getting diagram",
    ),
    ToolSpec(
        "createDiagram",
        "Create a new diagram in an IcePanel landscape",
        schemas.CreateDiagramArguments,
        handlers.create_diagram,
        "Error creating diagram",
    ),
    ToolSpec(
        "createDiagramWithObjects",
        "Create a new diagram with specific objects in an IcePanel landscape",
        schemas.CreateDiagramWithObjectsArguments,
        handlers.create_diagram,
        "Error creating diagram with objects",
    ),
    ToolSpec(
        "updateDiagram",
        "Update an existing diagram in an IcePanel landscape. Only the fields you pass are changed.",
        schemas.UpdateDiagramArguments,
        handlers.update_diagram,
        "Error updating diagram",
    ),
    ToolSpec(
        "deleteDiagram",
        "Delete a diagram from an IcePanel landscape",
        schemas.DiagramArguments,
        handlers.delete_diagram,
        "Error deleting diagram",
    ),
    ToolSpec(
        "addObjectsToDiagram",
        "Add objects to an existing diagram in an IcePanel landscape",
        schemas.AddObjectsToDiagramArguments,
        handlers.add_objects_to_diagram,
        "Error adding objects to diagram",
    ),
]


class ToolDispatcher:
    """Runs tools by name against one IcePanel client."""

    def __init__(
        self,
        client: IcePanelClient,
        settings: Settings,
        tools: Optional[list[ToolSpec]] = None,
    ):
        self._context = ToolContext(client=client, settings=settings)
        self._tools = {spec.name: spec for spec in (TOOLS if tools is None else tools)}

    @property
    def tools(self) -> list[ToolSpec]:
        return list(self._tools.values())

    def invoke(self, name: str, arguments: Optional[dict[str, Any]] = None) -> Outcome:
        """Validate, run and render one tool call.  Never raises."""
        spec = self._tools.get(name)
        if spec is None:
            return Failure(f"Error: unknown tool '{name}'")

        try:
            args = spec.arguments.parse(arguments)
            return Success(spec.handler(self._context, args))
        except IcePanelError as exc:
            logger.warning("%s failed: %s", name, exc)
            return Failure(f"{spec.error_prefix}: {exc}")
        except httpx.HTTPError as exc:
            logger.warning("%s failed: %s", name, exc)
            return Failure(f"{spec.error_prefix}: request to IcePanel failed: {exc}")
        except Exception as exc:
            logger.exception("%s raised an unexpected error", name)
            return Failure(f"{spec.error_prefix}: {exc}")
