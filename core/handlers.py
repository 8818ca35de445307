# =============================================================================
# core/handlers.py  —  Tool Handlers (fetch → shape → render)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   One function per tool.  Each takes the shared ToolContext and an already
#   validated argument record, makes its API calls in a fixed order, applies
#   the fuzzy search when asked, and returns the text blocks to send back.
#
# RULES EVERY HANDLER FOLLOWS:
#   - Calls are sequential; a later call may use an earlier result.
#   - Errors are raised, never returned.  core/dispatch.py turns them into
#     the tool's error text.
#   - Multi-record results are one block per record, in result order.
# =============================================================================

from dataclasses import dataclass
import logging
from typing import Any, Iterable, Optional

from core.config import Settings
from core.errors import IcePanelError
from core.format import (
    format_catalog_technology,
    format_connection_list_item,
    format_connections,
    format_diagram,
    format_landscape,
    format_model_object_item,
    format_model_object_list_item,
    format_team,
    format_version,
)
from core.icepanel import IcePanelClient
from core.models import (
    CatalogTechnology,
    Diagram,
    Landscape,
    ModelConnection,
    ModelObject,
    Team,
    Version,
)
from core.schemas import PATH_FIELDS
from core.search import fuzzy_search

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolContext:
    """What every handler gets besides its arguments."""

    client: IcePanelClient
    settings: Settings


# -----------------------------------------------------------------------------
# Response helpers
# -----------------------------------------------------------------------------
def _unwrap(response: Any, key: str) -> dict:
    """Return ``response[key]`` if the API wrapped the record, else the response."""
    if isinstance(response, dict):
        inner = response.get(key)
        if isinstance(inner, dict):
            return inner
        return response
    return {}


def _records(response: Any, key: str) -> list[dict]:
    if isinstance(response, dict):
        return [r for r in response.get(key) or [] if isinstance(r, dict)]
    return []


def _created_id(response: Any, key: str) -> str:
    return _unwrap(response, key).get("id") or "unknown"


def merge_object_ids(existing: Iterable[str], added: Iterable[str]) -> list[str]:
    """Ordered union of two ID lists; the first occurrence of an ID wins."""
    return list(dict.fromkeys([*existing, *added]))


# -----------------------------------------------------------------------------
# Landscapes & versions
# -----------------------------------------------------------------------------
def get_landscapes(ctx: ToolContext, args) -> list[str]:
    response = ctx.client.get_landscapes()
    return [format_landscape(Landscape.from_json(r)) for r in _records(response, "landscapes")]


def get_landscape(ctx: ToolContext, args) -> list[str]:
    response = ctx.client.get_landscape(args.landscape_id)
    return [format_landscape(Landscape.from_json(_unwrap(response, "landscape")))]


def verify_landscape(ctx: ToolContext, args) -> list[str]:
    response = ctx.client.get_landscape(args.landscape_id)
    landscape = Landscape.from_json(_unwrap(response, "landscape"))
    return [f'Landscape exists: "{landscape.name or "Unknown"}" (ID: {args.landscape_id})']


def create_landscape(ctx: ToolContext, args) -> list[str]:
    response = ctx.client.create_landscape(args.present_fields())
    landscape_id = _created_id(response, "landscape")
    return [f'Successfully created landscape: "{args.name}" (ID: {landscape_id})']


def update_landscape(ctx: ToolContext, args) -> list[str]:
    response = ctx.client.update_landscape(
        args.landscape_id, args.set_fields(exclude={"landscape_id"})
    )
    name = Landscape.from_json(_unwrap(response, "landscape")).name or args.name
    return [f'Successfully updated landscape "{name}" (ID: {args.landscape_id})']


def delete_landscape(ctx: ToolContext, args) -> list[str]:
    ctx.client.delete_landscape(args.landscape_id)
    return [f"Successfully deleted landscape with ID: {args.landscape_id}"]


def get_version(ctx: ToolContext, args) -> list[str]:
    response = ctx.client.get_version(args.landscape_id, args.version_id)
    return [format_version(Version.from_json(_unwrap(response, "version")))]


def create_version(ctx: ToolContext, args) -> list[str]:
    response = ctx.client.create_version(
        args.landscape_id, args.present_fields(exclude={"landscape_id"})
    )
    version_id = _created_id(response, "version")
    return [f'Successfully created version "{args.name}" (ID: {version_id})']


# -----------------------------------------------------------------------------
# Model objects
# -----------------------------------------------------------------------------
def get_model_objects(ctx: ToolContext, args) -> list[str]:
    filters = args.set_fields(exclude=PATH_FIELDS | {"search"})
    # external objects stay hidden unless the caller asks for them
    filters["external"] = args.external

    response = ctx.client.get_model_objects(args.landscape_id, args.version_id, filters)
    model_objects = [ModelObject.from_json(r) for r in _records(response, "modelObjects")]
    model_objects = fuzzy_search(model_objects, args.search, ["name", "description"])
    return [format_model_object_list_item(o) for o in model_objects]


def get_model_object(ctx: ToolContext, args) -> list[str]:
    """Object detail; the full object list is only fetched for hierarchy info."""
    response = ctx.client.get_model_object(args.landscape_id, args.model_object_id, args.version_id)
    model_object = ModelObject.from_json(_unwrap(response, "modelObject"))

    parent: Optional[ModelObject] = None
    children: Optional[list[ModelObject]] = None
    if args.include_hierarchical_info:
        listing = ctx.client.get_model_objects(args.landscape_id, args.version_id)
        all_objects = [ModelObject.from_json(r) for r in _records(listing, "modelObjects")]
        if model_object.parent_id and model_object.parent_id != "root":
            parent = next((o for o in all_objects if o.id == model_object.parent_id), None)
        if model_object.child_ids:
            child_ids = set(model_object.child_ids)
            children = [o for o in all_objects if o.id in child_ids]

    teams = [Team.from_json(r) for r in _records(ctx.client.get_teams(), "teams")]

    return [
        format_model_object_item(
            model_object,
            landscape_id=args.landscape_id,
            app_base_url=ctx.settings.app_base_url,
            teams=teams,
            parent=parent,
            children=children,
        )
    ]


def get_model_object_relationships(ctx: ToolContext, args) -> list[str]:
    landscape_id, version_id = args.landscape_id, args.version_id
    response = ctx.client.get_model_object(landscape_id, args.model_object_id, version_id)
    model_object = ModelObject.from_json(_unwrap(response, "modelObject"))

    listing = ctx.client.get_model_objects(landscape_id, version_id)
    all_objects = [ModelObject.from_json(r) for r in _records(listing, "modelObjects")]

    outgoing = ctx.client.get_model_connections(
        landscape_id, version_id, {"originId": args.model_object_id}
    )
    incoming = ctx.client.get_model_connections(
        landscape_id, version_id, {"targetId": args.model_object_id}
    )

    return [
        format_connections(
            model_object,
            incoming=[ModelConnection.from_json(r) for r in _records(incoming, "modelConnections")],
            outgoing=[ModelConnection.from_json(r) for r in _records(outgoing, "modelConnections")],
            model_objects=all_objects,
        )
    ]


def create_model_object(ctx: ToolContext, args) -> list[str]:
    response = ctx.client.create_model_object(
        args.landscape_id, args.present_fields(exclude=PATH_FIELDS), args.version_id
    )
    object_id = _created_id(response, "modelObject")
    return [f'Successfully created {args.type} "{args.name}" (ID: {object_id})']


def update_model_object(ctx: ToolContext, args) -> list[str]:
    response = ctx.client.update_model_object(
        args.landscape_id,
        args.model_object_id,
        args.set_fields(exclude=PATH_FIELDS | {"model_object_id"}),
        args.version_id,
    )
    name = ModelObject.from_json(_unwrap(response, "modelObject")).name or args.name
    return [f'Successfully updated model object "{name}" (ID: {args.model_object_id})']


def delete_model_object(ctx: ToolContext, args) -> list[str]:
    ctx.client.delete_model_object(args.landscape_id, args.model_object_id, args.version_id)
    return [f"Successfully deleted model object with ID: {args.model_object_id}"]


# -----------------------------------------------------------------------------
# Model connections
# -----------------------------------------------------------------------------
def get_model_connections(ctx: ToolContext, args) -> list[str]:
    filters = args.set_fields(exclude=PATH_FIELDS | {"search"})
    response = ctx.client.get_model_connections(args.landscape_id, args.version_id, filters)
    connections = [ModelConnection.from_json(r) for r in _records(response, "modelConnections")]
    connections = fuzzy_search(connections, args.search, ["name", "description"])
    return [format_connection_list_item(c) for c in connections]


def get_model_connection(ctx: ToolContext, args) -> list[str]:
    response = ctx.client.get_model_connection(args.landscape_id, args.connection_id, args.version_id)
    connection = ModelConnection.from_json(_unwrap(response, "modelConnection"))
    return [format_connection_list_item(connection)]


def create_model_connection(ctx: ToolContext, args) -> list[str]:
    response = ctx.client.create_model_connection(
        args.landscape_id, args.present_fields(exclude=PATH_FIELDS), args.version_id
    )
    connection_id = _created_id(response, "modelConnection")
    return [f'Successfully created connection "{args.name}" (ID: {connection_id})']


def update_model_connection(ctx: ToolContext, args) -> list[str]:
    response = ctx.client.update_model_connection(
        args.landscape_id,
        args.connection_id,
        args.set_fields(exclude=PATH_FIELDS | {"connection_id"}),
        args.version_id,
    )
    name = ModelConnection.from_json(_unwrap(response, "modelConnection")).name or args.name
    return [f'Successfully updated connection "{name}" (ID: {args.connection_id})']


def delete_model_connection(ctx: ToolContext, args) -> list[str]:
    ctx.client.delete_model_connection(args.landscape_id, args.connection_id, args.version_id)
    return [f"Successfully deleted connection with ID: {args.connection_id}"]


# -----------------------------------------------------------------------------
# Domains
# -----------------------------------------------------------------------------
def create_domain(ctx: ToolContext, args) -> list[str]:
    response = ctx.client.create_domain(
        args.landscape_id, args.present_fields(exclude=PATH_FIELDS), args.version_id
    )
    domain_id = _created_id(response, "domain")
    return [f'Successfully created domain "{args.name}" (ID: {domain_id})']


def update_domain(ctx: ToolContext, args) -> list[str]:
    response = ctx.client.update_domain(
        args.landscape_id,
        args.domain_id,
        args.set_fields(exclude=PATH_FIELDS | {"domain_id"}),
        args.version_id,
    )
    name = _unwrap(response, "domain").get("name") or args.name
    return [f'Successfully updated domain "{name}" (ID: {args.domain_id})']


# -----------------------------------------------------------------------------
# Technologies & teams
# -----------------------------------------------------------------------------
def get_technology_catalog(ctx: ToolContext, args) -> list[str]:
    """Approved catalog technologies followed by the organization's own."""
    filters = args.set_fields(exclude={"search"})
    catalog = ctx.client.get_catalog_technologies({**filters, "status": "approved"})
    organization = ctx.client.get_organization_technologies(filters)

    technologies = [
        CatalogTechnology.from_json(r)
        for r in _records(catalog, "catalogTechnologies") + _records(organization, "catalogTechnologies")
    ]
    technologies = fuzzy_search(technologies, args.search, ["name", "description"])
    return [format_catalog_technology(t) for t in technologies]


def create_organization_technology(ctx: ToolContext, args) -> list[str]:
    response = ctx.client.create_organization_technology(args.present_fields())
    technology_id = _created_id(response, "catalogTechnology")
    return [f'Successfully created technology "{args.name}" (ID: {technology_id})']


def get_teams(ctx: ToolContext, args) -> list[str]:
    teams = [Team.from_json(r) for r in _records(ctx.client.get_teams(), "teams")]
    teams = fuzzy_search(teams, args.search, ["name"])
    return [format_team(team) for team in teams]


# -----------------------------------------------------------------------------
# Diagrams
# -----------------------------------------------------------------------------
def _require_diagram(response: Any) -> Diagram:
    data = response.get("diagram") if isinstance(response, dict) else None
    if not isinstance(data, dict) or not data.get("id"):
        raise IcePanelError("Failed to get diagram ID from response")
    return Diagram.from_json(data)


def get_diagrams(ctx: ToolContext, args) -> list[str]:
    response = ctx.client.get_diagrams(args.landscape_id, args.version_id)
    return [format_diagram(Diagram.from_json(r)) for r in _records(response, "diagrams")]


def get_diagram(ctx: ToolContext, args) -> list[str]:
    response = ctx.client.get_diagram(args.landscape_id, args.diagram_id, args.version_id)
    return [format_diagram(_require_diagram(response))]


def create_diagram(ctx: ToolContext, args) -> list[str]:
    body = args.present_fields(exclude=PATH_FIELDS)
    logger.info("Creating diagram %r with %d objects", args.name, len(args.object_ids))
    diagram = _require_diagram(ctx.client.create_diagram(args.landscape_id, body, args.version_id))

    count = len(args.object_ids)
    objects_text = f" with {count} objects" if count else ""
    return [f'Successfully created diagram "{args.name}" (ID: {diagram.id}){objects_text}']


def update_diagram(ctx: ToolContext, args) -> list[str]:
    body = args.set_fields(exclude=PATH_FIELDS | {"diagram_id"})
    if body.get("objectIds") == []:
        logger.warning("Updating diagram %s with an empty objectIds list", args.diagram_id)
    response = ctx.client.update_diagram(args.landscape_id, args.diagram_id, body, args.version_id)
    name = args.name or _unwrap(response, "diagram").get("name") or ""
    return [f'Successfully updated diagram "{name}" (ID: {args.diagram_id})']


def delete_diagram(ctx: ToolContext, args) -> list[str]:
    ctx.client.delete_diagram(args.landscape_id, args.diagram_id, args.version_id)
    return [f"Successfully deleted diagram with ID: {args.diagram_id}"]


def add_objects_to_diagram(ctx: ToolContext, args) -> list[str]:
    """Read the diagram, union its object IDs with the new ones, write back."""
    current = _require_diagram(
        ctx.client.get_diagram(args.landscape_id, args.diagram_id, args.version_id)
    )
    object_ids = merge_object_ids(current.object_ids, args.object_ids)
    logger.info(
        "Diagram %s: %d existing objects, %d after merge",
        args.diagram_id, len(current.object_ids), len(object_ids),
    )

    response = ctx.client.update_diagram(
        args.landscape_id, args.diagram_id, {"objectIds": object_ids}, args.version_id
    )
    name = _unwrap(response, "diagram").get("name") or current.name
    return [
        f'Successfully added {len(args.object_ids)} objects to diagram "{name}" '
        f"(ID: {args.diagram_id}).\nThe diagram now contains {len(object_ids)} objects."
    ]
