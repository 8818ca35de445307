# =============================================================================
# core/format.py  —  Text Renderers
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns records from core/models.py into the markdown-ish text blocks a
#   tool returns.  Each record kind has a fixed field order, and a field is
#   printed only when the record actually has it.  An LLM reads this output,
#   so it stays short and predictable.
# =============================================================================

from typing import Optional, Sequence

from core.models import (
    CatalogTechnology,
    Diagram,
    Landscape,
    ModelConnection,
    ModelObject,
    Team,
    Version,
)

DESCRIPTION_PREVIEW_LENGTH = 150


def to_markdown_link(text: str, url: str) -> str:
    return f"[{text}]({url})"


def model_object_url(app_base_url: str, landscape_id: str, handle_id: str) -> str:
    """Deep link to the object's details panel in the IcePanel web app."""
    return (
        f"{app_base_url}/landscapes/{landscape_id}/versions/latest/model/objects"
        f"?object_tab=details&object={handle_id}"
    )


def truncate_description(text: str, max_length: int = DESCRIPTION_PREVIEW_LENGTH) -> str:
    """Cut ``text`` at the last space before ``max_length`` and add "..."."""
    if len(text) <= max_length:
        return text
    last_space = text.rfind(" ", 0, max_length)
    return text[: last_space if last_space > 0 else max_length] + "..."


def _bool_text(value: bool) -> str:
    return "true" if value else "false"


# -----------------------------------------------------------------------------
# Model objects
# -----------------------------------------------------------------------------
def format_model_object_list_item(model_object: ModelObject) -> str:
    """Short summary used by list/search results."""
    lines = []
    if model_object.name:
        lines.append(f"# {model_object.name}")
    if model_object.id:
        lines.append(f"- ID: {model_object.id}")
    if model_object.name:
        lines.append(f"- Name: {model_object.name}")
    if model_object.description:
        lines.append("- Description:")
        lines.append(truncate_description(model_object.description))
    if model_object.type:
        lines.append(f"- Type: {model_object.type}")
    if model_object.external is not None:
        lines.append(f"- External: {_bool_text(model_object.external)}")
    if model_object.status:
        lines.append(f"- Status: {model_object.status}")
    return "\n".join(lines) + "\n"


def format_model_object_related_item(model_object: ModelObject) -> str:
    """Compact entry for an object mentioned from another object."""
    lines = []
    if model_object.name:
        lines.append(f"##### {model_object.name}")
    if model_object.id:
        lines.append(f"- ID: {model_object.id}")
    if model_object.name:
        lines.append(f"- Name: {model_object.name}")
    if model_object.type:
        lines.append(f"- Type: {model_object.type}")
    if model_object.status:
        lines.append(f"- Status: {model_object.status}")
    return "\n".join(lines) + "\n"


def format_model_object_item(
    model_object: ModelObject,
    *,
    landscape_id: str,
    app_base_url: str,
    teams: Sequence[Team] = (),
    parent: Optional[ModelObject] = None,
    children: Optional[Sequence[ModelObject]] = None,
) -> str:
    """Full detail view of one object, optionally with parent and children."""
    lines = []
    if model_object.name:
        lines.append(f"# {model_object.name}")
    if model_object.id:
        lines.append(f"- ID: {model_object.id}")
    if model_object.name:
        lines.append(f"- Name: {model_object.name}")
    if model_object.handle_id:
        url = model_object_url(app_base_url, landscape_id, model_object.handle_id)
        lines.append(f"- View in IcePanel: {url}")
    if model_object.description:
        lines.append(f"- Description:\n```\n{model_object.description}\n```")
    if model_object.type:
        lines.append(f"- Type: {model_object.type}")
    if model_object.external is not None:
        lines.append(f"- External: {_bool_text(model_object.external)}")
    if model_object.status:
        lines.append(f"- Status: {model_object.status}")
    if model_object.technology_names:
        lines.append(f"- Technologies: {', '.join(model_object.technology_names)}")
    if model_object.team_ids:
        team_names = {team.id: team.name for team in teams}
        names = [team_names[t] for t in model_object.team_ids if team_names.get(t)]
        if names:
            lines.append(f"- Teams: {', '.join(names)}")

    text = "\n".join(lines) + "\n"
    if parent is not None:
        text += "\n### Parent Object\n\n" + format_model_object_related_item(parent)
    if children:
        text += "\n### Child Objects\n\n"
        text += "\n".join(format_model_object_related_item(c) for c in children)
    return text


# -----------------------------------------------------------------------------
# Connections
# -----------------------------------------------------------------------------
def _describe(model_object: ModelObject) -> str:
    return f"{model_object.name} ({model_object.type})"


def format_connections(
    model_object: ModelObject,
    incoming: Sequence[ModelConnection],
    outgoing: Sequence[ModelConnection],
    model_objects: Sequence[ModelObject],
) -> str:
    """Relationship summary for one object.

    Connections whose other end isn't in ``model_objects`` are skipped.
    """
    by_id = {o.id: o for o in model_objects}
    referenced: dict[str, ModelObject] = {}

    text = f"# {model_object.name} - Connections\n\n"
    if not incoming and not outgoing:
        return text + "No connections found.\n"

    if incoming:
        lines = []
        for connection in incoming:
            origin = by_id.get(connection.origin_id)
            if origin is None:
                continue
            referenced.setdefault(origin.id, origin)
            lines.append(f"{_describe(origin)} -[{connection.name}]-> {_describe(model_object)}")
        text += "### Incoming connections\n" + "\n".join(lines) + "\n\n"

    if outgoing:
        lines = []
        for connection in outgoing:
            target = by_id.get(connection.target_id)
            if target is None:
                continue
            referenced.setdefault(target.id, target)
            lines.append(f"{_describe(model_object)} -[{connection.name}]-> {_describe(target)}")
        text += "### Outgoing connections\n" + "\n".join(lines) + "\n\n"

    if referenced:
        text += "### Referenced Model Objects\n\n"
        text += "\n".join(format_model_object_related_item(o) for o in referenced.values())
    return text


def format_connection_list_item(connection: ModelConnection) -> str:
    lines = []
    if connection.name:
        lines.append(f"# {connection.name}")
    if connection.id:
        lines.append(f"- ID: {connection.id}")
    if connection.origin_id:
        lines.append(f"- Origin ID: {connection.origin_id}")
    if connection.target_id:
        lines.append(f"- Target ID: {connection.target_id}")
    if connection.direction:
        lines.append(f"- Direction: {connection.direction}")
    if connection.description:
        lines.append(f"- Description: {truncate_description(connection.description)}")
    if connection.status:
        lines.append(f"- Status: {connection.status}")
    return "\n".join(lines) + "\n"


# -----------------------------------------------------------------------------
# Technologies, teams, diagrams, landscapes, versions
# -----------------------------------------------------------------------------
def format_catalog_technology(technology: CatalogTechnology) -> str:
    lines = [
        f"# {technology.name}",
        "",
        f"- Name: {technology.name}",
        f"- ID: {technology.id}",
    ]
    if technology.name_short:
        lines.append(f"- Short Name: {technology.name_short}")
    if technology.description:
        lines.append(f"- Description: {technology.description}")
    if technology.docs_url:
        lines.append(f"- Documentation: {to_markdown_link('Docs', technology.docs_url)}")
    if technology.website_url:
        lines.append(f"- Website: {to_markdown_link('Website', technology.website_url)}")
    if technology.status:
        lines.append(f"- Status: {technology.status}")
    if technology.type:
        lines.append(f"- Type: {technology.type}")
    if technology.provider:
        lines.append(f"- Provider: {technology.provider}")
    if technology.category:
        lines.append(f"- Category: {technology.category}")
    if technology.default_slug:
        lines.append(f"- Slug: {technology.default_slug}")
    return "\n".join(lines) + "\n"


def format_team(team: Team) -> str:
    lines = []
    if team.name:
        lines.append(f"# {team.name}")
    if team.id:
        lines.append(f"- ID: {team.id}")
    if team.name:
        lines.append(f"- Name: {team.name}")
    if team.user_ids:
        lines.append(f"- Team size: {len(team.user_ids)}")
    return "\n".join(lines) + "\n"


def format_diagram(diagram: Diagram) -> str:
    lines = []
    if diagram.name:
        lines.append(f"# {diagram.name}")
    if diagram.id:
        lines.append(f"- ID: {diagram.id}")
    if diagram.view_type:
        lines.append(f"- View type: {diagram.view_type}")
    if diagram.description:
        lines.append(f"- Description: {diagram.description}")
    if diagram.root_object_id:
        lines.append(f"- Root object ID: {diagram.root_object_id}")
    if diagram.object_ids:
        lines.append(f"- Objects ({len(diagram.object_ids)}): {', '.join(diagram.object_ids)}")
    if diagram.created_at:
        lines.append(f"- Created: {diagram.created_at}")
    if diagram.updated_at:
        lines.append(f"- Updated: {diagram.updated_at}")
    return "\n".join(lines) + "\n"


def format_landscape(landscape: Landscape) -> str:
    lines = []
    if landscape.name:
        lines.append(f"# {landscape.name}")
    if landscape.id:
        lines.append(f"- ID: {landscape.id}")
    if landscape.description:
        lines.append(f"- Description: {landscape.description}")
    if landscape.visibility:
        lines.append(f"- Visibility: {landscape.visibility}")
    return "\n".join(lines) + "\n"


def format_version(version: Version) -> str:
    lines = []
    if version.name:
        lines.append(f"# {version.name}")
    if version.id:
        lines.append(f"- ID: {version.id}")
    if version.landscape_id:
        lines.append(f"- Landscape ID: {version.landscape_id}")
    if version.description:
        lines.append(f"- Description: {version.description}")
    if version.created_at:
        lines.append(f"- Created: {version.created_at}")
    return "\n".join(lines) + "\n"
