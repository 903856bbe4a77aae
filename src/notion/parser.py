"""Parser functions for Notion API responses.

This module handles the conversion between raw Notion API responses
and the Pydantic models used by the application. Reading is fail-soft:
database schemas are user-editable, so a missing or reshaped property
maps to None instead of raising.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from enum import StrEnum
from typing import Any

from src.notion.models import NotionDatabase, NotionTask, TaskCreate, TaskUpdate

UNTITLED = "Untitled"


class FieldType(StrEnum):
    """Notion property types for building API payloads."""

    TITLE = "title"
    SELECT = "select"
    PEOPLE = "people"
    DATE = "date"
    MULTI_SELECT = "multi_select"


@dataclass(frozen=True)
class TaskField:
    """Metadata for a task field mapping to Notion properties."""

    notion_name: str
    field_type: FieldType


# Field registry - add new fields here
TASK_FIELDS: dict[str, TaskField] = {
    "title": TaskField("Name", FieldType.TITLE),
    "status": TaskField("Status", FieldType.SELECT),
    "priority": TaskField("Priority", FieldType.SELECT),
    # People normally expects a workspace user id; only the display name is sent
    "assignee": TaskField("Assignee", FieldType.PEOPLE),
    "due_date": TaskField("Due Date", FieldType.DATE),
    "tags": TaskField("Tags", FieldType.MULTI_SELECT),
}

DESCRIPTION_PROPERTY = "Description"


def parse_page_to_task(page: dict[str, Any]) -> NotionTask:
    """Parse a Notion page response into a NotionTask model.

    :param page: Raw page object from Notion API response.
    :returns: Parsed NotionTask with extracted properties.
    """
    properties = _as_dict(page.get("properties"))

    return NotionTask(
        id=page["id"],
        title=_extract_title(_as_dict(properties.get("Name"))) or UNTITLED,
        description=_extract_description(page, properties),
        status=_extract_select(_as_dict(properties.get("Status"))),
        priority=_extract_select(_as_dict(properties.get("Priority"))),
        assignee=_extract_people(_as_dict(properties.get("Assignee"))),
        due_date=_extract_date(_as_dict(properties.get("Due Date"))),
        tags=_extract_multi_select(_as_dict(properties.get("Tags"))),
        created_time=page.get("created_time"),
        last_edited_time=page.get("last_edited_time"),
        url=page.get("url"),
    )


def parse_database(data: dict[str, Any]) -> NotionDatabase:
    """Parse a Notion database response into a NotionDatabase model.

    :param data: Raw database object from Notion API response.
    :returns: Database summary.
    """
    title = _first_plain_text(data.get("title")) or UNTITLED
    return NotionDatabase(
        id=data["id"],
        title=title,
        url=data.get("url"),
        properties=_as_dict(data.get("properties")),
    )


def parse_notion_date(value: str | None) -> datetime | date | None:
    """Parse a Notion date or timestamp string.

    Date-only values stay dates. Timestamps become aware datetimes, with
    naive ones read as UTC.

    :param value: ISO 8601 string as Notion returns it.
    :returns: The parsed value, or None if missing or malformed.
    """
    if not value:
        return None
    try:
        if "T" not in value:
            return date.fromisoformat(value)
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def parse_notion_timestamp(value: str | None) -> datetime | None:
    """Parse a Notion date or timestamp into an aware datetime.

    Date-only values become midnight UTC.
    """
    parsed = parse_notion_date(value)
    if isinstance(parsed, datetime):
        return parsed
    if isinstance(parsed, date):
        return datetime(parsed.year, parsed.month, parsed.day, tzinfo=UTC)
    return None


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _first_plain_text(items: Any) -> str | None:
    """Text of the first rich text item, preferring plain_text over text.content."""
    if not isinstance(items, list) or not items or not isinstance(items[0], dict):
        return None
    first = items[0]
    text = first.get("plain_text")
    if not text:
        text = _as_dict(first.get("text")).get("content")
    return text or None


def _extract_title(prop: dict[str, Any]) -> str | None:
    """Extract text from a title property."""
    return _first_plain_text(prop.get("title"))


def _extract_select(prop: dict[str, Any]) -> str | None:
    """Extract selected value from a select property."""
    return _as_dict(prop.get("select")).get("name")


def _extract_people(prop: dict[str, Any]) -> str | None:
    """Extract first person's name from a people property."""
    people = prop.get("people")
    if not isinstance(people, list) or not people:
        return None
    return _as_dict(people[0]).get("name")


def _extract_date(prop: dict[str, Any]) -> str | None:
    """Extract the start date string from a date property."""
    return _as_dict(prop.get("date")).get("start")


def _extract_multi_select(prop: dict[str, Any]) -> list[str] | None:
    """Extract option names from a multi_select property."""
    options = prop.get("multi_select")
    if not isinstance(options, list):
        return None
    return [option["name"] for option in options if isinstance(option, dict) and option.get("name")]


def _extract_rich_text(prop: dict[str, Any]) -> str | None:
    """Extract plain text from a rich_text property."""
    rich_text_items = prop.get("rich_text")
    if not isinstance(rich_text_items, list) or not rich_text_items:
        return None
    text = "".join(
        item.get("plain_text") or _as_dict(item.get("text")).get("content", "")
        for item in rich_text_items
        if isinstance(item, dict)
    )
    return text if text else None


def _extract_description(page: dict[str, Any], properties: dict[str, Any]) -> str | None:
    """Description property first, then the first paragraph block if children were included."""
    description = _extract_rich_text(_as_dict(properties.get(DESCRIPTION_PROPERTY)))
    if description is not None:
        return description

    children = page.get("children")
    if not isinstance(children, list):
        return None
    for block in children:
        block = _as_dict(block)
        if block.get("type") == "paragraph":
            return _first_plain_text(_as_dict(block.get("paragraph")).get("rich_text"))
    return None


def _build_property(field: TaskField, value: Any) -> dict[str, Any]:
    """Build a single Notion property payload."""
    match field.field_type:
        case FieldType.TITLE:
            return {field.notion_name: {"title": [{"type": "text", "text": {"content": value}}]}}
        case FieldType.SELECT:
            return {field.notion_name: {"select": {"name": value}}}
        case FieldType.PEOPLE:
            return {field.notion_name: {"people": [{"name": value}]}}
        case FieldType.DATE:
            return {field.notion_name: {"date": {"start": value}}}
        case FieldType.MULTI_SELECT:
            return {field.notion_name: {"multi_select": [{"name": tag} for tag in value]}}


def build_task_properties(**kwargs: Any) -> dict[str, Any]:
    """Build task properties payload from keyword arguments.

    Only includes properties that are explicitly set (not None), so a
    partial update never clears a property by accident.

    :param kwargs: Field name to value mappings.
    :returns: Combined properties object for the Notion API.
    :raises ValueError: If an unknown field name is provided.
    """
    properties: dict[str, Any] = {}

    for field_name, value in kwargs.items():
        if value is None:
            continue

        if field_name not in TASK_FIELDS:
            raise ValueError(f"Unknown field: {field_name}")

        properties.update(_build_property(TASK_FIELDS[field_name], value))

    return properties


def to_notion_properties(task: TaskCreate | TaskUpdate) -> dict[str, Any]:
    """Map a task model to a Notion properties payload.

    The description is not a property; see build_description_blocks.

    :param task: Task fields to map.
    :returns: Properties object containing only the fields that are set.
    """
    fields = task.model_dump(exclude_none=True, exclude={"description"})
    return build_task_properties(**fields)


def build_description_blocks(description: str | None) -> list[dict[str, Any]]:
    """Build the page body for a task description.

    :param description: Description text, may be empty.
    :returns: A single paragraph block, or an empty list.
    """
    if not description:
        return []
    return [
        {
            "object": "block",
            "type": "paragraph",
            "paragraph": {"rich_text": [{"type": "text", "text": {"content": description}}]},
        }
    ]
