"""Tests for Notion parser module."""

import unittest
from datetime import UTC, date, datetime, timedelta
from typing import Any

from src.notion.models import TaskCreate, TaskUpdate
from src.notion.parser import (
    build_description_blocks,
    build_task_properties,
    parse_database,
    parse_notion_date,
    parse_notion_timestamp,
    parse_page_to_task,
    to_notion_properties,
)


def _page(properties: dict[str, Any], **envelope: Any) -> dict[str, Any]:
    page = {
        "id": "page-1",
        "url": "https://notion.so/page-1",
        "created_time": "2024-03-04T10:00:00.000Z",
        "last_edited_time": "2024-03-05T12:30:00.000Z",
        "properties": properties,
    }
    page.update(envelope)
    return page


class TestParsePageToTask(unittest.TestCase):
    """Tests for parse_page_to_task function."""

    def test_parse_full_page(self) -> None:
        """Test parsing a page with all properties populated."""
        page = _page(
            {
                "Name": {"title": [{"plain_text": "Write report"}]},
                "Description": {"rich_text": [{"plain_text": "Quarterly numbers"}]},
                "Status": {"select": {"name": "In Progress"}},
                "Priority": {"select": {"name": "High"}},
                "Assignee": {"people": [{"name": "Alex"}, {"name": "Sam"}]},
                "Due Date": {"date": {"start": "2024-03-08"}},
                "Tags": {"multi_select": [{"name": "finance"}, {"name": "q1"}]},
            }
        )

        task = parse_page_to_task(page)

        self.assertEqual(task.id, "page-1")
        self.assertEqual(task.title, "Write report")
        self.assertEqual(task.description, "Quarterly numbers")
        self.assertEqual(task.status, "In Progress")
        self.assertEqual(task.priority, "High")
        self.assertEqual(task.assignee, "Alex")
        self.assertEqual(task.due_date, "2024-03-08")
        self.assertEqual(task.tags, ["finance", "q1"])
        self.assertEqual(task.url, "https://notion.so/page-1")
        self.assertEqual(task.created_time, "2024-03-04T10:00:00.000Z")
        self.assertEqual(task.last_edited_time, "2024-03-05T12:30:00.000Z")

    def test_missing_title_defaults_to_untitled(self) -> None:
        """Test that a page without a Name property is titled Untitled."""
        task = parse_page_to_task(_page({}))

        self.assertEqual(task.title, "Untitled")

    def test_empty_title_defaults_to_untitled(self) -> None:
        """Test that an empty title array is titled Untitled."""
        task = parse_page_to_task(_page({"Name": {"title": []}}))

        self.assertEqual(task.title, "Untitled")

    def test_title_falls_back_to_text_content(self) -> None:
        """Test that title uses text.content when plain_text is absent."""
        page = _page({"Name": {"title": [{"type": "text", "text": {"content": "Draft"}}]}})

        task = parse_page_to_task(page)

        self.assertEqual(task.title, "Draft")

    def test_missing_properties_map_to_none(self) -> None:
        """Test that absent optional properties are None."""
        task = parse_page_to_task(_page({"Name": {"title": [{"plain_text": "Only title"}]}}))

        self.assertIsNone(task.description)
        self.assertIsNone(task.status)
        self.assertIsNone(task.priority)
        self.assertIsNone(task.assignee)
        self.assertIsNone(task.due_date)
        self.assertIsNone(task.tags)

    def test_malformed_properties_do_not_raise(self) -> None:
        """Test that reshaped properties are read as None instead of raising."""
        page = _page(
            {
                "Name": "not-a-dict",
                "Status": {"select": None},
                "Priority": {"status": {"name": "High"}},
                "Assignee": {"people": None},
                "Due Date": {"date": None},
                "Tags": {"multi_select": "urgent"},
            }
        )

        task = parse_page_to_task(page)

        self.assertEqual(task.title, "Untitled")
        self.assertIsNone(task.status)
        self.assertIsNone(task.priority)
        self.assertIsNone(task.assignee)
        self.assertIsNone(task.due_date)
        self.assertIsNone(task.tags)

    def test_page_without_properties_key(self) -> None:
        """Test that a page with no properties object still parses."""
        task = parse_page_to_task({"id": "page-2"})

        self.assertEqual(task.id, "page-2")
        self.assertEqual(task.title, "Untitled")
        self.assertIsNone(task.url)

    def test_description_falls_back_to_first_paragraph(self) -> None:
        """Test that description is read from the first paragraph block."""
        page = _page(
            {"Name": {"title": [{"plain_text": "Task"}]}},
            children=[
                {"type": "heading_1", "heading_1": {"rich_text": [{"plain_text": "Heading"}]}},
                {"type": "paragraph", "paragraph": {"rich_text": [{"plain_text": "Body text"}]}},
            ],
        )

        task = parse_page_to_task(page)

        self.assertEqual(task.description, "Body text")

    def test_description_property_takes_precedence(self) -> None:
        """Test that the Description property wins over page blocks."""
        page = _page(
            {
                "Name": {"title": [{"plain_text": "Task"}]},
                "Description": {"rich_text": [{"plain_text": "From property"}]},
            },
            children=[
                {"type": "paragraph", "paragraph": {"rich_text": [{"plain_text": "From block"}]}}
            ],
        )

        task = parse_page_to_task(page)

        self.assertEqual(task.description, "From property")


class TestBuildTaskProperties(unittest.TestCase):
    """Tests for build_task_properties and to_notion_properties."""

    def test_build_all_fields(self) -> None:
        """Test building properties with every field set."""
        properties = build_task_properties(
            title="Write report",
            status="Not Started",
            priority="High",
            assignee="Alex",
            due_date="2024-03-08",
            tags=["finance", "q1"],
        )

        self.assertEqual(
            properties,
            {
                "Name": {"title": [{"type": "text", "text": {"content": "Write report"}}]},
                "Status": {"select": {"name": "Not Started"}},
                "Priority": {"select": {"name": "High"}},
                "Assignee": {"people": [{"name": "Alex"}]},
                "Due Date": {"date": {"start": "2024-03-08"}},
                "Tags": {"multi_select": [{"name": "finance"}, {"name": "q1"}]},
            },
        )

    def test_none_values_are_skipped(self) -> None:
        """Test that None values produce no key."""
        properties = build_task_properties(title="Task", status=None, priority=None)

        self.assertEqual(list(properties), ["Name"])

    def test_unknown_field_raises_value_error(self) -> None:
        """Test that unknown fields are rejected."""
        with self.assertRaises(ValueError) as context:
            build_task_properties(effort="High")

        self.assertIn("Unknown field", str(context.exception))

    def test_partial_update_only_contains_set_fields(self) -> None:
        """Test that an update with only status produces only a Status key."""
        properties = to_notion_properties(TaskUpdate(status="Done"))

        self.assertEqual(properties, {"Status": {"select": {"name": "Done"}}})

    def test_description_is_not_a_property(self) -> None:
        """Test that description never appears in the properties payload."""
        properties = to_notion_properties(TaskCreate(title="Task", description="Body"))

        self.assertNotIn("Description", properties)
        self.assertEqual(list(properties), ["Name"])

    def test_empty_update_produces_empty_payload(self) -> None:
        """Test that an empty update produces no properties."""
        self.assertEqual(to_notion_properties(TaskUpdate()), {})

    def test_title_only_create_round_trips(self) -> None:
        """Test that a title-only task maps back with every other field unset."""
        properties = to_notion_properties(TaskCreate(title="Write report"))
        page = {"id": "page-1", "properties": properties}

        task = parse_page_to_task(page)

        self.assertEqual(task.title, "Write report")
        self.assertIsNone(task.status)
        self.assertIsNone(task.priority)
        self.assertIsNone(task.assignee)
        self.assertIsNone(task.due_date)
        self.assertIsNone(task.tags)
        self.assertIsNone(task.description)


class TestBuildDescriptionBlocks(unittest.TestCase):
    """Tests for build_description_blocks function."""

    def test_description_becomes_single_paragraph(self) -> None:
        """Test that a description maps to one paragraph block."""
        blocks = build_description_blocks("Some details")

        self.assertEqual(len(blocks), 1)
        self.assertEqual(blocks[0]["type"], "paragraph")
        self.assertEqual(
            blocks[0]["paragraph"]["rich_text"][0]["text"]["content"], "Some details"
        )

    def test_empty_description_produces_no_blocks(self) -> None:
        """Test that None or empty descriptions produce no blocks."""
        self.assertEqual(build_description_blocks(None), [])
        self.assertEqual(build_description_blocks(""), [])


class TestParseDatabase(unittest.TestCase):
    """Tests for parse_database function."""

    def test_parse_database(self) -> None:
        """Test parsing a database response."""
        database = parse_database(
            {
                "id": "db-123",
                "title": [{"plain_text": "Team Tasks"}],
                "url": "https://notion.so/db-123",
                "properties": {"Name": {"type": "title"}},
            }
        )

        self.assertEqual(database.id, "db-123")
        self.assertEqual(database.title, "Team Tasks")
        self.assertEqual(database.url, "https://notion.so/db-123")
        self.assertEqual(database.properties, {"Name": {"type": "title"}})

    def test_untitled_database(self) -> None:
        """Test that a database without a title is Untitled."""
        database = parse_database({"id": "db-123", "title": []})

        self.assertEqual(database.title, "Untitled")
        self.assertEqual(database.properties, {})


class TestParseNotionDate(unittest.TestCase):
    """Tests for parse_notion_date and parse_notion_timestamp."""

    def test_date_only_stays_a_date(self) -> None:
        """Test that a due date without a time is a plain date."""
        self.assertEqual(parse_notion_date("2024-03-08"), date(2024, 3, 8))

    def test_timestamp_keeps_offset(self) -> None:
        """Test that an offset timestamp is aware and keeps its offset."""
        parsed = parse_notion_date("2024-03-08T09:00:00+02:00")

        self.assertEqual(parsed, datetime(2024, 3, 8, 7, 0, tzinfo=UTC))
        self.assertEqual(parsed.utcoffset(), timedelta(hours=2))

    def test_naive_timestamp_read_as_utc(self) -> None:
        """Test that a timestamp without an offset is treated as UTC."""
        parsed = parse_notion_date("2024-03-08T09:00:00")

        self.assertEqual(parsed, datetime(2024, 3, 8, 9, 0, tzinfo=UTC))

    def test_missing_or_malformed(self) -> None:
        """Test that empty and malformed values give None."""
        for value in (None, "", "next tuesday", "2024-13-40"):
            with self.subTest(value=value):
                self.assertIsNone(parse_notion_date(value))
                self.assertIsNone(parse_notion_timestamp(value))

    def test_timestamp_from_date_is_midnight_utc(self) -> None:
        """Test that a date-only value becomes midnight UTC."""
        self.assertEqual(
            parse_notion_timestamp("2024-03-08"), datetime(2024, 3, 8, tzinfo=UTC)
        )
        self.assertEqual(
            parse_notion_timestamp("2024-01-01T10:00:00.500Z"),
            datetime(2024, 1, 1, 10, 0, 0, 500000, tzinfo=UTC),
        )


if __name__ == "__main__":
    unittest.main()
