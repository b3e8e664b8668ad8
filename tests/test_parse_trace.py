"""Unit tests for parse trace rendering.

These tests pin the exact text of the diagnostic breadcrumb that
``ContentFieldError`` embeds: the ``Parents`` chain, the current type and
field, and the structured ``Content`` dump of the raw value.
"""

from __future__ import annotations

from textwrap import dedent

from cms_pages.parse_trace import ParseTrace, export_value

TEAM = [
    {
        "name": "Bob Smith",
        "job_title": "Developer",
        "department": {"dept_name": "Design"},
    }
]


def test_root_frame_has_no_parents_line() -> None:
    """A frame without a parent renders type, field, and content only."""
    status = ParseTrace("news")
    status.record("id", "number", 5)

    expected = "Type: news\nSchemaField: id (number)\nContent: 5\n"
    assert str(status) == expected, f"unexpected root trace: {str(status)!r}"


def test_nested_value_is_dumped_as_indented_structure() -> None:
    """Nested lists and mappings render as indented ``array (...)`` blocks."""
    status = ParseTrace("news")
    status.record("team", "array", TEAM)

    expected = (
        "Type: news\n"
        "SchemaField: team (array)\n"
        "Content: array (\n"
        "  0 => \n"
        "  array (\n"
        "    'name' => 'Bob Smith',\n"
        "    'job_title' => 'Developer',\n"
        "    'department' => \n"
        "    array (\n"
        "      'dept_name' => 'Design',\n"
        "    ),\n"
        "  ),\n"
        ")\n"
    )
    assert str(status) == expected, f"unexpected nested dump: {str(status)!r}"


def test_record_replaces_current_field_on_same_frame() -> None:
    """Recording a second field overwrites the first rather than stacking."""
    status = ParseTrace("news")
    team = ParseTrace("author", status)
    status.record("team", "array", TEAM)
    team.record("name", "text", "Bob Smith")
    team.record("job_title", "text", "Developer")

    expected = dedent(
        """\
        Parents: news > team (array)
        Type: author
        SchemaField: job_title (text)
        Content: 'Developer'
        """
    )
    assert str(team) == expected, f"unexpected child trace: {str(team)!r}"


def test_parents_chain_lists_every_ancestor_field() -> None:
    """Three levels deep, each ancestor contributes its type and field."""
    status = ParseTrace("news")
    status.record("team", "array", TEAM)
    author = ParseTrace("author", status)
    author.record("department", "relation", {"department": {"dept_name": "Design"}})
    department = ParseTrace("department", author)
    department.record("dept_name", "text", "Design")

    assert department.breadcrumb() == (
        "news > team (array) > author > department (relation)"
    ), f"unexpected breadcrumb: {department.breadcrumb()!r}"
    assert str(department).startswith(
        "Parents: news > team (array) > author > department (relation)\n"
        "Type: department\n"
        "SchemaField: dept_name (text)\n"
        "Content: 'Design'\n"
    )


def test_scalars_use_literal_forms() -> None:
    """None, booleans, floats, and quoted strings follow the dump convention."""
    assert export_value(None) == "NULL"
    assert export_value(True) == "true"
    assert export_value(False) == "false"
    assert export_value(1.5) == "1.5"
    assert export_value("it's") == "'it\\'s'"
    assert export_value([]) == "array (\n)"
