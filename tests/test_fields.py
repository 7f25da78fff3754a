"""Tests for schema2notion.fields -- field shorthands."""

import inspect

import pytest

from schema2notion import fields
from schema2notion.models import schema_adapter

SHORTHANDS = [
    (fields.title, ("Name",), "title"),
    (fields.text, ("Notes",), "rich_text"),
    (fields.number, ("Price",), "number"),
    (fields.select, ("Priority",), "select"),
    (fields.multi_select, ("Tags",), "multi_select"),
    (fields.status, ("Progress",), "status"),
    (fields.date, ("Due",), "date"),
    (fields.people, ("Owner",), "people"),
    (fields.files, ("Attachments",), "files"),
    (fields.checkbox, ("Done",), "checkbox"),
    (fields.url, ("Website",), "url"),
    (fields.email, ("Email",), "email"),
    (fields.phone, ("Phone",), "phone_number"),
    (fields.formula, ("Total", "1 + 1"), "formula"),
    (fields.relation, ("Project", "ds1"), "relation"),
    (fields.rollup, ("Points", "Tasks", "Estimate", "sum"), "rollup"),
    (fields.created_time, ("Created",), "created_time"),
    (fields.created_by, ("Author",), "created_by"),
    (fields.last_edited_time, ("Edited",), "last_edited_time"),
    (fields.last_edited_by, ("Editor",), "last_edited_by"),
    (fields.unique_id, ("ID",), "unique_id"),
]


class TestShorthands:
    @pytest.mark.parametrize("shorthand, args, field_type", SHORTHANDS)
    def test_builds_field_of_type(self, shorthand, args, field_type):
        field = shorthand(*args, id="abc")
        assert field.type == field_type
        assert field.label == args[0]
        assert field.id == "abc"

    @pytest.mark.parametrize("shorthand, args, field_type", SHORTHANDS)
    def test_documented(self, shorthand, args, field_type):
        assert inspect.getdoc(shorthand)

    def test_every_public_shorthand_listed(self):
        public = {
            name
            for name, obj in vars(fields).items()
            if inspect.isfunction(obj) and obj.__module__ == fields.__name__ and not name.startswith("_")
        }
        assert public == {shorthand.__name__ for shorthand, _, _ in SHORTHANDS}

    def test_schema_dump_loads_back(self):
        schema = {"name": fields.title("Name"), "project": fields.relation("Project", "ds1", single=False)}
        dumped = schema_adapter.dump_python(schema, mode="json")
        assert schema_adapter.validate_python(dumped) == schema
