"""Formula expression rewriting between schema keys and Notion references."""

import re
from urllib.parse import quote

from schema2notion.models import Schema

# prop("key")
PROP_PATTERN = re.compile(r'prop\("([^"]+)"\)')

# {{notion:block_property:<encoded_property_id>:<data_source_id>:<page_id>}}
BLOCK_PROPERTY_PATTERN = re.compile(r"\{\{notion:block_property:([^:]+):([^:]+):([^}]+)\}\}")


def encode_property_id(property_id: str) -> str:
    """Percent-encode a property ID the way Notion embeds it in expressions."""
    return quote(property_id, safe="!~*'()")


def build_expression(expression: str, schema: Schema) -> str:
    """Replace ``prop("key")`` references with ``prop("Label")``.

    Unknown keys are left untouched.

    Example:
        >>> schema = {"unit_price": number("Unit Price")}
        >>> build_expression('prop("unit_price") * 2', schema)
        'prop("Unit Price") * 2'
    """

    def replace(match: re.Match) -> str:
        field = schema.get(match.group(1))
        if field is None:
            return match.group(0)
        return f'prop("{field.label}")'

    return PROP_PATTERN.sub(replace, expression)


def restore_expression(expression: str, data_source_id: str, schema: Schema) -> str:
    """Replace Notion block property references with ``prop("key")``.

    Only references into ``data_source_id`` whose property ID matches a
    schema field are rewritten; everything else is kept byte for byte.
    """
    key_by_encoded_id = {
        encode_property_id(field.id): key for key, field in schema.items() if field.id
    }

    def replace(match: re.Match) -> str:
        encoded_id, reference_data_source_id = match.group(1), match.group(2)
        if reference_data_source_id != data_source_id:
            return match.group(0)
        key = key_by_encoded_id.get(encoded_id)
        if key is None:
            return match.group(0)
        return f'prop("{key}")'

    return BLOCK_PROPERTY_PATTERN.sub(replace, expression)
