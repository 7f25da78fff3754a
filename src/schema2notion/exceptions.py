"""Custom exceptions for schema2notion."""


class Schema2NotionError(Exception):
    """Base exception for all schema2notion errors."""


class ConfigurationError(Schema2NotionError):
    """Configuration or input file error."""


class SchemaConflictError(Schema2NotionError):
    """Remote data source has fields the local schema does not declare."""

    def __init__(self, keys: list[str]):
        self.keys = keys
        super().__init__(f"Unrecognized remote fields: {', '.join(keys)}")


class MissingSchemaError(Schema2NotionError):
    """An operation needs a schema that was not provided."""


class MissingSchemaFieldError(MissingSchemaError):
    """A key was referenced that the schema does not declare."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f'Property "{key}" not found in schema.')


class UnsupportedFilterTypeError(Schema2NotionError):
    """Field type cannot be used to match records for an upsert."""

    def __init__(self, field_type: str, key: str | None = None):
        self.field_type = field_type
        self.key = key
        super().__init__(
            f'Property type "{field_type}" is not supported for upsert matching. '
            "Use a property with type: title, rich_text, number, checkbox, select, "
            "status, email, url, phone_number, relation, or unique_id."
        )
