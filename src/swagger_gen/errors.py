"""Fatal errors raised while generating a Swagger document.

Anything not covered here degrades to a documented fallback instead of
aborting generation.
"""


class SwaggerGenError(Exception):
    """Base class for every generation failure surfaced to the caller."""


class UnknownSwaggerDocument(SwaggerGenError):
    def __init__(self, document_name: str):
        self.document_name = document_name
        super().__init__(f"Unknown Swagger document - {document_name}")


class SchemaIdConflictError(SwaggerGenError):
    def __init__(self, schema_id: str, type_name: str, existing_type_name: str):
        self.schema_id = schema_id
        super().__init__(
            f"Conflicting schemaIds: Identical schemaIds detected for types {type_name} and "
            f"{existing_type_name}. See config settings - \"use_full_type_names_in_schema_ids\" "
            f"or \"custom_schema_ids\" for a workaround"
        )


class AmbiguousHttpMethodError(SwaggerGenError):
    def __init__(self, display_name: str):
        self.display_name = display_name
        super().__init__(
            f"Ambiguous HTTP method for action - {display_name}. "
            "Actions require an explicit HttpMethod binding for Swagger"
        )


class ConflictingActionsError(SwaggerGenError):
    def __init__(self, http_method: str, path: str, display_names: list[str]):
        self.http_method = http_method
        self.path = path
        self.display_names = display_names
        super().__init__(
            f"HTTP method \"{http_method}\" & path \"{path}\" overloaded by actions - "
            f"{','.join(display_names)}. Actions require unique method/path combination for Swagger"
        )
