"""Data models for the scraped API documentation.

The object and endpoint extractors build these records; the schema
pipeline serializes them with their wire names (``isNullable``,
``pathParams``...) for the code generator.
"""

from pydantic import BaseModel, ConfigDict, Field

# Closed set of type tags a Parameter may carry.
PRIMITIVE_TYPES = frozenset(
    {"string", "integer", "float", "boolean", "object", "array", "any", "buffer"}
)


class Parameter(BaseModel):
    """One field of an object, or one path/query/body argument of an endpoint.

    At most one of the three reference fields is set at a time; use the
    ``set_*_reference`` helpers rather than assigning them directly.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None  # unset for array element descriptors
    type: str = "string"
    optional: bool = False
    is_nullable: bool = Field(default=False, alias="isNullable")
    description: str = ""
    schema_: list["Parameter"] | None = Field(default=None, alias="schema")
    object_reference: str | None = None
    partial_object_reference: str | None = None
    enum_reference: str | None = None

    def clear_references(self) -> None:
        self.object_reference = None
        self.partial_object_reference = None
        self.enum_reference = None

    def set_object_reference(self, name: str) -> None:
        self.clear_references()
        self.object_reference = name

    def set_partial_object_reference(self, name: str) -> None:
        self.clear_references()
        self.partial_object_reference = name

    def set_enum_reference(self, name: str) -> None:
        self.clear_references()
        self.enum_reference = name


class ApiObject(BaseModel):
    """A named reusable structure documented by a field table."""

    name: str
    fields: list[Parameter]


class ReferenceRegistry(BaseModel):
    """Names referenced while parsing, checked once each discovery phase ends."""

    objects: set[str] = Field(default_factory=set)
    enums: set[str] = Field(default_factory=set)
    types: set[str] = Field(default_factory=set)
    missing_docs: set[str] = Field(default_factory=set)

    def reset_types(self) -> None:
        self.types = set()


class Returns(BaseModel):
    type: str  # array / object


class Endpoint(BaseModel):
    """A single HTTP operation scraped from a documentation page.

    Raw endpoints come out of the extractor with an empty ``name`` and no
    ``returns``; naming and the fixups fill those in.
    """

    model_config = ConfigDict(populate_by_name=True)

    namespace: str
    name: str = ""
    title: str
    method: str  # GET / POST / PUT / PATCH / DELETE
    url: str  # /channels/{channel_id}/messages
    description: str = ""
    path_params: list[Parameter] = Field(default_factory=list, alias="pathParams")
    query_params: list[Parameter] = Field(default_factory=list, alias="queryParams")
    json_params: list[Parameter] = Field(default_factory=list, alias="jsonParams")
    returns: Returns | None = None
    supports_multipart: bool = False
