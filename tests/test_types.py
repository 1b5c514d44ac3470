import pytest

from discord_schema.parser.base import Parameter, ReferenceRegistry
from discord_schema.parser.types import clean_type_text, infer_type, read_type


def _refs(p: Parameter) -> list[str]:
    return [r for r in (p.object_reference, p.partial_object_reference, p.enum_reference) if r]


class TestPrimitiveLookup:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("snowflake", "string"),
            ("ISO8601 timestamp", "string"),
            ("int", "integer"),
            ("number", "float"),
            ("dict", "object"),
            ("boolean", "boolean"),
            ("integer or string", "string"),
            ("?", "object"),
        ],
    )
    def test_lookup(self, text, expected):
        registry = ReferenceRegistry()
        p = infer_type(text, registry)
        assert p.type == expected
        assert _refs(p) == []
        assert registry.objects == set()

    def test_unknown_name_is_an_object_reference(self):
        registry = ReferenceRegistry()
        p = infer_type("welcome screen", registry)
        assert p.type == "object"
        assert p.object_reference == "welcome_screen"
        assert registry.objects == {"welcome_screen"}

    def test_cleanup_strips_article_link_and_punctuation(self):
        assert clean_type_text("a [snowflake](#DOCS_REFERENCE/snowflakes) *") == "snowflake"

    def test_phrase_rewrites(self):
        registry = ReferenceRegistry()
        assert infer_type("integer for integer options, double for number options", registry).type == "float"
        assert infer_type("string, integer, or double", registry).type == "any"
        assert infer_type("string (see below)", registry).type == "string"
        assert infer_type("dictionary with keys in available locales", registry).type == "object"
        assert infer_type("interaction data", registry).type == "object"


class TestArrays:
    def test_array_of_snowflakes(self):
        registry = ReferenceRegistry()
        p = infer_type("array of snowflakes", registry)
        assert p.type == "array"
        assert len(p.schema_) == 1
        assert p.schema_[0].type == "string"
        assert p.schema_[0].name is None

    def test_plural_element_is_singularized(self):
        registry = ReferenceRegistry()
        p = infer_type("array of roles", registry)
        assert p.schema_[0].type == "object"
        assert p.schema_[0].object_reference == "role"
        assert registry.objects == {"role"}

    def test_array_of_partial_user_objects(self):
        registry = ReferenceRegistry()
        p = infer_type("array of partial user objects", registry)
        assert p.type == "array"
        element = p.schema_[0]
        assert element.type == "object"
        assert element.partial_object_reference == "user"
        assert element.object_reference is None
        assert registry.objects == {"user"}

    def test_list_of_linked_objects_with_footnote(self):
        registry = ReferenceRegistry()
        p = infer_type("list of [overwrite](#DOCS_RESOURCES_CHANNEL/overwrite-object) objects \\*", registry)
        assert p.schema_[0].object_reference == "overwrite"


class TestObjectsAndEnums:
    def test_object_reference_is_mapped(self):
        registry = ReferenceRegistry()
        p = infer_type("partial member object", registry)
        assert p.partial_object_reference == "guild_member"
        assert registry.objects == {"guild_member"}

    def test_bare_user_is_an_object(self):
        registry = ReferenceRegistry()
        assert infer_type("user", registry).object_reference == "user"

    def test_type_suffix_is_an_enum(self):
        registry = ReferenceRegistry()
        p = infer_type("[channel type](#DOCS_RESOURCES_CHANNEL/channel-object-channel-types)", registry)
        assert p.type == "any"
        assert p.enum_reference == "channel"
        assert registry.enums == {"channel"}
        assert registry.objects == set()

    def test_irregular_enum_alias(self):
        registry = ReferenceRegistry()
        p = infer_type("event status", registry)
        assert p.enum_reference == "guild_scheduled_event_status"

    def test_pseudo_object_becomes_string(self):
        registry = ReferenceRegistry()
        p = infer_type("select option value", registry)
        assert p.type == "string"
        assert _refs(p) == []
        assert registry.objects == set()

    def test_pseudo_object_with_enum(self):
        registry = ReferenceRegistry()
        p = infer_type("array of OAuth2 scopes", registry)
        assert p.schema_[0].type == "string"
        assert p.schema_[0].enum_reference == "oauth2_scope"
        assert registry.enums == {"oauth2_scope"}

    def test_privacy_level_is_integer_enum(self):
        registry = ReferenceRegistry()
        p = infer_type("privacy level", registry)
        assert p.type == "integer"
        assert p.enum_reference == "guild_scheduled_event_privacy_level"

    def test_map_of_is_bare_object(self):
        registry = ReferenceRegistry()
        p = infer_type("Map of snowflakes to role objects", registry)
        assert p.type == "object"
        assert _refs(p) == []
        assert registry.objects == set()

    def test_message_component_renames_param(self):
        registry = ReferenceRegistry()
        p = infer_type("array of message components", registry)
        element = p.schema_[0]
        assert element.name == "action_row"
        assert element.object_reference == "component"
        assert registry.objects == set()


class TestFileContents:
    def test_expands_to_attachment_schema(self):
        registry = ReferenceRegistry()
        p = read_type(Parameter(name="files", is_nullable=True), "file contents", registry)
        assert p.type == "array"
        assert p.optional is True
        assert p.is_nullable is False
        attachment = p.schema_[0]
        assert attachment.name == "attachment"
        assert [(f.name, f.type) for f in attachment.schema_] == [
            ("filename", "string"),
            ("description", "string"),
            ("file", "buffer"),
        ]


class TestSingleReference:
    @pytest.mark.parametrize(
        "text",
        ["snowflake", "user object", "partial channel object", "channel type", "OAuth2 scope", "array of emojis"],
    )
    def test_at_most_one_reference(self, text):
        p = infer_type(text, ReferenceRegistry())
        for param in [p] + (p.schema_ or []):
            assert len(_refs(param)) <= 1
