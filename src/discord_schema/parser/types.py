"""Type inference for the free-text type column of the API docs.

Maps prose such as ``array of snowflakes``, ``ISO8601 timestamp`` or
``partial guild member object`` onto the closed set of type tags in
:data:`~discord_schema.parser.base.PRIMITIVE_TYPES`, plus an optional
object, partial-object or enum reference.

Rules are applied in this order:

1. ``array of X`` / ``list of X`` wraps the inferred (singular) X.
2. Articles, link syntax and trailing punctuation are stripped.
3. Irregular phrasings are rewritten (``PHRASE_REWRITES``).
4. Known prose names resolve to primitives (``TYPE_LOOKUP``).
5. ``file contents`` expands to the attachment schema.
6. Anything else names an object (``... object``) or an enum (``... type``).
"""

import re

from discord_schema.parser.base import Parameter, ReferenceRegistry
from discord_schema.parser.text import singularize

ARRAY_PREFIX_RE = re.compile(r"^(array|list) of ", re.IGNORECASE)
ARRAY_TAIL_RE = re.compile(r" [^a-z]*$")
ARTICLE_RE = re.compile(r"^an? ")
LINK_RE = re.compile(r"\[(.*?)\]\(.*?\)")
TRAILING_RE = re.compile(r"[^a-z]+$", re.IGNORECASE)
SUFFIX_RE = re.compile(r"\s*(object|type)s?$")

TYPE_LOOKUP = {
    "null": "boolean",
    "int": "integer",
    "integer or string": "string",
    "snowflake": "string",
    "ISO8601 timestamp": "string",
    "dict": "object",
    "any": "any",
    "number": "float",
    "float": "float",
    "integer": "integer",
    "string": "string",
    "object": "object",
    "array": "array",
    "boolean": "boolean",
}

# (pattern, replacement) pairs, first match wins
PHRASE_REWRITES = [
    (re.compile(r"^dictionary "), "dict"),
    (re.compile(r"integer for .*?double for ", re.IGNORECASE), "float"),
    (re.compile(r"string.*?integer", re.IGNORECASE), "any"),
    (re.compile(r"^string(;| \()"), "string"),
    (re.compile(r"^message component$"), "component"),
    (re.compile(r"^interaction data$"), "object"),
]

# Prose names that lack the "object"/"type" suffix they are documented under.
TYPE_ALIASES = {
    "ApplicationRoleConnectionMetadataType": "application role connection metadata type",
    "user": "user object",
    "event status": "guild scheduled event status type",
    "integration expire behavior": "integration expire behavior type",
}

# Referenced names that differ from the name of the structure section.
OBJECT_MAPPINGS = {
    "message_component": "component",
    "message_sticker_item": "sticker_item",
    "account": "integration_account",
    "action": "auto_moderation_action",
    "member": "guild_member",
    "tag": "forum_tag",
    "command": "application_command",
    "template": "guild_template",
    "thread-specific_channel": "channel",
    "entity_metadata": "guild_scheduled_event_entity_metadata",
}

# Documented as objects, but really primitives: name -> (type, enum name)
PSEUDO_OBJECTS = {
    "select_option_value": ("string", None),
    "role_object_id": ("string", None),
    "OAuth2_scope": ("string", "oauth2_scope"),
    "audit_log_event": ("any", "audit_log_event"),
    "guild_feature_string": ("string", "guild_feature"),
    "privacy_level": ("integer", "guild_scheduled_event_privacy_level"),
}

COMPONENT_OBJECT = "component"
COMPONENT_PARAM_NAME = "action_row"


def map_object_name(name: str) -> str:
    return OBJECT_MAPPINGS.get(name, name)


def attachment_schema() -> list[Parameter]:
    """Element schema used for uploaded files."""
    return [
        Parameter(
            name="attachment",
            type="object",
            schema_=[
                Parameter(name="filename", type="string"),
                Parameter(name="description", type="string"),
                Parameter(name="file", type="buffer"),
            ],
        )
    ]


def infer_type(type_text: str, registry: ReferenceRegistry, name: str | None = None) -> Parameter:
    """Infer a fresh Parameter from a type description."""
    return read_type(Parameter(name=name), type_text, registry)


def read_type(param: Parameter, type_text: str, registry: ReferenceRegistry) -> Parameter:
    """Set ``param``'s type, schema and reference from ``type_text``."""
    if ARRAY_PREFIX_RE.match(type_text):
        element = ARRAY_PREFIX_RE.sub("", type_text, count=1)
        element = singularize(ARRAY_TAIL_RE.sub("", element))
        param.clear_references()
        param.type = "array"
        param.schema_ = [infer_type(element, registry)]
        return param
    return _convert_type(param, type_text, registry)


def clean_type_text(type_text: str) -> str:
    text = ARTICLE_RE.sub("", type_text)
    text = LINK_RE.sub(r"\1", text)
    text = TRAILING_RE.sub("", text)
    return text.strip()


def _rewrite_phrase(text: str) -> str:
    for pattern, replacement in PHRASE_REWRITES:
        if pattern.search(text):
            return replacement
    return text


def _convert_type(param: Parameter, type_text: str, registry: ReferenceRegistry) -> Parameter:
    text = _rewrite_phrase(clean_type_text(type_text))

    if text in TYPE_LOOKUP:
        param.clear_references()
        param.type = TYPE_LOOKUP[text]
        return param

    if text == "file contents":
        param.clear_references()
        param.type = "array"
        param.optional = True
        param.is_nullable = False
        param.schema_ = attachment_schema()
        return param

    text = TYPE_ALIASES.get(text, text)
    match = SUFFIX_RE.search(text)
    kind = match.group(1) if match else "object"
    obj_name = singularize(SUFFIX_RE.sub("", text).replace(" ", "_").strip())

    if obj_name.lower().startswith("map_of_") or (not obj_name and kind == "object"):
        param.clear_references()
        param.type = "object"
        return param

    if kind == "type":
        param.type = "any"
        param.set_enum_reference(obj_name)
        registry.enums.add(obj_name)
        return param

    partial = obj_name.startswith("partial_")
    if partial:
        obj_name = obj_name.split("_", 1)[1]
    obj_name = map_object_name(obj_name)

    if obj_name in PSEUDO_OBJECTS:
        param.type, enum_name = PSEUDO_OBJECTS[obj_name]
        if enum_name:
            param.set_enum_reference(enum_name)
            registry.enums.add(enum_name)
        else:
            param.clear_references()
        return param

    param.type = "object"
    if partial:
        param.set_partial_object_reference(obj_name)
    else:
        param.set_object_reference(obj_name)

    if obj_name == COMPONENT_OBJECT:
        # Components are only ever sent wrapped in action rows.
        param.name = COMPONENT_PARAM_NAME
    else:
        registry.objects.add(obj_name)
    return param
