"""Build configuration: which documentation pages to read and how to rewrite them."""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from discord_schema.errors import ConfigError

DEFAULT_DOCS_BASE_URL = "https://raw.githubusercontent.com/discord/discord-api-docs/main/docs"

# namespace -> page path below the docs base URL
DEFAULT_PAGES = {
    "commands": "interactions/Application_Commands.md",
    "message_components": "interactions/Message_Components.md",
    "interactions": "interactions/Receiving_and_Responding.md",
    "applications": "resources/Application.md",
    "application_role_connection_metadata": "resources/Application_Role_Connection_Metadata.md",
    "audit_logs": "resources/Audit_Log.md",
    "auto_moderation": "resources/Auto_Moderation.md",
    "channels": "resources/Channel.md",
    "emojis": "resources/Emoji.md",
    "guilds": "resources/Guild.md",
    "guild_scheduled_events": "resources/Guild_Scheduled_Event.md",
    "guild_templates": "resources/Guild_Template.md",
    "invites": "resources/Invite.md",
    "stage_instances": "resources/Stage_Instance.md",
    "stickers": "resources/Sticker.md",
    "users": "resources/User.md",
    "voice": "resources/Voice.md",
    "webhooks": "resources/Webhook.md",
    "permissions": "topics/Permissions.md",
    "teams": "topics/Teams.md",
}

_DOCS_SITE = "https://discord.com/developers/docs"

DEFAULT_DOCS_REFERENCES = {
    "#DOCS_RESOURCES_CHANNEL/": f"{_DOCS_SITE}/resources/channel#",
    "#DOCS_INTERACTIONS_APPLICATION_COMMANDS/": f"{_DOCS_SITE}/interactions/application-commands#",
    "#DOCS_INTERACTIONS_MESSAGE_COMPONENTS/": f"{_DOCS_SITE}/interactions/message-components#",
    "#DOCS_REFERENCE/": f"{_DOCS_SITE}/reference#",
    "#DOCS_RESOURCES_GUILD/": f"{_DOCS_SITE}/resources/guild#",
    "#DOCS_GAME_SDK_APPLICATIONS/": f"{_DOCS_SITE}/game-sdk/applications#",
    "#DOCS_RESOURCES_APPLICATION/": f"{_DOCS_SITE}/resources/application#",
    "#DOCS_TOPICS_OAUTH2/": f"{_DOCS_SITE}/topics/oauth2#",
    "#DOCS_RESOURCES_AUDIT_LOG/": f"{_DOCS_SITE}/resources/audit-log#",
    "#DOCS_RESOURCES_AUTO_MODERATION/": f"{_DOCS_SITE}/resources/auto-moderation#",
    "#DOCS_RESOURCES_VOICE/": f"{_DOCS_SITE}/resources/voice#",
    "#DOCS_INTERACTIONS_RECEIVING_AND_RESPONDING/": f"{_DOCS_SITE}/interactions/receiving-and-responding#",
    "#DOCS_RICH_PRESENCE_HOW_TO/": f"{_DOCS_SITE}/rich-presence/how-to#",
    "#DOCS_RESOURCES_STICKER/": f"{_DOCS_SITE}/resources/sticker#",
    "#DOCS_RESOURCES_USER/": f"{_DOCS_SITE}/resources/user#",
    "#DOCS_RESOURCES_INVITE/": f"{_DOCS_SITE}/resources/invite#",
    "#DOCS_TOPICS_PERMISSIONS/": f"{_DOCS_SITE}/topics/permissions#",
    "#DOCS_RESOURCES_GUILD_SCHEDULED_EVENT/": f"{_DOCS_SITE}/resources/guild-scheduled-event#",
    "#DOCS_RESOURCES_STAGE_INSTANCE/": f"{_DOCS_SITE}/resources/stage-instance#",
    "#DOCS_RESOURCES_APPLICATION_ROLE_CONNECTION_METADATA/": f"{_DOCS_SITE}/resources/application-role-connection-metadata#",
    "#DOCS_RESOURCES_WEBHOOK/": f"{_DOCS_SITE}/resources/webhook#",
    "#DOCS_TOPICS_TEAMS/": f"{_DOCS_SITE}/topics/teams#",
    "#DOCS_TOPICS_GATEWAY_EVENTS/": f"{_DOCS_SITE}/topics/gateway-events#",
    "#DOCS_RESOURCES_EMOJI/": f"{_DOCS_SITE}/resources/emoji#",
    "#DOCS_RESOURCES_GUILD_TEMPLATE/": f"{_DOCS_SITE}/resources/guild-template#",
}

# Not usable with a bot token.
DEFAULT_DISABLED_ENDPOINTS = [
    "users/me/applications/roleConnection/retrieve",
    "users/me/applications/roleConnection/update",
    "roleConnections/metadata/retrieve",
    "roleConnections/metadata/update",
]


def _docs_base_url() -> str:
    return os.getenv("DISCORD_DOCS_BASE_URL", DEFAULT_DOCS_BASE_URL).rstrip("/")


def _default_pages() -> dict[str, str]:
    base = _docs_base_url()
    return {namespace: f"{base}/{page}" for namespace, page in DEFAULT_PAGES.items()}


class SchemaConfig(BaseModel):
    """Settings for one schema build."""

    model_config = ConfigDict(extra="forbid")

    pages: dict[str, str] = Field(default_factory=_default_pages)
    docs_references: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_DOCS_REFERENCES))
    disabled_endpoints: list[str] = Field(default_factory=lambda: list(DEFAULT_DISABLED_ENDPOINTS))

    def select(self, namespaces: tuple[str, ...]) -> "SchemaConfig":
        """Return a copy restricted to the given namespaces (all if empty)."""
        if not namespaces:
            return self
        unknown = [ns for ns in namespaces if ns not in self.pages]
        if unknown:
            raise ConfigError(f"Unknown namespace(s): {', '.join(unknown)}")
        pages = {ns: url for ns, url in self.pages.items() if ns in namespaces}
        return self.model_copy(update={"pages": pages})


def load_config(path: Path | None = None) -> SchemaConfig:
    """Load settings from an optional YAML file on top of the defaults."""
    if path is None:
        return SchemaConfig()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not load config from {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    try:
        return SchemaConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}:\n{e}") from e
