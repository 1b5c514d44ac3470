import pytest

from discord_schema.errors import NamingConflictError
from discord_schema.generator.naming import endpoint_action, endpoint_name, name_endpoints, name_stem
from discord_schema.parser.base import Endpoint


def _ep(title: str, method: str, url: str, namespace: str = "channels") -> Endpoint:
    return Endpoint(namespace=namespace, title=title, method=method, url=url)


class TestEndpointAction:
    @pytest.mark.parametrize(
        "title, method, path, expected",
        [
            ("Start Thread without Message", "POST", "/channels/{channel_id}/threads", "empty/create"),
            ("Search Guild Members", "GET", "/guilds/{guild_id}/members/search", ""),
            ("Execute Webhook", "POST", "/webhooks/{webhook_id}/{webhook_token}", "execute"),
            ("Bulk Overwrite Global Application Commands", "PUT", "/applications/{application_id}/commands", "bulkOverwrite"),
            ("Batch Edit Application Command Permissions", "PUT", "/x/permissions", "batchEdit"),
            ("Delete All Reactions for Emoji", "DELETE", "/channels/{channel_id}/reactions/{emoji}", "emoji/destroy"),
            ("Delete All Reactions", "DELETE", "/channels/{channel_id}/reactions", "destroy/all"),
            ("Get Channel", "GET", "/channels/{channel_id}", "retrieve"),
            ("Get Guild Channels", "GET", "/guilds/{guild_id}/channels", "list"),
            ("Get Guild Emojis", "GET", "/guilds/{guild_id}/emojis", "list"),
            ("Get Channel Permissions", "GET", "/channels/{channel_id}/permissions", "retrieve"),
            ("Get Member Permissions", "GET", "/guilds/{guild_id}/{member_id}/permissions", "retrieve"),
            ("Get Guild Widget Image", "GET", "/guilds/{guild_id}/widget.png", "retrieve"),
            ("Get Guild Prune Count", "GET", "/guilds/{guild_id}/prune", "retrieve"),
            ("List Public Archived Threads", "GET", "/channels/{channel_id}/threads/archived/public", "list"),
            ("Create Message", "POST", "/channels/{channel_id}/messages", "create"),
            ("Add Guild Member", "PUT", "/guilds/{guild_id}/members/{user_id}", "create"),
            ("Sync Guild Template", "PUT", "/guilds/{guild_id}/templates/{code}", "sync"),
            ("Modify Channel", "PATCH", "/channels/{channel_id}", "update"),
            ("Delete Message", "DELETE", "/channels/{channel_id}/messages/{message_id}", "destroy"),
            ("Head Thing", "HEAD", "/things", ""),
            ("Edit Webhook Message with Token", "PATCH", "/webhooks/{webhook_id}/{webhook_token}/messages/{message_id}", "token/update"),
        ],
    )
    def test_rule_cascade(self, title, method, path, expected):
        assert endpoint_action(title, method, path) == expected

    def test_custom_title_beats_prefix_rules(self):
        assert endpoint_action("Create Group DM", "POST", "/users/@me/channels") == "group/create"

    def test_method_is_case_insensitive(self):
        assert endpoint_action("Get Channel", "get", "/channels/{channel_id}") == "retrieve"


class TestNameStem:
    def test_create_message(self):
        assert name_stem("/channels/{channel_id}/messages", "create") == "channels/messages/create"

    def test_hyphens_at_markers_and_extensions(self):
        assert name_stem("/guilds/{guild_id}/audit-logs", "list") == "guilds/auditLogs/list"
        assert name_stem("/users/@me", "retrieve") == "users/me/retrieve"
        assert name_stem("/guilds/{guild_id}/widget.json", "retrieve") == "guilds/widget/data/retrieve"
        assert name_stem("/guilds/{guild_id}/widget.png", "retrieve") == "guilds/widget/image/retrieve"

    def test_applications_root_is_dropped(self):
        assert name_stem("/applications/{application_id}/commands", "create") == "commands/create"

    def test_empty_action_leaves_no_trailing_slash(self):
        assert name_stem("/guilds/{guild_id}/members/search", "") == "guilds/members/search"


class TestEndpointName:
    def test_interactions_webhooks_are_renamed(self):
        name = endpoint_name("interactions", "Get Original Interaction Response", "GET",
                             "/webhooks/{application_id}/{interaction_token}/messages/@original")
        assert name == "interactions/messages/original/retrieve"

    def test_other_namespaces_keep_webhooks(self):
        name = endpoint_name("webhooks", "Get Webhook", "GET", "/webhooks/{webhook_id}")
        assert name == "webhooks/retrieve"


class TestNameEndpoints:
    def test_assigns_names(self):
        endpoints = name_endpoints([
            _ep("Get Channel", "GET", "/channels/{channel_id}"),
            _ep("Get Guild Channels", "GET", "/guilds/{guild_id}/channels"),
        ])
        assert [e.name for e in endpoints] == ["channels/retrieve", "guilds/channels/list"]

    def test_duplicate_name_names_both_urls(self):
        endpoints = [
            _ep("Get Channel", "GET", "/channels/{channel_id}"),
            _ep("Get Channel Again", "GET", "/channels/{other_id}"),
        ]
        with pytest.raises(NamingConflictError) as exc_info:
            name_endpoints(endpoints)
        message = str(exc_info.value)
        assert "/channels/{other_id}" in message
        assert "/channels/{channel_id}" in message
        assert "channels/retrieve" in message
