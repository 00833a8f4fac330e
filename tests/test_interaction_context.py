"""
Tests for building an InteractionContext from a discord interaction.
"""

from types import SimpleNamespace

import pytest

from domain.models.permission import Permission
from utils.interaction_context import DiscordResponseChannel, context_from_interaction


class _Response:
    def __init__(self):
        self.sent = []

    def is_done(self):
        return bool(self.sent)

    async def send_message(self, **kwargs):
        self.sent.append(kwargs)


class _Followup:
    def __init__(self):
        self.sent = []

    async def send(self, **kwargs):
        self.sent.append(kwargs)


class _User:
    def __init__(self, user_id, guild_permissions=None):
        self.id = user_id
        self.guild_permissions = guild_permissions

    def __str__(self):
        return f"user{self.id}"


def _interaction(**overrides):
    values = dict(
        id=99,
        command=SimpleNamespace(qualified_name="stats"),
        data={"name": "stats"},
        user=_User(7),
        guild=SimpleNamespace(id=555),
        app_permissions=SimpleNamespace(send_messages=True, embed_links=False),
        permissions=SimpleNamespace(manage_guild=True),
        response=_Response(),
        followup=_Followup(),
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def test_guild_interaction_fields():
    ctx = context_from_interaction(_interaction(), {"days": 3})

    assert ctx.command_name == "stats"
    assert ctx.user_id == 7
    assert ctx.user_tag == "user7"
    assert ctx.guild_id == 555
    assert ctx.bot_permissions == frozenset({Permission.SEND_MESSAGES})
    assert ctx.member_permissions == frozenset({Permission.MANAGE_GUILD})
    assert ctx.options == {"days": 3}


def test_direct_message_has_no_member_permissions():
    ctx = context_from_interaction(_interaction(guild=None))

    assert ctx.guild_id is None
    assert ctx.member_permissions is None


def test_falls_back_to_guild_permissions():
    user = _User(7, guild_permissions=SimpleNamespace(kick_members=True))

    ctx = context_from_interaction(_interaction(user=user, permissions=None))

    assert ctx.member_permissions == frozenset({Permission.KICK_MEMBERS})


def test_command_name_from_payload_when_unresolved():
    ctx = context_from_interaction(_interaction(command=None, data={"name": "ghost"}))

    assert ctx.command_name == "ghost"


@pytest.mark.asyncio
async def test_replies_use_response_then_followup():
    interaction = _interaction()
    ctx = context_from_interaction(interaction)

    await ctx.reply("first", ephemeral=True)
    await ctx.reply("second")

    assert interaction.response.sent == [{"content": "first", "ephemeral": True}]
    assert interaction.followup.sent == [{"content": "second", "ephemeral": False}]
    assert isinstance(ctx.channel, DiscordResponseChannel)
