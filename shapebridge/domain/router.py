"""Message routing — slash commands and ordinary chat forwarding.

Every inbound message is handled as an independent unit of work. Failures are
caught here, logged, and turned into a reply; nothing propagates back to the
platform client.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, List, Optional

from shapebridge.domain import messages
from shapebridge.domain.activation import ChannelActivationStore
from shapebridge.domain.commands import (
    CommandKind,
    CommandSpec,
    EmptyReplyPolicy,
    ParsedCommand,
    parse_command,
)
from shapebridge.domain.formatter import ResponseFormatter
from shapebridge.domain.models import FormattedReply, ReplyStatus, ShapeReply, TextOnly

if TYPE_CHECKING:
    from shapebridge.ports.inbound import IncomingMessage
    from shapebridge.ports.outbound import ChatPort, ProviderPort


def _log(msg: str):
    print(msg, file=sys.stderr)


class CommandRouter:
    """Maps platform messages to store toggles and shape calls."""

    def __init__(
        self,
        store: ChannelActivationStore,
        provider: ProviderPort,
        formatter: ResponseFormatter,
        shape_name: str,
        prefix: str = "/",
        chat: Optional[ChatPort] = None,
    ):
        self._store = store
        self._provider = provider
        self._formatter = formatter
        self.shape_name = shape_name
        self.prefix = prefix
        self._chat = chat

    def wire(self, chat: ChatPort) -> None:
        """Attach the platform reply channel once the client exists."""
        self._chat = chat

    async def handle(self, message: IncomingMessage) -> None:
        if message.is_self or message.is_bot:
            return
        if not message.content or not message.content.strip():
            return

        parsed = parse_command(message.content, self.prefix)
        if parsed is not None:
            await self._handle_command(parsed, message)
            return

        if self._store.is_active(message.channel_id):
            await self._forward(message)

    # -- commands --

    async def _handle_command(self, parsed: ParsedCommand, message: IncomingMessage) -> None:
        if not parsed.recognized:
            _log(f"[Router] Ignoring unknown command: {self.prefix}{parsed.name}")
            return

        spec = parsed.spec
        try:
            if spec.kind is CommandKind.LOCAL:
                await self._run_local(spec, message)
            else:
                await self._run_passthrough(spec, parsed.args, message)
        except Exception as e:
            _log(f"[Bot Command: {self.prefix}{spec.name}] Error: {e!r}")
            await self._reply_safely(
                message, messages.command_failed(self.shape_name, spec.name, self.prefix),
            )

    async def _run_local(self, spec: CommandSpec, message: IncomingMessage) -> None:
        channel_id = message.channel_id
        if spec.name == "activate":
            result = self._store.activate(channel_id)
            text = (
                messages.already_active(self.shape_name)
                if result.already
                else messages.activated(self.shape_name)
            )
        elif spec.name == "deactivate":
            result = self._store.deactivate(channel_id)
            text = (
                messages.deactivated(self.shape_name)
                if result.was_active
                else messages.not_active(self.prefix)
            )
        else:
            raise ValueError(f"No local handler for {spec.name!r}")
        await self._reply(message, TextOnly(text))

    async def _run_passthrough(
        self, spec: CommandSpec, args: List[str], message: IncomingMessage,
    ) -> None:
        if not self._store.is_active(message.channel_id):
            await self._reply(message, TextOnly(messages.not_active(self.prefix)))
            return
        if spec.requires_args and not args:
            await self._reply(message, TextOnly(messages.usage_hint(spec.name, self.prefix)))
            return

        command = spec.provider_string(args)
        _log(
            f"[Bot Command: {self.prefix}{spec.name}] Sending to Shape API: "
            f"User {message.author_id}, Channel {message.channel_id}, Content: {command!r}"
        )
        reply = await self._call_shape(message, command)

        if reply.status is ReplyStatus.FAILURE:
            _log(f"[Bot Command: {self.prefix}{spec.name}] Shape API failure: {reply.error}")
            await self._reply(
                message, TextOnly(messages.command_failed(self.shape_name, spec.name, self.prefix)),
            )
            return
        if reply.is_sentinel:
            await self._reply(message, TextOnly(reply.sentinel_text))
            return
        if reply.is_empty:
            await self._reply(message, TextOnly(self._empty_reply_text(spec)))
            return
        await self._reply(message, await self._formatter.format(reply.text))

    def _empty_reply_text(self, spec: CommandSpec) -> str:
        if spec.on_empty is EmptyReplyPolicy.RESET_CONFIRMATION:
            return messages.reset_confirmation(self.shape_name)
        if spec.on_empty is EmptyReplyPolicy.MAY_BE_SILENT:
            return messages.may_be_silent(self.shape_name, spec.name, self.prefix)
        return messages.no_textual_response(self.shape_name, spec.name, self.prefix)

    # -- ordinary messages --

    async def _forward(self, message: IncomingMessage) -> None:
        content = f"{message.author_name}: {message.content}"
        _log(
            f"[Regular Message] User {message.author_id} ({message.author_name}) "
            f"in active channel {message.channel_id}: {message.content[:80]!r}"
        )
        try:
            reply = await self._call_shape(message, content)
            if reply.status is ReplyStatus.FAILURE:
                _log(f"[Regular Message] Shape API failure: {reply.error}")
                await self._reply_safely(message, messages.conversation_failed())
                return
            if reply.is_sentinel:
                await self._reply(message, TextOnly(reply.sentinel_text))
                return
            if reply.is_empty:
                _log("[Regular Message] No valid response from Shapes API or response was empty.")
                return
            await self._reply(message, await self._formatter.format(reply.text))
        except Exception as e:
            _log(f"[Regular Message] Error talking to the Shape or replying: {e!r}")
            await self._reply_safely(message, messages.conversation_failed())

    # -- helpers --

    async def _call_shape(self, message: IncomingMessage, content: str) -> ShapeReply:
        await self._typing(message.channel_id)
        return await self._provider.send(message.author_id, message.channel_id, content)

    async def _typing(self, channel_id: str) -> None:
        if not self._chat:
            return
        try:
            await self._chat.send_typing(channel_id)
        except Exception as e:
            _log(f"[Typing Indicator] Warning: {e}")

    async def _reply(self, message: IncomingMessage, reply: FormattedReply) -> None:
        if not self._chat:
            _log("[Router] No chat adapter wired; dropping reply")
            return
        await self._chat.send(message.channel_id, reply, reply_to=message.message_id)

    async def _reply_safely(self, message: IncomingMessage, text: str) -> None:
        try:
            await self._reply(message, TextOnly(text))
        except Exception as e:
            _log(f"[Router] Could not send error message: {e!r}")
