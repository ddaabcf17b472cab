"""Launcher for the Shapes ↔ Discord bridge."""

import asyncio
import sys

from dotenv import load_dotenv

from shapebridge.adapters.discord.adapter import ShapeBridgeBot
from shapebridge.adapters.shapes.gateway import ShapeGateway
from shapebridge.adapters.shapes.image_probe import HttpImageProbe
from shapebridge.adapters.storage.json_store import JsonChannelStorage
from shapebridge.config import BridgeConfig
from shapebridge.domain.activation import ChannelActivationStore
from shapebridge.domain.formatter import ResponseFormatter
from shapebridge.domain.media import MediaUrlExtractor
from shapebridge.domain.router import CommandRouter
from shapebridge.errors import ConfigError


def _log(msg: str):
    print(msg, file=sys.stderr)


def build_bot(config: BridgeConfig) -> ShapeBridgeBot:
    """Wire storage, gateway, formatter and router into a Discord client."""
    store = ChannelActivationStore(JsonChannelStorage(config.channels_file))
    store.load()

    gateway = ShapeGateway(
        api_key=config.shapes_api_key,
        shape_username=config.shape_username,
        base_url=config.shapes_api_base_url,
        timeout=config.request_timeout,
    )
    extractor = MediaUrlExtractor(probe=HttpImageProbe(timeout=config.image_probe_timeout))
    router = CommandRouter(
        store=store,
        provider=gateway,
        formatter=ResponseFormatter(extractor),
        shape_name=config.shape_username,
        prefix=config.command_prefix,
    )
    return ShapeBridgeBot(router, store=store, model_name=config.model_name)


async def run_bot(config: BridgeConfig):
    bot = build_bot(config)
    _log("[Launcher] Bot starting...")
    async with bot:
        await bot.start(config.discord_token)


def main():
    load_dotenv()
    try:
        config = BridgeConfig.from_env()
    except ConfigError as e:
        _log(f"Error: {e}")
        sys.exit(1)
    try:
        asyncio.run(run_bot(config))
    except KeyboardInterrupt:
        _log("[Launcher] Interrupted, shutting down")


if __name__ == "__main__":
    main()
