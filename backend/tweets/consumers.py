from __future__ import annotations

from typing import Any, Dict

from channels.generic.websocket import AsyncJsonWebsocketConsumer

from tweets.constants import FEED_GROUP_NAME


class FeedConsumer(AsyncJsonWebsocketConsumer):
    """Live feed: every connected client gets new tweets as they are created.

    Server pushes:
    - tweet_new: {"type": "tweet_new", "tweet": {id, username, message, image}}
    """

    async def connect(self) -> None:
        await self.channel_layer.group_add(FEED_GROUP_NAME, self.channel_name)
        await self.accept()

    async def disconnect(self, close_code: int) -> None:
        await self.channel_layer.group_discard(FEED_GROUP_NAME, self.channel_name)

    async def notify(self, event: Dict[str, Any]) -> None:
        payload = event.get("payload")
        if payload is not None:
            await self.send_json(payload)
