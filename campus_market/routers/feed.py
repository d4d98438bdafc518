"""WebSocket stream of newly listed items."""

import asyncio

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from fastapi.encoders import jsonable_encoder

from campus_market.core.logging import log_event
from campus_market.services.feed import item_feed

router = APIRouter(prefix="/ws", tags=["feed"])

async def _drain_client(websocket: WebSocket):
	# Answer pings; returns when the client goes away.
	while True:
		message = await websocket.receive_json()
		if isinstance(message, dict) and message.get("type") == "ping":
			await websocket.send_json({"type": "pong"})

@router.websocket("/items")
async def items_feed(websocket: WebSocket):
	await websocket.accept()
	queue = item_feed.subscribe()
	reader = asyncio.create_task(_drain_client(websocket))
	await websocket.send_json({"type": "subscribed", "channel": "items"})
	try:
		while True:
			getter = asyncio.create_task(queue.get())
			done, _ = await asyncio.wait({getter, reader}, return_when=asyncio.FIRST_COMPLETED)
			if reader in done:
				getter.cancel()
				break
			await websocket.send_json(jsonable_encoder(getter.result()))
	except WebSocketDisconnect:
		pass
	finally:
		item_feed.unsubscribe(queue)
		if not reader.done():
			reader.cancel()
		else:
			exc = reader.exception() if not reader.cancelled() else None
			if exc is not None and not isinstance(exc, WebSocketDisconnect):
				log_event("feed_client_error", error=str(exc))
