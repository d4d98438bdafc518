"""In-process notification of newly listed items."""

import asyncio
import logging
from typing import Optional, Set

from campus_market.core.logging import log_event

QUEUE_SIZE = 100


class ItemFeed:
	"""
	Fan-out of item inserts to subscribers.

	Each subscriber owns a bounded queue; a full queue drops the message for
	that subscriber only.
	"""

	def __init__(self, queue_size: int = QUEUE_SIZE):
		self.queue_size = queue_size
		self._subscribers: Set[asyncio.Queue] = set()
		self._loop: Optional[asyncio.AbstractEventLoop] = None

	@property
	def subscriber_count(self) -> int:
		return len(self._subscribers)

	def subscribe(self) -> asyncio.Queue:
		self._loop = asyncio.get_running_loop()
		queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
		self._subscribers.add(queue)
		log_event("feed_subscribed", subscribers=len(self._subscribers))
		return queue

	def unsubscribe(self, queue: asyncio.Queue) -> None:
		self._subscribers.discard(queue)
		log_event("feed_unsubscribed", subscribers=len(self._subscribers))

	def _deliver(self, message: dict) -> None:
		for queue in list(self._subscribers):
			try:
				queue.put_nowait(message)
			except asyncio.QueueFull:
				log_event("feed_message_dropped", level=logging.WARNING, type=message.get("type"))

	def publish(self, event_type: str, data: dict) -> None:
		"""Publish from any thread; delivery happens on the subscribers' loop."""
		if not self._subscribers or self._loop is None:
			return
		message = {"type": event_type, "data": data}
		try:
			running = asyncio.get_running_loop()
		except RuntimeError:
			running = None
		if running is self._loop:
			self._deliver(message)
		elif not self._loop.is_closed():
			self._loop.call_soon_threadsafe(self._deliver, message)


item_feed = ItemFeed()
