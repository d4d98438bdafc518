import asyncio

from campus_market.services.feed import ItemFeed

LISTING = {
	"title": "Graphing Calculator",
	"price": "35.50",
	"category": "School Supplies",
	"description": "TI-84.",
	"location": "Engineering Building",
}


def test_created_item_is_pushed_to_subscribers(client, seller):
	with client.websocket_connect("/ws/items") as ws:
		assert ws.receive_json() == {"type": "subscribed", "channel": "items"}
		res = client.post("/items", json=LISTING, headers=seller["headers"])
		assert res.status_code == 201
		message = ws.receive_json()
		assert message["type"] == "item_created"
		assert message["data"]["id"] == res.json()["id"]
		assert message["data"]["title"] == "Graphing Calculator"


def test_ping_pong(client):
	with client.websocket_connect("/ws/items") as ws:
		ws.receive_json()
		ws.send_json({"type": "ping"})
		assert ws.receive_json() == {"type": "pong"}


def test_full_queue_drops_only_for_that_subscriber():
	async def scenario():
		feed = ItemFeed(queue_size=1)
		slow = feed.subscribe()
		fast = feed.subscribe()
		feed.publish("item_created", {"id": 1})
		await fast.get()
		feed.publish("item_created", {"id": 2})
		assert slow.qsize() == 1
		assert (await slow.get())["data"] == {"id": 1}
		assert (await fast.get())["data"] == {"id": 2}
		feed.unsubscribe(slow)
		feed.unsubscribe(fast)
		assert feed.subscriber_count == 0

	asyncio.run(scenario())


def test_publish_without_subscribers_is_a_no_op():
	feed = ItemFeed()
	feed.publish("item_created", {"id": 1})
	assert feed.subscriber_count == 0
