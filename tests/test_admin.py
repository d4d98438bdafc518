from sqlalchemy.exc import OperationalError

from campus_market.services import moderation

from conftest import count_rows


def test_non_admin_is_forbidden(client, buyer, catalog):
	assert client.get("/admin/items", headers=buyer["headers"]).status_code == 403
	assert client.delete(f"/admin/items/{catalog['Desk Lamp']}", headers=buyer["headers"]).status_code == 403


def test_anonymous_is_unauthorized(client):
	res = client.get("/admin/users")
	assert res.status_code == 401
	assert res.headers["WWW-Authenticate"] == "Bearer"


def test_lists_everything(client, admin, buyer, seller, catalog):
	items = client.get("/admin/items", headers=admin["headers"]).json()
	assert len(items) == 8
	assert items[0]["title"] == "Physics Textbooks (Set)"

	users = client.get("/admin/users", headers=admin["headers"]).json()
	assert {u["email"] for u in users} == {"seller@uni.edu", "buyer@uni.edu", "moderator@uni.edu"}
	assert {u["display_name"] for u in users} == {"Sam Seller", "Bea Buyer", "Mod"}


def test_delete_removes_saved_references_first(client, db, admin, buyer, catalog):
	item_id = catalog["Mini Fridge"]
	client.post(f"/saved/{item_id}/toggle", headers=buyer["headers"])
	client.post(f"/saved/{catalog['Desk Lamp']}/toggle", headers=buyer["headers"])
	assert count_rows(db, "saved_items") == 2

	res = client.delete(f"/admin/items/{item_id}", headers=admin["headers"])
	assert res.status_code == 200
	assert res.json()["id"] == item_id

	assert count_rows(db, "saved_items") == 1
	assert client.get(f"/items/{item_id}").status_code == 404
	assert client.delete(f"/admin/items/{item_id}", headers=admin["headers"]).status_code == 404


def test_item_delete_proceeds_when_saved_cleanup_fails(client, db, admin, buyer, catalog, monkeypatch):
	item_id = catalog["Basketball"]
	client.post(f"/saved/{item_id}/toggle", headers=buyer["headers"])

	def broken(db, item_id):
		raise OperationalError("DELETE FROM saved_items", {}, Exception("locked"))

	monkeypatch.setattr(moderation, "_remove_saved_refs", broken)
	res = client.delete(f"/admin/items/{item_id}", headers=admin["headers"])
	assert res.status_code == 200
	assert client.get(f"/items/{item_id}").status_code == 404
	# the database cascade still clears the bookmark
	assert count_rows(db, "saved_items") == 0


def test_stats(client, admin, catalog):
	stats = client.get("/admin/stats", headers=admin["headers"]).json()
	assert stats["total_items"] == 8
	assert stats["total_users"] == 2
	assert stats["items_per_category"]["Electronics"] == 3
	assert stats["items_per_category"]["Furniture"] == 0
	assert stats["average_price"] == 148.56
