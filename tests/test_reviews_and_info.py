from sqlalchemy.exc import OperationalError

from storefront.repos.review_repo import ReviewRepo


def _review(client, **overrides):
    body = {"user_id": "u1", "name": "Ann", "product_id": 5, "rating": 4.5, "feedback": "Fits well"}
    body.update(overrides)
    return client.post("/api/reviews/add", json=body)


def test_review_with_replies(client, catalog):
    review = _review(client).json()["review"]

    reply = client.post(
        "/api/reviews/reply",
        json={"review_id": review["id"], "product_id": 5, "user_id": "u2", "name": "Bo", "reply": "Agreed"},
    )
    assert reply.status_code == 201

    resp = client.get("/api/reviews/reviews", params={"product_id": 5})
    assert resp.status_code == 200
    reviews = resp.json()["reviews"]
    assert len(reviews) == 1
    assert reviews[0]["rating"] == 4.5
    assert [r["reply"] for r in reviews[0]["replies"]] == ["Agreed"]


def test_reviews_newest_first(client, catalog):
    _review(client, feedback="first")
    _review(client, feedback="second")

    reviews = client.get("/api/reviews/reviews", params={"product_id": 5}).json()["reviews"]
    assert [r["feedback"] for r in reviews] == ["second", "first"]


def test_review_validation(client, catalog):
    assert _review(client, feedback="").status_code == 400
    assert client.get("/api/reviews/reviews").status_code == 400


def test_reply_to_missing_review(client, catalog):
    resp = client.post(
        "/api/reviews/reply",
        json={"review_id": 42, "product_id": 5, "user_id": "u2", "name": "Bo", "reply": "?"},
    )
    assert resp.status_code == 404


def test_detailed_info(client, catalog):
    review = _review(client).json()["review"]
    client.post(
        "/api/reviews/reply",
        json={"review_id": review["id"], "product_id": 5, "user_id": "u1", "name": "Ann", "reply": "PS"},
    )
    order_id = client.post(
        "/api/orders", json={"user_id": "u1", "items": [{"product_id": 5, "quantity": 1}]}
    ).json()["order"]["id"]
    client.post("/api/orders/messages", json={"orderId": order_id, "sender": "u1", "message": "hello"})

    resp = client.post("/api/info/get-detailed-info", json={"user_id": "u1"})

    assert resp.status_code == 200
    info = resp.json()
    assert info["user"]["email"] == "u1@shop.test"
    assert len(info["reviews"]) == 1
    assert len(info["replies"]) == 1
    assert info["orders"] == [{"id": order_id}]
    assert [m["message"] for m in info["messages"]] == ["hello"]


def test_detailed_info_unknown_user(client, catalog):
    resp = client.post("/api/info/get-detailed-info", json={"user_id": "ghost"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "User not found in users table."}


def test_detailed_info_survives_failed_secondary_lookup(client, catalog, monkeypatch):
    review = _review(client).json()["review"]
    client.post(
        "/api/reviews/reply",
        json={"review_id": review["id"], "product_id": 5, "user_id": "u1", "name": "Ann", "reply": "PS"},
    )
    order_id = client.post(
        "/api/orders", json={"user_id": "u1", "items": [{"product_id": 5, "quantity": 1}]}
    ).json()["order"]["id"]

    def boom(self, user_id):
        raise OperationalError("SELECT reviews", {}, Exception("connection reset"))

    monkeypatch.setattr(ReviewRepo, "list_by_user", boom)

    resp = client.post("/api/info/get-detailed-info", json={"user_id": "u1"})

    assert resp.status_code == 200
    info = resp.json()
    assert info["user"]["id"] == "u1"
    assert info["reviews"] == []
    assert len(info["replies"]) == 1
    assert info["orders"] == [{"id": order_id}]
