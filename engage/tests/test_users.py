"""Tests for profile, wallet, leaderboard, achievement and reward routes."""

from conftest import FakeConnection


def test_update_wallet(client, hub, register_user, auth):
    token, user = register_user()
    connection = FakeConnection("c")
    hub.lifecycle.on_open(connection)
    hub.registry.set_user_identity("c", user["id"])

    resp = client.patch("/api/user/wallet", json={"wallet_address": "0xabc"}, headers=auth(token))

    assert resp.status_code == 200
    assert resp.get_json() == {"wallet_address": "0xabc"}
    assert client.get("/api/user/profile", headers=auth(token)).get_json()["wallet_address"] == "0xabc"
    [frame] = connection.frames()
    assert frame["type"] == "user_stats_update"
    assert frame["data"]["wallet_address"] == "0xabc"


def test_update_wallet_rejects_non_string(client, register_user, auth):
    token, _ = register_user()

    resp = client.patch("/api/user/wallet", json={"wallet_address": 42}, headers=auth(token))

    assert resp.status_code == 400


def test_leaderboard_orders_by_weekly_xp(client, app, register_user):
    users = app.extensions["repositories"].users
    for weekly_xp, name in ((10, "bronze"), (30, "gold"), (20, "silver")):
        _, user = register_user(username=name)
        users.update_user(user["id"], weekly_xp=weekly_xp)

    resp = client.get("/api/leaderboard?limit=2")

    assert resp.status_code == 200
    board = resp.get_json()
    assert [entry["username"] for entry in board] == ["gold", "silver"]
    assert "email" not in board[0]


def test_leaderboard_ties_keep_registration_order(client, register_user):
    for name in ("first", "second", "third"):
        register_user(username=name)

    board = client.get("/api/leaderboard").get_json()

    assert [entry["username"] for entry in board] == ["first", "second", "third"]


def test_leaderboard_rejects_non_numeric_limit(client):
    assert client.get("/api/leaderboard?limit=abc").status_code == 400


def test_achievements(client, app, register_user, auth):
    achievements = app.extensions["repositories"].achievements
    active = achievements.create_achievement("Early Bird", "Join early", "sunrise", "social")
    achievements.create_achievement("Retired", "Gone", "x", "social", is_active=False)
    token, user = register_user()
    achievements.create_user_achievement(user["id"], active["id"])

    listed = client.get("/api/achievements").get_json()
    assert [a["name"] for a in listed] == ["Early Bird"]

    mine = client.get("/api/user-achievements", headers=auth(token)).get_json()
    assert [a["achievement_id"] for a in mine] == [active["id"]]


def test_rewards_require_auth(client):
    assert client.get("/api/rewards").status_code == 401


def test_rewards_newest_first(client, app, register_user, auth):
    rewards = app.extensions["repositories"].rewards
    token, user = register_user()
    rewards.create_reward(user["id"], "bonus", "a", 1, "0", "older")
    rewards.create_reward(user["id"], "bonus", "b", 1, "0", "newer")

    listed = client.get("/api/rewards", headers=auth(token)).get_json()

    assert [r["description"] for r in listed] == ["newer", "older"]
