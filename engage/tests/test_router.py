"""Tests for inbound frame dispatch."""


def test_ping_gets_exactly_one_pong(realtime, connect, frame_text):
    connection = connect("a")

    realtime.router.handle("a", frame_text("ping"))

    assert connection.frames() == [{"type": "pong"}]


def test_join_leaderboard_sends_snapshot(realtime, repositories, connect, frame_text):
    repositories.users.create_user("low", "low@example.com", "x")
    high = repositories.users.create_user("high", "high@example.com", "x")
    repositories.users.update_user(high["id"], weekly_xp=50)
    connection = connect("a")

    realtime.router.handle("a", frame_text("join_room", {"room": "leaderboard"}))

    assert "leaderboard" in realtime.registry.rooms_of("a")
    [frame] = connection.frames()
    assert frame["type"] == "leaderboard_update"
    assert [entry["username"] for entry in frame["data"]] == ["high", "low"]
    assert "password" not in frame["data"][0]


def test_join_markets_and_tasks_send_snapshots(realtime, repositories, connect, frame_text):
    repositories.markets.create_market("Will it rain?", "d", "weather", "2030-01-01T00:00:00+00:00", "active")
    repositories.tasks.create_task(
        title="Follow", description="d", category="social", difficulty="easy", xp_reward=10, bdag_reward="1"
    )
    connection = connect("a")

    realtime.router.handle("a", frame_text("join_room", {"room": "markets"}))
    realtime.router.handle("a", frame_text("join_room", {"room": "tasks"}))

    markets_frame, tasks_frame = connection.frames()
    assert markets_frame["type"] == "market_update"
    assert markets_frame["data"][0]["title"] == "Will it rain?"
    assert tasks_frame["type"] == "task_update"
    assert tasks_frame["data"][0]["title"] == "Follow"


def test_join_unrecognised_room_joins_without_snapshot(realtime, connect, frame_text):
    connection = connect("a")

    realtime.router.handle("a", frame_text("join_room", {"room": "user_updates"}))

    assert realtime.registry.rooms_of("a") == {"user_updates"}
    assert connection.sent == []


def test_join_without_room_is_ignored(realtime, connect, frame_text):
    connection = connect("a")

    realtime.router.handle("a", frame_text("join_room", {}))

    assert realtime.registry.rooms_of("a") == set()
    assert connection.sent == []


def test_malformed_and_unknown_frames_are_dropped(realtime, connect, frame_text):
    connection = connect("a")

    realtime.router.handle("a", "{not json")
    realtime.router.handle("a", frame_text("dance"))
    realtime.router.handle("a", '"just a string"')

    assert connection.sent == []
    assert "a" in realtime.registry


def test_frame_from_unknown_connection_is_ignored(realtime, frame_text):
    realtime.router.handle("ghost", frame_text("ping"))
    assert len(realtime.registry) == 0


def test_authenticate_binds_identity(realtime, token_service, connect, frame_text):
    connect("a")
    token = token_service.generate({"id": "user-1", "role": "basic"})

    realtime.router.handle("a", frame_text("authenticate", {"token": token}))

    assert realtime.registry.get("a").user_id == "user-1"


def test_authenticate_accepts_top_level_token(realtime, token_service, connect, frame_text):
    connect("a")
    token = token_service.generate({"id": "user-1", "role": "basic"})

    realtime.router.handle("a", frame_text("authenticate", token=token))

    assert realtime.registry.get("a").user_id == "user-1"


def test_authenticate_with_bad_token_is_silent(realtime, connect, frame_text):
    connection = connect("a")

    realtime.router.handle("a", frame_text("authenticate", {"token": "garbage"}))

    assert realtime.registry.get("a").user_id is None
    assert connection.sent == []


def test_identity_cannot_be_rebound(realtime, token_service, connect, frame_text):
    connect("a")
    first = token_service.generate({"id": "user-1", "role": "basic"})
    second = token_service.generate({"id": "user-2", "role": "basic"})

    realtime.router.handle("a", frame_text("authenticate", {"token": first}))
    realtime.router.handle("a", frame_text("authenticate", {"token": second}))

    assert realtime.registry.get("a").user_id == "user-1"
