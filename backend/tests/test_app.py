import pytest
from fastapi.testclient import TestClient

import backend.app
from backend.app import EventIdGenerator, create_app
from lamport.recorder import EventRecorder


@pytest.fixture
def recorder():
    return EventRecorder()


@pytest.fixture
def client(recorder):
    return TestClient(create_app(recorder))


def test_index_lists_endpoints(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "POST /event" in resp.text
    assert "GET  /time" in resp.text


def test_create_event(client):
    resp = client.post("/event", params={"message": "test_message"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["label"] == "test_message"
    assert body["logical_time"] == 1
    assert body["id"].startswith("event-")
    assert "wall_time" in body


def test_create_event_default_label(client):
    body = client.post("/event").json()
    assert body["label"] == "Local event"


def test_create_event_wrong_method(client):
    assert client.get("/event").status_code == 405


def test_receive_message(client):
    resp = client.post("/message", params={"timestamp": "10", "message": "external_event"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["logical_time"] == 11
    assert body["id"] == "msg-11"
    assert body["label"] == "Processed: external_event"


@pytest.mark.parametrize("params", [
    {"timestamp": "5"},
    {"message": "test"},
    {"timestamp": "", "message": "test"},
    {},
])
def test_receive_message_missing_params(client, recorder, params):
    resp = client.post("/message", params=params)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Missing timestamp or message parameter"
    assert recorder.peek() == 0


@pytest.mark.parametrize("timestamp", [
    "invalid", "1.5", str(2 ** 63), "1_000", " 5", "5 ", "\u0665", "\uff15", "+", "5\n",
])
def test_receive_message_invalid_timestamp(client, recorder, timestamp):
    resp = client.post("/message", params={"timestamp": timestamp, "message": "test"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid timestamp"
    assert recorder.peek() == 0


def test_receive_message_negative_timestamp_still_advances(client):
    client.post("/event")
    body = client.post("/message", params={"timestamp": "-7", "message": "old"}).json()
    assert body["logical_time"] == 2


def test_get_events(client):
    client.post("/event", params={"message": "First event"})
    client.post("/event", params={"message": "Second event"})
    resp = client.get("/events")
    assert resp.status_code == 200
    body = resp.json()
    assert body["current_time"] == 2
    assert body["count"] == 2
    assert [e["label"] for e in body["events"]] == ["First event", "Second event"]


def test_get_time(client, recorder):
    recorder.clock.tick()
    resp = client.get("/time")
    assert resp.status_code == 200
    body = resp.json()
    assert body["logical_time"] == 1
    assert "wall_time" in body


def test_distributed_scenario_over_http(client):
    times = [
        client.post("/event", params={"message": "Start transaction"}).json()["logical_time"],
        client.post("/event", params={"message": "Read from database"}).json()["logical_time"],
        client.post("/message", params={"timestamp": 5, "message": "Update"}).json()["logical_time"],
        client.post("/event", params={"message": "Complete transaction"}).json()["logical_time"],
        client.post("/message", params={"timestamp": 4, "message": "Status"}).json()["logical_time"],
    ]
    assert times == [1, 2, 6, 7, 8]
    assert client.get("/time").json()["logical_time"] == 8
    events = client.get("/events").json()["events"]
    assert [e["logical_time"] for e in events] == [1, 2, 6, 7, 8]


def test_event_ids_are_unique():
    gen = EventIdGenerator()
    ids = {gen() for _ in range(1000)}
    assert len(ids) == 1000


def test_apps_do_not_share_state():
    a = TestClient(create_app())
    b = TestClient(create_app())
    a.post("/event")
    assert a.get("/time").json()["logical_time"] == 1
    assert b.get("/time").json()["logical_time"] == 0


def test_receive_message_signed_timestamps(client):
    assert client.post("/message", params={"timestamp": "+4", "message": "a"}).json()["logical_time"] == 5
    assert client.post("/message", params={"timestamp": str(2 ** 63 - 1), "message": "b"}).status_code == 200


def test_unknown_path_is_not_found(client):
    assert client.get("/no-such-route").status_code == 404


def test_module_builds_no_app_at_import():
    assert not hasattr(backend.app, "app")
