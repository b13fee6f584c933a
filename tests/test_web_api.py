import pytest
from fastapi.testclient import TestClient

from web.backend.app import app

RR_PAIR = [
    {"pid": 1, "arrival_time": 0, "execution_pattern": [10]},
    {"pid": 2, "arrival_time": 1, "execution_pattern": [4]},
]


@pytest.fixture
def client():
    return TestClient(app)


def test_root_and_algorithms(client):
    assert client.get("/").status_code == 200
    ids = [a["id"] for a in client.get("/algorithms").json()["algorithms"]]
    assert ids == ["FCFS", "RoundRobin"]


def test_simulate_round_robin(client):
    response = client.post("/simulate", json={
        "processes": RR_PAIR, "algorithms": ["RoundRobin"], "time_slice": 3})
    assert response.status_code == 200

    (result,) = response.json()["results"]
    assert result["algorithm"] == "Round Robin (q=3)"
    assert [(c["process_id"], c["finish_time"], c["wait_time"]) for c in result["completions"]] \
        == [(2, 10, 5), (1, 14, 4)]
    assert result["aggregate"]["makespan"] == 14
    assert result["aggregate"]["average_wait_time"] == pytest.approx(4.5)
    assert result["gantt_chart"][0] == {"pid": 1, "start_time": 0, "end_time": 3, "state": "Running"}


def test_compare_runs_fcfs_and_each_time_slice(client):
    response = client.post("/simulate/compare", json={"processes": RR_PAIR})
    assert response.status_code == 200
    body = response.json()
    assert body["comparison"]["algorithms"] == ["FCFS", "Round Robin (q=10)", "Round Robin (q=5)"]
    assert body["comparison"]["makespan"] == [14, 14, 14]


@pytest.mark.parametrize('payload', [
    {"processes": [{"pid": 1, "arrival_time": 0, "execution_pattern": []}]},
    {"processes": [{"pid": 1, "execution_pattern": [3]}, {"pid": 1, "execution_pattern": [2]}]},
    {"processes": []},
    {"processes": RR_PAIR, "algorithms": ["SJF"]},
])
def test_simulate_rejects_bad_requests(client, payload):
    assert client.post("/simulate", json=payload).status_code == 400


def test_invalid_time_slice_rejected(client):
    response = client.post("/simulate", json={"processes": RR_PAIR, "time_slice": 0})
    assert response.status_code == 422
    response = client.post("/simulate/compare", json={"processes": RR_PAIR, "time_slices": [0]})
    assert response.status_code == 400


def test_sample_processes_are_runnable(client):
    for sample in client.get("/sample-processes").json()["samples"]:
        response = client.post("/simulate", json={"processes": sample["processes"]})
        assert response.status_code == 200


def test_realtime_websocket_steps_to_completion(client):
    with client.websocket_connect("/ws/realtime") as ws:
        ws.send_json({"action": "init", "processes": RR_PAIR,
                      "algorithm": "RoundRobin", "time_slice": 3})
        assert ws.receive_json() == {"type": "initialized",
                                     "algorithm": "Round Robin (q=3)", "process_count": 2}

        messages = []
        while True:
            ws.send_json({"action": "step"})
            message = ws.receive_json()
            messages.append(message)
            if message["complete"]:
                break

        assert messages[0]["running"] == 1
        final = messages[-1]["final"]
        assert [c["process_id"] for c in final["completions"]] == [2, 1]


def test_realtime_websocket_reports_errors(client):
    with client.websocket_connect("/ws/realtime") as ws:
        ws.send_json({"action": "init", "processes": [{"pid": 1, "execution_pattern": []}]})
        assert ws.receive_json()["type"] == "error"
        ws.send_json({"action": "bogus"})
        assert ws.receive_json()["type"] == "error"


@pytest.mark.parametrize('message', [
    {"action": "init", "processes": [{"pid": 1, "execution_pattern": ["x"]}]},
    {"action": "init", "processes": RR_PAIR, "time_slice": "fast"},
    {"action": "init", "processes": RR_PAIR, "time_slice": 0},
    {"action": "init"},
])
def test_realtime_websocket_rejects_malformed_init(client, message):
    with client.websocket_connect("/ws/realtime") as ws:
        ws.send_json(message)
        assert ws.receive_json()["type"] == "error"

        # 연결은 유지되고 이후 올바른 요청을 처리한다
        ws.send_json({"action": "init", "processes": RR_PAIR})
        assert ws.receive_json()["type"] == "initialized"


def test_realtime_websocket_rejects_bad_speed(client):
    with client.websocket_connect("/ws/realtime") as ws:
        ws.send_json({"action": "init", "processes": RR_PAIR})
        ws.receive_json()
        ws.send_json({"action": "run", "speed": "slow"})
        assert ws.receive_json()["type"] == "error"


def test_realtime_websocket_rejects_non_object_message(client):
    with client.websocket_connect("/ws/realtime") as ws:
        ws.send_text("[1, 2]")
        assert ws.receive_json()["type"] == "error"
        ws.send_text("not json")
        assert ws.receive_json()["type"] == "error"


@pytest.mark.parametrize('action', ["step", "run"])
def test_realtime_websocket_requires_init(client, action):
    with client.websocket_connect("/ws/realtime") as ws:
        ws.send_json({"action": action})
        assert ws.receive_json() == {"type": "error", "message": "not initialized"}
