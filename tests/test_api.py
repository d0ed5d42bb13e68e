"""Tests for the Flask JSON API."""

from config import AppConfig
from main import create_app


def run(client):
    resp = client.post("/api/run")
    assert resp.status_code == 200
    return resp.get_json()


class TestState:

    def test_fresh_session_uses_sample_graph(self, client):
        data = client.get("/api/state").get_json()
        assert data["start"] == 0
        assert data["current_step"] is None
        assert data["vertex_ids"] == [0, 1, 2, 3, 4, 5, 6]
        assert data["graph_valid"] is True

    def test_default_start_from_config(self):
        app = create_app(AppConfig(secret_key="k", testing=True, default_start=4))
        data = app.test_client().get("/api/graph").get_json()
        assert data["start"] == 4
        assert len(data["graph"]["edges"]) == 12


class TestRunAndStep:

    def test_run_returns_initial_step(self, client):
        data = run(client)
        assert data["current_step"] == 0
        assert data["total_steps"] == 8
        assert data["at_start"] is True
        assert data["step"]["current_vertex"] is None
        assert data["metrics"]["reachable"] == 7
        assert data["metrics"]["total_steps"] == 8
        assert data["metrics"]["stale_skips"] == 0
        assert data["fringe"][0] == [0, 0]

    def test_step_before_run(self, client):
        resp = client.post("/api/step/next")
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Run the algorithm first"

    def test_next_and_prev(self, client):
        run(client)
        data = client.post("/api/step/next").get_json()
        assert data["current_step"] == 1
        assert data["step"]["current_vertex"] == 0
        assert sorted(data["tree_edges"]) == [[0, 1], [0, 2]]
        data = client.post("/api/step/prev").get_json()
        assert data["current_step"] == 0

    def test_prev_at_first_step(self, client):
        run(client)
        resp = client.post("/api/step/prev")
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Already at first step"

    def test_goto_last_then_next(self, client):
        run(client)
        data = client.post("/api/step/goto", json={"index": 7}).get_json()
        assert data["at_end"] is True
        assert [3, 11] in data["step"]["dist_to"]
        resp = client.post("/api/step/next")
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Already at last step"

    def test_goto_out_of_range(self, client):
        run(client)
        assert client.post("/api/step/goto", json={"index": 99}).status_code == 400
        assert client.post("/api/step/goto", json={"index": "2"}).status_code == 400
        assert client.post("/api/step/goto", json={"index": True}).status_code == 400
        assert client.get("/api/state").get_json()["current_step"] == 0

    def test_reset(self, client):
        run(client)
        client.post("/api/step/goto", json={"index": 5})
        data = client.post("/api/step/reset").get_json()
        assert data["current_step"] == 0

    def test_full_trace(self, client):
        data = client.get("/api/trace").get_json()
        assert data["start"] == 0
        assert len(data["steps"]) == 8
        assert data["steps"][-1]["is_final"] is True


class TestGraphEditing:

    def test_edit_clears_run(self, client):
        run(client)
        client.post("/api/graph/vertices", json={"x": 10, "y": 20})
        assert client.get("/api/state").get_json()["current_step"] is None

    def test_add_vertex(self, client):
        resp = client.post("/api/graph/vertices", json={"x": 10, "y": 20})
        assert resp.status_code == 201
        assert resp.get_json()["vertex"] == {"id": 7, "x": 10.0, "y": 20.0, "processed": False}
        assert run(client)["total_steps"] == 9

    def test_move_vertex_keeps_run(self, client):
        run(client)
        client.post("/api/step/next")
        resp = client.patch("/api/graph/vertices/3", json={"x": 1, "y": 2})
        assert resp.status_code == 200
        assert client.get("/api/state").get_json()["current_step"] == 1

    def test_cannot_delete_start(self, client):
        resp = client.delete("/api/graph/vertices/0")
        assert resp.status_code == 400
        assert "Cannot delete the starting node" in resp.get_json()["error"]

    def test_delete_vertex(self, client):
        assert client.delete("/api/graph/vertices/6").status_code == 200
        assert client.delete("/api/graph/vertices/6").status_code == 404
        data = run(client)
        assert data["total_steps"] == 7

    def test_add_edge_rejects_self_loop(self, client):
        resp = client.post("/api/graph/edges", json={"source": 2, "target": 2, "weight": 1})
        assert resp.status_code == 400
        assert "Self-loops" in resp.get_json()["error"]
        assert len(client.get("/api/graph").get_json()["graph"]["edges"]) == 12

    def test_add_edge_rejects_duplicate_and_negative(self, client):
        dup = client.post("/api/graph/edges", json={"source": 0, "target": 1, "weight": 7})
        assert "Duplicate edge" in dup.get_json()["error"]
        neg = client.post("/api/graph/edges", json={"source": 5, "target": 0, "weight": -2})
        assert "Negative edge weights" in neg.get_json()["error"]

    def test_add_edge_changes_result(self, client):
        resp = client.post("/api/graph/edges", json={"source": 0, "target": 3, "weight": 1})
        assert resp.status_code == 201
        final = client.get("/api/trace").get_json()["steps"][-1]
        assert [3, 1] in final["dist_to"]

    def test_set_weight(self, client):
        resp = client.patch("/api/graph/edges/0/1", json={"weight": 4})
        assert resp.get_json()["edge"]["weight"] == 4
        assert client.patch("/api/graph/edges/0/1", json={"weight": -4}).status_code == 400
        assert client.patch("/api/graph/edges/5/0", json={"weight": 4}).status_code == 404
        assert client.patch("/api/graph/edges/0/1", json={}).status_code == 400

    def test_delete_edge(self, client):
        assert client.delete("/api/graph/edges/0/1").status_code == 200
        assert client.delete("/api/graph/edges/0/1").status_code == 404

    def test_replace_graph(self, client):
        graph = {
            "vertices": [{"id": 0}, {"id": 1}],
            "edges": [{"source": 1, "target": 0, "weight": 3}],
        }
        resp = client.put("/api/graph", json={"graph": graph, "start": 1})
        assert resp.status_code == 200
        assert resp.get_json()["start"] == 1
        final = client.get("/api/trace").get_json()["steps"][-1]
        assert [0, 3] in final["dist_to"]

    def test_replace_graph_rejects_invalid(self, client):
        graph = {"vertices": [{"id": 0}], "edges": [{"source": 0, "target": 0}]}
        resp = client.put("/api/graph", json={"graph": graph})
        assert resp.status_code == 400
        assert client.get("/api/state").get_json()["vertex_ids"] == [0, 1, 2, 3, 4, 5, 6]

    def test_replace_graph_rejects_unknown_start(self, client):
        resp = client.put("/api/graph", json={"graph": {"vertices": [{"id": 0}]}, "start": 5})
        assert resp.status_code == 400

    def test_empty_graph_runs(self, client):
        resp = client.put("/api/graph", json={"graph": {"vertices": [], "edges": []}})
        assert resp.get_json()["start"] is None
        data = run(client)
        assert data["total_steps"] == 1
        assert data["step"]["fringe"] == []

    def test_replace_graph_rejects_non_object(self, client):
        resp = client.put("/api/graph", json={"graph": []})
        assert resp.status_code == 400
        assert "error" in resp.get_json()
        assert client.get("/api/state").get_json()["vertex_ids"] == [0, 1, 2, 3, 4, 5, 6]

    def test_replace_graph_rejects_bool_start(self, client):
        graph = {"vertices": [{"id": 0}, {"id": 1}]}
        resp = client.put("/api/graph", json={"graph": graph, "start": True})
        assert resp.status_code == 400

    def test_add_vertex_rejects_bad_position(self, client):
        resp = client.post("/api/graph/vertices", json={"x": "abc"})
        assert resp.status_code == 400
        assert "error" in resp.get_json()
        assert client.post("/api/graph/vertices", json={"y": None}).status_code == 400
        assert len(client.get("/api/graph").get_json()["graph"]["vertices"]) == 7

    def test_move_vertex_rejects_bad_position(self, client):
        before = client.get("/api/graph").get_json()["graph"]["vertices"][1]
        resp = client.patch("/api/graph/vertices/1", json={"x": "abc"})
        assert resp.status_code == 400
        assert client.get("/api/graph").get_json()["graph"]["vertices"][1] == before

    def test_sample_restores_default(self, client):
        client.delete("/api/graph/vertices/6")
        data = client.post("/api/graph/sample").get_json()
        assert len(data["graph"]["vertices"]) == 7


class TestStartVertex:

    def test_change_start(self, client):
        assert client.post("/api/config/start", json={"start": 1}).status_code == 200
        final = client.get("/api/trace").get_json()["steps"][-1]
        assert [0, None] in final["dist_to"]
        assert [4, 3] in final["dist_to"]

    def test_unknown_start(self, client):
        resp = client.post("/api/config/start", json={"start": 40})
        assert resp.status_code == 400
        assert client.get("/api/state").get_json()["start"] == 0

    def test_bool_start_is_rejected(self, client):
        resp = client.post("/api/config/start", json={"start": True})
        assert resp.status_code == 400
        assert client.get("/api/state").get_json()["start"] == 0
