"""Tests for the HTTP endpoints."""

import json

import pytest


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "codepatch-backend"}


class TestDiffRoutes:
    """Test cases for /api/diff."""

    def test_compute(self, client):
        response = client.post("/api/diff/compute", json={"original": "a\nb\nc", "modified": "a\nx\nc"})

        assert response.status_code == 200
        body = response.json()
        assert body["diff"] == "  a\n- b\n+ x\n  c"
        assert body["stats"] == {"additions": 1, "deletions": 1, "unchanged": 2}

    def test_apply(self, client):
        response = client.post("/api/diff/apply", json={"original": "a\nb\nc", "diff": "  a\n- b\n+ x\n  c"})

        assert response.status_code == 200
        assert response.json() == {"content": "a\nx\nc"}

    def test_apply_checked_reports_unresolved(self, client):
        response = client.post("/api/diff/apply-checked", json={"original": "a\nb", "diff": "  a\n  z"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["unresolved_lines"] == 1
        assert body["content"] == "a"

    def test_stats_tolerates_foreign_lines(self, client):
        response = client.post("/api/diff/stats", json={"diff": "garbage\n+ a"})

        assert response.status_code == 200
        assert response.json() == {"additions": 1, "deletions": 0, "unchanged": 0}

    def test_lines(self, client):
        response = client.post("/api/diff/lines", json={"diff": "  a\n+ b"})

        assert response.json() == {
            "lines": [{"kind": "context", "text": "a"}, {"kind": "added", "text": "b"}]
        }

    def test_unified(self, client):
        response = client.post(
            "/api/diff/unified",
            json={"path": "src/app.py", "original": "a\nb\nc", "modified": "a\nx\nc"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["path"] == "src/app.py"
        assert body["unified_diff"].startswith("--- a/src/app.py\n+++ b/src/app.py\n@@ ")
        assert body["unified_diff"].endswith("  a\n- b\n+ x\n  c")

    def test_unified_rejects_unsafe_path(self, client):
        response = client.post(
            "/api/diff/unified",
            json={"path": "../secrets", "original": "", "modified": "x"},
        )

        assert response.status_code == 400

    def test_content_over_limit(self, client, config_manager):
        config_manager.set("limits", {"maxFileSize": 8})

        response = client.post("/api/diff/compute", json={"original": "x" * 9, "modified": ""})

        assert response.status_code == 413
        assert "exceeds maximum size" in response.json()["detail"]

    @pytest.mark.parametrize(
        "original,modified",
        [
            ("a" * 90, "b" * 90),
            ("\n" * 100, "x\n" * 50),
        ],
    )
    def test_compute_then_apply_within_file_limit(self, client, config_manager, original, modified):
        config_manager.set("limits", {"maxFileSize": 100})

        computed = client.post("/api/diff/compute", json={"original": original, "modified": modified})
        assert computed.status_code == 200
        diff = computed.json()["diff"]

        applied = client.post("/api/diff/apply", json={"original": original, "diff": diff})
        assert applied.status_code == 200
        assert applied.json()["content"] == modified

        checked = client.post("/api/diff/apply-checked", json={"original": original, "diff": diff})
        assert checked.status_code == 200
        assert checked.json()["success"] is True

    def test_apply_rejects_original_over_limit(self, client, config_manager):
        config_manager.set("limits", {"maxFileSize": 100})

        response = client.post("/api/diff/apply", json={"original": "x" * 101, "diff": "+ y"})

        assert response.status_code == 413

    def test_apply_rejects_oversized_diff(self, client, config_manager):
        config_manager.set("limits", {"maxFileSize": 100})

        response = client.post("/api/diff/apply", json={"original": "", "diff": "+ " + "y" * 700})

        assert response.status_code == 413
        assert response.json()["detail"].startswith("Diff exceeds maximum size")


class TestAgentRoutes:
    """Test cases for /api/agent."""

    @pytest.fixture
    def llm_answer(self):
        payload = {
            "summary": "Replace b",
            "files": [
                {"path": "a.py", "content": "a\nx"},
                {"path": "new.py", "content": "print(1)"},
            ],
        }
        return f"Here are the changes:\n```json\n{json.dumps(payload)}\n```\nDone."

    def test_changes(self, client, llm_answer):
        response = client.post(
            "/api/agent/changes",
            json={
                "response": llm_answer,
                "existing_files": [{"path": "a.py", "content": "a\nb"}],
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["summary"] == "Replace b"
        assert body["raw_response"] is None
        first, second = body["files"]
        assert first["path"] == "a.py"
        assert first["original_content"] == "a\nb"
        assert first["diff"] == "  a\n- b\n+ x"
        assert second["original_content"] == ""
        assert second["diff"] == "+ print(1)"

    def test_changes_accepts_bare_json(self, client):
        answer = 'Sure! {"summary": "s", "files": [{"path": "f.txt", "content": "hi"}]}'

        response = client.post("/api/agent/changes", json={"response": answer})

        assert response.json()["files"][0]["diff"] == "+ hi"

    @pytest.mark.parametrize(
        "answer",
        [
            "no json here",
            '{"files": []}',
            '{"summary": "s", "files": "nope"}',
        ],
    )
    def test_unparseable_response(self, client, answer):
        response = client.post("/api/agent/changes", json={"response": answer})

        assert response.status_code == 200
        body = response.json()
        assert body["summary"] == "Failed to parse LLM response"
        assert body["files"] == []
        assert body["raw_response"] == answer

    def test_raw_response_is_truncated(self, client):
        response = client.post("/api/agent/changes", json={"response": "z" * 800})

        assert len(response.json()["raw_response"]) == 500

    def test_existing_file_matched_by_path_as_written(self, client):
        answer = json.dumps({"summary": "s", "files": [{"path": "my file.py", "content": "a\nx"}]})

        response = client.post(
            "/api/agent/changes",
            json={
                "response": answer,
                "existing_files": [{"path": "my file.py", "content": "a\nb"}],
            },
        )

        assert response.status_code == 200
        (file_diff,) = response.json()["files"]
        assert file_diff["path"] == "my file.py"
        assert file_diff["original_content"] == "a\nb"
        assert file_diff["diff"] == "  a\n- b\n+ x"

    def test_entries_without_string_content_are_skipped(self, client):
        answer = json.dumps(
            {
                "summary": "s",
                "files": [
                    {"path": "none.py", "content": None},
                    {"path": "number.py", "content": 3},
                    {"path": "missing.py"},
                    {"path": "ok.py", "content": "x"},
                ],
            }
        )

        response = client.post("/api/agent/changes", json={"response": answer})

        assert response.status_code == 200
        files = response.json()["files"]
        assert [f["path"] for f in files] == ["ok.py"]
        assert files[0]["new_content"] == "x"

    def test_unsafe_path_rejected(self, client):
        answer = json.dumps({"summary": "s", "files": [{"path": "../x", "content": ""}]})

        response = client.post("/api/agent/changes", json={"response": answer})

        assert response.status_code == 400

    def test_payload_over_limit(self, client, config_manager):
        config_manager.set("limits", {"maxAgentPayload": 64})

        response = client.post("/api/agent/changes", json={"response": "y" * 100})

        assert response.status_code == 413

    def test_verify(self, client, llm_answer):
        changes = client.post(
            "/api/agent/changes",
            json={
                "response": llm_answer,
                "existing_files": [{"path": "a.py", "content": "a\nb"}],
            },
        ).json()

        response = client.post("/api/agent/verify", json={"files": changes["files"]})

        assert response.status_code == 200
        body = response.json()
        assert body["all_verified"] is True
        assert [f["matches_new_content"] for f in body["files"]] == [True, True]

    def test_verify_detects_mismatch(self, client):
        tampered = {
            "path": "a.py",
            "original_content": "a\nb",
            "new_content": "a\nsomething else",
            "diff": "  a\n- b\n+ x",
        }

        response = client.post("/api/agent/verify", json={"files": [tampered]})

        body = response.json()
        assert body["all_verified"] is False
        assert body["files"][0]["result"]["success"] is True
        assert body["files"][0]["matches_new_content"] is False


class TestConfigRoutes:
    """Test cases for /api/config."""

    def test_get_defaults(self, client):
        response = client.get("/api/config")

        assert response.status_code == 200
        assert response.json()["limits"] == {"maxFileSize": 1048576, "maxAgentPayload": 5242880}

    def test_update_limits(self, client, config_manager):
        response = client.put("/api/config", json={"limits": {"maxFileSize": 2048}})

        assert response.status_code == 200
        assert config_manager.config_file.exists()
        limits = client.get("/api/config").json()["limits"]
        assert limits == {"maxFileSize": 2048, "maxAgentPayload": 5242880}

    def test_rejects_non_positive_limit(self, client):
        response = client.put("/api/config", json={"limits": {"maxFileSize": 0}})

        assert response.status_code == 422
