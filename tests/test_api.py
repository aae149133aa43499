"""Tests for the HTTP API."""

from __future__ import annotations

import io
import time
import zipfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from file_matcher.app import create_app
from file_matcher.config import settings


@pytest.fixture
def client():
    with TestClient(create_app()) as c:
        yield c


@pytest.fixture
def workspace_id(client: TestClient) -> str:
    return client.post("/api/workspaces").json()["id"]


def _upload(client: TestClient, workspace_id: str, files: dict[str, bytes]):
    parts = [("files", (path, data, "application/octet-stream")) for path, data in files.items()]
    return client.post(f"/api/workspaces/{workspace_id}/files", files=parts, data={"paths": list(files)})


def _wait_for_job(client: TestClient, job_id: str) -> dict:
    for _ in range(200):
        job = client.get(f"/api/archive/jobs/{job_id}").json()
        if job["status"] in ("completed", "failed"):
            return job
        time.sleep(0.01)
    raise AssertionError("archive job did not finish")


def _admin_token(client: TestClient) -> str:
    response = client.post(
        "/api/auth/login",
        json={"username": settings.admin_username, "password": settings.admin_password},
    )
    return response.json()["token"]


class TestSystem:
    def test_health(self, client: TestClient) -> None:
        assert client.get("/api/system/health").json() == {"status": "healthy"}

    def test_only_api_routes_are_served(self, client: TestClient) -> None:
        assert client.get("/").status_code == 404
        assert client.get("/index.js").status_code == 404

    def test_file_types(self, client: TestClient) -> None:
        types = {t["value"]: t["extensions"] for t in client.get("/api/system/file-types").json()}
        assert types["all"] == []
        assert types["jpeg"] == ["jpeg", "jpg"]


class TestFileMatcherFlow:
    def test_end_to_end(self, client: TestClient, workspace_id: str) -> None:
        loaded = _upload(client, workspace_id, {
            "Invoice_DCA-4901.pdf": b"invoice",
            "Photo_DCA-493.png": b"photo",
            "Manual_DCA-999.docx": b"manual",
        })
        assert loaded.status_code == 200
        assert loaded.json()["files_loaded"] == 3
        assert loaded.json()["message"] == "Successfully loaded 3 files"

        match = client.post(
            f"/api/workspaces/{workspace_id}/match",
            json={"codes": "DCA-4901, DCA-493\nDCA-500", "file_type": "all"},
        ).json()
        assert match["status"] == "matched"
        assert match["kind"] == "partial_success"
        assert [f["name"] for f in match["matched_files"]] == ["Invoice_DCA-4901.pdf", "Photo_DCA-493.png"]
        assert match["matched_files"][0]["matched"] is True
        assert "handle" not in match["matched_files"][0]
        assert match["unmatched_codes"] == ["DCA-500"]

        started = client.post(f"/api/workspaces/{workspace_id}/archive")
        assert started.status_code == 200
        job = _wait_for_job(client, started.json()["job_id"])
        assert job["status"] == "completed"
        assert job["message"] == "Downloaded 2 files as ZIP"

        download = client.get(f"/api/archive/jobs/{job['id']}/download")
        assert download.status_code == 200
        assert download.headers["content-type"] == "application/zip"
        assert 'filename="matched_files.zip"' in download.headers["content-disposition"]
        with zipfile.ZipFile(io.BytesIO(download.content)) as zf:
            assert zf.namelist() == ["Invoice_DCA-4901.pdf", "Photo_DCA-493.png"]

        assert client.get(f"/api/archive/jobs/{job['id']}/download").status_code == 410

    def test_folder_paths_survive_into_archive(self, client: TestClient, workspace_id: str) -> None:
        _upload(client, workspace_id, {"folderA/sub/report-X1.pdf": b"r", "folderA/other.pdf": b"o"})
        files = client.get(f"/api/workspaces/{workspace_id}/files").json()
        assert [f["path"] for f in files["files"]] == ["folderA/sub/report-X1.pdf", "folderA/other.pdf"]

        client.post(f"/api/workspaces/{workspace_id}/match", json={"codes": "x1"})
        job_id = client.post(f"/api/workspaces/{workspace_id}/archive").json()["job_id"]
        _wait_for_job(client, job_id)
        data = client.get(f"/api/archive/jobs/{job_id}/download").content
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            assert zf.namelist() == ["folderA/sub/report-X1.pdf"]

    def test_match_without_files(self, client: TestClient, workspace_id: str) -> None:
        response = client.post(f"/api/workspaces/{workspace_id}/match", json={"codes": "ABC"})
        assert response.status_code == 200
        body = response.json()
        assert body["kind"] == "validation_failure"
        assert body["message"] == "Please upload files first"

    def test_no_match_message(self, client: TestClient, workspace_id: str) -> None:
        _upload(client, workspace_id, {"x.pdf": b"x"})
        body = client.post(f"/api/workspaces/{workspace_id}/match", json={"codes": "ZZZ"}).json()
        assert body["status"] == "no_match"
        assert body["unmatched_codes"] == ["ZZZ"]
        assert body["message"] == "No files matched the given product codes. Searched in 1 files."

    def test_chinese_messages(self, client: TestClient, workspace_id: str) -> None:
        body = client.post(f"/api/workspaces/{workspace_id}/match?lang=zh", json={"codes": "A"}).json()
        assert body["message"] == "请先上传文件"

    def test_archive_without_matches(self, client: TestClient, workspace_id: str) -> None:
        response = client.post(f"/api/workspaces/{workspace_id}/archive")
        assert response.status_code == 400
        assert response.json()["detail"] == "No matched files to download"

    def test_mismatched_paths(self, client: TestClient, workspace_id: str) -> None:
        response = client.post(
            f"/api/workspaces/{workspace_id}/files",
            files=[("files", ("a.pdf", b"a", "application/pdf"))],
            data={"paths": ["a.pdf", "b.pdf"]},
        )
        assert response.status_code == 400


class TestWorkspaces:
    def test_unknown_workspace(self, client: TestClient) -> None:
        assert client.get("/api/workspaces/nope").status_code == 404
        assert client.post("/api/workspaces/nope/match", json={"codes": "A"}).status_code == 404
        assert client.post("/api/workspaces/nope/archive").status_code == 404

    def test_summary_and_delete(self, client: TestClient, workspace_id: str) -> None:
        _upload(client, workspace_id, {"a.pdf": b"abc"})
        summary = client.get(f"/api/workspaces/{workspace_id}").json()
        assert summary["file_count"] == 1
        assert summary["total_size"] == 3
        assert summary["load_state"] == "succeeded"
        progress = client.get(f"/api/workspaces/{workspace_id}/progress").json()
        assert set(progress) == {"processing_files", "creating_zip"}
        assert progress["processing_files"]["percent"] == 0.0
        assert not progress["processing_files"]["active"]
        assert summary["progress"]["creating_zip"]["phase"] == "creating_zip"

        assert client.delete(f"/api/workspaces/{workspace_id}").json() == {"deleted": True}
        assert client.get(f"/api/workspaces/{workspace_id}").status_code == 404

    def test_delete_releases_archive_jobs(self, client: TestClient, workspace_id: str) -> None:
        _upload(client, workspace_id, {"A-1.pdf": b"a"})
        client.post(f"/api/workspaces/{workspace_id}/match", json={"codes": "A-1"})
        job_id = client.post(f"/api/workspaces/{workspace_id}/archive").json()["job_id"]
        assert _wait_for_job(client, job_id)["status"] == "completed"

        client.delete(f"/api/workspaces/{workspace_id}")
        assert client.get(f"/api/archive/jobs/{job_id}").status_code == 404
        assert client.get(f"/api/archive/jobs/{job_id}/download").status_code == 404


class TestAuth:
    def test_student_login_and_me(self, client: TestClient) -> None:
        login = client.post("/api/auth/login", json={"username": "api-student"}).json()
        assert login["user"]["role"] == "student"
        assert "password" not in login["user"]

        me = client.get("/api/auth/me", headers={"X-Session-Token": login["token"]})
        assert me.json()["username"] == "api-student"

        client.post("/api/auth/logout", headers={"X-Session-Token": login["token"]})
        assert client.get("/api/auth/me", headers={"X-Session-Token": login["token"]}).status_code == 401

    def test_bad_admin_password(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/login",
            json={"username": settings.admin_username, "password": "definitely-wrong"},
        )
        assert response.status_code == 401

    def test_users_is_admin_only(self, client: TestClient) -> None:
        student = client.post("/api/auth/login", json={"username": "nosy"}).json()["token"]
        assert client.get("/api/users", headers={"X-Session-Token": student}).status_code == 403

        users = client.get("/api/users", headers={"X-Session-Token": _admin_token(client)}).json()
        assert settings.admin_username in [u["username"] for u in users]

    def test_load_directory_requires_admin(self, client: TestClient, workspace_id: str, tmp_path: Path) -> None:
        response = client.post(
            f"/api/workspaces/{workspace_id}/files/load-directory",
            json={"path": str(tmp_path)},
        )
        assert response.status_code == 401

    def test_load_directory(self, client: TestClient, workspace_id: str, tmp_path: Path) -> None:
        root = tmp_path / "catalog"
        (root / "sub").mkdir(parents=True)
        (root / "sub" / "DCA-1.pdf").write_bytes(b"%PDF")
        headers = {"X-Session-Token": _admin_token(client)}

        response = client.post(
            f"/api/workspaces/{workspace_id}/files/load-directory",
            json={"path": str(root)},
            headers=headers,
        )
        assert response.status_code == 200
        assert response.json()["files_loaded"] == 1

        files = client.get(f"/api/workspaces/{workspace_id}/files").json()["files"]
        assert files[0]["path"] == "catalog/sub/DCA-1.pdf"
        assert files[0]["mime_type"] == "application/pdf"

        missing = client.post(
            f"/api/workspaces/{workspace_id}/files/load-directory",
            json={"path": str(tmp_path / "missing")},
            headers=headers,
        )
        assert missing.status_code == 400


class TestPractice:
    def test_records_and_stats(self, client: TestClient) -> None:
        token = client.post("/api/auth/login", json={"username": "practice-student"}).json()["token"]
        headers = {"X-Session-Token": token}

        created = client.post(
            "/api/practice/records",
            json={"tool_type": "poem", "action": "recited", "details": {"title": "静夜思"}},
            headers=headers,
        )
        assert created.status_code == 200

        records = client.get("/api/practice/records", headers=headers).json()
        assert [r["action"] for r in records] == ["recited"]

        stats = client.get("/api/practice/stats", headers=headers).json()
        assert stats["total"] == 1
        assert stats["by_tool"]["poem"] == 1

    def test_requires_login(self, client: TestClient) -> None:
        assert client.get("/api/practice/records").status_code == 401
