# Tests for GET /get/{path}.
# Created: 2026-10-18

import os
from email.utils import formatdate
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from filestore.api.serve import create_app
from filestore.config import Settings

MTIME = 1_700_000_000


@pytest.fixture
def stored_file(storage_root):
    (storage_root / "a").mkdir(parents=True, exist_ok=True)
    f = storage_root / "a" / "b.txt"
    f.write_bytes(b"hello world")
    os.utime(f, (MTIME, MTIME))
    return f


class TestDownload:
    """Tests for GET /get/{path}."""

    def test_download(self, client, stored_file):
        resp = client.get("/get/a/b.txt")
        assert resp.status_code == 200
        assert resp.content == b"hello world"
        assert resp.headers["content-type"] == "application/octet-stream"
        assert resp.headers["content-disposition"].startswith("attachment;")
        assert "b.txt" in resp.headers["content-disposition"]
        assert resp.headers["content-length"] == "11"
        assert resp.headers["last-modified"] == formatdate(MTIME, usegmt=True)

    def test_no_token_needed(self, client, stored_file):
        resp = client.get("/get/a/b.txt", headers={"Authorization": "wrong"})
        assert resp.status_code == 200

    def test_head(self, client, stored_file):
        resp = client.head("/get/a/b.txt")
        assert resp.status_code == 200
        assert resp.headers["content-length"] == "11"
        assert resp.content == b""

    def test_missing(self, client):
        resp = client.get("/get/nope.txt")
        assert resp.status_code == 404
        assert resp.json() == {"status": 0, "message": "资源文件不存在"}

    def test_directory_is_not_found(self, client, stored_file):
        resp = client.get("/get/a")
        assert resp.status_code == 404
        assert resp.json() == {"status": 0, "message": "资源文件不存在"}

    def test_root_is_not_found(self, client):
        resp = client.get("/get/")
        assert resp.status_code == 404

    def test_stat_error(self, client, stored_file):
        with patch("pathlib.Path.stat", side_effect=PermissionError("denied")):
            resp = client.get("/get/a/b.txt")
        assert resp.status_code == 500
        assert resp.json() == {"status": 0, "message": "服务器错误，请稍后重试"}

    def test_non_ascii_name(self, client, storage_root):
        (storage_root / "报告.txt").write_bytes("内容".encode())
        resp = client.get("/get/报告.txt")
        assert resp.status_code == 200
        assert resp.content.decode() == "内容"
        assert resp.headers["content-disposition"].startswith("attachment;")

    def test_traversal_rejected(self, client, tmp_path):
        (tmp_path / "secret.txt").write_text("top secret")
        resp = client.get("/get/..%2Fsecret.txt")
        assert resp.status_code == 400
        assert resp.json() == {"status": 0, "message": "非法路径"}


class TestConditionalAndRange:
    def test_range(self, client, stored_file):
        resp = client.get("/get/a/b.txt", headers={"Range": "bytes=0-4"})
        assert resp.status_code == 206
        assert resp.content == b"hello"

    def test_suffix_range(self, client, stored_file):
        resp = client.get("/get/a/b.txt", headers={"Range": "bytes=-5"})
        assert resp.status_code == 206
        assert resp.content == b"world"

    def test_not_modified(self, client, stored_file):
        resp = client.get(
            "/get/a/b.txt", headers={"If-Modified-Since": formatdate(MTIME, usegmt=True)}
        )
        assert resp.status_code == 304
        assert resp.content == b""

    def test_modified_since_older_date(self, client, stored_file):
        resp = client.get(
            "/get/a/b.txt", headers={"If-Modified-Since": formatdate(MTIME - 60, usegmt=True)}
        )
        assert resp.status_code == 200
        assert resp.content == b"hello world"

    def test_unmodified_since_fails(self, client, stored_file):
        resp = client.get(
            "/get/a/b.txt",
            headers={"If-Unmodified-Since": formatdate(MTIME - 60, usegmt=True)},
        )
        assert resp.status_code == 412

    def test_unmodified_since_passes(self, client, stored_file):
        resp = client.get(
            "/get/a/b.txt", headers={"If-Unmodified-Since": formatdate(MTIME, usegmt=True)}
        )
        assert resp.status_code == 200

    def test_garbage_date_ignored(self, client, stored_file):
        resp = client.get("/get/a/b.txt", headers={"If-Modified-Since": "yesterday-ish"})
        assert resp.status_code == 200

    def test_etag_not_modified(self, client, stored_file):
        etag = client.get("/get/a/b.txt").headers["etag"]
        resp = client.get("/get/a/b.txt", headers={"If-None-Match": etag})
        assert resp.status_code == 304
        assert resp.content == b""
        assert resp.headers["etag"] == etag

    def test_etag_with_modified_since(self, client, stored_file):
        etag = client.get("/get/a/b.txt").headers["etag"]
        resp = client.get(
            "/get/a/b.txt",
            headers={
                "If-None-Match": etag,
                "If-Modified-Since": formatdate(MTIME, usegmt=True),
            },
        )
        assert resp.status_code == 304

    def test_etag_mismatch_overrides_modified_since(self, client, stored_file):
        resp = client.get(
            "/get/a/b.txt",
            headers={
                "If-None-Match": '"stale"',
                "If-Modified-Since": formatdate(MTIME, usegmt=True),
            },
        )
        assert resp.status_code == 200
        assert resp.content == b"hello world"

    def test_etag_wildcard(self, client, stored_file):
        resp = client.get("/get/a/b.txt", headers={"If-None-Match": "*"})
        assert resp.status_code == 304


class TestProtectedDownloads:
    @pytest.fixture
    def client(self, storage_root, token):
        settings = Settings(token=token, storage_root=storage_root, protect_downloads=True)
        return TestClient(create_app(settings))

    def test_requires_token(self, client, stored_file):
        resp = client.get("/get/a/b.txt")
        assert resp.status_code == 401
        assert resp.json() == {"status": 0, "message": "Invalid token"}

    def test_with_token(self, client, stored_file, token):
        resp = client.get("/get/a/b.txt", headers={"Authorization": token})
        assert resp.status_code == 200
        assert resp.content == b"hello world"
