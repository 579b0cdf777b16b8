"""Tests for result formatting in JSON, quiet and Rich modes."""

from __future__ import annotations

import json

from cikit.output.formatters import OutputSettings, format_result
from cikit.services.result import ServiceResult

PACKAGES = ServiceResult(
    ok=True,
    op="packages",
    data={
        "version": "v1.0.0",
        "build_path": "/p/build",
        "count": 2,
        "packages": [
            {
                "platform": "darwin/amd64",
                "archive": "/p/build/demo_v1.0.0_darwin_amd64.tar.gz",
                "binaries": ["demo"],
            },
            {
                "platform": "linux/amd64",
                "archive": "/p/build/demo_v1.0.0_linux_amd64.tar.gz",
                "binaries": ["demo"],
            },
        ],
        "bin": ["/p/bin/demo"],
    },
    meta={"build": {"commit": "abc1234", "version": "v1.0.0"}},
)

CHANGES = ServiceResult.failure(
    "no_changes_in_commit",
    "UNCOMMITTED_CHANGES",
    "Generated code out of sync: uncommitted changes found in api.pb.go",
    detail={"files": ["api.pb.go"], "diff": "diff --git a/api.pb.go b/api.pb.go\n"},
)


class TestJson:
    def test_json_beats_quiet(self) -> None:
        out = format_result(PACKAGES, settings=OutputSettings(json_output=True, quiet=True))
        parsed = json.loads(out)
        assert parsed["ok"] is True
        assert parsed["op"] == "packages"
        assert parsed["data"]["count"] == 2

    def test_error_payload(self) -> None:
        parsed = json.loads(format_result(CHANGES, settings=OutputSettings(json_output=True)))
        assert parsed["error"]["code"] == "UNCOMMITTED_CHANGES"
        assert parsed["error"]["detail"]["files"] == ["api.pb.go"]


class TestQuiet:
    def test_archives_one_per_line(self) -> None:
        out = format_result(PACKAGES, settings=OutputSettings(quiet=True))
        assert out.splitlines() == [
            "/p/build/demo_v1.0.0_darwin_amd64.tar.gz",
            "/p/build/demo_v1.0.0_linux_amd64.tar.gz",
        ]

    def test_images(self) -> None:
        result = ServiceResult(ok=True, op="docker_push", data={"images": ["a:1", "a:latest"]})
        assert format_result(result, settings=OutputSettings(quiet=True)) == "a:1\na:latest"

    def test_codecov_url(self) -> None:
        result = ServiceResult(ok=True, op="codecov", data={"url": "https://codecov.io/r"})
        assert format_result(result, settings=OutputSettings(quiet=True)) == "https://codecov.io/r"

    def test_generic(self) -> None:
        result = ServiceResult(ok=True, op="clean", data={"count": 0})
        assert format_result(result, settings=OutputSettings(quiet=True)) == "OK: clean"

    def test_error(self) -> None:
        out = format_result(CHANGES, settings=OutputSettings(quiet=True))
        assert out.startswith("ERROR: no_changes_in_commit")


class TestRich:
    def test_packages_table(self) -> None:
        out = format_result(PACKAGES)
        assert "OK" in out
        assert "packages" in out
        assert "darwin/amd64" in out
        assert "demo_v1.0.0_linux_amd64.tar.gz" in out
        assert "version: v1.0.0" in out

    def test_meta_only_when_verbose(self) -> None:
        assert "build.commit" not in format_result(PACKAGES)
        verbose = format_result(PACKAGES, settings=OutputSettings(verbose=True))
        assert "build.commit: abc1234" in verbose

    def test_error_lists_files_and_diff(self) -> None:
        out = format_result(CHANGES)
        assert "ERROR" in out
        assert "Generated code out of sync" in out
        assert "M api.pb.go" in out
        assert "diff --git a/api.pb.go" in out

    def test_error_detail_when_verbose(self) -> None:
        result = ServiceResult.failure(
            "test",
            "COMMAND_FAILED",
            "`go test` exited with status 1",
            detail={"command": ["go", "test"], "returncode": 1},
        )
        assert "returncode" not in format_result(result)
        assert "returncode: 1" in format_result(result, settings=OutputSettings(verbose=True))

    def test_skipped_push(self) -> None:
        result = ServiceResult(
            ok=True,
            op="docker_push",
            data={"skipped": True, "branch": "master", "images": []},
        )
        assert "skipped on master" in format_result(result)

    def test_pushed_images(self) -> None:
        result = ServiceResult(
            ok=True,
            op="docker_push",
            data={"skipped": False, "images": ["quay.io/acme/demo:v1"], "latest": False},
        )
        out = format_result(result)
        assert "quay.io/acme/demo:v1" in out
        assert "latest: False" in out

    def test_tests_hide_packages_unless_verbose(self) -> None:
        result = ServiceResult(
            ok=True, op="test", data={"count": 1, "packages": ["example.com/x"], "race": False}
        )
        assert "example.com/x" not in format_result(result)
        assert "example.com/x" in format_result(result, settings=OutputSettings(verbose=True))

    def test_generic_lists(self) -> None:
        result = ServiceResult(ok=True, op="clean", data={"removed": [], "count": 0})
        out = format_result(result)
        assert "removed: -" in out
        assert "count: 0" in out
