"""Tests for Dockerfile mappings and image references."""

import pytest

from cikit.domain.images import DockerfileSpec, image_reference, parse_dockerfiles, sanitize_tag


class TestParseDockerfiles:
    def test_default_mapping(self) -> None:
        assert parse_dockerfiles([], "demo") == [DockerfileSpec("Dockerfile", "demo")]

    def test_explicit_mappings(self) -> None:
        specs = parse_dockerfiles(["Dockerfile:api", "worker.Dockerfile:worker"], "demo")
        assert specs == [
            DockerfileSpec("Dockerfile", "api"),
            DockerfileSpec("worker.Dockerfile", "worker"),
        ]

    def test_bare_file_maps_to_project(self) -> None:
        assert parse_dockerfiles(["build/Dockerfile"], "demo") == [
            DockerfileSpec("build/Dockerfile", "demo")
        ]

    @pytest.mark.parametrize("entry", [":api", "Dockerfile:"])
    def test_invalid_entries(self, entry: str) -> None:
        with pytest.raises(ValueError, match="Invalid Dockerfile mapping"):
            parse_dockerfiles([entry], "demo")


class TestImageReference:
    def test_full_reference(self) -> None:
        assert image_reference("quay.io", "acme", "api", "v1.0.0") == "quay.io/acme/api:v1.0.0"

    def test_empty_org_skipped(self) -> None:
        assert image_reference("ghcr.io", "", "api", "latest") == "ghcr.io/api:latest"

    def test_trailing_slashes(self) -> None:
        assert image_reference("ghcr.io/", "acme/", "api", "x") == "ghcr.io/acme/api:x"

    def test_spec_image(self) -> None:
        spec = DockerfileSpec("Dockerfile", "api")
        assert spec.image("quay.io", "acme", "dev-abc1234") == "quay.io/acme/api:dev-abc1234"


class TestSanitizeTag:
    def test_valid_tag_untouched(self) -> None:
        assert sanitize_tag("v1.2.3") == "v1.2.3"

    def test_invalid_characters(self) -> None:
        assert sanitize_tag("feature/x+1") == "feature_x_1"

    def test_leading_separator_stripped(self) -> None:
        assert sanitize_tag("-rc.1") == "rc.1"

    def test_length_limit(self) -> None:
        assert len(sanitize_tag("a" * 200)) == 128
