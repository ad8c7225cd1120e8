"""Tests for request path normalization."""

import pytest

from packserve.errors import InvalidPath, InvalidSlug, MissingSlugOrFile, NoIndex
from packserve.normalizer import PackRequest, has_parent_segment, normalize_request, strip_prefix


class TestStripPrefix:
    def test_strips_prefix(self):
        assert strip_prefix("/api/demo/pack.toml", "/api") == "/demo/pack.toml"

    def test_prefix_absent(self):
        assert strip_prefix("/demo/pack.toml", "/api") == "/demo/pack.toml"

    def test_prefix_must_end_on_segment(self):
        assert strip_prefix("/apix/pack.toml", "/api") == "/apix/pack.toml"

    def test_bare_prefix(self):
        assert strip_prefix("/api", "/api/") == ""

    def test_empty_prefix(self):
        assert strip_prefix("/demo/x", "") == "/demo/x"


class TestNormalizeRequest:
    def test_simple_path(self):
        assert normalize_request("/demo/pack.toml") == PackRequest("demo", "pack.toml")

    def test_prefix_and_duplicate_slashes(self):
        result = normalize_request("/api//demo///mods//tool.jar/", "/api")
        assert result == PackRequest("demo", "mods/tool.jar")

    def test_slug_is_lower_cased(self):
        assert normalize_request("/Demo/pack.toml").slug == "demo"

    def test_relative_path_is_percent_decoded(self):
        result = normalize_request("/demo/mods/my%20mod.jar")
        assert result.relative_path == "mods/my mod.jar"

    def test_dotted_filenames_are_allowed(self):
        result = normalize_request("/demo/mods/a..b.jar")
        assert result.relative_path == "mods/a..b.jar"

    @pytest.mark.parametrize("path", ["", "/", "//", "/api/"])
    def test_empty_path(self, path):
        with pytest.raises(MissingSlugOrFile):
            normalize_request(path, "/api")

    def test_slug_only_is_no_index(self):
        with pytest.raises(NoIndex):
            normalize_request("/demo")

    def test_slug_only_still_validates_slug(self):
        with pytest.raises(InvalidSlug):
            normalize_request("/de.mo/")

    @pytest.mark.parametrize("slug", ["de.mo", "demo!", "d%65mo", "..", "dé", "demo\n"])
    def test_invalid_slug(self, slug):
        with pytest.raises(InvalidSlug):
            normalize_request(f"/{slug}/pack.toml")

    @pytest.mark.parametrize(
        "path",
        [
            "/demo/../secret/pack.toml",
            "/demo/mods/../../secret/pack.toml",
            "/demo/%2e%2e/secret/pack.toml",
            "/demo/%2E%2E%2Fsecret%2Fpack.toml",
            "/demo/..%2fsecret/pack.toml",
            "/demo/mods//..//..//secret/pack.toml",
            "/demo/..%5csecret%5cpack.toml",
            "/demo/..",
        ],
    )
    def test_parent_segments_rejected(self, path):
        with pytest.raises(InvalidPath):
            normalize_request(path)

    def test_nul_rejected(self):
        with pytest.raises(InvalidPath):
            normalize_request("/demo/pack.toml%00.jar")

    @pytest.mark.parametrize("path", ["/demo/caf%e9.txt", "/demo/%ff%fe", "/demo/mods/%c3"])
    def test_invalid_utf8_encoding_rejected(self, path):
        with pytest.raises(InvalidPath):
            normalize_request(path)


class TestHasParentSegment:
    def test_detects_segment(self):
        assert has_parent_segment("a/../b")

    def test_ignores_substring(self):
        assert not has_parent_segment("a/..b/c..")
