"""Tests for metadata header parsing and discovery."""

import pytest
from pathlib import Path

from hyprconf.metadata import (
    TYPE_KEY,
    ConfigMetaSpec,
    ConfigMetadata,
    discover_config_files,
    file_matches,
    matches_spec,
    metadata_from_content,
    parse_metadata_header,
    resolve_config_path,
    resolve_config_path_strict,
)


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestParseMetadataHeader:
    """Tests for parse_metadata_header."""

    def test_parses_header_keys(self):
        """Test reading key/value comment lines."""
        content = "# hypr metadata\n# type = bar\n\n[layout]\nleft = 33\n"
        assert parse_metadata_header(content).get(TYPE_KEY) == "bar"

    def test_colon_separator_and_quotes(self):
        """Test ':' separators, quoting and key normalisation."""
        content = '# hypr metadata\n# Type: "theme"\n## owner = \'me\'\n'
        assert parse_metadata_header(content) == {"type": "theme", "owner": "me"}

    def test_marker_required(self):
        """Test that content without the marker line has no metadata."""
        assert parse_metadata_header("# type = bar\n") == {}
        assert parse_metadata_header("") == {}

    def test_marker_case_and_bom(self):
        """Test that the marker tolerates case differences and a BOM."""
        content = "\ufeff# HYPR Metadata  \n# type = bar\n"
        assert parse_metadata_header(content) == {"type": "bar"}

    def test_non_comment_lines_skipped(self):
        """Test that only comment lines are read."""
        content = "# hypr metadata\ntype = wrong\n# type = right\n# no separator\n# empty =\n"
        assert parse_metadata_header(content) == {"type": "right"}

    def test_only_first_64_lines(self):
        """Test that keys past line 64 are ignored."""
        filler = "# filler\n" * 62
        content = "# hypr metadata\n" + filler + "# inside = yes\n# outside = no\n"

        parsed = parse_metadata_header(content)

        assert parsed.get("inside") == "yes"
        assert "outside" not in parsed

    def test_lines_split_on_newline_only(self):
        """Test that only \\n and \\r\\n end a header line."""
        assert parse_metadata_header("# hypr metadata\r\n# type = bar\r\n") == {"type": "bar"}
        assert parse_metadata_header("# hypr metadata\u2028# type = bar\n") == {}
        assert parse_metadata_header("# hypr metadata\n# type = bar\x0c# owner = me\n") == {
            "type": "bar\x0c# owner = me"
        }


class TestMetadataMatching:
    """Tests for content and file matching."""

    def test_metadata_from_content(self):
        """Test extracting the typed metadata."""
        assert metadata_from_content("# hypr metadata\n# type = bar\n") == ConfigMetadata("bar")
        assert metadata_from_content("# hypr metadata\n# name = x\n") is None

    def test_matches_spec(self):
        """Test matching on config type."""
        spec = ConfigMetaSpec.for_type("bar", ["conf"])
        assert matches_spec("# hypr metadata\n# type = bar\n", spec)
        assert not matches_spec("# hypr metadata\n# type = theme\n", spec)

    def test_file_matches_extension(self, tmp_path):
        """Test that the extension is checked case-insensitively."""
        spec = ConfigMetaSpec.for_type("bar", [".conf", "toml"])
        content = "# hypr metadata\n# type = bar\n"

        assert file_matches(_write(tmp_path / "a.CONF", content), spec)
        assert file_matches(_write(tmp_path / "b.toml", content), spec)
        assert not file_matches(_write(tmp_path / "c.txt", content), spec)

    def test_file_matches_missing(self, tmp_path):
        """Test that unreadable files never match."""
        spec = ConfigMetaSpec.for_type("bar", ["conf"])
        assert not file_matches(tmp_path / "missing.conf", spec)


class TestDiscovery:
    """Tests for discovery and path resolution."""

    def test_discovers_renamed_config(self, tmp_path):
        """Test finding a config by metadata regardless of its name."""
        config_path = _write(
            tmp_path / "hypr" / "split" / "theme-main.conf",
            '# hypr metadata\n# type = theme\n[theme]\nname = "x"\n',
        )
        _write(tmp_path / "hypr" / "bar.conf", "# hypr metadata\n# type = bar\n")
        _write(tmp_path / "hypr" / "plain.conf", "[theme]\n")

        spec = ConfigMetaSpec.for_type("theme", ["conf"])

        assert discover_config_files(tmp_path, spec) == [config_path]

    def test_discovery_sorted(self, tmp_path):
        """Test that results are sorted."""
        content = "# hypr metadata\n# type = bar\n"
        b = _write(tmp_path / "b.conf", content)
        a = _write(tmp_path / "sub" / "a.conf", content)
        c = _write(tmp_path / "a.conf", content)

        spec = ConfigMetaSpec.for_type("bar", ["conf"])

        assert discover_config_files(tmp_path, spec) == sorted([a, b, c])

    def test_fallback_wins_when_present(self, tmp_path):
        """Test that a matching fallback is preferred."""
        fallback = _write(tmp_path / "hyprbar.conf", "# hypr metadata\n# type = bar\n")
        _write(tmp_path / "custom.conf", "# hypr metadata\n# type = bar\n")

        spec = ConfigMetaSpec.for_type("bar", ["conf"])

        assert resolve_config_path(tmp_path, fallback, spec) == fallback

    def test_discovered_when_fallback_missing(self, tmp_path):
        """Test that the first discovered file replaces a missing fallback."""
        renamed = _write(tmp_path / "custom.conf", "# hypr metadata\n# type = bar\n")
        fallback = tmp_path / "hyprbar.conf"

        spec = ConfigMetaSpec.for_type("bar", ["conf"])

        assert resolve_config_path(tmp_path, fallback, spec) == renamed
        assert resolve_config_path_strict(tmp_path, fallback, spec) == renamed

    def test_fallback_when_nothing_matches(self, tmp_path):
        """Test the fallback is returned even when it does not exist."""
        fallback = tmp_path / "hyprbar.conf"
        spec = ConfigMetaSpec.for_type("bar", ["conf"])

        assert resolve_config_path(tmp_path, fallback, spec) == fallback
        assert resolve_config_path_strict(tmp_path, fallback, spec) is None

    def test_unstattable_directory_skipped(self, tmp_path, monkeypatch):
        """Test that a directory entry whose stat fails does not abort discovery."""
        content = "# hypr metadata\n# type = bar\n"
        found = _write(tmp_path / "open" / "bar.conf", content)
        _write(tmp_path / "locked" / "bar.conf", content)

        real_is_dir = Path.is_dir

        def is_dir(self, *args, **kwargs):
            if self.name == "locked":
                raise PermissionError(13, "Permission denied", str(self))
            return real_is_dir(self, *args, **kwargs)

        monkeypatch.setattr(Path, "is_dir", is_dir)
        spec = ConfigMetaSpec.for_type("bar", ["conf"])

        assert discover_config_files(tmp_path, spec) == [found]
