from pathlib import Path
import textwrap

import pytest

from bibsync.core.config import (
    MarkerConfig,
    SyncConfig,
    build_config,
    load_config,
)
from bibsync.core.exceptions import ConfigurationError
from bibsync.core.publications import AuthorHighlight


def test_defaults_are_anchored_to_root(tmp_path: Path) -> None:
    config = SyncConfig(root=tmp_path)

    assert config.bibliography == tmp_path / "publications.bib"
    assert config.document == tmp_path / "index.html"
    assert config.asset_dir == tmp_path / "pdfs"
    assert config.asset_prefix == "pdfs"
    assert config.markers == MarkerConfig()
    assert config.markers.start == "<!-- PUBS:START -->"
    assert config.author_highlight is None
    assert "file" in config.drop_fields


def test_absolute_paths_are_kept(tmp_path: Path) -> None:
    target = tmp_path / "elsewhere" / "refs.bib"

    config = SyncConfig(root=tmp_path / "site", bibliography=target)

    assert config.bibliography == target


def test_load_config_reads_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "bibsync.yml"
    config_path.write_text(
        textwrap.dedent(
            """
            bibliography: data/refs.bib
            document: site/index.html
            asset_prefix: files
            stamp_last_updated: false
            markers:
              start: "<!-- BEGIN -->"
              end: "<!-- END -->"
            highlight:
              surname: Stowe
              given_name: Symon
            """
        ),
        encoding="utf-8",
    )

    config = load_config(config_path)

    assert config.root == tmp_path.resolve()
    assert config.bibliography == tmp_path.resolve() / "data" / "refs.bib"
    assert config.document == tmp_path.resolve() / "site" / "index.html"
    assert config.asset_prefix == "files"
    assert config.stamp_last_updated is False
    assert config.markers.start == "<!-- BEGIN -->"
    assert config.markers.last_updated == "<!-- LAST_UPDATED -->"
    assert config.author_highlight == AuthorHighlight(surname="Stowe", given_name="Symon")


def test_load_config_applies_overrides(tmp_path: Path) -> None:
    config_path = tmp_path / "bibsync.yml"
    config_path.write_text("document: page.html\n", encoding="utf-8")

    config = load_config(config_path, document=Path("other.html"), bibliography=None)

    assert config.document == tmp_path.resolve() / "other.html"
    assert config.bibliography == tmp_path.resolve() / "publications.bib"


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "bibsync.yml"
    config_path.write_text("", encoding="utf-8")

    assert load_config(config_path).document == tmp_path.resolve() / "index.html"


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Unable to read configuration"):
        load_config(tmp_path / "missing.yml")


def test_invalid_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "bibsync.yml"
    config_path.write_text("markers: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        load_config(config_path)


def test_non_mapping_config(tmp_path: Path) -> None:
    config_path = tmp_path / "bibsync.yml"
    config_path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="must be a mapping"):
        load_config(config_path)


def test_unknown_keys_are_rejected(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        build_config({"root": tmp_path, "bibliograhpy": "typo.bib"})


def test_highlight_requires_surname(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        build_config({"root": tmp_path, "highlight": {"given_name": "Symon"}})
