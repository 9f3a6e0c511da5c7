"""Configuration models for the publication sync.

SyncConfig

`root` (`Path`)
: Directory against which every relative path below is resolved. Defaults to
  the directory holding the configuration file, or the current directory.

`bibliography` (`Path`)
: BibTeX file read as input and rewritten in canonical form.

`document` (`Path`)
: Host HTML document receiving the rendered publications between the markers.

`asset_dir` (`Path`)
: Directory searched for `<key>.<asset_extension>` default assets.

`asset_prefix` (`str`)
: Prefix used in link targets for assets, relative to the host document.

`asset_extension` (`str`)
: File extension of the default per-entry asset.

`drop_fields` (`list[str]`)
: Field names discarded from both the rendering and the canonical rewrite.

`stamp_last_updated` (`bool`)
: Refresh the "Site last updated on" stamp when the document is written.

MarkerConfig

`start` / `end` (`str`)
: Literal strings delimiting the generated block in the host document.

`last_updated` (`str`)
: Placeholder replaced with the last-updated stamp.

HighlightConfig

`surname` (`str`)
: Surname of the person emphasised in author lists.

`given_name` (`str`)
: Given name (or its initial) of that person.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
import yaml

from .bibliography.normalize import DROP_FIELDS
from .exceptions import ConfigurationError
from .publications.authors import AuthorHighlight


class MarkerConfig(BaseModel):
    """Markers delimiting generated content in the host document."""

    model_config = ConfigDict(extra="forbid")

    start: str = "<!-- PUBS:START -->"
    end: str = "<!-- PUBS:END -->"
    last_updated: str = "<!-- LAST_UPDATED -->"


class HighlightConfig(BaseModel):
    """Person emphasised wherever they appear in author lists."""

    model_config = ConfigDict(extra="forbid")

    surname: str
    given_name: str = ""

    def to_highlight(self) -> AuthorHighlight:
        return AuthorHighlight(surname=self.surname, given_name=self.given_name)


class SyncConfig(BaseModel):
    """Locations and options driving one sync run."""

    model_config = ConfigDict(extra="forbid")

    root: Path = Field(default_factory=Path.cwd)
    bibliography: Path = Path("publications.bib")
    document: Path = Path("index.html")
    asset_dir: Path = Path("pdfs")
    asset_prefix: str = "pdfs"
    asset_extension: str = "pdf"
    drop_fields: list[str] = Field(default_factory=lambda: sorted(DROP_FIELDS))
    stamp_last_updated: bool = True
    markers: MarkerConfig = Field(default_factory=MarkerConfig)
    highlight: HighlightConfig | None = None

    @model_validator(mode="after")
    def resolve_paths(self) -> SyncConfig:
        """Anchor relative paths to ``root``."""
        for name in ("bibliography", "document", "asset_dir"):
            value = getattr(self, name)
            if not value.is_absolute():
                setattr(self, name, self.root / value)
        return self

    @property
    def author_highlight(self) -> AuthorHighlight | None:
        return self.highlight.to_highlight() if self.highlight else None


def load_config(path: Path | str, **overrides: object) -> SyncConfig:
    """Read a YAML configuration file, applying non-``None`` overrides."""
    config_path = Path(path)
    try:
        payload = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except OSError as exc:
        raise ConfigurationError(f"Unable to read configuration '{config_path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in '{config_path}': {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigurationError(f"Configuration '{config_path}' must be a mapping.")

    payload.setdefault("root", config_path.resolve().parent)
    return build_config(payload, **overrides)


def build_config(payload: dict[str, object] | None = None, **overrides: object) -> SyncConfig:
    """Validate ``payload`` merged with non-``None`` overrides."""
    data = dict(payload or {})
    data.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return SyncConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc


__all__ = [
    "HighlightConfig",
    "MarkerConfig",
    "SyncConfig",
    "build_config",
    "load_config",
]
