"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

CONFIG_FILE_NAME = "codemap.toml"

DEFAULT_SCRIPTS_DIR = "Assets/Scripts"
DEFAULT_SOURCE_EXTENSION = ".cs"
DEFAULT_EXCLUDE_GLOBS = ("**/.git/**", "**/.vs/**", "**/obj/**", "**/bin/**")
DEFAULT_TYPE_KEYWORDS = ("class", "struct", "interface", "record")
DEFAULT_DATA_DIR_NAME = ".codemap"
DEFAULT_FLAT_FILE = "ProjectIndex.txt"
DEFAULT_JSON_FILE = "ProjectCodeHierarchyIndex.json"
DEFAULT_COMPACT_FILE = "ProjectCodeHierarchy.compact.txt"

FLAT_ATTRIBUTION_MODES = ("offset", "scoped")


@dataclass(slots=True, frozen=True)
class IndexConfig:
    """Scan and extraction settings."""

    scripts_dir: str
    source_extension: str
    exclude_globs: tuple[str, ...]
    type_keywords: tuple[str, ...]
    mask_comments: bool
    flat_attribution: str

    @property
    def root_name(self) -> str:
        """Name of the tree root folder (last segment of scripts_dir)."""
        return self.scripts_dir.rstrip("/").rsplit("/", 1)[-1]


@dataclass(slots=True, frozen=True)
class OutputConfig:
    """Report output locations."""

    data_dir: Path
    flat_file: str
    json_file: str
    compact_file: str


@dataclass(slots=True, frozen=True)
class CodemapConfig:
    """Fully merged configuration."""

    project_root: Path
    index: IndexConfig
    output: OutputConfig

    @property
    def scripts_root(self) -> Path:
        """Absolute scan root."""
        return self.project_root / self.index.scripts_dir

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot."""
        return {
            "project_root": str(self.project_root),
            "index": {
                "scripts_dir": self.index.scripts_dir,
                "source_extension": self.index.source_extension,
                "exclude_globs": list(self.index.exclude_globs),
                "type_keywords": list(self.index.type_keywords),
                "mask_comments": self.index.mask_comments,
                "flat_attribution": self.index.flat_attribution,
            },
            "output": {
                "data_dir": str(self.output.data_dir),
                "flat_file": self.output.flat_file,
                "json_file": self.output.json_file,
                "compact_file": self.output.compact_file,
            },
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional startup overrides applied at highest precedence."""

    scripts_dir: str | None = None
    data_dir: Path | None = None
    flat_attribution: str | None = None
    mask_comments: bool | None = None


def default_config(project_root: Path) -> CodemapConfig:
    """Build default config for a given project root."""
    resolved_root = project_root.resolve()
    return CodemapConfig(
        project_root=resolved_root,
        index=IndexConfig(
            scripts_dir=DEFAULT_SCRIPTS_DIR,
            source_extension=DEFAULT_SOURCE_EXTENSION,
            exclude_globs=DEFAULT_EXCLUDE_GLOBS,
            type_keywords=DEFAULT_TYPE_KEYWORDS,
            mask_comments=True,
            flat_attribution="offset",
        ),
        output=OutputConfig(
            data_dir=resolved_root / DEFAULT_DATA_DIR_NAME,
            flat_file=DEFAULT_FLAT_FILE,
            json_file=DEFAULT_JSON_FILE,
            compact_file=DEFAULT_COMPACT_FILE,
        ),
    )


def load_project_config_file(project_root: Path) -> dict[str, object]:
    """Load optional codemap.toml from the project root."""
    config_path = project_root / CONFIG_FILE_NAME
    if not config_path.exists():
        return {}
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{CONFIG_FILE_NAME} must contain a top-level table.")
    return payload


def merge_config(
    base: CodemapConfig, payload: dict[str, object], overrides: CliOverrides
) -> CodemapConfig:
    """Merge defaults, project config, then CLI overrides."""
    index_payload = _get_table(payload, "index")
    output_payload = _get_table(payload, "output")

    scripts_dir = _optional_relative_dir(
        index_payload.get("scripts_dir"), "index.scripts_dir", base.index.scripts_dir
    )
    source_extension = _optional_extension(
        index_payload.get("source_extension"),
        "index.source_extension",
        base.index.source_extension,
    )
    exclude_globs = base.index.exclude_globs
    if "exclude_globs" in index_payload:
        exclude_globs = _tuple_of_strings(index_payload["exclude_globs"], "index", "exclude_globs")
    type_keywords = base.index.type_keywords
    if "type_keywords" in index_payload:
        type_keywords = _tuple_of_strings(index_payload["type_keywords"], "index", "type_keywords")
        if not type_keywords:
            raise ValueError("Config field 'index.type_keywords' must not be empty.")
    mask_comments = _optional_bool(
        index_payload.get("mask_comments"), "index.mask_comments", base.index.mask_comments
    )
    flat_attribution = _optional_mode(
        index_payload.get("flat_attribution"),
        "index.flat_attribution",
        base.index.flat_attribution,
    )

    data_dir = base.output.data_dir
    raw_data_dir = output_payload.get("data_dir")
    if raw_data_dir is not None:
        if not isinstance(raw_data_dir, str) or not raw_data_dir.strip():
            raise ValueError("Config field 'output.data_dir' must be a non-empty string.")
        data_dir = base.project_root / raw_data_dir

    merged = CodemapConfig(
        project_root=base.project_root,
        index=IndexConfig(
            scripts_dir=scripts_dir,
            source_extension=source_extension,
            exclude_globs=exclude_globs,
            type_keywords=type_keywords,
            mask_comments=mask_comments,
            flat_attribution=flat_attribution,
        ),
        output=OutputConfig(
            data_dir=data_dir,
            flat_file=_optional_file_name(
                output_payload.get("flat_file"), "output.flat_file", base.output.flat_file
            ),
            json_file=_optional_file_name(
                output_payload.get("json_file"), "output.json_file", base.output.json_file
            ),
            compact_file=_optional_file_name(
                output_payload.get("compact_file"),
                "output.compact_file",
                base.output.compact_file,
            ),
        ),
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: CodemapConfig, overrides: CliOverrides) -> CodemapConfig:
    """Apply startup overrides at highest precedence."""
    index = config.index
    scripts_dir = _optional_relative_dir(
        overrides.scripts_dir, "overrides.scripts_dir", index.scripts_dir
    )
    flat_attribution = _optional_mode(
        overrides.flat_attribution, "overrides.flat_attribution", index.flat_attribution
    )
    mask_comments = (
        overrides.mask_comments if overrides.mask_comments is not None else index.mask_comments
    )
    data_dir = overrides.data_dir or config.output.data_dir
    return CodemapConfig(
        project_root=config.project_root,
        index=IndexConfig(
            scripts_dir=scripts_dir,
            source_extension=index.source_extension,
            exclude_globs=index.exclude_globs,
            type_keywords=index.type_keywords,
            mask_comments=mask_comments,
            flat_attribution=flat_attribution,
        ),
        output=OutputConfig(
            data_dir=data_dir.resolve(),
            flat_file=config.output.flat_file,
            json_file=config.output.json_file,
            compact_file=config.output.compact_file,
        ),
    )


def load_effective_config(
    project_root: Path, overrides: CliOverrides | None = None
) -> CodemapConfig:
    """Load effective config using merge order defaults -> project config -> overrides."""
    resolved_root = project_root.resolve()
    base = default_config(resolved_root)
    payload = load_project_config_file(resolved_root)
    return merge_config(base, payload, overrides or CliOverrides())


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _tuple_of_strings(value: object, section: str, field: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ValueError(f"Config field '{section}.{field}' must be a list of strings.")
    output: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"Config field '{section}.{field}' must contain only strings.")
        output.append(item)
    return tuple(output)


def _optional_bool(value: object, name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"Config field '{name}' must be a boolean.")
    return value


def _optional_mode(value: object, name: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str) or value not in FLAT_ATTRIBUTION_MODES:
        allowed = ", ".join(FLAT_ATTRIBUTION_MODES)
        raise ValueError(f"Config field '{name}' must be one of {allowed}.")
    return value


def _optional_relative_dir(value: object, name: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"Config field '{name}' must be a string.")
    normalized = value.replace("\\", "/").strip().strip("/")
    if not normalized:
        raise ValueError(f"Config field '{name}' must be a non-empty relative path.")
    if ".." in normalized.split("/"):
        raise ValueError(f"Config field '{name}' must not traverse outside the project root.")
    return normalized


def _optional_extension(value: object, name: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str) or not value.startswith(".") or len(value) < 2:
        raise ValueError(f"Config field '{name}' must be an extension such as '.cs'.")
    return value.lower()


def _optional_file_name(value: object, name: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip() or "/" in value or "\\" in value:
        raise ValueError(f"Config field '{name}' must be a plain file name.")
    return value
