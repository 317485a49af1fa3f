from __future__ import annotations

from pathlib import Path

import pytest

from codemap.config import CliOverrides, default_config, load_effective_config


def test_defaults_point_at_assets_scripts(tmp_path: Path) -> None:
    config = default_config(tmp_path)

    assert config.index.scripts_dir == "Assets/Scripts"
    assert config.index.root_name == "Scripts"
    assert config.index.source_extension == ".cs"
    assert config.index.flat_attribution == "offset"
    assert config.scripts_root == tmp_path.resolve() / "Assets" / "Scripts"
    assert config.output.data_dir == tmp_path.resolve() / ".codemap"


def test_merge_order_defaults_then_project_file_then_cli(tmp_path: Path) -> None:
    (tmp_path / "codemap.toml").write_text(
        "\n".join(
            [
                "[index]",
                'scripts_dir = "Game/Code/"',
                'flat_attribution = "scoped"',
                "mask_comments = false",
                "",
                "[output]",
                'data_dir = "reports"',
                'compact_file = "hierarchy.txt"',
            ]
        ),
        encoding="utf-8",
    )

    config = load_effective_config(tmp_path, CliOverrides(flat_attribution="offset"))

    assert config.index.scripts_dir == "Game/Code"
    assert config.index.root_name == "Code"
    assert config.index.flat_attribution == "offset"
    assert config.index.mask_comments is False
    assert config.output.data_dir == (tmp_path / "reports").resolve()
    assert config.output.compact_file == "hierarchy.txt"
    assert config.output.flat_file == "ProjectIndex.txt"


def test_cli_data_dir_and_scripts_dir_have_highest_precedence(tmp_path: Path) -> None:
    custom = tmp_path / "custom"

    config = load_effective_config(
        tmp_path, CliOverrides(data_dir=custom, scripts_dir="Assets\\Code")
    )

    assert config.output.data_dir == custom.resolve()
    assert config.index.scripts_dir == "Assets/Code"


def test_public_dict_is_serializable_snapshot(tmp_path: Path) -> None:
    snapshot = default_config(tmp_path).to_public_dict()

    assert snapshot["index"]["type_keywords"] == ["class", "struct", "interface", "record"]
    assert snapshot["output"]["json_file"] == "ProjectCodeHierarchyIndex.json"


@pytest.mark.parametrize(
    ("lines", "message"),
    [
        (['index = "not-a-table"'], "section 'index'"),
        (["[index]", 'flat_attribution = "nearest"'], "index.flat_attribution"),
        (["[index]", 'scripts_dir = "../Outside"'], "index.scripts_dir"),
        (["[index]", 'source_extension = "cs"'], "index.source_extension"),
        (["[index]", "mask_comments = 1"], "index.mask_comments"),
        (["[index]", "type_keywords = []"], "index.type_keywords"),
        (["[index]", "exclude_globs = [1]"], "index.exclude_globs"),
        (["[output]", 'flat_file = "nested/out.txt"'], "output.flat_file"),
    ],
)
def test_invalid_values_raise_field_qualified_errors(
    tmp_path: Path, lines: list[str], message: str
) -> None:
    (tmp_path / "codemap.toml").write_text("\n".join(lines), encoding="utf-8")

    with pytest.raises(ValueError, match=message):
        load_effective_config(tmp_path)


def test_invalid_cli_attribution_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="overrides.flat_attribution"):
        load_effective_config(tmp_path, CliOverrides(flat_attribution="lax"))
