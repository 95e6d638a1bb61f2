from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from checkout.config import CheckoutConfig, ConfigError, load_config


def test_missing_config_yields_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / "absent.yaml")

    assert config == CheckoutConfig()
    assert config.workspace.clean is True
    assert config.git.path == "git"
    assert config.logging.level == "INFO"


def test_load_config_resolves_workspace_relative_to_file(tmp_path: Path) -> None:
    config_path = tmp_path / "checkout.yaml"
    config_path.write_text(
        textwrap.dedent(
            """
            repository:
              url: https://github.com/my-org/my-repo
              valid_urls:
                - git@github.com:my-org/my-repo
            workspace:
              path: _work/my-repo
              clean: false
            """
        ).strip()
        + "\n",
        encoding="utf-8",
    )

    config = load_config(config_path)

    assert config.repository.url == "https://github.com/my-org/my-repo"
    assert config.repository.valid_urls == ["git@github.com:my-org/my-repo"]
    assert config.workspace.clean is False
    assert config.workspace.path == (tmp_path / "_work" / "my-repo").resolve()


def test_load_config_rejects_unknown_keys(tmp_path: Path) -> None:
    config_path = tmp_path / "checkout.yaml"
    config_path.write_text("workspace:\n  cleanup: true\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="checkout.yaml"):
        load_config(config_path)


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    config_path = tmp_path / "checkout.yaml"
    config_path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(config_path)


def test_load_config_reports_yaml_errors(tmp_path: Path) -> None:
    config_path = tmp_path / "checkout.yaml"
    config_path.write_text("repository: [unterminated\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(config_path)
