"""Tests for configuration loading."""

from cli_config import CliConfig, load_config


def test_defaults_without_file(tmp_path):
    config = load_config(str(tmp_path), env={})
    assert config == CliConfig()
    assert config.tests_dir == "tests"
    assert config.default_command == "run"
    assert config.package_manager == "npm"


def test_yaml_file_values(tmp_path):
    (tmp_path / ".interncli.yml").write_text(
        "tests_dir: suites\n"
        "package-manager: yarn\n"
        "log_level: info\n"
        "unknown_key: 1\n"
    )
    config = load_config(str(tmp_path), env={})
    assert config.tests_dir == "suites"
    assert config.package_manager == "yarn"
    assert config.log_level == "info"


def test_env_overrides_file(tmp_path):
    (tmp_path / ".interncli.yml").write_text("package_manager: yarn\n")
    env = {"INTERN_CLI_PACKAGE_MANAGER": "pnpm", "INTERN_CLI_LOG_LEVEL": "debug"}
    config = load_config(str(tmp_path), env=env)
    assert config.package_manager == "pnpm"
    assert config.log_level == "DEBUG"


def test_config_path_from_env(tmp_path):
    other = tmp_path / "conf.yml"
    other.write_text("tests_dir: checks\n")
    config = load_config(str(tmp_path), env={"INTERN_CLI_CONFIG": str(other)})
    assert config.tests_dir == "checks"


def test_invalid_yaml_falls_back_to_defaults(tmp_path, caplog):
    (tmp_path / ".interncli.yml").write_text("tests_dir: [unclosed\n")
    config = load_config(str(tmp_path), env={})
    assert config.tests_dir == "tests"
    assert "Failed to load config" in caplog.text


def test_non_mapping_yaml_is_ignored(tmp_path):
    (tmp_path / ".interncli.yml").write_text("- a\n- b\n")
    assert load_config(str(tmp_path), env={}) == CliConfig()
