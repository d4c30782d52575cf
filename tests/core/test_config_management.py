# tests/core/test_config_management.py
import asyncio
import json

import pytest

from chainpiper_shell.core.command_registry import make_command_runner
from chainpiper_shell.core.context.shell_context import ShellContext
from chainpiper_shell.core.handlers.config_handler import handle_config
from chainpiper_shell.core.managers.config_manager import ConfigManager
from chainpiper_shell.core.utils.path_utils import PathUtils
from chainpiper_shell.core.xngine import ExecuteEngine

# A standard, predictable configuration for our tests
MOCK_SETTINGS_CONTENT = {
    "debug": {
        "level": "WARNING"
    },
    "shell": {
        "prompt": "test> "
    },
    "autocomplete": {
        "enabled": True
    },
    "state": {
        "Heat": 7,
        "cash": 250
    }
}


@pytest.fixture
def config_env(tmp_path, monkeypatch):
    """
    Sets up an isolated environment for the ConfigManager:
    - A temporary package root holding a fake 'settings.json'.
    - PathUtils monkeypatched to point at it.
    The singleton is reloaded from the real file afterwards.
    """
    package_root = tmp_path / "chainpiper_shell"
    package_root.mkdir()
    (package_root / "settings.json").write_text(json.dumps(MOCK_SETTINGS_CONTENT))

    monkeypatch.setattr(PathUtils, 'get_shell_package_root', lambda: package_root)

    manager = ConfigManager()
    manager.reset()  # Force reload from our fake file

    yield manager

    monkeypatch.undo()
    manager.reset()


def test_config_manager_is_singleton():
    assert ConfigManager() is ConfigManager()


def test_config_manager_load(config_env):
    config = config_env.get_all()
    assert config["debug"]["level"] == "WARNING"
    assert config["shell"]["prompt"] == "test> "


def test_config_manager_get_nested(config_env):
    assert config_env.get_nested("state.cash") == 250
    assert config_env.get_nested("non.existent.key", "default") == "default"
    assert config_env.get_nested("shell.prompt.deeper", "x") == "x"


def test_config_manager_set_nested(config_env):
    config_env.set_nested("debug.level", "INFO")
    assert config_env.get_nested("debug.level") == "INFO"

    config_env.set_nested("new_feature.enabled", "True")
    assert config_env.get_nested("new_feature.enabled")

    # The original value is an int, so the string '20' is cast to int.
    config_env.set_nested("state.cash", "20")
    assert config_env.get_nested("state.cash") == 20


def test_config_manager_missing_file(tmp_path, monkeypatch):
    monkeypatch.setattr(PathUtils, 'get_shell_package_root', lambda: tmp_path)
    manager = ConfigManager()
    manager.reset()
    try:
        assert manager.get_all() == {}
    finally:
        monkeypatch.undo()
        manager.reset()


def test_shell_context_reads_initial_state(config_env):
    """Initial state comes from settings.json, keys lower-cased."""
    ctx = ShellContext()
    assert ctx.get("heat") == 7
    assert ctx.get("CASH") == 250


def test_packaged_settings_provide_state():
    manager = ConfigManager()
    assert set(manager.get_nested("state", {})) >= {"heat", "cash", "level", "energy"}


@pytest.mark.parametrize("raw, expected", [
    ("false", False), ("False", False), ("0", False), ("off", False),
    ("true", True), ("YES", True), ("1", True),
])
def test_config_manager_set_nested_casts_booleans(config_env, raw, expected):
    """A bool setting is parsed from its word, not from string truthiness."""
    assert config_env.set_nested("autocomplete.enabled", raw) is expected
    assert config_env.get_nested("autocomplete.enabled") is expected


def test_config_manager_set_nested_rejects_bad_values(config_env):
    with pytest.raises(ValueError):
        config_env.set_nested("autocomplete.enabled", "maybe")
    with pytest.raises(ValueError):
        config_env.set_nested("state.cash", "lots")
    with pytest.raises(ValueError):
        config_env.set_nested("shell.prompt.deeper", "x")
    with pytest.raises(ValueError):
        config_env.set_nested("state", "1")
    # Nothing was changed by the failed calls
    assert config_env.get_nested("autocomplete.enabled") is True
    assert config_env.get_nested("state.cash") == 250


def test_config_manager_reset_drops_changes(config_env):
    config_env.set_nested("shell.prompt", "street> ")
    config_env.reset()
    assert config_env.get_nested("shell.prompt") == "test> "


def test_config_manager_items_are_dotted_and_sorted(config_env):
    assert list(config_env.items()) == [
        ("autocomplete.enabled", True),
        ("debug.level", "WARNING"),
        ("shell.prompt", "test> "),
        ("state.Heat", 7),
        ("state.cash", 250),
    ]


@pytest.fixture
def config_engine(config_env):
    runner = make_command_runner(ShellContext({}), {"config": handle_config})
    return ExecuteEngine(command_runner=runner)


def run(engine, line):
    return asyncio.run(engine.execute(line))


def test_config_command_show_and_get(config_engine):
    shown = run(config_engine, "config show").output
    assert "shell.prompt = 'test> '" in shown
    assert "autocomplete.enabled = True" in shown
    assert run(config_engine, "config").output == shown

    assert run(config_engine, "config get state.cash").output == "state.cash = 250"
    missing = run(config_engine, "config get shell.colour")
    assert missing.success is False
    assert missing.error == "No such setting: shell.colour"


def test_config_command_set_and_reset(config_env, config_engine):
    result = run(config_engine, "config set autocomplete.enabled false")
    assert result.output == "autocomplete.enabled = False"
    assert config_env.get_nested("autocomplete.enabled") is False

    assert run(config_engine, "config set shell.prompt street>").output == "shell.prompt = 'street>'"
    assert config_env.get_nested("shell.prompt") == "street>"

    bad = run(config_engine, "config set state.cash lots")
    assert bad.success is False
    assert bad.error.startswith("Cannot set state.cash:")

    assert run(config_engine, "config reset").output == "Configuration reloaded."
    assert config_env.get_nested("shell.prompt") == "test> "


def test_config_command_usage(config_engine):
    result = run(config_engine, "config set shell.prompt")
    assert result.success is False
    assert result.error.startswith("Usage: config")


def test_config_command_in_chain(config_env, config_engine):
    result = run(config_engine, "config set debug.level INFO && config show | grep debug")
    assert result.success is True
    assert result.output == "debug.level = 'INFO'\ndebug.level = 'INFO'"
