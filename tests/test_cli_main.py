"""Tests for the CLI entry point and commands."""
import json
from unittest.mock import MagicMock

import pytest

from consul_register.cli import cli
from consul_register.sdk import AgentService, ConsulServerError, KVPair


@pytest.fixture
def source_file(tmp_path):
    """Write records to a temporary JSON file and return its path."""
    def write(records):
        path = tmp_path / "consul.json"
        path.write_text(json.dumps(records))
        return str(path)
    return write


@pytest.fixture
def use_fake(monkeypatch, fake_consul):
    """Make the commands talk to the in-memory cluster."""
    factory = MagicMock(return_value=fake_consul)
    monkeypatch.setattr("consul_register.commands.apply.build_consul", factory)
    monkeypatch.setattr("consul_register.commands.export.build_consul", factory)
    return factory


def test_cli_help(cli_runner):
    """
    Test that CLI shows help when run without commands.
    Expected: "Usage:" text in output.
    """
    result = cli_runner.invoke(cli, [])

    assert "Usage:" in result.output


def test_cli_version(cli_runner):
    result = cli_runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "consul-register" in result.output


def test_cli_unknown_command(cli_runner):
    result = cli_runner.invoke(cli, ["nonexistent"])

    assert result.exit_code != 0


def test_apply_runs_actions_in_order(cli_runner, source_file, use_fake, fake_consul):
    """
    Test the apply command end to end.
    Expected: progress lines, final state matches, exit code 0.
    """
    # Arrange
    path = source_file([
        {"Action": "KVSet", "Config": {"Key": "app/flag", "Value": "on"}},
        {"Action": "KVDelete", "Config": {"Key": "app/flag"}},
        {"Action": "KVSet", "Config": {"Key": "app/mode", "Flags": 1, "Value": "blue"}},
    ])

    # Act
    result = cli_runner.invoke(cli, ["apply", path, "--server", "10.0.0.5:8500"])

    # Assert
    assert result.exit_code == 0, result.output
    assert '1 of 3 - KV Set "app/flag" 0 "on"' in result.output
    assert '3 of 3 - KV Set "app/mode" 1 "blue"' in result.output
    assert "Applied 3 actions" in result.output
    assert "app/flag" not in fake_consul.kv
    assert fake_consul.kv["app/mode"].value == b"blue"
    use_fake.assert_called_once_with("10.0.0.5:8500", None)


def test_apply_dry_run_touches_nothing(cli_runner, source_file, use_fake, fake_consul):
    path = source_file([{"Action": "KVSet", "Config": {"Key": "a", "Value": "1"}}])

    result = cli_runner.invoke(cli, ["apply", "--dry", path])

    assert result.exit_code == 0, result.output
    assert '1 of 1 - KV Set "a" 0 "1"' in result.output
    assert "nothing applied" in result.output
    use_fake.assert_not_called()
    assert fake_consul.kv == {}


def test_apply_reads_stdin(cli_runner, use_fake, fake_consul):
    records = [{"Action": "ACLSet", "Config": {"Name": "svc", "Rules": "r"}}]

    result = cli_runner.invoke(cli, ["apply", "-"], input=json.dumps(records))

    assert result.exit_code == 0, result.output
    assert [a.name for a in fake_consul.acls.values()] == ["svc"]


def test_apply_unknown_action(cli_runner, source_file, use_fake):
    """
    Test a source referencing an unknown action type.
    Expected: exit code 1, error names record 1 and "Bogus", no client built.
    """
    # Arrange
    path = source_file([{"Action": "Bogus", "Config": {}}])

    # Act
    result = cli_runner.invoke(cli, ["apply", path])

    # Assert
    assert result.exit_code == 1
    assert "#1" in result.output
    assert "Bogus" in result.output
    use_fake.assert_not_called()


def test_apply_invalid_action_blocks_run(cli_runner, source_file, use_fake, fake_consul):
    path = source_file([
        {"Action": "KVSet", "Config": {"Key": "a", "Value": "1"}},
        {"Action": "ExternalNodeRegister", "Config": {"Node": "n1"}},
    ])

    result = cli_runner.invoke(cli, ["apply", path])

    assert result.exit_code == 1
    assert "Address must not be empty" in result.output
    assert fake_consul.calls == []


def test_apply_failure_is_fatal(cli_runner, source_file, use_fake, fake_consul):
    # Arrange
    fake_consul.failures["kv_delete_tree"] = ConsulServerError("Server error 500: boom")
    path = source_file([
        {"Action": "KVSet", "Config": {"Key": "a", "Value": "1"}},
        {"Action": "KVDeleteTree", "Config": {"Prefix": "tmp/"}},
        {"Action": "KVSet", "Config": {"Key": "c", "Value": "3"}},
    ])

    # Act
    result = cli_runner.invoke(cli, ["apply", path])

    # Assert
    assert result.exit_code == 1
    assert "Action 2 of 3 failed" in result.output
    assert "a" in fake_consul.kv
    assert "c" not in fake_consul.kv


def test_apply_invalid_json(cli_runner, tmp_path, use_fake):
    path = tmp_path / "broken.json"
    path.write_text("[{")

    result = cli_runner.invoke(cli, ["apply", str(path)])

    assert result.exit_code == 1
    assert "Unable to load actions from JSON" in result.output


def test_export_writes_json_to_stdout(cli_runner, use_fake, fake_consul):
    """
    Test the export command.
    Expected: stdout holds only a loadable JSON list, filtered.
    """
    # Arrange
    fake_consul.add_acl("anonymous-master", type="management")
    fake_consul.add_acl("svc", "r")
    fake_consul.add_node("agent", "10.0.0.1", AgentService(id="consul", service="consul"))
    fake_consul.add_node("ext", "10.0.0.2", AgentService(id="web-1", service="web", port=80))
    fake_consul.kv["k"] = KVPair(key="k", value=b"v")

    # Act
    result = cli_runner.invoke(cli, ["export", "--acl", "--externalNode", "--kv"])

    # Assert
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == [
        {"Action": "ACLSet", "Config": {"Name": "svc", "Rules": "r"}},
        {
            "Action": "ExternalNodeRegister",
            "Config": {
                "Node": "ext",
                "Address": "10.0.0.2",
                "Services": [{"ID": "web-1", "Service": "web", "Tags": [], "Port": 80}],
            },
        },
        {"Action": "KVSet", "Config": {"Key": "k", "Flags": 0, "Value": "v"}},
    ]


def test_export_nothing_selected(cli_runner, use_fake):
    result = cli_runner.invoke(cli, ["export"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == []


def test_export_failure_writes_nothing(cli_runner, use_fake, fake_consul):
    fake_consul.failures["acl_list"] = ConsulServerError("Server error 500: down")

    result = cli_runner.invoke(cli, ["export", "--acl"])

    assert result.exit_code == 1
    assert result.stdout == ""
    assert "Unable to export ACL" in result.output


def test_config_set_get_show(cli_runner, temp_config):
    # Act
    set_result = cli_runner.invoke(cli, ["config", "set", "consul.server", "http://10.0.0.5:8500"])
    get_result = cli_runner.invoke(cli, ["config", "get", "consul.server"])
    show_result = cli_runner.invoke(cli, ["config"])

    # Assert
    assert set_result.exit_code == 0
    assert get_result.output.strip() == "http://10.0.0.5:8500"
    assert "consul.server" in show_result.output


def test_config_token_is_masked(cli_runner, temp_config):
    cli_runner.invoke(cli, ["config", "set", "consul.token", "supersecret"])

    result = cli_runner.invoke(cli, ["config", "show"])

    assert "supersecret" not in result.output
    assert "supe…" in result.output


def test_config_bad_key(cli_runner, temp_config):
    result = cli_runner.invoke(cli, ["config", "get", "server"])

    assert result.exit_code == 1
