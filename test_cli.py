"""Tests for configuration loading, redaction and the command line."""

import io
import json

import pytest
from payloadmask import (
    ConfigError,
    JSONPathMatcher,
    LogLevel,
    Mask,
    RuleError,
    get_masked_object,
    load_config,
)
from payloadmask.cli import main


class TestConfig:
    """Test YAML/JSON configuration files."""

    def test_rules_list(self, tmp_path):
        path = tmp_path / "mask.yaml"
        path.write_text(
            "rules:\n"
            "  - '*'\n"
            "  - '-user.password'\n"
            "redact:\n"
            "  - '$.token'\n"
            "log_level: debug\n"
        )
        config = load_config(path)
        assert config.rules == "*,-user.password"
        assert config.redact == ["$.token"]
        assert config.log_level == LogLevel.DEBUG

    def test_rules_list_entries_are_single_chains(self, tmp_path):
        path = tmp_path / "mask.yaml"
        path.write_text("rules:\n  - 'a,b.c'\n  - '-d'\n")
        config = load_config(path)
        assert config.rules == "a\\,b.c,-d"
        assert get_masked_object(Mask(config.rules), {"a,b": {"c": 1}, "a": 2, "d": 3}) == {"a,b": {"c": 1}}

    def test_rules_string_from_json(self, tmp_path):
        path = tmp_path / "mask.json"
        path.write_text(json.dumps({"rules": "foo.bar,foo.quux"}))
        config = load_config(path)
        assert config.rules == "foo.bar,foo.quux"
        assert config.redact == []
        assert config.redaction_value == "redacted"

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "mask.yaml"
        path.write_text("")
        config = load_config(path)
        assert config.rules == ""
        assert config.log_level == LogLevel.INFO

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "mask.yaml"
        path.write_text("rules: [unclosed")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_wrong_rules_type(self, tmp_path):
        path = tmp_path / "mask.yaml"
        path.write_text("rules: 5")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_unknown_log_level(self, tmp_path):
        path = tmp_path / "mask.yaml"
        path.write_text("log_level: loud")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "mask.yaml"
        path.write_text("- foo\n- bar\n")
        with pytest.raises(ConfigError):
            load_config(path)


class TestRedaction:
    """Test JSONPath redaction."""

    def test_redact_field(self):
        document = {"user": {"password": "hunter2", "name": "bob"}}
        redacted = JSONPathMatcher.redact(document, ["$.user.password"])
        assert redacted == {"user": {"password": "redacted", "name": "bob"}}
        assert document["user"]["password"] == "hunter2"

    def test_redact_array_items(self):
        document = {"items": [{"secret": 1, "id": "a"}, {"secret": 2, "id": "b"}]}
        redacted = JSONPathMatcher.redact(document, ["$.items[*].secret"], "***")
        assert redacted == {"items": [{"secret": "***", "id": "a"}, {"secret": "***", "id": "b"}]}

    def test_no_match_leaves_document(self):
        document = {"a": 1}
        assert JSONPathMatcher.redact(document, ["$.missing"]) == {"a": 1}

    def test_invalid_expression(self):
        with pytest.raises(RuleError):
            JSONPathMatcher.redact({}, ["$.foo["])

    def test_redaction_then_mask(self):
        document = {"token": "abc", "user": {"name": "bob", "password": "x"}}
        redacted = JSONPathMatcher.redact(document, ["$.token"])
        masked = get_masked_object(Mask("*,-user.password"), redacted)
        assert masked == {"token": "redacted", "user": {"name": "bob"}}


class TestCli:
    """Test the payloadmask command."""

    def write_payload(self, tmp_path, payload):
        path = tmp_path / "payload.json"
        path.write_text(json.dumps(payload))
        return str(path)

    def test_mask_file(self, tmp_path, capsys):
        path = self.write_payload(tmp_path, {"foo": {"bar": 1, "quux": 2, "baz": 10}, "bar": 3})
        assert main(["-r", "foo.bar,foo.quux", path]) == 0
        assert json.loads(capsys.readouterr().out) == {"foo": {"bar": 1, "quux": 2}}

    def test_mask_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO('{"a": 1, "b": 2}'))
        assert main(["-r", "*,-a"]) == 0
        assert json.loads(capsys.readouterr().out) == {"b": 2}

    def test_paths(self, tmp_path, capsys):
        path = self.write_payload(tmp_path, {"foo": {"bar": 1, "baz": 2}})
        assert main(["-r", "*,-foo.bar", "--paths", path]) == 0
        assert capsys.readouterr().out.splitlines() == ["foo.baz"]

    def test_redact_option(self, tmp_path, capsys):
        path = self.write_payload(tmp_path, {"token": "abc", "a": 1})
        assert main(["-r", "*", "--redact", "$.token", path]) == 0
        assert json.loads(capsys.readouterr().out) == {"token": "redacted", "a": 1}

    def test_config_file(self, tmp_path, capsys):
        config = tmp_path / "mask.yaml"
        config.write_text("rules: foo\nredact: ['$.foo.secret']\n")
        path = self.write_payload(tmp_path, {"foo": {"secret": "s", "x": 1}, "bar": 2})
        assert main(["-c", str(config), path]) == 0
        assert json.loads(capsys.readouterr().out) == {"foo": {"secret": "redacted", "x": 1}}

    def test_no_rules_prints_empty_object(self, tmp_path, capsys):
        path = self.write_payload(tmp_path, {"a": 1})
        assert main([path]) == 0
        assert json.loads(capsys.readouterr().out) == {}

    def test_invalid_json(self, tmp_path, capsys):
        path = tmp_path / "payload.json"
        path.write_text("{not json")
        assert main(["-r", "*", str(path)]) == 1
        assert "Invalid JSON payload" in capsys.readouterr().err

    def test_missing_input(self, tmp_path, capsys):
        assert main(["-r", "*", str(tmp_path / "missing.json")]) == 1
        assert "Input file not found" in capsys.readouterr().err

    def test_missing_config(self, tmp_path, capsys):
        assert main(["-c", str(tmp_path / "missing.yaml")]) == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_invalid_redaction(self, tmp_path, capsys):
        path = self.write_payload(tmp_path, {"a": 1})
        assert main(["-r", "*", "--redact", "$.foo[", path]) == 1
        assert "Invalid rule" in capsys.readouterr().err
