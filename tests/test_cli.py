"""
Tests for the command-line interface.
"""

import json

import pytest
from click.testing import CliRunner

from diginet_cli import config as config_module
from diginet_cli.config import PASSWORD_ENV, USERNAME_ENV
from diginet_cli.main import cli
from diginet_dns import __version__
from diginet_dns.exceptions import DNSAPITransportError
from diginet_dns.transport import HTTPTransport

CREDS = ["--username", "user", "--passwordB64", "cGFzcw=="]

RECORD_ARGS = [
    "--domain", "example.com",
    "--host", "www",
    "--type", "A",
    "--data", "192.0.2.10",
    "--ttl", "3600",
]


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep real config files and credentials out of the tests."""
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATHS", [])
    monkeypatch.delenv(USERNAME_ENV, raising=False)
    monkeypatch.delenv(PASSWORD_ENV, raising=False)


@pytest.fixture
def sent(monkeypatch):
    """Replace HTTP sending with a canned response; collect calls."""
    calls = []
    state = {"body": "<resultCode>0</resultCode><resultSubCode>0</resultSubCode>", "error": None}

    def fake_send(self, soap_action, envelope):
        calls.append({
            "endpoint": self.endpoint,
            "timeout": self.timeout,
            "verify": self.verify,
            "action": soap_action,
            "envelope": envelope,
        })
        if state["error"]:
            raise state["error"]
        return state["body"]

    monkeypatch.setattr(HTTPTransport, "send", fake_send)
    return _Sent(calls, state)


class _Sent:
    """Handle for steering and inspecting fake sends."""

    def __init__(self, calls, state):
        self.calls = calls
        self._state = state

    def respond(self, body):
        self._state["body"] = body

    def fail(self, error):
        self._state["error"] = error


def run(*args):
    return CliRunner().invoke(cli, list(args))


class TestRecordCommands:
    """Tests for add/update/delete/list."""

    def test_add(self, sent):
        """Add prints result JSON and exits 0."""
        result = run("add", *CREDS, *RECORD_ARGS)

        assert result.exit_code == 0
        assert '{"result":{"code":0,"message":"Operation successful","subCode":0}}' in result.output
        assert "<recordAdd " in sent.calls[0]["envelope"]
        assert "<TTL>3600</TTL>" in sent.calls[0]["envelope"]
        assert "<Priority>0</Priority>" in sent.calls[0]["envelope"]

    def test_delete(self, sent):
        """Delete sends recordDelete."""
        result = run("delete", *CREDS, *RECORD_ARGS, "--priority", "5")

        assert result.exit_code == 0
        assert "<recordDelete " in sent.calls[0]["envelope"]
        assert "<Priority>5</Priority>" in sent.calls[0]["envelope"]

    def test_update(self, sent):
        """Update takes --old* and --new* fields."""
        result = run(
            "update", *CREDS,
            "--oldDomain", "example.com", "--oldHost", "www", "--oldType", "A",
            "--oldData", "192.0.2.10", "--oldTTL", "3600", "--oldPriority", "0",
            "--newDomain", "example.com", "--newHost", "www", "--newType", "A",
            "--newData", "192.0.2.20", "--newTTL", "600", "--newPriority", "0",
        )

        assert result.exit_code == 0
        envelope = sent.calls[0]["envelope"]
        assert sent.calls[0]["action"].endswith("/recordUpdate")
        assert "<Data>192.0.2.10</Data>" in envelope
        assert "<Data>192.0.2.20</Data>" in envelope
        assert "<TTL>600</TTL>" in envelope

    def test_list(self, sent):
        """List prints records JSON."""
        sent.respond(
            "<resultCode>0</resultCode><resultItemCount>1</resultItemCount>"
            "<resultItems><DNSRecordListItem>"
            "<HostName>www</HostName><ReadOnly>false</ReadOnly>"
            "</DNSRecordListItem></resultItems>"
        )
        result = run("list", *CREDS, "--domain", "example.com")

        assert result.exit_code == 0
        line = [l for l in result.output.splitlines() if l.startswith("{")][0]
        data = json.loads(line)
        assert data["records"] == [{"host": "www", "readOnly": False}]
        assert data["recordCount"] == 1
        assert "<domainName>example.com</domainName>" in sent.calls[0]["envelope"]

    def test_remote_failure_exits_zero(self, sent):
        """A non-zero result code is still a successful run."""
        sent.respond("<resultCode>1</resultCode>")
        result = run("list", *CREDS, "--domain", "example.com")

        assert result.exit_code == 0
        assert '"code":1' in result.output
        assert '"records":[]' in result.output

    def test_empty_response(self, sent):
        """Empty body prints the error object."""
        sent.respond(None)
        result = run("add", *CREDS, *RECORD_ARGS)

        assert result.exit_code == 0
        assert '{"error": "No response data to parse"}' in result.output

    def test_transport_error(self, sent):
        """Transport failure exits 1 without JSON."""
        sent.fail(DNSAPITransportError("Connection error: refused"))
        result = run("add", *CREDS, *RECORD_ARGS)

        assert result.exit_code == 1
        assert "ERROR: Request failed: Connection error: refused" in result.output
        assert '"result"' not in result.output

    def test_text_format(self, sent):
        """Text format shows sub-code details."""
        sent.respond("<resultCode>3</resultCode><resultSubCode>1</resultSubCode>")
        result = run("--format", "text", "add", *CREDS, *RECORD_ARGS)

        assert result.exit_code == 0
        assert "Result Code: 3 - Operation failed - invalid parameters" in result.output
        assert "Bit 0: Domain validation issue" in result.output


class TestUsageErrors:
    """Tests for usage errors before any network activity."""

    def test_missing_record_field(self, sent):
        """Missing --data is a usage error."""
        args = [a for a in RECORD_ARGS if a not in ("--data", "192.0.2.10")]
        result = run("add", *CREDS, *args)

        assert result.exit_code == 2
        assert sent.calls == []

    def test_missing_credentials(self, sent):
        """Missing password is a usage error."""
        result = run("list", "--username", "user", "--domain", "example.com")

        assert result.exit_code == 2
        assert "--passwordB64" in result.output
        assert sent.calls == []

    def test_unknown_option(self, sent):
        """Unknown options are rejected."""
        result = run("list", *CREDS, "--domain", "example.com", "--bogus", "1")

        assert result.exit_code == 2
        assert sent.calls == []

    def test_credentials_from_env(self, sent, monkeypatch):
        """Environment fills in credentials."""
        monkeypatch.setenv(USERNAME_ENV, "env-user")
        monkeypatch.setenv(PASSWORD_ENV, "ZW52")
        result = run("list", "--domain", "example.com")

        assert result.exit_code == 0
        assert "<accountUsername>env-user</accountUsername>" in sent.calls[0]["envelope"]


class TestGlobalOptions:
    """Tests for group options and config."""

    def test_transport_settings(self, sent):
        """Endpoint, timeout and verification reach the transport."""
        result = run(
            "--endpoint", "https://dns.test/api", "--timeout", "9", "--no-verify",
            "list", *CREDS, "--domain", "example.com",
        )

        assert result.exit_code == 0
        call = sent.calls[0]
        assert call["endpoint"] == "https://dns.test/api"
        assert call["timeout"] == 9
        assert call["verify"] is False

    def test_config_file(self, sent, tmp_path):
        """Config file supplies endpoint and credentials."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "api:\n  endpoint: https://cfg.test/api\n  timeout: 12\n"
            "credentials:\n  username: cfg-user\n  password_b64: Y2Zn\n"
        )
        result = run("--config", str(path), "list", "--domain", "example.com")

        assert result.exit_code == 0
        call = sent.calls[0]
        assert call["endpoint"] == "https://cfg.test/api"
        assert call["timeout"] == 12
        assert "<accountPasswordB64>Y2Zn</accountPasswordB64>" in call["envelope"]

    def test_config_show_hides_password(self, tmp_path):
        """config show never prints the password."""
        path = tmp_path / "config.yaml"
        path.write_text("credentials:\n  username: cfg-user\n  password_b64: c2VjcmV0\n")
        result = run("--config", str(path), "config", "show")

        assert result.exit_code == 0
        assert "cfg-user" in result.output
        assert "(set)" in result.output
        assert "c2VjcmV0" not in result.output

    def test_config_init(self, tmp_path):
        """config init writes a sample file."""
        path = tmp_path / "sub" / "config.yaml"
        result = run("config", "init", "--path", str(path))

        assert result.exit_code == 0
        assert "credentials:" in path.read_text()

    def test_config_init_messages(self, tmp_path):
        """config init reports the file it wrote."""
        path = tmp_path / "config.yaml"
        result = run("config", "init", "--path", str(path))

        assert result.exit_code == 0
        assert f"SUCCESS: Created config file: {path}" in result.output
        assert "INFO: Edit the file" in result.output

    def test_quiet_silences_config_init(self, tmp_path):
        """--quiet drops success and info messages but still writes."""
        path = tmp_path / "config.yaml"
        result = run("-q", "config", "init", "--path", str(path))

        assert result.exit_code == 0
        assert path.exists()
        assert "Created config file" not in result.output
        assert "INFO:" not in result.output

    def test_quiet_keeps_errors(self, sent):
        """--quiet never hides a failed request."""
        sent.fail(DNSAPITransportError("Connection error: refused"))
        result = run("--quiet", "add", *CREDS, *RECORD_ARGS)

        assert result.exit_code == 1
        assert "ERROR: Request failed" in result.output


class TestInformational:
    """Tests for version and help, which never touch the network."""

    def test_version_command(self, sent):
        result = run("version")

        assert result.exit_code == 0
        assert result.output.strip() == f"DIGINET DNS API Client v{__version__}"
        assert sent.calls == []

    @pytest.mark.parametrize("flag", ["--version", "-v"])
    def test_version_flag(self, sent, flag):
        result = run(flag)

        assert result.exit_code == 0
        assert f"v{__version__}" in result.output

    @pytest.mark.parametrize("command,option", [
        ("add", "--passwordB64"),
        ("update", "--oldPriority"),
        ("delete", "--priority"),
        ("list", "--domain"),
    ])
    def test_command_help(self, sent, command, option):
        """Per-command help lists its options."""
        result = run(command, "--help")

        assert result.exit_code == 0
        assert option in result.output
        assert sent.calls == []
