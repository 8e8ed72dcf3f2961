"""Tests for administrator, app, API key and domain CLI commands."""

import re

from admindash.cli.main import cli


def invoke(cli_runner, db_path, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", db_path, *args], **kwargs)


class TestAdminCommands:
    """Tests for administrator commands."""

    def test_list_marks_current_user(self, cli_runner, temp_db_path):
        result = invoke(cli_runner, temp_db_path, "admin", "list")

        assert result.exit_code == 0
        assert "*ID:   1 | SAIFUL ALAM RAFI" in result.output
        assert " ID:   2 | Jane Doe" in result.output

    def test_add_admin(self, cli_runner, temp_db_path):
        result = invoke(
            cli_runner, temp_db_path, "admin", "add", "Ada Lovelace", "ada@example.com", "--role", "Manager"
        )

        assert result.exit_code == 0
        assert "Created administrator 'Ada Lovelace' (ID: 4)" in result.output

    def test_set_permissions(self, cli_runner, temp_db_path):
        result = invoke(cli_runner, temp_db_path, "admin", "permissions", "3", "api_access", "view_reports")

        assert result.exit_code == 0
        assert "Permissions of 'John Smith': view_reports, api_access" in result.output

    def test_unknown_permission(self, cli_runner, temp_db_path):
        result = invoke(cli_runner, temp_db_path, "admin", "permissions", "3", "root")

        assert result.exit_code == 1
        assert "Error: Unknown permission(s): root" in result.output

    def test_login_logout(self, cli_runner, temp_db_path):
        assert "Signed in as 'Jane Doe'" in invoke(cli_runner, temp_db_path, "admin", "login", "2").output
        assert "*ID:   2" in invoke(cli_runner, temp_db_path, "admin", "list").output

        invoke(cli_runner, temp_db_path, "admin", "logout")
        assert "*ID:" not in invoke(cli_runner, temp_db_path, "admin", "list").output

    def test_delete_unknown_admin(self, cli_runner, temp_db_path):
        result = invoke(cli_runner, temp_db_path, "admin", "delete", "9")

        assert result.exit_code == 1
        assert "Error: Administrator 9 not found" in result.output

    def test_activity(self, cli_runner, temp_db_path):
        result = invoke(cli_runner, temp_db_path, "admin", "activity", "1")

        assert "Logged In" in result.output
        assert "No activity recorded." in invoke(cli_runner, temp_db_path, "admin", "activity", "3").output


class TestAppCommands:
    """Tests for app commands."""

    def test_list_filtered_by_status(self, cli_runner, temp_db_path):
        result = invoke(cli_runner, temp_db_path, "app", "list", "--status", "Error")

        assert result.exit_code == 0
        assert "Analytics DB" in result.output
        assert "Main Web App" not in result.output

    def test_add_and_start(self, cli_runner, temp_db_path):
        added = invoke(
            cli_runner, temp_db_path,
            "app", "add", "Billing API", "--platform", "API Service", "--repository", "github.com/acme/billing",
        )
        assert "Created app 'Billing API' (ID: 5)" in added.output

        started = invoke(cli_runner, temp_db_path, "app", "start", "5")
        assert "App 'Billing API' is now Running" in started.output

    def test_env_rename(self, cli_runner, temp_db_path):
        result = invoke(
            cli_runner, temp_db_path, "app", "env", "set", "1", "DATABASE_HOST", "db2", "--rename-from", "DB_HOST"
        )
        assert result.exit_code == 0

        shown = invoke(cli_runner, temp_db_path, "app", "show", "1").output
        assert "DATABASE_HOST=db2" in shown
        assert "DB_HOST=" not in shown

    def test_env_invalid_name(self, cli_runner, temp_db_path):
        result = invoke(cli_runner, temp_db_path, "app", "env", "set", "1", "BAD-NAME", "x")

        assert result.exit_code == 1
        assert "Invalid environment variable name" in result.output

    def test_delete_unknown_app(self, cli_runner, temp_db_path):
        result = invoke(cli_runner, temp_db_path, "app", "delete", "42")

        assert result.exit_code == 1
        assert "Error: App 42 not found" in result.output


class TestApiKeyCommands:
    """Tests for API key commands."""

    def test_create_shows_secret_once(self, cli_runner, temp_db_path):
        result = invoke(cli_runner, temp_db_path, "apikey", "create", "CI", "--scope", "deploy_apps")

        assert result.exit_code == 0
        secret = re.search(r"Secret: (\S+)", result.output).group(1)
        assert re.match(r"^sark_live_[0-9a-z]{30}$", secret)

        listing = invoke(cli_runner, temp_db_path, "apikey", "list").output
        assert secret not in listing
        assert f"{secret[:10]}...{secret[-4:]}" in listing

    def test_revoke_and_delete(self, cli_runner, temp_db_path):
        assert "Revoked API key 'Production Integration'" in invoke(
            cli_runner, temp_db_path, "apikey", "revoke", "key-1"
        ).output
        assert "Revoked" in invoke(cli_runner, temp_db_path, "apikey", "list").output

        invoke(cli_runner, temp_db_path, "apikey", "delete", "key-1")
        assert "No API keys found." in invoke(cli_runner, temp_db_path, "apikey", "list").output


class TestDomainCommands:
    """Tests for custom domain commands."""

    def test_add_prints_txt_record(self, cli_runner, temp_db_path):
        result = invoke(cli_runner, temp_db_path, "domain", "add", "shop.example.com")

        assert result.exit_code == 0
        assert "Added domain 'shop.example.com' (ID: 2)" in result.output
        assert re.search(r"TXT @ sar-verification=[0-9a-z]{13} \(TTL 300\)", result.output)

    def test_verify_reports_outcome(self, cli_runner, temp_db_path):
        invoke(cli_runner, temp_db_path, "domain", "add", "shop.example.com")

        result = invoke(cli_runner, temp_db_path, "domain", "verify", "2")

        assert result.exit_code == 0
        assert re.search(r"Domain 'shop.example.com' is (Verified|Pending)", result.output)

    def test_invalid_domain(self, cli_runner, temp_db_path):
        result = invoke(cli_runner, temp_db_path, "domain", "add", "not a domain")

        assert result.exit_code == 1
        assert "Invalid domain name" in result.output
