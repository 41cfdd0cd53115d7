"""
Tests for the command line interface
"""

import os
from unittest.mock import patch

import jwt
from click.testing import CliRunner

from postboard.cli import cli


class TestIssueToken:
    @patch.dict(
        os.environ, {"POSTBOARD_AUTH_PROVIDER": "jwt", "POSTBOARD_JWT_SECRET": "cli-secret"}
    )
    def test_prints_signed_token(self):
        result = CliRunner().invoke(cli, ["issue-token", "--user-id", "u1"])

        assert result.exit_code == 0
        claims = jwt.decode(
            result.output.strip().splitlines()[-1],
            "cli-secret",
            algorithms=["HS256"],
            audience="postboard-api",
        )
        assert claims["sub"] == "u1"

    @patch.dict(os.environ, {"POSTBOARD_AUTH_PROVIDER": "none"})
    def test_refused_without_jwt_provider(self):
        result = CliRunner().invoke(cli, ["issue-token", "--user-id", "alice"])

        assert result.exit_code == 1
        assert "POSTBOARD_AUTH_PROVIDER=jwt" in result.output
        assert "dev-token" not in result.output

    @patch.dict(os.environ, {"POSTBOARD_AUTH_PROVIDER": "jwt"})
    def test_missing_secret(self):
        os.environ.pop("POSTBOARD_JWT_SECRET", None)

        result = CliRunner().invoke(cli, ["issue-token", "--user-id", "u1"])

        assert result.exit_code == 1
        assert "JWT secret key is required" in result.output


class TestInitDb:
    def test_creates_collections(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'cli.db'}"

        result = CliRunner().invoke(cli, ["init-db", "--database-url", url])

        assert result.exit_code == 0
        assert "Collections created" in result.output
        assert (tmp_path / "cli.db").exists()
