"""Tests for packager_sign.cli: Click command group."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from packager_sign.cli import main
from packager_sign.config import PRIVATE_KEY_ENV, PRIVATE_KEY_PASSWORD_ENV
from packager_sign.keys import decode_private_key, save_keypair
from packager_sign.models import KeyPair

# ===========================================================================
# Global flags
# ===========================================================================


class TestCliVersion:
    def test_version_flag_reports_version(self) -> None:
        runner = CliRunner()
        with patch("importlib.metadata.version", return_value="0.1.0"):
            result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_help_shows_subcommands(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        for cmd in ("generate", "sign"):
            assert cmd in result.output


# ===========================================================================
# generate command
# ===========================================================================


class TestGenerateCommand:
    def test_writes_key_files(self, tmp_path: Path) -> None:
        runner = CliRunner()
        key_path = tmp_path / "release.key"
        result = runner.invoke(
            main, ["generate", "--path", str(key_path), "--password", ""]
        )
        assert result.exit_code == 0, result.output
        assert key_path.exists()
        assert (tmp_path / "release.key.pub").exists()
        assert "release.key.pub" in result.output
        decode_private_key(key_path.read_text(encoding="utf-8"), "")

    def test_prints_keys_without_path(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["generate", "--password", ""])
        assert result.exit_code == 0, result.output
        assert "Private key: " in result.output
        assert "Public key : " in result.output

    def test_refuses_to_overwrite(self, tmp_path: Path) -> None:
        runner = CliRunner()
        key_path = tmp_path / "release.key"
        key_path.write_text("existing", encoding="utf-8")
        result = runner.invoke(
            main, ["generate", "--path", str(key_path), "--password", ""]
        )
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert key_path.read_text(encoding="utf-8") == "existing"

    def test_force_overwrites(self, tmp_path: Path) -> None:
        runner = CliRunner()
        key_path = tmp_path / "release.key"
        key_path.write_text("existing", encoding="utf-8")
        result = runner.invoke(
            main, ["generate", "--path", str(key_path), "--password", "", "--force"]
        )
        assert result.exit_code == 0, result.output
        assert key_path.read_text(encoding="utf-8") != "existing"

    def test_prompts_for_password(self, tmp_path: Path) -> None:
        runner = CliRunner()
        key_path = tmp_path / "release.key"
        result = runner.invoke(
            main,
            ["generate", "--path", str(key_path)],
            input="s3cret\ns3cret\n",
        )
        assert result.exit_code == 0, result.output
        decode_private_key(key_path.read_text(encoding="utf-8"), "s3cret")


# ===========================================================================
# sign command
# ===========================================================================


class TestSignCommand:
    def test_signs_with_key_file(
        self,
        tmp_path: Path,
        artifact: Path,
        plain_keypair: KeyPair,
        verify_signature: Callable[[str, bytes, str], bool],
    ) -> None:
        sk_path, _ = save_keypair(plain_keypair, tmp_path / "release.key")
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["sign", str(artifact), "--private-key-path", str(sk_path), "--password", ""],
        )
        assert result.exit_code == 0, result.output
        signature_path = artifact.with_name("app.exe.sig")
        assert str(signature_path.resolve()) in result.output
        encoded = signature_path.read_text(encoding="utf-8")
        assert verify_signature(plain_keypair.public_key, artifact.read_bytes(), encoded)

    def test_signs_several_files(self, tmp_path: Path, plain_keypair: KeyPair) -> None:
        files = []
        for name in ("a.deb", "b.rpm"):
            target = tmp_path / name
            target.write_bytes(name.encode())
            files.append(str(target))
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["sign", *files, "--private-key", plain_keypair.secret_key, "--password", ""],
        )
        assert result.exit_code == 0, result.output
        assert (tmp_path / "a.deb.sig").exists()
        assert (tmp_path / "b.rpm.sig").exists()

    def test_reads_key_and_password_from_environment(
        self, artifact: Path, encrypted_keypair: KeyPair, password: str
    ) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["sign", str(artifact)],
            env={
                PRIVATE_KEY_ENV: encrypted_keypair.secret_key,
                PRIVATE_KEY_PASSWORD_ENV: password,
            },
        )
        assert result.exit_code == 0, result.output
        assert artifact.with_name("app.exe.sig").exists()

    def test_prompts_for_password(
        self, artifact: Path, encrypted_keypair: KeyPair, password: str
    ) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["sign", str(artifact), "--private-key", encrypted_keypair.secret_key],
            input=f"{password}\n",
            env={PRIVATE_KEY_PASSWORD_ENV: None},
        )
        assert result.exit_code == 0, result.output
        assert artifact.with_name("app.exe.sig").exists()

    def test_wrong_password_exits_one(
        self, artifact: Path, encrypted_keypair: KeyPair
    ) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main,
            [
                "sign",
                str(artifact),
                "--private-key",
                encrypted_keypair.secret_key,
                "--password",
                "wrong",
            ],
        )
        assert result.exit_code == 1
        assert "Wrong password" in result.output

    def test_missing_artifact_names_path(
        self, tmp_path: Path, plain_keypair: KeyPair
    ) -> None:
        missing = tmp_path / "missing.exe"
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["sign", str(missing), "--private-key", plain_keypair.secret_key, "--password", ""],
        )
        assert result.exit_code == 1
        assert str(missing) in result.output

    def test_requires_private_key(self, artifact: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main, ["sign", str(artifact)], env={PRIVATE_KEY_ENV: None}
        )
        assert result.exit_code == 2
        assert "private key is required" in result.output

    def test_key_options_are_exclusive(
        self, tmp_path: Path, artifact: Path, plain_keypair: KeyPair
    ) -> None:
        sk_path, _ = save_keypair(plain_keypair, tmp_path / "release.key")
        runner = CliRunner()
        result = runner.invoke(
            main,
            [
                "sign",
                str(artifact),
                "--private-key",
                plain_keypair.secret_key,
                "--private-key-path",
                str(sk_path),
            ],
        )
        assert result.exit_code == 2
        assert "mutually exclusive" in result.output

    def test_unreadable_key_file_exits_one(
        self, tmp_path: Path, artifact: Path, plain_keypair: KeyPair
    ) -> None:
        sk_path, _ = save_keypair(plain_keypair, tmp_path / "release.key")
        runner = CliRunner()
        with patch.object(
            Path, "read_text", side_effect=PermissionError(13, "Permission denied")
        ):
            result = runner.invoke(
                main,
                ["sign", str(artifact), "--private-key-path", str(sk_path), "--password", ""],
            )
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "Permission denied" in result.output
        assert str(sk_path) in result.output
        assert not artifact.with_name("app.exe.sig").exists()
