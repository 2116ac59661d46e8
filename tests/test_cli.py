"""Tests for the mlagent command line."""

import json
import tempfile
from pathlib import Path

import yaml
from click.testing import CliRunner

from mlagent.cli import main
from mlagent.registry.local_registry import LocalRegistry


def _package(apps_root: Path, package_id: str = "app1") -> Path:
    root = apps_root / package_id / "res" / "global" / "rpk"
    root.mkdir(parents=True)
    (root / "model_description.json").write_text(
        json.dumps([{"name": "m1", "model": "m1.tflite", "activate": "true"}])
    )
    return root


def test_install_command():
    with tempfile.TemporaryDirectory() as tmpdir:
        apps = Path(tmpdir) / "apps"
        _package(apps)
        reg_dir = Path(tmpdir) / "registry"

        result = CliRunner().invoke(main, [
            "--registry", str(reg_dir),
            "install", "app1", "--res-type", "rpk", "--res-version", "2",
            "--apps-root", str(apps),
        ])

        assert result.exit_code == 0, result.output
        assert "1 registered" in result.output
        assert LocalRegistry(reg_dir).get_activated_model("m1").version == 1


def test_replay_command():
    with tempfile.TemporaryDirectory() as tmpdir:
        apps = Path(tmpdir) / "apps"
        _package(apps)
        with open(apps / "app1" / "package.yaml", "w") as f:
            yaml.dump({"res_type": "rpk", "res_version": "2"}, f)

        events = Path(tmpdir) / "events.jsonl"
        events.write_text(json.dumps({
            "package_category": "rpk", "package_id": "app1",
            "kind": "install", "phase": "completed", "progress": 100,
        }) + "\n")
        reg_dir = Path(tmpdir) / "registry"

        result = CliRunner(env={"MLAGENT_APPS_ROOT": str(apps)}).invoke(
            main, ["--registry", str(reg_dir), "replay", str(events)]
        )

        assert result.exit_code == 0, result.output
        assert "Replayed 1 event(s)" in result.output
        assert len(LocalRegistry(reg_dir).list_models()) == 1


def test_activate_and_delete_commands():
    with tempfile.TemporaryDirectory() as tmpdir:
        reg_dir = Path(tmpdir) / "registry"
        reg = LocalRegistry(reg_dir)
        reg.add_model("m1", "a.tflite", active=True)
        reg.add_model("m1", "b.tflite")

        runner = CliRunner()
        result = runner.invoke(main, ["--registry", str(reg_dir), "activate", "m1", "2"])
        assert result.exit_code == 0, result.output
        assert LocalRegistry(reg_dir).get_activated_model("m1").version == 2

        result = runner.invoke(main, ["--registry", str(reg_dir), "delete-model", "m1", "--version", "1"])
        assert result.exit_code == 0, result.output
        assert [m.version for m in LocalRegistry(reg_dir).get_models("m1")] == [2]

        result = runner.invoke(main, ["--registry", str(reg_dir), "activate", "m1", "9"])
        assert result.exit_code != 0


def test_list_commands_on_empty_registry():
    with tempfile.TemporaryDirectory() as tmpdir:
        reg_dir = str(Path(tmpdir) / "registry")
        runner = CliRunner()
        for command, message in (
            ("models", "No models registered."),
            ("pipelines", "No pipelines registered."),
            ("resources", "No resources registered."),
        ):
            result = runner.invoke(main, ["--registry", reg_dir, command])
            assert result.exit_code == 0
            assert message in result.output
