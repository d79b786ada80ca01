"""Integration tests for the pathsync CLI commands."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from pathsync.entrypoints.cli import cli
from pathsync.shared.config_io import get_global_config_path
from pathsync.shared.registry_io import load_registry, save_registry
from tests.conftest import create_test_files, make_registry
from tests.helpers.cli_assertions import (
    assert_command_failed,
    assert_command_success,
    assert_error_message,
    assert_output_contains,
    assert_output_lines,
)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A project directory that is also the current directory."""
    path = (tmp_path / "project").resolve()
    path.mkdir()
    monkeypatch.chdir(path)
    return path


def invoke(runner: CliRunner, registry_path: Path, *args: str):
    return runner.invoke(cli, ["--registry", str(registry_path), *args])


class TestNew:
    """Tests for 'pathsync new'."""

    def test_creates_empty_profile(self, runner: CliRunner, registry_path: Path) -> None:
        result = invoke(runner, registry_path, "new", "toto")

        assert_command_success(result, context="new toto")
        assert load_registry(registry_path) == make_registry({"toto": []})

    def test_duplicate_fails_with_hint(self, runner: CliRunner, registry_path: Path) -> None:
        invoke(runner, registry_path, "new", "toto")

        result = invoke(runner, registry_path, "new", "toto")

        assert_command_failed(result)
        assert_error_message(result, hint="pathsync add toto")
        assert load_registry(registry_path).names == ["toto"]

    def test_blank_name_rejected(self, runner: CliRunner, registry_path: Path) -> None:
        result = invoke(runner, registry_path, "new", " ")

        assert_command_failed(result)
        assert not registry_path.exists()


class TestAdd:
    """Tests for 'pathsync add'."""

    def test_stores_absolute_local_path(
        self, runner: CliRunner, registry_path: Path, workdir: Path
    ) -> None:
        create_test_files(workdir, {"my_local_script.sh": "echo hi"})
        invoke(runner, registry_path, "new", "toto")

        result = invoke(
            runner,
            registry_path,
            "add",
            "toto",
            "./my_local_script.sh",
            "remote:./some_folder/remote_script.sh",
        )

        assert_command_success(result)
        assert load_registry(registry_path) == make_registry(
            {
                "toto": [
                    (
                        str(workdir / "my_local_script.sh"),
                        "remote:./some_folder/remote_script.sh",
                    )
                ]
            }
        )

    def test_unknown_profile(self, runner: CliRunner, registry_path: Path, workdir: Path) -> None:
        result = invoke(runner, registry_path, "add", "nope", "a", "h:a")

        assert_command_failed(result)
        assert_error_message(result, hint="pathsync new nope")

    def test_prefix_selects_profile(
        self, runner: CliRunner, registry_path: Path, workdir: Path
    ) -> None:
        invoke(runner, registry_path, "new", "toto")

        result = invoke(runner, registry_path, "add", "to", "f", "h:f")

        assert_command_success(result)
        assert len(load_registry(registry_path).get("toto").entries) == 1

    def test_warns_when_local_missing(
        self, runner: CliRunner, registry_path: Path, workdir: Path
    ) -> None:
        invoke(runner, registry_path, "new", "toto")

        result = invoke(runner, registry_path, "add", "toto", "later.txt", "h:later.txt")

        assert_command_success(result)
        assert_output_contains(result, "does not exist yet")


class TestShowDelRm:
    """Tests for show, del and rm."""

    @pytest.fixture
    def populated(self, registry_path: Path) -> Path:
        save_registry(
            make_registry(
                {
                    "toto": [("/w/a", "h:a"), ("/w/b", "h:b"), ("/w/a", "h:a2")],
                    "other": [],
                }
            ),
            registry_path,
        )
        return registry_path

    def test_show(self, runner: CliRunner, populated: Path) -> None:
        result = invoke(runner, populated, "show", "toto")

        assert_command_success(result)
        assert_output_lines(
            result,
            ["name: toto", "entries (3):", "\t/w/a -> h:a", "\t/w/b -> h:b", "\t/w/a -> h:a2"],
        )

    def test_show_unknown(self, runner: CliRunner, populated: Path) -> None:
        result = invoke(runner, populated, "show", "zzz")

        assert_command_failed(result)
        assert_output_contains(result, "Found no sync by the name 'zzz'")

    def test_ambiguous_prefix(self, runner: CliRunner, registry_path: Path) -> None:
        save_registry(make_registry({"toto": [], "totem": []}), registry_path)

        result = invoke(runner, registry_path, "show", "to")

        assert_command_failed(result)
        assert_output_contains(result, "ambiguous", "toto, totem")

    def test_del(self, runner: CliRunner, populated: Path) -> None:
        result = invoke(runner, populated, "del", "oth")

        assert_command_success(result)
        assert load_registry(populated).names == ["toto"]

    def test_rm_all_entries_for_local(self, runner: CliRunner, populated: Path) -> None:
        result = invoke(runner, populated, "rm", "toto", "/w/a")

        assert_command_success(result)
        assert [e.local for e in load_registry(populated).get("toto").entries] == ["/w/b"]

    def test_rm_specific_remote(self, runner: CliRunner, populated: Path) -> None:
        invoke(runner, populated, "rm", "toto", "/w/a", "h:a2")

        remotes = [e.remote for e in load_registry(populated).get("toto").entries]
        assert remotes == ["h:a", "h:b"]

    def test_rm_nothing_matching(self, runner: CliRunner, populated: Path) -> None:
        result = invoke(runner, populated, "rm", "toto", "/w/zzz")

        assert_command_failed(result)
        assert_error_message(result, hint="pathsync show toto")
        assert len(load_registry(populated).get("toto").entries) == 3


class TestLs:
    """Tests for 'pathsync ls'."""

    def test_lists_profiles_in_scope(
        self, runner: CliRunner, registry_path: Path, workdir: Path
    ) -> None:
        save_registry(
            make_registry(
                {
                    "in": [(str(workdir / "a"), "h:a")],
                    "out": [("/elsewhere/b", "h:b")],
                    "deep": [(str(workdir / "sub" / "c"), "h:c")],
                }
            ),
            registry_path,
        )

        result = invoke(runner, registry_path, "ls")

        assert_command_success(result)
        assert_output_lines(result, ["in", "deep"])

    def test_folder_argument_and_files(
        self, runner: CliRunner, registry_path: Path, workdir: Path
    ) -> None:
        save_registry(
            make_registry(
                {"p": [(str(workdir / "sub" / "c"), "h:c"), (str(workdir / "d"), "h:d")]}
            ),
            registry_path,
        )

        result = invoke(runner, registry_path, "ls", "sub", "--files")

        assert_command_success(result)
        assert_output_lines(result, ["p", f"\t{workdir / 'sub' / 'c'} -> h:c"])

    def test_nothing_in_scope(
        self, runner: CliRunner, registry_path: Path, workdir: Path
    ) -> None:
        result = invoke(runner, registry_path, "ls")

        assert_command_success(result)
        assert_output_contains(result, f"Found no sync in {workdir}")

    def test_corrupt_registry_is_reported(
        self, runner: CliRunner, registry_path: Path, workdir: Path
    ) -> None:
        registry_path.parent.mkdir(parents=True)
        registry_path.write_text("not = = toml")

        result = invoke(runner, registry_path, "ls")

        assert_command_failed(result)
        assert_output_contains(result, "unreadable")


class TestSync:
    """Tests for 'pathsync sync' and the bare command."""

    def test_named_sync_copies_local_destinations(
        self, runner: CliRunner, registry_path: Path, tmp_path: Path
    ) -> None:
        create_test_files(tmp_path / "src", {"a.txt": "A"})
        save_registry(
            make_registry({"p": [(str(tmp_path / "src" / "a.txt"), str(tmp_path / "dst" / "a.txt"))]}),
            registry_path,
        )

        result = invoke(runner, registry_path, "sync", "p")

        assert_command_success(result)
        assert (tmp_path / "dst" / "a.txt").read_text() == "A"
        assert_output_contains(result, "transferred", "1 transferred, 0 unchanged, 0 failed")

        again = invoke(runner, registry_path, "sync", "p")
        assert_output_contains(again, "0 transferred, 1 unchanged, 0 failed")

    def test_bare_command_syncs_scope(
        self, runner: CliRunner, registry_path: Path, workdir: Path, tmp_path: Path
    ) -> None:
        create_test_files(workdir, {"in.txt": "in"})
        create_test_files(tmp_path / "far", {"out.txt": "out"})
        save_registry(
            make_registry(
                {
                    "here": [(str(workdir / "in.txt"), str(tmp_path / "mirror" / "in.txt"))],
                    "there": [
                        (str(tmp_path / "far" / "out.txt"), str(tmp_path / "mirror" / "out.txt"))
                    ],
                }
            ),
            registry_path,
        )

        result = invoke(runner, registry_path)

        assert_command_success(result)
        assert (tmp_path / "mirror" / "in.txt").exists()
        assert not (tmp_path / "mirror" / "out.txt").exists()

    def test_nothing_to_sync(self, runner: CliRunner, registry_path: Path, workdir: Path) -> None:
        result = invoke(runner, registry_path)

        assert_command_success(result)
        assert_output_contains(result, "Nothing to sync in")

    def test_json_output(self, runner: CliRunner, registry_path: Path, tmp_path: Path) -> None:
        save_registry(
            make_registry({"p": [(str(tmp_path / "missing"), str(tmp_path / "dst"))]}),
            registry_path,
        )

        result = invoke(runner, registry_path, "sync", "--json", "p")

        assert_command_failed(result)
        data = json.loads(result.stdout)
        assert data["success"] is False
        assert data["results"][0]["status"] == "failed"

    def test_parallel_jobs(self, runner: CliRunner, registry_path: Path, tmp_path: Path) -> None:
        files = {f"f{i}.txt": str(i) for i in range(5)}
        create_test_files(tmp_path / "src", files)
        save_registry(
            make_registry(
                {
                    "p": [
                        (str(tmp_path / "src" / name), str(tmp_path / "dst" / name))
                        for name in files
                    ]
                }
            ),
            registry_path,
        )

        result = invoke(runner, registry_path, "sync", "-j", "3", "p")

        assert_command_success(result)
        assert sorted(p.name for p in (tmp_path / "dst").iterdir()) == sorted(files)

    def test_unknown_name(self, runner: CliRunner, registry_path: Path) -> None:
        result = invoke(runner, registry_path, "sync", "ghost")

        assert_command_failed(result)
        assert_error_message(result, hint="pathsync new ghost")


class TestConfigCommands:
    """Tests for the config group."""

    def test_path(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["config", "path"])

        assert_command_success(result)
        assert result.output.strip() == str(get_global_config_path())

    def test_init_then_refuse_overwrite(self, runner: CliRunner) -> None:
        first = runner.invoke(cli, ["config", "init"])
        second = runner.invoke(cli, ["config", "init"])
        forced = runner.invoke(cli, ["config", "init", "--force"])

        assert_command_success(first)
        assert get_global_config_path().exists()
        assert_command_failed(second)
        assert_error_message(second, hint="--force")
        assert_command_success(forced)

    def test_show_reports_registry_location(
        self, runner: CliRunner, registry_path: Path
    ) -> None:
        result = invoke(runner, registry_path, "config", "show")

        assert_command_success(result)
        assert_output_contains(result, f"Registry: {registry_path}", "command = scp")

    def test_registry_from_environment(
        self, runner: CliRunner, registry_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PATHSYNC_REGISTRY", str(registry_path))

        runner.invoke(cli, ["new", "envy"])

        assert load_registry(registry_path).names == ["envy"]


class TestCompletions:
    """Tests for shell completion scripts."""

    @pytest.mark.parametrize("shell", ["zsh", "fish"])
    def test_script_generated(self, runner: CliRunner, shell: str) -> None:
        result = runner.invoke(cli, ["completions", shell])

        assert_command_success(result)
        assert_output_contains(result, "_PATHSYNC_COMPLETE")

    def test_unknown_shell(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["completions", "tcsh"])

        assert_command_failed(result, expected_code=2)


class TestDestinationStorage:
    """Tests for how add and rm store destinations."""

    def test_remote_descriptor_kept_as_typed(
        self, runner: CliRunner, registry_path: Path, workdir: Path
    ) -> None:
        invoke(runner, registry_path, "new", "p")

        invoke(runner, registry_path, "add", "p", "f", "host:./f")

        assert load_registry(registry_path).get("p").entries[0].remote == "host:./f"

    def test_rm_matches_relative_destination(
        self, runner: CliRunner, registry_path: Path, workdir: Path
    ) -> None:
        invoke(runner, registry_path, "new", "p")
        invoke(runner, registry_path, "add", "p", "f", "mirror/f")
        invoke(runner, registry_path, "add", "p", "f", "host:f")

        result = invoke(runner, registry_path, "rm", "p", "f", "./mirror/f")

        assert_command_success(result)
        remotes = [e.remote for e in load_registry(registry_path).get("p").entries]
        assert remotes == ["host:f"]
