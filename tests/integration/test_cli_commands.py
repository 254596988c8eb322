from typer.testing import CliRunner

from trellis.cli.main import app
from trellis.test_utils import snapshot_tree

runner = CliRunner()


def test_build_command_creates_structure(workspace_factory):
    root = workspace_factory.with_structure("app\n\tsrc\n\t\tmain.py\n\tREADME.md\n").build()

    result = runner.invoke(app, ["build", "structure.txt", "out"])

    assert result.exit_code == 0, result.output
    assert snapshot_tree(root / "out") == {
        "app": None,
        "app/README.md": True,
        "app/src": None,
        "app/src/main.py": True,
    }


def test_build_reads_structure_from_stdin(workspace_factory):
    root = workspace_factory.build()

    result = runner.invoke(app, ["build", "-", "out"], input="docs\n\tindex.md\n")

    assert result.exit_code == 0, result.output
    assert (root / "out" / "docs" / "index.md").is_file()


def test_verbose_build_reports_progress(workspace_factory):
    workspace_factory.with_structure("notes.txt\n").build()

    result = runner.invoke(app, ["--verbose", "build", "structure.txt", "out"])

    assert result.exit_code == 0, result.output
    assert "Created" in result.output
    assert "Structure created successfully" in result.output


def test_warnings_only_fail_in_strict_mode(workspace_factory):
    workspace_factory.with_structure("[missing.txt] > copy.txt\n").build()

    lenient = runner.invoke(app, ["build", "structure.txt", "out"])
    strict = runner.invoke(app, ["build", "structure.txt", "out2", "--strict"])

    assert lenient.exit_code == 0
    assert "Source not found" in lenient.output
    assert strict.exit_code == 1


def test_substitution_options(workspace_factory):
    root = workspace_factory.with_structure("old-app\n\told-main.py\n").build()

    result = runner.invoke(
        app,
        [
            "build",
            "structure.txt",
            "out",
            "--search",
            "old",
            "--replace",
            "new",
            "--replace-folders",
        ],
    )

    assert result.exit_code == 0, result.output
    assert (root / "out" / "new-app" / "old-main.py").is_file()


def test_project_config_supplies_defaults(workspace_factory):
    root = (
        workspace_factory.with_config(
            {"search": "acme", "replace": "globex", "replace_file_names": True}
        )
        .with_structure("acme.txt\n")
        .build()
    )

    result = runner.invoke(app, ["build", "structure.txt", "out"])
    assert result.exit_code == 0, result.output
    assert (root / "out" / "globex.txt").is_file()

    # Command-line flags override the file.
    result = runner.invoke(app, ["build", "structure.txt", "out2", "--no-replace-files"])
    assert (root / "out2" / "acme.txt").is_file()


def test_invalid_config_exits_with_error(workspace_factory):
    workspace_factory.with_config({"replace_file_names": "yes"}).with_structure("a.txt").build()

    result = runner.invoke(app, ["build", "structure.txt", "out"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_missing_structure_file_exits_with_error(workspace_factory):
    workspace_factory.build()

    result = runner.invoke(app, ["build", "nope.txt", "out"])

    assert result.exit_code == 1
    assert "Cannot read structure" in result.output


def test_root_that_is_a_file_exits_with_error(workspace_factory):
    workspace_factory.with_file("out", "occupied").with_structure("a.txt").build()

    result = runner.invoke(app, ["build", "structure.txt", "out"])

    assert result.exit_code == 1


def test_plan_lists_steps_without_writing(workspace_factory):
    root = workspace_factory.with_structure("app\n\tmain.py\n").build()

    result = runner.invoke(app, ["plan", "structure.txt", "out"])

    assert result.exit_code == 0, result.output
    assert "[DIR]" in result.output
    assert "[FILE]" in result.output
    assert not (root / "out").exists()
