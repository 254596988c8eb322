import json
from pathlib import Path

from trellis.needle import L, Needle


def test_needle_multi_root_loading_and_override(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("TRELLIS_LANG", raising=False)

    # Root 1: packaged assets
    pkg_asset_root = tmp_path / "pkg" / "assets"
    (pkg_asset_root / "needle" / "en" / "cli").mkdir(parents=True)
    (pkg_asset_root / "needle" / "en" / "cli" / "main.json").write_text(
        json.dumps(
            {"cli.default": "I am a default", "cli.override_me": "Default Value"}
        )
    )

    # Root 2: a project with hand-written YAML overrides
    project_root = tmp_path / "my_project"
    user_override_dir = project_root / ".trellis" / "needle" / "en"
    user_override_dir.mkdir(parents=True)
    (user_override_dir / "overrides.yaml").write_text(
        "cli.override_me: User Override!\ncli.user_only: I am from the user\n"
    )

    rt = Needle(roots=[project_root])
    rt.add_root(pkg_asset_root)  # prepends, so the project still wins

    assert rt.get(L.cli.default) == "I am a default"
    assert rt.get(L.cli.user_only) == "I am from the user"
    assert rt.get(L.cli.override_me) == "User Override!"
    assert rt.get(L.unknown.key) == "unknown.key"


def test_needle_falls_back_to_default_language(tmp_path: Path):
    (tmp_path / "needle" / "en").mkdir(parents=True)
    (tmp_path / "needle" / "en" / "a.json").write_text(json.dumps({"k": "english"}))
    (tmp_path / "needle" / "fr").mkdir(parents=True)
    (tmp_path / "needle" / "fr" / "a.json").write_text(json.dumps({"other": "autre"}))

    rt = Needle(roots=[tmp_path])

    assert rt.get("other", lang="fr") == "autre"
    assert rt.get("k", lang="fr") == "english"


def test_malformed_catalog_files_are_ignored(tmp_path: Path):
    catalog = tmp_path / "needle" / "en"
    catalog.mkdir(parents=True)
    (catalog / "bad.json").write_text("{not json")
    (catalog / "good.json").write_text(json.dumps({"ok": "fine"}))

    rt = Needle(roots=[tmp_path])

    assert rt.get("ok") == "fine"
