import os
from pathlib import Path

from birthbuild.config import settings


def test_project_dotenv_overrides_environment(tmp_path, monkeypatch) -> None:
    project_dir = tmp_path / "project"
    project_env = project_dir / ".env"

    project_dir.mkdir()
    project_env.write_text("NETLIFY_API_TOKEN=project\n", encoding="utf-8")

    monkeypatch.chdir(project_dir)
    monkeypatch.setenv("NETLIFY_API_TOKEN", "env-value")

    settings._load_dotenv()

    assert os.getenv("NETLIFY_API_TOKEN") == "project"


def test_settings_read_birthbuild_environment(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("BIRTHBUILD_HOME", str(tmp_path))
    monkeypatch.setenv("BIRTHBUILD_BASE_DOMAIN", "doulas.test")
    monkeypatch.setenv("BIRTHBUILD_DEPLOY_TIMEOUT", "5")
    monkeypatch.delenv("BIRTHBUILD_STORAGE_URL", raising=False)

    loaded = settings.get_settings()

    assert loaded.data_root == tmp_path
    assert loaded.base_domain == "doulas.test"
    assert loaded.deploy_timeout == 5.0
    assert loaded.storage_url is None


def test_settings_defaults(monkeypatch) -> None:
    for name in ("BIRTHBUILD_HOME", "BIRTHBUILD_BASE_DOMAIN", "BIRTHBUILD_DEPLOY_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)

    loaded = settings.get_settings()

    assert loaded.data_root == settings.DEFAULT_DATA_ROOT
    assert loaded.base_domain == "birthbuild.com"
