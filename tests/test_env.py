import os

from geosphere.core.env import get_project_root, load_dotenv_if_present


def test_load_dotenv_from_explicit_env_file(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("GEOSPHERE_TEST_DOTENV_MARKER=loaded\n", encoding="utf-8")
    monkeypatch.setenv("GEOSPHERE_ENV_FILE", str(env_file))
    load_dotenv_if_present.cache_clear()
    try:
        assert load_dotenv_if_present() == env_file.resolve()
        assert os.environ["GEOSPHERE_TEST_DOTENV_MARKER"] == "loaded"
    finally:
        # load_dotenv writes os.environ directly, so monkeypatch cannot undo it.
        os.environ.pop("GEOSPHERE_TEST_DOTENV_MARKER", None)
        load_dotenv_if_present.cache_clear()


def test_missing_env_file_is_ignored(monkeypatch, tmp_path):
    monkeypatch.setenv("GEOSPHERE_ENV_FILE", str(tmp_path / "absent.env"))
    load_dotenv_if_present.cache_clear()
    try:
        assert load_dotenv_if_present() is None
    finally:
        load_dotenv_if_present.cache_clear()


def test_project_root_override(monkeypatch, tmp_path):
    monkeypatch.setenv("GEOSPHERE_PROJECT_ROOT", str(tmp_path))
    get_project_root.cache_clear()
    try:
        assert get_project_root() == tmp_path.resolve()
    finally:
        get_project_root.cache_clear()
