"""配置加载相关的单元测试。"""

from pathlib import Path

from backoffice.core.config import BASE_DIR, Settings, _profile_env_name


def test_profile_env_name():
    assert _profile_env_name("staging") == ".env.staging"
    assert _profile_env_name(".env.local") == ".env.local"


def test_base_dir_is_project_root():
    assert (BASE_DIR / "pyproject.toml").is_file()
    assert (BASE_DIR / "backoffice").is_dir()


def test_relative_log_dir_resolves_against_project_root(tmp_path: Path):
    assert Settings(LOG_DIR="log").log_directory == BASE_DIR / "log"
    assert Settings(LOG_DIR=str(tmp_path)).log_directory == tmp_path
