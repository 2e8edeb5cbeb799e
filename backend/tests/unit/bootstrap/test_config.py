"""
配置加载单元测试
"""

from pathlib import Path

import pytest

from bootstrap.config import load_settings
from exceptions import ConfigurationError
from tests.conftest import TEST_DATABASE_URL, TEST_ENCRYPTION_KEY, TEST_JWT_SECRET

ENV_VARS = ("DATABASE_URL", "JWT_SECRET", "ENCRYPTION_KEY")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """隔离环境变量与 .env 文件"""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.mark.unit
class TestLoadSettings:
    """配置加载测试"""

    def test_valid_settings(self):
        settings = load_settings(
            database_url=TEST_DATABASE_URL,
            jwt_secret=TEST_JWT_SECRET,
            encryption_key=TEST_ENCRYPTION_KEY,
        )

        assert settings.encryption_key_bytes == TEST_ENCRYPTION_KEY.encode()
        assert settings.token_ttl_days == 7
        assert settings.port == 5001
        assert TEST_JWT_SECRET not in repr(settings)

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch):
        """测试: 从环境变量读取"""
        monkeypatch.setenv("DATABASE_URL", TEST_DATABASE_URL)
        monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
        monkeypatch.setenv("ENCRYPTION_KEY", TEST_ENCRYPTION_KEY)

        settings = load_settings()

        assert settings.jwt_secret.get_secret_value() == TEST_JWT_SECRET

    def test_missing_secrets(self):
        """测试: 缺少密钥时启动失败"""
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(database_url=TEST_DATABASE_URL)

        assert "jwt_secret" in exc_info.value.fields
        assert "encryption_key" in exc_info.value.fields

    def test_wrong_key_length_not_echoed(self, log_records):
        """测试: 密钥长度错误，错误与日志不回显密钥"""
        bad_key = "short-encryption-key-value"

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(
                database_url=TEST_DATABASE_URL,
                jwt_secret=TEST_JWT_SECRET,
                encryption_key=bad_key,
            )

        assert exc_info.value.fields == ["encryption_key"]
        assert bad_key not in str(exc_info.value)
        assert bad_key not in log_records.text

    def test_identical_keys_rejected(self):
        """测试: JWT 密钥与加密密钥不能相同"""
        with pytest.raises(ConfigurationError):
            load_settings(
                database_url=TEST_DATABASE_URL,
                jwt_secret=TEST_ENCRYPTION_KEY,
                encryption_key=TEST_ENCRYPTION_KEY,
            )

    def test_bcrypt_rounds_bounds(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(
                database_url=TEST_DATABASE_URL,
                jwt_secret=TEST_JWT_SECRET,
                encryption_key=TEST_ENCRYPTION_KEY,
                bcrypt_rounds=3,
            )

        assert exc_info.value.fields == ["bcrypt_rounds"]
