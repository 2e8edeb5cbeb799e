"""
Configuration Interfaces

领域层使用的配置 Protocol，具体实现为 bootstrap.config.Settings。
"""

from libs.config.interfaces import AIConfig, AuthConfig, CipherConfig

__all__ = [
    "AIConfig",
    "AuthConfig",
    "CipherConfig",
]
