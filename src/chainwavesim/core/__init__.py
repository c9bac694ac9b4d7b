"""
核心模块 - 介质、时间网格、配置与异常
"""

__all__ = [
    "Medium",
    "TimeGrid",
    "ConfigManager",
    "InvalidConfigurationError",
    "two_region_masses",
    "two_region_stiffness",
    "reference_final_time",
]

_CHAIN_NAMES = {
    "Medium",
    "TimeGrid",
    "two_region_masses",
    "two_region_stiffness",
    "reference_final_time",
}


# 延迟导入
def __getattr__(name):
    if name in _CHAIN_NAMES:
        from . import chain

        return getattr(chain, name)
    elif name == "ConfigManager":
        from .config import ConfigManager
        return ConfigManager
    elif name == "InvalidConfigurationError":
        from .errors import InvalidConfigurationError
        return InvalidConfigurationError
    else:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
