"""
工具模块
"""

__all__ = ["setup_matplotlib", "setup_logging"]


# 延迟导入，避免未绘图时加载 matplotlib
def __getattr__(name):
    if name == "setup_matplotlib":
        from .plot_config import setup_matplotlib
        return setup_matplotlib
    elif name == "setup_logging":
        from .logging_config import setup_logging
        return setup_logging
    else:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
