#!/usr/bin/env python3
"""
matplotlib 统一配置

Usage:
    from chainwavesim.utils.plot_config import plt  # 已切换到 Agg 后端并配置字体

图中文字为中文时按平台依次尝试常见 CJK 字体，均不可用时
matplotlib 会自动回退到 DejaVu Sans。
"""

import logging
import platform

import matplotlib

# 使用Agg后端，避免GUI问题
matplotlib.use("Agg")
import matplotlib.pyplot as plt

logger = logging.getLogger(__name__)


def get_system_fonts() -> list[str]:
    """按平台返回候选字体列表（优先 CJK 字体）。"""
    system = platform.system()
    if system == "Darwin":
        fonts = ["PingFang SC", "Arial Unicode MS", "STHeiti", "Hiragino Sans GB"]
    elif system == "Windows":
        fonts = ["Microsoft YaHei", "SimHei", "SimSun"]
    else:
        fonts = ["Noto Sans CJK SC", "WenQuanYi Micro Hei", "Droid Sans Fallback"]
    return fonts + ["DejaVu Sans", "Liberation Sans"]


def setup_matplotlib(force_english: bool = False) -> None:
    """
    设置 matplotlib 字体与输出参数

    Parameters
    ----------
    force_english : bool
        是否只使用英文字体（中文字体缺失时可避免告警）
    """
    if force_english:
        plt.rcParams["font.family"] = ["DejaVu Sans", "Liberation Sans"]
    else:
        plt.rcParams["font.sans-serif"] = get_system_fonts()
        plt.rcParams["font.family"] = "sans-serif"
    plt.rcParams["axes.unicode_minus"] = False  # 正确显示负号
    plt.rcParams["savefig.bbox"] = "tight"
    plt.rcParams["savefig.pad_inches"] = 0.1
    logger.debug(f"matplotlib 字体: {plt.rcParams['font.family']}")


# 自动设置字体
setup_matplotlib()

__all__ = ["setup_matplotlib", "get_system_fonts", "plt"]
