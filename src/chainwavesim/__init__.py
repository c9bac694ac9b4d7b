"""
ChainWaveSim - 振子链弹性波模拟器

对由 P 个耦合振子组成的一维非均匀介质，用二阶中心差分显式推进波动方程，
给出左边界驱动下纵波与横波的全时程位移。
"""

__version__ = "1.0.0"
__author__ = "Gilbert"

from . import core, wave
from .core.errors import InvalidConfigurationError
from .wave.integrator import simulate

__all__ = ["core", "wave", "simulate", "InvalidConfigurationError"]
