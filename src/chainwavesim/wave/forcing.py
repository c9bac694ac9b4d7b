#!/usr/bin/env python3
"""
边界驱动信号

左边界的锚定弹簧连接到一个给定的时变位移 ``s(t)``，两种极化共用同一信号。
信号在每次运行开始时按时间网格一次性采样，递推第 ``n`` 步使用 ``s(t_n)``。

信号类型
--------
- ``sine``：``A sin(Ω t + φ)``（参考驱动，A=0.5，Ω=π/2）
- ``gaussian``：高斯脉冲 ``A exp(-(t-t_c)^2 / (2σ^2))``
- ``tone_burst``：汉宁窗包络的正弦脉冲串，持续 ``cycles`` 个周期后为零
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, Protocol, runtime_checkable

import numpy as np

from ..core.chain import TimeGrid
from ..core.errors import InvalidConfigurationError

ForcingKind = Literal["sine", "gaussian", "tone_burst"]


@runtime_checkable
class ForcingSignal(Protocol):
    """驱动信号协议：时间 → 标量位移。"""

    def __call__(self, t): ...

    def sample(self, grid: TimeGrid) -> np.ndarray: ...


class _SampledForcing:
    def sample(self, grid: TimeGrid) -> np.ndarray:
        """在全部网格节点上求值，返回 shape ``(N,)`` 的数组。"""
        values = np.asarray(self(grid.nodes), dtype=float)
        return np.broadcast_to(values, (grid.n_steps,)).copy()


@dataclass(frozen=True, slots=True)
class SinusoidalForcing(_SampledForcing):
    """正弦驱动 ``A sin(Ω t + φ)``。

    Parameters
    ----------
    amplitude : float
        振幅 ``A``。
    angular_frequency : float
        角频率 ``Ω``（rad/时间单位）。
    phase : float
        初相位 ``φ``（弧度）。
    """

    amplitude: float = 0.5
    angular_frequency: float = math.pi / 2
    phase: float = 0.0

    def __call__(self, t):
        return self.amplitude * np.sin(self.angular_frequency * t + self.phase)


@dataclass(frozen=True, slots=True)
class GaussianPulseForcing(_SampledForcing):
    """高斯脉冲，中心 ``t_center``、宽度 ``sigma``。"""

    amplitude: float
    t_center: float
    sigma: float

    def __post_init__(self) -> None:
        if not self.sigma > 0:
            raise InvalidConfigurationError(f"sigma 必须为正，得到 {self.sigma}")

    def __call__(self, t):
        z = (np.asarray(t, dtype=float) - self.t_center) / self.sigma
        return self.amplitude * np.exp(-0.5 * z * z)


@dataclass(frozen=True, slots=True)
class ToneBurstForcing(_SampledForcing):
    """汉宁窗正弦脉冲串。

    Notes
    -----
    在 ``0 <= t <= T``（``T = cycles / frequency``）内
    ``s(t) = A · 0.5(1 - cos(2πt/T)) · sin(2πft)``，其余时刻为零。
    """

    amplitude: float
    frequency: float
    cycles: int = 4

    def __post_init__(self) -> None:
        if not self.frequency > 0 or int(self.cycles) <= 0:
            raise InvalidConfigurationError("tone burst 需要正的 frequency 与 cycles")

    @property
    def duration(self) -> float:
        return int(self.cycles) / self.frequency

    def __call__(self, t):
        t = np.asarray(t, dtype=float)
        T = self.duration
        window = 0.5 * (1.0 - np.cos(2.0 * np.pi * t / T))
        burst = self.amplitude * window * np.sin(2.0 * np.pi * self.frequency * t)
        return np.where((t >= 0.0) & (t <= T), burst, 0.0)


def make_forcing(kind: str = "sine", **params) -> ForcingSignal:
    """
    按名称创建驱动信号。

    Parameters
    ----------
    kind : {"sine", "gaussian", "tone_burst"}
        信号类型（大小写不敏感）。
    **params
        对应数据类的构造参数。

    Returns
    -------
    ForcingSignal
        驱动信号实例。

    Raises
    ------
    InvalidConfigurationError
        未知类型或参数不匹配时抛出。
    """
    k = str(kind).strip().lower()
    table = {
        "sine": SinusoidalForcing,
        "sin": SinusoidalForcing,
        "gaussian": GaussianPulseForcing,
        "tone_burst": ToneBurstForcing,
        "toneburst": ToneBurstForcing,
    }
    cls = table.get(k)
    if cls is None:
        raise InvalidConfigurationError(f"未知驱动信号类型: {kind}")
    try:
        return cls(**params)
    except TypeError as e:
        raise InvalidConfigurationError(f"驱动信号 {kind} 参数错误: {e}") from e


@dataclass(frozen=True, slots=True)
class CallableForcing(_SampledForcing):
    """把任意标量函数 ``f(t)`` 包装为驱动信号（逐节点求值）。"""

    func: object

    def __call__(self, t):
        if np.ndim(t) == 0:
            return float(self.func(float(t)))
        return np.array([float(self.func(float(x))) for x in np.ravel(t)])


def as_forcing(obj) -> ForcingSignal:
    """返回可采样的驱动信号；普通可调用对象会被 :class:`CallableForcing` 包装。"""
    if isinstance(obj, type):
        raise InvalidConfigurationError(
            f"驱动信号必须是实例而非类型，得到 {obj.__name__}"
        )
    if isinstance(obj, ForcingSignal):
        return obj
    if callable(obj):
        return CallableForcing(obj)
    raise InvalidConfigurationError(f"驱动信号必须可调用，得到 {type(obj).__name__}")
