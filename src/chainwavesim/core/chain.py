#!/usr/bin/env python3
"""
链式介质与时间网格

本模块描述一维耦合振子链（离散弹性介质）的静态配置：

- :class:`Medium`：每个振子的质量与每个结点的弹簧刚度
- :class:`TimeGrid`：均匀离散的模拟时间区间
- 参考介质剖面：左半刚性、右半较软的两区刚度，以及两区质量

索引约定（0 起）
----------------
- ``masses[j]``：第 ``j`` 个振子的质量，共 ``P`` 个
- ``stiffness[j]``：连接振子 ``j-1`` 与振子 ``j`` 的弹簧，共 ``P+1`` 个；
  ``stiffness[0]`` 为锚定弹簧，把振子 0 耦合到受驱动的左边界
- ``stiffness[P]`` 仅为保持长度一致而保留，递推中不会读取

示例
----
>>> m = two_region_masses(6, 1.0, 2.0)
>>> k = two_region_stiffness(6)
>>> medium = Medium(masses=m, stiffness=k)
>>> medium.n_oscillators
6
>>> TimeGrid(0.0, 1.0, 5).dt
0.25
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from .errors import InvalidConfigurationError

MIN_OSCILLATORS = 3
MIN_TIME_STEPS = 3


def _as_count(value, name: str, minimum: int) -> int:
    """校验计数参数为不小于 ``minimum`` 的整数。"""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidConfigurationError(f"{name} 必须为整数，得到 {value!r}")
    value = int(value)
    if value < minimum:
        raise InvalidConfigurationError(f"{name} 必须 >= {minimum}，得到 {value}")
    return value


def _as_positive_array(values, name: str) -> np.ndarray:
    """转换为一维只读浮点数组，并要求所有元素为正有限值。"""
    try:
        arr = np.array(values, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidConfigurationError(f"{name} 无法转换为实数数组") from e
    if arr.ndim != 1:
        raise InvalidConfigurationError(f"{name} 必须为一维序列，得到形状 {arr.shape}")
    if not np.all(np.isfinite(arr)) or np.any(arr <= 0.0):
        raise InvalidConfigurationError(f"{name} 的所有元素必须为正的有限实数")
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Medium:
    """非均匀耦合振子链。

    Parameters
    ----------
    masses : Sequence[float]
        振子质量，长度 ``P``，均为正。
    stiffness : Sequence[float]
        结点刚度，长度 ``P+1``，均为正。

    Raises
    ------
    InvalidConfigurationError
        ``P < 3``、长度不匹配或存在非正值时抛出。
    """

    masses: np.ndarray
    stiffness: np.ndarray

    def __post_init__(self) -> None:
        masses = _as_positive_array(self.masses, "masses")
        stiffness = _as_positive_array(self.stiffness, "stiffness")
        if masses.size < MIN_OSCILLATORS:
            raise InvalidConfigurationError(
                f"振子数必须 >= {MIN_OSCILLATORS}，得到 {masses.size}"
            )
        if stiffness.size != masses.size + 1:
            raise InvalidConfigurationError(
                f"stiffness 长度应为 P+1={masses.size + 1}，得到 {stiffness.size}"
            )
        object.__setattr__(self, "masses", masses)
        object.__setattr__(self, "stiffness", stiffness)

    @classmethod
    def from_arrays(
        cls, n_oscillators: int, masses: Sequence[float], stiffness: Sequence[float]
    ) -> Medium:
        """按显式振子数构建，并核对数组长度与之一致。"""
        P = _as_count(n_oscillators, "n_oscillators", MIN_OSCILLATORS)
        masses = np.atleast_1d(np.asarray(masses, dtype=object))
        stiffness = np.atleast_1d(np.asarray(stiffness, dtype=object))
        if len(masses) != P:
            raise InvalidConfigurationError(
                f"masses 长度应为 P={P}，得到 {len(masses)}"
            )
        if len(stiffness) != P + 1:
            raise InvalidConfigurationError(
                f"stiffness 长度应为 P+1={P + 1}，得到 {len(stiffness)}"
            )
        return cls(masses=masses, stiffness=stiffness)

    @property
    def n_oscillators(self) -> int:
        """振子数 ``P``。"""
        return int(self.masses.size)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Medium):
            return NotImplemented
        return np.array_equal(self.masses, other.masses) and np.array_equal(
            self.stiffness, other.stiffness
        )

    def __hash__(self) -> int:
        return hash((self.masses.tobytes(), self.stiffness.tobytes()))


@dataclass(frozen=True)
class TimeGrid:
    """均匀时间网格 ``t_i = t0 + i·dt``，``dt = (t1 - t0)/(N - 1)``。

    Parameters
    ----------
    t0, t1 : float
        起止时间，要求 ``t0 < t1``。
    n_steps : int
        节点数 ``N``，要求 ``N >= 3``。
    """

    t0: float
    t1: float
    n_steps: int

    def __post_init__(self) -> None:
        n = _as_count(self.n_steps, "n_steps", MIN_TIME_STEPS)
        try:
            t0 = float(self.t0)
            t1 = float(self.t1)
        except (TypeError, ValueError) as e:
            raise InvalidConfigurationError("t0/t1 必须为实数") from e
        if not (math.isfinite(t0) and math.isfinite(t1)):
            raise InvalidConfigurationError("t0/t1 必须为有限实数")
        if t1 <= t0:
            raise InvalidConfigurationError(
                f"要求 t1 > t0 以保证 dt > 0，得到 t0={t0}, t1={t1}"
            )
        object.__setattr__(self, "t0", t0)
        object.__setattr__(self, "t1", t1)
        object.__setattr__(self, "n_steps", n)

    @property
    def dt(self) -> float:
        """时间步长。"""
        return (self.t1 - self.t0) / (self.n_steps - 1)

    @property
    def nodes(self) -> np.ndarray:
        """全部时间节点，shape ``(N,)``。"""
        return np.linspace(self.t0, self.t1, self.n_steps)

    def nearest_index(self, t: float) -> int:
        """返回距离 ``t`` 最近的节点索引（并列时取较小者）。"""
        return int(np.argmin(np.abs(self.nodes - float(t))))


# ---------------------------- 参考介质剖面 ----------------------------
def two_region_stiffness(
    n_oscillators: int, left: float = 100.0, right: float = 75.0
) -> np.ndarray:
    """
    两区刚度剖面：前 ``P // 2`` 个结点为 ``left``，其余为 ``right``。

    Parameters
    ----------
    n_oscillators : int
        振子数 ``P``。
    left, right : float
        左半（较刚）与右半（较软）的刚度。

    Returns
    -------
    ndarray, shape (P+1,)
        结点刚度数组。
    """
    P = _as_count(n_oscillators, "n_oscillators", MIN_OSCILLATORS)
    k = np.full(P + 1, float(right))
    k[: P // 2] = float(left)
    return k


def two_region_masses(n_oscillators: int, left: float, right: float) -> np.ndarray:
    """两区质量：前 ``P // 2`` 个振子为 ``left``，其余为 ``right``。"""
    P = _as_count(n_oscillators, "n_oscillators", MIN_OSCILLATORS)
    m = np.full(P, float(right))
    m[: P // 2] = float(left)
    return m


def reference_final_time(
    masses: Sequence[float], stiffness: Sequence[float], periods: float = 100.0
) -> float:
    """
    参考模拟时长 ``2π·periods·sqrt(mean(m)/mean(k))``。

    仅为便捷的时长选择（默认相当于平均特征周期的 100 倍），
    并非稳定性判据；步长是否合适由调用方负责。
    """
    m_mean = float(np.mean(np.asarray(masses, dtype=float)))
    k_mean = float(np.mean(np.asarray(stiffness, dtype=float)))
    if m_mean <= 0 or k_mean <= 0:
        raise InvalidConfigurationError("平均质量与平均刚度必须为正")
    return 2.0 * np.pi * float(periods) * float(np.sqrt(m_mean / k_mean))
