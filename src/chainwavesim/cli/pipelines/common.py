"""CLI 场景通用工具

从配置构建介质、时间网格与驱动信号，供各个场景流水线复用
（chain_wave/chain_modes）。

Notes
-----
这些函数面向 CLI 级别的拼装逻辑，核心库不依赖配置格式。
"""

from __future__ import annotations

import math

import numpy as np

from ...core.chain import (
    Medium,
    TimeGrid,
    reference_final_time,
    two_region_masses,
    two_region_stiffness,
)
from ...core.errors import InvalidConfigurationError
from ...wave.forcing import ForcingSignal, make_forcing


def _profile(value, n: int, name: str):
    """标量展开为均匀剖面，列表原样使用。"""
    if isinstance(value, int | float) and not isinstance(value, bool):
        return np.full(n, float(value))
    if isinstance(value, list | tuple):
        return list(value)
    raise InvalidConfigurationError(f"无法解析 chain.{name}: {value!r}")


def build_medium(cfg) -> Medium:
    """
    按 ``chain.*`` 配置构建介质。

    Parameters
    ----------
    cfg : ConfigManager
        配置对象（仅需 ``get`` 点路径访问）。

    Returns
    -------
    Medium
        振子链介质。
    """
    P = cfg.get("chain.n_oscillators", 40)
    if isinstance(P, bool) or not isinstance(P, int):
        raise InvalidConfigurationError(f"chain.n_oscillators 必须为整数，得到 {P!r}")
    m_cfg = cfg.get("chain.masses", None)
    k_cfg = cfg.get("chain.stiffness", None)
    if isinstance(m_cfg, dict) or m_cfg is None:
        m_cfg = m_cfg or {}
        masses = two_region_masses(
            P, float(m_cfg.get("left", 1.0)), float(m_cfg.get("right", 2.0))
        )
    else:
        masses = _profile(m_cfg, P, "masses")
    if isinstance(k_cfg, dict) or k_cfg is None:
        k_cfg = k_cfg or {}
        stiffness = two_region_stiffness(
            P, float(k_cfg.get("left", 100.0)), float(k_cfg.get("right", 75.0))
        )
    else:
        stiffness = _profile(k_cfg, P + 1, "stiffness")
    return Medium.from_arrays(P, masses, stiffness)


def build_time_grid(cfg, medium: Medium) -> TimeGrid:
    """按 ``time.*`` 构建时间网格；``time.t1 = "auto"`` 时取参考时长。"""
    t0 = float(cfg.get("time.t0", 0.0))
    t1 = cfg.get("time.t1", "auto")
    if isinstance(t1, str) and t1.strip().lower() == "auto":
        periods = float(cfg.get("time.periods", 100.0))
        t1 = t0 + reference_final_time(medium.masses, medium.stiffness, periods)
    try:
        t1 = float(t1)
    except (TypeError, ValueError) as e:
        raise InvalidConfigurationError(
            f"time.t1 必须为实数或 \"auto\"，得到 {t1!r}"
        ) from e
    return TimeGrid(t0, t1, cfg.get("time.n_steps", 20000))


def build_forcing(cfg) -> ForcingSignal:
    """按 ``forcing.*`` 创建驱动信号（默认 ``0.5 sin(π t/2)``）。"""
    kind = str(cfg.get("forcing.type", "sine")).strip().lower()
    amp = float(cfg.get("forcing.amplitude", 0.5))
    if kind in ("sine", "sin"):
        return make_forcing(
            kind,
            amplitude=amp,
            angular_frequency=float(
                cfg.get("forcing.angular_frequency", math.pi / 2)
            ),
            phase=float(cfg.get("forcing.phase", 0.0)),
        )
    if kind == "gaussian":
        return make_forcing(
            kind,
            amplitude=amp,
            t_center=float(cfg.get("forcing.t_center", 2.0)),
            sigma=float(cfg.get("forcing.sigma", 0.5)),
        )
    if kind in ("tone_burst", "toneburst"):
        return make_forcing(
            kind,
            amplitude=amp,
            frequency=float(cfg.get("forcing.frequency", 0.25)),
            cycles=int(cfg.get("forcing.cycles", 4)),
        )
    raise InvalidConfigurationError(f"未知驱动信号类型: {kind}")
