#!/usr/bin/env python3
"""
链式振子波动方程显式积分

本模块以二阶中心差分（蛙跳式）递推求解一维非均匀振子链中的波传播，
同时给出纵波与横波两种极化的全时程位移。

递推格式（0 起索引）
--------------------
对 ``n = 1 .. N-2`` 与内部振子 ``j = 1 .. P-2``::

    η[n+1, j] = 2 η[n, j] - η[n-1, j]
              + dt²/m[j] · ( k[j]   (η[n, j-1] - η[n, j])
                           + k[j+1] (η[n, j+1] - η[n, j]) )

边界条件
--------
- 左端（``j = 0``）：同一形式，左邻位移替换为驱动信号 ``s(t_n)``，
  通过锚定弹簧 ``k[0]`` 耦合
- 右端（``j = P-1``）：刚性固定，``η[n+1, P-1] = 0``
- 初始：第 0、1 行全零（静止且初速度为零）

Notes
-----
- 不做稳定性约束：步长过大时结果发散，以 ``inf``/``nan`` 形式返回。
- 两种极化满足相同方程与相同驱动，因而逐元素相等；二者相互独立，
  可在线程池中并行计算。
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Literal

import numpy as np

from ..core.chain import Medium, TimeGrid
from ..core.errors import InvalidConfigurationError
from .forcing import ForcingSignal, SinusoidalForcing, as_forcing

Polarization = Literal["longitudinal", "transverse"]
POLARIZATIONS: tuple[Polarization, ...] = ("longitudinal", "transverse")

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ChainWaveResult:
    """一次模拟的完整输出（只读）。

    Attributes
    ----------
    time : ndarray, shape (N,)
        时间网格节点。
    longitudinal, transverse : ndarray, shape (N, P)
        两种极化的位移时程，按 ``[时间步, 振子]`` 索引。
    medium : Medium
        所用介质。
    grid : TimeGrid
        所用时间网格。
    """

    time: np.ndarray
    longitudinal: np.ndarray
    transverse: np.ndarray
    medium: Medium
    grid: TimeGrid

    @property
    def shape(self) -> tuple[int, int]:
        """位移场形状 ``(N, P)``。"""
        return self.longitudinal.shape

    def field(self, polarization: str) -> np.ndarray:
        """按极化名称取位移场（``"longitudinal"``/``"L"`` 或 ``"transverse"``/``"T"``）。"""
        key = str(polarization).strip().lower()
        if key in ("longitudinal", "l"):
            return self.longitudinal
        if key in ("transverse", "t"):
            return self.transverse
        raise ValueError(f"未知极化: {polarization}")

    def as_tuple(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """返回 ``(纵波, 横波, 时间)``。"""
        return self.longitudinal, self.transverse, self.time


class WaveIntegrator:
    """
    中心差分显式积分器。

    Parameters
    ----------
    medium : Medium
        振子链介质（质量与结点刚度）。
    grid : TimeGrid
        均匀时间网格。
    forcing : ForcingSignal, optional
        左边界驱动；默认 ``0.5 sin(π t / 2)``。
    max_workers : int
        大于 1 时两种极化在线程池中并行计算，结果与串行逐位一致。
    log_every : int | None
        进度日志间隔（步）；默认约每 10% 记录一次。

    Raises
    ------
    InvalidConfigurationError
        输入类型不符或 ``max_workers < 1`` 时，在任何推进之前抛出。

    Examples
    --------
    >>> from chainwavesim.core.chain import Medium, TimeGrid
    >>> medium = Medium(masses=[1.0] * 5, stiffness=[10.0] * 6)
    >>> res = WaveIntegrator(medium, TimeGrid(0.0, 1.0, 5)).run()
    >>> res.shape
    (5, 5)
    """

    def __init__(
        self,
        medium: Medium,
        grid: TimeGrid,
        forcing: ForcingSignal | None = None,
        *,
        max_workers: int = 1,
        log_every: int | None = None,
    ) -> None:
        if not isinstance(medium, Medium):
            raise InvalidConfigurationError("medium 必须为 Medium 实例")
        if not isinstance(grid, TimeGrid):
            raise InvalidConfigurationError("grid 必须为 TimeGrid 实例")
        forcing = SinusoidalForcing() if forcing is None else as_forcing(forcing)
        try:
            max_workers = int(max_workers)
        except (TypeError, ValueError) as e:
            raise InvalidConfigurationError(
                f"max_workers 必须为整数，得到 {max_workers!r}"
            ) from e
        if max_workers < 1:
            raise InvalidConfigurationError(f"max_workers 必须 >= 1，得到 {max_workers}")

        self.medium = medium
        self.grid = grid
        self.forcing = forcing
        self.max_workers = int(max_workers)
        self.log_every = (
            int(log_every) if log_every else max(1, (grid.n_steps - 2) // 10)
        )

        self._coef = grid.dt**2 / medium.masses  # dt²/m[j]
        self._drive = np.asarray(forcing.sample(grid), dtype=float)
        if self._drive.shape != (grid.n_steps,):
            raise InvalidConfigurationError(
                f"驱动信号采样形状应为 ({grid.n_steps},)，得到 {self._drive.shape}"
            )

    # ---------------------------- 公共接口 ----------------------------
    def run(self) -> ChainWaveResult:
        """计算两种极化的完整位移时程。"""
        N, P = self.grid.n_steps, self.medium.n_oscillators
        logger.info(
            f"开始积分: P={P}, N={N}, dt={self.grid.dt:.6g}, 并行线程={self.max_workers}"
        )
        t_start = time.time()

        fields: dict[str, np.ndarray] = {}
        if self.max_workers > 1:
            with ThreadPoolExecutor(
                max_workers=min(self.max_workers, len(POLARIZATIONS))
            ) as executor:
                future_to_pol = {
                    executor.submit(self.integrate_field, pol): pol
                    for pol in POLARIZATIONS
                }
                for future in as_completed(future_to_pol):
                    pol = future_to_pol[future]
                    try:
                        fields[pol] = future.result()
                    except Exception as e:
                        logger.error(f"{pol} 场积分失败: {e}")
                        raise RuntimeError(f"{pol} field integration failed") from e
        else:
            for pol in POLARIZATIONS:
                fields[pol] = self.integrate_field(pol)

        for arr in fields.values():
            arr.setflags(write=False)
        time_nodes = self.grid.nodes
        time_nodes.setflags(write=False)

        logger.info(f"积分完成，用时 {time.time() - t_start:.2f}s")
        return ChainWaveResult(
            time=time_nodes,
            longitudinal=fields["longitudinal"],
            transverse=fields["transverse"],
            medium=self.medium,
            grid=self.grid,
        )

    def integrate_field(self, polarization: str = "longitudinal") -> np.ndarray:
        """
        推进单个极化场。

        Parameters
        ----------
        polarization : str
            仅用于日志标注；两种极化的方程完全相同。

        Returns
        -------
        ndarray, shape (N, P)
            位移时程，前两行为零，最后一列恒为零。
        """
        N, P = self.grid.n_steps, self.medium.n_oscillators
        field = np.zeros((N, P), dtype=float)
        # 发散按浮点值自然传播，不触发 FloatingPointError
        with np.errstate(over="ignore", invalid="ignore"):
            for n in range(1, N - 1):
                self._advance(field, n, self._drive[n])
                if n % self.log_every == 0:
                    logger.debug(f"{polarization}: 步 {n}/{N - 2}")
        return field

    # ---------------------------- 内部实现 ----------------------------
    def _advance(self, field: np.ndarray, n: int, s_n: float) -> None:
        """由第 ``n-1``、``n`` 行写出第 ``n+1`` 行（原地）。"""
        k = self.medium.stiffness
        c = self._coef
        P = field.shape[1]
        u = field[n]
        u_prev = field[n - 1]
        inner = slice(1, P - 1)

        force = k[1 : P - 1] * (u[: P - 2] - u[inner]) + k[2:P] * (u[2:] - u[inner])
        field[n + 1, inner] = 2.0 * u[inner] - u_prev[inner] + c[inner] * force

        # 左端：锚定弹簧 k[0] 连接驱动位移
        field[n + 1, 0] = (
            2.0 * u[0]
            - u_prev[0]
            + c[0] * (k[0] * (s_n - u[0]) + k[1] * (u[1] - u[0]))
        )
        # 右端：刚性壁
        field[n + 1, P - 1] = 0.0


def simulate(
    P: int,
    mass,
    stiffness,
    t0: float,
    t1: float,
    N: int,
    A: float,
    omega: float,
    *,
    max_workers: int = 1,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    正弦驱动下的链式波传播（便捷入口）。

    Parameters
    ----------
    P : int
        振子数，``>= 3``。
    mass : Sequence[float]
        长度 ``P`` 的正质量。
    stiffness : Sequence[float]
        长度 ``P+1`` 的正刚度，``stiffness[0]`` 为锚定弹簧。
    t0, t1 : float
        起止时间。
    N : int
        时间节点数，``>= 3``。
    A, omega : float
        驱动 ``A sin(omega t)`` 的振幅与角频率。
    max_workers : int
        并行线程数（两种极化各一个）。

    Returns
    -------
    (eta_longitudinal, eta_transverse, time)
        shape 分别为 ``(N, P)``、``(N, P)``、``(N,)``。

    Raises
    ------
    InvalidConfigurationError
        任一前置条件不满足时抛出，且不产生任何输出。
    """
    medium = Medium.from_arrays(P, mass, stiffness)
    grid = TimeGrid(t0, t1, N)
    forcing = SinusoidalForcing(amplitude=float(A), angular_frequency=float(omega))
    integrator = WaveIntegrator(medium, grid, forcing, max_workers=max_workers)
    return integrator.run().as_tuple()
