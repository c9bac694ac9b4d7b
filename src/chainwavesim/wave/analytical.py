#!/usr/bin/env python3
"""
振子链简正模解析模块

对固定右端、锚定左端（自由振动时驱动位移取零）的非均匀振子链，
求解广义本征问题 ``K v = ω² M v``，给出简正频率、振型以及显式中心
差分格式的临界步长 ``dt_c = 2 / ω_max``。

这些量只用于参数选择时的诊断，积分器本身不会据此截断或拒绝步长。

示例
----
>>> from chainwavesim.core.chain import Medium
>>> ana = ChainModeAnalyzer(Medium(masses=[1.0] * 5, stiffness=[10.0] * 6))
>>> round(ana.critical_time_step(), 4)
0.3325
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy import linalg

from ..core.chain import Medium


@dataclass(slots=True)
class ChainModeAnalyzer:
    """
    基于质量与刚度矩阵的简正模计算器。

    Parameters
    ----------
    medium : Medium
        振子链介质。

    Notes
    -----
    - 动力学自由度为振子 ``0 .. P-2``；振子 ``P-1`` 被刚性固定。
    - 刚度矩阵为三对角：``K[j,j] = k[j] + k[j+1]``，
      ``K[j,j+1] = K[j+1,j] = -k[j+1]``，与积分器的递推一致。
    """

    medium: Medium

    # ---------------------------- 公共接口 ----------------------------
    @property
    def n_dof(self) -> int:
        """动力学自由度数 ``P - 1``。"""
        return self.medium.n_oscillators - 1

    def stiffness_matrix(self) -> np.ndarray:
        """刚度矩阵 ``K``，shape ``(P-1, P-1)``。"""
        k = self.medium.stiffness
        n = self.n_dof
        diag = k[:n] + k[1 : n + 1]
        off = -k[1:n]
        return np.diag(diag) + np.diag(off, 1) + np.diag(off, -1)

    def mass_matrix(self) -> np.ndarray:
        """质量矩阵 ``M = diag(m[0..P-2])``。"""
        return np.diag(self.medium.masses[: self.n_dof])

    def normal_modes(self) -> tuple[np.ndarray, np.ndarray]:
        """
        求解简正模。

        Returns
        -------
        omegas : ndarray, shape (P-1,)
            升序排列的角频率。
        shapes : ndarray, shape (P-1, P-1)
            按列排列、满足 ``vᵀ M v = 1`` 的振型。
        """
        vals, vecs = linalg.eigh(self.stiffness_matrix(), self.mass_matrix())
        omegas = np.sqrt(np.clip(vals, 0.0, None))
        return omegas, vecs

    def scaled_tridiagonal(self) -> tuple[np.ndarray, np.ndarray]:
        """``M^-1/2 K M^-1/2`` 的主对角与次对角（M 为对角阵，结果仍为三对角）。"""
        k = self.medium.stiffness
        m = self.medium.masses[: self.n_dof]
        n = self.n_dof
        d = (k[:n] + k[1 : n + 1]) / m
        e = -k[1:n] / np.sqrt(m[:-1] * m[1:])
        return d, e

    def max_angular_frequency(self) -> float:
        """最高简正角频率 ``ω_max``（只求最大本征值，O(P) 级开销）。"""
        d, e = self.scaled_tridiagonal()
        n = self.n_dof
        vals = linalg.eigh_tridiagonal(
            d, e, eigvals_only=True, select="i", select_range=(n - 1, n - 1)
        )
        return float(np.sqrt(max(vals[-1], 0.0)))

    def critical_time_step(self) -> float:
        """显式中心差分的临界步长 ``2 / ω_max``。"""
        return 2.0 / self.max_angular_frequency()

    def stability_ratio(self, dt: float) -> float:
        """``dt / dt_c``；大于 1 时积分将发散。"""
        return float(dt) / self.critical_time_step()

    def generate_report(self, dt: float | None = None) -> dict:
        """
        生成简正模报告。

        Parameters
        ----------
        dt : float | None
            若给出，附带该步长的稳定性比值。

        Returns
        -------
        dict
            ``omegas``、``periods``、``omega_max``、``critical_dt``，
            以及可选的 ``dt``、``stability_ratio``、``stable``。
        """
        omegas, _ = self.normal_modes()
        with np.errstate(divide="ignore"):
            periods = np.where(omegas > 0, 2.0 * np.pi / omegas, np.inf)
        dt_c = 2.0 / float(omegas[-1])
        report: dict = {
            "n_oscillators": self.medium.n_oscillators,
            "omegas": omegas.tolist(),
            "periods": periods.tolist(),
            "omega_max": float(omegas[-1]),
            "critical_dt": dt_c,
        }
        if dt is not None:
            ratio = float(dt) / dt_c
            report.update(
                {"dt": float(dt), "stability_ratio": ratio, "stable": ratio < 1.0}
            )
        return report


# ---------------------------- 均匀链闭式解 ----------------------------
def homogeneous_mode_frequencies(n_dof: int, k: float, m: float) -> np.ndarray:
    """
    两端固定均匀链的简正角频率。

    ``ω_n = 2 sqrt(k/m) sin(nπ / (2(n_dof+1)))``，``n = 1 .. n_dof``。
    """
    n = np.arange(1, int(n_dof) + 1)
    return 2.0 * np.sqrt(k / m) * np.sin(n * np.pi / (2 * (int(n_dof) + 1)))


def homogeneous_dispersion(q, k: float, m: float, spacing: float = 1.0) -> np.ndarray:
    """均匀链色散关系 ``ω(q) = 2 sqrt(k/m) |sin(q a / 2)|``。"""
    q = np.asarray(q, dtype=float)
    return 2.0 * np.sqrt(k / m) * np.abs(np.sin(0.5 * q * spacing))
