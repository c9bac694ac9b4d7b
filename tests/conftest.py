"""
pytest配置文件 - 提供全局fixtures和测试配置
"""

import math

import numpy as np
import pytest

from chainwavesim.core.chain import Medium, TimeGrid
from chainwavesim.wave.forcing import SinusoidalForcing


@pytest.fixture
def homogeneous_medium():
    """均匀链：10 个振子，m=1，k=10"""
    return Medium(masses=np.ones(10), stiffness=np.full(11, 10.0))


@pytest.fixture
def heterogeneous_medium():
    """非均匀链：质量与刚度逐点不同"""
    P = 7
    masses = 1.0 + 0.25 * np.arange(P)
    stiffness = 20.0 - 1.5 * np.arange(P + 1)
    return Medium(masses=masses, stiffness=stiffness)


@pytest.fixture
def reference_case():
    """P=5、m=1、k=10、t∈[0,1]、N=5（dt=0.25）、A=0.5、Ω=π/2"""
    return {
        "P": 5,
        "mass": [1.0] * 5,
        "stiffness": [10.0] * 6,
        "t0": 0.0,
        "t1": 1.0,
        "N": 5,
        "A": 0.5,
        "omega": math.pi / 2,
    }


@pytest.fixture
def short_grid():
    """短时间网格，dt=0.01"""
    return TimeGrid(0.0, 2.0, 201)


@pytest.fixture
def reference_forcing():
    """参考正弦驱动 0.5 sin(π t/2)"""
    return SinusoidalForcing(amplitude=0.5, angular_frequency=math.pi / 2)


def reference_recurrence(masses, stiffness, dt, drive):
    """逐元素标量实现的递推，作为向量化内核的对照。"""
    P = len(masses)
    N = len(drive)
    eta = [[0.0] * P for _ in range(N)]
    for n in range(1, N - 1):
        for j in range(1, P - 1):
            eta[n + 1][j] = (
                2.0 * eta[n][j]
                - eta[n - 1][j]
                + dt**2
                / masses[j]
                * (
                    stiffness[j] * (eta[n][j - 1] - eta[n][j])
                    + stiffness[j + 1] * (eta[n][j + 1] - eta[n][j])
                )
            )
        eta[n + 1][0] = (
            2.0 * eta[n][0]
            - eta[n - 1][0]
            + dt**2
            / masses[0]
            * (
                stiffness[0] * (drive[n] - eta[n][0])
                + stiffness[1] * (eta[n][1] - eta[n][0])
            )
        )
        eta[n + 1][P - 1] = 0.0
    return np.array(eta)


@pytest.fixture
def scalar_reference():
    """返回标量对照实现"""
    return reference_recurrence


# 全局测试配置
def pytest_configure(config):
    """注册自定义标记"""
    config.addinivalue_line("markers", "unit: 单元测试")
    config.addinivalue_line("markers", "physics: 物理性质验证")
    config.addinivalue_line("markers", "slow: 较慢的测试")
