"""链式波传播模块

本包提供振子链波动方程的显式积分、边界驱动信号、简正模诊断与可视化。

功能组件
--------
积分内核：
- :class:`~chainwavesim.wave.integrator.WaveIntegrator`
- :func:`~chainwavesim.wave.integrator.simulate`

驱动信号：
- :class:`~chainwavesim.wave.forcing.SinusoidalForcing`
- :func:`~chainwavesim.wave.forcing.make_forcing`

简正模：
- :class:`~chainwavesim.wave.analytical.ChainModeAnalyzer`

可视化（按需导入 ``chainwavesim.wave.visualization``，会加载 matplotlib）：
- :func:`~chainwavesim.wave.visualization.plot_snapshot`
- :func:`~chainwavesim.wave.visualization.render_playback`
"""

from .analytical import ChainModeAnalyzer
from .forcing import (
    GaussianPulseForcing,
    SinusoidalForcing,
    ToneBurstForcing,
    make_forcing,
)
from .integrator import POLARIZATIONS, ChainWaveResult, WaveIntegrator, simulate

__all__ = [
    "ChainModeAnalyzer",
    "ChainWaveResult",
    "GaussianPulseForcing",
    "POLARIZATIONS",
    "SinusoidalForcing",
    "ToneBurstForcing",
    "WaveIntegrator",
    "make_forcing",
    "simulate",
]
