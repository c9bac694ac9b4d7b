#!/usr/bin/env python3
"""
链式波传播可视化

渲染层只读取 :class:`~chainwavesim.wave.integrator.ChainWaveResult`，
不修改任何位移数组。

功能
----
- ``nearest_time_index``：把显示时刻映射到最近的模拟步
- ``plot_snapshot``：某一时刻的纵波/横波双面板快照
- ``plot_space_time``：两种极化的 x-t 时空图
- ``render_playback``：按帧率回放为 GIF（第 k 帧对应模拟时刻
  ``t0 + k·time_scale/fps``），替代实时刷新的窗口循环

说明
----
- 振子平衡位置取 ``x_j = a·(j+1)``，``a`` 为格点间距（默认 0.5）。
- 纵波面板：以 ``x_j + η_L`` 为横坐标，在 ``[-A, A]`` 间画竖线表示振子，
  视窗限于链的左半部分；横波面板：以 ``η_T`` 为纵坐标画点。
"""

from __future__ import annotations

import logging
import os

import numpy as np
from matplotlib.animation import FuncAnimation, PillowWriter

from ..utils.plot_config import plt
from .integrator import ChainWaveResult

logger = logging.getLogger(__name__)


def nearest_time_index(time: np.ndarray, t: float) -> int:
    """
    返回与 ``t`` 最接近的时间节点索引。

    Parameters
    ----------
    time : ndarray, shape (N,)
        时间节点。
    t : float
        显示时刻。

    Returns
    -------
    int
        最近节点索引；并列时取较小者。
    """
    time = np.asarray(time, dtype=float)
    if time.size == 0:
        raise ValueError("时间序列为空")
    return int(np.argmin(np.abs(time - float(t))))


def oscillator_positions(n_oscillators: int, spacing: float = 0.5) -> np.ndarray:
    """平衡位置 ``spacing·(1..P)``。"""
    return float(spacing) * np.arange(1, int(n_oscillators) + 1, dtype=float)


def _xlim(lo: float, hi: float, x: np.ndarray, a: float) -> tuple[float, float]:
    if hi <= lo:
        return x[0] - a, x[-1] + a
    return lo, hi


def _draw_frame(
    axes, result: ChainWaveResult, index: int, x: np.ndarray, a: float, A: float
) -> None:
    """在给定的两个坐标轴上绘制第 ``index`` 步。"""
    ax_l, ax_t = axes
    P = x.size
    half = max(P // 2, 2)
    etaL = result.longitudinal[index]
    etaT = result.transverse[index]

    ax_l.cla()
    xs = x + etaL
    ax_l.plot(np.vstack([xs, xs]), [[-A] * P, [A] * P], "o-b", lw=1.5)
    ax_l.set_xlim(*_xlim(x[0] + a, x[half - 1] - a, x, a))
    ax_l.set_ylim(-2 * A, 2 * A)
    ax_l.set_xlabel("x/m")
    ax_l.set_ylabel("纵波")
    ax_l.text(
        0.5 * x[half - 1], 1.5 * A, f"t = {result.time[index]:.2f} s", ha="center"
    )

    ax_t.cla()
    ax_t.plot(x, etaT, ".r", markersize=10)
    ax_t.set_xlim(*_xlim(x[0] + a, x[-1] - a, x, a))
    ax_t.set_ylim(-2 * A, 2 * A)
    ax_t.set_xlabel("x/m")
    ax_t.set_ylabel("横波")


def plot_snapshot(
    result: ChainWaveResult,
    t: float,
    spacing: float = 0.5,
    amplitude: float = 0.5,
    outpath: str = "chain_snapshot.png",
    dpi: int = 150,
) -> str:
    """
    绘制时刻 ``t``（取最近步）的纵波/横波快照。

    Parameters
    ----------
    result : ChainWaveResult
        模拟结果。
    t : float
        显示时刻。
    spacing : float
        格点间距 ``a``。
    amplitude : float
        驱动振幅 ``A``，决定纵轴范围 ``[-2A, 2A]``。
    outpath : str
        输出图片路径。
    dpi : int
        分辨率。

    Returns
    -------
    str
        实际写入的图片路径。
    """
    idx = nearest_time_index(result.time, t)
    x = oscillator_positions(result.shape[1], spacing)
    A = float(amplitude) if amplitude else 1.0

    fig, axes = plt.subplots(2, 1, figsize=(10, 8))
    try:
        _draw_frame(axes, result, idx, x, float(spacing), A)
        fig.tight_layout()
        os.makedirs(os.path.dirname(os.path.abspath(outpath)), exist_ok=True)
        fig.savefig(outpath, dpi=dpi)
    finally:
        plt.close(fig)
    logger.info(f"快照已保存: {outpath}（步 {idx}, t={result.time[idx]:.4g}）")
    return outpath


def plot_space_time(
    result: ChainWaveResult,
    outpath: str = "chain_xt.png",
    spacing: float = 0.5,
    max_rows: int = 2000,
    dpi: int = 150,
) -> str:
    """
    绘制两种极化的 x-t 时空图（对称色标）。

    行数超过 ``max_rows`` 时按等间隔抽取时间步，仅影响显示。
    """
    N, P = result.shape
    stride = max(1, int(np.ceil(N / max(int(max_rows), 1))))
    t = result.time[::stride]
    x = oscillator_positions(P, spacing)
    extent = [x[0], x[-1], float(t[0]), float(t[-1])]

    fig, axes = plt.subplots(1, 2, figsize=(10.5, 4), sharey=True)
    try:
        for ax, name, label in zip(
            axes, ("longitudinal", "transverse"), ("纵波 η_L", "横波 η_T"), strict=True
        ):
            U = result.field(name)[::stride]
            finite = U[np.isfinite(U)]
            vmax = float(np.max(np.abs(finite))) if finite.size else 0.0
            vlim = vmax or 1e-12
            im = ax.imshow(
                U,
                origin="lower",
                aspect="auto",
                extent=extent,
                cmap="RdBu_r",
                vmin=-vlim,
                vmax=+vlim,
            )
            ax.set_xlabel("x/m")
            ax.set_title(label)
            cbar = fig.colorbar(im, ax=ax)
            cbar.set_label("位移")
        axes[0].set_ylabel("t/s")
        fig.suptitle("振子链波传播时空图", y=1.02)
        fig.tight_layout()
        os.makedirs(os.path.dirname(os.path.abspath(outpath)), exist_ok=True)
        fig.savefig(outpath, dpi=dpi, bbox_inches="tight")
    finally:
        plt.close(fig)
    logger.info(f"时空图已保存: {outpath}")
    return outpath


def playback_indices(
    time: np.ndarray, fps: float = 20.0, time_scale: float = 1.0, max_frames: int = 200
) -> np.ndarray:
    """
    回放帧对应的模拟步索引。

    第 ``k`` 帧显示模拟时刻 ``t0 + k·time_scale/fps``，映射到最近步，
    直到超过末时刻或达到 ``max_frames``。
    """
    if fps <= 0 or time_scale <= 0:
        raise ValueError("fps 与 time_scale 必须为正")
    time = np.asarray(time, dtype=float)
    t0, t1 = float(time[0]), float(time[-1])
    dt_frame = float(time_scale) / float(fps)
    n_frames = min(int(np.floor((t1 - t0) / dt_frame)) + 1, int(max_frames))
    targets = t0 + dt_frame * np.arange(max(n_frames, 1))
    return np.array([nearest_time_index(time, tt) for tt in targets], dtype=int)


def render_playback(
    result: ChainWaveResult,
    outpath: str = "chain_playback.gif",
    fps: float = 20.0,
    time_scale: float = 1.0,
    max_frames: int = 200,
    spacing: float = 0.5,
    amplitude: float = 0.5,
    dpi: int = 80,
) -> str:
    """
    将模拟结果回放为 GIF 动画。

    Parameters
    ----------
    result : ChainWaveResult
        模拟结果。
    outpath : str
        输出文件（.gif）。
    fps : float
        帧率。
    time_scale : float
        每秒回放对应的模拟时长；1.0 即与原始实时查看器一致。
    max_frames : int
        帧数上限。
    spacing, amplitude : float
        格点间距与驱动振幅。
    dpi : int
        分辨率。

    Returns
    -------
    str
        GIF 路径。
    """
    if not str(outpath).endswith(".gif"):
        raise ValueError(f"不支持的动画格式: {outpath}")
    indices = playback_indices(result.time, fps, time_scale, max_frames)
    x = oscillator_positions(result.shape[1], spacing)
    A = float(amplitude) if amplitude else 1.0

    fig, axes = plt.subplots(2, 1, figsize=(8, 6))

    def update(frame_idx):
        _draw_frame(axes, result, int(indices[frame_idx]), x, float(spacing), A)
        return tuple(axes)

    try:
        anim = FuncAnimation(
            fig, update, frames=len(indices), blit=False, interval=1000 / fps
        )
        os.makedirs(os.path.dirname(os.path.abspath(outpath)), exist_ok=True)
        anim.save(outpath, writer=PillowWriter(fps=fps), dpi=dpi)
    finally:
        plt.close(fig)
    logger.info(f"回放动画已保存: {outpath}（{len(indices)} 帧）")
    return outpath
