"""Chain Wave 场景流水线

从YAML配置构建振子链、时间网格与驱动信号，运行
:class:`chainwavesim.wave.WaveIntegrator`，输出快照、时空图与可选的
GIF 回放，并写入一份精简的运行摘要（不保存位移数组本身）。

配置示例（examples/modern_yaml/chain_wave.yaml）::

    scenario: chain_wave
    chain: { n_oscillators: 40, masses: { left: 1.0, right: 2.0 } }
    time: { t1: auto, n_steps: 20000 }
    forcing: { type: sine, amplitude: 0.5, angular_frequency: 1.5708 }
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any

import numpy as np

from ...wave.analytical import ChainModeAnalyzer
from ...wave.integrator import WaveIntegrator
from .common import build_forcing, build_medium, build_time_grid


def run_chain_wave_pipeline(cfg, outdir: str) -> dict[str, Any]:
    """
    运行振子链波传播流水线。

    Parameters
    ----------
    cfg : ConfigManager
        CLI侧配置管理器。
    outdir : str
        输出目录。

    Returns
    -------
    dict
        包含摘要、稳定性诊断与输出路径的字典；``"result"`` 键为
        :class:`~chainwavesim.wave.integrator.ChainWaveResult`。
    """
    log = logging.getLogger(__name__)
    medium = build_medium(cfg)
    grid = build_time_grid(cfg, medium)
    forcing = build_forcing(cfg)

    # 稳定性仅作诊断：超过临界步长时给出警告，照常推进
    ana = ChainModeAnalyzer(medium)
    dt_c = ana.critical_time_step()
    diag = {"critical_dt": dt_c, "stability_ratio": grid.dt / dt_c}
    log.info(
        f"介质: P={medium.n_oscillators}, dt={grid.dt:.4g}, "
        f"临界步长={dt_c:.4g} (比值 {diag['stability_ratio']:.3f})"
    )
    if diag["stability_ratio"] >= 1.0:
        log.warning(
            f"dt={grid.dt:.4g} 超过显式格式临界步长 {diag['critical_dt']:.4g}，结果将发散"
        )

    integrator = WaveIntegrator(
        medium,
        grid,
        forcing,
        max_workers=int(cfg.get("integrator.max_workers", 1)),
    )
    result = integrator.run()

    finite = bool(
        np.all(np.isfinite(result.longitudinal))
        and np.all(np.isfinite(result.transverse))
    )
    with np.errstate(invalid="ignore"):
        max_abs = {
            "longitudinal": float(np.nanmax(np.abs(result.longitudinal))),
            "transverse": float(np.nanmax(np.abs(result.transverse))),
        }
    if not finite:
        log.warning("位移场包含非有限值（inf/nan），请减小时间步长")
    log.info(
        f"最大位移: 纵波 {max_abs['longitudinal']:.4g}, 横波 {max_abs['transverse']:.4g}"
    )

    summary: dict[str, Any] = {
        "n_oscillators": medium.n_oscillators,
        "n_steps": grid.n_steps,
        "t0": grid.t0,
        "t1": grid.t1,
        "dt": grid.dt,
        "critical_dt": diag["critical_dt"],
        "stability_ratio": diag["stability_ratio"],
        "finite": finite,
        "max_abs_displacement": max_abs,
        "artifacts": {},
    }

    vis_cfg = cfg.get("visualization", {}) or {}
    if bool(vis_cfg.get("enabled", True)):
        summary["artifacts"] = _render(cfg, result, outdir, log)

    os.makedirs(outdir, exist_ok=True)
    summary_path = os.path.join(outdir, "chain_wave_summary.json")
    with open(summary_path, "w", encoding="utf-8") as f:
        json.dump(summary, f, ensure_ascii=False, indent=2)
    summary["artifacts"]["summary"] = summary_path

    return {**summary, "result": result}


def _render(cfg, result, outdir: str, log: logging.Logger) -> dict[str, Any]:
    """按 ``visualization.*`` 生成图像；单个图像失败只记录警告。"""
    from ...wave.visualization import plot_snapshot, plot_space_time, render_playback

    spacing = float(cfg.get("chain.spacing", 0.5))
    amplitude = float(cfg.get("forcing.amplitude", 0.5))
    dpi = int(cfg.get("visualization.dpi", 150))
    artifacts: dict[str, Any] = {}

    snapshots = cfg.get("visualization.snapshots", []) or []
    paths: list[str] = []
    for i, t in enumerate(snapshots):
        outpath = os.path.join(outdir, f"snapshot_{i:02d}.png")
        try:
            paths.append(
                plot_snapshot(result, float(t), spacing, amplitude, outpath, dpi=dpi)
            )
        except (ValueError, OSError) as e:
            log.warning(f"快照 t={t} 生成失败: {e}")
    if paths:
        artifacts["snapshots"] = paths

    if bool(cfg.get("visualization.space_time", True)):
        try:
            artifacts["space_time"] = plot_space_time(
                result, os.path.join(outdir, "chain_xt.png"), spacing, dpi=dpi
            )
        except (ValueError, OSError) as e:
            log.warning(f"时空图生成失败: {e}")

    if bool(cfg.get("visualization.playback.enabled", False)):
        try:
            artifacts["playback"] = render_playback(
                result,
                os.path.join(outdir, "chain_playback.gif"),
                fps=float(cfg.get("visualization.playback.fps", 20)),
                time_scale=float(cfg.get("visualization.playback.time_scale", 1.0)),
                max_frames=int(cfg.get("visualization.playback.max_frames", 200)),
                spacing=spacing,
                amplitude=amplitude,
            )
        except (ValueError, OSError) as e:
            log.warning(f"回放动画生成失败: {e}")
    return artifacts
