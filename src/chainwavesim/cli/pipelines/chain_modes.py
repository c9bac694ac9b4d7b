"""Chain Modes 场景流水线

计算振子链的简正频率与显式格式临界步长，保存为 JSON 与 CSV，
便于在正式积分前选择 ``time.n_steps``。
"""

from __future__ import annotations

import csv
import json
import logging
import os
from typing import Any

from ...wave.analytical import ChainModeAnalyzer
from .common import build_medium, build_time_grid


def run_chain_modes_pipeline(cfg, outdir: str) -> dict[str, Any]:
    """
    运行简正模分析流水线。

    Parameters
    ----------
    cfg : ConfigManager
        CLI侧配置管理器。
    outdir : str
        输出目录。

    Returns
    -------
    dict
        简正模报告与输出路径。
    """
    log = logging.getLogger(__name__)
    medium = build_medium(cfg)
    grid = build_time_grid(cfg, medium)
    report = ChainModeAnalyzer(medium).generate_report(dt=grid.dt)

    os.makedirs(outdir, exist_ok=True)
    json_path = os.path.join(outdir, "chain_modes.json")
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(report, f, ensure_ascii=False, indent=2)

    csv_path = os.path.join(outdir, "chain_modes.csv")
    with open(csv_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["mode", "omega", "period"])
        for i, (w, T) in enumerate(
            zip(report["omegas"], report["periods"], strict=True), start=1
        ):
            writer.writerow([i, w, T])

    log.info(
        f"简正模: {len(report['omegas'])} 个, ω_min={report['omegas'][0]:.4g}, "
        f"ω_max={report['omega_max']:.4g}, 临界步长={report['critical_dt']:.4g}"
    )
    return {"report": report, "artifacts": {"json": json_path, "csv": csv_path}}
