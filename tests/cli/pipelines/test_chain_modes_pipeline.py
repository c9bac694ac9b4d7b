#!/usr/bin/env python3
import csv
import json
import os

import numpy as np
import pytest

from chainwavesim.cli.pipelines.chain_modes import run_chain_modes_pipeline
from chainwavesim.wave.analytical import homogeneous_mode_frequencies


class _StubCfg:
    def __init__(self, data):
        self._data = data

    def get(self, key, default=None):
        parts = key.split(".")
        cur = self._data
        for p in parts:
            if isinstance(cur, dict) and p in cur:
                cur = cur[p]
            else:
                return default
        return cur


def test_pipeline_outputs_json_and_csv(tmp_path):
    cfg = _StubCfg(
        {
            "chain": {"n_oscillators": 6, "masses": 2.0, "stiffness": 8.0},
            "time": {"t1": 10.0, "n_steps": 1001},
        }
    )
    res = run_chain_modes_pipeline(cfg, str(tmp_path / "out"))
    report = res["report"]
    np.testing.assert_allclose(
        report["omegas"], homogeneous_mode_frequencies(5, 8.0, 2.0), rtol=1e-10
    )
    assert report["dt"] == pytest.approx(0.01)
    assert report["stable"] is True

    json_path = res["artifacts"]["json"]
    csv_path = res["artifacts"]["csv"]
    assert os.path.exists(json_path)
    with open(json_path, encoding="utf-8") as f:
        assert json.load(f)["critical_dt"] == pytest.approx(report["critical_dt"])

    with open(csv_path, encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["mode", "omega", "period"]
    assert len(rows) == 6
    assert float(rows[1][1]) == pytest.approx(report["omegas"][0])


def test_pipeline_with_default_profiles(tmp_path):
    res = run_chain_modes_pipeline(_StubCfg({}), str(tmp_path / "default"))
    assert res["report"]["n_oscillators"] == 40
    assert len(res["report"]["omegas"]) == 39
