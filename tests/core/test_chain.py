#!/usr/bin/env python3
"""介质与时间网格测试"""

import numpy as np
import pytest

from chainwavesim.core.chain import (
    Medium,
    TimeGrid,
    reference_final_time,
    two_region_masses,
    two_region_stiffness,
)
from chainwavesim.core.errors import InvalidConfigurationError


class TestMedium:
    """Medium 构建与校验"""

    def test_basic_construction(self):
        medium = Medium(masses=[1, 2, 3], stiffness=[4, 5, 6, 7])
        assert medium.n_oscillators == 3
        assert medium.masses.dtype == float
        assert medium.stiffness.shape == (4,)

    def test_arrays_are_read_only(self):
        medium = Medium(masses=[1.0] * 3, stiffness=[1.0] * 4)
        with pytest.raises(ValueError):
            medium.masses[0] = 2.0

    def test_input_is_copied(self):
        m = np.ones(4)
        medium = Medium(masses=m, stiffness=np.ones(5))
        m[0] = 100.0
        assert medium.masses[0] == 1.0

    def test_frozen(self):
        medium = Medium(masses=[1.0] * 3, stiffness=[1.0] * 4)
        with pytest.raises(AttributeError):
            medium.masses = np.ones(3)

    def test_equality(self):
        a = Medium(masses=[1.0] * 3, stiffness=[1.0] * 4)
        b = Medium(masses=np.ones(3), stiffness=np.ones(4))
        c = Medium(masses=[1.0] * 3, stiffness=[2.0] * 4)
        assert a == b
        assert a != c

    def test_hashable(self):
        a = Medium(masses=[1.0] * 3, stiffness=[1.0] * 4)
        b = Medium(masses=np.ones(3), stiffness=np.ones(4))
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    @pytest.mark.parametrize(
        "masses,stiffness",
        [
            ([1.0, 1.0], [1.0, 1.0, 1.0]),  # P=2
            ([1.0, 0.0, 1.0], [1.0] * 4),  # 零质量
            ([1.0, -1.0, 1.0], [1.0] * 4),  # 负质量
            ([1.0] * 3, [1.0, 1.0, 0.0, 1.0]),  # 零刚度
            ([1.0] * 3, [1.0] * 3),  # 刚度长度不匹配
            ([1.0] * 3, [1.0] * 5),
            ([1.0, np.nan, 1.0], [1.0] * 4),  # 非有限
            ([[1.0, 1.0, 1.0]], [1.0] * 4),  # 非一维
        ],
    )
    def test_invalid_inputs(self, masses, stiffness):
        with pytest.raises(InvalidConfigurationError):
            Medium(masses=masses, stiffness=stiffness)

    def test_from_arrays_checks_declared_count(self):
        with pytest.raises(InvalidConfigurationError):
            Medium.from_arrays(4, [1.0] * 3, [1.0] * 4)
        with pytest.raises(InvalidConfigurationError):
            Medium.from_arrays(3, [1.0] * 3, [1.0] * 3)
        with pytest.raises(InvalidConfigurationError):
            Medium.from_arrays(2, [1.0] * 2, [1.0] * 3)
        with pytest.raises(InvalidConfigurationError):
            Medium.from_arrays(3.0, [1.0] * 3, [1.0] * 4)
        assert Medium.from_arrays(3, [1.0] * 3, [1.0] * 4).n_oscillators == 3

    def test_invalid_configuration_is_value_error(self):
        with pytest.raises(ValueError):
            Medium(masses=[1.0], stiffness=[1.0, 1.0])


class TestTimeGrid:
    """TimeGrid 均匀网格"""

    def test_dt_and_nodes(self):
        grid = TimeGrid(0.0, 1.0, 5)
        assert grid.dt == 0.25
        np.testing.assert_allclose(grid.nodes, [0.0, 0.25, 0.5, 0.75, 1.0])

    def test_uniform_spacing(self):
        grid = TimeGrid(-1.0, 3.0, 101)
        np.testing.assert_allclose(np.diff(grid.nodes), grid.dt, rtol=1e-12)
        assert grid.nodes[0] == -1.0
        assert grid.nodes[-1] == 3.0

    def test_nearest_index(self):
        grid = TimeGrid(0.0, 1.0, 5)
        assert grid.nearest_index(0.0) == 0
        assert grid.nearest_index(0.3) == 1
        assert grid.nearest_index(0.125) == 0  # 并列取较小者
        assert grid.nearest_index(10.0) == 4
        assert grid.nearest_index(-5.0) == 0

    @pytest.mark.parametrize(
        "t0,t1,n",
        [
            (0.0, 1.0, 2),
            (0.0, 1.0, 0),
            (1.0, 1.0, 10),
            (1.0, 0.0, 10),
            (0.0, np.inf, 10),
            (0.0, 1.0, 10.0),
            (0.0, 1.0, True),
        ],
    )
    def test_invalid_grid(self, t0, t1, n):
        with pytest.raises(InvalidConfigurationError):
            TimeGrid(t0, t1, n)

    def test_numpy_integer_steps_accepted(self):
        grid = TimeGrid(0, 2, np.int64(3))
        assert grid.n_steps == 3
        assert isinstance(grid.t0, float)
        assert grid.dt == 1.0


class TestReferenceProfiles:
    """参考剖面（两区刚度/质量、参考时长）"""

    def test_two_region_stiffness(self):
        k = two_region_stiffness(6)
        assert k.shape == (7,)
        np.testing.assert_array_equal(k[:3], 100.0)
        np.testing.assert_array_equal(k[3:], 75.0)

    def test_two_region_stiffness_odd_count(self):
        k = two_region_stiffness(5, left=2.0, right=1.0)
        np.testing.assert_array_equal(k, [2.0, 2.0, 1.0, 1.0, 1.0, 1.0])

    def test_two_region_masses(self):
        m = two_region_masses(6, 1.0, 3.0)
        np.testing.assert_array_equal(m, [1.0, 1.0, 1.0, 3.0, 3.0, 3.0])

    def test_profiles_reject_too_few_oscillators(self):
        with pytest.raises(InvalidConfigurationError):
            two_region_masses(2, 1.0, 1.0)
        with pytest.raises(InvalidConfigurationError):
            two_region_stiffness(2)

    def test_reference_final_time(self):
        m = np.ones(4)
        k = np.full(5, 4.0)
        # 2π·100·sqrt(1/4) = 100π
        assert reference_final_time(m, k) == pytest.approx(100.0 * np.pi)
        assert reference_final_time(m, k, periods=1.0) == pytest.approx(np.pi)
