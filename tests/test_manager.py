import math

import numpy as np
import pytest

from cliffordscope.compute import ComputeState
from cliffordscope.manager import Manager, ScalingMethod, ToneMappingMode, sigmoid_normalize
from cliffordscope.utils import make_rng

W, H = 40, 20


@pytest.fixture
def manager():
    m = Manager(W, H, compute_count=2, rng=make_rng(7))
    yield m
    m.destroy_compute()


def _place(manager, row, col, value):
    manager.attractor.density_map[row, col] = value
    bx = int(manager.width * manager.border_size_percent)
    by = int(manager.height * manager.border_size_percent)
    return by + row, bx + col


def test_sigmoid_is_half_at_midpoint():
    assert sigmoid_normalize(0.3, 0.3, 7.0) == pytest.approx(0.5)


def test_sigmoid_monotonic_and_bounded():
    xs = np.linspace(0, 1, 11)
    ys = [float(y) for y in sigmoid_normalize(xs, 0.5, 3.0)]
    assert ys == sorted(ys)
    assert len(set(ys)) == 11
    assert ys[5] == pytest.approx(0.5)
    assert ys[0] + ys[-1] == pytest.approx(1.0)
    assert 0.0 < min(ys)
    assert max(ys) < 1.0


def test_defaults(manager):
    assert manager.tone_mapping_mode is ToneMappingMode.ACES
    assert manager.scaling_method is ScalingMethod.POWER
    assert manager.exposure == pytest.approx(0.75)
    assert manager.gamma == pytest.approx(2.2)
    assert manager.power_exponent == pytest.approx(0.5)
    assert manager.sigmoid_steepness == pytest.approx(3.0)
    assert manager.incremental_rendering is True
    assert Manager(W, H).compute_count == 8


def test_attractor_fits_inside_border(manager):
    assert manager.attractor.width <= W
    assert manager.attractor.height <= H
    assert manager.attractor.width == int((1 - manager.border_size_percent) * W)


def test_invalid_size_rejected():
    with pytest.raises(ValueError):
        Manager(0, H)


def test_tick_timer(manager):
    manager.tick_timer(1.0)
    manager.tick_timer(1.25)
    assert manager.frame_count == 2
    assert manager.last_frame_time == 1.0
    assert manager.current_frame_time == 1.25
    assert manager.delta_time == pytest.approx(1.25 - 1.0)


def test_clean_texture(manager):
    manager.texture_data[...] = 9
    manager.texture_data_gl[...] = 0.3
    manager.clean_texture()
    data = manager.texture_data
    gl = manager.texture_data_gl
    assert int(data[..., :3].max()) == 0
    assert int(data[..., 3].min()) == 255
    assert int(data[..., 3].max()) == 255
    assert float(gl[..., :3].max()) == 0.0
    assert float(gl[..., 3].min()) == 1.0
    assert float(gl[..., 3].max()) == 1.0


def test_copy_attractor_to_texture(manager):
    r, c = _place(manager, 3, 5, 42)
    manager.copy_attractor_to_texture()
    assert list(manager.texture_data[r, c]) == [42, 42, 42, 255]
    assert manager.texture_data[..., 0].sum() == 42


def test_normalize_linear(manager):
    manager.scaling_method = ScalingMethod.LINEAR
    r1, c1 = _place(manager, 1, 1, 4)
    r2, c2 = _place(manager, 2, 2, 2)
    manager.copy_attractor_to_texture()
    manager.normalize_texture()
    gl = manager.texture_data_gl
    assert gl[r1, c1, 0] == pytest.approx(1.0)
    assert gl[r2, c2, 1] == pytest.approx(0.5)
    assert float(gl[..., 3].min()) == 1.0


def test_normalize_sqrt_and_log(manager):
    r1, c1 = _place(manager, 1, 1, 4)
    r2, c2 = _place(manager, 2, 2, 1)
    manager.copy_attractor_to_texture()
    manager.scaling_method = ScalingMethod.SQRT
    manager.normalize_texture()
    assert manager.texture_data_gl[r2, c2, 0] == pytest.approx(math.sqrt(1 / 4))
    manager.scaling_method = ScalingMethod.LOG
    manager.normalize_texture()
    assert manager.texture_data_gl[r1, c1, 0] == pytest.approx(1.0)
    assert manager.texture_data_gl[0, 0, 0] == pytest.approx(0.0)


def test_normalize_empty_map_is_black(manager):
    manager.scaling_method = ScalingMethod.LINEAR
    manager.normalize_texture()
    gl = manager.texture_data_gl
    assert float(gl[..., :3].max()) == 0.0
    assert float(gl[..., 3].min()) == 1.0


def test_merge_and_blit(manager):
    manager.init_compute()
    assert len(manager.computes) == 2
    for compute in manager.computes:
        compute.attractor.density_map[0, 0] = 3
    manager.scaling_method = ScalingMethod.LINEAR
    gl = manager.blit_attractor_to_texture()
    assert manager.attractor.density_map[0, 0] == 6
    r, c = _place(manager, 0, 0, 6)
    assert gl[r, c, 0] == pytest.approx(1.0)


def test_propagate_attractor(manager):
    manager.init_compute()
    manager.attractor.parameters = [0.1, 0.2, 0.3, 0.4]
    manager.propagate_attractor()
    for compute in manager.computes:
        assert compute.attractor.parameters == manager.attractor.parameters


def test_clean_and_reset(manager):
    manager.init_compute()
    manager.attractor.density_map[1, 1] = 5
    for compute in manager.computes:
        compute.attractor.density_map[1, 1] = 5
        compute.attractor.parameters = [0.0, 0.0, 0.0, 0.0]
    manager.clean_attractor()
    assert manager.attractor.density_map.sum() == 0
    assert all(c.attractor.density_map.sum() == 0 for c in manager.computes)
    manager.reset_attractor()
    defaults = list(manager.attractor.settings.default_parameters)
    assert all(c.attractor.parameters == defaults for c in manager.computes)


def test_compute_iterate_until_timeout(manager):
    manager.init_compute()
    manager.compute_iterate_until_timeout(0.2)
    assert all(c.state is ComputeState.PAUSED for c in manager.computes)
    assert sum(int(c.attractor.density_map.sum()) for c in manager.computes) > 0


def test_destroy_compute(manager):
    manager.init_compute()
    workers = list(manager.computes)
    manager.destroy_compute()
    assert manager.computes == []
    assert not any(w.alive for w in workers)