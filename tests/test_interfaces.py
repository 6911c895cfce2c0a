"""
Tests for the input form, the chart renderer and the runner.
Run: python -m pytest tests/ -v
"""

import sys
import os
import logging
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from dragsim.config import DEFAULT_MAX_STEPS
from dragsim.errors import InvalidParameter
from dragsim.inputs import FORM_FIELDS, parse_parameters, delta_time_from_scale
from dragsim.integrator import simulate, simulate_pair
from dragsim.logging_config import setup_logging
from dragsim.parameters import Parameters
from dragsim.state import MotionState
from dragsim.visualization import (
    find_maxes, axis_bounds, plot_comparison, plot_trajectory, render_pixels,
)
import main as runner

import matplotlib.pyplot as plt


FORM = {
    'cross_area': '0.01',
    'fluid_density': '1.2',
    'drag_coefficient': '0.47',
    'mass': '0.145',
    'initial_velocity': '40',
    'initial_angle': '45',
    'initial_x': '0',
    'initial_y': '0',
    'ending_time': '10',
}


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger('dragsim')
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


@pytest.fixture(scope='module')
def pair():
    params = parse_parameters(FORM, delta_time_scale=2)
    return simulate_pair(params)


class TestFormInput:
    """Verify text-field parsing into Parameters."""

    def test_form_fields_cover_inputs(self):
        assert [key for key, _ in FORM_FIELDS] == list(FORM)

    def test_parse_valid_form(self):
        p = parse_parameters(FORM)
        assert p.mass == pytest.approx(0.145)
        assert p.delta_time == pytest.approx(0.001)
        assert p.ending_time == 10.0
        assert p.initial_conditions.velocity.magnitude() == pytest.approx(40.0)
        assert p.initial_conditions.velocity.angle() == pytest.approx(45.0)
        assert p.initial_conditions.time == 0.0

    def test_whitespace_is_ignored(self):
        p = parse_parameters(dict(FORM, mass=' 0.2 '))
        assert p.mass == pytest.approx(0.2)

    def test_non_numeric_field(self):
        with pytest.raises(InvalidParameter) as exc_info:
            parse_parameters(dict(FORM, mass='abc'))
        assert exc_info.value.name == 'mass'

    def test_missing_field(self):
        form = dict(FORM)
        del form['ending_time']
        with pytest.raises(InvalidParameter) as exc_info:
            parse_parameters(form)
        assert exc_info.value.name == 'ending_time'

    def test_physically_invalid_field(self):
        with pytest.raises(InvalidParameter):
            parse_parameters(dict(FORM, mass='0'))

    @pytest.mark.parametrize('scale, expected', [(0, 1.0), (3, 1e-3), (5, 1e-5)])
    def test_delta_time_scale(self, scale, expected):
        assert delta_time_from_scale(scale) == pytest.approx(expected)

    @pytest.mark.parametrize('scale', [-1, 6, 2.5, True])
    def test_delta_time_scale_out_of_range(self, scale):
        with pytest.raises(InvalidParameter):
            delta_time_from_scale(scale)


class TestRendering:
    """Verify chart bounds and the pixel buffer."""

    def test_axis_bounds_follow_drag_free_run(self, pair):
        with_drag, without_drag = pair
        max_x, max_y = find_maxes(without_drag)
        assert axis_bounds(without_drag) == pytest.approx((max_x * 1.1, max_y * 1.1))
        assert max_x >= float(np.max(with_drag.x))

    def test_find_maxes_start_at_zero(self):
        p = Parameters(0.0, 0.0, 0.0, 1.0, 0.1,
                       MotionState.launch(-5.0, 2.0, 0.0, 0.0), 0.0)
        assert find_maxes(simulate(p)) == (0.0, 2.0)

    def test_degenerate_bounds(self):
        p = Parameters(0.0, 0.0, 0.0, 1.0, 0.1, MotionState(), 0.0)
        assert axis_bounds(simulate(p)) == (1.0, 1.0)

    def test_plot_comparison_limits(self, pair, tmp_path):
        with_drag, without_drag = pair
        path = tmp_path / 'chart.png'
        fig = plot_comparison(with_drag, without_drag, save_path=str(path))
        ax = fig.axes[0]
        x_max, y_max = axis_bounds(without_drag)
        assert ax.get_xlim() == pytest.approx((0.0, x_max))
        assert ax.get_ylim() == pytest.approx((0.0, y_max))
        labels = [t.get_text() for t in ax.get_legend().get_texts()]
        assert labels == ['With drag', 'Without drag']
        plt.close(fig)
        assert path.exists() and path.stat().st_size > 0

    def test_render_pixels_shape(self, pair):
        pixels = render_pixels(*pair, size=(400, 300))
        assert pixels.shape == (300, 400, 4)
        assert pixels.dtype == np.uint8
        # Something other than the white background was drawn
        assert (pixels[..., :3] < 255).any()

    def test_render_pixels_rejects_empty_size(self, pair):
        with pytest.raises(ValueError):
            render_pixels(*pair, size=(0, 300))

    def test_plot_trajectory(self, pair):
        fig = plot_trajectory(pair[0], label='With drag')
        assert fig.axes[0].get_xlabel() == 'Downrange (m)'
        plt.close(fig)


class TestRunner:
    """Verify the command-line runner end to end."""

    def test_default_run(self, tmp_path, capsys):
        out = tmp_path / 'plots' / 'trajectory.png'
        assert runner.main(['--delta-time', '0.01', '--output', str(out)]) == 0
        assert out.exists()
        text = capsys.readouterr().out
        assert 'WITH DRAG' in text and 'WITHOUT DRAG' in text

    def test_invalid_input_exit_code(self, capsys):
        assert runner.main(['--mass', '0', '--no-plot']) == 2
        assert 'mass' in capsys.readouterr().err

    def test_launch_below_ground_skips_validation(self, capsys):
        assert runner.main(['--y', '-1', '--no-plot']) == 0
        assert 'Skipped' in capsys.readouterr().out

    def test_prompt_values_retries_bad_input(self, capsys):
        answers = iter(['abc', '0.01', '1.2', '0.47', '0.145', '0.001',
                        '0', '0', '40', '45', '10'])
        values = runner.prompt_values(read=lambda _: next(answers))
        assert values['cross_area'] == 0.01
        assert values['ending_time'] == 10.0
        assert 'Please type a number' in capsys.readouterr().out

    def test_step_bound_reaches_integrator(self, monkeypatch):
        seen = []

        def recording_pair(params, max_steps=None):
            seen.append((params.step_limit, max_steps))
            return simulate_pair(params, max_steps=max_steps)

        monkeypatch.setattr(runner, 'simulate_pair', recording_pair)
        assert runner.main(['--delta-time', '1e-9', '--max-steps', '50',
                            '--no-plot']) == 0
        (step_limit, max_steps), = seen
        assert step_limit >= 10 ** 10
        assert max_steps == 50

    def test_default_step_bound(self, monkeypatch):
        seen = []

        def recording_pair(params, max_steps=None):
            seen.append(max_steps)
            return simulate_pair(params, max_steps=max_steps)

        monkeypatch.setattr(runner, 'simulate_pair', recording_pair)
        assert runner.main(['--delta-time', '0.01', '--no-plot']) == 0
        assert seen == [DEFAULT_MAX_STEPS]

    @pytest.mark.parametrize('flag', ['--width', '--height', '--max-steps'])
    def test_non_positive_runner_option(self, flag, capsys):
        assert runner.main([flag, '0', '--no-plot']) == 2
        assert flag in capsys.readouterr().err

    @pytest.mark.parametrize('error', [EOFError, KeyboardInterrupt])
    def test_prompt_aborted(self, error, monkeypatch, capsys):
        def abort(_):
            raise error

        monkeypatch.setattr('builtins.input', abort)
        assert runner.main(['--prompt', '--no-plot']) == 130
        assert 'aborted' in capsys.readouterr().err


def test_setup_logging_handlers(tmp_path):
    log_file = tmp_path / 'run.log'
    logger = setup_logging(logging.DEBUG, log_file=str(log_file))
    assert logger.name == 'dragsim'
    assert len(logger.handlers) == 2
    file_handler = logger.handlers[1]
    logger = setup_logging(logging.INFO)
    assert len(logger.handlers) == 1
    assert file_handler.stream is None
    assert 'Logging to stdout and' in log_file.read_text()
