import pytest

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")

from exact_simplex.lp import LP, solve  # noqa: E402
from exact_simplex.plot import basic_feasible_points, plot_2d  # noqa: E402


def make_lp():
    return LP(c=[1, 1], A=[[1, 1], [1, 0], [0, 1]], b=[4, 2, 3], senses=["<=", "<=", "<="])


def test_basic_feasible_points():
    points = sorted(basic_feasible_points(make_lp()))
    assert points == [(0.0, 0.0), (0.0, 3.0), (1.0, 3.0), (2.0, 0.0), (2.0, 2.0)]


def test_plot_returns_figure():
    lp = make_lp()
    fig = plot_2d(lp, solve(lp))
    assert fig is not None
    labels = [t.get_text() for t in fig.axes[0].get_legend().get_texts()]
    assert "optimal edge" in labels
    matplotlib.pyplot.close(fig)


def test_plot_skips_unsupported_models():
    assert plot_2d(LP(c=[1, 1, 1], A=[[1, 1, 1]], b=[1], senses=["<="])) is None
    assert plot_2d(LP(c=[1, 1], A=[[1, 0], [1, 0]], b=[1, 2], senses=["<=", ">="])) is None
