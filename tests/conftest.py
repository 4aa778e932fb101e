"""
Shared fixtures: affine planes glued into P^1-like pairs and projective spaces.
"""
import pytest
import sympy as sp

from symbolic_schemes import AffineChart, ChartMorphism, Glueing, Covering


def _glue(X, Y, hX, hY, fwd, bwd):
    U = X.hypersurface_complement(hX)
    V = Y.hypersurface_complement(hY)
    return Glueing(X, Y, ChartMorphism(U, V, fwd), ChartMorphism(V, U, bwd))


@pytest.fixture
def glue():
    return _glue


@pytest.fixture
def symbols_xyuv():
    return sp.symbols('x y u v')


@pytest.fixture
def two_charts(symbols_xyuv):
    x, y, u, v = symbols_xyuv
    return AffineChart("U1", [x, y]), AffineChart("U2", [u, v])


@pytest.fixture
def standard_glueing(two_charts, symbols_xyuv):
    """D(x) in U1 identified with D(u) in U2 via (1/x, y/x), inverse (1/u, v/u)."""
    x, y, u, v = symbols_xyuv
    U1, U2 = two_charts
    return _glue(U1, U2, x, u, [1/x, y/x], [1/u, v/u])


def projective_space(n):
    """
    Standard charts U_i = {X_i != 0} of P^n with coordinates x_i_k = X_k / X_i.
    Returns the charts and a function building the glueing of U_i and U_j.
    """
    coords = {
        i: {k: sp.Symbol(f"x{i}_{k}") for k in range(n + 1) if k != i}
        for i in range(n + 1)
    }
    charts = [AffineChart(f"U{i}", list(coords[i].values())) for i in range(n + 1)]

    def glueing(i, j):
        ci, cj = coords[i], coords[j]
        fwd = [1 / ci[j] if k == i else ci[k] / ci[j] for k in cj]
        bwd = [1 / cj[i] if k == j else cj[k] / cj[i] for k in ci]
        return _glue(charts[i], charts[j], ci[j], cj[i], fwd, bwd)

    return charts, glueing, coords


@pytest.fixture
def p2():
    """P^2 with the glueings U0-U1 and U1-U2 only."""
    charts, glueing, coords = projective_space(2)
    C = Covering(charts)
    C.add_glueing(glueing(0, 1))
    C.add_glueing(glueing(1, 2))
    return C, charts, coords


@pytest.fixture
def p3_chain():
    """P^3 with the chain of glueings U0-U1, U1-U2, U2-U3."""
    charts, glueing, coords = projective_space(3)
    C = Covering(charts)
    for i in range(3):
        C.add_glueing(glueing(i, i + 1))
    return C, charts, coords


@pytest.fixture
def projective():
    return projective_space
