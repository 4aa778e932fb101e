"""
Tests for glueings: validation, inverses, composition and maximal extension
"""
import pytest
import sympy as sp

from symbolic_schemes import ChartMorphism, Glueing, LazyGlueing
from symbolic_schemes.glueings import identity_glueing, inverse, underlying_glueing


class TestGlueing:
    def test_domains_and_morphisms(self, standard_glueing, two_charts, symbols_xyuv):
        x, y, u, v = symbols_xyuv
        U1, U2 = two_charts
        U, V = standard_glueing.glueing_domains()
        assert standard_glueing.patches == (U1, U2)
        assert U.ambient is U1 and U.complement_equation == x
        assert V.ambient is U2 and V.complement_equation == u
        f, g = standard_glueing.glueing_morphisms()
        assert f.images == [1/x, y/x]
        assert g.images == [1/u, v/u]

    def test_rejects_non_inverse_maps(self, two_charts, symbols_xyuv):
        x, y, u, v = symbols_xyuv
        U1, U2 = two_charts
        U, V = U1.hypersurface_complement(x), U2.hypersurface_complement(u)
        with pytest.raises(ValueError):
            Glueing(U1, U2, ChartMorphism(U, V, [1/x, y/x]), ChartMorphism(V, U, [u, v]))

    def test_rejects_mismatched_domains(self, two_charts, symbols_xyuv):
        x, y, u, v = symbols_xyuv
        U1, U2 = two_charts
        U, V = U1.hypersurface_complement(x), U2.hypersurface_complement(u)
        other = U2.hypersurface_complement(u)
        with pytest.raises(ValueError):
            Glueing(U1, U2, ChartMorphism(U, V, [1/x, y/x]), ChartMorphism(other, U, [1/u, v/u]))

    def test_rejects_domain_outside_chart(self, two_charts, symbols_xyuv):
        x, y, u, v = symbols_xyuv
        U1, U2 = two_charts
        U, V = U1.hypersurface_complement(x), U2.hypersurface_complement(u)
        f, g = ChartMorphism(U, V, [1/x, y/x]), ChartMorphism(V, U, [1/u, v/u])
        with pytest.raises(ValueError):
            Glueing(U2, U1, f, g)

    def test_inverse_shares_objects(self, standard_glueing):
        G_inv = inverse(standard_glueing)
        assert G_inv.patches == tuple(reversed(standard_glueing.patches))
        f, g = standard_glueing.glueing_morphisms()
        assert G_inv.glueing_morphisms() == (g, f)
        assert G_inv.glueing_domains() == tuple(reversed(standard_glueing.glueing_domains()))

    def test_identity_glueing(self, two_charts):
        U1, _ = two_charts
        G = identity_glueing(U1)
        assert G.glueing_domains() == (U1, U1)
        assert G.f.images == U1.coords

    def test_numeric_transport(self, standard_glueing):
        assert standard_glueing.to_target((2.0, 6.0)) == pytest.approx((0.5, 3.0))
        assert standard_glueing.to_source((0.5, 3.0)) == pytest.approx((2.0, 6.0))


class TestComposition:
    def test_compose_in_projective_plane(self, projective):
        charts, glueing, c = projective(2)
        G = glueing(0, 1).compose(glueing(1, 2))
        assert G.patches == (charts[0], charts[2])
        U, V = G.glueing_domains()
        assert sp.expand(U.complement_equation - c[0][1] * c[0][2]) == 0
        assert sp.expand(V.complement_equation - c[2][0] * c[2][1]) == 0
        f, g = G.glueing_morphisms()
        assert f.images == [1 / c[0][2], c[0][1] / c[0][2]]
        assert g.images == [c[2][1] / c[2][0], 1 / c[2][0]]

    def test_maximal_extension(self, projective):
        charts, glueing, c = projective(2)
        G = glueing(0, 1).compose(glueing(1, 2)).maximal_extension()
        U, V = G.glueing_domains()
        assert U.complement_equation == c[0][2]
        assert V.complement_equation == c[2][0]
        f, g = G.glueing_morphisms()
        assert f.domain is U and f.codomain is V
        assert g.domain is V and g.codomain is U
        assert f.images == [1 / c[0][2], c[0][1] / c[0][2]]

    def test_maximal_extension_keeps_maximal_glueing(self, standard_glueing):
        G = standard_glueing.maximal_extension()
        U, V = G.glueing_domains()
        assert U.is_equal(standard_glueing.glueing_domains()[0])
        assert V.is_equal(standard_glueing.glueing_domains()[1])

    def test_compose_needs_common_middle_chart(self, projective):
        _, glueing, _ = projective(2)
        with pytest.raises(ValueError):
            glueing(0, 1).compose(glueing(0, 1))


class TestLazyGlueing:
    def test_computed_once(self, standard_glueing):
        calls = []

        def transform(G):
            calls.append(G)
            return G.inverse()

        X, Y = standard_glueing.patches
        lazy = LazyGlueing(Y, X, transform, standard_glueing)
        assert not lazy.is_computed
        assert lazy.patches == (Y, X)
        first = lazy.underlying_glueing()
        assert lazy.is_computed
        assert lazy.underlying_glueing() is first
        assert lazy.glueing_domains() == first.glueing_domains()
        assert len(calls) == 1

    def test_underlying_glueing_of_plain_glueing(self, standard_glueing):
        assert underlying_glueing(standard_glueing) is standard_glueing
        lazy = LazyGlueing(*reversed(standard_glueing.patches), inverse, standard_glueing)
        assert isinstance(underlying_glueing(lazy), Glueing)
