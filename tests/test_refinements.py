"""
Tests for ancestor tracing, refinements and covering morphisms
"""
import pytest

from symbolic_schemes import (
    Covering, CoveringMorphism, UnsupportedRefinement,
    is_refinement, common_refinement, find_chart, has_ancestor,
)
from symbolic_schemes.covering_morphisms import identity_map
from symbolic_schemes.refinements import has_ancestor_in


@pytest.fixture
def refined(two_charts, symbols_xyuv):
    """C = (U1, U2) and D = (D(x) in U1, D(xy) in U1, U2)."""
    x, y, u, v = symbols_xyuv
    U1, U2 = two_charts
    Dx = U1.hypersurface_complement(x)
    Dxy = Dx.hypersurface_complement(y)
    return Covering([U1, U2]), Covering([Dx, Dxy, U2])


class TestAncestors:
    def test_has_ancestor(self, refined):
        C, D = refined
        Dxy = D[1]
        assert has_ancestor(lambda U: U.name == "U1", Dxy)
        assert not has_ancestor(lambda U: U.name == "U2", Dxy)
        assert has_ancestor_in(C.patches, Dxy)
        assert not has_ancestor_in([C[1]], Dxy)

    def test_find_chart_composes_inclusions(self, refined, symbols_xyuv):
        x, y, u, v = symbols_xyuv
        C, D = refined
        f, found = find_chart(D[1], C.patches)
        assert found
        assert f.domain is D[1] and f.codomain is C[0]
        assert f.images == [x, y]

    def test_find_chart_fails(self, refined):
        C, D = refined
        assert find_chart(C[0], [C[1]]) == (None, False)

    def test_chart_is_its_own_ancestor(self, refined):
        C, _ = refined
        f, found = find_chart(C[0], C.patches)
        assert found and f.codomain is C[0]


class TestRefinements:
    def test_is_refinement(self, refined):
        C, D = refined
        ok, phi = is_refinement(D, C)
        assert ok
        assert isinstance(phi, CoveringMorphism)
        assert phi[D[0]].codomain is C[0]
        assert phi[D[2]].codomain is C[1]
        assert len(phi) == 3
        assert is_refinement(C, D) == (False, None)

    def test_common_refinement_of_refined_pair(self, refined):
        C, D = refined
        E, to_C, to_D = common_refinement(C, D)
        assert E is D
        assert to_C.codomain is C
        assert all(f.domain is f.codomain for _, f in to_D)

        E, to_C, to_D = common_refinement(D, C)
        assert E is D
        assert to_D.codomain is C

    def test_common_refinement_with_itself(self, refined):
        C, _ = refined
        E, to_C, to_D = common_refinement(C, C)
        assert E is C and to_C is to_D

    def test_unrelated_coverings(self, two_charts, symbols_xyuv):
        x, y, u, v = symbols_xyuv
        U1, U2 = two_charts
        C = Covering([U1.hypersurface_complement(x)])
        D = Covering([U1.hypersurface_complement(y)])
        with pytest.raises(UnsupportedRefinement):
            common_refinement(C, D)
        with pytest.raises(NotImplementedError):
            common_refinement(D, C)


class TestCoveringMorphism:
    def test_identity(self, refined):
        C, _ = refined
        phi = identity_map(C)
        assert phi.domain is C and phi.codomain is C
        assert [U for U, _ in phi] == C.patches
        assert phi.morphisms()[C[1]].images == C[1].coords

    def test_check_rejects_wrong_domain(self, refined):
        C, D = refined
        with pytest.raises(ValueError):
            CoveringMorphism(D, C, {D[0]: D[1].inclusion, D[1]: D[1].inclusion, D[2]: D[2].identity_map()})

    def test_check_rejects_missing_patch(self, refined):
        C, D = refined
        with pytest.raises(ValueError):
            CoveringMorphism(D, C, {D[0]: D[0].inclusion})

    def test_check_rejects_foreign_codomain(self, refined):
        C, D = refined
        # D(xy) -> D(x) lands in a chart outside C
        with pytest.raises(ValueError):
            CoveringMorphism(
                D, C, {D[0]: D[0].inclusion, D[1]: D[1].inclusion, D[2]: D[2].identity_map()}
            )
