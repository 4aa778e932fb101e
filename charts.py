# charts.py - affine charts, principal open subsets and morphisms between them
from __future__ import annotations
import logging
import sympy as sp
from sympy import Expr, Symbol, sympify, lambdify
from typing import Callable, Dict, List, Tuple, Optional, Any, Sequence
import numpy as np

from .ideals import polynomial_part, radical_contains, saturation

logger = logging.getLogger(__name__)

CoefficientMap = Callable[[Expr], Expr]


# -------------------------- Affine Charts --------------------------
class AffineChart:
    """
    Affine chart Spec k[x_1, ..., x_n][S^-1] / I.

    Attributes:
        name: label used when printing
        coords: sympy Symbols, the coordinate functions x_1, ..., x_n
        equations: generators of the ideal I
        inverted: polynomials whose product S is inverted

    Charts are compared by identity only: two charts are the same chart iff
    they are the same Python object, even when they are algebraically equal.
    """
    def __init__(
        self,
        name: str,
        coords: Sequence[Symbol],
        equations: Optional[Sequence[Expr]] = None,
        inverted: Optional[Sequence[Expr]] = None
    ):
        if len(set(coords)) != len(coords):
            raise ValueError("Coordinates of a chart must be distinct symbols.")
        self.name = name
        self.coords = list(coords)
        self.equations = [sympify(e) for e in (equations or [])]
        self.inverted = [polynomial_part(h) for h in (inverted or [])]
        self._cache: Dict[str, Any] = {}

    # tree structure used by refinements; plain charts have no ancestor
    ancestor: Optional['AffineChart'] = None
    inclusion: Optional['ChartMorphism'] = None

    def get_cached(self, key: str, compute_fn: Callable[[], Any]) -> Any:
        if key not in self._cache:
            self._cache[key] = compute_fn()
        return self._cache[key]

    @property
    def dim_ambient(self) -> int:
        return len(self.coords)

    def coordinates(self) -> List[Symbol]:
        return list(self.coords)

    def unit(self) -> Expr:
        """Product of the inverted polynomials (1 if nothing is inverted)."""
        return sp.Mul(*self.inverted) if self.inverted else sp.Integer(1)

    def is_empty(self) -> bool:
        """The chart is empty iff S lies in the radical of I."""
        return self.get_cached(
            'is_empty', lambda: radical_contains(self.equations, self.unit(), self.coords)
        )

    def is_dense(self) -> bool:
        """A chart is dense in itself."""
        return True

    def intersect(self, other: 'AffineChart') -> 'AffineChart':
        """Intersection with an open subset of this chart."""
        if other is self:
            return self
        if isinstance(other, PrincipalOpenSubset) and other.ambient is self:
            return other
        raise ValueError(f"{other!r} is not an open subset of chart '{self.name}'.")

    def hypersurface_complement(self, h: Expr, name: Optional[str] = None) -> 'PrincipalOpenSubset':
        """The principal open subset D(h) of this chart."""
        return PrincipalOpenSubset(self, h, name=name)

    def identity_map(self) -> 'ChartMorphism':
        return ChartMorphism(self, self, list(self.coords), check=False)

    def base_change(self, phi: CoefficientMap) -> Tuple['AffineChart', 'ChartMorphism']:
        """
        Apply the coefficient map phi to the equations and inverted elements.

        Returns the new chart together with the morphism new chart -> self
        whose pullback is phi.
        """
        new_chart = AffineChart(
            self.name,
            self.coords,
            [phi(e) for e in self.equations],
            [phi(h) for h in self.inverted],
        )
        return new_chart, ChartMorphism(new_chart, self, list(self.coords), coefficient_map=phi, check=False)

    def describe(self) -> str:
        n = self.dim_ambient
        if self.equations and self.inverted:
            return f"locally closed subscheme of affine {n}-space"
        if self.equations:
            return f"closed subscheme of affine {n}-space"
        if self.inverted:
            return f"open subscheme of affine {n}-space"
        return f"affine {n}-space"

    def __repr__(self) -> str:
        return f"<AffineChart '{self.name}' coords={self.coords}>"


class PrincipalOpenSubset(AffineChart):
    """
    Complement of the hypersurface {h = 0} in an ambient chart.

    It is an affine chart in its own right whose ancestor is the ambient
    chart; `inclusion` is the canonical open embedding into the ambient.
    """
    def __init__(self, ambient: AffineChart, complement_equation: Expr, name: Optional[str] = None):
        h = polynomial_part(complement_equation)
        super().__init__(
            name or f"D({h}) in {ambient.name}",
            ambient.coords,
            ambient.equations,
            ambient.inverted + [h],
        )
        self.ambient = ambient
        self.complement_equation = h
        self.ancestor = ambient
        self.inclusion = ChartMorphism(self, ambient, list(ambient.coords), check=False)

    def is_dense(self) -> bool:
        """
        D(h) is dense in X = Spec k[x][1/s]/I iff every generator g of
        I : (s h)^oo satisfies g s in rad(I).
        """
        def compute() -> bool:
            s = self.ambient.unit()
            sat = saturation(self.equations, s * self.complement_equation, self.coords)
            return all(radical_contains(self.equations, g * s, self.coords) for g in sat)
        return self.get_cached('is_dense', compute)

    def intersect(self, other: AffineChart) -> AffineChart:
        if other is self or other is self.ambient:
            return self
        if isinstance(other, PrincipalOpenSubset) and other.ambient is self:
            # self used as a chart of its own
            return other
        if isinstance(other, PrincipalOpenSubset) and other.ambient is self.ambient:
            return PrincipalOpenSubset(self.ambient, self.complement_equation * other.complement_equation)
        raise ValueError("Open subsets must lie in a common chart.")

    def is_subset(self, other: AffineChart) -> bool:
        """D(h1) is contained in D(h2) iff h1 s lies in rad(I + (h2))."""
        if other is self or other is self.ambient:
            return True
        if not (isinstance(other, PrincipalOpenSubset) and other.ambient is self.ambient):
            raise ValueError("Open subsets must lie in a common chart.")
        s = self.ambient.unit()
        return radical_contains(
            self.equations + [other.complement_equation], self.complement_equation * s, self.coords
        )

    def is_equal(self, other: AffineChart) -> bool:
        if other is self.ambient:
            return self.ambient.hypersurface_complement(1).is_subset(self)
        return self.is_subset(other) and other.is_subset(self)

    def __repr__(self) -> str:
        return f"<PrincipalOpenSubset D({self.complement_equation}) of '{self.ambient.name}'>"


def complement_equation_in(U: AffineChart, X: AffineChart) -> Expr:
    """The polynomial h with U = D(h) inside the chart X."""
    if U is X:
        return sp.Integer(1)
    if isinstance(U, PrincipalOpenSubset) and U.ambient is X:
        return U.complement_equation
    raise ValueError(f"{U!r} is not an open subset of chart '{X.name}'.")


# ---------------------- Morphisms of Charts ----------------------
class ChartMorphism:
    """
    Morphism X -> Y of affine charts.

    The morphism is given by the images of Y's coordinates, as rational
    functions in X's coordinates. An optional coefficient map is applied to
    an element of O(Y) before the coordinates are substituted; base change
    uses it to move coefficients to the new base.
    """
    def __init__(
        self,
        domain: AffineChart,
        codomain: AffineChart,
        images: Sequence[Expr],
        coefficient_map: Optional[CoefficientMap] = None,
        check: bool = True
    ):
        if len(images) != len(codomain.coords):
            raise ValueError(
                f"Morphism into '{codomain.name}' requires {len(codomain.coords)} images, got {len(images)}."
            )
        self.domain = domain
        self.codomain = codomain
        self.images = [sp.cancel(sympify(e)) for e in images]
        self.coefficient_map = coefficient_map
        self._num_func = None
        if check:
            self._check_equations()

    def _check_equations(self) -> None:
        # the equations of Y have to vanish on X
        s = self.domain.unit()
        for eq in self.codomain.equations:
            p = polynomial_part(self.pullback(eq))
            if not radical_contains(self.domain.equations, p * s, self.domain.coords):
                raise ValueError(f"Images do not satisfy the equation {eq} of '{self.codomain.name}'.")

    def pullback(self, a: Expr) -> Expr:
        """Pull an element of O(codomain) back to O(domain)."""
        b = sympify(a)
        if self.coefficient_map is not None:
            b = sympify(self.coefficient_map(b))
        return sp.cancel(b.xreplace(dict(zip(self.codomain.coords, self.images))))

    def compose(self, other: 'ChartMorphism') -> 'ChartMorphism':
        """
        self followed by other. The codomain of self and the domain of other
        must live in the same coordinates; the composite is defined where
        its images are.
        """
        if list(other.domain.coords) != list(self.codomain.coords):
            raise ValueError("Morphisms are not composable: coordinates do not match.")
        coefficient_map = None
        if self.coefficient_map is not None or other.coefficient_map is not None:
            first = other.coefficient_map or (lambda e: e)
            second = self.coefficient_map or (lambda e: e)
            coefficient_map = lambda e: second(first(e))
        images = [self.pullback(img) for img in other.images]
        return ChartMorphism(self.domain, other.codomain, images, coefficient_map=coefficient_map, check=False)

    def restrict(self, domain: AffineChart, codomain: AffineChart) -> 'ChartMorphism':
        """Same images, new domain and codomain."""
        return ChartMorphism(domain, codomain, self.images, coefficient_map=self.coefficient_map, check=False)

    def preimage(self, V: AffineChart) -> AffineChart:
        """Preimage of an open subset V of the codomain, as an open subset of the domain."""
        h = complement_equation_in(V, self.codomain)
        if h == 1:
            return self.domain
        return PrincipalOpenSubset(self.domain, polynomial_part(self.pullback(h)))

    def images_at(self, point: Sequence[Any]) -> Tuple[Expr, ...]:
        """Exact images of a point of the domain."""
        subs = {c: sympify(p) for c, p in zip(self.domain.coords, point)}
        return tuple(sp.simplify(img.xreplace(subs)) for img in self.images)

    def evaluate(self, point: Tuple[float, ...]) -> Tuple[float, ...]:
        """Numeric images of a point of the domain."""
        if self._num_func is None:
            self._num_func = lambdify(self.domain.coords, self.images, 'numpy')
        return tuple(np.array(self._num_func(*point), dtype=float).flatten())

    def __repr__(self) -> str:
        return f"<ChartMorphism '{self.domain.name}' -> '{self.codomain.name}' {self.images}>"


def identity_map(chart: AffineChart) -> ChartMorphism:
    return chart.identity_map()


# ---------------------- Module Export ----------------------
__all__ = [
    'AffineChart', 'PrincipalOpenSubset', 'ChartMorphism',
    'complement_equation_in', 'identity_map',
]

# End of charts.py
