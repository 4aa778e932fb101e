# glueings.py - isomorphisms between open subsets of two affine charts
from __future__ import annotations
import sympy as sp
from sympy import Expr
from typing import Any, Callable, Optional, Tuple

from .charts import AffineChart, ChartMorphism, PrincipalOpenSubset, complement_equation_in, CoefficientMap
from .ideals import lcm_of_denominators, polynomial_part, radical_contains


def _open_in(X: AffineChart, h: Expr) -> AffineChart:
    """D(h) inside X; X itself when h is a nonzero constant."""
    h = sp.sympify(h)
    if h.is_number and h != 0:
        return X
    return PrincipalOpenSubset(X, h)


# ---------------------- Glueings ----------------------
class Glueing:
    """
    Glueing of the charts X and Y along open subsets U of X and V of Y.

    Attributes:
        X, Y: the glued charts
        f: isomorphism U -> V
        g: its inverse V -> U
    """
    def __init__(self, X: AffineChart, Y: AffineChart, f: ChartMorphism, g: ChartMorphism, check: bool = True):
        U, V = f.domain, f.codomain
        if g.domain is not V or g.codomain is not U:
            raise ValueError("Glueing morphisms must run between the same two open subsets.")
        # raises ValueError for domains outside the charts
        complement_equation_in(U, X)
        complement_equation_in(V, Y)
        self.X = X
        self.Y = Y
        self.f = f
        self.g = g
        if check:
            self._check_inverse()

    def _check_inverse(self) -> None:
        for first, second in ((self.f, self.g), (self.g, self.f)):
            W = first.domain
            s = W.unit()
            for c, img in zip(W.coords, first.compose(second).images):
                p = polynomial_part(img - c)
                if p != 0 and not radical_contains(W.equations, p * s, W.coords):
                    raise ValueError(f"Glueing morphisms are not mutually inverse on '{W.name}'.")

    @property
    def patches(self) -> Tuple[AffineChart, AffineChart]:
        return self.X, self.Y

    def glueing_domains(self) -> Tuple[AffineChart, AffineChart]:
        return self.f.domain, self.f.codomain

    def glueing_morphisms(self) -> Tuple[ChartMorphism, ChartMorphism]:
        return self.f, self.g

    def inverse(self) -> 'Glueing':
        """The same identification read from Y to X; shares all objects with self."""
        return Glueing(self.Y, self.X, self.g, self.f, check=False)

    def compose(self, other: 'Glueing') -> 'Glueing':
        """
        Glueing of X and Z from glueings X <-> Y and Y <-> Z, defined on the
        part of the overlaps that meets inside Y.
        """
        X, Y = self.patches
        Y2, Z = other.patches
        if Y2 is not Y:
            raise ValueError("Glueings are not composable: they do not share the middle chart.")
        U1, V1 = self.glueing_domains()
        U2, V2 = other.glueing_domains()
        h_W = complement_equation_in(V1.intersect(U2), Y)
        U = _open_in(X, complement_equation_in(U1, X) * polynomial_part(self.f.pullback(h_W)))
        V = _open_in(Z, complement_equation_in(V2, Z) * polynomial_part(other.g.pullback(h_W)))
        f = self.f.compose(other.f).restrict(U, V)
        g = other.g.compose(self.g).restrict(V, U)
        return Glueing(X, Z, f, g, check=False)

    def maximal_extension(self) -> 'Glueing':
        """
        Enlarge the domains to everything on which both maps and their
        inverses are defined.
        """
        X, Z = self.patches
        d_X = lcm_of_denominators(self.f.images)
        d_Z = lcm_of_denominators(self.g.images)
        U = _open_in(X, d_X * polynomial_part(self.f.pullback(d_Z * Z.unit())))
        V = _open_in(Z, d_Z * polynomial_part(self.g.pullback(d_X * X.unit())))
        return Glueing(X, Z, self.f.restrict(U, V), self.g.restrict(V, U), check=False)

    def base_change(
        self,
        phi: CoefficientMap,
        patch_change1: ChartMorphism,
        patch_change2: ChartMorphism
    ) -> 'Glueing':
        """
        Transport the glueing along the base changes X' -> X and Y' -> Y
        of its two charts.
        """
        X, Y = self.patches
        new_X, new_Y = patch_change1.domain, patch_change2.domain
        U, V = self.glueing_domains()
        new_U = _open_in(new_X, phi(complement_equation_in(U, X)))
        new_V = _open_in(new_Y, phi(complement_equation_in(V, Y)))
        f = ChartMorphism(new_U, new_V, [phi(e) for e in self.f.images], check=False)
        g = ChartMorphism(new_V, new_U, [phi(e) for e in self.g.images], check=False)
        return Glueing(new_X, new_Y, f, g, check=False)

    def to_target(self, pt: Tuple[float, ...]) -> Tuple[float, ...]:
        return self.f.evaluate(pt)

    def to_source(self, pt: Tuple[float, ...]) -> Tuple[float, ...]:
        return self.g.evaluate(pt)

    def __repr__(self) -> str:
        return f"<Glueing '{self.X.name}' <-> '{self.Y.name}'>"


def inverse(glueing: Any) -> Glueing:
    return glueing.inverse()


def identity_glueing(X: AffineChart) -> Glueing:
    """The glueing of a chart with itself along the identity."""
    id_X = X.identity_map()
    return Glueing(X, X, id_X, id_X, check=False)


# ---------------------- Lazy Glueings ----------------------
class LazyGlueing:
    """
    Glueing of X and Y obtained as transform(source), computed on first
    access and memoized afterwards.
    """
    def __init__(self, X: AffineChart, Y: AffineChart, transform: Callable[[Any], Glueing], source: Any):
        self.X = X
        self.Y = Y
        self._transform = transform
        self._source = source
        self._glueing: Optional[Glueing] = None

    @property
    def patches(self) -> Tuple[AffineChart, AffineChart]:
        return self.X, self.Y

    @property
    def is_computed(self) -> bool:
        return self._glueing is not None

    def underlying_glueing(self) -> Glueing:
        if self._glueing is None:
            self._glueing = self._transform(self._source)
        return self._glueing

    def glueing_domains(self) -> Tuple[AffineChart, AffineChart]:
        return self.underlying_glueing().glueing_domains()

    def glueing_morphisms(self) -> Tuple[ChartMorphism, ChartMorphism]:
        return self.underlying_glueing().glueing_morphisms()

    def inverse(self) -> Glueing:
        return self.underlying_glueing().inverse()

    def compose(self, other: Any) -> Glueing:
        return self.underlying_glueing().compose(other)

    def __repr__(self) -> str:
        state = "computed" if self.is_computed else "pending"
        return f"<LazyGlueing '{self.X.name}' <-> '{self.Y.name}' ({state})>"


def underlying_glueing(G: Any) -> Glueing:
    """Resolve a possibly lazy glueing."""
    if isinstance(G, LazyGlueing):
        return G.underlying_glueing()
    return G


__all__ = [
    'Glueing', 'LazyGlueing', 'inverse', 'identity_glueing', 'underlying_glueing',
]

# End of glueings.py
