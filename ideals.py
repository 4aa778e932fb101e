"""
Ideal-theoretic helpers on top of sympy Groebner bases.

All functions take the ideal as a list of generators (sympy expressions in
the given coordinate symbols). Symbols not listed among the coordinates are
treated as coefficients.
"""
from __future__ import annotations
from functools import reduce
from typing import List, Sequence

import sympy as sp
from sympy import Expr, Symbol, sympify

from . import config


def _clean(gens: Sequence[Expr]) -> List[Expr]:
    out = []
    for g in gens:
        g = sp.expand(sympify(g))
        if g != 0:
            out.append(g)
    return out


def polynomial_part(expr: Expr) -> Expr:
    """
    Numerator of expr after cancellation.

    Denominators of complement equations are units on the ambient chart, so
    D(expr) = D(polynomial_part(expr)).
    """
    num, _ = sp.fraction(sp.cancel(sp.together(sympify(expr))))
    return sp.expand(num)


def denominator(expr: Expr) -> Expr:
    """Denominator of expr after cancellation."""
    _, den = sp.fraction(sp.cancel(sp.together(sympify(expr))))
    return den


def lcm_of_denominators(exprs: Sequence[Expr]) -> Expr:
    """Least common multiple of the denominators of exprs."""
    return reduce(sp.lcm, [denominator(e) for e in exprs], sp.Integer(1))


def groebner_basis(gens: Sequence[Expr], coords: Sequence[Symbol], order: str = None) -> List[Expr]:
    """Reduced Groebner basis of the ideal generated by gens."""
    gens = _clean(gens)
    if not gens:
        return []
    if not coords:
        # nonzero constants only
        return [sp.Integer(1)]
    G = sp.groebner(gens, *coords, order=order or config.GROEBNER_ORDER)
    return list(G.exprs)


def is_unit_ideal(gens: Sequence[Expr], coords: Sequence[Symbol]) -> bool:
    """True if 1 lies in the ideal generated by gens."""
    basis = groebner_basis(gens, coords)
    return any(g.is_number and g != 0 for g in basis)


def ideal_contains(gens: Sequence[Expr], f: Expr, coords: Sequence[Symbol]) -> bool:
    """Ideal membership of the polynomial f."""
    f = sp.expand(sympify(f))
    if f == 0:
        return True
    gens = _clean(gens)
    if not gens:
        return False
    if not coords:
        return True
    G = sp.groebner(gens, *coords, order=config.GROEBNER_ORDER)
    return G.contains(f)


def radical_contains(gens: Sequence[Expr], f: Expr, coords: Sequence[Symbol]) -> bool:
    """
    Radical membership via the Rabinowitsch trick:
    f is in rad(I) iff 1 is in I + (1 - t f) for an auxiliary variable t.
    """
    t = sp.Dummy('t')
    return is_unit_ideal(list(gens) + [1 - t * sympify(f)], [t] + list(coords))


def saturation(gens: Sequence[Expr], f: Expr, coords: Sequence[Symbol]) -> List[Expr]:
    """
    Generators of I : f^oo, obtained by eliminating t from I + (1 - t f).
    """
    f = sympify(f)
    if f.is_number and f != 0:
        return groebner_basis(gens, coords)
    t = sp.Dummy('t')
    basis = groebner_basis(list(gens) + [1 - t * f], [t] + list(coords),
                           order=config.ELIMINATION_ORDER)
    return [g for g in basis if t not in g.free_symbols]


__all__ = [
    'polynomial_part', 'denominator', 'lcm_of_denominators', 'groebner_basis',
    'is_unit_ideal', 'ideal_contains', 'radical_contains', 'saturation',
]

# End of ideals.py
