# base_change.py - base change of a covering along a coefficient map
from __future__ import annotations
import logging
from typing import Dict, List, Tuple

from sympy import Expr

from .charts import AffineChart, ChartMorphism, CoefficientMap
from .covering import Covering
from .covering_morphisms import CoveringMorphism
from .glueings import Glueing

logger = logging.getLogger(__name__)


def base_change(phi: CoefficientMap, C: Covering) -> Tuple[Covering, CoveringMorphism]:
    """
    Apply the coefficient map phi to every patch and every stored glueing of C.

    Returns the new covering C' and the covering morphism C' -> C made of the
    patch base changes. Decomposition info, if present, is pulled back along
    the new chart morphisms.
    """
    patches = C.patches
    patch_change = [U.base_change(phi) for U in patches]

    glueing_dict: Dict[Tuple[AffineChart, AffineChart], Glueing] = {}
    for i, U in enumerate(patches):
        A, map_A = patch_change[i]
        for j, V in enumerate(patches):
            if not C.has_glueing(U, V):
                continue
            B, map_B = patch_change[j]
            glueing_dict[(A, B)] = C[U, V].base_change(phi, map_A, map_B)
    new_covering = Covering([A for A, _ in patch_change], glueing_dict)

    mor_dict: Dict[AffineChart, ChartMorphism] = {A: psi for A, psi in patch_change}

    if C.has_decomposition_info():
        info = C.decomposition_info()
        decomp: Dict[AffineChart, List[Expr]] = {}
        for A, psi in patch_change:
            decomp[A] = [psi.pullback(a) for a in info[psi.codomain]]
        new_covering.set_decomposition_info(decomp)

    logger.info("base change of %s: %d glueings transported", C, len(glueing_dict))
    return new_covering, CoveringMorphism(new_covering, C, mor_dict, check=False)


__all__ = ['base_change']

# End of base_change.py
