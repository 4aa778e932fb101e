# refinements.py - refinement relations between coverings
from __future__ import annotations
import logging
from typing import Callable, Optional, Sequence, Tuple

from .charts import AffineChart, ChartMorphism
from .covering import Covering
from .covering_morphisms import CoveringMorphism, identity_map
from .errors import UnsupportedRefinement

logger = logging.getLogger(__name__)


# ---------------------- Ancestor Tracing ----------------------
def has_ancestor(predicate: Callable[[AffineChart], bool], U: AffineChart) -> bool:
    """Whether U or one of its ancestors satisfies predicate."""
    node: Optional[AffineChart] = U
    while node is not None:
        if predicate(node):
            return True
        node = node.ancestor
    return False


def has_ancestor_in(charts: Sequence[AffineChart], U: AffineChart) -> bool:
    return has_ancestor(lambda x: any(y is x for y in charts), U)


def find_chart(U: AffineChart, candidates: Sequence[AffineChart]) -> Tuple[Optional[ChartMorphism], bool]:
    """
    Walk up the ancestors of U until one of the candidates is met.

    Returns the composed inclusion of U into that candidate and True, or
    (None, False) if no ancestor of U is a candidate.
    """
    f = U.identity_map()
    node = U
    while True:
        if any(node is y for y in candidates):
            return f, True
        if node.ancestor is None:
            return None, False
        f = f.compose(node.inclusion)
        node = node.ancestor


# ---------------------- Refinements ----------------------
def is_refinement(D: Covering, C: Covering) -> Tuple[bool, Optional[CoveringMorphism]]:
    """
    Whether every patch of D descends from a patch of C. If so, also return
    the covering morphism D -> C made of the inclusions.
    """
    targets = C.patches
    if not all(has_ancestor_in(targets, U) for U in D):
        return False, None
    maps = {}
    for U in D:
        f, _ = find_chart(U, targets)
        maps[U] = f
    return True, CoveringMorphism(D, C, maps, check=False)


def common_refinement(C: Covering, D: Covering) -> Tuple[Covering, CoveringMorphism, CoveringMorphism]:
    """
    A common refinement E of C and D with the morphisms E -> C and E -> D.

    Only the cases where one covering already refines the other are
    supported; otherwise UnsupportedRefinement is raised.
    """
    if C is D:
        phi = identity_map(C)
        return C, phi, phi

    success, phi = is_refinement(C, D)
    if success:
        return C, identity_map(C), phi

    success, phi = is_refinement(D, C)
    if success:
        return D, phi, identity_map(D)

    logger.debug("no refinement relation between %s and %s", C, D)
    raise UnsupportedRefinement("common refinement of unrelated coverings is not implemented")


__all__ = ['has_ancestor', 'has_ancestor_in', 'find_chart', 'is_refinement', 'common_refinement']

# End of refinements.py
