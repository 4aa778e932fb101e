# covering_morphisms.py - morphisms between coverings, chart by chart
from __future__ import annotations
from typing import Dict, Iterator, Mapping, Tuple

from .charts import AffineChart, ChartMorphism
from .covering import Covering


class CoveringMorphism:
    """
    Morphism of coverings D -> C: for every patch U of D a chart morphism
    from U into some patch of C.

    With check=True every patch of D must have a morphism whose domain is
    that patch and whose codomain is a patch of C.
    """
    def __init__(
        self,
        domain: Covering,
        codomain: Covering,
        morphisms: Mapping[AffineChart, ChartMorphism],
        check: bool = True
    ):
        self.domain = domain
        self.codomain = codomain
        self._morphisms: Dict[int, ChartMorphism] = {}
        for U, f in morphisms.items():
            self._morphisms[domain.index_of(U)] = f
        if check:
            self._check()

    def _check(self) -> None:
        for i, U in enumerate(self.domain.patches):
            f = self._morphisms.get(i)
            if f is None:
                raise ValueError(f"no morphism given for patch '{U.name}'")
            if f.domain is not U:
                raise ValueError(f"morphism for patch '{U.name}' has the wrong domain")
            if f.codomain not in self.codomain:
                raise ValueError(f"morphism for patch '{U.name}' does not land in a patch of the codomain")

    def __getitem__(self, U: AffineChart) -> ChartMorphism:
        return self._morphisms[self.domain.index_of(U)]

    def __len__(self) -> int:
        return len(self._morphisms)

    def __iter__(self) -> Iterator[Tuple[AffineChart, ChartMorphism]]:
        patches = self.domain.patches
        for i in sorted(self._morphisms):
            yield patches[i], self._morphisms[i]

    def morphisms(self) -> Dict[AffineChart, ChartMorphism]:
        return dict(iter(self))

    def __repr__(self) -> str:
        return f"<CoveringMorphism {self.domain} -> {self.codomain}>"


def identity_map(C: Covering) -> CoveringMorphism:
    return CoveringMorphism(C, C, {U: U.identity_map() for U in C}, check=False)


__all__ = ['CoveringMorphism', 'identity_map']

# End of covering_morphisms.py
