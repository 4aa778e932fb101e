# covering.py - coverings by affine charts, their glueings and glueing graphs
from __future__ import annotations
import logging
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

import networkx as nx
from sympy import Expr, sympify

from .charts import AffineChart
from .errors import ChartNotFound, EmptyCoveringDegenerate, GlueingNotFound
from .glueings import Glueing, LazyGlueing, identity_glueing, inverse

logger = logging.getLogger(__name__)

ChartKey = Union[int, AffineChart]
AnyGlueing = Union[Glueing, LazyGlueing]


def _neighbors(gg: nx.DiGraph, v: int) -> List[int]:
    """Neighbors of v in the underlying undirected graph, ascending."""
    return sorted(set(gg.successors(v)) | set(gg.predecessors(v)))


def _has_edge(gg: nx.DiGraph, i: int, j: int) -> bool:
    return gg.has_edge(i, j) or gg.has_edge(j, i)


def _dense_in(U: AffineChart, X: AffineChart) -> bool:
    """Density of the open subset U in the chart X; X is dense in itself."""
    if U is X:
        return True
    return U.is_dense()


class Covering:
    """
    Covering of a scheme by affine charts, glued along open subsets.

    The charts are kept in a fixed order and compared by identity. Glueings
    are stored by pairs of chart indices: registering a glueing of (X, Y)
    also registers a lazy inverse for (Y, X), computed on first use. A
    missing pair means the charts are disjoint or their glueing is unknown.

    Derived data (glueing graph, transition graph) is cached. The glueing
    graph carries a dirty flag which every new glueing sets; the transition
    graph is computed once and kept until clear_cache().
    """
    def __init__(
        self,
        patches: Sequence[AffineChart],
        glueings: Optional[Mapping[Tuple[AffineChart, AffineChart], AnyGlueing]] = None
    ):
        self._patches: List[AffineChart] = []
        self._index: Dict[int, int] = {}
        for U in patches:
            if id(U) not in self._index:
                self._index[id(U)] = len(self._patches)
                self._patches.append(U)
        self._glueings: Dict[Tuple[int, int], AnyGlueing] = {}
        self._explicit: set = set()
        for (X, Y), G in (glueings or {}).items():
            if G.patches[0] is not X or G.patches[1] is not Y:
                raise ValueError(f"glueing {G!r} is stored under the wrong pair ('{X.name}', '{Y.name}')")
            key = (self.index_of(X), self.index_of(Y))
            self._glueings[key] = G
            self._explicit.add(key)
        for i, U in enumerate(self._patches):
            if (i, i) not in self._glueings:
                self._glueings[(i, i)] = identity_glueing(U)
                self._explicit.add((i, i))
        self._decomposition_info: Optional[Dict[int, List[Expr]]] = None
        self._cache: Dict[str, Any] = {}
        self._glueing_graph_dirty = True
        self._all_dense = False

    # ---------------- Cache handling ----------------
    def clear_cache(self) -> None:
        """
        Drop the cached glueing graph, transition graph and edge numbering.
        """
        self._cache.clear()
        self._glueing_graph_dirty = True

    def get_cached(self, key: str, compute_fn: Callable[[], Any]) -> Any:
        if key not in self._cache:
            self._cache[key] = compute_fn()
        return self._cache[key]

    # ---------------- Chart registry ----------------
    @property
    def patches(self) -> List[AffineChart]:
        return list(self._patches)

    @property
    def npatches(self) -> int:
        return len(self._patches)

    def index_of(self, chart: AffineChart) -> int:
        """Position of chart among the patches; raises ChartNotFound."""
        i = self._index.get(id(chart))
        if i is None or self._patches[i] is not chart:
            raise ChartNotFound(f"{chart!r} is not among the patches of the covering")
        return i

    def _resolve(self, key: ChartKey) -> int:
        if isinstance(key, int) and not isinstance(key, bool):
            if not 0 <= key < len(self._patches):
                raise ChartNotFound(f"no patch with index {key}")
            return key
        return self.index_of(key)

    def add_patch(self, chart: AffineChart) -> bool:
        """
        Append a chart to the covering. Returns False if it is already there.
        """
        if chart in self:
            return False
        i = len(self._patches)
        self._index[id(chart)] = i
        self._patches.append(chart)
        self._glueings[(i, i)] = identity_glueing(chart)
        self._explicit.add((i, i))
        self._glueing_graph_dirty = True
        return True

    def __contains__(self, chart: Any) -> bool:
        i = self._index.get(id(chart))
        return i is not None and self._patches[i] is chart

    def __len__(self) -> int:
        return len(self._patches)

    def __iter__(self) -> Iterator[AffineChart]:
        return iter(list(self._patches))

    def __getitem__(self, key: Union[ChartKey, Tuple[ChartKey, ChartKey]]) -> Any:
        """
        C[i] is the i-th patch, C[X] the index of the chart X and
        C[X, Y] the glueing of X and Y.
        """
        if isinstance(key, tuple):
            return self.get_glueing(*key)
        if isinstance(key, AffineChart):
            return self.index_of(key)
        return self._patches[self._resolve(key)]

    # ---------------- Glueing store ----------------
    def get_glueing(self, X: ChartKey, Y: ChartKey) -> Glueing:
        """
        The glueing of X and Y. An inverse is computed on the first request
        and memoized; repeated calls return the same object.
        """
        i, j = self._resolve(X), self._resolve(Y)
        entry = self._glueings.get((i, j))
        if entry is None:
            source = self._glueings.get((j, i))
            if source is None:
                raise GlueingNotFound(
                    f"no glueing of '{self._patches[i].name}' and '{self._patches[j].name}'"
                )
            entry = LazyGlueing(self._patches[i], self._patches[j], inverse, source)
            self._glueings[(i, j)] = entry
        if isinstance(entry, LazyGlueing):
            return entry.underlying_glueing()
        return entry

    def has_glueing(self, X: ChartKey, Y: ChartKey) -> bool:
        i, j = self._resolve(X), self._resolve(Y)
        return (i, j) in self._glueings or (j, i) in self._glueings

    def add_glueing(self, G: AnyGlueing) -> bool:
        """
        Register G for its pair of patches and a lazy inverse for the
        opposite pair, overwriting earlier entries.

        Returns True if the pair of patches had no glueing before. The cached
        glueing graph is marked dirty but not rebuilt.
        """
        X, Y = G.patches
        i, j = self.index_of(X), self.index_of(Y)
        is_new = not self.has_glueing(i, j)
        self._glueings[(i, j)] = G
        self._explicit.add((i, j))
        if i != j:
            self._glueings[(j, i)] = LazyGlueing(Y, X, inverse, G)
            self._explicit.discard((j, i))
            self._glueing_graph_dirty = True
        return is_new

    def glueings(self) -> Dict[Tuple[AffineChart, AffineChart], AnyGlueing]:
        """All stored entries keyed by pairs of patches; lazy entries are not forced."""
        return {(self._patches[i], self._patches[j]): G for (i, j), G in self._glueings.items()}

    def explicit_pairs(self) -> List[Tuple[int, int]]:
        return sorted(self._explicit)

    # ---------------- Glueing graph ----------------
    def update_glueing_graph(self, all_dense: bool = False) -> nx.DiGraph:
        """
        Rebuild and store the glueing graph: an edge i -> j whenever the
        domain in patch i of the glueing (i, j) is dense in patch i. With
        all_dense every registered pair is connected in both directions.

        The all_dense choice is kept: later rebuilds triggered by new
        glueings use it until update_glueing_graph is called again.
        """
        self._all_dense = all_dense
        gg = nx.DiGraph()
        gg.add_nodes_from(range(len(self._patches)))
        for i, j in sorted(self._explicit):
            if i == j:
                continue
            if all_dense:
                gg.add_edge(i, j)
                gg.add_edge(j, i)
                continue
            U, V = self._glueings[(i, j)].glueing_domains()
            if _dense_in(U, self._patches[i]):
                gg.add_edge(i, j)
            if _dense_in(V, self._patches[j]):
                gg.add_edge(j, i)
        self._cache['glueing_graph'] = gg
        self._glueing_graph_dirty = False
        logger.debug("glueing graph rebuilt: %d vertices, %d edges", gg.number_of_nodes(), gg.number_of_edges())
        return gg

    def glueing_graph(self) -> nx.DiGraph:
        """The cached glueing graph, rebuilt first if glueings were added since."""
        if self._glueing_graph_dirty or 'glueing_graph' not in self._cache:
            return self.update_glueing_graph(self._all_dense)
        return self._cache['glueing_graph']

    def pruned_glueing_graph(self) -> nx.DiGraph:
        """
        Glueing graph of the non-empty patches only, re-indexed contiguously
        in their original order.
        """
        keep = [i for i, U in enumerate(self._patches) if not U.is_empty()]
        new_index = {old: new for new, old in enumerate(keep)}
        gt = nx.DiGraph()
        gt.add_nodes_from(range(len(keep)))
        for i, j in sorted(self._explicit):
            if i == j or i not in new_index or j not in new_index:
                continue
            U, V = self._glueings[(i, j)].glueing_domains()
            if _dense_in(U, self._patches[i]):
                gt.add_edge(new_index[i], new_index[j])
            if _dense_in(V, self._patches[j]):
                gt.add_edge(new_index[j], new_index[i])
        return gt

    def is_connected(self) -> bool:
        """Whether the non-empty patches are connected through dense glueings."""
        gt = self.pruned_glueing_graph()
        if gt.number_of_nodes() == 0:
            raise EmptyCoveringDegenerate("covering has no non-empty patches")
        return nx.is_weakly_connected(gt)

    def neighbor_patches(self, chart: ChartKey) -> List[AffineChart]:
        gg = self.glueing_graph()
        return [self._patches[k] for k in _neighbors(gg, self._resolve(chart))]

    # ---------------- Transition graph ----------------
    def _composable_at(self, i: int, v: int, j: int) -> bool:
        # both domains are open subsets of patch v
        _, V_i = self.get_glueing(i, v).glueing_domains()
        U_j, _ = self.get_glueing(v, j).glueing_domains()
        return _dense_in(V_i.intersect(U_j), self._patches[v])

    def _compute_transition_graph(self) -> Tuple[nx.Graph, Dict[Tuple[int, int], int]]:
        gg = self.glueing_graph()
        tg = nx.Graph()
        edge_dict: Dict[Tuple[int, int], int] = {}
        for v in sorted(gg.nodes):
            W = _neighbors(gg, v)
            for a in range(len(W) - 1):
                for b in range(a + 1, len(W)):
                    i, j = W[a], W[b]
                    if not self._composable_at(i, v, j):
                        continue
                    for p, q in ((i, v), (v, j)):
                        if (p, q) not in edge_dict:
                            new_id = tg.number_of_nodes()
                            edge_dict[(p, q)] = edge_dict[(q, p)] = new_id
                            tg.add_node(new_id)
                    tg.add_edge(edge_dict[(i, v)], edge_dict[(v, j)])
        logger.debug("transition graph built: %d vertices, %d edges", tg.number_of_nodes(), tg.number_of_edges())
        return tg, edge_dict

    def transition_graph(self) -> nx.Graph:
        """
        Graph on the edges of the glueing graph: (i, v) and (v, j) are
        adjacent when the two glueings overlap densely in patch v.
        """
        if 'transition_graph' not in self._cache:
            tg, edge_dict = self._compute_transition_graph()
            self._cache['transition_graph'] = tg
            self._cache['edge_dict'] = edge_dict
        return self._cache['transition_graph']

    def edge_dict(self) -> Dict[Tuple[int, int], int]:
        """Vertex ids of the transition graph, by oriented glueing graph edge."""
        self.transition_graph()
        return self._cache['edge_dict']

    # ---------------- Transitive closure ----------------
    def fill_transitions(self) -> 'Covering':
        """
        Infer glueings through intermediate patches until nothing changes.

        Whenever X <- U -> Y <- V -> Z are glued with U and V meeting densely
        in Y, the composite glueing of X and Z is maximally extended and
        registered. The cached glueing graph is updated in place.
        """
        gg = self.glueing_graph()
        total = 0
        n_pass = 0
        dirty = True
        while dirty:
            dirty = False
            n_pass += 1
            added = 0
            for v in range(len(self._patches)):
                W = _neighbors(gg, v)
                for a in range(len(W) - 1):
                    for b in range(a + 1, len(W)):
                        i, j = W[a], W[b]
                        if _has_edge(gg, i, j) or not self._composable_at(i, v, j):
                            continue
                        new_glueing = self.get_glueing(i, v).compose(self.get_glueing(v, j)).maximal_extension()
                        self.add_glueing(new_glueing)
                        gg.add_edge(i, j)
                        gg.add_edge(j, i)
                        added += 1
                        dirty = True
            logger.debug("fill_transitions pass %d added %d glueings", n_pass, added)
            total += added
        # the live graph already contains every new edge
        self._glueing_graph_dirty = False
        logger.info("fill_transitions finished after %d passes, %d glueings inferred", n_pass, total)
        return self

    # ---------------- Decomposition info ----------------
    def set_decomposition_info(self, info: Mapping[AffineChart, Sequence[Expr]]) -> None:
        """Attach a list of ring elements to every patch."""
        stored: Dict[int, List[Expr]] = {}
        for U, elems in info.items():
            stored[self.index_of(U)] = [sympify(a) for a in elems]
        missing = [U.name for i, U in enumerate(self._patches) if i not in stored]
        if missing:
            raise ValueError(f"decomposition info missing for patches {missing}")
        self._decomposition_info = stored

    def has_decomposition_info(self) -> bool:
        return self._decomposition_info is not None

    def decomposition_info(self) -> Dict[AffineChart, List[Expr]]:
        if self._decomposition_info is None:
            raise ValueError("covering carries no decomposition info")
        return {self._patches[i]: list(elems) for i, elems in self._decomposition_info.items()}

    # ---------------- Printing ----------------
    def to_text(self) -> str:
        """
        Human-readable listing of the patches and their coordinates.
        """
        n = len(self._patches)
        if n == 0:
            return "Empty covering"
        width = len(str(n))
        lines = ["Covering", "  described by patches"]
        for k, U in enumerate(self._patches, start=1):
            lines.append(f"    {k:>{width}}: {U.describe()}")
        lines.append("  in the coordinate(s)")
        for k, U in enumerate(self._patches, start=1):
            coords = ", ".join(str(c) for c in U.coordinates())
            lines.append(f"    {k:>{width}}: [{coords}]")
        return "\n".join(lines)

    def __str__(self) -> str:
        n = len(self._patches)
        return f"Covering with {n} {'patch' if n == 1 else 'patches'}"

    def __repr__(self) -> str:
        return f"<{self}>"


__all__ = ['Covering']

# End of covering.py
