"""
Visualization Module for coverings

Draws the combinatorial data of a covering with Matplotlib and networkx:
- the glueing graph (one vertex per patch, arrows i -> j for dense domains)
- the transition graph (one vertex per glueing graph edge)
"""
import logging
import os

import matplotlib

# Non-interactive backend when no display is available
if os.environ.get('DISPLAY', '') == '':
    matplotlib.use('Agg')

import matplotlib.pyplot as plt
import networkx as nx
from typing import Dict, Optional

from .covering import Covering
from .errors import EmptyCoveringDegenerate

logger = logging.getLogger(__name__)


class GlueingGraphPlotter:
    """
    Plots the graphs attached to a covering.

    Usage:
        plotter = GlueingGraphPlotter(covering)
        ax = plotter.plot_glueing_graph()
        plotter.save("glueing_graph.png")
    """
    def __init__(self, covering: Covering):
        self.covering = covering

    def _require_patches(self) -> None:
        if len(self.covering) == 0:
            raise EmptyCoveringDegenerate("nothing to plot for an empty covering")

    @staticmethod
    def _layout(graph: nx.Graph, layout: str) -> Dict:
        if layout == 'circular':
            return nx.circular_layout(graph)
        if layout == 'spring':
            return nx.spring_layout(graph, seed=0)
        raise ValueError(f"Unknown layout '{layout}'.")

    def plot_glueing_graph(
        self,
        ax: Optional[plt.Axes] = None,
        layout: str = 'circular',
        node_color: str = 'lightblue',
        edge_color: str = 'gray'
    ) -> plt.Axes:
        """
        Draw the glueing graph, vertices labelled by patch names.
        """
        self._require_patches()
        gg = self.covering.glueing_graph()
        labels = {i: U.name for i, U in enumerate(self.covering.patches)}
        if ax is None:
            _, ax = plt.subplots(figsize=(6, 6))
        nx.draw_networkx(gg, pos=self._layout(gg, layout), ax=ax, labels=labels,
                         node_color=node_color, edge_color=edge_color, arrows=True)
        ax.set_title(f"Glueing graph ({self.covering})")
        ax.set_axis_off()
        return ax

    def plot_transition_graph(
        self,
        ax: Optional[plt.Axes] = None,
        layout: str = 'spring',
        node_color: str = 'lightgreen',
        edge_color: str = 'gray'
    ) -> plt.Axes:
        """
        Draw the transition graph, vertices labelled by the glueing graph
        edge they stand for.
        """
        self._require_patches()
        tg = self.covering.transition_graph()
        labels: Dict[int, str] = {}
        for (i, j), k in sorted(self.covering.edge_dict().items()):
            labels.setdefault(k, f"{i + 1}-{j + 1}")
        if ax is None:
            _, ax = plt.subplots(figsize=(6, 6))
        if tg.number_of_nodes() == 0:
            logger.debug("transition graph of %s is empty", self.covering)
        nx.draw_networkx(tg, pos=self._layout(tg, layout), ax=ax, labels=labels,
                         node_color=node_color, edge_color=edge_color)
        ax.set_title(f"Transition graph ({self.covering})")
        ax.set_axis_off()
        return ax

    def save(self, filename: str, which: str = 'glueing', dpi: int = 150) -> None:
        """
        Plot one of the graphs ('glueing' or 'transition') into a file.
        """
        if which not in ('glueing', 'transition'):
            raise ValueError(f"Unknown graph '{which}'.")
        fig, ax = plt.subplots(figsize=(6, 6))
        try:
            if which == 'glueing':
                self.plot_glueing_graph(ax=ax)
            else:
                self.plot_transition_graph(ax=ax)
            fig.savefig(filename, bbox_inches='tight', dpi=dpi)
        finally:
            plt.close(fig)

# End of visualization.py
