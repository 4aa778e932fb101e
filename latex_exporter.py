import sympy as sp
from sympy import Expr, latex as sympy_latex
from typing import Any, List

from .charts import AffineChart, complement_equation_in


def _chart_tex(chart: AffineChart) -> str:
    ring = rf"\Bbbk[{', '.join(sympy_latex(c) for c in chart.coords)}]"
    if chart.inverted:
        ring += rf"_{{{sympy_latex(chart.unit())}}}"
    if chart.equations:
        ring += rf" / \langle {', '.join(sympy_latex(e) for e in chart.equations)} \rangle"
    return rf"\operatorname{{Spec}} {ring}"


class LaTeXExporter:
    """
    Consolidate LaTeX export for the objects of the symbolic_schemes package.

    Methods:
      - chart         : export an affine chart
      - covering      : export the patches of a covering
      - glueing       : export the domains and maps of a glueing
      - glueing_graph : export the edge list of a covering's glueing graph
      - general       : export any sympy Expr
    """

    @staticmethod
    def chart(chart: AffineChart, filename: str) -> None:
        """
        Export Spec of the coordinate ring of a chart.
        """
        with open(filename, 'w') as f:
            f.write("\\[")
            f.write(_chart_tex(chart))
            f.write("\\]")

    @staticmethod
    def covering(covering: Any, filename: str) -> None:
        """
        Export the numbered list of patches; an empty covering writes a
        single comment line.
        """
        lines: List[str] = []
        if len(covering) == 0:
            lines.append("% Empty covering")
        for k, U in enumerate(covering, start=1):
            lines.append(rf"U_{{{k}}} = {_chart_tex(U)}\\")
        with open(filename, 'w') as f:
            f.write("\n".join(lines))

    @staticmethod
    def glueing(glueing: Any, filename: str) -> None:
        """
        Export the two glueing domains and the forward and backward maps.
        """
        X, Y = glueing.patches
        U, V = glueing.glueing_domains()
        fwd, bwd = glueing.glueing_morphisms()
        lines = [
            rf"D({sympy_latex(complement_equation_in(U, X))}) \subseteq {sympy_latex(sp.Symbol(X.name))}\\",
            rf"D({sympy_latex(complement_equation_in(V, Y))}) \subseteq {sympy_latex(sp.Symbol(Y.name))}\\",
        ]
        for c, img in zip(Y.coords, fwd.images):
            lines.append(rf"{sympy_latex(c)} \mapsto {sympy_latex(img)}\\")
        for c, img in zip(X.coords, bwd.images):
            lines.append(rf"{sympy_latex(c)} \mapsto {sympy_latex(img)}\\")
        with open(filename, 'w') as f:
            f.write("\n".join(lines))

    @staticmethod
    def glueing_graph(covering: Any, filename: str) -> None:
        """
        Export the oriented edges i -> j of the glueing graph (1-based).
        """
        gg = covering.glueing_graph()
        lines = [rf"{i + 1} \to {j + 1}\\" for i, j in sorted(gg.edges)]
        with open(filename, 'w') as f:
            f.write("\n".join(lines))

    @staticmethod
    def general(expr: Expr, filename: str) -> None:
        """
        Export any sympy expression to LaTeX.
        """
        tex = sympy_latex(expr)
        with open(filename, 'w') as f:
            f.write("\\[")
            f.write(tex)
            f.write("\\]")

# End of latex_exporter.py
