"""
Demo script for P^2 using symbolic_schemes.
Covers: chart definitions, glueings, lazy inverses, glueing graphs,
filling in transitions, refinements, base change and LaTeX export.
"""
import os
import sympy as sp

from symbolic_schemes import (
    AffineChart, ChartMorphism, Glueing, Covering,
    common_refinement, base_change, LaTeXExporter, setup_logging,
)
from symbolic_schemes.visualization import GlueingGraphPlotter


def glue(X, Y, hX, hY, fwd, bwd):
    """Glue D(hX) in X with D(hY) in Y along the given coordinate images."""
    U = X.hypersurface_complement(hX)
    V = Y.hypersurface_complement(hY)
    return Glueing(X, Y, ChartMorphism(U, V, fwd), ChartMorphism(V, U, bwd))


def main():
    setup_logging("INFO")
    os.makedirs("figures", exist_ok=True)

    print("\n1. Charts of the projective plane")
    print("---------------------------------")
    a, b, c, d, e, f = sp.symbols('a b c d e f')
    U0 = AffineChart("U0", [a, b])  # X0 != 0: a = X1/X0, b = X2/X0
    U1 = AffineChart("U1", [c, d])  # X1 != 0: c = X0/X1, d = X2/X1
    U2 = AffineChart("U2", [e, f])  # X2 != 0: e = X0/X2, f = X1/X2
    C = Covering([U0, U1, U2])
    print(C.to_text())

    print("\n2. Glueings and lazy inverses")
    print("-----------------------------")
    C.add_glueing(glue(U0, U1, a, c, [1/a, b/a], [1/c, d/c]))
    C.add_glueing(glue(U1, U2, d, f, [c/d, 1/d], [e/f, 1/f]))
    print("U1 -> U0:", C[U1, U0].f.images)
    print("glueing graph edges:", sorted(C.glueing_graph().edges))

    print("\n3. Filling in transitions")
    print("-------------------------")
    C.fill_transitions()
    G02 = C[U0, U2]
    print("inferred U0 -> U2:", G02.f.images, "on", G02.glueing_domains()[0])
    print("glueing graph edges:", sorted(C.glueing_graph().edges))
    print("transition graph:", C.transition_graph().number_of_nodes(), "vertices")

    print("\n4. Refinements")
    print("--------------")
    V0 = U0.hypersurface_complement(a - 1)
    D = Covering([V0, U1, U2])
    E, phi, psi = common_refinement(D, C)
    print("common refinement is D:", E is D)
    print("V0 maps to", phi[V0].codomain.name if E is C else psi[V0].codomain.name)

    print("\n5. Base change")
    print("--------------")
    t = sp.Symbol('t')
    W0 = AffineChart("W0", [a, b], inverted=[a - t])
    W1 = AffineChart("W1", [c, d], inverted=[1 - t*c])
    B = Covering([W0, W1])
    B.add_glueing(glue(W0, W1, a, c, [1/a, b/a], [1/c, d/c]))
    B2, to_B = base_change(lambda expr: sp.sympify(expr).subs(t, 2), B)
    print(B2.to_text())
    print("W0 after base change inverts", B2[0].inverted)

    print("\n6. Export")
    print("---------")
    LaTeXExporter.covering(C, os.path.join("figures", "covering.tex"))
    LaTeXExporter.glueing(G02, os.path.join("figures", "glueing_02.tex"))
    GlueingGraphPlotter(C).save(os.path.join("figures", "glueing_graph.png"))
    print("written to figures/")


if __name__ == "__main__":
    main()
