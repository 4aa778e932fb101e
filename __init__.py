"""symbolic_schemes/ # root package
├── __init__.py # imports and version info
├── config.py # global constants
├── logging_config.py # logger setup
├── errors.py # exception hierarchy
├── ideals.py # Groebner basis helpers
├── charts.py # AffineChart, PrincipalOpenSubset, ChartMorphism
├── glueings.py # Glueing, LazyGlueing
├── covering.py # Covering: patches, glueings, glueing/transition graphs
├── covering_morphisms.py # CoveringMorphism
├── refinements.py # refinement relations, common refinements
├── base_change.py # base change of coverings
├── visualization.py # graph plotting
├── latex_exporter.py # LaTeX export utilities
└── examples/
    ├── __init__.py
    └── projective_plane.py # P^2 glued from three affine planes"""

# symbolic_schemes/__init__.py
"""
symbolic_schemes: symbolic coverings of schemes by affine charts.

Modules:
  charts             - AffineChart, PrincipalOpenSubset and ChartMorphism
  glueings           - Glueing, LazyGlueing, composition and maximal extension
  covering           - Covering with glueing store, glueing and transition graphs
  covering_morphisms - CoveringMorphism between coverings
  refinements        - is_refinement, common_refinement
  base_change        - base change of a covering along a coefficient map
  visualization      - glueing graph plotting
  latex_exporter     - Utilities to export coverings and glueings to LaTeX

Usage:
  from symbolic_schemes import AffineChart, ChartMorphism, Glueing, Covering
"""
__version__ = "0.1.0"

# core imports
from .errors import (
    SchemeError, ChartNotFound, GlueingNotFound, UnsupportedRefinement, EmptyCoveringDegenerate,
)
from .charts import AffineChart, PrincipalOpenSubset, ChartMorphism
from .glueings import Glueing, LazyGlueing
from .covering import Covering
from .covering_morphisms import CoveringMorphism, identity_map
from .refinements import is_refinement, common_refinement, find_chart, has_ancestor
from .base_change import base_change
from .latex_exporter import LaTeXExporter
from .logging_config import setup_logging

# package-level shortcuts
__all__ = [
    "SchemeError", "ChartNotFound", "GlueingNotFound", "UnsupportedRefinement", "EmptyCoveringDegenerate",
    "AffineChart", "PrincipalOpenSubset", "ChartMorphism",
    "Glueing", "LazyGlueing",
    "Covering", "CoveringMorphism", "identity_map",
    "is_refinement", "common_refinement", "find_chart", "has_ancestor",
    "base_change",
    "LaTeXExporter", "setup_logging",
]
