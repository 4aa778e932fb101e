"""
Exceptions raised by the covering layer.

All of them derive from SchemeError and from the builtin exception a caller
would naturally catch for the same situation (KeyError for lookup misses,
NotImplementedError for the unsupported refinement case, ValueError for
degenerate input).
"""


class SchemeError(Exception):
    """Base class for errors of the symbolic_schemes package."""


class ChartNotFound(SchemeError, KeyError):
    """A chart was looked up in a covering that does not contain it."""


class GlueingNotFound(SchemeError, KeyError):
    """Neither the requested glueing nor its inverse is registered."""


class UnsupportedRefinement(SchemeError, NotImplementedError):
    """The two coverings are not in a refinement relation in either direction."""


class EmptyCoveringDegenerate(SchemeError, ValueError):
    """The covering has no (non-empty) charts to work with."""


__all__ = [
    'SchemeError', 'ChartNotFound', 'GlueingNotFound',
    'UnsupportedRefinement', 'EmptyCoveringDegenerate',
]

# End of errors.py
