"""Coxeter diagrams and matrices, symmetry groups and n-dimensional geometry."""

__version__ = "0.1.0"

__all__ = [
    "cd",
    "coxeter",
    "cyclic",
    "gen_iter",
    "geometry",
    "group_item",
    "groups",
    "pairs",
    "parse",
    "permutation",
]