# miratope

A library for the symmetry side of polytope work in *n*-dimensional space:

- **Coxeter diagrams** in inline ASCII notation (`x3o3o`, `o5o3o3o`,
  `x3o3o3o3o *c3o`, `(1.0)4(2.2)3(-3.0)`, `s4s3o4o`, ...), read into a graph
  of nodes and edges.
- **Coxeter matrices**, the unit mirror normals they describe, and the
  generator point and circumradius of the polytope a diagram describes.
- **Symmetry groups** as iterables of matrices: Coxeter groups, cyclic and
  dihedral rotation groups, central inversion, coordinate reflections, and
  their direct, matrix, swirl and step-prism products.
- **Geometry helpers**: hyperspheres for reciprocating points, affine
  subspaces, oriented hyperplanes, line segments, and fuzzy-ordered matrices
  that compare floating-point values within a tolerance of `1e-7`.

## Installation

```
pip install .
```

The package needs `numpy` and `sortedcontainers`. The test suite runs with
`pytest` (installed by the `test` extra: `pip install .[test]`).

## Coxeter diagrams

`miratope.parse` reads diagrams; `miratope.cd` holds the diagram types.

```python
from miratope.parse import parse_cd, parse_cox

cd = parse_cd("x3o3x")
cd.nodes()          # [Node ringed 1.0, Node unringed, Node ringed 1.0]
cd.cox()            # the 3x3 Coxeter matrix, a miratope.coxeter.Cox
cd.minimal()        # whether every connected component has a ringed node
cd.generator()      # the generator point, or None
cd.circumradius()   # its norm, or None

cox = parse_cox("o5o3o")
cox.normals()       # upper triangular matrix of unit mirror normals, or None
```

Nodes are single characters (`o` unringed, `s` snub, and ringed lengths such
as `x`, `q`, `f`, `h`, `u`, `F`, ...), parenthesized lengths such as `(2.2)`,
or virtual nodes `*a` ... `*z` and `*-a` ... `*-z` that refer to earlier
nodes counted from the start or from the end. Edges are integers such as `3`
or fractions such as `5/2`; edges of value 2 are not stored.

A malformed diagram raises a subclass of `miratope.cd.CdError`:
`MismatchedParenthesis`, `UnexpectedEnding`, `CdParseError`, `InvalidSymbol`,
`InvalidEdge` or `RepeatEdge`. Each carries the position (a byte offset into
the UTF-8 text) or the nodes involved.

`miratope.coxeter.Cox` also builds the standard matrices directly:
`Cox.a(n)`, `Cox.b(n)`, `Cox.d(n)`, `Cox.e(n)`, `Cox.h(n)`, `Cox.i2(x)` and
`Cox.trivial()`. `Cox.gen_iter()` returns a `miratope.gen_iter.GenIter` over
the reflection group, or `None` if the mirrors don't fit in spherical space.

## Symmetry groups

`miratope.groups.Group` pairs an iterable of elements with their dimension
and group operations.

```python
from miratope.groups import Group

h3 = Group.parse("o5o3o")
print(len(list(h3.cache())))                                 # 120

print(sum(1 for _ in Group.hypercube(3).rotations()))        # 24

a3 = Group.simplex(3)
print(sum(1 for _ in a3.direct_product(Group.simplex(3))))   # 576

print(sum(1 for _ in Group.dihedral_2(5)))                   # 10
```

Constructions include `trivial`, `cyclic`, `cyclic_gen`, `two`,
`central_inv`, `reflection_at`, `involution`, `dihedral_2`, `dihedral_3`,
`parse`, `coxeter`, `simplex`, `hypercube`, `demihypercube`, `gosset`
(n from 4 to 8) and `pentagonal` (n from 2 to 4). Derived groups come from
`sub`, `iso`, `rotations`, `pad`, `matrix_product`, `with_central_inv`,
`with_reflection_at`, `direct_product`, `swirl`, `swirl_hom`, `step_hom` and
`permutations`. `parse` and `coxeter` return `None` for a non-spherical group;
the named Coxeter constructors raise `ValueError` instead.

Groups generated from Coxeter diagrams are enumerated once, breadth first.
Call `cache()` when you need to go over the same group more than once.

The building blocks are usable on their own:

- `miratope.group_item`: `ScalarOps`, `MatrixOps(dim)` and `QuaternionOps`,
  the identity, inverse, product and ordering key of each kind of element.
- `miratope.cyclic.Cyclic`: the powers of one generator, ending with the
  identity.
- `miratope.gen_iter.GenIter`: the group generated by a list of elements.
- `miratope.pairs.Pair`: every pair of two sequences, the first index varying
  fastest.
- `miratope.permutation`: `Permutation`, `PermutationOps` and
  `PermutationIter`, the permutation representation of a group.

## Geometry

```python
import numpy as np
from miratope.geometry import Hypersphere, Subspace, Hyperplane, Segment

Hypersphere.unit(2).reciprocate(np.array([3.0, 4.0]))   # [0.12, 0.16]

plane = Subspace.from_points([np.zeros(3), np.array([1.0, 0, 0]), np.array([0, 1.0, 0])])
plane.rank()                                  # 2
plane.distance(np.array([0.0, 0.0, 5.0]))     # 5.0

h = Hyperplane(np.array([0.0, 0.0, 1.0]), 0.0)
h.intersect(Segment(np.array([0.0, 0.0, 1.0]), np.array([0.0, 0.0, -1.0])))  # [0, 0, 0]
```

`MatrixOrd` wraps a matrix so that equality and ordering treat entries within
`1e-7` of each other as equal.

## What this package does not do

It works with diagrams, matrices, symmetry groups and points only. It does
not build polytopes as face lattices, take duals or products of polytopes,
read or write polytope files, or draw anything on screen, and it has no
command-line program.