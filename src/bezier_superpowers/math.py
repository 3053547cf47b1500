# This file is part of bezier-superpowers.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""
Exact root finding for the low-degree polynomials of Bézier derivatives.

Coordinates are converted to rationals before solving, so the classification
of roots (real or complex, single or double) does not depend on rounding.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import sympy as sp

type Symbol = "sp.Symbol"
type Expr = "sp.Expr"
type Boolean = "sp.logic.boolalg.Boolean"


def float_to_rat(x: float) -> Expr:
    """
    Convert a :class:`float` to a SymPy :class:`sympy.Rational`.

    The conversion goes through :func:`repr`, so ``0.1`` becomes ``1/10``
    rather than the exact binary value of the float.

    :raises ValueError: If ``x`` is infinite or NaN.
    """
    import sympy as sp

    x = float(x)
    if not math.isfinite(x):
        raise ValueError(f"Cannot convert {x} to a rational")
    return sp.Rational(repr(x))


def as_bool(r: Boolean) -> bool:
    """
    Coerce a SymPy Boolean to builtin :class:`bool`.

    :raises ValueError: If ``r`` cannot be simplified to a definite Boolean.
    """
    import sympy as sp

    r = sp.simplify(r)
    if isinstance(r, sp.logic.boolalg.BooleanTrue):
        return True
    if isinstance(r, sp.logic.boolalg.BooleanFalse):
        return False
    raise ValueError(f"Cannot be evaluated to a Boolean: {r}")


def polynomial_roots(poly: Expr, x: Symbol, *, real_only: bool = True) -> Counter[Expr]:
    r"""
    Roots of a univariate polynomial of degree at most two.

    A quadratic :math:`a_2 x^2 + a_1 x + a_0` is solved with the quadratic
    formula; with ``real_only``, a negative discriminant gives no roots.

    :param poly: Polynomial expression in ``x``.
    :param x: Polynomial variable.
    :param real_only: Discard complex roots.
    :return: Mapping from each root to its multiplicity.
    :raises ValueError: For the zero polynomial (infinitely many solutions) and
                        for degrees above two.
    """
    import sympy as sp

    match sp.Poly(poly, x).all_coeffs():
        case [a2, a1, a0]:
            disc = a1**2 - 4 * a2 * a0
            if real_only and not as_bool(sp.GreaterThan(disc, 0)):
                return Counter()
            root = sp.sqrt(disc)
            return Counter([(-a1 + root) / (2 * a2), (-a1 - root) / (2 * a2)])
        case [a1, a0]:
            return Counter([-a0 / a1])
        case [a0]:
            if as_bool(sp.Eq(a0, 0)):
                raise ValueError("Infinitely many solutions!")
            return Counter()
        case _:
            raise ValueError(f"Only polynomials up to degree 2 are supported, got {poly}")
