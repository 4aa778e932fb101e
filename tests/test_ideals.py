"""
Tests for the Groebner basis helpers
"""
import sympy as sp

from symbolic_schemes.ideals import (
    is_unit_ideal, ideal_contains, radical_contains, saturation,
    polynomial_part, lcm_of_denominators, groebner_basis,
)

x, y = sp.symbols('x y')


class TestMembership:
    def test_unit_ideal(self):
        assert is_unit_ideal([x, x - 1], [x])
        assert not is_unit_ideal([x], [x])
        assert not is_unit_ideal([], [x])

    def test_ideal_contains(self):
        assert ideal_contains([x * y], x**2 * y, [x, y])
        assert not ideal_contains([x * y], x, [x, y])
        assert ideal_contains([], 0, [x])

    def test_radical_contains(self):
        assert radical_contains([x**2], x, [x, y])
        assert not radical_contains([x**2], y, [x, y])

    def test_groebner_basis_of_empty_list(self):
        assert groebner_basis([0], [x, y]) == []


class TestSaturation:
    def test_saturation_removes_component(self):
        assert saturation([x * y], x, [x, y]) == [y]

    def test_saturation_by_unit(self):
        assert saturation([x * y], 1, [x, y]) == [x * y]

    def test_saturation_of_zero_ideal(self):
        assert saturation([], x, [x, y]) == []


class TestRationalFunctions:
    def test_polynomial_part(self):
        assert polynomial_part((x**2 - 1) / (x + 1)) == x - 1
        assert polynomial_part(y / x**2) == y

    def test_lcm_of_denominators(self):
        assert lcm_of_denominators([1 / x, y / x**2, 3]) == x**2
        assert lcm_of_denominators([x, y]) == 1
