import math

import numpy as np
import pytest

from arena_aad import Arena, Rule, DomainError, backward
from arena_aad.core.gradcheck import finite_difference
from arena_aad.ops import (
    add, sub, mul, div, neg, power, square, pow,
    exp, log, sqrt, erf, tanh, relu, sigmoid,
    define_unary, define_binary,
)


def _binary(op, x, y):
    arena = Arena()
    a = arena.allocate_leaf(x)
    b = arena.allocate_leaf(y)
    c = op(arena, a, b)
    backward(arena, c)
    return arena.data(c), arena.grad(a), arena.grad(b), arena.grad(c)


def _unary(op, x):
    arena = Arena()
    a = arena.allocate_leaf(x)
    b = op(arena, a)
    backward(arena, b)
    return arena.data(b), arena.grad(a), arena.grad(b)


def test_add():
    assert _binary(add, 3.0, 4.0) == (7.0, 1.0, 1.0, 1.0)


def test_sub():
    assert _binary(sub, 3.0, 4.0) == (-1.0, 1.0, -1.0, 1.0)


def test_mul():
    assert _binary(mul, 3.0, 4.0) == (12.0, 4.0, 3.0, 1.0)


def test_div():
    assert _binary(div, 3.0, 4.0) == (0.75, 0.25, -0.1875, 1.0)


def test_neg():
    assert _unary(neg, 3.0) == (-3.0, -1.0, 1.0)


def test_pow_with_node_exponent():
    out, da, db, _ = _binary(pow, 3.0, 4.0)
    assert out == pytest.approx(81.0)
    assert da == pytest.approx(108.0)
    assert db == pytest.approx(81.0 * math.log(3.0))


@pytest.mark.parametrize("n", [2, 3, 0.5, -1.0])
def test_power_constant_exponent(n):
    out, da, _ = _unary(lambda ar, a: power(ar, a, n), 2.5)
    assert out == pytest.approx(2.5 ** n)
    assert da == pytest.approx(n * 2.5 ** (n - 1))


def test_power_negative_base_integer_exponent():
    out, da, _ = _unary(lambda ar, a: power(ar, a, 3), -2.0)
    assert out == pytest.approx(-8.0)
    assert da == pytest.approx(12.0)


def test_square():
    out, da, _ = _unary(square, -3.0)
    assert out == 9.0
    assert da == pytest.approx(-6.0)


def test_exp():
    out, da, db = _unary(exp, 3.0)
    assert out == pytest.approx(20.085536923187668)
    assert da == pytest.approx(20.085536923187668)
    assert db == 1.0


def test_log():
    out, da, _ = _unary(log, 2.0)
    assert out == pytest.approx(math.log(2.0))
    assert da == pytest.approx(0.5)


def test_sqrt():
    out, da, _ = _unary(sqrt, 16.0)
    assert out == pytest.approx(4.0)
    # d sqrt(x) / dx = 0.5 / sqrt(x)
    assert da == pytest.approx(0.125)
    numeric = finite_difference(lambda ar, xs: sqrt(ar, xs[0]), [16.0])
    assert da == pytest.approx(numeric[0], abs=1e-6)


def test_erf():
    out, da, _ = _unary(erf, 0.3)
    assert out == pytest.approx(math.erf(0.3))
    assert da == pytest.approx(2.0 / math.sqrt(math.pi) * math.exp(-0.09))


def test_tanh():
    out, da, db = _unary(tanh, 3.0)
    assert out == pytest.approx(0.9950547536867305)
    assert da == pytest.approx(0.009866037165440211)
    assert db == 1.0


def test_relu():
    assert _unary(relu, 3.0) == (3.0, 1.0, 1.0)
    assert _unary(relu, -3.0) == (0.0, 0.0, 1.0)


def test_sigmoid():
    out, da, _ = _unary(sigmoid, 0.7)
    s = 1.0 / (1.0 + math.exp(-0.7))
    assert out == pytest.approx(s)
    assert da == pytest.approx(s * (1.0 - s))
    # large negative inputs stay finite
    assert _unary(sigmoid, -800.0)[0] == pytest.approx(0.0)


# ----------------------------- domain violations ----------------------------- #
@pytest.mark.parametrize("op, x", [
    (sqrt, -1.0),
    (log, 0.0),
    (log, -2.0),
    (exp, 1000.0),
    (lambda ar, a: power(ar, a, 0.5), -4.0),
    (lambda ar, a: power(ar, a, -1), 0.0),
])
def test_unary_domain_violation(op, x):
    arena = Arena()
    a = arena.allocate_leaf(x)
    with pytest.raises(DomainError):
        op(arena, a)


@pytest.mark.parametrize("op, x, y", [
    (div, 1.0, 0.0),
    (pow, -2.0, 0.5),
])
def test_binary_domain_violation(op, x, y):
    arena = Arena()
    a, b = arena.allocate_leaf(x), arena.allocate_leaf(y)
    with pytest.raises(DomainError):
        op(arena, a, b)


def test_pow_negative_base_integral_exponent():
    arena = Arena()
    a, b = arena.allocate_leaf(-2.0), arena.allocate_leaf(2.0)
    out = pow(arena, a, b)
    assert arena.data(out) == pytest.approx(4.0)
    # d/db needs log(a), which is undefined for a <= 0
    with pytest.raises(DomainError, match="dpow/dy"):
        backward(arena, out)
    assert arena.grad(a) == pytest.approx(-4.0)


def test_pow_zero_base():
    arena = Arena()
    a, b = arena.allocate_leaf(0.0), arena.allocate_leaf(2.0)
    out = pow(arena, a, b)
    assert arena.data(out) == 0.0
    with pytest.raises(DomainError):
        backward(arena, out)


def test_domain_error_is_a_value_error():
    arena = Arena()
    with pytest.raises(ValueError, match="sqrt"):
        sqrt(arena, arena.allocate_leaf(-9.0))


def test_sqrt_of_zero_fails_in_backward():
    arena = Arena()
    a = arena.allocate_leaf(0.0)
    b = sqrt(arena, a)
    assert arena.data(b) == 0.0
    with pytest.raises(DomainError):
        backward(arena, b)


def test_power_rejects_node_exponent():
    arena = Arena()
    a = arena.allocate_leaf(2.0)
    with pytest.raises(TypeError):
        power(arena, a, a)


# ----------------------------- custom operators ----------------------------- #
def test_custom_unary_operator():
    # softplus(x) = log(1 + e^x), d/dx = sigmoid(x)
    softplus = define_unary("softplus", lambda x: np.log1p(np.exp(x)),
                            lambda x, out: 1.0 / (1.0 + np.exp(-x)))
    arena = Arena()
    x = arena.allocate_leaf(0.4)
    s = softplus(arena, x)
    y = mul(arena, s, x)
    backward(arena, y)
    sp = math.log1p(math.exp(0.4))
    sg = 1.0 / (1.0 + math.exp(-0.4))
    assert arena.read(s).op_tag == "softplus"
    assert arena.grad(x) == pytest.approx(sg * 0.4 + sp)


def test_custom_binary_operator():
    hypot = define_binary("hypot", math.hypot,
                          lambda x, y, out: x / out,
                          lambda x, y, out: y / out)
    arena = Arena()
    a, b = arena.allocate_leaf(3.0), arena.allocate_leaf(4.0)
    c = hypot(arena, a, b)
    backward(arena, c)
    assert arena.data(c) == pytest.approx(5.0)
    assert arena.grad(a) == pytest.approx(0.6)
    assert arena.grad(b) == pytest.approx(0.8)


def test_hand_written_rule():
    # cube(x) with the rule written directly against the arena
    def cube_backward(arena, grad, data, children):
        (a,) = children
        x = arena.data(a)
        arena.add_grad(a, grad * 3.0 * x * x)

    cube_rule = Rule(tag="cube", arity=1, backward=cube_backward)
    arena = Arena()
    x = arena.allocate_leaf(2.0)
    y = arena.allocate_with_rule(arena.data(x) ** 3, cube_rule, [x])
    z = add(arena, y, x)
    backward(arena, z)
    assert arena.data(z) == 10.0
    assert arena.grad(x) == pytest.approx(13.0)
