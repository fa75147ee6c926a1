# arena_aad/ops/arithmetic.py
from functools import partial
import numpy as np
from ..core.arena import Arena, DomainError
from ..core.node import Handle, Rule


def _evaluate(tag, f, *args):
    """
    Evaluate f(*args) as a float64, turning every floating point fault
    (division by zero, overflow, invalid operation, complex result) into a
    DomainError that names the operator and its arguments.
    """
    try:
        with np.errstate(divide="raise", over="raise", invalid="raise"):
            out = f(*args)
    except (ZeroDivisionError, OverflowError, FloatingPointError) as exc:
        raise DomainError(f"{tag}{args} is undefined: {exc}") from exc
    if isinstance(out, complex) or not np.isfinite(out):
        raise DomainError(f"{tag}{args} is undefined: result {out!r} is not a finite real")
    return float(out)


# ---------------------------------------------------------------------- #
# extension contract
# ---------------------------------------------------------------------- #
def unary_rule(tag: str, dfdx) -> Rule:
    """
    Build a one-child Rule from a local partial dfdx(x, out), where x is the
    child's data and out is the node's own data.
    """
    def _backward(arena, grad, data, children):
        (a,) = children
        arena.add_grad(a, grad * _evaluate(f"d{tag}", dfdx, arena.data(a), data))
    return Rule(tag=tag, arity=1, backward=_backward)


def binary_rule(tag: str, dfdx, dfdy) -> Rule:
    """
    Build a two-child Rule from local partials dfdx(x, y, out), dfdy(x, y, out).
    Both operands may be the same handle (x*x); each edge contributes once.
    """
    def _backward(arena, grad, data, children):
        a, b = children
        x, y = arena.data(a), arena.data(b)
        arena.add_grad(a, grad * _evaluate(f"d{tag}/dx", dfdx, x, y, data))
        arena.add_grad(b, grad * _evaluate(f"d{tag}/dy", dfdy, x, y, data))
    return Rule(tag=tag, arity=2, backward=_backward)


def define_unary(tag: str, f, dfdx):
    """
    Create a unary operator op(arena, a) -> Handle.

    f(x) computes the result, dfdx(x, out) the local partial. Any operator
    built this way (or by hand with Arena.allocate_with_rule) composes with
    backward() without touching the engine.
    """
    rule = unary_rule(tag, dfdx)

    def op(arena: Arena, a: Handle) -> Handle:
        out = _evaluate(tag, f, arena.data(a))
        return arena.allocate_with_rule(out, rule, (a,))

    op.__name__ = op.__qualname__ = tag
    op.rule = rule
    return op


def define_binary(tag: str, f, dfdx, dfdy):
    """Create a binary operator op(arena, a, b) -> Handle. See define_unary."""
    rule = binary_rule(tag, dfdx, dfdy)

    def op(arena: Arena, a: Handle, b: Handle) -> Handle:
        out = _evaluate(tag, f, arena.data(a), arena.data(b))
        return arena.allocate_with_rule(out, rule, (a, b))

    op.__name__ = op.__qualname__ = tag
    op.rule = rule
    return op


# ---------------------------------------------------------------------- #
# built-ins
# ---------------------------------------------------------------------- #
add = define_binary("add", lambda a, b: a + b, lambda a, b, o: 1.0,   lambda a, b, o: 1.0)
sub = define_binary("sub", lambda a, b: a - b, lambda a, b, o: 1.0,   lambda a, b, o: -1.0)
mul = define_binary("mul", lambda a, b: a * b, lambda a, b, o: b,     lambda a, b, o: a)
div = define_binary("div", lambda a, b: a / b, lambda a, b, o: 1.0 / b, lambda a, b, o: -a / (b * b))
neg = define_unary("neg", lambda a: -a, lambda a, o: -1.0)


def _power_backward(n, arena, grad, data, children):
    (a,) = children
    local = _evaluate("dpower", lambda x: n * np.power(x, n - 1.0), arena.data(a))
    arena.add_grad(a, grad * local)


def power(arena: Arena, a: Handle, n) -> Handle:
    """
    a ** n for a constant exponent n.
      ∂out/∂a = n * a^(n-1)
    Negative bases need an integer exponent.
    """
    if isinstance(n, Handle):
        raise TypeError("power() takes a constant exponent; use pow() for a node exponent")
    n = float(n)
    out = _evaluate("power", np.power, arena.data(a), n)
    rule = Rule(tag="power", arity=1, backward=partial(_power_backward, n))
    return arena.allocate_with_rule(out, rule, (a,))


def square(arena: Arena, a: Handle) -> Handle:
    return power(arena, a, 2)


def _pow_dy(a, b, out):
    if a <= 0.0:
        raise FloatingPointError(f"log of base {a} is undefined")
    return out * np.log(a)


# out = a^b with both operands on the graph:
#   ∂out/∂a = b * a^(b-1)
#   ∂out/∂b = a^b * log(a)        (requires a>0, checked when the partial is taken)
# Negative bases evaluate for integral exponents, as with power().
pow = define_binary("pow", np.power,
                    lambda a, b, o: b * np.power(a, b - 1.0),
                    _pow_dy)
