import math
import numpy as np
import pytest

from scalar_autograd.core.engine import backward, topological_order, zero_grad
from scalar_autograd.core.op import OpKind
from scalar_autograd.core.var import Value


def test_add_then_backward():
    x = Value(1.0)
    y = Value(2.0)
    z = x + y
    backward(z)

    assert z.data == 3.0
    assert z.grad == 1.0
    assert x.grad == 1.0
    assert y.grad == 1.0


def test_micrograd_reference_expression():
    a = Value(-4.0)
    b = Value(2.0)
    c = a + b
    d = a * b + b.pow(3)
    c = c + c + 1
    c = c + 1 + c + (-a)
    d = d + d * 2 + (b + a).relu()
    d = d + 3 * d + (b - a).relu()
    e = c - d
    f = e.pow(2)
    g = f / 2.0
    g = g + 10.0 / f
    g.backward()

    assert g.data == pytest.approx(24.7041, abs=1e-4)
    assert a.grad == pytest.approx(138.8338, abs=1e-4)
    assert b.grad == pytest.approx(645.5773, abs=1e-4)


def test_diamond_square_plus_self():
    x = Value(3.0)
    y = x * x + x
    backward(y)

    assert y.data == 12.0
    assert x.grad == 7.0


def test_linearity_of_add():
    a, b = Value(0.3), Value(-2.5)
    y = a + b
    backward(y)
    assert a.grad == 1.0
    assert b.grad == 1.0


def test_product_rule():
    a, b = Value(1.5), Value(-4.0)
    y = a * b
    backward(y)
    assert a.grad == b.data
    assert b.grad == a.data


def test_same_operand_twice():
    a = Value(2.5)
    backward(a * a)
    assert a.grad == 2 * a.data

    b = Value(2.5)
    backward(b + b)
    assert b.grad == 2.0


def test_tanh_chain_rule():
    a = Value(0.7)
    backward(a.tanh())
    assert a.grad == pytest.approx(1 - math.tanh(0.7) ** 2)


def test_power_rule():
    a = Value(2.0)
    backward(a.pow(3))
    assert a.grad == pytest.approx(12.0)


def test_power_rule_uses_exponent_not_base():
    # k != a.data: d/da a^0.5 at a=4 is 0.5 / sqrt(4)
    a = Value(4.0)
    backward(a.pow(0.5))
    assert a.grad == pytest.approx(0.25)


def test_exp_gradient_is_output():
    a = Value(1.3)
    y = a.exp()
    backward(y)
    assert a.grad == pytest.approx(math.exp(1.3))
    assert a.grad == y.data


def test_relu_subgradient():
    neg = Value(-1.0)
    backward(neg.relu())
    assert neg.grad == 0.0

    pos = Value(2.0)
    backward(pos.relu())
    assert pos.grad == 1.0

    kink = Value(0.0)
    backward(kink.relu())
    assert kink.grad == 0.0


def test_relu_passes_upstream_gradient_when_active():
    # Upstream gradient is negative here; the unit is active so it still flows
    a = Value(2.0)
    y = -(a.relu())
    backward(y)
    assert a.grad == -1.0


def test_backward_on_leaf_seeds_only_itself():
    x = Value(5.0)
    backward(x)
    assert x.grad == 1.0
    assert x.children() == []


def test_root_grad_is_overwritten_not_added():
    x = Value(2.0)
    y = x * 3
    y.set_grad(42.0)
    backward(y)
    assert y.grad == 1.0
    assert x.grad == 3.0


def test_second_backward_without_zeroing_doubles():
    x = Value(1.0)
    y = Value(2.0)
    z = x + y
    backward(z)
    backward(z)
    assert z.grad == 1.0
    assert x.grad == 2.0
    assert y.grad == 2.0


def test_second_backward_reinjects_into_populated_graph():
    x = Value(3.0)
    m = x * x
    y = m + x
    backward(y)
    assert m.grad == 1.0
    assert x.grad == 7.0

    backward(y)
    # m collects a second seed; x sees 1 + (2 * 2 * 3) on top of 7
    assert m.grad == 2.0
    assert x.grad == 20.0


def test_zero_grad_then_backward_is_fresh():
    x = Value(3.0)
    y = x * x + x
    backward(y)
    zero_grad(topological_order(y))
    backward(y)
    assert x.grad == 7.0


def test_zero_grad_only_touches_given_nodes():
    x = Value(3.0)
    m = x * 2
    backward(m)
    zero_grad([x])
    assert x.grad == 0.0
    assert m.grad == 1.0


def test_topological_order_parents_first():
    a, b = Value(1.0), Value(2.0)
    c = a * b
    d = c + a
    e = d * c
    topo = topological_order(e)

    assert topo[-1] is e
    assert len(topo) == 5
    assert len({id(v) for v in topo}) == 5
    position = {id(v): i for i, v in enumerate(topo)}
    for v in topo:
        for p in v.parents:
            assert position[id(p)] < position[id(v)]


def test_topological_order_visits_left_operand_first():
    a, b = Value(1.0), Value(2.0)
    topo = topological_order(a + b)
    assert topo[0] is a
    assert topo[1] is b


def test_deep_chain_does_not_recurse():
    x = Value(0.5)
    y = x
    for _ in range(20000):
        y = y + 1.0
    backward(y)
    assert x.grad == 1.0
    assert y.data == pytest.approx(20000.5)


def test_fresh_nodes_have_zero_grad():
    a = Value(1.0)
    nodes = [a, a + 1, a * 2, a.exp(), a.pow(2), a.relu(), a.tanh(), -a, a - 1, a / 2]
    for n in nodes:
        assert n.grad == 0.0


def test_children_arity():
    a, b = Value(1.0), Value(2.0)
    assert len(a.children()) == 0
    assert len((a + b).children()) == 2
    assert len((a * b).children()) == 2
    for y in (a.exp(), a.pow(2.5), a.relu(), a.tanh()):
        assert len(y.children()) == 1


def test_children_preserve_identity():
    a, b = Value(1.0), Value(2.0)
    c = a * b
    first = c.children()
    second = c.children()
    assert first[0] is second[0]
    assert first[0] == second[0]
    assert first[0] is a
    assert first[1] is b
    assert first[0] != Value(1.0)


def test_set_data_and_add_grad():
    a = Value(1.0)
    b = a * 2.0

    a.set_data(3)
    assert isinstance(a.data, np.float64)
    assert a.data == 3.0
    # Nodes built earlier keep the forward value they were built with
    assert b.data == 2.0

    a.add_grad(2.0)
    a.add_grad(0.5)
    assert a.grad == 2.5


def test_rvalue_of_unary_op_is_an_error():
    y = Value(1.0).tanh()
    assert y.lvalue().data == 1.0
    with pytest.raises(IndexError):
        y.rvalue()


def test_nan_and_inf_propagate_without_error():
    a = Value(-8.0)
    y = a.pow(1.0 / 3.0)
    backward(y)
    assert np.isnan(y.data)
    assert np.isnan(a.grad)

    big = Value(1000.0)
    e = big.exp()
    backward(e)
    assert np.isinf(e.data)
    assert np.isinf(big.grad)

    zero = Value(0.0)
    q = 1.0 / zero
    assert np.isinf(q.data)


def test_op_tags():
    a, b = Value(2.0), Value(3.0)
    assert a.op is None
    assert (a + b).op.kind is OpKind.ADD
    assert (a * b).op.kind is OpKind.MUL
    p = a.pow(1.5)
    assert p.op.kind is OpKind.POW
    assert p.op.exponent == 1.5
    assert str((a * b).op) == "*"
