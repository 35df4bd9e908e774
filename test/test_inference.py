import unittest
import itertools
import numpy as np
from parameterized import parameterized
from bninfer import networks, ordering
from bninfer.elimination import (
    make_factor,
    sum_out,
    variable_elimination_ask,
)
from bninfer.enumeration import enumeration_ask
from bninfer.network import CPT, BayesNet
from bninfer.variable import RandomVariable
from bninfer.errors import (
    BudgetExceededError,
    EliminationError,
    InvalidEvidenceError,
    NormalizationError,
)


def _random_network(seed, sizes=(2, 3, 2, 4, 3, 2), max_parents=2):
    rng = np.random.default_rng(seed)
    variables = [RandomVariable('x%d' % i, ['v%d' % j for j in range(n)]) for i, n in enumerate(sizes)]
    cpts = []
    for i, var in enumerate(variables):
        k = rng.integers(0, min(i, max_parents) + 1)
        parents = [variables[j] for j in sorted(rng.choice(i, size=k, replace=False))] if k else []
        rows = {}
        for key in itertools.product(*[p.values for p in parents]):
            probas = rng.random(var.size) + 0.05
            rows[key] = probas / probas.sum()
        cpts.append(CPT.from_dict(var, parents, rows))
    return BayesNet(cpts)


def _cases():
    cases = []
    alarm = networks.alarm()
    j, m, b, a, e = (alarm[n] for n in ['JohnCalls', 'MaryCalls', 'Burglary', 'Alarm', 'Earthquake'])
    cases += [
        ('alarm_b', alarm, b, {j: True, m: True}),
        ('alarm_a', alarm, a, {j: True, m: False}),
        ('alarm_e', alarm, e, {a: True}),
        ('alarm_prior', alarm, m, {}),
    ]
    sprinkler = networks.sprinkler()
    c, s, r, w = sprinkler.variables
    cases += [
        ('sprinkler_r', sprinkler, r, {s: True}),
        ('sprinkler_c', sprinkler, c, {w: True}),
        ('sprinkler_s', sprinkler, s, {w: True, r: False}),
    ]
    for seed in range(3):
        net = _random_network(seed)
        x = net.variables
        cases += [
            ('random%d_first' % seed, net, x[0], {x[5]: 'v1', x[3]: 'v2'}),
            ('random%d_middle' % seed, net, x[2], {x[4]: 'v0'}),
            ('random%d_none' % seed, net, x[5], {}),
        ]
    return cases


_CASES = _cases()


class TestExactInference(unittest.TestCase):

    def setUp(self):
        self.net = networks.alarm()
        self.b, self.j, self.m = self.net['Burglary'], self.net['JohnCalls'], self.net['MaryCalls']

    def test_alarm_enumeration(self):
        ans = enumeration_ask(self.b, {self.j: True, self.m: True}, self.net)
        self.assertAlmostEqual(ans[True], 0.284, places=3)
        self.assertAlmostEqual(ans[False], 0.716, places=3)
        self.assertEqual(list(ans), [True, False])

    def test_alarm_elimination(self):
        ans = variable_elimination_ask(self.b, {self.j: True, self.m: True}, self.net)
        self.assertAlmostEqual(ans[True], 0.284, places=3)
        self.assertEqual(list(ans), [True, False])

    def test_sprinkler(self):
        net = networks.sprinkler()
        ans = variable_elimination_ask(net['Rain'], {net['Sprinkler']: True}, net)
        self.assertAlmostEqual(ans[True], 0.3)

    @parameterized.expand([(enumeration_ask,), (variable_elimination_ask,)])
    def test_single_variable(self, engine):
        x = RandomVariable('x', ['a', 'b', 'c'])
        net = BayesNet([CPT.prior(x, [0.2, 0.5, 0.3])])
        ans = engine(x, {}, net)
        np.testing.assert_allclose(list(ans.values()), [0.2, 0.5, 0.3])
        self.assertEqual(list(ans), ['a', 'b', 'c'])

    @parameterized.expand([(enumeration_ask,), (variable_elimination_ask,)])
    def test_zero_probability_evidence(self, engine):
        a, b = RandomVariable.boolean('a'), RandomVariable.boolean('b')
        net = BayesNet([
            CPT.prior(a, [1.0, 0.0]),
            CPT.from_dict(b, [a], {(True,): [0.3, 0.7], (False,): [0.6, 0.4]}),
        ])
        with self.assertRaises(NormalizationError):
            engine(b, {a: False}, net)
        c = RandomVariable.boolean('c')
        net = BayesNet([CPT.prior(a, [1.0, 0.0]), CPT.prior(c, [0.5, 0.5])])
        with self.assertRaises(NormalizationError):
            engine(c, {a: False}, net)

    @parameterized.expand([(enumeration_ask,), (variable_elimination_ask,)])
    def test_invalid_evidence(self, engine):
        self.assertRaises(InvalidEvidenceError, engine, self.b, {self.b: True}, self.net)
        self.assertRaises(InvalidEvidenceError, engine, self.b, {self.j: 'maybe'}, self.net)
        self.assertRaises(InvalidEvidenceError, engine, RandomVariable.boolean('Z'), {}, self.net)

    @parameterized.expand(_CASES)
    def test_engines_agree(self, name, net, query, evidence):
        exact = enumeration_ask(query, evidence, net)
        ans = variable_elimination_ask(query, evidence, net)
        self.assertEqual(list(exact), list(ans))
        np.testing.assert_allclose(list(ans.values()), list(exact.values()), rtol=0, atol=1e-9)
        self.assertAlmostEqual(sum(exact.values()), 1.0)
        self.assertAlmostEqual(sum(ans.values()), 1.0)

    @parameterized.expand(_CASES)
    def test_greedy_order_agrees(self, name, net, query, evidence):
        exact = enumeration_ask(query, evidence, net)
        ans = variable_elimination_ask(query, evidence, net, elimination_order=ordering.greedy_order)
        np.testing.assert_allclose(list(ans.values()), list(exact.values()), rtol=0, atol=1e-9)

    def test_explicit_order(self):
        e, a = self.net['Earthquake'], self.net['Alarm']
        evidence = {self.j: True, self.m: True}
        ans = variable_elimination_ask(self.b, evidence, self.net, elimination_order=[a, e])
        self.assertAlmostEqual(ans[True], 0.284, places=3)

    def test_incomplete_order(self):
        a = self.net['Alarm']
        with self.assertRaises(EliminationError) as ctx:
            variable_elimination_ask(self.b, {self.j: True}, self.net, elimination_order=[a])
        self.assertEqual(set(ctx.exception.variables), {self.b, self.net['Earthquake'], self.m})

    def test_enumeration_budget(self):
        with self.assertRaises(BudgetExceededError):
            enumeration_ask(self.b, {self.j: True}, self.net, max_steps=10)
        ans = enumeration_ask(self.b, {self.j: True}, self.net, max_steps=10**6)
        self.assertAlmostEqual(sum(ans.values()), 1.0)


class TestElimination(unittest.TestCase):

    def setUp(self):
        self.net = networks.alarm()

    def test_make_factor(self):
        net = self.net
        b, e, a = net['Burglary'], net['Earthquake'], net['Alarm']
        f = make_factor(a, {b: True, net['JohnCalls']: True}, net)
        self.assertEqual(f.domain.attributes, (e, a))
        self.assertAlmostEqual(f[{e: False, a: True}], 0.94)
        self.assertEqual(len(make_factor(b, {b: False}, net).domain), 0)
        self.assertEqual(make_factor(a, {}, net).domain.attributes, (b, e, a))

    def test_sum_out(self):
        net = self.net
        b, e, a = net['Burglary'], net['Earthquake'], net['Alarm']
        factors = [make_factor(x, {}, net) for x in net.variables]
        result = sum_out(b, factors)
        self.assertEqual(len(result), len(factors) - 1)
        self.assertEqual(set(result[-1].domain), {e, a})
        self.assertIs(sum_out(b, result)[0], result[0])
        self.assertEqual(len(sum_out(b, result)), len(result))
        # P(A | E) after summing out B
        self.assertAlmostEqual(result[-1][{e: False, a: True}], 0.001 * 0.94 + 0.999 * 0.001)


class TestOrdering(unittest.TestCase):

    def test_declared_order(self):
        net = networks.alarm()
        hidden = [net['MaryCalls'], net['Burglary'], net['Alarm']]
        self.assertEqual(ordering.declared_order(net, hidden),
                         [net['Burglary'], net['Alarm'], net['MaryCalls']])

    def test_greedy_order(self):
        net = networks.alarm()
        hidden = list(net.variables)
        order = ordering.greedy_order(net, hidden)
        self.assertEqual(set(order), set(hidden))
        self.assertEqual(len(order), len(hidden))
        # Leaves only appear in their own family and in no other.
        self.assertIn(order[0], {net['JohnCalls'], net['MaryCalls']})

    def test_greedy_order_ignores_evidence_variables(self):
        e = RandomVariable('e', range(10))
        h1 = RandomVariable.boolean('h1')
        h2 = RandomVariable('h2', range(5))
        q = RandomVariable.boolean('q')
        net = BayesNet([
            CPT.prior(e, [0.1] * 10),
            CPT.from_dict(h1, [e], {(i,): [0.5, 0.5] for i in range(10)}),
            CPT.prior(h2, [0.2] * 5),
            CPT.from_dict(q, [h2], {(i,): [0.1 * (i + 1), 1 - 0.1 * (i + 1)] for i in range(5)}),
        ])
        # Over the full families h1 would cost 20 cells and h2 only 10.
        self.assertEqual(ordering.greedy_order(net, [h1, h2]), [h2, h1])
        # With e observed, h1 is alone in its factor.
        self.assertEqual(ordering.greedy_order(net, [h1, h2], {e: 3}), [h1, h2])
        ans = variable_elimination_ask(q, {e: 3}, net, elimination_order=ordering.greedy_order)
        np.testing.assert_allclose(list(ans.values()), list(enumeration_ask(q, {e: 3}, net).values()), atol=1e-9)

    def test_resolve_order(self):
        net = networks.sprinkler()
        c, s, r, w = net.variables
        self.assertEqual(ordering.resolve_order(None, net, [w, c]), [c, w])
        self.assertEqual(ordering.resolve_order([w, c], net, [c, w]), [w, c])
        self.assertEqual(ordering.resolve_order(ordering.declared_order, net, [w, c]), [c, w])


if __name__ == '__main__':
    unittest.main()
