import math
import unittest

import numpy as np

from keyevo.infrastructure.containers import (
    DenseLayer,
    FeedForwardNetwork,
    RastriginPoint,
    XorNetwork,
    leaky_relu,
    rastrigin_score,
    xor_reward,
)
from keyevo.infrastructure.sampling import GaussianSampler


class TinyNet(FeedForwardNetwork):
    layer_sizes = (2, 2, 1)


class TestActivations(unittest.TestCase):
    def test_leaky_relu(self):
        x = np.array([-2.0, 0.0, 3.0])
        np.testing.assert_allclose(leaky_relu(x), [-0.2, 0.0, 3.0])


class TestDenseLayer(unittest.TestCase):
    def test_zeros_shapes(self):
        layer = DenseLayer.zeros(3, 2)
        self.assertEqual(layer.weight.shape, (2, 3))
        self.assertEqual(layer.bias.shape, (2,))
        self.assertEqual(layer.num_inputs, 3)
        self.assertEqual(layer.num_outputs, 2)

    def test_forward_rejects_wrong_input_size(self):
        layer = DenseLayer.zeros(3, 2)
        with self.assertRaises(ValueError):
            layer.forward(np.zeros(2), leaky_relu)


class TestFeedForwardNetwork(unittest.TestCase):
    def test_forward_matches_manual_computation(self):
        net = TinyNet(
            [
                DenseLayer(weight=np.array([[1.0, -1.0], [0.5, 0.5]]), bias=np.array([0.0, -1.0])),
                DenseLayer(weight=np.array([[2.0, 1.0]]), bias=np.array([0.25])),
            ]
        )
        # hidden pre-activation: [-1, 0.5] -> leaky: [-0.1, 0.5]
        out = net([1.0, 2.0])
        self.assertEqual(out.shape, (1,))
        self.assertAlmostEqual(float(out[0]), 2.0 * -0.1 + 1.0 * 0.5 + 0.25)

    def test_named_parameters_order(self):
        names = [name for name, _ in TinyNet().named_parameters()]
        self.assertEqual(
            names, ["layers.0.weight", "layers.0.bias", "layers.1.weight", "layers.1.bias"]
        )

    def test_from_named_parameters_roundtrip(self):
        net = XorNetwork.sample_normal(0.0, 1.0, GaussianSampler(5))
        rebuilt = XorNetwork.from_named_parameters(net.state_dict())
        self.assertTrue(rebuilt.allclose(net))

    def test_xor_network_parameter_count(self):
        # 2*10+10 + 10*4+4 + 4*4+4 + 4*1+1
        self.assertEqual(XorNetwork().num_parameters(), 99)


class TestXorReward(unittest.TestCase):
    def test_zero_network(self):
        # outputs are all 0, so two of the four cases miss by 1
        self.assertAlmostEqual(xor_reward(XorNetwork()), -math.sqrt(0.5))

    def test_reward_is_non_positive(self):
        net = XorNetwork.sample_normal(0.0, 1.0, GaussianSampler(8))
        self.assertLessEqual(xor_reward(net), 0.0)

    def test_perfect_fit_scores_zero(self):
        w1 = np.array([[1.0, -1.0], [-1.0, 1.0]])
        w2 = np.array([[1.0 / 0.9, 1.0 / 0.9]])
        net = TinyNet(
            [
                DenseLayer(weight=w1, bias=np.zeros(2)),
                DenseLayer(weight=w2, bias=np.zeros(1)),
            ]
        )
        # leaky(d) + leaky(-d) = 0.9*|d| for d in {-1, 0, 1}
        self.assertAlmostEqual(xor_reward(net), 0.0, places=12)


class TestRastrigin(unittest.TestCase):
    def test_optimum_scores_zero(self):
        self.assertAlmostEqual(rastrigin_score(RastriginPoint()), 0.0, places=12)

    def test_known_value(self):
        # A*n = 50, each coordinate at 0.5 adds 0.25 + 10
        p = RastriginPoint.full(0.5)
        self.assertAlmostEqual(rastrigin_score(p), -101.25, places=9)

    def test_rastrigin_point_dimension(self):
        self.assertEqual(len(RastriginPoint()), 5)


if __name__ == "__main__":
    unittest.main()
