import unittest

from keyevo.domain import (
    IParameterContainer,
    IOptimizer,
    ISampler,
    IFitnessShaper,
)
from keyevo.infrastructure.containers import (
    RastriginPoint,
    XorNetwork,
    vector_type,
)
from keyevo.infrastructure.optimizers import Adam
from keyevo.infrastructure.sampling import GaussianSampler
from keyevo.infrastructure.shaping import RankShaping, Standardization


class TestContainerProtocol(unittest.TestCase):
    def test_vector_conforms_to_iparametercontainer(self):
        self.assertIsInstance(vector_type(3)(), IParameterContainer)

    def test_rastrigin_conforms_to_iparametercontainer(self):
        self.assertIsInstance(RastriginPoint(), IParameterContainer)

    def test_network_conforms_to_iparametercontainer(self):
        self.assertIsInstance(XorNetwork(), IParameterContainer)


class TestOptimizerProtocol(unittest.TestCase):
    def test_adam_conforms_to_ioptimizer(self):
        self.assertIsInstance(Adam(lr=1e-3), IOptimizer)


class TestSamplerProtocol(unittest.TestCase):
    def test_gaussian_sampler_conforms_to_isampler(self):
        self.assertIsInstance(GaussianSampler(0), ISampler)


class TestShaperProtocol(unittest.TestCase):
    def test_rank_shaping_conforms_to_ifitnessshaper(self):
        self.assertIsInstance(RankShaping(0.1), IFitnessShaper)

    def test_standardization_conforms_to_ifitnessshaper(self):
        self.assertIsInstance(Standardization(), IFitnessShaper)


if __name__ == "__main__":
    unittest.main()
