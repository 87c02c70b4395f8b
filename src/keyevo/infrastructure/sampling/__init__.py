from ._gaussian import GaussianSampler, get_default_sampler

__all__ = [
    GaussianSampler.__name__,
    get_default_sampler.__name__,
]
