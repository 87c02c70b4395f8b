from ._fitness import (
    rank_shape,
    standardize,
    RankShaping,
    Standardization,
    make_shaper,
)

__all__ = [
    rank_shape.__name__,
    standardize.__name__,
    RankShaping.__name__,
    Standardization.__name__,
    make_shaper.__name__,
]
