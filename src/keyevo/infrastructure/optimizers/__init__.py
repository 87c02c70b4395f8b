from ._adam import Adam

__all__ = [
    Adam.__name__,
]
