"""Dataset relations consumed by the clustering engine."""

from .tensor_relation import TensorRelation, as_relation

__all__ = [
    'TensorRelation',
    'as_relation'
]
