"""
Data model package.

Contains the in-memory representation of sparse datasets and the model
parameters derived from them.
"""

from svmscale.models.parameter import Parameter
from svmscale.models.problem import Coordinate, Problem, TargetInterval

__all__ = ["Coordinate", "Parameter", "Problem", "TargetInterval"]
