"""
svmscale

Reads libSVM sparse-format datasets, rescales every feature position into a
target interval, and saves or restores the ranges used so that a test set
can be scaled exactly like its training set.
"""

__version__ = "1.0.0"
