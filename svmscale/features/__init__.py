"""
Feature range and scaling package.

This package contains the per-position range computer, the linear scaler
and the range-file codec used to persist and restore scaling parameters.
"""
