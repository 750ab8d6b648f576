"""Estimator and reporting."""
