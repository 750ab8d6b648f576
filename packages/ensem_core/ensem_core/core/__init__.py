"""Ensemble value type, shape rules, rescaling and arithmetic."""
