"""
Test suite for dmgflow.
"""
