"""Routing — per-method tries of ``:param`` patterns.

Routes are registered during setup and frozen into a read-only
table before the first request is dispatched.
"""
