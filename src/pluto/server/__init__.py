"""Dispatch — turns wire requests into wire responses."""
