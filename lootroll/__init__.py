"""Weighted range allocation and sampling for editable loot tables."""
