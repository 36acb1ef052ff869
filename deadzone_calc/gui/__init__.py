"""Deadzone calculator HTTP API

A small JSON service so an external front end (stat editors, charts) can ask
for damage distributions.

Usage:
    python -m deadzone_calc.gui.run

Then POST to http://localhost:8000/api/calc.
"""
