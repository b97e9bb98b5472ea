"""
Qwixx.

Rules engine for the Qwixx dice game, with snapshot persistence and a
session layer for front ends.
"""
