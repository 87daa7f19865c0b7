"""Axis tick planning algorithms.

Pure math reference implementations of the value-axis planners used by the
chart pipeline: nice-number linear ticks and tapered base-10 log ticks.
"""
