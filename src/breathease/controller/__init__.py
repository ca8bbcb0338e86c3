"""
The CONTROLLER layer owns the frame loop.
It converts wall-clock readings into ``dt`` and publishes model snapshots via Qt signals.
"""
