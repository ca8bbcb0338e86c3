"""
BreathEase simulation core.

The MODEL layer (``breathease.model``) holds the frame-driven state: the
breathing session state machine, the decaying particle field and the
breathing animation curves. The CONTROLLER layer (``breathease.controller``)
drives them from a Qt timer and publishes snapshots to whatever renders them.
"""
