"""
The MODEL layer contains pure data structures and simulation logic.
It has NO knowledge of the GUI (Qt) or of any renderer.
Every component is advanced by ``tick(dt)`` and exposes immutable snapshots.
"""
