"""
Combat resolution: damage, action primitives, the ability catalog, turn
scheduling and progression hooks.
"""
