"""
Enemy AI: behavior procedures, positioning helpers, the boss phase controller
and the dispatcher that drives the monster phase.
"""
