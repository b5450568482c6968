"""
Core module of the dungeon crawl engine.

Constants, configuration, logging, the message log, the seeded random stream
and the simulation context shared by every other package.
"""
