"""
Actors of the dungeon: the actor record, player archetypes and monster
templates.
"""
