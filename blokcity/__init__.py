"""
Blok City Warz minion tracker.
Rules engine for enemy spawns, intents and turn tracking, plus local persistence.
"""
