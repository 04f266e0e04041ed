"""
Follow-up reminder engine: staleness policy, generator and dispatcher.
"""
