"""
Desktop platform: simulated sensors and an interactive command loop.
"""
