"""
Host platforms for the dead reckoning core.
"""
