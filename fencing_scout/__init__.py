"""
Fencing Scout - scoring and action logging for a two-athlete fencing bout.
"""
