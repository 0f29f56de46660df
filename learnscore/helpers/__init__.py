"""Helper modules for learnscore.

- dispatcher: In-process signal dispatcher used by managers
"""
