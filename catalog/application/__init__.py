"""
Application layer.

Contains the write and read services and the interfaces they depend on.
"""
