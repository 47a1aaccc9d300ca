"""
Package: quickedit

Discord bot that registers slash-command cogs and dispatches interactions to them.
"""
__version__ = "0.1.0"
