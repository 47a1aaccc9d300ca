"""
Module: quickedit/commands

Package initializer for the commands module. Every submodule is scanned for
cogs by CommandRegistry.add_modules.
"""
# === ./quickedit/commands/__init__.py === #
# No additional code required; cogs are discovered from the individual files.
