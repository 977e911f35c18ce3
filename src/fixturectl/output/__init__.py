"""Output layer — Rich rendering of ServiceResult and the console reporter.

May import from services and domain. Must never import from commands.
"""
