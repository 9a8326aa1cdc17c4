"""LinguaRoute: task-routed LLM backends for language tutoring"""

__version__ = "0.1.0"
