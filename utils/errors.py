"""
Defines custom exception classes for the application.
"""

class AICommandError(Exception):
    """Base exception class for aicommand application."""
    pass

class RepositoryError(AICommandError):
    """Raised when the repository cannot be opened or its status queried."""
    pass

class DiffError(AICommandError):
    """Raised when the committed or on-disk content of a file cannot be read."""
    pass

class GenerationError(AICommandError):
    """Raised when the completion service fails to produce a commit message."""
    pass

class ConfigError(AICommandError):
    """Raised when there is a configuration error."""
    pass

class CommitError(AICommandError):
    """Raised when staging or committing the changes fails."""
    pass
