"""
Exceptions raised by framework components; mapped to HTTP problem responses in handler.py.
"""

from typing import Dict, Iterable, List, Optional


class ModelValidationException(Exception):
    """Validation failure carrying field-level messages (field name -> messages)."""

    def __init__(self, errors: Dict[str, Iterable[str]], message: Optional[str] = None):
        self.errors: Dict[str, List[str]] = {
            field: list(dict.fromkeys(messages)) for field, messages in errors.items()
        }
        self.message = message or "One or more validation errors occurred."
        super().__init__(self.message)


class StrategyNotSupportedError(NotImplementedError):
    """Raised for a remove strategy the repository does not know how to apply."""

    def __init__(self, strategy):
        self.strategy = strategy
        super().__init__(f"Remove strategy '{strategy}' is not supported")
