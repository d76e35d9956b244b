class InvalidApplicationRecord(ValueError):
    """Raised when the engine is handed something other than an application record."""

    def __init__(self, operation: str, value):
        self.operation = operation
        self.received_type = type(value).__name__
        super().__init__(f'{operation} expects an ApplicationRecord, got {self.received_type}.')
