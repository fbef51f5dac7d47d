class ChoccyError(Exception):
    """ Base class for all choccy errors"""
    pass

class ChoccySyntaxError(ChoccyError):
    """ Raised when source text does not match the grammar"""

    def __init__(self, message: str, line: int = 1, column: int = 1):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def __str__(self):
        return f"<stdin>:{self.line}:{self.column}: error: {self.message}"

class ChoccyKindError(ChoccyError):
    """ Raised when a list operation is applied to a leaf value"""

class ChoccyIndexError(ChoccyError):
    """ Raised when a child is popped from outside a list's bounds"""

class ChoccyOwnershipError(ChoccyError):
    """ Raised when a value is aliased, released twice or used after release"""
