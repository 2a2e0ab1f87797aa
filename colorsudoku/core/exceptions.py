"""Custom exception hierarchy for color sudoku."""


class ColorSudokuError(Exception):
    """Base exception for engine failures."""


class GenerationError(ColorSudokuError):
    """Raised when the solution search exhausts without a complete grid."""


class ValidationError(ColorSudokuError):
    """Raised when a generated puzzle fails its integrity checks."""


class SessionFormatError(ColorSudokuError):
    """Raised when a serialized session document cannot be decoded."""
