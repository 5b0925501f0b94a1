"""Exception hierarchy for the TACE dashboard."""


class TaceError(Exception):
    """Base class for all project errors."""


class ConfigError(TaceError):
    """Invalid settings file or configuration values."""


class GridLoadError(TaceError):
    """A workbook or CSV could not be turned into a raw grid."""


class InsufficientDataError(TaceError):
    """A month tab cannot be analysed (too few rows or no working-day slot)."""

    def __init__(self, month: str, reason: str):
        self.month = month
        self.reason = reason
        super().__init__(f"{month}: {reason}")


class NoValidMonthError(TaceError):
    """Every month tab was excluded from the analysis."""

    def __init__(self, message: str = "Aucun mois avec des données valides trouvé"):
        super().__init__(message)
