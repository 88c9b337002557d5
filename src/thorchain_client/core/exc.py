"""
Core exception types for thorchain_client.

These are dependency-free and may be imported by all modules.
"""

__all__ = [
    "AmountDomainError",
    "PrecisionOverflow",
    "DivisionDegenerate",
    "InvalidPoolStatus",
    "UnknownAsset",
    "Unreachable",
    "Disagreement",
]


class AmountDomainError(Exception):
    """Raised when inputs violate basic amount preconditions (type, decimals, NaN)."""
    pass


class PrecisionOverflow(Exception):
    """Raised when a decimal literal carries more digits than can be represented exactly."""
    pass


class DivisionDegenerate(Exception):
    """Raised when a formula's denominator is zero/negative (caller contract violation)."""
    pass


class InvalidPoolStatus(Exception):
    """Raised when a pool snapshot is not in the 'available' state.

    Attributes
    ----------
    asset : str
        Pool asset identifier as reported by Midgard.
    status : str
        Reported pool status.
    """

    def __init__(self, asset, status):
        super().__init__(f"Pool {asset} status is '{status}', expected 'available'")
        self.asset = asset
        self.status = status


class UnknownAsset(Exception):
    """Raised when an asset has no pool in the supplied snapshot."""

    def __init__(self, asset):
        super().__init__(f"No pool found for asset {asset}")
        self.asset = asset


class Unreachable(Exception):
    """Raised when the bootstrap directory (or every indexer) cannot be reached."""
    pass


class Disagreement(Exception):
    """Raised when indexer responses are too few or do not all agree.

    Attributes
    ----------
    responses : int
        Number of valid (non-error) responses collected.
    """

    def __init__(self, message, *, responses=0):
        super().__init__(message)
        self.responses = responses
