from .ccs_oracle import CCSOracle

__all__ = ["CCSOracle"]
