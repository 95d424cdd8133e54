"""NEPA Watch: BLM ePlanning NEPA project feeds."""

__version__ = "1.0.0"
