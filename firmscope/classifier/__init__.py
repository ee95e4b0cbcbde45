"""Classifier package: heuristic firm-size tiering."""

from firmscope.classifier.firm_size import TIERS, FirmSizeResult, FirmTier, detect_firm_size

__all__ = ["detect_firm_size", "FirmSizeResult", "FirmTier", "TIERS"]
