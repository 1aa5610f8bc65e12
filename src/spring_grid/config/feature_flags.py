"""
Feature Flag System for spring_grid.

Runtime switches for the safety checks around the grid encoding.
Both checks default to ON; hosts that guarantee well-formed graphs and
rebuild discipline may turn them off to save the per-call work.

Usage:
    from spring_grid.config.feature_flags import FeatureFlags

    if FeatureFlags.CHECK_NEIGHBOUR_SYMMETRY:
        ...
"""


class FeatureFlags:
    """
    Global feature flag registry.

    Flags are toggleable at runtime for testing. legacy_mode() restores
    the documented defaults.
    """

    CHECK_NEIGHBOUR_SYMMETRY = True
    """
    Verify during encode() that every neighbour link is mirrored.

    When True (default):
    - encode() raises AsymmetricNeighbourError on a one-sided link

    When False:
    - one-sided links are encoded as-is (the force on the two endpoints
      is then no longer equal and opposite)
    """

    DETECT_STALE_ENCODING = True
    """
    Compare the graph's structure against the cached encoding on every step().

    When True (default):
    - step() raises StructuralMismatchError if the graph revision (or node
      count, for graphs without a revision) differs from the encoding

    When False:
    - the caller alone is responsible for calling rebuild() after edits
    """

    @classmethod
    def disable_safety_checks(cls):
        """Turn off both encode-time and step-time checks."""
        cls.CHECK_NEIGHBOUR_SYMMETRY = False
        cls.DETECT_STALE_ENCODING = False

    @classmethod
    def legacy_mode(cls):
        """Reset all flags to their defaults."""
        cls.CHECK_NEIGHBOUR_SYMMETRY = True
        cls.DETECT_STALE_ENCODING = True

    @classmethod
    def snapshot(cls) -> dict:
        """Current flag values, for run metadata."""
        return {
            "CHECK_NEIGHBOUR_SYMMETRY": cls.CHECK_NEIGHBOUR_SYMMETRY,
            "DETECT_STALE_ENCODING": cls.DETECT_STALE_ENCODING,
        }
