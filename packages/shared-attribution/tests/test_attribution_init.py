"""Tests for mediabuy.attribution public API."""


def test_import_schema_classes():
    """Test that schema classes are importable from top level."""
    from mediabuy.attribution import (
        AttributionModel,
        AttributionResult,
        ChannelType,
        ConversionPath,
        Touchpoint,
    )

    assert hasattr(ChannelType, "OOH")
    assert hasattr(AttributionModel, "POSITION_BASED")
    assert hasattr(ConversionPath, "from_dict")
    assert hasattr(Touchpoint, "to_dict")
    assert hasattr(AttributionResult, "to_dict")


def test_import_engine():
    """Test that the engine and wrappers are importable from top level."""
    from mediabuy.attribution import (
        AttributionEngine,
        allocate_credit,
        compare_all_models,
        compute_attribution,
    )

    assert hasattr(AttributionEngine, "calculate_attribution")
    assert hasattr(AttributionEngine, "compare_models")
    assert callable(allocate_credit)
    assert callable(compute_attribution)
    assert callable(compare_all_models)


def test_all_exports():
    """Test that __all__ lists importable names."""
    import mediabuy.attribution as attribution

    for name in attribution.__all__:
        assert hasattr(attribution, name), f"{name} missing from mediabuy.attribution"
