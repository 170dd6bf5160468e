"""Tests for the rustup_availability package."""

import pytest


def test_package_import():
    """Test that the package can be imported."""
    import rustup_availability
    assert rustup_availability.__version__ == "0.1.0"


def test_cli_import():
    """Test that CLI module can be imported."""
    from rustup_availability.cli import main
    assert callable(main)


def test_public_api():
    """Test that the main types are exported at the top level."""
    import rustup_availability

    for name in rustup_availability.__all__:
        assert getattr(rustup_availability, name) is not None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
