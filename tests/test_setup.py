"""
Verify project setup is correct.
"""

import enumvariants


def test_version_exists():
    """Package has version."""
    assert hasattr(enumvariants, "__version__")
    assert enumvariants.__version__ == "0.1.0"


def test_public_api_exported():
    """Everything in __all__ is importable from the package root."""
    for name in enumvariants.__all__:
        assert hasattr(enumvariants, name), name
