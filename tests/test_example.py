"""Example tests for rolegen."""

from pdum import rolegen


def test_version():
    """Test that the package has a version."""
    assert hasattr(rolegen, "__version__")
    assert isinstance(rolegen.__version__, str)
    assert len(rolegen.__version__) > 0


def test_import():
    """Test that the package can be imported."""
    assert rolegen is not None
