"""Verify package imports work correctly."""


def test_import_snakk_markup() -> None:
    """Test that snakk_markup can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import snakk_markup

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert snakk_markup.__version__ == expected


def test_version_format() -> None:
    """Test version string format."""
    from snakk_markup import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


def test_public_api() -> None:
    """Everything in __all__ is importable."""
    import snakk_markup

    for name in snakk_markup.__all__:
        assert hasattr(snakk_markup, name), name
