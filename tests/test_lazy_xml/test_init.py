"""Test module for lazy_xml package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    # Arrange & Act
    import lazy_xml

    # Assert
    assert lazy_xml is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    # Arrange & Act
    import lazy_xml

    # Assert
    assert isinstance(lazy_xml.__version__, str)
    assert lazy_xml.__version__ == "0.1.0"


def test_package_has_author() -> None:
    """Test that the package has an author attribute."""
    # Arrange & Act
    import lazy_xml

    # Assert
    assert lazy_xml.__author__ == "Lazy XML Team"


def test_package_all_exports() -> None:
    """Test that __all__ exposes the entry points of every API level."""
    # Arrange & Act
    import lazy_xml

    # Assert
    for name in ["parse", "parse_string", "emit", "emit_string",
                 "sexp_as_element", "event_tree", "XMLStreamWriter"]:
        assert name in lazy_xml.__all__
    for name in lazy_xml.__all__:
        assert hasattr(lazy_xml, name)
