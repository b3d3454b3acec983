import ghent


def test_version_export() -> None:
    assert hasattr(ghent, "__version__")
    assert isinstance(ghent.__version__, str)


def test_core_exports() -> None:
    assert hasattr(ghent, "AuthorizationModel")
    assert hasattr(ghent, "GhentSettings")
    assert hasattr(ghent, "ScopeResolver")


def test_storage_exports() -> None:
    assert hasattr(ghent, "MongoConnection")
    assert hasattr(ghent, "MongoSettings")
    assert hasattr(ghent, "InMemoryConnection")
    assert hasattr(ghent, "ensure_indexes")


def test_record_exports() -> None:
    for name in ("Client", "User", "TokenSpec", "TokenRecord", "AccessTokenRecord", "AuthorizationCodeRecord"):
        assert hasattr(ghent, name)


def test_exception_exports() -> None:
    assert issubclass(ghent.MalformedDocumentError, ghent.GhentError)
    assert issubclass(ghent.InvalidPasswordError, ghent.GhentError)
    assert issubclass(ghent.ConfigurationError, ghent.GhentError)
