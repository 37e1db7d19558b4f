from notequests.contracts.exceptions import (
    ConfigError,
    NoteQuestsError,
    ReconcileError,
    SourceError,
    StorageError,
    TileRangeError,
)


def test_exception_hierarchy() -> None:
    assert issubclass(ConfigError, NoteQuestsError)
    assert issubclass(TileRangeError, NoteQuestsError)
    assert issubclass(SourceError, NoteQuestsError)
    assert issubclass(StorageError, NoteQuestsError)
    assert issubclass(ReconcileError, NoteQuestsError)


def test_source_error_exposes_status_code() -> None:
    err = SourceError("bandwidth limit exceeded", status_code=509)

    assert err.status_code == 509
    assert str(err) == "bandwidth limit exceeded"


def test_source_error_status_code_defaults_to_none() -> None:
    assert SourceError("timeout").status_code is None
