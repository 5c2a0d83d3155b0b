"""
Unit tests for the error taxonomy.
"""

from lpgview.core.errors import (
    AuthError,
    LpgviewError,
    NotFoundError,
    ParseError,
    StorageError,
    UnsupportedOperationError,
)


class TestErrors:
    def test_parse_error_message_includes_location(self):
        err = ParseError("Invalid TOML: bad value", line=3, column=7)
        assert str(err) == "Invalid TOML: bad value (line 3, column 7)"
        assert err.line == 3
        assert err.column == 7

    def test_parse_error_names_record(self):
        err = ParseError("missing 'target'", record="relationships[2]")
        assert str(err) == "relationships[2]: missing 'target'"

    def test_storage_hierarchy(self):
        for err in (
            AuthError("denied"),
            NotFoundError("doc.toml"),
            UnsupportedOperationError("write_file", "Google Drive"),
        ):
            assert isinstance(err, StorageError)
            assert isinstance(err, LpgviewError)

    def test_not_found_carries_file_id(self):
        err = NotFoundError("doc.toml")
        assert err.file_id == "doc.toml"
        assert "doc.toml" in str(err)

    def test_unsupported_operation_message(self):
        err = UnsupportedOperationError("write_file", "Google Drive")
        assert str(err) == "write_file is not implemented for Google Drive"
