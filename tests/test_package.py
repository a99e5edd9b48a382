"""Tests for archivectl package imports and exports."""

from __future__ import annotations


class TestPackageImports:
    """Tests for package imports."""

    def test_import_archivectl(self):
        import archivectl

        assert hasattr(archivectl, "__version__")

    def test_import_core_modules(self):
        from archivectl.core import (
            client,
            config,
            connection,
            exceptions,
            logging,
            output,
            validation,
        )

        assert client is not None
        assert config is not None
        assert connection is not None
        assert exceptions is not None
        assert validation is not None
        assert output is not None
        assert logging is not None

    def test_import_models(self):
        from archivectl.models import archive, base, progress

        assert base is not None
        assert archive is not None
        assert progress is not None

    def test_import_services(self):
        from archivectl.services import archives, base

        assert base is not None
        assert archives is not None

    def test_import_uploaders(self):
        from archivectl.uploaders import common, constants, parallel, treehash

        assert common is not None
        assert constants is not None
        assert parallel is not None
        assert treehash is not None

    def test_import_cli(self):
        from archivectl.cli import common, config_cmd, main, treehash, upload

        assert main.cli is not None
        assert common is not None
        assert config_cmd is not None
        assert treehash is not None
        assert upload is not None


class TestPublicExports:
    """Tests for top-level exports."""

    def test_exports(self):
        import archivectl

        for name in archivectl.__all__:
            assert hasattr(archivectl, name), name

    def test_exception_hierarchy(self):
        from archivectl import (
            ArchiveCtlError,
            FinalizationError,
            NetworkError,
            RemoteStoreError,
            SessionInitiationError,
        )

        assert issubclass(SessionInitiationError, RemoteStoreError)
        assert issubclass(FinalizationError, RemoteStoreError)
        assert issubclass(NetworkError, ArchiveCtlError)
