"""Packaging correctness verification for structpad.

Tests validate:
- Base install imports cleanly with only the declared runtime dependencies
- py.typed marker is present in the wheel
- Pytest plugin entry point is registered
- Package metadata is correct

These tests inspect the built wheel and current installation rather than
creating temporary virtualenvs (faster, more reliable in CI).
"""

from __future__ import annotations

import subprocess
import sys
import zipfile
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.parent


class TestBaseInstall:
    """Verify the base install works with the runtime dependencies alone."""

    def test_import_structpad(self):  # type: ignore[no-untyped-def]
        """Top-level import succeeds."""
        import structpad

        assert hasattr(structpad, "load_document")
        assert hasattr(structpad, "commit_node_edit")
        assert hasattr(structpad, "Workspace")

    def test_load_document_basic(self):  # type: ignore[no-untyped-def]
        """load_document() works with the default collaborators."""
        from structpad import Format, load_document

        assert load_document('{"a": 1}').format is Format.JSON

    def test_subpackages_import(self):  # type: ignore[no-untyped-def]
        """Subpackages import without the integrations being loaded first."""
        from structpad.emitters import BlockYamlEmitter
        from structpad.syntax import Classifier
        from structpad.tree import NodeBuilder

        assert BlockYamlEmitter and Classifier and NodeBuilder


class TestWheelContents:
    """Verify the built wheel contains required files."""

    @pytest.fixture(scope="class")
    def wheel_path(self) -> Path:
        """Build a fresh wheel and return its path."""
        dist_dir = PROJECT_ROOT / "dist"
        # Use poetry build since that's the project's build system
        result = subprocess.run(
            ["poetry", "build", "-f", "wheel"],
            cwd=str(PROJECT_ROOT),
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            pytest.skip(f"poetry build failed: {result.stderr}")

        wheels = sorted(dist_dir.glob("*.whl"), key=lambda p: p.stat().st_mtime)
        if not wheels:
            pytest.skip("No wheel found in dist/")
        return wheels[-1]

    def test_py_typed_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """py.typed marker must be included in the wheel."""
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            assert any(n.endswith("py.typed") for n in names), (
                f"py.typed not found in wheel. Contents: {names}"
            )

    def test_all_source_modules_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """All source modules must be present in the wheel."""
        expected_modules = [
            "structpad/__init__.py",
            "structpad/api.py",
            "structpad/cache.py",
            "structpad/config.py",
            "structpad/document.py",
            "structpad/eol.py",
            "structpad/errors.py",
            "structpad/formatter.py",
            "structpad/model.py",
            "structpad/protocols.py",
            "structpad/reconciler.py",
            "structpad/result.py",
            "structpad/workspace.py",
            "structpad/emitters/__init__.py",
            "structpad/emitters/block.py",
            "structpad/emitters/json_fallback.py",
            "structpad/syntax/__init__.py",
            "structpad/syntax/classifier.py",
            "structpad/syntax/nodes.py",
            "structpad/syntax/parser.py",
            "structpad/tree/__init__.py",
            "structpad/tree/builder.py",
            "structpad/tree/nodes.py",
            "structpad/tree/pointer.py",
            "structpad/integrations/__init__.py",
            "structpad/integrations/_pytest_plugin.py",
        ]
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            for module in expected_modules:
                assert any(module in n for n in names), f"Module {module} not found in wheel"

    def test_metadata_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """Wheel metadata must include correct package info."""
        with zipfile.ZipFile(wheel_path) as zf:
            metadata_files = [n for n in zf.namelist() if "METADATA" in n]
            assert metadata_files, "No METADATA found in wheel"
            metadata = zf.read(metadata_files[0]).decode()
            assert "structpad" in metadata.lower()
            assert "0.1.0" in metadata


class TestPytestPluginDiscovery:
    """Verify the pytest plugin is discoverable."""

    def test_entry_point_registered(self):  # type: ignore[no-untyped-def]
        """pytest11 entry point must be registered for structpad."""
        from importlib.metadata import entry_points

        pytest11_eps = entry_points(group="pytest11")
        sp_eps = [ep for ep in pytest11_eps if "structpad" in str(ep.value)]
        assert sp_eps, (
            f"No pytest11 entry point found for structpad. "
            f"Available: {[ep.name for ep in pytest11_eps]}"
        )

    def test_fixture_available(self):  # type: ignore[no-untyped-def]
        """assert_round_trip fixture must be importable from the plugin."""
        import importlib

        mod = importlib.import_module("structpad.integrations._pytest_plugin")
        assert hasattr(mod, "assert_round_trip")
        assert callable(mod.assert_round_trip)

    def test_plugin_discovery_via_pytest(self):  # type: ignore[no-untyped-def]
        """pytest --fixtures should list assert_round_trip."""
        result = subprocess.run(
            [sys.executable, "-m", "pytest", "--fixtures", "-q"],
            capture_output=True,
            text=True,
            cwd=str(PROJECT_ROOT),
        )
        assert "assert_round_trip" in result.stdout, (
            f"Fixture not found in pytest fixtures list. stdout: {result.stdout[:500]}"
        )


class TestPackageMetadata:
    def test_version(self):  # type: ignore[no-untyped-def]
        """Package version must be 0.1.0."""
        import structpad

        assert structpad.__version__ == "0.1.0"
