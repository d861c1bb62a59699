"""
Unit tests for the artifact writer and structure validation.
"""
import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from core.application.use_cases import ValidateStructureUseCase
from core.domain.errors import ArtifactWriteError
from core.services.metrics.logger import StructuredLogger
from infrastructure.export import ArtifactLayout, ArtifactWriter


CONTENTS = {
    'page': "class LoginPage:\n    pass\n",
    'specification': "Feature: Login Test\n",
    'glue': "import pytest\n",
}


class TestArtifactWriter:
    """Test all-or-nothing artifact writes."""

    def setup_method(self):
        self.writer = ArtifactWriter(StructuredLogger("testgen.tests", enable_console=False))

    def test_writes_three_files(self, tmp_path):
        layout = ArtifactLayout(str(tmp_path), "Login")
        files = self.writer.write(layout, CONTENTS)

        assert set(files) == {'page', 'specification', 'glue'}
        assert Path(files['page']).read_text(encoding='utf-8') == CONTENTS['page']
        assert Path(files['specification']).read_text(encoding='utf-8') == CONTENTS['specification']
        assert Path(files['glue']).read_text(encoding='utf-8') == CONTENTS['glue']

    def test_overwrites_existing_files(self, tmp_path):
        layout = ArtifactLayout(str(tmp_path), "Login")
        self.writer.write(layout, CONTENTS)
        files = self.writer.write(layout, dict(CONTENTS, page="class LoginPage:\n    PAGE_PATH = ''\n"))
        assert "PAGE_PATH" in Path(files['page']).read_text(encoding='utf-8')

    def test_failure_removes_files_of_the_run(self, tmp_path):
        layout = ArtifactLayout(str(tmp_path), "Login")
        real_open = open

        def failing_open(path, *args, **kwargs):
            if str(path).endswith('.feature'):
                raise OSError("disk full")
            return real_open(path, *args, **kwargs)

        with patch('builtins.open', side_effect=failing_open):
            with pytest.raises(ArtifactWriteError) as exc_info:
                self.writer.write(layout, CONTENTS)

        assert exc_info.value.artifact == 'specification'
        assert exc_info.value.stage == 'write'
        assert "disk full" in str(exc_info.value)
        assert not os.path.exists(layout.page_path)
        assert not os.path.exists(layout.steps_path)

    def test_failure_keeps_files_the_run_never_opened(self, tmp_path):
        layout = ArtifactLayout(str(tmp_path), "Login")
        self.writer.write(layout, CONTENTS)
        real_open = open

        def failing_open(path, *args, **kwargs):
            if str(path).endswith('.feature'):
                raise PermissionError("read-only file")
            return real_open(path, *args, **kwargs)

        with patch('builtins.open', side_effect=failing_open):
            with pytest.raises(ArtifactWriteError):
                self.writer.write(layout, dict(CONTENTS, page="class LoginPage:\n    PAGE_PATH = ''\n"))

        assert not os.path.exists(layout.page_path)
        assert Path(layout.feature_path).read_text(encoding='utf-8') == CONTENTS['specification']
        assert Path(layout.steps_path).read_text(encoding='utf-8') == CONTENTS['glue']

    def test_failure_during_write_removes_opened_file(self, tmp_path):
        layout = ArtifactLayout(str(tmp_path), "Login")
        real_open = open

        class BrokenFile:
            def __init__(self, handle):
                self.handle = handle

            def __enter__(self):
                return self

            def __exit__(self, *exc):
                self.handle.close()
                return False

            def write(self, _content):
                raise OSError("disk full")

        def broken_open(path, *args, **kwargs):
            handle = real_open(path, *args, **kwargs)
            if str(path).endswith('.feature'):
                return BrokenFile(handle)
            return handle

        with patch('builtins.open', side_effect=broken_open):
            with pytest.raises(ArtifactWriteError) as exc_info:
                self.writer.write(layout, CONTENTS)

        assert exc_info.value.artifact == 'specification'
        assert not os.path.exists(layout.page_path)
        assert not os.path.exists(layout.feature_path)

    def test_missing_content_is_write_error(self, tmp_path):
        layout = ArtifactLayout(str(tmp_path), "Login")
        with pytest.raises(ArtifactWriteError) as exc_info:
            self.writer.write(layout, {'page': "x"})

        assert exc_info.value.artifact == 'specification'
        assert not os.path.exists(layout.page_path)

    def test_unwritable_directory(self, tmp_path):
        blocker = tmp_path / "blocked"
        blocker.write_text("not a directory")
        layout = ArtifactLayout(str(blocker), "Login")

        with pytest.raises(ArtifactWriteError) as exc_info:
            self.writer.write(layout, CONTENTS)
        assert exc_info.value.artifact == 'page'


class TestValidateStructure:
    """Test the structure check used by the validate command."""

    def test_reports_missing_files(self, tmp_path):
        layout = ArtifactLayout(str(tmp_path), "UserLogin")
        os.makedirs(os.path.dirname(layout.page_path))
        Path(layout.page_path).write_text("")

        validation = ValidateStructureUseCase(ArtifactLayout).execute("User login", str(tmp_path))

        assert validation.page_exists
        assert not validation.feature_exists
        assert not validation.is_valid
        assert validation.missing_files == [layout.feature_path, layout.steps_path]

    def test_valid_after_write(self, tmp_path):
        writer = ArtifactWriter(StructuredLogger("testgen.tests", enable_console=False))
        writer.write(ArtifactLayout(str(tmp_path), "UserLogin"), CONTENTS)

        validation = ValidateStructureUseCase(ArtifactLayout).execute("User login", str(tmp_path))
        assert validation.is_valid
        assert validation.missing_files == []
