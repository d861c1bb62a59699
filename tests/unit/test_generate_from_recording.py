"""
Unit tests for recording-mode generation.

Runs the full parse, resolve, build, render and write pipeline into a
temporary directory and checks the cross-artifact guarantees.
"""
import ast
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from core.application.use_cases import ArtifactGenerators, GenerateFromRecordingUseCase
from core.domain.errors import ArtifactWriteError, MissingInputError
from core.services.metrics.logger import StructuredLogger
from core.services.recording_parser import RecordingParser
from infrastructure.export import (
    ArtifactLayout,
    ArtifactWriter,
    GlueGenerator,
    PageModuleGenerator,
    SpecificationGenerator
)


LOGIN_RECORDING = "\n".join([
    'navigate("/login")',
    'locator("#username").fill("bob")',
    'locator("#password").fill("x")',
    'locator("text=Sign In").click()',
])

DOUBLE_SAVE_RECORDING = 'locator("#save").click()\nlocator("#save").click()'


def make_generators(writer=None):
    logger = StructuredLogger("testgen.tests", enable_console=False)
    return ArtifactGenerators(
        page=PageModuleGenerator(),
        specification=SpecificationGenerator(),
        glue=GlueGenerator(),
        writer=writer or ArtifactWriter(logger),
        layout_factory=ArtifactLayout
    )


class TestGenerateFromRecording:
    """Test GenerateFromRecordingUseCase.execute."""

    def setup_method(self):
        self.logger = StructuredLogger("testgen.tests", enable_console=False)
        self.use_case = GenerateFromRecordingUseCase(make_generators(), logger=self.logger)

    def test_login_recording(self, tmp_path):
        result = self.use_case.execute(LOGIN_RECORDING, "Login", story_key="PROJ-1", output_dir=str(tmp_path))

        assert result.class_name == "Login"
        assert result.mode == "recording"
        assert result.story_key == "PROJ-1"
        assert result.constants == ["USERNAME_2", "PASSWORD_3", "SIGN_IN_4"]
        assert result.methods == ["navigateTo", "enterUsername", "enterPassword", "clickSignIn"]
        assert result.warnings == []

        feature = Path(result.files['specification']).read_text(encoding='utf-8')
        assert 'When user enters "<username>" into username' in feature
        assert 'And user enters "<password>" into password' in feature
        assert "And user clicks on sign in" in feature
        assert "      | bob | x |" in feature

        page = Path(result.files['page']).read_text(encoding='utf-8')
        assert "class LoginPage:" in page
        ast.parse(page)

        steps = Path(result.files['glue']).read_text(encoding='utf-8')
        assert "from pages.login_page import LoginPage" in steps
        ast.parse(steps)

    def test_edge_case_selectors_produce_valid_modules(self, tmp_path):
        recording = "\n".join([
            'navigate("/verify")',
            'locator("#2fa-code").fill("123456")',
            'locator("text=???").click()',
            'locator("#123").click()',
            r'locator("#notes").fill("line1\nline2 | a\\b")',
        ])
        result = self.use_case.execute(recording, "Verify", story_key="PROJ-6", output_dir=str(tmp_path))

        assert result.constants == ["ELEMENT2FA_CODE_2", "ELEMENT_3", "NUMBER123_4", "NOTES_5"]
        assert result.methods == [
            "navigateTo", "enterElement2faCode", "clickElement", "clickNumber123", "enterNotes"
        ]
        assert all(name.isidentifier() for name in result.constants + result.methods)

        ast.parse(Path(result.files['page']).read_text(encoding='utf-8'))
        ast.parse(Path(result.files['glue']).read_text(encoding='utf-8'))

        feature = Path(result.files['specification']).read_text(encoding='utf-8')
        assert "      | element2fa_code | notes |" in feature
        assert r"      | 123456 | line1\nline2 \| a\\b |" in feature

    def test_files_land_in_default_layout(self, tmp_path):
        result = self.use_case.execute(LOGIN_RECORDING, "User login", story_key="PROJ-1", output_dir=str(tmp_path))

        assert result.files == {
            'page': str(tmp_path / "pages" / "user_login_page.py"),
            'specification': str(tmp_path / "features" / "user_login.feature"),
            'glue': str(tmp_path / "steps" / "test_user_login_steps.py"),
        }
        for path in result.files.values():
            assert Path(path).is_file()

    def test_duplicate_click(self, tmp_path):
        result = self.use_case.execute(DOUBLE_SAVE_RECORDING, "Editor", story_key="PROJ-2", output_dir=str(tmp_path))

        assert result.constants == ["SAVE_1"]
        assert [m for m in result.methods if m != "navigateTo"] == ["clickSave"]
        assert result.skipped_duplicates > 0

        feature = Path(result.files['specification']).read_text(encoding='utf-8')
        assert feature.count("user clicks on save") == 1

    def test_names_unique_within_each_artifact(self, tmp_path):
        recording = "\n".join([
            'locator("#save").click()',
            'getByText("Save").click()',
            'locator("#save").click()',
            'locator("#email").fill("a@b.c")',
            'getByLabel("Email").fill("c@d.e")',
        ])
        result = self.use_case.execute(recording, "Editor", story_key="PROJ-2", output_dir=str(tmp_path))

        assert len(result.constants) == len(set(result.constants))
        assert len(result.methods) == len(set(result.methods))
        assert len(result.steps) == len(set(result.steps))

    def test_deterministic_output(self, tmp_path):
        first = self.use_case.execute(LOGIN_RECORDING, "Login", story_key="PROJ-1", output_dir=str(tmp_path / "a"))
        second = self.use_case.execute(LOGIN_RECORDING, "Login", story_key="PROJ-1", output_dir=str(tmp_path / "b"))

        for artifact in ('page', 'specification', 'glue'):
            assert Path(first.files[artifact]).read_text(encoding='utf-8') == \
                Path(second.files[artifact]).read_text(encoding='utf-8')

    def test_glue_only_references_page_methods(self, tmp_path):
        result = self.use_case.execute(LOGIN_RECORDING, "Login", story_key="PROJ-1", output_dir=str(tmp_path))
        steps = Path(result.files['glue']).read_text(encoding='utf-8')

        for method in result.methods:
            assert f"login_page.{method}(" in steps
        assert steps.count("login_page.") == len(result.methods)

    def test_behavior_lines_in_recording_order(self, tmp_path):
        recording = "\n".join([
            'locator("#b").click()',
            'locator("#a").click()',
            'locator("#c").click()',
        ])
        result = self.use_case.execute(recording, "Order", story_key="PROJ-3", output_dir=str(tmp_path))
        feature = Path(result.files['specification']).read_text(encoding='utf-8')

        positions = [feature.index(f"user clicks on {name}\n") for name in ("b", "a", "c")]
        assert positions == sorted(positions)

    def test_unrecognized_lines_are_warnings(self, tmp_path):
        recording = 'browser.close()\nlocator("#save").click()'
        result = self.use_case.execute(recording, "Editor", story_key="PROJ-2", output_dir=str(tmp_path))

        assert result.has_warnings
        assert result.methods == ["navigateTo", "clickSave"]

    def test_empty_recording_uses_fallback(self, tmp_path):
        result = self.use_case.execute("", "Blank", story_key="PROJ-4", output_dir=str(tmp_path))

        assert RecordingParser.FALLBACK_WARNING in result.warnings
        assert result.constants == []
        assert result.methods == ["navigateTo"]
        assert Path(result.files['page']).is_file()

    @pytest.mark.parametrize("recording, feature_name, story_key, field_name", [
        (None, "Login", "PROJ-1", "recording"),
        (LOGIN_RECORDING, "", "PROJ-1", "feature name"),
        (LOGIN_RECORDING, "Login", "  ", "story key"),
    ])
    def test_missing_input(self, tmp_path, recording, feature_name, story_key, field_name):
        with pytest.raises(MissingInputError) as exc_info:
            self.use_case.execute(recording, feature_name, story_key=story_key, output_dir=str(tmp_path))

        assert exc_info.value.field_name == field_name
        assert list(tmp_path.iterdir()) == []

    def test_write_failure_propagates(self, tmp_path):
        writer = Mock(spec=ArtifactWriter)
        writer.write.side_effect = ArtifactWriteError('glue', 'steps/x.py', 'read-only')
        use_case = GenerateFromRecordingUseCase(make_generators(writer), logger=self.logger)

        with pytest.raises(ArtifactWriteError):
            use_case.execute(LOGIN_RECORDING, "Login", story_key="PROJ-1", output_dir=str(tmp_path))

    def test_generation_summary_logged(self, tmp_path):
        logger = Mock(spec=StructuredLogger)
        use_case = GenerateFromRecordingUseCase(make_generators(), logger=logger)

        use_case.execute(LOGIN_RECORDING, "Login", story_key="PROJ-1", output_dir=str(tmp_path))

        logger.log_generation.assert_called_once()
        kwargs = logger.log_generation.call_args.kwargs
        assert kwargs['class_name'] == "Login"
        assert kwargs['constants'] == 3
        assert kwargs['methods'] == 4
