#!/usr/bin/env python3
"""
Test Artifact Workflows - Multi-Project Support

Turns a recorded browser session, or a story from the ticket source, into a
Playwright page object, a Gherkin feature file and pytest-bdd step
definitions.

Usage:
    # Generate from a recording (default project)
    python3 workflows.py record --recording login.txt --feature-name "Login" --story PORTAL-101

    # Generate from a ticket using a specific project
    python3 workflows.py ticket --key PORTAL-101 --project example-portal

    # Check that the three files of a test exist
    python3 workflows.py validate --name "Login"
"""
import argparse
import functools
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass
from enum import Enum

from dotenv import load_dotenv

load_dotenv()

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from core.application.use_cases import (
    ArtifactGenerators,
    GenerateFromRecordingUseCase,
    GenerateFromTicketUseCase,
    GenerationResult,
    ValidateStructureUseCase
)
from core.domain.errors import GenerationError
from infrastructure import get_story_repository
from infrastructure.export import (
    ArtifactLayout,
    ArtifactWriter,
    GlueGenerator,
    PageModuleGenerator,
    SpecificationGenerator
)
from projects import ProjectConfig, ProjectManager, get_project_manager


class WorkflowStatus(Enum):
    SUCCESS = "success"
    FAILED = "failed"
    PARTIAL = "partial"


@dataclass
class WorkflowResult:
    """Result of workflow execution."""
    status: WorkflowStatus
    message: str
    data: Dict[str, Any] = None

    def __post_init__(self):
        if self.data is None:
            self.data = {}


class IWorkflow(ABC):
    """Interface for all workflows."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Workflow name."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Workflow description."""
        pass

    @abstractmethod
    def execute(self, config: ProjectConfig, **kwargs) -> WorkflowResult:
        """Execute the workflow with project configuration."""
        pass

    @abstractmethod
    def validate_inputs(self, **kwargs) -> Optional[str]:
        """Validate inputs. Returns error message or None if valid."""
        pass


def layout_factory(config: ProjectConfig):
    """ArtifactLayout constructor bound to the project's subdirectories."""
    return functools.partial(
        ArtifactLayout,
        pages_dir=config.output.pages_dir,
        features_dir=config.output.features_dir,
        steps_dir=config.output.steps_dir
    )


def build_generators(config: ProjectConfig) -> ArtifactGenerators:
    """Wire the three generators and the writer for a project."""
    return ArtifactGenerators(
        page=PageModuleGenerator(base_url=config.application.base_url),
        specification=SpecificationGenerator(),
        glue=GlueGenerator(),
        writer=ArtifactWriter(),
        layout_factory=layout_factory(config)
    )


def _print_result(result: GenerationResult) -> None:
    print(f"\nGeneration complete")
    print(f"  Class: {result.class_name}")
    print(f"  Constants: {len(result.constants)}")
    print(f"  Methods: {len(result.methods)}")
    print(f"  Step handlers: {len(result.steps)}")
    print(f"  Skipped duplicates: {result.skipped_duplicates}")
    for artifact, path in result.files.items():
        print(f"  {artifact}: {path}")
    for warning in result.warnings:
        print(f"  Warning: {warning}")


def _generation_result(result: GenerationResult) -> WorkflowResult:
    _print_result(result)
    status = WorkflowStatus.PARTIAL if result.has_warnings else WorkflowStatus.SUCCESS
    message = f"Generated {len(result.files)} artifacts for {result.class_name}"
    if result.has_warnings:
        message = f"{message} with {len(result.warnings)} warning(s)"
    return WorkflowResult(
        status=status,
        message=message,
        data={'result': result, 'output_files': result.files}
    )


class RecordWorkflow(IWorkflow):
    """Generate artifacts from a recorded browser session."""

    @property
    def name(self) -> str:
        return "record"

    @property
    def description(self) -> str:
        return "Generate page, feature and steps files from a recording"

    def validate_inputs(self, **kwargs) -> Optional[str]:
        if not kwargs.get('recording'):
            return "recording is required"
        if not kwargs.get('feature_name'):
            return "feature_name is required"
        if not kwargs.get('story'):
            return "story is required"
        return None

    @staticmethod
    def _read_recording(source: str) -> str:
        """Read a recording file, or stdin for '-'."""
        if source == '-':
            return sys.stdin.read()
        with open(source, 'r', encoding='utf-8') as f:
            return f.read()

    def execute(self, config: ProjectConfig, **kwargs) -> WorkflowResult:
        output_dir = kwargs.get('output_dir') or config.output.dir
        feature_name = kwargs['feature_name']

        print(f"\nWorkflow: Generate From Recording")
        print(f"Project: {config.project_id} ({config.application.name})")
        print(f"Feature: {feature_name}")
        print(f"Story: {kwargs['story']}\n")

        print(f"[1/3] Reading recording...")
        try:
            recording = self._read_recording(kwargs['recording'])
        except OSError as e:
            return WorkflowResult(
                status=WorkflowStatus.FAILED,
                message=f"Failed to read recording {kwargs['recording']}: {e}"
            )
        print(f"  Lines: {len(recording.splitlines())}")

        print("\n[2/3] Generating artifacts...")
        use_case = GenerateFromRecordingUseCase(build_generators(config))
        try:
            result = use_case.execute(
                recording_text=recording,
                feature_name=feature_name,
                page_url=kwargs.get('url'),
                story_key=kwargs['story'],
                output_dir=output_dir
            )
        except GenerationError as e:
            return WorkflowResult(
                status=WorkflowStatus.FAILED,
                message=f"[{e.stage}] {e.message}"
            )

        print("\n[3/3] Artifacts written")
        return _generation_result(result)


class TicketWorkflow(IWorkflow):
    """Generate artifacts from a story in the project's ticket source."""

    @property
    def name(self) -> str:
        return "ticket"

    @property
    def description(self) -> str:
        return "Generate page, feature and steps files from a ticket"

    def validate_inputs(self, **kwargs) -> Optional[str]:
        if not kwargs.get('key'):
            return "key is required"
        return None

    def execute(self, config: ProjectConfig, **kwargs) -> WorkflowResult:
        output_dir = kwargs.get('output_dir') or config.output.dir
        ticket_key = kwargs['key']
        source_platform = config.source_platform.upper()

        print(f"\nWorkflow: Generate From Ticket")
        print(f"Project: {config.project_id} ({config.application.name})")
        print(f"Source Platform: {source_platform}")
        print(f"Ticket: {ticket_key}\n")

        print(f"[1/3] Connecting to {source_platform}...")
        try:
            story_repo = get_story_repository(config)
        except ValueError as e:
            return WorkflowResult(
                status=WorkflowStatus.FAILED,
                message=f"Invalid project configuration: {e}"
            )

        print("\n[2/3] Fetching story and generating artifacts...")
        use_case = GenerateFromTicketUseCase(story_repo, build_generators(config))
        try:
            result = use_case.execute(
                ticket_key=ticket_key,
                output_dir=output_dir,
                page_url=kwargs.get('url') or ""
            )
        except GenerationError as e:
            return WorkflowResult(
                status=WorkflowStatus.FAILED,
                message=f"[{e.stage}] {e.message}"
            )

        print("\n[3/3] Artifacts written")
        return _generation_result(result)


class ValidateWorkflow(IWorkflow):
    """Check that the page, feature and steps files of a test exist."""

    @property
    def name(self) -> str:
        return "validate"

    @property
    def description(self) -> str:
        return "Validate the generated file structure of a test"

    def validate_inputs(self, **kwargs) -> Optional[str]:
        if not kwargs.get('test_name'):
            return "test_name is required"
        return None

    def execute(self, config: ProjectConfig, **kwargs) -> WorkflowResult:
        output_dir = kwargs.get('output_dir') or config.output.dir
        validation = ValidateStructureUseCase(layout_factory(config)).execute(
            kwargs['test_name'], output_dir
        )

        print(f"\nStructure of {kwargs['test_name']}\n")
        for artifact, path in validation.paths.items():
            mark = "missing" if path in validation.missing_files else "ok"
            print(f"  {artifact}: {path} [{mark}]")

        if validation.is_valid:
            return WorkflowResult(
                status=WorkflowStatus.SUCCESS,
                message="All artifacts present",
                data={'validation': validation}
            )
        return WorkflowResult(
            status=WorkflowStatus.FAILED,
            message=f"Missing {len(validation.missing_files)} artifact(s)",
            data={'validation': validation}
        )


class ListProjectsWorkflow(IWorkflow):
    """List all available project configurations."""

    def __init__(self, project_manager: Optional[ProjectManager] = None):
        self._project_manager = project_manager

    @property
    def name(self) -> str:
        return "list-projects"

    @property
    def description(self) -> str:
        return "List all available project configurations"

    def validate_inputs(self, **kwargs) -> Optional[str]:
        return None

    def execute(self, config: ProjectConfig, **kwargs) -> WorkflowResult:
        manager = self._project_manager or get_project_manager()
        projects = manager.list_projects()

        print(f"\nAvailable Projects\n")

        for project_id in projects:
            proj_config = manager.get_project(project_id)
            active = " (active)" if project_id == config.project_id else ""
            print(f"  {project_id}{active}")
            print(f"    Application: {proj_config.application.name}")
            print(f"    Source: {proj_config.source_platform}")
            print(f"    Output: {proj_config.output.dir}")
            print()

        return WorkflowResult(
            status=WorkflowStatus.SUCCESS,
            message=f"Found {len(projects)} projects",
            data={'projects': projects}
        )


class WorkflowEngine:
    """Orchestrates workflow execution with project configuration."""

    def __init__(self, project_manager: Optional[ProjectManager] = None):
        self._workflows: Dict[str, IWorkflow] = {}
        self._project_manager = project_manager or get_project_manager()
        self._register_workflows()

    def _register_workflows(self):
        """Register all available workflows."""
        workflows = [
            RecordWorkflow(),
            TicketWorkflow(),
            ValidateWorkflow(),
            ListProjectsWorkflow(self._project_manager),
        ]
        for workflow in workflows:
            self._workflows[workflow.name] = workflow

    def get_workflow(self, name: str) -> Optional[IWorkflow]:
        """Get workflow by name."""
        return self._workflows.get(name)

    def list_workflows(self) -> List[str]:
        """List all available workflow names."""
        return list(self._workflows.keys())

    def execute(self, workflow_name: str, project_id: str = None, **kwargs) -> WorkflowResult:
        """Execute a workflow by name with project configuration."""
        workflow = self.get_workflow(workflow_name)

        if not workflow:
            return WorkflowResult(
                status=WorkflowStatus.FAILED,
                message=f"Unknown workflow: {workflow_name}. Available: {self.list_workflows()}"
            )

        if project_id:
            config = self._project_manager.get_project(project_id)
            if not config:
                return WorkflowResult(
                    status=WorkflowStatus.FAILED,
                    message=f"Project not found: {project_id}. Run 'list-projects' to see available projects."
                )
            self._project_manager.set_active_project(project_id)
        else:
            config = self._project_manager.active_project

        error = workflow.validate_inputs(**kwargs)
        if error:
            return WorkflowResult(
                status=WorkflowStatus.FAILED,
                message=f"Validation error: {error}"
            )

        return workflow.execute(config, **kwargs)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Test Artifact Workflows - Multi-Project Support",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Workflows:
  record          Generate artifacts from a recorded browser session
  ticket          Generate artifacts from a ticket in the project's story source
  validate        Check that the page, feature and steps files of a test exist
  list-projects   List all available project configurations

Examples:
  # Recording from a file (or '-' for stdin)
  python3 workflows.py record --recording login.txt --feature-name "Login" --story PORTAL-101

  # Recording with an explicit page URL and output directory
  python3 workflows.py record --recording login.txt --feature-name "Login" --story PORTAL-101 \\
      --url https://portal.example.com/login --output-dir generated

  # Ticket from Jira or local story files, depending on the project
  python3 workflows.py ticket --key PORTAL-101 --project example-portal

  # Validate
  python3 workflows.py validate --name "Login"

  # List projects
  python3 workflows.py list-projects
        """
    )

    # Global arguments
    parser.add_argument('--project', '-p', dest='project_id', help='Project configuration to use')

    subparsers = parser.add_subparsers(dest='workflow', help='Workflow to execute')

    record_parser = subparsers.add_parser('record', help='Generate from a recording')
    record_parser.add_argument('--recording', required=True, help="Recording file, or '-' for stdin")
    record_parser.add_argument('--feature-name', required=True, help='Feature name (class name source)')
    record_parser.add_argument('--story', required=True, help='Story key the artifacts are tagged with')
    record_parser.add_argument('--url', default=None, help='Page URL (defaults to the first recorded navigation)')
    record_parser.add_argument('--output-dir', default=None, help='Output directory')

    ticket_parser = subparsers.add_parser('ticket', help='Generate from a ticket')
    ticket_parser.add_argument('--key', required=True, help='Ticket key (e.g. PROJ-123)')
    ticket_parser.add_argument('--url', default=None, help='Page URL for the navigation entry point')
    ticket_parser.add_argument('--output-dir', default=None, help='Output directory')

    validate_parser = subparsers.add_parser('validate', help='Validate generated structure')
    validate_parser.add_argument('--name', dest='test_name', required=True, help='Feature or class name')
    validate_parser.add_argument('--output-dir', default=None, help='Output directory')

    subparsers.add_parser('list-projects', help='List all projects')

    return parser


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.workflow:
        parser.print_help()
        sys.exit(1)

    # Convert args to kwargs
    kwargs = vars(args).copy()
    workflow_name = kwargs.pop('workflow')
    project_id = kwargs.pop('project_id', None)

    # Execute workflow
    engine = WorkflowEngine()
    result = engine.execute(workflow_name, project_id=project_id, **kwargs)

    # Exit code
    if result.status == WorkflowStatus.FAILED:
        print(f"\nERROR: {result.message}")
        sys.exit(1)
    elif result.status == WorkflowStatus.PARTIAL:
        print(f"\nWARNING: {result.message}")
        sys.exit(0)
    else:
        print(f"\nSUCCESS: {result.message}")
        sys.exit(0)


if __name__ == '__main__':
    main()
