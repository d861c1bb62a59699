"""
Tests for the test artifact generator.

Test modules:
- unit/test_recording_parser: Recording call shapes and fallback
- unit/test_name_resolver: Readable, constant, method and step names
- unit/test_generation_context: Run-scoped deduplication
- unit/test_requirement_synthesizer: Story to requirement heuristics
- unit/test_artifact_generators: Page, feature and glue generators
- unit/test_artifact_writer: All-or-nothing writes and structure checks
- unit/test_generate_from_recording / test_generate_from_ticket: Use cases
- unit/test_local_story_repository: YAML/JSON story files
- unit/test_project_config: Project configuration
- unit/test_workflows: Command-line workflows
- integration/test_jira_integration: Jira parsing and repository with mocks
"""
