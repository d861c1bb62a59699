"""
Core services - business logic and domain services.
"""
from .recording_parser import RecordingParser, RecordingPattern, ParseResult, default_patterns
from .name_resolver import NameResolver, to_class_name
from .generation_context import Deduplicator, GenerationContext
from .requirement_synthesizer import RequirementSynthesizer
from .metrics import StructuredLogger, get_logger

__all__ = [
    'RecordingParser',
    'RecordingPattern',
    'ParseResult',
    'default_patterns',
    'NameResolver',
    'to_class_name',
    'Deduplicator',
    'GenerationContext',
    'RequirementSynthesizer',
    # Metrics
    'StructuredLogger',
    'get_logger',
]
