"""
Application use cases.
"""
from .generation import ArtifactGenerators, GenerationResult
from .generate_from_recording import GenerateFromRecordingUseCase
from .generate_from_ticket import GenerateFromTicketUseCase
from .validate_structure import StructureValidation, ValidateStructureUseCase

__all__ = [
    'ArtifactGenerators',
    'GenerationResult',
    'GenerateFromRecordingUseCase',
    'GenerateFromTicketUseCase',
    'StructureValidation',
    'ValidateStructureUseCase',
]
