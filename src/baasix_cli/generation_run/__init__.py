"""Generation run exports."""

from .generation_contracts import GenerationOutcome, GenerationRequest, GenerationTarget
from .generation_use_case import (
    ClientFactory,
    GenerationError,
    execute_generation_run,
    fetch_generation_input,
    render_generation_output,
    write_generated_output,
)

__all__ = [
    "ClientFactory",
    "GenerationError",
    "GenerationOutcome",
    "GenerationRequest",
    "GenerationTarget",
    "execute_generation_run",
    "fetch_generation_input",
    "render_generation_output",
    "write_generated_output",
]
