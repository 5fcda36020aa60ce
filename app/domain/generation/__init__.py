"""Generation domain - contract body generation streamed to the caller"""

from .boilerplate import render_contract
from .generators import BoilerplateContractGenerator, ContractGenerator, OpenAIContractGenerator
from .pipeline import GenerationPipeline, get_generation_pipeline
from .schemas import GenerationRequest

__all__ = [
    "BoilerplateContractGenerator",
    "ContractGenerator",
    "GenerationPipeline",
    "GenerationRequest",
    "OpenAIContractGenerator",
    "get_generation_pipeline",
    "render_contract",
]
