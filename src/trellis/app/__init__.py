from .executor import OperationExecutor
from .interpreter import StructureBuilder, create_structure_from_string, plan_structure

__all__ = [
    "OperationExecutor",
    "StructureBuilder",
    "create_structure_from_string",
    "plan_structure",
]
