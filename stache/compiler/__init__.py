"""
Code generation: template tree -> Python source -> compiled artifact.
"""

from .artifact import CompiledTemplate
from .generator import CodeGenerator, compile_ast, generate_source
from .scope import LoopScope, ScopeAllocator

__all__ = [
    "CompiledTemplate",
    "CodeGenerator",
    "compile_ast",
    "generate_source",
    "LoopScope",
    "ScopeAllocator",
]
