"""Code generation backends."""

from .CodeGenerator import PsyLangCodeGenerator, generate_code

__all__ = ["PsyLangCodeGenerator", "generate_code"]
