"""TQS Compiler - evaluates interpolations and renders templates."""

from tqs.compiler.evaluator import METHODS, Bindings, Evaluator, stringify
from tqs.compiler.renderer import Template, render

__all__ = ["METHODS", "Bindings", "Evaluator", "stringify", "Template", "render"]
