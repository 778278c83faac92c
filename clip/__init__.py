"""clip: a small interpreter for a parenthesis-free, prefix-notation scripting language.

The pipeline is exposed as two entry points: parse_program turns source text into a list of top-level expressions,
and evaluate runs one of them in an Environment:

    env = Environment()
    for expr in parse_program("= add { [a b] + a b }; add 1 2"):
        value = evaluate(expr, env)
"""

from clip.core.environment import Environment
from clip.core.interpreter import evaluate
from clip.core.parser import parse_program

__all__ = ["Environment", "evaluate", "parse_program"]
