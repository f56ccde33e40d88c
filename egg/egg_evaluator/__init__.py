"""Evaluator component for Egg ASTs.

Holds the environment model, closures, special forms, the default host
bootstrap, and the evaluator that ties them together.
"""
