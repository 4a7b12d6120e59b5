"""
Foundation layer: exceptions, logging, registries, kernels and Pareto primitives.
"""
