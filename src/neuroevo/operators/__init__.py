"""
neuroevo.operators
==================

Strategy families used by the evolutionary engine:

 - initialization: build the starting population
 - selection: choose parents
 - crossover: recombine two parents into one or two children
 - mutation: perturb children (standard, constrained, annealing)
 - replacement: merge children back at a fixed population size

All operators take an injected ``numpy.random.Generator`` so a run is
reproducible from a single seed.
"""
