"""
NEAT Phenotype Package

This package turns genomes into executable neural networks.

Exported Classes:
    Network: Forward (or recurrent) evaluation of a genome

Type Aliases:
    ActivationFunction: Scalar function applied at hidden and output nodes
"""

from evoneat.phenotype.network import ActivationFunction, Network

__all__ = ['ActivationFunction', 'Network']
