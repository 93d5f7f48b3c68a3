"""
NEAT Run Package

This package drives a NEAT run: configuration, the problem contract and the
generational control loop.

Exported Classes:
    Config:              Configuration parameters of a run
    Task:                Abstract base class for fitness evaluators
    EvolutionController: Generational control loop
    ControllerState:     Stages of a run
    GenerationStats:     Summary statistics of one evaluated generation
"""

from evoneat.run.config     import Config
from evoneat.run.controller import ControllerState, EvolutionController, GenerationStats
from evoneat.run.task       import Task

__all__ = ['Config',
           'ControllerState',
           'EvolutionController',
           'GenerationStats',
           'Task']
