"""
Market CA - Cellular Automaton Market Simulation Rule

A cellular-automaton transition rule modelling collective trading behaviour
on a two-dimensional grid. Each cell is a market participant whose next
action is derived from its own position and the actions of its eight
neighbours.
"""

__version__ = "0.1.0"
__author__ = "Market CA Team"
