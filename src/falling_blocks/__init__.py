"""Falling Blocks: a single-player falling-block puzzle game.

The game engine lives in :mod:`falling_blocks.game`, the pygame front end in
``falling_blocks.visualization`` and the static web host in
:mod:`falling_blocks.server`.
"""

__version__ = "0.1.0"
